"""Deterministic error model and exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4
    REPOSITORY_ERROR = 5
    CHECKOUT_ERROR = 6
    TIME_ERROR = 7


@dataclass
class BranchHopError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


@dataclass
class RepositoryError(BranchHopError):
    code: ExitCode = ExitCode.REPOSITORY_ERROR


@dataclass
class TimeComputationError(BranchHopError):
    code: ExitCode = ExitCode.TIME_ERROR


@dataclass
class CheckoutError(BranchHopError):
    code: ExitCode = ExitCode.CHECKOUT_ERROR
    returncode: int | None = None


@dataclass
class ConfigError(BranchHopError):
    code: ExitCode = ExitCode.CONFIG_ERROR


def user_facing_error(message: str, *, hint: str = "") -> str:
    message = message.rstrip(".")
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
