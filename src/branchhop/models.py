"""Immutable branch metadata shared by loader, picker and checkout."""

from __future__ import annotations

from dataclasses import dataclass

EMPTY_COMMIT_MESSAGE = "<empty>"


@dataclass(frozen=True)
class Commit:
    message: str
    relative_time: str

    @staticmethod
    def first_line(raw_message: str | None) -> str:
        if not raw_message:
            return EMPTY_COMMIT_MESSAGE
        # only "\n" and "\r\n" end a line; other control characters stay in the subject
        return raw_message.split("\n", 1)[0].removesuffix("\r")


@dataclass(frozen=True)
class Branch:
    display_name: str
    real_name: str
    last_commit: Commit | None = None
    committed_at: int | None = None

    @property
    def has_commit(self) -> bool:
        return self.last_commit is not None


@dataclass(frozen=True)
class Repository:
    branches: tuple[Branch, ...]
    root: str


@dataclass(frozen=True)
class SessionOutcome:
    confirmed: bool
    selected_real_name: str | None = None

    @classmethod
    def cancelled(cls) -> SessionOutcome:
        return cls(confirmed=False)

    @property
    def wants_checkout(self) -> bool:
        return self.confirmed and bool(self.selected_real_name)
