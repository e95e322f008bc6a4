"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import logging as py_logging
import subprocess
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import AppConfig, load_config
from .errors import BranchHopError, ExitCode, user_facing_error
from .git.branch_loader import load_repository
from .git.checkout import execute_outcome
from .logging import configure_logging, default_log_path
from .models import SessionOutcome
from .picker.state import PickerState
from .ui.theme import palette_names

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")

Picker = Callable[..., SessionOutcome]


def _log_level_type(value: str) -> str:
    normalized = value.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="branchhop",
        description="Pick a local branch, most recently committed first, and check it out.",
    )
    parser.add_argument("--repo", type=Path, default=None, help="Repository path (default: cwd)")
    parser.add_argument("--palette", choices=palette_names(), default=None)
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--log-level", type=_log_level_type, default=None)
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def _default_picker(state: PickerState, **kwargs: object) -> SessionOutcome:
    from branchhop.ui.terminal import run_picker

    return run_picker(state, **kwargs)  # type: ignore[arg-type]


def run_session(
    namespace: argparse.Namespace,
    config: AppConfig,
    *,
    picker: Picker,
    runner: Callable[..., subprocess.CompletedProcess],
) -> int:
    repository = load_repository(
        namespace.repo,
        replacements=config.name_replacements,
        runner=runner,
    )
    state = PickerState.initial(repository.branches)
    if state.is_empty:
        py_logging.getLogger("branchhop").warning("Nothing to select: no local branches")

    outcome = picker(
        state,
        root=repository.root,
        palette=namespace.palette or config.palette,
        special_branches=tuple(config.special_branches),
    )
    execute_outcome(outcome, repo_path=namespace.repo, runner=runner)
    return int(ExitCode.SUCCESS)


def main(
    argv: Sequence[str] | None = None,
    *,
    picker: Picker | None = None,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> int:
    log_path = default_log_path()
    logger = configure_logging(log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()

    try:
        config = load_config(namespace.config, strict=namespace.config is not None)
        logger = configure_logging(
            level=namespace.log_level or config.log_level,
            log_file=log_path,
        )
        logger.debug("Starting picker flow")
        return run_session(
            namespace,
            config,
            picker=picker or _default_picker,
            runner=runner,
        )
    except BranchHopError as exc:
        logger.error(
            "Handled BranchHopError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        try:
            hint = f"Inspect logs: {log_path}"
            print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        except Exception:
            pass
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
