"""Application logging helpers."""

from __future__ import annotations

import logging as py_logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
DEFAULT_LOG_PATH = Path("~/.config/branchhop/logs/branchhop.log")
_FALLBACK_LOG_PATH = Path(".branchhop/logs/branchhop.log")
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"
_MUTED_LEVEL = py_logging.CRITICAL + 1


def default_log_path() -> Path:
    try:
        resolved = DEFAULT_LOG_PATH.expanduser()
    except RuntimeError:
        resolved = (Path.cwd() / _FALLBACK_LOG_PATH).resolve()
    else:
        if not resolved.is_absolute():
            resolved = resolved.resolve()
    return resolved


def configure_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    normalized = level.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    resolved = LOG_LEVELS.get(normalized, py_logging.INFO)

    logger = py_logging.getLogger("branchhop")
    logger.setLevel(resolved)
    logger.handlers.clear()
    formatter = py_logging.Formatter(_FORMAT)

    handler = py_logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if log_file:
        try:
            log_path = Path(log_file).expanduser()
        except RuntimeError:
            log_path = Path(log_file)
        if not log_path.is_absolute():
            log_path = log_path.resolve()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = py_logging.FileHandler(log_path, encoding="utf-8")
        except OSError:
            pass
        else:
            file_handler.setLevel(py_logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    logger.propagate = False
    return logger


@contextmanager
def muted_stream_handlers(logger: py_logging.Logger | None = None) -> Iterator[None]:
    """Keep console handlers quiet while the curses screen owns the terminal.

    File handlers keep receiving records; console levels are restored on exit.
    """
    target = logger or py_logging.getLogger("branchhop")
    saved: list[tuple[py_logging.Handler, int]] = []
    for handler in target.handlers:
        if isinstance(handler, py_logging.FileHandler):
            continue
        if isinstance(handler, py_logging.StreamHandler):
            saved.append((handler, handler.level))
            handler.setLevel(_MUTED_LEVEL)
    try:
        yield
    finally:
        for handler, level in saved:
            handler.setLevel(level)
