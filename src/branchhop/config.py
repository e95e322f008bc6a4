"""XDG config loading."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from branchhop.errors import ConfigError
from branchhop.git.branch_loader import DEFAULT_NAME_REPLACEMENTS
from branchhop.picker.view_model import DEFAULT_SPECIAL_BRANCHES
from branchhop.ui.theme import DEFAULT_PALETTE, PALETTES, PaletteName

DEFAULT_CONFIG_PATH = Path("~/.config/branchhop/config.toml").expanduser()
DEFAULT_LOG_LEVEL = "INFO"

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARN", "WARNING", "ERROR"}


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    palette: PaletteName = DEFAULT_PALETTE
    special_branches: list[str] = Field(default_factory=lambda: list(DEFAULT_SPECIAL_BRANCHES))
    name_replacements: list[tuple[str, str]] = Field(
        default_factory=lambda: list(DEFAULT_NAME_REPLACEMENTS)
    )
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("palette")
    @classmethod
    def _validate_palette(cls, value: str) -> str:
        if value not in PALETTES:
            raise ValueError(f"Invalid palette: {value}")
        return value

    @field_validator("name_replacements")
    @classmethod
    def _validate_replacements(cls, value: list[tuple[str, str]]) -> list[tuple[str, str]]:
        for prefix, _ in value:
            if not prefix:
                raise ValueError("Name replacement prefix cannot be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in _VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        return "WARN" if normalized == "WARNING" else normalized


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _normalize_branch_names(value: object) -> list[str] | None:
    if not isinstance(value, list):
        return None
    names: list[str] = []
    seen: set[str] = set()
    for item in value:
        if not isinstance(item, str):
            continue
        name = item.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        names.append(name)
    return names


def _normalize_replacements(value: object) -> list[tuple[str, str]] | None:
    if isinstance(value, dict):
        value = list(value.items())
    if not isinstance(value, list):
        return None
    pairs: list[tuple[str, str]] = []
    for item in value:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            continue
        prefix, short = item
        if not isinstance(prefix, str) or not isinstance(short, str) or not prefix:
            continue
        pairs.append((prefix, short))
    return pairs


def _sanitize(raw: dict[str, object]) -> AppConfig:
    cfg = AppConfig()

    palette = raw.get("palette", cfg.palette)
    if isinstance(palette, str) and palette in PALETTES:
        cfg.palette = cast(PaletteName, palette)

    special_branches = _normalize_branch_names(raw.get("special_branches"))
    if special_branches is not None:
        cfg.special_branches = special_branches

    replacements = _normalize_replacements(raw.get("name_replacements"))
    if replacements is not None:
        cfg.name_replacements = replacements

    log_level = raw.get("log_level", cfg.log_level)
    if isinstance(log_level, str) and log_level.upper() in _VALID_LOG_LEVELS:
        cfg.log_level = log_level

    return cfg


def load_config(path: str | Path | None = None, *, strict: bool = False) -> AppConfig:
    """Load the config file, falling back to defaults.

    With ``strict`` a missing or unparsable file raises ``ConfigError`` instead;
    the CLI uses this for an explicit ``--config``.
    """
    resolved = get_config_path(path)
    if not resolved.exists():
        if strict:
            raise ConfigError(
                f"Config file not found: {resolved}",
                hint="Check the --config path.",
            )
        return AppConfig()
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        if strict:
            raise ConfigError(
                f"Config file could not be read: {resolved}",
                hint=str(exc),
            ) from exc
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()
    return _sanitize(raw)
