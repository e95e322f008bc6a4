"""Human friendly "time since commit" phrases."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from branchhop.errors import TimeComputationError

_MINUTE_US = 60 * 1_000_000
_UNITS = (("day", 24 * 60), ("hour", 60), ("minute", 1))
ZERO_SPAN = "0 seconds"


def commit_civil_time(seconds: int, offset_minutes: int) -> datetime:
    """Wall clock time of a commit, as recorded in its own timezone."""
    try:
        moment = datetime.fromtimestamp(seconds + offset_minutes * 60, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise TimeComputationError(
            f"Commit timestamp is out of range: {seconds} (offset {offset_minutes:+d} min)",
            hint="Inspect the commit with `git cat-file -p <sha>`.",
        ) from exc
    return moment.replace(tzinfo=None)


def round_to_minutes(delta: timedelta) -> int:
    # half away from zero, days count as 24 hours
    micros = delta // timedelta(microseconds=1)
    sign = -1 if micros < 0 else 1
    return sign * ((abs(micros) + _MINUTE_US // 2) // _MINUTE_US)


def format_span(minutes: int) -> str:
    if minutes == 0:
        return ZERO_SPAN
    remaining = abs(minutes)
    parts: list[str] = []
    for unit, size in _UNITS:
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(f"{count} {unit}" if count == 1 else f"{count} {unit}s")
    phrase = ", ".join(parts)
    if minutes < 0:
        return f"{phrase} ago"
    return phrase


def human_friendly_time_since(
    seconds: int,
    offset_minutes: int = 0,
    *,
    now: datetime | None = None,
) -> str:
    committed_at = commit_civil_time(seconds, offset_minutes)
    current = now if now is not None else datetime.now()
    since_commit = round_to_minutes(current - committed_at)
    return format_span(-since_commit)
