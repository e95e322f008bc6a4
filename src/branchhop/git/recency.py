"""Most-recently-committed-first ordering of loaded branches."""

from __future__ import annotations

from collections.abc import Iterable

from branchhop.models import Branch


def _recency_key(branch: Branch) -> tuple[int, int]:
    if branch.committed_at is None:
        return (1, 0)
    return (0, -branch.committed_at)


def sort_by_recency(branches: Iterable[Branch]) -> list[Branch]:
    """Newest commit first; branches without a commit go last in load order."""
    return sorted(branches, key=_recency_key)
