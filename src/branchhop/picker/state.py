"""Cursor state for the branch picker."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from branchhop.models import Branch, SessionOutcome


@dataclass
class PickerState:
    """Cursor over an immutable branch list.

    The cursor is ``None`` only when there is nothing to select; otherwise it
    always stays in ``[0, len(branches))``. Once ``confirm`` or ``cancel`` ran
    the state is finished and every further transition is ignored.
    """

    branches: tuple[Branch, ...]
    cursor: int | None = None
    scroll_offset: int = 0
    outcome: SessionOutcome | None = field(default=None)

    @classmethod
    def initial(cls, branches: Sequence[Branch]) -> PickerState:
        items = tuple(branches)
        return cls(branches=items, cursor=0 if items else None)

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    @property
    def is_empty(self) -> bool:
        return not self.branches

    @property
    def selected(self) -> Branch | None:
        if self.cursor is None:
            return None
        return self.branches[self.cursor]

    def move_next(self) -> None:
        if self.finished or self.cursor is None:
            return
        self.cursor = (self.cursor + 1) % len(self.branches)

    def move_prev(self) -> None:
        if self.finished or self.cursor is None:
            return
        count = len(self.branches)
        self.cursor = (self.cursor + count - 1) % count

    def confirm(self) -> None:
        if self.finished:
            return
        branch = self.selected
        if branch is None:
            self.outcome = SessionOutcome.cancelled()
            return
        self.outcome = SessionOutcome(confirmed=True, selected_real_name=branch.real_name)

    def cancel(self) -> None:
        if self.finished:
            return
        self.outcome = SessionOutcome.cancelled()

    def visible_window(self, height: int) -> range:
        """Rows shown in a viewport of ``height`` lines, keeping the cursor inside."""
        total = len(self.branches)
        if height <= 0 or total == 0:
            return range(0)
        if total <= height:
            self.scroll_offset = 0
            return range(total)
        cursor = self.cursor or 0
        offset = min(self.scroll_offset, total - height)
        if cursor < offset:
            offset = cursor
        elif cursor >= offset + height:
            offset = cursor - height + 1
        self.scroll_offset = max(offset, 0)
        return range(self.scroll_offset, self.scroll_offset + height)

    def finish(self) -> SessionOutcome:
        """Session outcome; an unfinished session counts as cancelled."""
        if self.outcome is None:
            self.outcome = SessionOutcome.cancelled()
        return self.outcome
