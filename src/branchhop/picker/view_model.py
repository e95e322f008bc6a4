"""Render-ready projection of the picker state."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from branchhop.models import Branch
from branchhop.picker.state import PickerState

HEADER = ("Name", "Last commit msg", "Last commit date")
HIGHLIGHT_SYMBOL = " > "
DEFAULT_SPECIAL_BRANCHES = ("main", "master")
COLUMN_PADDING = 1
COLUMN_SPACING = " "


def row_fields(branch: Branch) -> tuple[str, str, str]:
    if branch.last_commit is None:
        return (branch.display_name, "", "")
    return (branch.display_name, branch.last_commit.message, branch.last_commit.relative_time)


@dataclass(frozen=True)
class ColumnWidths:
    name: int = 0
    msg: int = 0
    date: int = 0

    @classmethod
    def calculate(cls, branches: Iterable[Branch]) -> ColumnWidths:
        name = msg = date = 0
        for branch in branches:
            fields = row_fields(branch)
            name = max(name, len(fields[0]))
            msg = max(msg, len(fields[1]))
            date = max(date, len(fields[2]))
        return cls(name=name, msg=msg, date=date)

    @property
    def padded_name(self) -> int:
        return self.name + COLUMN_PADDING

    @property
    def padded_msg(self) -> int:
        return self.msg + COLUMN_PADDING


@dataclass(frozen=True)
class RowView:
    index: int
    cells: tuple[str, str, str]
    selected: bool
    special: bool


@dataclass(frozen=True)
class ViewModel:
    header: tuple[str, str, str]
    widths: ColumnWidths
    rows: tuple[RowView, ...]
    total: int
    scroll_position: int
    needs_scrollbar: bool
    footer: tuple[str, ...]

    def format_row(self, row: RowView, width: int | None = None) -> str:
        return format_cells(row.cells, self.widths, selected=row.selected, width=width)

    def format_header(self, width: int | None = None) -> str:
        return format_cells(self.header, self.widths, selected=False, width=width)


def format_cells(
    cells: Sequence[str],
    widths: ColumnWidths,
    *,
    selected: bool,
    width: int | None = None,
) -> str:
    prefix = HIGHLIGHT_SYMBOL if selected else " " * len(HIGHLIGHT_SYMBOL)
    name, msg, date = cells
    name_cell = name[: widths.padded_name].ljust(widths.padded_name)
    msg_cell = msg[: widths.padded_msg].ljust(widths.padded_msg)
    line = COLUMN_SPACING.join((prefix + name_cell, msg_cell, date))
    if width is not None:
        line = line[: max(width, 0)]
    return line


def build_view_model(
    state: PickerState,
    *,
    viewport_height: int,
    root: str = "",
    special_branches: Iterable[str] = DEFAULT_SPECIAL_BRANCHES,
    widths: ColumnWidths | None = None,
) -> ViewModel:
    special = frozenset(special_branches)
    resolved_widths = widths if widths is not None else ColumnWidths.calculate(state.branches)
    rows = tuple(
        RowView(
            index=index,
            cells=row_fields(state.branches[index]),
            selected=index == state.cursor,
            special=state.branches[index].display_name in special,
        )
        for index in state.visible_window(viewport_height)
    )
    total = len(state.branches)
    return ViewModel(
        header=HEADER,
        widths=resolved_widths,
        rows=rows,
        total=total,
        scroll_position=state.cursor or 0,
        needs_scrollbar=total > max(viewport_height, 0),
        footer=("Gday", f"Repo: {root}"),
    )
