"""Full screen curses front end for the branch picker."""

from __future__ import annotations

import curses
import logging as py_logging
from collections.abc import Callable, Iterable
from contextlib import suppress
from typing import Any, Protocol

from branchhop.logging import muted_stream_handlers
from branchhop.models import SessionOutcome
from branchhop.picker.dispatch import InputEvent, InterruptEvent, Key, KeyEvent, ResizeEvent, dispatch
from branchhop.picker.state import PickerState
from branchhop.picker.view_model import (
    DEFAULT_SPECIAL_BRANCHES,
    ColumnWidths,
    ViewModel,
    build_view_model,
)
from branchhop.ui.theme import DEFAULT_PALETTE, TableColors, table_colors

logger = py_logging.getLogger(__name__)

FOOTER_HEIGHT = 4
HEADER_HEIGHT = 1
ESCAPE_DELAY_MS = 25

_PAIR_HEADER = 1
_PAIR_ROW = 2
_PAIR_SPECIAL = 3
_PAIR_SELECTED = 4
_PAIR_FOOTER_BORDER = 5
_PAIR_FOOTER_TEXT = 6

_SPECIAL_KEYS = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_ENTER: Key.ENTER,
}
_CHAR_KEYS = {
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    "\x1b": Key.ESCAPE,
}


class Screen(Protocol):
    def render(self, model: ViewModel) -> None: ...

    def viewport_height(self) -> int: ...

    def read_event(self) -> InputEvent | None: ...


def translate_key(code: int | str) -> InputEvent | None:
    """Map a ``get_wch`` result onto an input event; curses only reports presses."""
    if isinstance(code, str):
        if code in _CHAR_KEYS:
            return KeyEvent(_CHAR_KEYS[code])
        return KeyEvent(code)
    if code == curses.KEY_RESIZE:
        return ResizeEvent()
    key = _SPECIAL_KEYS.get(code)
    if key is None:
        return None
    return KeyEvent(key)


def safe_addstr(window: Any, y: int, x: int, text: str, attr: int = 0) -> None:
    # writing the bottom-right cell moves the cursor off screen and raises
    with suppress(curses.error):
        window.addstr(y, x, text, attr)


class CursesScreen:
    def __init__(self, stdscr: Any, colors: TableColors) -> None:
        self.stdscr = stdscr
        self.colors = colors
        self._attrs: dict[int, int] = {}

    @classmethod
    def setup(cls, stdscr: Any, palette: str = DEFAULT_PALETTE) -> CursesScreen:
        with suppress(curses.error):
            curses.curs_set(0)
        with suppress(AttributeError, curses.error):
            curses.set_escdelay(ESCAPE_DELAY_MS)
        extended = False
        if curses.has_colors():
            curses.start_color()
            with suppress(curses.error):
                curses.use_default_colors()
            extended = curses.COLORS >= 256
        screen = cls(stdscr, table_colors(palette, extended=extended))
        if curses.has_colors():
            screen._init_pairs()
        return screen

    def _init_pairs(self) -> None:
        c = self.colors
        pairs = {
            _PAIR_HEADER: (c.header_fg, c.header_bg),
            _PAIR_ROW: (c.row_fg, c.normal_row_bg),
            _PAIR_SPECIAL: (c.row_fg, c.special_row_bg),
            _PAIR_SELECTED: (c.selected_row_fg, c.normal_row_bg),
            _PAIR_FOOTER_BORDER: (c.footer_border_fg, c.buffer_bg),
            _PAIR_FOOTER_TEXT: (c.row_fg, c.buffer_bg),
        }
        for number, (fg, bg) in pairs.items():
            try:
                curses.init_pair(number, fg, bg)
            except curses.error:
                logger.debug("Colour pair %s unsupported fg=%s bg=%s", number, fg, bg)
                continue
            self._attrs[number] = curses.color_pair(number)
        with suppress(curses.error):
            self.stdscr.bkgd(" ", self._attrs.get(_PAIR_FOOTER_TEXT, 0))

    def _attr(self, pair: int, extra: int = 0) -> int:
        return self._attrs.get(pair, 0) | extra

    def viewport_height(self) -> int:
        height, _ = self.stdscr.getmaxyx()
        return max(height - FOOTER_HEIGHT - HEADER_HEIGHT, 0)

    def render(self, model: ViewModel) -> None:
        height, width = self.stdscr.getmaxyx()
        self.stdscr.erase()
        table_width = width - 1 if model.needs_scrollbar else width
        safe_addstr(
            self.stdscr,
            0,
            0,
            model.format_header(table_width).ljust(table_width),
            self._attr(_PAIR_HEADER, curses.A_BOLD),
        )
        for offset, row in enumerate(model.rows):
            if row.selected:
                attr = self._attr(_PAIR_SELECTED, curses.A_REVERSE)
            elif row.special:
                attr = self._attr(_PAIR_SPECIAL)
            else:
                attr = self._attr(_PAIR_ROW)
            text = model.format_row(row, table_width).ljust(table_width)
            safe_addstr(self.stdscr, HEADER_HEIGHT + offset, 0, text, attr)
        if model.needs_scrollbar:
            self._render_scrollbar(model, width - 1, len(model.rows))
        self._render_footer(model, height, width)
        self.stdscr.refresh()

    def _render_scrollbar(self, model: ViewModel, x: int, track_height: int) -> None:
        if track_height <= 0 or model.total <= 1:
            return
        thumb = round(model.scroll_position * (track_height - 1) / (model.total - 1))
        attr = self._attr(_PAIR_FOOTER_BORDER)
        for offset in range(track_height):
            glyph = "█" if offset == thumb else "║"
            safe_addstr(self.stdscr, HEADER_HEIGHT + offset, x, glyph, attr)

    def _render_footer(self, model: ViewModel, height: int, width: int) -> None:
        top = height - FOOTER_HEIGHT
        if top < HEADER_HEIGHT or width < 2:
            return
        border = self._attr(_PAIR_FOOTER_BORDER)
        inner = width - 2
        safe_addstr(self.stdscr, top, 0, "╔" + "═" * inner + "╗", border)
        for line_no, text in enumerate(model.footer[: FOOTER_HEIGHT - 2], start=1):
            safe_addstr(self.stdscr, top + line_no, 0, "║", border)
            safe_addstr(
                self.stdscr, top + line_no, 1, text[:inner].center(inner), self._attr(_PAIR_FOOTER_TEXT)
            )
            safe_addstr(self.stdscr, top + line_no, width - 1, "║", border)
        safe_addstr(self.stdscr, height - 1, 0, "╚" + "═" * inner + "╝", border)

    def read_event(self) -> InputEvent | None:
        try:
            code = self.stdscr.get_wch()
        except KeyboardInterrupt:
            return InterruptEvent()
        except curses.error:
            return None
        return translate_key(code)


def run_loop(
    state: PickerState,
    screen: Screen,
    *,
    root: str = "",
    special_branches: Iterable[str] = DEFAULT_SPECIAL_BRANCHES,
) -> SessionOutcome:
    """Render, block for one event, apply it; until confirm or cancel."""
    widths = ColumnWidths.calculate(state.branches)
    special = tuple(special_branches)
    while not state.finished:
        model = build_view_model(
            state,
            viewport_height=screen.viewport_height(),
            root=root,
            special_branches=special,
            widths=widths,
        )
        screen.render(model)
        try:
            event = screen.read_event()
        except KeyboardInterrupt:
            event = InterruptEvent()
        if event is None:
            continue
        dispatch(state, event)
    return state.finish()


def run_picker(
    state: PickerState,
    *,
    root: str = "",
    palette: str = DEFAULT_PALETTE,
    special_branches: Iterable[str] = DEFAULT_SPECIAL_BRANCHES,
    wrapper: Callable[..., SessionOutcome] = curses.wrapper,
    screen_factory: Callable[[Any, str], Screen] | None = None,
) -> SessionOutcome:
    """Run the interactive session; the terminal is restored before returning or raising."""
    special = tuple(special_branches)

    def _session(stdscr: Any) -> SessionOutcome:
        factory = screen_factory or CursesScreen.setup
        screen = factory(stdscr, palette)
        return run_loop(state, screen, root=root, special_branches=special)

    logger.debug("Starting picker branches=%s palette=%s", len(state.branches), palette)
    with muted_stream_handlers():
        outcome = wrapper(_session)
    logger.debug(
        "Picker finished confirmed=%s branch=%s", outcome.confirmed, outcome.selected_real_name
    )
    return outcome
