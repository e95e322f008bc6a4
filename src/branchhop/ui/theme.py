"""Colour tables for the picker, selected by name from config."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

PaletteName = Literal["blue", "emerald", "indigo", "red"]
DEFAULT_PALETTE: PaletteName = "emerald"

# ANSI indices used when the terminal has fewer than 256 colours.
_BLACK, _RED, _GREEN, _BLUE, _MAGENTA, _WHITE = 0, 1, 2, 4, 5, 7

_SLATE_950 = 233
_SLATE_800 = 236
_SLATE_200 = 254


@dataclass(frozen=True)
class Palette:
    c400: int
    c600: int
    c900: int
    basic: int


PALETTES: dict[str, Palette] = {
    "blue": Palette(c400=75, c600=27, c900=18, basic=_BLUE),
    "emerald": Palette(c400=78, c600=29, c900=22, basic=_GREEN),
    "indigo": Palette(c400=105, c600=62, c900=54, basic=_MAGENTA),
    "red": Palette(c400=203, c600=160, c900=88, basic=_RED),
}


@dataclass(frozen=True)
class TableColors:
    buffer_bg: int
    header_bg: int
    header_fg: int
    row_fg: int
    selected_row_fg: int
    normal_row_bg: int
    special_row_bg: int
    footer_border_fg: int

    @classmethod
    def from_palette(cls, palette: Palette, *, extended: bool = True) -> TableColors:
        if not extended:
            return cls(
                buffer_bg=-1,
                header_bg=palette.basic,
                header_fg=_WHITE,
                row_fg=_WHITE,
                selected_row_fg=palette.basic,
                normal_row_bg=-1,
                special_row_bg=_BLACK,
                footer_border_fg=palette.basic,
            )
        return cls(
            buffer_bg=_SLATE_950,
            header_bg=palette.c900,
            header_fg=_SLATE_200,
            row_fg=_SLATE_200,
            selected_row_fg=palette.c400,
            normal_row_bg=_SLATE_950,
            special_row_bg=_SLATE_800,
            footer_border_fg=palette.c400,
        )


def palette_names() -> tuple[str, ...]:
    return tuple(PALETTES)


def table_colors(name: str = DEFAULT_PALETTE, *, extended: bool = True) -> TableColors:
    palette = PALETTES.get(name, PALETTES[DEFAULT_PALETTE])
    return TableColors.from_palette(palette, extended=extended)
