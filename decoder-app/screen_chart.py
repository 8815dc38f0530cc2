"""
Inductor Station - Colour Chart Screen

Read-only reference table: what each colour means as a digit, a multiplier
and a tolerance band.  Rows come straight from the colour_code tables.
"""

from __future__ import annotations

import pygame

from color_code import (
    BAND_RGB,
    COLOR_CODE_CHART,
    DEFAULT_TOLERANCE,
    TOLERANCE_CHART,
)
from ui_manager import (
    BG_COLOR,
    NAV_BORDER,
    SCREEN_W,
    TEXT_COLOR,
    TEXT_MUTED,
    draw_text,
    fonts,
)

_HEADER_Y = 30
_ROW_Y    = 46
_ROW_H    = 14

# Column x positions: swatch, colour, digit, multiplier, tolerance
_COLUMNS = (40, 72, 180, 250, 360)
_HEADERS = ("Color", "Digit", "Multiplier", "Tolerance")

_SI_SUFFIX = ("", "k", "M", "G")


def multiplier_label(code: int) -> str:
    """Return the multiplier for exponent *code* ('×1k', '×0.01', ...)."""
    if code < 0:
        return f"×{10 ** code:g}"
    return f"×{10 ** (code % 3)}{_SI_SUFFIX[code // 3]}"


def build_chart_rows() -> list[tuple[str, str, str, str]]:
    """Return ``(colour, digit, multiplier, tolerance)`` text for every colour.

    Colours with no digit or tolerance meaning show ``'-'``.
    """
    rows = []
    for name, code in COLOR_CODE_CHART.items():
        digit = str(code) if 0 <= code <= 9 else "-"
        rows.append((name, digit, multiplier_label(code), TOLERANCE_CHART.get(name, "-")))
    return rows


class ScreenChart:
    """Colour reference chart.

    Args:
        surface: pygame.Surface or UIManager (see ScreenDecoder).
    """

    def __init__(self, surface) -> None:
        if hasattr(surface, "_surface"):
            self._surface = surface._surface
        else:
            self._surface = surface
        self.rows = build_chart_rows()

    def update(self, dt: float) -> None:
        pass

    def handle_event(self, event) -> None:
        pass

    def draw(self, surface: pygame.Surface | None = None) -> None:
        target = surface if surface is not None else self._surface
        target.fill(BG_COLOR)

        try:
            fnt = fonts()
            draw_text(target, "Color Code Chart", fnt["heading"], TEXT_COLOR,
                      SCREEN_W // 2, 4, anchor="midtop")

            for x, header in zip(_COLUMNS[1:], _HEADERS):
                draw_text(target, header, fnt["small"], TEXT_MUTED, x, _HEADER_Y)
            pygame.draw.line(target, NAV_BORDER,
                             (_COLUMNS[0], _ROW_Y - 2), (SCREEN_W - 40, _ROW_Y - 2), 1)

            for i, row in enumerate(self.rows):
                y = _ROW_Y + i * _ROW_H
                pygame.draw.rect(target, BAND_RGB[row[0]],
                                 pygame.Rect(_COLUMNS[0], y + 2, 24, _ROW_H - 4))
                for x, cell in zip(_COLUMNS[1:], row):
                    draw_text(target, cell, fnt["band"], TEXT_COLOR, x, y)

            footer_y = _ROW_Y + len(self.rows) * _ROW_H + 4
            draw_text(target, f"No tolerance band: {DEFAULT_TOLERANCE}", fnt["band"],
                      TEXT_MUTED, SCREEN_W // 2, footer_y, anchor="midtop")
        except (TypeError, pygame.error):
            pass
