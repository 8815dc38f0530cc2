"""
Inductor Station - Quick Test Cases Screen

Three preset cards with common inductor codes.  Tapping a card (or pressing
1-3) hands its bands to the ``on_select`` callback; main.py wires that to
load the decoder screen.
"""

from __future__ import annotations

import logging
from typing import Callable

import pygame

import config
from ui_manager import (
    ACCENT,
    BG_COLOR,
    CARD_BG,
    SCREEN_W,
    TEXT_COLOR,
    TEXT_MUTED,
    draw_inductor,
    draw_text,
    fonts,
    wrap_text,
)

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Layout constants
# ---------------------------------------------------------------------------

_CARD_W   = 148
_CARD_GAP = 8
_CARD_Y   = 60
_CARD_H   = 190


class ScreenPresets:
    """Preset picker.

    Args:
        surface:   pygame.Surface or UIManager (see ScreenDecoder).
        on_select: Called with a fresh list of band names when a preset is
                   chosen.
        presets:   ``(bands, description)`` pairs; defaults to config.PRESETS.
    """

    def __init__(
        self,
        surface,
        on_select: Callable[[list[str]], None] | None = None,
        presets=None,
    ) -> None:
        if hasattr(surface, "_surface"):
            self._surface = surface._surface
        else:
            self._surface = surface

        self.on_select = on_select
        self.presets = list(presets if presets is not None else config.PRESETS)

        left = (SCREEN_W - (len(self.presets) * _CARD_W
                            + (len(self.presets) - 1) * _CARD_GAP)) // 2
        self._card_rects = [
            pygame.Rect(left + i * (_CARD_W + _CARD_GAP), _CARD_Y, _CARD_W, _CARD_H)
            for i in range(len(self.presets))
        ]
        self._pressed: int | None = None

    def select(self, index: int) -> None:
        """Choose preset *index*.

        Raises:
            IndexError: No preset at *index*.
        """
        bands, description = self.presets[index]
        log.info("Preset %d selected: %s (%s)", index + 1, "-".join(bands), description)
        if self.on_select is not None:
            self.on_select(list(bands))

    # ------------------------------------------------------------------
    # Screen interface
    # ------------------------------------------------------------------

    def update(self, dt: float) -> None:
        pass

    def draw(self, surface: pygame.Surface | None = None) -> None:
        target = surface if surface is not None else self._surface
        target.fill(BG_COLOR)

        try:
            fnt = fonts()
            draw_text(target, "Quick Test Cases", fnt["heading"], TEXT_COLOR,
                      SCREEN_W // 2, 4, anchor="midtop")
            draw_text(target, "Try these common inductor values", fnt["small"],
                      TEXT_MUTED, SCREEN_W // 2, 32, anchor="midtop")
            for i, ((bands, description), rect) in enumerate(
                zip(self.presets, self._card_rects)
            ):
                self._draw_card(target, fnt, i, bands, description, rect)
        except (TypeError, pygame.error):
            pass

    def handle_event(self, event) -> None:
        """Keys 1..N pick the matching preset."""
        if event.type != pygame.KEYDOWN:
            return
        if event.unicode.isdigit():
            index = int(event.unicode) - 1
            if 0 <= index < len(self.presets):
                self.select(index)

    def handle_touch(self, x: int, y: int) -> None:
        for i, rect in enumerate(self._card_rects):
            if rect.collidepoint(x, y):
                self._pressed = i
                self.select(i)
                return
        self._pressed = None

    def on_enter(self) -> None:
        pass

    def on_exit(self) -> None:
        self._pressed = None

    # ------------------------------------------------------------------
    # Private: drawing
    # ------------------------------------------------------------------

    def _draw_card(self, surface, fnt, index, bands, description, rect) -> None:
        bg = CARD_BG
        if self._pressed == index:
            bg = tuple(max(0, int(c * 0.75)) for c in bg)
        pygame.draw.rect(surface, bg, rect, border_radius=8)
        pygame.draw.line(surface, ACCENT,
                         (rect.x + 4, rect.y + 1), (rect.right - 5, rect.y + 1), 2)

        draw_text(surface, str(index + 1), fnt["small"], TEXT_MUTED,
                  rect.x + 8, rect.y + 8)
        draw_inductor(surface, pygame.Rect(rect.x + 8, rect.y + 40, rect.width - 16, 30),
                      bands)
        draw_text(surface, description, fnt["body"], TEXT_COLOR,
                  rect.centerx, rect.y + 100, anchor="midtop")
        for i, line in enumerate(wrap_text(" ".join(bands), fnt["band"], rect.width - 16)):
            draw_text(surface, line, fnt["band"], TEXT_MUTED,
                      rect.centerx, rect.y + 130 + i * 15, anchor="midtop")
