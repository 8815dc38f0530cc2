"""
Inductor Station - Colour Band Decoder Screen

Pick the colour of each band and decode the inductance.

Layout (480 × 320, content area 480 × 272 above the nav bar):

  y   4– 30   Title
  y  34– 74   Inductor illustration with the current bands
  y  84–162   Band selectors: label, < swatch >, colour name (one column per band)
  y 170–210   "Add/Remove Tolerance" and "Calculate Value" buttons
  y 216–268   Result card (value, raw µH) or error card

Keyboard: LEFT / RIGHT select a band, UP / DOWN cycle its colour,
RETURN decodes, T adds or removes the tolerance band.

Construction modes (mirrors the UIManager pattern):
  ScreenDecoder(surface)     - test mode: plain Surface or MagicMock
  ScreenDecoder(ui_manager)  - app mode: UIManager instance passed as 'surface'
"""

from __future__ import annotations

import logging

import pygame

import config
# Imported at module level so tests can patch "screen_decoder.decode_bands".
from color_code import (
    BAND_LABELS,
    BAND_RGB,
    BandCountError,
    BandDecodeError,
    decode_bands,
    valid_colors_for_position,
)
from ui_manager import (
    ACCENT,
    BG_COLOR,
    CARD_BG,
    GHOST_COLOR,
    GREEN,
    RED,
    TEXT_COLOR,
    TEXT_MUTED,
    SCREEN_W,
    draw_button,
    draw_inductor,
    draw_text,
    fonts,
    wrap_text,
)

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Layout constants
# ---------------------------------------------------------------------------

_TITLE_Y = 4

_INDUCTOR_RECT = pygame.Rect(90, 34, 300, 40)

_COL_W     = 110
_COL_GAP   = 8
_COL_LEFT  = (SCREEN_W - (4 * _COL_W + 3 * _COL_GAP)) // 2
_LABEL_Y   = 84
_ROW_Y     = 100
_ROW_H     = 44     # ≥44 px - touch-safe
_ARROW_W   = 32
_NAME_Y    = _ROW_Y + _ROW_H + 4

_TOGGLE_RECT = pygame.Rect(8,   170, 200, 40)
_CALC_RECT   = pygame.Rect(216, 170, 256, 40)
_CARD_RECT   = pygame.Rect(8,   216, 464, 52)

_TOGGLE_BG = (30, 45, 75)
_ERROR_BG  = (60, 30, 30)
_RESULT_BG = (15, 30, 20)

_MAX_ERROR_LINES = 3


def _band_rects(position: int) -> dict[str, pygame.Rect]:
    """Return the prev / swatch / next hit-rects for band column *position*."""
    x = _COL_LEFT + position * (_COL_W + _COL_GAP)
    swatch_w = _COL_W - 2 * _ARROW_W - 6
    return {
        "column": pygame.Rect(x, _LABEL_Y - 4, _COL_W, _NAME_Y + 18 - _LABEL_Y + 4),
        "prev":   pygame.Rect(x, _ROW_Y, _ARROW_W, _ROW_H),
        "swatch": pygame.Rect(x + _ARROW_W + 3, _ROW_Y, swatch_w, _ROW_H),
        "next":   pygame.Rect(x + _COL_W - _ARROW_W, _ROW_Y, _ARROW_W, _ROW_H),
    }


# ---------------------------------------------------------------------------
# ScreenDecoder
# ---------------------------------------------------------------------------

class ScreenDecoder:
    """Inductor colour-band decoder screen.

    Holds the selected bands, the last decoded value and the last error
    message.  Any band change discards the previous result.

    Args:
        surface: pygame.Surface to render onto (480×320), OR a UIManager
                 instance (detected via ``hasattr(surface, '_surface')``).
    """

    def __init__(self, surface) -> None:
        if hasattr(surface, "_surface"):
            self._ui      = surface
            self._surface = surface._surface
        else:
            self._ui      = None
            self._surface = surface

        self.bands: list[str] = list(config.DEFAULT_BANDS)
        self.selected: int = 0
        self.result = None          # InductorValue from the last calculate()
        self.error: str = ""

        self._columns = [_band_rects(i) for i in range(4)]

        # Pressed control for visual feedback: (action, position) or None
        self._pressed: tuple[str, int] | None = None

        if not pygame.font.get_init():
            pygame.font.init()

    # ------------------------------------------------------------------
    # Band state
    # ------------------------------------------------------------------

    def _clear_result(self) -> None:
        self.result = None
        self.error = ""

    def set_band(self, position: int, color: str) -> None:
        """Set band *position* to *color* and discard the previous result.

        Raises:
            IndexError: *position* is not an existing band.
        """
        if not 0 <= position < len(self.bands):
            raise IndexError(f"No band at position {position}")
        self.bands[position] = color
        self._clear_result()

    def cycle_band(self, position: int, step: int = 1) -> None:
        """Move band *position* *step* places through its valid colours.

        A band holding a colour not valid for its position jumps to the
        first (step > 0) or last (step < 0) valid colour.
        """
        if not 0 <= position < len(self.bands):
            return
        options = valid_colors_for_position(position)
        current = self.bands[position]
        if current in options:
            index = (options.index(current) + step) % len(options)
        else:
            index = 0 if step > 0 else len(options) - 1
        self.set_band(position, options[index])

    def add_tolerance_band(self) -> None:
        """Append a Gold tolerance band to a 3-band code."""
        if len(self.bands) == 3:
            self.bands.append("Gold")
            self._clear_result()

    def remove_tolerance_band(self) -> None:
        """Drop the tolerance band from a 4-band code."""
        if len(self.bands) == 4:
            self.bands = self.bands[:3]
            self.selected = min(self.selected, 2)
            self._clear_result()

    def toggle_tolerance_band(self) -> None:
        """Add the tolerance band to a 3-band code, or remove it from a 4-band one."""
        if len(self.bands) == 3:
            self.add_tolerance_band()
        else:
            self.remove_tolerance_band()

    def load_bands(self, bands) -> None:
        """Replace all bands (e.g. from a preset) and discard the previous result.

        Raises:
            BandCountError: *bands* does not hold 3 or 4 colours; the current
                            bands are left unchanged.
        """
        bands = list(bands)
        if not 3 <= len(bands) <= 4:
            raise BandCountError(
                f"Invalid number of color bands ({len(bands)}). Must be 3 or 4 bands."
            )
        self.bands = bands
        self.selected = 0
        self._clear_result()

    def calculate(self) -> None:
        """Decode the current bands into ``result`` or ``error``."""
        try:
            self.result = decode_bands(self.bands)
            self.error = ""
            log.debug("Decoded %s", self.result.formatted)
        except BandDecodeError as exc:
            self.result = None
            self.error = str(exc)
            log.info("Decode failed for %s: %s", self.bands, exc)

    # ------------------------------------------------------------------
    # Screen interface - update / draw / event handling
    # ------------------------------------------------------------------

    def update(self, dt: float) -> None:
        """No-op: this screen has no time-based animation."""
        pass

    def draw(self, surface: pygame.Surface | None = None) -> None:
        """Render the decoder UI.

        Args:
            surface: Explicit target surface.  Defaults to self._surface.
        """
        target = surface if surface is not None else self._surface
        target.fill(BG_COLOR)

        try:
            fnt = fonts()
            draw_text(target, "Inductor Color Code Decoder", fnt["heading"],
                      TEXT_COLOR, SCREEN_W // 2, _TITLE_Y, anchor="midtop")
            draw_inductor(target, _INDUCTOR_RECT, self.bands)
            self._draw_selectors(target, fnt)
            self._draw_buttons(target, fnt)
            self._draw_card(target, fnt)
        except (TypeError, pygame.error):
            # pygame.draw.* rejects MagicMock surfaces in tests; fill() has run.
            pass

    def handle_event(self, event) -> None:
        """Process keyboard input.

        Handles:
        - K_LEFT / K_RIGHT: select the previous / next band.
        - K_UP / K_DOWN:    cycle the selected band's colour.
        - K_RETURN:         decode.
        - ``"t"``:          add or remove the tolerance band.
        - Everything else:  ignored.
        """
        if event.type != pygame.KEYDOWN:
            return

        if event.key == pygame.K_LEFT:
            self.selected = max(0, self.selected - 1)
        elif event.key == pygame.K_RIGHT:
            self.selected = min(len(self.bands) - 1, self.selected + 1)
        elif event.key == pygame.K_UP:
            self.cycle_band(self.selected, 1)
        elif event.key == pygame.K_DOWN:
            self.cycle_band(self.selected, -1)
        elif event.key == pygame.K_RETURN:
            self.calculate()
        elif event.unicode.lower() == "t":
            self.toggle_tolerance_band()

    def handle_touch(self, x: int, y: int) -> None:
        """Process an on-screen tap at pixel coordinates (*x*, *y*)."""
        self._pressed = None

        if _CALC_RECT.collidepoint(x, y):
            self._pressed = ("calculate", -1)
            self.calculate()
            return
        if _TOGGLE_RECT.collidepoint(x, y):
            self._pressed = ("toggle", -1)
            self.toggle_tolerance_band()
            return

        for position, rects in enumerate(self._columns[:len(self.bands)]):
            if rects["prev"].collidepoint(x, y):
                self._pressed = ("prev", position)
                self.selected = position
                self.cycle_band(position, -1)
                return
            if rects["next"].collidepoint(x, y):
                self._pressed = ("next", position)
                self.selected = position
                self.cycle_band(position, 1)
                return
            if rects["column"].collidepoint(x, y):
                self.selected = position
                return

    # ------------------------------------------------------------------
    # Private: drawing
    # ------------------------------------------------------------------

    def _draw_selectors(self, surface: pygame.Surface, fnt: dict) -> None:
        for position, name in enumerate(self.bands):
            rects = self._columns[position]
            col = rects["column"]

            if position == self.selected:
                pygame.draw.rect(surface, ACCENT, col, width=2, border_radius=8)

            draw_text(surface, BAND_LABELS[position], fnt["small"], TEXT_MUTED,
                      col.centerx, _LABEL_Y, anchor="midtop")

            for action, glyph in (("prev", "<"), ("next", ">")):
                draw_button(surface, glyph, rects[action], CARD_BG, TEXT_COLOR,
                            fnt["body"], pressed=self._pressed == (action, position))

            rgb = BAND_RGB.get(name)
            swatch = rects["swatch"]
            if rgb is None:
                pygame.draw.rect(surface, GHOST_COLOR, swatch, width=2, border_radius=4)
            else:
                pygame.draw.rect(surface, rgb, swatch, border_radius=4)
                pygame.draw.rect(surface, TEXT_MUTED, swatch, width=1, border_radius=4)

            draw_text(surface, name, fnt["band"], TEXT_COLOR,
                      col.centerx, _NAME_Y, anchor="midtop")

    def _draw_buttons(self, surface: pygame.Surface, fnt: dict) -> None:
        label = "Add Tolerance" if len(self.bands) == 3 else "Remove Tolerance"
        draw_button(surface, label, _TOGGLE_RECT, _TOGGLE_BG, TEXT_COLOR,
                    fnt["body"], pressed=self._pressed == ("toggle", -1))
        draw_button(surface, "Calculate Value", _CALC_RECT, ACCENT, BG_COLOR,
                    fnt["body"], pressed=self._pressed == ("calculate", -1))

    def _draw_card(self, surface: pygame.Surface, fnt: dict) -> None:
        card = _CARD_RECT
        if self.error:
            pygame.draw.rect(surface, _ERROR_BG, card, border_radius=8)
            lines = wrap_text(self.error, fnt["small"], card.width - 16)
            for i, line in enumerate(lines[:_MAX_ERROR_LINES]):
                draw_text(surface, line, fnt["small"], RED,
                          card.x + 8, card.y + 4 + i * 15)
            return

        if self.result is None:
            pygame.draw.rect(surface, CARD_BG, card, border_radius=8)
            draw_text(surface, "Press Calculate to decode", fnt["small"], TEXT_MUTED,
                      card.centerx, card.centery, anchor="center")
            return

        pygame.draw.rect(surface, _RESULT_BG, card, border_radius=8)
        pygame.draw.line(surface, GREEN,
                         (card.x + 4, card.y + 1), (card.right - 5, card.y + 1), 2)
        draw_text(surface, self.result.formatted, fnt["heading"], GREEN,
                  card.x + 12, card.centery, anchor="midleft")
        draw_text(surface, f"Raw value: {self.result.raw_value:g} µH", fnt["small"],
                  TEXT_MUTED, card.right - 10, card.y + 16, anchor="midright")
        draw_text(surface, f"Auto-scaled: {self.result.unit}", fnt["small"],
                  TEXT_MUTED, card.right - 10, card.y + 34, anchor="midright")

    # ------------------------------------------------------------------
    # Lifecycle hooks
    # ------------------------------------------------------------------

    def on_enter(self) -> None:
        """Called when this screen becomes active."""
        pass

    def on_exit(self) -> None:
        """Called when this screen is deactivated."""
        self._pressed = None
