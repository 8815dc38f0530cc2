"""
Inductor Station - Pygame Display Manager

Manages pygame initialisation, screen transitions, the nav bar, and the main
render loop for the 480×320 station display.

The UIManager can be constructed in two modes:

  1. Display mode (no surface argument):
       mgr = UIManager()
     pygame.init() is called, the display is created from config, and the
     clock is set up.

  2. Headless / test mode (surface provided):
       mgr = UIManager(surface)
     pygame is NOT re-initialised.  The supplied surface is used directly.
     Clock and display-flip calls are skipped so the class works with a
     MagicMock surface under SDL dummy mode.

The module also holds the drawing helpers shared by every screen.
"""

from __future__ import annotations

import logging

import pygame

import config
from color_code import BAND_RGB

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Layout constants
# ---------------------------------------------------------------------------

SCREEN_W  = config.SCREEN_W
SCREEN_H  = config.SCREEN_H
NAV_H     = 48                  # nav bar height, pinned to bottom
CONTENT_H = SCREEN_H - NAV_H   # 272 px available for screen content

# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------

BG_COLOR     = (15,  23,  42)   # dark blue-gray - main background
CARD_BG      = (22,  33,  62)
TEXT_COLOR   = (226, 232, 240)  # near-white - primary text
TEXT_MUTED   = (150, 160, 180)
ACCENT       = (56,  189, 248)  # cyan - active nav / primary button
GREEN        = (52,  211, 153)  # decoded value
RED          = (248, 113, 113)  # error
NAV_BG       = (8,   15,  30)   # nav bar background, darker than BG_COLOR
NAV_BORDER   = (30,  41,  59)   # 1-px top border on the nav bar
INDUCTOR_BODY = (254, 243, 199) # pale ceramic body
LEAD_COLOR   = (160, 160, 160)
GHOST_COLOR  = (80,  90,  120)

# ---------------------------------------------------------------------------
# Nav bar configuration
# ---------------------------------------------------------------------------

_NAV_LABELS = ["Decoder", "Presets", "Chart"]
_NAV_KEYS   = ["decoder", "presets", "chart"]
_NAV_BTN_W  = SCREEN_W // len(_NAV_KEYS)

# Band centres as a fraction of the body width (bands fill left to right)
_BAND_CENTRES_PCT = [0.20, 0.40, 0.60, 0.80]


# ---------------------------------------------------------------------------
# Font helpers  (module-level cache, safe to call multiple times)
# ---------------------------------------------------------------------------

_FONT_CACHE: dict[str, pygame.font.Font] | None = None


def _load_font(family: str, size: int, bold: bool = False) -> pygame.font.Font:
    """Load a font by family name with a fallback to the default font."""
    try:
        font = pygame.font.SysFont(family, size, bold=bold)
        # SysFont can return None in dummy SDL environments
        if font is None:
            raise RuntimeError("SysFont returned None")
        return font
    except (RuntimeError, pygame.error):
        return pygame.font.SysFont(None, size, bold=bold)


def fonts() -> dict[str, pygame.font.Font]:
    """Return cached font dict, initialising on first call."""
    global _FONT_CACHE
    if _FONT_CACHE is None:
        if not pygame.font.get_init():
            pygame.font.init()
        _FONT_CACHE = {
            "heading": _load_font("dejavusans", 22, bold=True),
            "body":    _load_font("dejavusans", 16),
            "small":   _load_font("dejavusans", 13),
            "band":    _load_font("dejavusans", 12),
        }
    return _FONT_CACHE


# ---------------------------------------------------------------------------
# Drawing helpers
# ---------------------------------------------------------------------------

def draw_text(
    surface: pygame.Surface,
    text: str,
    font: pygame.font.Font,
    color: tuple,
    x: int,
    y: int,
    anchor: str = "topleft",
) -> pygame.Rect:
    """Render *text* onto *surface* at the given anchor position.

    Args:
        anchor: One of the pygame.Rect attributes (e.g. ``'topleft'``,
                ``'center'``, ``'midtop'``, ``'midleft'``).

    Returns:
        The blit rect of the rendered text.
    """
    surf = font.render(text, True, color)
    rect = surf.get_rect()
    setattr(rect, anchor, (x, y))
    surface.blit(surf, rect)
    return rect


def wrap_text(text: str, font: pygame.font.Font, max_width: int) -> list[str]:
    """Split *text* into lines no wider than *max_width* pixels."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and font.size(candidate)[0] > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def draw_button(
    surface: pygame.Surface,
    text: str,
    rect: pygame.Rect,
    color: tuple,
    text_color: tuple,
    font: pygame.font.Font,
    pressed: bool = False,
) -> pygame.Rect:
    """Draw a rounded-rectangle button with centred label text.

    If *pressed* is true, *color* is darkened by 25 % for a press effect.
    """
    if pressed:
        color = tuple(max(0, int(c * 0.75)) for c in color)
    pygame.draw.rect(surface, color, rect, border_radius=8)
    draw_text(surface, text, font, text_color,
              rect.centerx, rect.centery, anchor="center")
    return pygame.Rect(rect)


def draw_inductor(
    surface: pygame.Surface,
    rect: pygame.Rect,
    bands: list[str],
) -> None:
    """Draw an axial inductor with up to 4 colour bands.

    The body spans the middle 70 % of *rect*; wire leads fill the 15 % on
    each side.  Band centres sit at 20 %, 40 %, 60 %, 80 % of the body width.
    Colours without an RGB entry (e.g. ``'None'``) are left undrawn.  With
    no bands a ghost outline is drawn instead.

    Args:
        surface: Target surface to draw onto.
        rect:    Bounding box including the leads.
        bands:   Colour names, first digit first.
    """
    lead_w = int(rect.width * 0.15)
    body_w = int(rect.width * 0.70)
    body_rect = pygame.Rect(rect.x + lead_w, rect.y, body_w, rect.height)
    radius = max(2, rect.height // 3)
    cy = rect.centery

    lead_col = LEAD_COLOR if bands else GHOST_COLOR
    pygame.draw.line(surface, lead_col, (rect.x, cy), (body_rect.x, cy), 2)
    pygame.draw.line(surface, lead_col, (body_rect.right, cy), (rect.right, cy), 2)

    if not bands:
        pygame.draw.rect(surface, GHOST_COLOR, body_rect,
                         width=2, border_radius=radius)
        return

    pygame.draw.rect(surface, INDUCTOR_BODY, body_rect, border_radius=radius)

    band_w = max(2, int(rect.width * 0.06))
    half_band = band_w // 2
    for pct, name in zip(_BAND_CENTRES_PCT, bands):
        rgb = BAND_RGB.get(name)
        if rgb is None:
            continue
        centre_x = int(body_rect.x + pct * body_w)
        bx = max(body_rect.x, min(centre_x - half_band, body_rect.right - band_w))
        band_rect = pygame.Rect(bx, body_rect.y, band_w, body_rect.height).clip(body_rect)
        if band_rect.width > 0 and band_rect.height > 0:
            pygame.draw.rect(surface, rgb, band_rect)

    # Re-draw the body outline to crisp up the rounded corners over bands
    pygame.draw.rect(surface, INDUCTOR_BODY, body_rect,
                     width=2, border_radius=radius)


# ---------------------------------------------------------------------------
# UIManager
# ---------------------------------------------------------------------------

class UIManager:
    """Manages registered screens and dispatches events, updates, and draws.

    Screens are registered by name and activated via switch_to().  Only the
    active screen receives update(), draw() and handle_event() calls.

    Args:
        surface: Optional pygame.Surface for headless / test mode.
    """

    def __init__(self, surface=None) -> None:
        self._test_mode = surface is not None

        if self._test_mode:
            # Headless path - use the supplied mock/real surface as-is.
            pygame.font.init()
            self._surface = surface
            self.screen   = surface
            self.clock    = None
        else:
            pygame.init()
            flags = pygame.FULLSCREEN if config.FULLSCREEN else 0
            self.screen = pygame.display.set_mode((SCREEN_W, SCREEN_H), flags)
            pygame.display.set_caption(config.WINDOW_CAPTION)
            self._surface = self.screen
            self.clock = pygame.time.Clock()
            log.info("Display %dx%d (fullscreen=%s)", SCREEN_W, SCREEN_H, config.FULLSCREEN)

        self.fonts = fonts()

        self._screens: dict[str, object] = {}
        self._active: str | None = None

        # Nav hit-rects are built in draw_nav_bar(); empty until first draw.
        self._nav_rects: list[pygame.Rect] = []

    # ------------------------------------------------------------------
    # Screen registry
    # ------------------------------------------------------------------

    @property
    def current_screen(self) -> str | None:
        """Name of the active screen, or ``None`` before the first switch."""
        return self._active

    def register_screen(self, name: str, screen_obj) -> None:
        """Add a screen to the registry under the given name.

        Args:
            name:       Unique string key (e.g. ``'decoder'``).
            screen_obj: Object implementing update, draw, handle_event and
                        optionally handle_touch / on_enter / on_exit.
        """
        self._screens[name] = screen_obj

    def switch_to(self, name: str) -> None:
        """Activate the named screen.

        Raises:
            KeyError: If *name* has not been registered.
        """
        if name not in self._screens:
            raise KeyError(f"Unknown screen: {name!r}")
        if self._active is not None and self._active != name:
            old = self._screens[self._active]
            if hasattr(old, "on_exit"):
                old.on_exit()
        self._active = name
        new = self._screens[name]
        if hasattr(new, "on_enter"):
            new.on_enter()
        log.debug("Switched to screen %r", name)

    # ------------------------------------------------------------------
    # Main-loop hooks
    # ------------------------------------------------------------------

    def handle_event(self, event) -> None:
        """Forward a single pygame event to the active screen (if any)."""
        if self._active is not None:
            self._screens[self._active].handle_event(event)

    def handle_events(self) -> bool:
        """Drain the pygame event queue, handle nav taps, and dispatch to the active screen.

        Returns:
            ``False`` if the application should quit (QUIT or Escape pressed),
            ``True`` otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                pos = event.pos
                if self._nav_hit(pos) is None and self._active is not None:
                    screen = self._screens[self._active]
                    if hasattr(screen, "handle_touch"):
                        screen.handle_touch(pos[0], pos[1])
                continue
            self.handle_event(event)
        return True

    def update(self, dt: float) -> None:
        """Advance the active screen by *dt* seconds."""
        if self._active is not None:
            self._screens[self._active].update(dt)

    def draw(self) -> None:
        """Render the active screen onto the surface, then overlay the nav bar."""
        if self._active is not None:
            self._screens[self._active].draw(self._surface)

        if not self._test_mode:
            # pygame.draw cannot target a MagicMock surface
            self.draw_nav_bar()
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(config.FPS)

    # ------------------------------------------------------------------
    # Nav bar
    # ------------------------------------------------------------------

    def draw_nav_bar(self) -> None:
        """Draw the bottom nav bar and rebuild ``self._nav_rects``."""
        nav_y = SCREEN_H - NAV_H
        pygame.draw.rect(self._surface, NAV_BG, (0, nav_y, SCREEN_W, NAV_H))
        pygame.draw.line(self._surface, NAV_BORDER,
                         (0, nav_y), (SCREEN_W - 1, nav_y), 1)

        self._nav_rects = []
        for i, (label, key) in enumerate(zip(_NAV_LABELS, _NAV_KEYS)):
            rect = pygame.Rect(i * _NAV_BTN_W, nav_y + 1, _NAV_BTN_W, NAV_H - 1)
            self._nav_rects.append(rect)

            is_active = (key == self._active)
            fill_color = ACCENT if is_active else NAV_BG
            label_color = BG_COLOR if is_active else TEXT_COLOR

            pygame.draw.rect(self._surface, fill_color, rect)
            draw_text(self._surface, label, self.fonts["body"], label_color,
                      rect.centerx, rect.centery, anchor="center")

    def _nav_hit(self, pos) -> str | None:
        """Test *pos* against nav bar rects, switching screen on a hit.

        Returns:
            The screen key string if a nav button was hit, else ``None``.
        """
        for rect, key in zip(self._nav_rects, _NAV_KEYS):
            if rect.collidepoint(pos):
                if key in self._screens:
                    self.switch_to(key)
                return key
        return None
