"""
Inductor Station - Main Entry Point

Builds the Pygame UI and runs the main event loop.

Screens
-------
  decoder  ScreenDecoder  pick bands, decode the inductance
  presets  ScreenPresets  quick test cases; choosing one loads the decoder
  chart    ScreenChart    colour reference table

All screens receive the UIManager so they render onto its surface.
"""

import logging
import sys
import time

import pygame

import config
from screen_chart import ScreenChart
from screen_decoder import ScreenDecoder
from screen_presets import ScreenPresets
from ui_manager import UIManager

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(levelname)s %(name)s: %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)


def build_screens(mgr: UIManager) -> ScreenDecoder:
    """Create and register every screen on *mgr*; return the decoder screen."""
    decoder = ScreenDecoder(mgr)

    def _load_preset(bands: list[str]) -> None:
        decoder.load_bands(bands)
        mgr.switch_to("decoder")

    mgr.register_screen("decoder", decoder)
    mgr.register_screen("presets", ScreenPresets(mgr, on_select=_load_preset))
    mgr.register_screen("chart",   ScreenChart(mgr))
    mgr.switch_to("decoder")
    return decoder


def main() -> None:
    mgr = UIManager()
    build_screens(mgr)
    log.info("Inductor Station started")

    last_t = time.monotonic()
    try:
        running = True
        while running:
            now = time.monotonic()
            dt  = now - last_t
            last_t = now

            running = mgr.handle_events()
            mgr.update(dt)
            mgr.draw()
    finally:
        pygame.quit()
        log.info("Pygame quit")


if __name__ == "__main__":
    main()
