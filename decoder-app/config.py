"""
Inductor Station - App Configuration
"""

import logging

# Display
SCREEN_W = 480
SCREEN_H = 320
FULLSCREEN = False          # True on the kiosk touchscreen
FPS = 30
WINDOW_CAPTION = "Inductor Station"

# Bands shown when the decoder screen first opens
DEFAULT_BANDS = ["Red", "Violet", "Orange", "Gold"]

# Quick test cases: (bands, expected description)
PRESETS = [
    (["Red", "Violet", "Orange", "Gold"], "27 mH ±5%"),
    (["Brown", "Black", "Red", "Silver"], "1 mH ±10%"),
    (["Green", "Blue", "Yellow"],         "560 mH ±20%"),
]

LOG_LEVEL = logging.INFO
