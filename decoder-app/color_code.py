"""
Inductor Station - Colour Band to Inductance Decoding

Decodes 3- and 4-band inductor colour codes into an inductance value.
The look-up tables below are the single source of truth for every screen,
so callers never keep their own colour charts.

Exports:
    decode_bands               – band list → InductorValue
    available_colors           – every colour usable on a code band
    tolerance_colors           – colours with a tolerance meaning
    is_valid_for_role          – colour / role legality check
    valid_colors_for_position  – selectable colours for band 0..3
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ColorBand(str, Enum):
    """Every colour name that may appear on an inductor band."""
    BLACK = "Black"
    BROWN = "Brown"
    RED = "Red"
    ORANGE = "Orange"
    YELLOW = "Yellow"
    GREEN = "Green"
    BLUE = "Blue"
    VIOLET = "Violet"
    GRAY = "Gray"
    GREY = "Grey"      # alternative spelling, same code as GRAY
    WHITE = "White"
    GOLD = "Gold"
    SILVER = "Silver"
    PINK = "Pink"
    NONE = "None"      # no tolerance band

    @classmethod
    def values(cls) -> list[str]:
        """Returns the string values of all enum members."""
        return [item.value for item in cls]


class BandRole(str, Enum):
    """What a band position encodes."""
    DIGIT = "digit"
    MULTIPLIER = "multiplier"
    TOLERANCE = "tolerance"


# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

# Colour name -> digit (0-9) or multiplier exponent (negative = fractional).
COLOR_CODE_CHART = MappingProxyType({
    "Black":  0,
    "Brown":  1,
    "Red":    2,
    "Orange": 3,
    "Yellow": 4,
    "Green":  5,
    "Blue":   6,
    "Violet": 7,
    "Gray":   8,
    "Grey":   8,
    "White":  9,
    "Gold":   -1,   # x0.1
    "Silver": -2,   # x0.01
    "Pink":   -3,   # x0.001
})

# Tolerance (4th band) colour name -> display string.
TOLERANCE_CHART = MappingProxyType({
    "Brown":  "±1%",
    "Red":    "±2%",
    "Green":  "±0.5%",
    "Blue":   "±0.25%",
    "Violet": "±0.1%",
    "Gray":   "±0.05%",
    "Gold":   "±5%",
    "Silver": "±10%",
    "None":   "±20%",
})

DEFAULT_TOLERANCE = TOLERANCE_CHART["None"]

# Colour name -> RGB used when drawing a band.
BAND_RGB = MappingProxyType({
    "Black":  (15,  23,  42 ),
    "Brown":  (146, 64,  14 ),
    "Red":    (220, 38,  38 ),
    "Orange": (249, 115, 22 ),
    "Yellow": (250, 204, 21 ),
    "Green":  (22,  163, 74 ),
    "Blue":   (37,  99,  235),
    "Violet": (147, 51,  234),
    "Gray":   (107, 114, 128),
    "Grey":   (107, 114, 128),
    "White":  (255, 255, 255),
    "Gold":   (253, 224, 71 ),
    "Silver": (209, 213, 219),
    "Pink":   (244, 114, 182),
})

BAND_LABELS = ("1st Digit", "2nd Digit", "Multiplier", "Tolerance")

UNIT_MICRO = "µH"
UNIT_MILLI = "mH"
UNIT_HENRY = "H"

# (threshold in µH, unit); first match wins.
_UNIT_STEPS = (
    (1_000_000, UNIT_HENRY),
    (1_000,     UNIT_MILLI),
)


# ---------------------------------------------------------------------------
# Errors and result type
# ---------------------------------------------------------------------------

class BandDecodeError(ValueError):
    """Base class for colour-band decoding failures.

    Attributes:
        position: 0-based index of the offending band, or ``None`` when the
                  failure is not tied to a single band.
    """

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class BandCountError(BandDecodeError):
    """The band list is not a sequence of 3 or 4 colours."""


class InvalidDigitError(BandDecodeError):
    """A significant-digit band holds a non-digit colour."""


class InvalidMultiplierError(BandDecodeError):
    """The multiplier band holds an unknown colour."""


class ComputedValueError(BandDecodeError):
    """The computed inductance is negative or not finite."""


@dataclass(frozen=True)
class InductorValue:
    """Decoded inductance.

    ``value`` is scaled into ``unit`` and rounded to 2 decimals;
    ``raw_value`` is the exact result in µH.
    """
    value: float
    unit: str
    tolerance: str
    formatted: str
    raw_value: float


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _normalize(color) -> str:
    """Return *color* as 'Capitalised' text ('gREY' -> 'Grey')."""
    if isinstance(color, Enum):
        color = color.value
    return str(color).capitalize()


def _power_of_ten(base: int, exponent: int) -> float:
    """Return base × 10**exponent without the 0.1-style float error."""
    if exponent >= 0:
        return float(base * 10 ** exponent)
    return base / 10 ** -exponent


def _scale_unit(micro_h: float) -> tuple[float, str]:
    """Pick the largest unit that keeps the value >= 1."""
    for threshold, unit in _UNIT_STEPS:
        if micro_h >= threshold:
            return micro_h / threshold, unit
    return micro_h, UNIT_MICRO


def _round2(value: float) -> float:
    """Round half-up to 2 decimal places."""
    return math.floor(value * 100 + 0.5) / 100


def _format_value(value: float) -> str:
    """Format *value* with at most 2 decimals, stripping trailing zeros."""
    formatted = f"{value:.2f}"
    return formatted.rstrip("0").rstrip(".")


def _text(color) -> str:
    return color.value if isinstance(color, Enum) else str(color)


def _digit(bands: Sequence, names: list[str], position: int, ordinal: str) -> int:
    code = COLOR_CODE_CHART.get(names[position])
    if code is None or not 0 <= code <= 9:
        raise InvalidDigitError(
            f"Invalid {ordinal} digit color band: {_text(bands[position])}. "
            "Must be a standard digit color (Black-White).",
            position,
        )
    return code


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def decode_bands(bands: Sequence) -> InductorValue:
    """Decode a 3- or 4-band inductor colour code.

    Band layout:
        [0] First significant digit
        [1] Second significant digit
        [2] Multiplier  (power of ten; Gold/Silver/Pink are fractional)
        [3] Tolerance   (optional; absent or 'None' = ±20%)

    Colour names are case-insensitive.  The result is auto-scaled to
    µH / mH / H.

    Raises:
        BandCountError:         not a sequence of 3 or 4 bands.
        InvalidDigitError:      band 0 or 1 is not a digit colour.
        InvalidMultiplierError: band 2 is not a known colour.
        ComputedValueError:     result is negative or not finite.
    """
    if isinstance(bands, (str, bytes)) or not isinstance(bands, Sequence):
        raise BandCountError("Input must be a sequence of color bands.")
    if not 3 <= len(bands) <= 4:
        raise BandCountError(
            f"Invalid number of color bands ({len(bands)}). Must be 3 or 4 bands."
        )

    names = [_normalize(band) for band in bands]

    first = _digit(bands, names, 0, "first")
    second = _digit(bands, names, 1, "second")

    exponent = COLOR_CODE_CHART.get(names[2])
    if exponent is None:
        raise InvalidMultiplierError(
            f"Invalid multiplier color band: {_text(bands[2])}.", 2
        )

    if len(names) == 4 and names[3] != ColorBand.NONE.value:
        tolerance = TOLERANCE_CHART.get(names[3], DEFAULT_TOLERANCE)
    else:
        tolerance = DEFAULT_TOLERANCE

    raw = _power_of_ten(first * 10 + second, exponent)
    if raw < 0 or not math.isfinite(raw):
        raise ComputedValueError("Calculated inductance value is invalid.")

    scaled, unit = _scale_unit(raw)
    value = _round2(scaled)
    result = InductorValue(
        value=value,
        unit=unit,
        tolerance=tolerance,
        formatted=f"{_format_value(value)} {unit} {tolerance}",
        raw_value=raw,
    )
    log.debug("Decoded %s -> %s", "-".join(names), result.formatted)
    return result


def available_colors() -> list[str]:
    """Return every colour usable on a digit or multiplier band, in chart order."""
    return list(COLOR_CODE_CHART)


def tolerance_colors() -> list[str]:
    """Return the colours with a tolerance meaning (excluding 'None')."""
    return [name for name in TOLERANCE_CHART if name != ColorBand.NONE.value]


def is_valid_for_role(color, role) -> bool:
    """Return True if *color* may be used on a band with the given *role*.

    *role* is a :class:`BandRole` or its string value; unknown roles are
    never valid.
    """
    try:
        role = BandRole(role)
    except ValueError:
        return False

    name = _normalize(color)
    if role is BandRole.DIGIT:
        code = COLOR_CODE_CHART.get(name)
        return code is not None and 0 <= code <= 9
    if role is BandRole.MULTIPLIER:
        return name in COLOR_CODE_CHART
    return name in TOLERANCE_CHART


def valid_colors_for_position(position: int) -> list[str]:
    """Return the colours selectable for band *position* (0-3).

    Raises:
        ValueError: *position* is outside 0-3.
    """
    if position in (0, 1):
        return [c for c in available_colors() if is_valid_for_role(c, BandRole.DIGIT)]
    if position == 2:
        return [c for c in available_colors() if is_valid_for_role(c, BandRole.MULTIPLIER)]
    if position == 3:
        return tolerance_colors()
    raise ValueError(f"Band position must be 0-3, got {position!r}")


# ---------------------------------------------------------------------------
# Self-test (run with: python color_code.py)
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    cases = [
        (["Red", "Violet", "Orange", "Gold"],  "27 mH ±5%"),
        (["Brown", "Black", "Red", "Silver"],  "1 mH ±10%"),
        (["Green", "Blue", "Yellow"],          "560 mH ±20%"),
        (["Yellow", "Violet", "Gold"],         "4.7 µH ±20%"),
        (["Brown", "Black", "Green", "Brown"], "1 H ±1%"),
    ]

    all_pass = True
    for bands, expected in cases:
        result = decode_bands(bands)
        status = "PASS" if result.formatted == expected else "FAIL"
        if status == "FAIL":
            all_pass = False
        print(f"{status}  {'-'.join(bands):<28}  got={result.formatted!r:<18}  expected={expected!r}")

    print()
    print("All tests passed." if all_pass else "SOME TESTS FAILED.")
