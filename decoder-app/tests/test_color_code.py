"""
Decoder tests for color_code.py.

Run from the repo root:
    pytest decoder-app/tests/ -v
"""

import dataclasses
import unittest
from unittest.mock import patch

from color_code import (
    COLOR_CODE_CHART,
    TOLERANCE_CHART,
    BandCountError,
    BandDecodeError,
    BandRole,
    ColorBand,
    ComputedValueError,
    InductorValue,
    InvalidDigitError,
    InvalidMultiplierError,
    available_colors,
    decode_bands,
    is_valid_for_role,
    tolerance_colors,
    valid_colors_for_position,
)

_DIGIT_COLORS = [c for c, code in COLOR_CODE_CHART.items() if 0 <= code <= 9]
_UNIT_ORDER = {"µH": 0, "mH": 1, "H": 2}


# ---------------------------------------------------------------------------
# decode_bands - known values
# ---------------------------------------------------------------------------

class TestDecodeKnownValues(unittest.TestCase):

    def test_green_blue_yellow_is_560_mh(self):
        result = decode_bands(["Green", "Blue", "Yellow"])
        self.assertEqual(result.raw_value, 560000)
        self.assertEqual(result.value, 560)
        self.assertEqual(result.unit, "mH")
        self.assertEqual(result.tolerance, "±20%")
        self.assertEqual(result.formatted, "560 mH ±20%")

    def test_brown_black_red_silver_is_1_mh(self):
        result = decode_bands(["Brown", "Black", "Red", "Silver"])
        self.assertEqual(result.raw_value, 1000)
        self.assertEqual(result.value, 1)
        self.assertEqual(result.unit, "mH")
        self.assertEqual(result.tolerance, "±10%")
        self.assertEqual(result.formatted, "1 mH ±10%")

    def test_red_violet_orange_gold_is_27_mh(self):
        result = decode_bands(["Red", "Violet", "Orange", "Gold"])
        self.assertEqual(result.raw_value, 27000)
        self.assertEqual(result.value, 27)
        self.assertEqual(result.unit, "mH")
        self.assertEqual(result.tolerance, "±5%")

    def test_henry_range(self):
        result = decode_bands(["Brown", "Black", "Green", "Brown"])
        self.assertEqual(result.raw_value, 1_000_000)
        self.assertEqual(result.unit, "H")
        self.assertEqual(result.formatted, "1 H ±1%")

    def test_microhenry_range(self):
        result = decode_bands(["Yellow", "Violet", "Black"])
        self.assertEqual(result.value, 47)
        self.assertEqual(result.unit, "µH")

    def test_gold_multiplier_is_exact(self):
        result = decode_bands(["Red", "Violet", "Gold"])
        self.assertEqual(result.raw_value, 2.7)
        self.assertEqual(result.formatted, "2.7 µH ±20%")

    def test_pink_multiplier_rounds_to_two_decimals(self):
        result = decode_bands(["Yellow", "Violet", "Pink"])
        self.assertAlmostEqual(result.raw_value, 0.047)
        self.assertEqual(result.value, 0.05)
        self.assertEqual(result.formatted, "0.05 µH ±20%")

    def test_scaled_value_keeps_fraction(self):
        result = decode_bands(["Brown", "Green", "Red"])
        self.assertEqual(result.value, 1.5)
        self.assertEqual(result.formatted, "1.5 mH ±20%")

    def test_zero_value(self):
        result = decode_bands(["Black", "Black", "Black"])
        self.assertEqual(result.raw_value, 0)
        self.assertEqual(result.unit, "µH")
        self.assertEqual(result.formatted, "0 µH ±20%")


# ---------------------------------------------------------------------------
# decode_bands - normalisation and tolerance band
# ---------------------------------------------------------------------------

class TestDecodeInputHandling(unittest.TestCase):

    def test_names_are_case_insensitive(self):
        result = decode_bands(["green", "BLUE", "yElLoW"])
        self.assertEqual(result.formatted, "560 mH ±20%")

    def test_accepts_enum_members(self):
        result = decode_bands([ColorBand.RED, ColorBand.VIOLET, ColorBand.ORANGE, ColorBand.GOLD])
        self.assertEqual(result.formatted, "27 mH ±5%")

    def test_accepts_tuple(self):
        result = decode_bands(("Brown", "Black", "Red"))
        self.assertEqual(result.raw_value, 1000)

    def test_gray_and_grey_decode_identically(self):
        gray = decode_bands(["Gray", "Red", "Black"])
        grey = decode_bands(["Grey", "Red", "Black"])
        self.assertEqual(gray.raw_value, 82)
        self.assertEqual(gray, grey)

    def test_none_tolerance_band_is_twenty_percent(self):
        result = decode_bands(["Red", "Red", "Red", "None"])
        self.assertEqual(result.tolerance, "±20%")

    def test_unrecognised_tolerance_defaults_to_twenty_percent(self):
        result = decode_bands(["Red", "Red", "Red", "Orange"])
        self.assertEqual(result.tolerance, "±20%")

    def test_every_tolerance_color(self):
        for color in tolerance_colors():
            with self.subTest(color=color):
                result = decode_bands(["Red", "Red", "Red", color])
                self.assertEqual(result.tolerance, TOLERANCE_CHART[color])

    def test_result_is_immutable(self):
        result = decode_bands(["Red", "Red", "Red"])
        self.assertIsInstance(result, InductorValue)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            result.value = 1.0


# ---------------------------------------------------------------------------
# decode_bands - errors
# ---------------------------------------------------------------------------

class TestDecodeErrors(unittest.TestCase):

    def test_wrong_band_counts(self):
        for bands in ([], ["Red"], ["Red", "Red"], ["Red"] * 5):
            with self.subTest(count=len(bands)):
                with self.assertRaises(BandCountError):
                    decode_bands(bands)

    def test_plain_string_is_rejected(self):
        with self.assertRaises(BandCountError):
            decode_bands("RedRedRed")

    def test_non_sequence_is_rejected(self):
        with self.assertRaises(BandCountError):
            decode_bands(None)

    def test_gold_first_digit(self):
        with self.assertRaises(InvalidDigitError) as ctx:
            decode_bands(["Gold", "Black", "Red"])
        self.assertEqual(ctx.exception.position, 0)
        self.assertIn("first", str(ctx.exception))
        self.assertIn("Gold", str(ctx.exception))

    def test_pink_second_digit(self):
        with self.assertRaises(InvalidDigitError) as ctx:
            decode_bands(["Red", "Pink", "Red"])
        self.assertEqual(ctx.exception.position, 1)
        self.assertIn("second", str(ctx.exception))

    def test_unknown_digit_color(self):
        with self.assertRaises(InvalidDigitError):
            decode_bands(["Purple", "Red", "Red"])

    def test_none_is_not_a_digit(self):
        with self.assertRaises(InvalidDigitError):
            decode_bands(["None", "Red", "Red"])

    def test_unknown_multiplier_color(self):
        with self.assertRaises(InvalidMultiplierError) as ctx:
            decode_bands(["Red", "Red", "Magenta"])
        self.assertEqual(ctx.exception.position, 2)
        self.assertIn("Magenta", str(ctx.exception))

    def test_infinite_computed_value(self):
        with patch("color_code._power_of_ten", return_value=float("inf")):
            with self.assertRaises(ComputedValueError) as ctx:
                decode_bands(["Red", "Red", "Red"])
        self.assertIsNone(ctx.exception.position)

    def test_negative_computed_value(self):
        with patch("color_code._power_of_ten", return_value=-1.0):
            with self.assertRaises(ComputedValueError) as ctx:
                decode_bands(["Red", "Red", "Red"])
        self.assertIsNone(ctx.exception.position)

    def test_errors_share_a_value_error_base(self):
        for cls in (BandCountError, InvalidDigitError,
                    InvalidMultiplierError, ComputedValueError):
            self.assertTrue(issubclass(cls, BandDecodeError))
            self.assertTrue(issubclass(cls, ValueError))


# ---------------------------------------------------------------------------
# decode_bands - properties over every colour combination
# ---------------------------------------------------------------------------

class TestDecodeProperties(unittest.TestCase):

    def test_raw_value_matches_formula(self):
        for d1 in _DIGIT_COLORS:
            for d2 in _DIGIT_COLORS:
                for mult, exp in COLOR_CODE_CHART.items():
                    base = COLOR_CODE_CHART[d1] * 10 + COLOR_CODE_CHART[d2]
                    result = decode_bands([d1, d2, mult])
                    if exp >= 0:
                        self.assertEqual(result.raw_value, base * 10 ** exp)
                    else:
                        self.assertAlmostEqual(result.raw_value, base * 10.0 ** exp, places=12)
                    self.assertEqual(result.tolerance, "±20%")

    def test_unit_scaling_is_monotonic(self):
        results = [
            decode_bands([d1, d2, mult])
            for d1 in _DIGIT_COLORS
            for d2 in _DIGIT_COLORS
            for mult in COLOR_CODE_CHART
        ]
        results.sort(key=lambda r: r.raw_value)
        orders = [_UNIT_ORDER[r.unit] for r in results]
        self.assertEqual(orders, sorted(orders))

    def test_scaled_value_is_at_least_one_above_microhenry(self):
        for d1 in _DIGIT_COLORS:
            for mult in COLOR_CODE_CHART:
                result = decode_bands([d1, "Black", mult])
                if result.unit != "µH":
                    self.assertGreaterEqual(result.value, 1)
                if result.unit == "mH":
                    self.assertLess(result.value, 1000)


# ---------------------------------------------------------------------------
# Tables and accessors
# ---------------------------------------------------------------------------

class TestTables(unittest.TestCase):

    def test_tables_are_read_only(self):
        with self.assertRaises(TypeError):
            COLOR_CODE_CHART["Black"] = 5
        with self.assertRaises(TypeError):
            TOLERANCE_CHART["None"] = "±1%"

    def test_gray_and_grey_are_distinct_members(self):
        self.assertIsNot(ColorBand.GRAY, ColorBand.GREY)
        self.assertEqual(len(ColorBand), 15)
        self.assertEqual(COLOR_CODE_CHART[ColorBand.GRAY.value],
                         COLOR_CODE_CHART[ColorBand.GREY.value])

    def test_enum_values_cover_tables(self):
        values = set(ColorBand.values())
        self.assertTrue(set(COLOR_CODE_CHART) <= values)
        self.assertTrue(set(TOLERANCE_CHART) <= values)

    def test_available_colors(self):
        colors = available_colors()
        self.assertEqual(len(colors), 14)
        self.assertEqual(colors[0], "Black")
        self.assertIn("Gray", colors)
        self.assertIn("Grey", colors)
        self.assertNotIn("None", colors)

    def test_tolerance_colors_exclude_none(self):
        colors = tolerance_colors()
        self.assertEqual(set(colors), set(TOLERANCE_CHART) - {"None"})


class TestIsValidForRole(unittest.TestCase):

    def test_pink(self):
        self.assertFalse(is_valid_for_role("Pink", "digit"))
        self.assertTrue(is_valid_for_role("Pink", "multiplier"))
        self.assertFalse(is_valid_for_role("Pink", "tolerance"))

    def test_digits(self):
        self.assertTrue(is_valid_for_role("Black", BandRole.DIGIT))
        self.assertTrue(is_valid_for_role("White", BandRole.DIGIT))
        self.assertFalse(is_valid_for_role("Gold", BandRole.DIGIT))

    def test_tolerance_includes_none(self):
        self.assertTrue(is_valid_for_role("None", "tolerance"))
        self.assertTrue(is_valid_for_role("Gold", "tolerance"))
        self.assertFalse(is_valid_for_role("Orange", "tolerance"))

    def test_case_insensitive(self):
        self.assertTrue(is_valid_for_role("violet", "digit"))
        self.assertTrue(is_valid_for_role(ColorBand.SILVER, "multiplier"))

    def test_unknown_color_or_role(self):
        self.assertFalse(is_valid_for_role("Magenta", "multiplier"))
        self.assertFalse(is_valid_for_role("Red", "resistance"))


class TestValidColorsForPosition(unittest.TestCase):

    def test_digit_positions(self):
        for position in (0, 1):
            colors = valid_colors_for_position(position)
            self.assertEqual(colors, _DIGIT_COLORS)
            self.assertNotIn("Gold", colors)

    def test_multiplier_position(self):
        self.assertEqual(valid_colors_for_position(2), available_colors())

    def test_tolerance_position(self):
        self.assertEqual(valid_colors_for_position(3), tolerance_colors())

    def test_out_of_range_position(self):
        with self.assertRaises(ValueError):
            valid_colors_for_position(4)


if __name__ == "__main__":
    unittest.main()
