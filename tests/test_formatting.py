"""Tests for crudbench.formatting — shared text formatting helpers."""

from __future__ import annotations

import unittest

from crudbench.formatting import (
    format_duration,
    format_percent,
    format_ratio,
    format_section_header,
    truncate,
)


class TestFormatDuration(unittest.TestCase):
    def test_just_under_one_second(self) -> None:
        self.assertEqual(format_duration(999), "999ms")

    def test_exactly_one_second(self) -> None:
        self.assertEqual(format_duration(1000), "1.00s")

    def test_one_and_a_half_seconds(self) -> None:
        self.assertEqual(format_duration(1500), "1.50s")

    def test_milliseconds_round(self) -> None:
        self.assertEqual(format_duration(842.7), "843ms")

    def test_seconds_two_decimals(self) -> None:
        self.assertEqual(format_duration(1234.5), "1.23s")

    def test_zero(self) -> None:
        self.assertEqual(format_duration(0), "0ms")

    def test_large_value(self) -> None:
        self.assertEqual(format_duration(125_000), "125.00s")

    def test_ms_tie_rounds_to_even(self) -> None:
        """Exact halves go to the even digit."""
        self.assertEqual(format_duration(2.5), "2ms")
        self.assertEqual(format_duration(3.5), "4ms")
        self.assertEqual(format_duration(0.5), "0ms")

    def test_seconds_tie_rounds_to_even(self) -> None:
        """1.125 and 1.375 are exact binary values, so they are true ties."""
        self.assertEqual(format_duration(1125), "1.12s")
        self.assertEqual(format_duration(1375), "1.38s")

    def test_unit_chosen_before_rounding(self) -> None:
        self.assertEqual(format_duration(999.5), "1000ms")
        self.assertEqual(format_duration(999.4), "999ms")

    def test_seconds_round_up(self) -> None:
        self.assertEqual(format_duration(1999.9), "2.00s")


class TestFormatRatio(unittest.TestCase):
    def test_one_decimal(self) -> None:
        self.assertEqual(format_ratio(100.0), "100.0x")

    def test_rounding(self) -> None:
        self.assertEqual(format_ratio(14.26), "14.3x")


class TestFormatPercent(unittest.TestCase):
    def test_fraction(self) -> None:
        self.assertEqual(format_percent(0.125), "12.5%")

    def test_zero(self) -> None:
        self.assertEqual(format_percent(0.0), "0.0%")

    def test_precision(self) -> None:
        self.assertEqual(format_percent(0.123456, precision=2), "12.35%")


class TestFormatSectionHeader(unittest.TestCase):
    def test_default_width(self) -> None:
        header = format_section_header("Insights")
        self.assertEqual(len(header), 60)
        self.assertTrue(header.startswith("─── Insights "))

    def test_long_title(self) -> None:
        header = format_section_header("x" * 100, width=20)
        self.assertIn("x" * 100, header)


class TestTruncate(unittest.TestCase):
    def test_short_text(self) -> None:
        self.assertEqual(truncate("abc", 10), "abc")

    def test_exact_length(self) -> None:
        self.assertEqual(truncate("abcde", 5), "abcde")

    def test_truncated(self) -> None:
        self.assertEqual(truncate("abcdefghij", 7), "abcd...")

    def test_tiny_limit(self) -> None:
        self.assertEqual(truncate("abcdef", 2), "..")


if __name__ == "__main__":
    unittest.main()
