"""Tests for crudbench.insights — cross-label comparison of tiers."""

from __future__ import annotations

import math
import unittest

from crudbench.insights import (
    NOT_APPLICABLE,
    Insights,
    compute_insights,
    heavy_to_light_ratio,
    heavy_variability,
    most_consistent,
)
from crudbench.stats import (
    InvalidInputError,
    SummaryStats,
    UndefinedRatioError,
    summarize_all,
)


def _stats(average: float, std_dev: float) -> SummaryStats:
    return SummaryStats(
        average=average,
        minimum=max(average - std_dev, 0.0),
        maximum=average + std_dev,
        std_dev=std_dev,
    )


def _tier_stats() -> dict[str, SummaryStats]:
    return summarize_all(
        {
            "Lightweight": [10, 20, 30],
            "Medium": [100, 200, 300],
            "Heavy": [1000, 2000, 3000],
        }
    )


# ---------------------------------------------------------------------------
# Ratio
# ---------------------------------------------------------------------------


class TestHeavyToLightRatio(unittest.TestCase):
    """Tests for heavy_to_light_ratio()."""

    def test_known_ratio(self) -> None:
        self.assertAlmostEqual(heavy_to_light_ratio(_tier_stats()), 100.0)

    def test_custom_labels(self) -> None:
        stats = {"read": _stats(4.0, 1.0), "write": _stats(10.0, 1.0)}
        ratio = heavy_to_light_ratio(stats, light="read", heavy="write")
        self.assertAlmostEqual(ratio, 2.5)

    def test_zero_heavy_average_raises(self) -> None:
        stats = summarize_all({"Lightweight": [10, 20, 30], "Heavy": [0, 0, 0]})
        with self.assertRaises(ArithmeticError):
            heavy_to_light_ratio(stats)

    def test_zero_light_average_raises(self) -> None:
        stats = summarize_all({"Lightweight": [0.0], "Heavy": [5.0]})
        with self.assertRaises(UndefinedRatioError):
            heavy_to_light_ratio(stats)

    def test_zero_average_is_zero_division(self) -> None:
        stats = summarize_all({"Lightweight": [0.0], "Heavy": [5.0]})
        with self.assertRaises(ZeroDivisionError):
            heavy_to_light_ratio(stats)

    def test_missing_label_raises(self) -> None:
        stats = summarize_all({"Lightweight": [10.0]})
        with self.assertRaises(InvalidInputError) as ctx:
            heavy_to_light_ratio(stats)
        self.assertIn("Heavy", str(ctx.exception))


# ---------------------------------------------------------------------------
# Most consistent
# ---------------------------------------------------------------------------


class TestMostConsistent(unittest.TestCase):
    """Tests for most_consistent()."""

    def test_smallest_cv_wins(self) -> None:
        stats = {
            "Lightweight": _stats(100.0, 10.0),  # cv 0.1
            "Medium": _stats(100.0, 5.0),  # cv 0.05
            "Heavy": _stats(100.0, 20.0),  # cv 0.2
        }
        self.assertEqual(most_consistent(stats), "Medium")

    def test_total_excluded(self) -> None:
        stats = {
            "Lightweight": _stats(100.0, 10.0),
            "Heavy": _stats(1000.0, 300.0),
            "Total": _stats(1100.0, 0.0),
        }
        self.assertEqual(most_consistent(stats), "Lightweight")

    def test_tie_goes_to_first(self) -> None:
        stats = {
            "Heavy": _stats(100.0, 10.0),
            "Lightweight": _stats(100.0, 10.0),
        }
        self.assertEqual(most_consistent(stats), "Heavy")

    def test_only_total_is_not_applicable(self) -> None:
        self.assertEqual(most_consistent({"Total": _stats(5.0, 1.0)}), NOT_APPLICABLE)

    def test_empty_is_not_applicable(self) -> None:
        self.assertEqual(most_consistent({}), NOT_APPLICABLE)

    def test_custom_exclude(self) -> None:
        stats = {"a": _stats(10.0, 0.0), "b": _stats(10.0, 1.0)}
        self.assertEqual(most_consistent(stats, exclude=("a",)), "b")

    def test_zero_average_raises(self) -> None:
        stats = {"Lightweight": _stats(10.0, 1.0), "Medium": _stats(0.0, 0.0)}
        with self.assertRaises(ArithmeticError):
            most_consistent(stats)

    def test_zero_average_total_ignored(self) -> None:
        stats = {"Lightweight": _stats(10.0, 1.0), "Total": _stats(0.0, 0.0)}
        self.assertEqual(most_consistent(stats), "Lightweight")


# ---------------------------------------------------------------------------
# compute_insights / Insights
# ---------------------------------------------------------------------------


class TestComputeInsights(unittest.TestCase):
    """Tests for compute_insights() and the Insights record."""

    def test_tier_insights(self) -> None:
        insights = compute_insights(_tier_stats())
        self.assertAlmostEqual(insights.ratio, 100.0)
        self.assertAlmostEqual(insights.heavy_cv, math.sqrt(2.0 / 3.0) / 2.0)
        self.assertIn(insights.most_consistent, ("Lightweight", "Medium", "Heavy"))

    def test_ratio_text(self) -> None:
        insights = compute_insights(_tier_stats())
        self.assertEqual(insights.ratio_text, "100.0x")
        self.assertEqual(insights.heavy_cv_text, "40.8%")

    def test_total_not_most_consistent(self) -> None:
        stats = _tier_stats()
        stats["Total"] = _stats(2220.0, 0.0)
        self.assertNotEqual(compute_insights(stats).most_consistent, "Total")

    def test_custom_total_label(self) -> None:
        stats = {
            "Lightweight": _stats(10.0, 5.0),
            "Heavy": _stats(100.0, 10.0),
            "Sum": _stats(110.0, 0.0),
        }
        insights = compute_insights(stats, total_label="Sum")
        self.assertEqual(insights.most_consistent, "Heavy")

    def test_zero_heavy_raises(self) -> None:
        stats = summarize_all(
            {"Lightweight": [10.0, 20.0], "Medium": [50.0], "Heavy": [0.0, 0.0]}
        )
        with self.assertRaises(ArithmeticError):
            compute_insights(stats)

    def test_missing_light_raises(self) -> None:
        with self.assertRaises(InvalidInputError):
            compute_insights({"Heavy": _stats(10.0, 1.0)})

    def test_to_dict(self) -> None:
        d = Insights(ratio=14.28571428, heavy_cv=0.125, most_consistent="Medium").to_dict()
        self.assertEqual(d, {"ratio": 14.285714, "heavy_cv": 0.125, "most_consistent": "Medium"})

    def test_missing_values(self) -> None:
        insights = Insights(most_consistent="Lightweight")
        self.assertEqual(insights.ratio_text, "N/A")
        self.assertEqual(insights.heavy_cv_text, "N/A")
        self.assertEqual(
            insights.to_dict(),
            {"ratio": None, "heavy_cv": None, "most_consistent": "Lightweight"},
        )


class TestHeavyVariability(unittest.TestCase):
    """Tests for heavy_variability()."""

    def test_known_cv(self) -> None:
        stats = {"Heavy": _stats(200.0, 50.0)}
        self.assertAlmostEqual(heavy_variability(stats), 0.25)

    def test_custom_label(self) -> None:
        stats = {"write": _stats(10.0, 1.0)}
        self.assertAlmostEqual(heavy_variability(stats, heavy="write"), 0.1)

    def test_missing_label(self) -> None:
        with self.assertRaises(InvalidInputError):
            heavy_variability({"Lightweight": _stats(10.0, 1.0)})

    def test_zero_average(self) -> None:
        with self.assertRaises(ArithmeticError):
            heavy_variability({"Heavy": _stats(0.0, 0.0)})


if __name__ == "__main__":
    unittest.main()
