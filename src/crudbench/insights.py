"""Cross-label insights for a CRUD benchmark.

Given summary statistics for the Lightweight, Medium and Heavy tiers
(and optionally Total), derives:

- the Heavy/Lightweight ratio of averages, shown as a multiplier;
- the coefficient of variation of the Heavy tier;
- the most consistent label, i.e. the one with the smallest
  coefficient of variation.

Any ratio whose divisor is a zero average raises UndefinedRatioError
rather than producing ``inf`` or ``nan``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from crudbench.formatting import format_percent, format_ratio
from crudbench.stats import (
    InvalidInputError,
    SummaryStats,
    UndefinedRatioError,
    coefficient_of_variation,
)

LIGHT_LABEL = "Lightweight"
HEAVY_LABEL = "Heavy"
TOTAL_LABEL = "Total"

NOT_APPLICABLE = "N/A"


@dataclass(frozen=True)
class Insights:
    """Derived comparison between benchmark tiers."""

    # None marks an insight that could not be computed.
    ratio: float | None = None  # heavy average / light average
    heavy_cv: float | None = None  # heavy std_dev / heavy average, as a fraction
    most_consistent: str | None = None  # label, or NOT_APPLICABLE

    @property
    def ratio_text(self) -> str:
        return format_ratio(self.ratio) if self.ratio is not None else NOT_APPLICABLE

    @property
    def heavy_cv_text(self) -> str:
        return format_percent(self.heavy_cv) if self.heavy_cv is not None else NOT_APPLICABLE

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict; missing insights are None."""
        return {
            "ratio": round(self.ratio, 6) if self.ratio is not None else None,
            "heavy_cv": round(self.heavy_cv, 6) if self.heavy_cv is not None else None,
            "most_consistent": self.most_consistent,
        }


def _require(stats: Mapping[str, SummaryStats], label: str) -> SummaryStats:
    try:
        return stats[label]
    except KeyError:
        raise InvalidInputError(f"no statistics for label '{label}'") from None


def heavy_to_light_ratio(
    stats: Mapping[str, SummaryStats],
    *,
    light: str = LIGHT_LABEL,
    heavy: str = HEAVY_LABEL,
) -> float:
    """Return ``heavy.average / light.average``.

    Both averages must be non-zero: a zero light average has no ratio,
    and a zero heavy average means the heavy tier was degenerate, so the
    multiplier would be meaningless.

    Raises:
        InvalidInputError: If either label is missing.
        UndefinedRatioError: If either average is exactly zero.
    """
    light_stats = _require(stats, light)
    heavy_stats = _require(stats, heavy)
    if light_stats.average == 0:
        raise UndefinedRatioError(f"'{light}' average is zero; {heavy}/{light} ratio is undefined")
    if heavy_stats.average == 0:
        raise UndefinedRatioError(f"'{heavy}' average is zero; {heavy}/{light} ratio is undefined")
    return heavy_stats.average / light_stats.average


def heavy_variability(stats: Mapping[str, SummaryStats], *, heavy: str = HEAVY_LABEL) -> float:
    """Return the coefficient of variation of the *heavy* label.

    Raises:
        InvalidInputError: If the label is missing.
        UndefinedRatioError: If its average is zero.
    """
    return coefficient_of_variation(_require(stats, heavy))


def most_consistent(
    stats: Mapping[str, SummaryStats],
    *,
    exclude: Iterable[str] = (TOTAL_LABEL,),
) -> str:
    """Return the label with the smallest coefficient of variation.

    Labels in *exclude* are skipped.  Ties go to the label that comes
    first in *stats*.  Returns NOT_APPLICABLE if no label is left.

    Raises:
        UndefinedRatioError: If a compared label has a zero average.
    """
    excluded = set(exclude)
    best_label: str | None = None
    best_cv = 0.0
    for label, s in stats.items():
        if label in excluded:
            continue
        cv = coefficient_of_variation(s)
        if best_label is None or cv < best_cv:
            best_label = label
            best_cv = cv
    return best_label if best_label is not None else NOT_APPLICABLE


def compute_insights(
    stats: Mapping[str, SummaryStats],
    *,
    light: str = LIGHT_LABEL,
    heavy: str = HEAVY_LABEL,
    total_label: str = TOTAL_LABEL,
) -> Insights:
    """Compute every insight for one report.

    Raises:
        InvalidInputError: If the light or heavy label is missing.
        UndefinedRatioError: If any divisor average is zero.
    """
    ratio = heavy_to_light_ratio(stats, light=light, heavy=heavy)
    return Insights(
        ratio=ratio,
        heavy_cv=heavy_variability(stats, heavy=heavy),
        most_consistent=most_consistent(stats, exclude=(total_label,)),
    )
