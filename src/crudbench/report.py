"""Assemble the statistics and insights of one benchmark run.

build_report is the caller that decides what to do with insight
failures: statistics errors propagate, while an insight that cannot
be computed is left out of the report on its own and its reason
recorded.  The other insights are still reported.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, TypeVar

from crudbench.insights import (
    HEAVY_LABEL,
    LIGHT_LABEL,
    TOTAL_LABEL,
    Insights,
    heavy_to_light_ratio,
    heavy_variability,
    most_consistent,
)
from crudbench.logging import get_logger
from crudbench.results import BenchRun
from crudbench.stats import InvalidInputError, SummaryStats, summarize_all

log = get_logger("report")

T = TypeVar("T")


@dataclass
class Report:
    """Statistics and insights derived from one BenchRun."""

    run: BenchRun
    stats: dict[str, SummaryStats] = field(default_factory=dict)
    insights: Insights = field(default_factory=Insights)
    # Insight field name -> why it was omitted.
    insight_errors: dict[str, str] = field(default_factory=dict)


def build_report(
    run: BenchRun,
    *,
    light: str = LIGHT_LABEL,
    heavy: str = HEAVY_LABEL,
    total_label: str = TOTAL_LABEL,
) -> Report:
    """Summarize every label of *run* and derive the insights.

    Each insight is computed independently.  One that raises
    ArithmeticError or InvalidInputError is logged, recorded in
    ``insight_errors`` and left as None in ``insights``.

    Raises:
        InvalidInputError: If a label has no samples or an invalid one.
    """
    stats = summarize_all(run.samples)
    report = Report(run=run, stats=stats)

    def attempt(name: str, compute: Callable[[], T]) -> T | None:
        try:
            return compute()
        except (ArithmeticError, InvalidInputError) as exc:
            log.warning("Insight '%s' omitted: %s", name, exc)
            report.insight_errors[name] = str(exc)
            return None

    report.insights = Insights(
        ratio=attempt("ratio", lambda: heavy_to_light_ratio(stats, light=light, heavy=heavy)),
        heavy_cv=attempt("heavy_cv", lambda: heavy_variability(stats, heavy=heavy)),
        most_consistent=attempt(
            "most_consistent", lambda: most_consistent(stats, exclude=(total_label,))
        ),
    )
    return report
