"""Terminal display formatting for benchmark reports.

Produces a fixed-width summary table using Unicode box-drawing
characters, plus the insights section and the full text report.
Every function returns a string; printing is left to the CLI.
"""

from __future__ import annotations

from typing import Mapping

from crudbench.formatting import format_duration, format_section_header, truncate
from crudbench.insights import HEAVY_LABEL, LIGHT_LABEL, Insights
from crudbench.report import Report
from crudbench.stats import SummaryStats

LABEL_WIDTH = 15
VALUE_WIDTH = 12

_HEADERS = ("Label", "Average", "Min", "Max", "Std Dev")
_WIDTHS = (LABEL_WIDTH,) + (VALUE_WIDTH,) * 4


# ---------------------------------------------------------------------------
# Table rendering
# ---------------------------------------------------------------------------


def _border(left: str, middle: str, right: str) -> str:
    return left + middle.join("\u2500" * (w + 2) for w in _WIDTHS) + right


def _row(cells: tuple[str, ...]) -> str:
    # Labels are cut to fit; numeric cells widen their row instead of
    # losing digits.
    label, *values = cells
    padded = [f" {truncate(label, LABEL_WIDTH):<{LABEL_WIDTH}} "]
    padded += [f" {v:<{VALUE_WIDTH}} " for v in values]
    return "\u2502" + "\u2502".join(padded) + "\u2502"


def render_table(stats: Mapping[str, SummaryStats]) -> str:
    """Render summary statistics as a box-drawn table.

    One row per label, in the order of *stats*.  The label column is
    15 characters wide and each numeric column 12.  Longer labels are
    truncated with "..."; a numeric cell longer than 12 characters is
    shown in full and pushes the rest of its row to the right.
    """
    lines = [
        _border("\u250c", "\u252c", "\u2510"),
        _row(_HEADERS),
        _border("\u251c", "\u253c", "\u2524"),
    ]
    for label, s in stats.items():
        lines.append(
            _row(
                (
                    label,
                    format_duration(s.average),
                    format_duration(s.minimum),
                    format_duration(s.maximum),
                    format_duration(s.std_dev),
                )
            )
        )
    lines.append(_border("\u2514", "\u2534", "\u2518"))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Insights and full report
# ---------------------------------------------------------------------------


def format_insights(
    insights: Insights,
    *,
    light: str = LIGHT_LABEL,
    heavy: str = HEAVY_LABEL,
    errors: Mapping[str, str] | None = None,
) -> str:
    """Format the insights section.

    An insight that is None is shown as not available, with the reason
    from *errors* (keyed by Insights field name) when there is one.
    """
    errors = errors or {}

    def value(name: str, text: str) -> str:
        if getattr(insights, name) is not None:
            return text
        reason = errors.get(name)
        return f"not available ({reason})" if reason else "not available"

    lines = [
        format_section_header("Insights"),
        f"  {heavy} vs {light}:".ljust(30) + value("ratio", f"{insights.ratio_text} slower"),
        f"  {heavy} variability (CV):".ljust(30) + value("heavy_cv", insights.heavy_cv_text),
        "  Most consistent:".ljust(30)
        + value("most_consistent", insights.most_consistent or ""),
    ]
    return "\n".join(lines)


def format_report(
    report: Report,
    *,
    light: str = LIGHT_LABEL,
    heavy: str = HEAVY_LABEL,
) -> str:
    """Format a complete report for terminal output."""
    run = report.run
    lines: list[str] = []

    title = run.name or "Benchmark Summary"
    lines.append(title)
    lines.append("\u2500" * len(title))
    if run.description:
        lines.append(run.description)
    lines.append(f"Iterations: {run.iterations} measured + {run.warmup} warmup")
    if run.start_time and run.end_time:
        lines.append(f"Time: {run.start_time} \u2192 {run.end_time}")
    lines.append("")

    lines.append(render_table(report.stats))
    lines.append("")

    lines.append(
        format_insights(report.insights, light=light, heavy=heavy, errors=report.insight_errors)
    )

    return "\n".join(lines)
