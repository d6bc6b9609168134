"""Export benchmark reports to JSON, CSV and Markdown.

JSON format: the structured statistics and insights, for programmatic
consumers.

CSV format: one row per label per iteration (long format for
pandas/R).  This is the raw data, every single measurement.

Markdown format: a summary table suitable for reports, README files
and GitHub issues.
"""

from __future__ import annotations

import csv
import io
import json
from typing import Any, Mapping

from crudbench.formatting import format_duration
from crudbench.insights import HEAVY_LABEL, LIGHT_LABEL, Insights
from crudbench.report import Report
from crudbench.stats import SummaryStats, UndefinedRatioError, coefficient_of_variation


# ---------------------------------------------------------------------------
# JSON export
# ---------------------------------------------------------------------------


def export_json(
    stats: Mapping[str, SummaryStats],
    insights: Insights | None = None,
) -> str:
    """Export statistics and insights as a JSON document.

    Label order is preserved.  ``insights`` is ``null`` when none are
    given, and an insight that could not be computed is ``null`` inside it.
    """
    data: dict[str, Any] = {
        "stats": {label: s.to_dict() for label, s in stats.items()},
        "insights": insights.to_dict() if insights is not None else None,
    }
    return json.dumps(data, indent=2)


# ---------------------------------------------------------------------------
# CSV export
# ---------------------------------------------------------------------------


def export_csv(samples: Mapping[str, tuple[float, ...]]) -> str:
    """Export raw samples as CSV (long format).

    Columns: label, iteration (1-based), duration_ms.
    """
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["label", "iteration", "duration_ms"])

    for label, values in samples.items():
        for i, v in enumerate(values, start=1):
            writer.writerow([label, i, f"{v:.3f}"])

    return output.getvalue()


def export_csv_summary(report: Report) -> str:
    """Export summary statistics as CSV, one row per label.

    The ``cv`` column is empty for a label whose average is zero.
    """
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(
        [
            "label",
            "n",
            "average_ms",
            "minimum_ms",
            "maximum_ms",
            "std_dev_ms",
            "cv",
        ]
    )

    for label, s in report.stats.items():
        try:
            cv = f"{coefficient_of_variation(s):.6f}"
        except UndefinedRatioError:
            cv = ""
        writer.writerow(
            [
                label,
                len(report.run.samples[label]),
                f"{s.average:.3f}",
                f"{s.minimum:.3f}",
                f"{s.maximum:.3f}",
                f"{s.std_dev:.3f}",
                cv,
            ]
        )

    return output.getvalue()


# ---------------------------------------------------------------------------
# Markdown export
# ---------------------------------------------------------------------------


def export_markdown(
    report: Report,
    *,
    light: str = LIGHT_LABEL,
    heavy: str = HEAVY_LABEL,
) -> str:
    """Export a report as Markdown."""
    run = report.run
    lines: list[str] = []

    lines.append(f"# {run.name or 'Benchmark Summary'}")
    lines.append("")
    if run.description:
        lines.append(run.description)
        lines.append("")
    lines.append(f"Iterations: {run.iterations} measured + {run.warmup} warmup")
    lines.append("")

    lines.append("## Results")
    lines.append("")
    lines.append("| Label | Average | Min | Max | Std Dev |")
    lines.append("|---|---:|---:|---:|---:|")
    for label, s in report.stats.items():
        lines.append(
            f"| {label} | {format_duration(s.average)} | {format_duration(s.minimum)} | "
            f"{format_duration(s.maximum)} | {format_duration(s.std_dev)} |"
        )
    lines.append("")

    lines.append("## Insights")
    lines.append("")
    ins = report.insights
    bullets = (
        ("ratio", f"{heavy} vs {light}", ins.ratio_text),
        ("heavy_cv", f"{heavy} variability (CV)", ins.heavy_cv_text),
        ("most_consistent", "Most consistent", ins.most_consistent),
    )
    for name, title, text in bullets:
        if getattr(ins, name) is None:
            text = f"not available ({report.insight_errors.get(name, 'unknown reason')})"
        lines.append(f"- {title}: {text}")

    lines.append("")
    lines.append(f"*Generated by crudbench on {run.start_time or 'unknown'}*")

    return "\n".join(lines)
