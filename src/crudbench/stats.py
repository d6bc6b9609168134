"""Summary statistics for benchmark latency samples.

Reduces a sequence of durations (milliseconds) to its mean, minimum,
maximum and population standard deviation.  Uses the ``statistics``
module, whose ``mean`` and ``pstdev`` sum exactly: the
result depends only on the multiset of values.
"""

from __future__ import annotations

import math
import statistics
from dataclasses import dataclass
from typing import Mapping, Sequence


class InvalidInputError(ValueError):
    """Statistics were requested over data that is not a Duration sequence."""


class UndefinedRatioError(ZeroDivisionError):
    """A ratio would divide by a zero average."""


# ---------------------------------------------------------------------------
# SummaryStats
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SummaryStats:
    """Summary statistics for one label, all in milliseconds."""

    average: float
    minimum: float
    maximum: float
    std_dev: float  # population standard deviation (divide by N)

    def to_dict(self) -> dict[str, float]:
        """Serialize to a dict with rounded values."""
        return {
            "average": round(self.average, 6),
            "minimum": round(self.minimum, 6),
            "maximum": round(self.maximum, 6),
            "std_dev": round(self.std_dev, 6),
        }


def summarize(values: Sequence[float]) -> SummaryStats:
    """Compute summary statistics for a non-empty sequence of durations.

    Args:
        values: Durations in milliseconds.  Every value must be a
            non-negative finite number.

    Returns:
        SummaryStats with the mean, extremes and population standard
        deviation of *values*.

    Raises:
        InvalidInputError: If *values* is empty or holds a negative,
            NaN or infinite value.
    """
    if len(values) == 0:
        raise InvalidInputError("cannot summarize an empty duration sequence")

    for v in values:
        if not math.isfinite(v) or v < 0:
            raise InvalidInputError(f"not a valid duration: {v!r}")

    floats = [float(v) for v in values]
    return SummaryStats(
        average=statistics.mean(floats),
        minimum=min(floats),
        maximum=max(floats),
        std_dev=statistics.pstdev(floats),
    )


def summarize_all(samples: Mapping[str, Sequence[float]]) -> dict[str, SummaryStats]:
    """Summarize every label of *samples*, preserving label order.

    Raises:
        InvalidInputError: If any label's sequence is invalid.  The
            message names the label.
    """
    result: dict[str, SummaryStats] = {}
    for label, values in samples.items():
        try:
            result[label] = summarize(values)
        except InvalidInputError as exc:
            raise InvalidInputError(f"{label}: {exc}") from exc
    return result


def coefficient_of_variation(stats: SummaryStats) -> float:
    """Return ``std_dev / average`` as a fraction.

    Raises:
        UndefinedRatioError: If the average is exactly zero.
    """
    if stats.average == 0:
        raise UndefinedRatioError("coefficient of variation is undefined for a zero average")
    return stats.std_dev / stats.average
