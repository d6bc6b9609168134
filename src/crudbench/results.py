"""Benchmark run record and serialization.

A BenchRun holds the raw samples of one benchmark execution: for every
label, the measured durations in milliseconds in iteration order.  It
is saved as a single JSON document::

    {
      "name": "Postgres CRUD tiers",
      "iterations": 5,
      "warmup": 1,
      "samples": {"Lightweight": [12.1, ...], "Medium": [...], ...},
      ...
    }

Label order in ``samples`` is the display order.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from crudbench.logging import get_logger

log = get_logger("results")


@dataclass
class BenchRun:
    """Raw samples and metadata for one benchmark execution."""

    name: str = ""
    description: str = ""
    iterations: int = 0
    warmup: int = 0
    samples: dict[str, tuple[float, ...]] = field(default_factory=dict)
    start_time: str = ""
    end_time: str = ""

    @property
    def labels(self) -> list[str]:
        return list(self.samples)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "name": self.name,
            "description": self.description,
            "iterations": self.iterations,
            "warmup": self.warmup,
            "samples": {
                label: list(values) for label, values in self.samples.items()
            },
            "start_time": self.start_time,
            "end_time": self.end_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BenchRun:
        """Deserialize from a dict.

        Raises:
            ValueError: If ``samples`` is missing or malformed.
        """
        raw_samples = data.get("samples")
        if not isinstance(raw_samples, dict):
            raise ValueError("Run document must contain a 'samples' mapping")

        samples: dict[str, tuple[float, ...]] = {}
        for label, values in raw_samples.items():
            if not isinstance(values, list):
                raise ValueError(
                    f"Samples for '{label}' must be a list, got {type(values).__name__}"
                )
            try:
                samples[label] = tuple(float(v) for v in values)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Samples for '{label}' must be numbers: {exc}") from exc

        return cls(
            name=data.get("name", ""),
            description=data.get("description", ""),
            iterations=data.get("iterations", 0),
            warmup=data.get("warmup", 0),
            samples=samples,
            start_time=data.get("start_time", ""),
            end_time=data.get("end_time", ""),
        )


# ---------------------------------------------------------------------------
# I/O functions
# ---------------------------------------------------------------------------


def save_run(path: Path, run: BenchRun) -> None:
    """Write *run* to *path* as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(run.to_dict(), indent=2) + "\n")
    log.info("Wrote %s", path)


def load_run(path: Path) -> BenchRun:
    """Load a benchmark run saved by save_run.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file is not a valid run document.
    """
    if not path.exists():
        raise FileNotFoundError(f"Run file not found: {path}")

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Run document must be a JSON object, got {type(data).__name__}")

    return BenchRun.from_dict(data)
