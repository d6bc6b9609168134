"""Sample collection: run labeled workloads and time them.

Each iteration runs every workload once, sequentially and in insertion
order (Lightweight, Medium, Heavy in the stock profile).  A workload is
any zero-argument callable.  If it returns a number, that is taken as
its own measured duration in milliseconds; otherwise the collector
times the call with its clock.  Command workloads are wrapped with
command_workload, which returns the wall time measured by run_timed.
The per-iteration total is the sum of that iteration's workload
durations.

Warm-up iterations run the workloads but are not recorded.  A workload
that raises aborts the whole run: there are no retries.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from crudbench.config import WorkloadDef
from crudbench.insights import TOTAL_LABEL
from crudbench.logging import get_logger
from crudbench.results import BenchRun
from crudbench.timing import run_timed

log = get_logger("collector")

Workload = Callable[[], Any]  # may return its own duration in ms


class WorkloadFailedError(RuntimeError):
    """A workload command exited with an error or timed out."""


# ---------------------------------------------------------------------------
# Progress callback
# ---------------------------------------------------------------------------


@dataclass
class CollectorProgress:
    """Progress info passed to the callback after each workload run."""

    phase: str  # "warmup" or "measure"
    label: str
    iteration: int  # 1-based, counting warm-up iterations
    total_iterations: int
    duration_ms: float


ProgressCallback = Callable[[CollectorProgress], None]


def _default_progress(progress: CollectorProgress) -> None:
    """Default progress callback: log one line per workload run."""
    marker = "W" if progress.phase == "warmup" else "M"
    log.info(
        "  %s%d/%d %-15s %10.1fms",
        marker,
        progress.iteration,
        progress.total_iterations,
        progress.label,
        progress.duration_ms,
    )


# ---------------------------------------------------------------------------
# SampleCollector
# ---------------------------------------------------------------------------


class SampleCollector:
    """Runs labeled workloads repeatedly and collects their durations.

    Usage::

        collector = SampleCollector(
            {"Lightweight": light, "Medium": medium, "Heavy": heavy},
            iterations=5,
        )
        run = collector.collect(name="Postgres CRUD tiers")
        run.samples["Heavy"]  # tuple of 5 durations in ms
    """

    def __init__(
        self,
        workloads: Mapping[str, Workload],
        *,
        iterations: int,
        warmup: int = 0,
        total_label: str | None = TOTAL_LABEL,
        progress_callback: ProgressCallback | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        if not workloads:
            raise ValueError("At least one workload is required.")
        if iterations < 1:
            raise ValueError(f"iterations must be at least 1 (got {iterations})")
        if warmup < 0:
            raise ValueError(f"warmup cannot be negative (got {warmup})")
        if total_label is not None and total_label in workloads:
            raise ValueError(f"Workload label '{total_label}' is reserved for the total.")

        self.workloads = dict(workloads)
        self.iterations = iterations
        self.warmup = warmup
        self.total_label = total_label
        self.progress = progress_callback or _default_progress
        self._clock = clock

    def _time_workload(self, workload: Workload) -> float:
        start = self._clock()
        measured = workload()
        elapsed_ms = (self._clock() - start) * 1000
        if isinstance(measured, (int, float)) and not isinstance(measured, bool):
            return float(measured)
        return elapsed_ms

    def collect(self, *, name: str = "", description: str = "") -> BenchRun:
        """Run every iteration and return the collected samples.

        Raises:
            Exception: Whatever a workload raises propagates unchanged.
        """
        collected: dict[str, list[float]] = {label: [] for label in self.workloads}
        totals: list[float] = []
        total_iter = self.warmup + self.iterations

        start_time = time.strftime("%Y-%m-%dT%H:%M:%S")
        log.info(
            "Running %d workload(s): %d measured + %d warmup iteration(s)",
            len(self.workloads),
            self.iterations,
            self.warmup,
        )

        for iter_idx in range(total_iter):
            is_warmup = iter_idx < self.warmup
            iteration_total = 0.0

            for label, workload in self.workloads.items():
                duration_ms = self._time_workload(workload)
                iteration_total += duration_ms
                if not is_warmup:
                    collected[label].append(duration_ms)

                self.progress(
                    CollectorProgress(
                        phase="warmup" if is_warmup else "measure",
                        label=label,
                        iteration=iter_idx + 1,
                        total_iterations=total_iter,
                        duration_ms=duration_ms,
                    )
                )

            if not is_warmup:
                totals.append(iteration_total)

        samples = {label: tuple(values) for label, values in collected.items()}
        if self.total_label is not None:
            samples[self.total_label] = tuple(totals)

        return BenchRun(
            name=name,
            description=description,
            iterations=self.iterations,
            warmup=self.warmup,
            samples=samples,
            start_time=start_time,
            end_time=time.strftime("%Y-%m-%dT%H:%M:%S"),
        )


# ---------------------------------------------------------------------------
# Command workloads
# ---------------------------------------------------------------------------


def command_workload(defn: WorkloadDef, *, timeout: float = 600) -> Workload:
    """Wrap a command workload definition as a callable.

    The callable returns the command's wall time in milliseconds, as
    measured by run_timed.  It raises WorkloadFailedError if the command
    exits with a non-zero status or runs past *timeout* seconds.
    """

    def _run() -> float:
        result = run_timed(defn.command, cwd=defn.cwd, env=defn.env, timeout=timeout)
        if result.timed_out:
            raise WorkloadFailedError(f"Workload '{defn.name}' timed out after {timeout}s")
        if result.exit_code != 0:
            detail = result.stderr.strip().splitlines()[-1:] or [""]
            raise WorkloadFailedError(
                f"Workload '{defn.name}' exited with status {result.exit_code}: {detail[0]}"
            )
        log.debug("Workload '%s' output:\n%s", defn.name, result.stdout)
        return result.wall_time_ms

    return _run
