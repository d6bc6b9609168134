"""Timed execution of workload commands.

Runs a workload command (for example a script that performs the
Lightweight CRUD sequence against the database) in a subprocess and
measures its wall-clock time in milliseconds.
"""

from __future__ import annotations

import os
import signal
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path

from crudbench.logging import get_logger

log = get_logger("timing")


@dataclass
class TimedResult:
    """Result of a timed subprocess execution."""

    wall_time_ms: float
    exit_code: int
    stdout: str
    stderr: str
    timed_out: bool = False


def run_timed(
    command: str | list[str],
    *,
    cwd: str | Path | None = None,
    env: dict[str, str] | None = None,
    timeout: float = 600,
) -> TimedResult:
    """Execute a command and measure its wall-clock time.

    Args:
        command: Shell command string or argument list.
        cwd: Working directory for the subprocess.
        env: Extra environment variables, layered over ``os.environ``.
        timeout: Maximum execution time in seconds.

    Returns:
        TimedResult with the elapsed time and process output.  On
        timeout the whole process group is killed and ``exit_code``
        is -1.
    """
    run_env = dict(os.environ)
    if env:
        run_env.update(env)

    log.debug("Running: %s", command)
    wall_start = time.perf_counter()

    timed_out = False
    proc = subprocess.Popen(
        command,
        shell=isinstance(command, str),
        cwd=str(cwd) if cwd else None,
        env=run_env,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        start_new_session=True,
    )
    try:
        stdout, stderr = proc.communicate(timeout=timeout)
        exit_code = proc.returncode
    except subprocess.TimeoutExpired:
        timed_out = True
        _kill_process_group(proc.pid)
        try:
            stdout, stderr = proc.communicate(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()
            stdout, stderr = proc.communicate()
        exit_code = -1

    wall_time_ms = (time.perf_counter() - wall_start) * 1000

    return TimedResult(
        wall_time_ms=round(wall_time_ms, 3),
        exit_code=exit_code,
        stdout=stdout,
        stderr=stderr,
        timed_out=timed_out,
    )


def _kill_process_group(pid: int) -> None:
    """Attempt to kill the entire process group on timeout."""
    try:
        os.killpg(os.getpgid(pid), signal.SIGKILL)
    except (ProcessLookupError, PermissionError, OSError):
        pass
