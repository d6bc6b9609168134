"""Logging setup for crudbench.

Every module logs through a child of the ``crudbench`` logger obtained
with get_logger.  The CLI calls setup_logging once per command.

On the console, INFO records (the per-workload progress lines) are
printed bare so they line up like a table, while warnings and errors
carry their level name.  The optional log file records everything,
including each workload command and its output, with timestamps.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "crudbench"
_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class _ConsoleFormatter(logging.Formatter):
    """Prefix the level name only for records that are not plain INFO."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno == logging.INFO:
            return message
        return f"{record.levelname}: {message}"


def _console_level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Configure and return the ``crudbench`` logger.

    Args:
        verbose: Show DEBUG records (commands run, their output) on the console.
        quiet: Show only warnings and errors.  Ignored if *verbose* is True.
        log_file: If provided, also log everything at DEBUG to this path,
            creating its parent directory.

    Returns:
        The configured ``crudbench`` logger.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Reconfiguring closes and replaces the handlers of an earlier call.
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(_console_level(verbose=verbose, quiet=quiet))
    console.setFormatter(_ConsoleFormatter("%(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(fh)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a named child logger under the crudbench namespace."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")
