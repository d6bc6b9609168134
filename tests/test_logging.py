"""Tests for crudbench.logging — console and file log setup."""

from __future__ import annotations

import io
import logging
import tempfile
import unittest
from pathlib import Path

from crudbench.logging import get_logger, setup_logging


class TestSetupLogging(unittest.TestCase):
    """Tests for setup_logging() and get_logger()."""

    def tearDown(self) -> None:
        self._reset()

    def _reset(self) -> None:
        logger = logging.getLogger("crudbench")
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    def _console_level(self, logger: logging.Logger) -> int:
        return logger.handlers[0].level

    def _console_output(self, logger: logging.Logger) -> io.StringIO:
        stream = io.StringIO()
        handler = logger.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        handler.setStream(stream)
        return stream

    def test_default_level_info(self) -> None:
        self.assertEqual(self._console_level(setup_logging()), logging.INFO)

    def test_verbose(self) -> None:
        self.assertEqual(self._console_level(setup_logging(verbose=True)), logging.DEBUG)

    def test_quiet(self) -> None:
        self.assertEqual(self._console_level(setup_logging(quiet=True)), logging.WARNING)

    def test_verbose_wins_over_quiet(self) -> None:
        logger = setup_logging(verbose=True, quiet=True)
        self.assertEqual(self._console_level(logger), logging.DEBUG)

    def test_reconfigure_replaces_handlers(self) -> None:
        setup_logging()
        logger = setup_logging()
        self.assertEqual(len(logger.handlers), 1)

    def test_progress_lines_printed_bare(self) -> None:
        stream = self._console_output(setup_logging())
        get_logger("collector").info("  M1/5 Heavy            2000.0ms")
        self.assertEqual(stream.getvalue(), "  M1/5 Heavy            2000.0ms\n")

    def test_warnings_carry_level(self) -> None:
        stream = self._console_output(setup_logging())
        get_logger("report").warning("Insight 'ratio' omitted")
        self.assertEqual(stream.getvalue(), "WARNING: Insight 'ratio' omitted\n")

    def test_log_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "logs" / "crudbench.log"
            logger = setup_logging(quiet=True, log_file=path)
            self.assertEqual(len(logger.handlers), 2)
            get_logger("collector").debug("hidden from console")
            for handler in logger.handlers:
                handler.flush()
            text = path.read_text()
            self._reset()
        self.assertIn("hidden from console", text)
        self.assertIn("crudbench.collector", text)

    def test_get_logger_namespace(self) -> None:
        self.assertEqual(get_logger("timing").name, "crudbench.timing")


if __name__ == "__main__":
    unittest.main()
