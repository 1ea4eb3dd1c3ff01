# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import shutil
import tempfile
import unittest
from pathlib import Path

from src.config.logging_config import (
    PROJECT_LOGGER,
    SERVER_LOGGERS,
    console_level_from_name,
    setup_logging,
)


def _reset_handlers() -> None:
    for name in (PROJECT_LOGGER, *SERVER_LOGGERS):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        _reset_handlers()
        self.logs_dir = Path(tempfile.mkdtemp()) / "logs"

    def tearDown(self) -> None:
        _reset_handlers()
        shutil.rmtree(self.logs_dir.parent, ignore_errors=True)

    def _handlers(self, cls: type) -> list[logging.Handler]:
        return [
            h
            for h in logging.getLogger(PROJECT_LOGGER).handlers
            if type(h) is cls
        ]

    def test_creates_run_file_in_logs_dir(self) -> None:
        log_path = setup_logging(logs_dir=self.logs_dir)
        self.assertTrue(log_path.exists())
        self.assertEqual(log_path.parent, self.logs_dir)
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_file_handler_debug_console_configurable(self) -> None:
        setup_logging(console_level=logging.INFO, logs_dir=self.logs_dir)
        (file_handler,) = self._handlers(logging.FileHandler)
        (console,) = self._handlers(logging.StreamHandler)
        self.assertEqual(file_handler.level, logging.DEBUG)
        self.assertEqual(console.level, logging.INFO)
        self.assertEqual(
            logging.getLogger(PROJECT_LOGGER).level, logging.DEBUG
        )

    def test_repeated_calls_reuse_first_file(self) -> None:
        first = setup_logging(logs_dir=self.logs_dir)
        count = len(logging.getLogger(PROJECT_LOGGER).handlers)
        second = setup_logging(logs_dir=self.logs_dir / "other")
        self.assertEqual(first, second)
        self.assertEqual(
            len(logging.getLogger(PROJECT_LOGGER).handlers), count
        )

    def test_child_loggers_reach_run_file(self) -> None:
        log_path = setup_logging(logs_dir=self.logs_dir)
        logging.getLogger("ebay_feed.cache").info("cached 3 records")
        for handler in logging.getLogger(PROJECT_LOGGER).handlers:
            handler.flush()
        self.assertIn("cached 3 records", log_path.read_text("utf-8"))

    def test_server_loggers_share_file_handler(self) -> None:
        setup_logging(logs_dir=self.logs_dir)
        (file_handler,) = self._handlers(logging.FileHandler)
        for name in SERVER_LOGGERS:
            self.assertIn(file_handler, logging.getLogger(name).handlers)

    def test_server_loggers_reattached_after_reset(self) -> None:
        setup_logging(logs_dir=self.logs_dir)
        logging.getLogger("uvicorn.error").handlers.clear()
        setup_logging(logs_dir=self.logs_dir)
        self.assertEqual(len(logging.getLogger("uvicorn.error").handlers), 1)


class TestConsoleLevelFromName(unittest.TestCase):

    def test_known_names(self) -> None:
        self.assertEqual(console_level_from_name("debug"), logging.DEBUG)
        self.assertEqual(console_level_from_name(" ERROR "), logging.ERROR)

    def test_unknown_falls_back_to_warning(self) -> None:
        self.assertEqual(console_level_from_name("chatty"), logging.WARNING)
        self.assertEqual(console_level_from_name(None), logging.WARNING)


if __name__ == "__main__":
    unittest.main()
