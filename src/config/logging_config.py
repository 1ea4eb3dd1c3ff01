# src/config/logging_config.py

"""Per-run logging for ebay_feed.

Every launch (CLI command, ``serve`` or the carousel) writes one file,
``logs/run_YYYYMMDD_HHMMSS.log``. The ``ebay_feed`` logger and, when the
HTTP server runs, uvicorn's own loggers share its file handler, so a
failed upstream call and the request that triggered it sit side by side.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PROJECT_LOGGER = "ebay_feed"
SERVER_LOGGERS = ("uvicorn.error", "uvicorn.access")


def console_level_from_name(name: str | None) -> int:
    """Map ``EBAY_LOG_LEVEL`` style names to a level, WARNING if unknown."""
    level = logging.getLevelName((name or "").strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def _file_handler(logger: logging.Logger) -> logging.FileHandler | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return handler
    return None


def _attach_server_loggers(handler: logging.FileHandler) -> None:
    # uvicorn reconfigures its loggers on start, after main() ran
    for name in SERVER_LOGGERS:
        logger = logging.getLogger(name)
        if handler not in logger.handlers:
            logger.addHandler(handler)


def setup_logging(
    console_level: int | None = None,
    logs_dir: Path | None = None,
) -> Path:
    """Attach the run file and stderr handlers to ``ebay_feed``.

    Args:
        console_level: Minimum level echoed to stderr. Defaults to
            ``Settings.CONSOLE_LOG_LEVEL`` (``EBAY_LOG_LEVEL``).
        logs_dir: Directory for run files, ``Settings.LOGS_DIR`` if unset.

    Returns:
        The log file for this run. A second call in the same process
        returns the file opened by the first.
    """
    project = logging.getLogger(PROJECT_LOGGER)
    project.setLevel(logging.DEBUG)

    existing = _file_handler(project)
    if existing is not None:
        _attach_server_loggers(existing)
        return Path(existing.baseFilename)

    directory = Path(logs_dir) if logs_dir else Settings.LOGS_DIR
    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    if console_level is None:
        console_level = console_level_from_name(Settings.CONSOLE_LOG_LEVEL)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    project.addHandler(file_handler)
    project.addHandler(console_handler)

    _attach_server_loggers(file_handler)

    project.info("Logging initialised, log file: %s", log_file)
    return log_file
