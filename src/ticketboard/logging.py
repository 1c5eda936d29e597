"""Logging setup for TicketBoard.

Every module logs under the ``ticketboard`` logger tree. ``setup_logging``
attaches a size-rotated file handler (and optionally stderr) to that tree once,
at process start; library code never configures handlers itself.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from ticketboard.config import DEFAULT_LOG_DIR, DEFAULT_LOG_LEVEL

ROOT_LOGGER = "ticketboard"
LOG_FILE = "ticketboard.log"
ROTATE_BYTES = 10 * 1024 * 1024
ROTATE_BACKUPS = 5

FORMATTER = logging.Formatter(
    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _resolve_level(level: str | None) -> int:
    name = (level or os.environ.get("TICKETBOARD_LOG_LEVEL", DEFAULT_LOG_LEVEL)).upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def _file_handler(path: Path, max_bytes: int, backup_count: int) -> logging.Handler:
    handler = RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setFormatter(FORMATTER)
    return handler


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(FORMATTER)
    return handler


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = LOG_FILE,
    max_bytes: int = ROTATE_BYTES,
    backup_count: int = ROTATE_BACKUPS,
    level: str | None = None,
    console: bool = True,
) -> logging.Logger:
    """Route the ``ticketboard`` logger tree to a rotating log file.

    Calling it again replaces the handlers from the previous call, so the
    API entry point and tests can both call it freely.

    Args:
        log_dir: Directory for the log file. Falls back to TICKETBOARD_LOG_DIR,
            then ``logs`` in the working directory. Created if missing.
        log_file: File name inside ``log_dir``.
        max_bytes: Size at which the file is rotated.
        backup_count: Number of rotated files kept.
        level: Level name. Falls back to TICKETBOARD_LOG_LEVEL, then INFO.
        console: Also log to stderr.

    Returns:
        The ``ticketboard`` logger.
    """
    directory = Path(log_dir or os.environ.get("TICKETBOARD_LOG_DIR", DEFAULT_LOG_DIR))
    directory.mkdir(parents=True, exist_ok=True)
    log_level = _resolve_level(level)

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(log_level)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    log_path = directory / log_file
    handlers = [_file_handler(log_path, max_bytes, backup_count)]
    if console:
        handlers.append(_console_handler())
    for handler in handlers:
        handler.setLevel(log_level)
        root.addHandler(handler)

    root.info(
        "Logging to %s at %s",
        log_path,
        logging.getLevelName(log_level),
    )
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``ticketboard`` tree.

    ``get_logger("api")`` and ``get_logger("ticketboard.api")`` are the same logger.
    """
    prefix = f"{ROOT_LOGGER}."
    return logging.getLogger(name if name.startswith(prefix) else prefix + name)
