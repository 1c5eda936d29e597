"""Configuration loading for TicketBoard."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_DB_PATH = "ticketboard.db"
DEFAULT_PAGE_SIZE = 10
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(Exception):
    """Raised when configuration is invalid."""


@dataclass
class Settings:
    """Runtime settings.

    Attributes:
        db_path: SQLite database file, or ":memory:".
        page_size: Tickets per column page when the caller does not ask for one.
        log_dir: Directory for rotating log files.
        log_level: Log level name (DEBUG, INFO, WARNING, ERROR).
    """

    db_path: str = DEFAULT_DB_PATH
    page_size: int = DEFAULT_PAGE_SIZE
    log_dir: str = DEFAULT_LOG_DIR
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from TICKETBOARD_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ.

        Raises:
            ConfigError: If TICKETBOARD_PAGE_SIZE is not a positive integer.
        """
        env = os.environ if environ is None else environ

        raw_page_size = env.get("TICKETBOARD_PAGE_SIZE", str(DEFAULT_PAGE_SIZE))
        try:
            page_size = int(raw_page_size)
        except ValueError as e:
            raise ConfigError(
                f"TICKETBOARD_PAGE_SIZE must be an integer, got '{raw_page_size}'"
            ) from e
        if page_size < 1:
            raise ConfigError(f"TICKETBOARD_PAGE_SIZE must be >= 1, got {page_size}")

        return cls(
            db_path=env.get("TICKETBOARD_DB_PATH", DEFAULT_DB_PATH),
            page_size=page_size,
            log_dir=env.get("TICKETBOARD_LOG_DIR", DEFAULT_LOG_DIR),
            log_level=env.get("TICKETBOARD_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )
