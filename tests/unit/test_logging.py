"""Unit tests for TicketBoard logging setup."""

import logging
from collections.abc import Callable, Generator
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from ticketboard.board import BoardService
from ticketboard.logging import ROOT_LOGGER, get_logger, setup_logging


@pytest.fixture(autouse=True)
def detach_handlers() -> Generator[None, None, None]:
    """Close handlers a test installed so tmp_path files are released."""
    yield
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)


@pytest.fixture
def read_log(tmp_path: Path) -> Callable[[], str]:
    return lambda: (tmp_path / "ticketboard.log").read_text(encoding="utf-8")


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging."""

    def test_nested_log_dir_is_created(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "var" / "log" / "board"

        setup_logging(log_dir=log_dir, console=False)

        assert (log_dir / "ticketboard.log").exists()

    def test_line_layout(self, tmp_path: Path, read_log: Callable[[], str]) -> None:
        """time | level | logger | message."""
        setup_logging(log_dir=tmp_path, console=False)
        get_logger("store").warning("disk almost full")

        line = read_log().splitlines()[-1]
        _, level, name, message = (part.strip() for part in line.split(" | "))
        assert (level, name, message) == ("WARNING", "ticketboard.store", "disk almost full")

    def test_board_mutations_reach_the_file(
        self,
        tmp_path: Path,
        read_log: Callable[[], str],
        board: BoardService,
        column_ids: list[int],
    ) -> None:
        """Service loggers are children of the configured tree."""
        setup_logging(log_dir=tmp_path, console=False)

        ticket = board.create_ticket(column_ids[0], "Call Bob")

        assert f"Ticket {ticket.id} created in column {column_ids[0]} at order 0" in read_log()

    def test_level_filters(self, tmp_path: Path, read_log: Callable[[], str]) -> None:
        setup_logging(log_dir=tmp_path, level="warning", console=False)
        logger = get_logger("board")

        logger.info("routine")
        logger.error("broken")

        assert "routine" not in read_log()
        assert "broken" in read_log()

    def test_unknown_level_falls_back_to_info(self, tmp_path: Path) -> None:
        root = setup_logging(log_dir=tmp_path, level="chatty", console=False)

        assert root.level == logging.INFO

    def test_environment_supplies_dir_and_level(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """TICKETBOARD_LOG_DIR and TICKETBOARD_LOG_LEVEL apply when no argument is given."""
        monkeypatch.setenv("TICKETBOARD_LOG_DIR", str(tmp_path / "from-env"))
        monkeypatch.setenv("TICKETBOARD_LOG_LEVEL", "DEBUG")

        root = setup_logging(console=False)

        assert root.level == logging.DEBUG
        assert (tmp_path / "from-env" / "ticketboard.log").exists()

    def test_reconfiguring_replaces_handlers(self, tmp_path: Path) -> None:
        setup_logging(log_dir=tmp_path / "first", console=True)
        root = setup_logging(log_dir=tmp_path / "second", console=False)

        (handler,) = root.handlers
        assert isinstance(handler, RotatingFileHandler)
        assert Path(handler.baseFilename).parent == tmp_path / "second"

    def test_rotation_limits(self, tmp_path: Path) -> None:
        root = setup_logging(log_dir=tmp_path, max_bytes=2048, backup_count=2, console=False)

        (handler,) = root.handlers
        assert (handler.maxBytes, handler.backupCount) == (2048, 2)


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger."""

    @pytest.mark.parametrize("name", ["api", "ticketboard.api"])
    def test_names_land_under_root(self, name: str) -> None:
        assert get_logger(name) is logging.getLogger("ticketboard.api")
