"""Shared pytest fixtures and configuration."""

from collections.abc import Callable, Generator

import pytest

from ticketboard.board import BoardService
from ticketboard.store import BoardStore, Ticket


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def store() -> Generator[BoardStore, None, None]:
    """Create an in-memory BoardStore seeded with the default columns."""
    s = BoardStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def board(store: BoardStore) -> BoardService:
    """Create a BoardService over the in-memory store."""
    return BoardService(store, page_size=10)


@pytest.fixture
def column_ids(store: BoardStore) -> list[int]:
    """IDs of the seeded columns, in seed order."""
    return [c.id for c in store.list_columns()]


@pytest.fixture
def fill_column(board: BoardService) -> Callable[..., list[Ticket]]:
    """Return a helper that appends ``count`` tickets named T0..Tn-1 to a column."""

    def _fill(column_id: int, count: int, prefix: str = "T") -> list[Ticket]:
        return [board.create_ticket(column_id, f"{prefix}{i}") for i in range(count)]

    return _fill


@pytest.fixture
def layout(store: BoardStore) -> Callable[[int], list[tuple[str, int]]]:
    """Return a helper giving a column's (title, order) pairs, ascending by order."""

    def _layout(column_id: int) -> list[tuple[str, int]]:
        return [(t.title, t.order) for t in store.query_tickets(column_id=column_id)]

    return _layout


@pytest.fixture
def assert_dense(store: BoardStore) -> Callable[[int], None]:
    """Return a helper asserting a column's orders are exactly 0..N-1."""

    def _assert_dense(column_id: int) -> None:
        orders = sorted(t.order for t in store.query_tickets(column_id=column_id))
        assert orders == list(range(len(orders)))

    return _assert_dense
