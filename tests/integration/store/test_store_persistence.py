"""Integration tests for BoardStore on a SQLite file."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from sqlalchemy import inspect, text

from ticketboard.store import BoardStore, OrderUpdate, StoreUnavailableError
from ticketboard.store.database import Database


@pytest.fixture
def db_path() -> Generator[str, None, None]:
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        yield f.name
    # Cleanup
    Path(f.name).unlink(missing_ok=True)
    Path(f"{f.name}-wal").unlink(missing_ok=True)
    Path(f"{f.name}-shm").unlink(missing_ok=True)


@pytest.mark.integration
class TestDatabaseSetup:
    """Tests for database setup."""

    def test_creates_tables(self, db_path: str) -> None:
        """columns and tickets tables exist after init."""
        db = Database(db_path)
        db.create_tables()
        try:
            tables = inspect(db.engine).get_table_names()
            assert "columns" in tables
            assert "tickets" in tables
        finally:
            db.close()

    def test_wal_and_foreign_keys(self, db_path: str) -> None:
        """WAL mode and foreign keys are enabled."""
        db = Database(db_path)
        try:
            assert db.is_wal_mode()
            with db.engine.connect() as conn:
                assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        finally:
            db.close()

    def test_creates_parent_directory(self) -> None:
        """Missing parent directories are created."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "board.db"
            store = BoardStore(str(path))
            store.close()

            assert path.exists()

    def test_unopenable_path_raises(self) -> None:
        """StoreUnavailableError when the path is a directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(StoreUnavailableError):
                BoardStore(tmpdir)


@pytest.mark.integration
class TestPersistence:
    """Tests for data surviving reconnects."""

    def test_seed_once_across_reopen(self, db_path: str) -> None:
        """Reopening does not seed a second set of columns."""
        BoardStore(db_path).close()

        store = BoardStore(db_path)
        try:
            assert len(store.list_columns()) == 5
        finally:
            store.close()

    def test_tickets_persist_across_reconnect(self, db_path: str) -> None:
        """Tickets and order rewrites survive a reconnect."""
        store1 = BoardStore(db_path)
        column_id = store1.list_columns()[0].id
        a = store1.create_ticket(column_id, "A", order=0)
        b = store1.create_ticket(column_id, "B", order=1)
        store1.bulk_update_orders(
            [OrderUpdate(ticket_id=a.id, order=1), OrderUpdate(ticket_id=b.id, order=0)]
        )
        store1.close()

        store2 = BoardStore(db_path)
        try:
            tickets = store2.query_tickets(column_id=column_id)
            assert [(t.title, t.order) for t in tickets] == [("B", 0), ("A", 1)]
        finally:
            store2.close()
