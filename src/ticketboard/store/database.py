"""SQLite engine and sessions for the board store."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ticketboard.store.models import Base

if TYPE_CHECKING:
    from sqlalchemy import Engine

MEMORY_PATH = ":memory:"

CONNECT_PRAGMAS = ("PRAGMA journal_mode=WAL", "PRAGMA foreign_keys=ON")


def _apply_pragmas(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    try:
        for pragma in CONNECT_PRAGMAS:
            cursor.execute(pragma)
    finally:
        cursor.close()


def _engine_for(db_path: str) -> Engine:
    """Build the engine for a file path or ``:memory:``.

    Sessions are used from FastAPI's worker threads, so the sqlite3
    same-thread check is off; the board service serializes writers.
    """
    options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if db_path == MEMORY_PATH:
        # A single pooled connection keeps the in-memory tables alive
        options["poolclass"] = StaticPool
    else:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(f"sqlite:///{db_path}", **options)
    event.listen(engine, "connect", _apply_pragmas)
    return engine


class Database:
    """Owns the engine and session factory for one SQLite database.

    The engine is created on first use and disposed by ``close()``; using
    the database again after ``close()`` opens a fresh engine.
    """

    def __init__(self, db_path: str = "ticketboard.db") -> None:
        """Remember where the database lives.

        Args:
            db_path: SQLite file path, or ":memory:" for a private in-memory DB.
        """
        self.db_path = db_path
        self._engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        """The engine, created on first access."""
        if self._engine is None:
            self._engine = _engine_for(self.db_path)
        return self._engine

    def get_session(self) -> Session:
        """Open a session; objects stay readable after commit."""
        if self._sessions is None:
            self._sessions = sessionmaker(bind=self.engine, expire_on_commit=False)
        return self._sessions()

    def create_tables(self) -> None:
        """Create the columns and tickets tables when missing."""
        Base.metadata.create_all(self.engine)

    def journal_mode(self) -> str:
        """Current SQLite journal mode (``wal``, or ``memory`` for ``:memory:``)."""
        with self.engine.connect() as conn:
            return str(conn.execute(text("PRAGMA journal_mode")).scalar())

    def is_wal_mode(self) -> bool:
        """Whether the file database runs in write-ahead-log mode."""
        return self.journal_mode() == "wal"

    def close(self) -> None:
        """Dispose the engine and drop pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._sessions = None
