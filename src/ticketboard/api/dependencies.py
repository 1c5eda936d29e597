"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from ticketboard.board import BoardService
from ticketboard.config import DEFAULT_PAGE_SIZE
from ticketboard.store import BoardStore

# BoardStore and BoardService owned by the app lifespan
_store: BoardStore | None = None
_board_service: BoardService | None = None


def init_board_service(
    db_path: str = "ticketboard.db",
    page_size: int = DEFAULT_PAGE_SIZE,
) -> BoardService:
    """Open the store and create the BoardService instance.

    Raises:
        StoreUnavailableError: If the store cannot be opened.
    """
    global _store, _board_service  # noqa: PLW0603
    close_board_service()
    _store = BoardStore(db_path)
    _board_service = BoardService(_store, page_size=page_size)
    return _board_service


def close_board_service() -> None:
    """Drop the BoardService instance and close its store."""
    global _store, _board_service  # noqa: PLW0603
    _board_service = None
    if _store is not None:
        _store.close()
        _store = None


def get_board_service() -> Generator[BoardService, None, None]:
    """Dependency that provides the BoardService instance."""
    if _board_service is None:
        raise RuntimeError("BoardService not initialized. Call init_board_service() first.")
    yield _board_service


# Type alias for dependency injection
BoardServiceDep = Annotated[BoardService, Depends(get_board_service)]
