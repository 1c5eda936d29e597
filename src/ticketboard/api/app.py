"""FastAPI application setup."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ticketboard.api.dependencies import close_board_service, init_board_service
from ticketboard.api.models import APIResponse, PartialMoveDetail
from ticketboard.api.routes import columns, tickets
from ticketboard.board import BoardError, PartialMoveError, ValidationError
from ticketboard.config import Settings
from ticketboard.logging import get_logger, setup_logging
from ticketboard.store import (
    ColumnNotFoundError,
    StoreError,
    StoreUnavailableError,
    TicketNotFoundError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    # Startup
    init_board_service(settings.db_path, page_size=settings.page_size)
    logger.info("Board store opened at %s", settings.db_path)

    yield
    # Shutdown
    close_board_service()
    logger.info("Board store closed")


def _error_response(status_code: int, error: str, data: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[Any](data=data, error=error).model_dump(mode="json"),
    )


# Exception type -> (status, fixed client message). None echoes the exception text.
ERROR_STATUS: dict[type[Exception], tuple[int, str | None]] = {
    TicketNotFoundError: (status.HTTP_404_NOT_FOUND, "Ticket not found"),
    ColumnNotFoundError: (status.HTTP_404_NOT_FOUND, "Column not found"),
    ValidationError: (status.HTTP_422_UNPROCESSABLE_ENTITY, None),
    BoardError: (status.HTTP_400_BAD_REQUEST, None),
    StoreUnavailableError: (status.HTTP_503_SERVICE_UNAVAILABLE, "Board store unavailable"),
    StoreError: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"),
}


def register_exception_handlers(app: FastAPI) -> None:
    """Map board and store errors to HTTP responses.

    Starlette picks the handler of the most specific registered class, so
    ``TicketNotFoundError`` wins over ``StoreError``.
    """

    async def mapped_error_handler(_request: Request, exc: Exception) -> JSONResponse:
        mapped = next(t for t in type(exc).__mro__ if t in ERROR_STATUS)
        status_code, message = ERROR_STATUS[mapped]
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s: %s", type(exc).__name__, exc)
        return _error_response(status_code, message or str(exc))

    async def partial_move_handler(_request: Request, exc: PartialMoveError) -> JSONResponse:
        detail = PartialMoveDetail(
            ticket_id=exc.ticket_id,
            source_column_id=exc.source_column_id,
            target_column_id=exc.target_column_id,
        )
        return _error_response(status.HTTP_409_CONFLICT, str(exc), detail.model_dump())

    for exc_type in ERROR_STATUS:
        app.add_exception_handler(exc_type, mapped_error_handler)
    app.add_exception_handler(PartialMoveError, partial_move_handler)


def create_app(
    db_path: str | None = None,
    page_size: int | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Settings come from TICKETBOARD_* environment variables; explicit
    arguments override them.
    """
    settings = settings or Settings.from_env()
    if db_path is not None:
        settings.db_path = db_path
    if page_size is not None:
        settings.page_size = page_size

    app = FastAPI(
        title="TicketBoard API",
        description="REST API for TicketBoard - ordered ticket columns",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(columns.router, prefix="/api/v1")
    app.include_router(tickets.router, prefix="/api/v1")

    return app


def run() -> None:
    """Serve the API with uvicorn, logging to rotating files."""
    import uvicorn  # noqa: PLC0415

    settings = Settings.from_env()
    setup_logging(log_dir=settings.log_dir, level=settings.log_level)
    uvicorn.run(create_app(settings=settings), host="127.0.0.1", port=8000)


# Default app instance
app = create_app()
