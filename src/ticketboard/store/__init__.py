"""Board Store - Persistent storage for columns and tickets."""

from ticketboard.store.exceptions import (
    ColumnNotFoundError,
    NotFoundError,
    StoreError,
    StoreUnavailableError,
    TicketNotFoundError,
)
from ticketboard.store.models import (
    DEFAULT_COLUMNS,
    TITLE_MAX_LENGTH,
    Column,
    OrderUpdate,
    Ticket,
)
from ticketboard.store.store import BoardStore

__all__ = [
    "DEFAULT_COLUMNS",
    "TITLE_MAX_LENGTH",
    "BoardStore",
    "Column",
    "ColumnNotFoundError",
    "NotFoundError",
    "OrderUpdate",
    "StoreError",
    "StoreUnavailableError",
    "Ticket",
    "TicketNotFoundError",
]
