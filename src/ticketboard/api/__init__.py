"""REST API for TicketBoard."""

from ticketboard.api.app import app, create_app
from ticketboard.api.models import (
    APIResponse,
    ColumnResponse,
    TicketCreate,
    TicketResponse,
    TicketUpdate,
)

__all__ = [
    "APIResponse",
    "ColumnResponse",
    "TicketCreate",
    "TicketResponse",
    "TicketUpdate",
    "app",
    "create_app",
]
