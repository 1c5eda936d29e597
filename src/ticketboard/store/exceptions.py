"""Custom exceptions for the board store."""


class StoreError(Exception):
    """Base exception for board store errors."""


class StoreUnavailableError(StoreError):
    """Store could not be opened, created or seeded."""


class NotFoundError(StoreError):
    """Referenced record does not exist."""


class ColumnNotFoundError(NotFoundError):
    """Column with given ID does not exist."""


class TicketNotFoundError(NotFoundError):
    """Ticket with given ID does not exist."""
