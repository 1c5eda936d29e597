"""Exceptions for the Board Service."""


class BoardError(Exception):
    """Base exception for board service errors."""


class ValidationError(BoardError):
    """Input was rejected before any store call."""


class PartialMoveError(BoardError):
    """A cross-column move left the ticket at the end of the target column.

    The source column has already been compacted and the ticket sits at the
    end of the target column; only the final repositioning failed. Retrying
    the same drop is safe.
    """

    def __init__(self, ticket_id: int, source_column_id: int, target_column_id: int) -> None:
        super().__init__(
            f"Ticket {ticket_id} moved from column {source_column_id} to column "
            f"{target_column_id} but could not be placed; retry the move"
        )
        self.ticket_id = ticket_id
        self.source_column_id = source_column_id
        self.target_column_id = target_column_id
