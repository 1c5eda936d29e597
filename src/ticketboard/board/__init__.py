"""Board Service - the public contract for columns and tickets."""

from ticketboard.board.exceptions import BoardError, PartialMoveError, ValidationError
from ticketboard.board.models import ColumnView
from ticketboard.board.service import BoardService

__all__ = [
    "BoardError",
    "BoardService",
    "ColumnView",
    "PartialMoveError",
    "ValidationError",
]
