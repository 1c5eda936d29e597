"""Ordering Engine - dense per-column order computation."""

from ticketboard.ordering.engine import insert_at, move_within, reindex_full, remove_from
from ticketboard.ordering.exceptions import OrderingError
from ticketboard.ordering.models import Orderable, ShiftSet

__all__ = [
    "Orderable",
    "OrderingError",
    "ShiftSet",
    "insert_at",
    "move_within",
    "reindex_full",
    "remove_from",
]
