"""Data models for the ordering engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


class Orderable(Protocol):
    """Anything with an id and an order within its column."""

    id: int
    order: int


@dataclass
class ShiftSet:
    """Result of inserting into a column.

    Attributes:
        order: Order value assigned to the inserted ticket.
        shifted: Existing tickets whose order changes, as ticket_id -> new order.
    """

    order: int
    shifted: dict[int, int] = field(default_factory=dict)
