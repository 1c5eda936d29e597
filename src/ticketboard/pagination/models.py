"""Data models for the Pagination module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ticketboard.store import Ticket


@dataclass
class Page:
    """One page of a column's tickets.

    Attributes:
        column_id: The column the page belongs to.
        tickets: Tickets in ascending order.
        remaining: Tickets in the column after this page.
        cursor: Order of the last ticket delivered so far; -1 before the first page.
    """

    column_id: int
    tickets: list[Ticket] = field(default_factory=list)
    remaining: int = 0
    cursor: int = -1

    @property
    def has_more(self) -> bool:
        """Whether a "load more" request would return anything."""
        return self.remaining > 0
