"""Data models for the Board Service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ticketboard.pagination import Page
    from ticketboard.store import Column, Ticket


@dataclass
class ColumnView:
    """A column together with its currently materialized tickets.

    Attributes:
        id: The column's ID.
        title: Display label.
        tickets: Tickets in this page window, ascending by order.
        remaining: Tickets in the column not yet materialized.
    """

    id: int
    title: str
    tickets: list[Ticket] = field(default_factory=list)
    remaining: int = 0

    @classmethod
    def from_page(cls, column: Column, page: Page) -> ColumnView:
        return cls(id=column.id, title=column.title, tickets=page.tickets, remaining=page.remaining)
