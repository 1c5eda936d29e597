"""Paginator - serves a column's tickets page by page."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ticketboard.pagination.models import Page

if TYPE_CHECKING:
    from ticketboard.store import BoardStore

logger = logging.getLogger(__name__)


def cursor_for(shown_count: int) -> int:
    """Cursor for a column that already shows ``shown_count`` tickets.

    Orders are dense from 0 and pages are prefix windows, so the last shown
    ticket has order ``shown_count - 1``.
    """
    if shown_count < 0:
        raise ValueError(f"shown_count must be >= 0, got {shown_count}")
    return shown_count - 1


class Paginator:
    """Serves a column's tickets in ascending order, one page at a time.

    The cursor is the order of the last ticket already delivered. It is only
    correct while the column's orders are dense; callers must finish any
    renumbering before requesting a page.
    """

    def __init__(self, store: BoardStore) -> None:
        """Initialize the Paginator.

        Args:
            store: BoardStore used for range queries and counts.
        """
        self.store = store

    def first_page(self, column_id: int, page_size: int) -> Page:
        """Return the first ``page_size`` tickets of a column."""
        return self.next_page(column_id, -1, page_size)

    def next_page(self, column_id: int, since_order: int, page_size: int) -> Page:
        """Return up to ``page_size`` tickets with order > ``since_order``.

        Args:
            column_id: The column to page through.
            since_order: Every ticket with order <= this was already shown.
            page_size: Max tickets to return.

        Returns:
            Page with the tickets and the count still left after them.

        Raises:
            ValueError: If page_size < 1 or since_order < -1.
        """
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        if since_order < -1:
            raise ValueError(f"since_order must be >= -1, got {since_order}")

        tickets = self.store.query_tickets(
            column_id=column_id,
            order_above=since_order,
            limit=page_size,
        )
        total = self.store.count_tickets(column_id=column_id)
        remaining = max(total - (since_order + 1) - len(tickets), 0)
        cursor = tickets[-1].order if tickets else since_order

        logger.debug(
            "Column %d page after %d: %d tickets, %d remaining",
            column_id,
            since_order,
            len(tickets),
            remaining,
        )
        return Page(column_id=column_id, tickets=tickets, remaining=remaining, cursor=cursor)
