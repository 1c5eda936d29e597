"""Board Service - column and ticket operations over the store."""

from __future__ import annotations

import logging
import threading
from collections import Counter
from typing import TYPE_CHECKING

from ticketboard.board.exceptions import PartialMoveError, ValidationError
from ticketboard.board.models import ColumnView
from ticketboard.config import DEFAULT_PAGE_SIZE
from ticketboard.ordering import (
    OrderingError,
    insert_at,
    move_within,
    reindex_full,
    remove_from,
)
from ticketboard.pagination import Paginator, cursor_for
from ticketboard.store import TITLE_MAX_LENGTH, OrderUpdate, StoreError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ticketboard.store import BoardStore, Ticket

logger = logging.getLogger(__name__)


def _updates(shifted: Mapping[int, int], column_id: int | None = None) -> list[OrderUpdate]:
    return [
        OrderUpdate(ticket_id=ticket_id, order=order, column_id=column_id)
        for ticket_id, order in sorted(shifted.items(), key=lambda item: item[1])
    ]


def _clean_title(title: str) -> str:
    cleaned = title.strip()
    if not cleaned:
        raise ValidationError("Ticket title must not be empty")
    if len(cleaned) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Ticket title must be at most {TITLE_MAX_LENGTH} characters")
    return cleaned


class BoardService:
    """Keeps every column's ticket orders dense across mutations.

    Each operation reads the affected column(s), computes the shift set in
    memory, and persists it in a single store transaction, so callers only
    ever see columns whose orders are exactly 0..N-1. Operations are
    serialized with a service-wide lock; page reads take the same lock.

    The service does not own the store: whoever constructs the store
    closes it.
    """

    def __init__(self, store: BoardStore, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        """Initialize the Board Service.

        Args:
            store: An open BoardStore.
            page_size: Default number of tickets per column page.
        """
        if page_size < 1:
            raise ValidationError(f"page_size must be >= 1, got {page_size}")
        self.store = store
        self.page_size = page_size
        self.paginator = Paginator(store)
        self._lock = threading.RLock()

    # --- Reads ---

    def list_columns_with_first_page(self, page_size: int | None = None) -> list[ColumnView]:
        """Return every column with its first page of tickets.

        Raises:
            ValidationError: If page_size < 1.
            StoreUnavailableError: If the store cannot be read.
        """
        size = self._page_size(page_size)
        with self._lock:
            return [
                ColumnView.from_page(column, self.paginator.first_page(column.id, size))
                for column in self.store.list_columns()
            ]

    def load_more_tickets(
        self,
        column_id: int,
        already_shown: int,
        page_size: int | None = None,
    ) -> ColumnView:
        """Return the page after the ``already_shown`` tickets of a column.

        Raises:
            ValidationError: If already_shown < 0 or page_size < 1.
            ColumnNotFoundError: If the column doesn't exist.
        """
        size = self._page_size(page_size)
        if already_shown < 0:
            raise ValidationError(f"already_shown must be >= 0, got {already_shown}")

        with self._lock:
            column = self.store.get_column(column_id)
            page = self.paginator.next_page(column_id, cursor_for(already_shown), size)
            return ColumnView.from_page(column, page)

    def get_ticket(self, ticket_id: int) -> Ticket:
        """Get a ticket by ID.

        Raises:
            TicketNotFoundError: If the ticket doesn't exist.
        """
        with self._lock:
            return self.store.get_ticket(ticket_id)

    # --- Mutations ---

    def create_ticket(
        self,
        column_id: int,
        title: str,
        image: str | None = None,
        position: int | None = None,
    ) -> Ticket:
        """Create a ticket, appended to the column unless a position is given.

        A position past the end of the column appends.

        Raises:
            ValidationError: If the title is empty/too long or position < 0.
            ColumnNotFoundError: If the column doesn't exist.
        """
        title = _clean_title(title)
        if position is not None and position < 0:
            raise ValidationError(f"position must be >= 0, got {position}")

        with self._lock:
            self.store.get_column(column_id)
            tickets = self.store.query_tickets(column_id=column_id)
            if position is not None:
                position = min(position, len(tickets))

            placement = insert_at(tickets, position)
            ticket = self.store.create_ticket(
                column_id=column_id,
                title=title,
                order=placement.order,
                image=image,
                shifts=_updates(placement.shifted),
            )

        logger.info(
            "Ticket %d created in column %d at order %d", ticket.id, column_id, ticket.order
        )
        return ticket

    def edit_ticket(
        self,
        ticket_id: int,
        title: str | None = None,
        column_id: int | None = None,
        image: str | None = None,
        clear_image: bool = False,
    ) -> Ticket:
        """Update a ticket's content, moving it when the column changes.

        A move appends the ticket to the target column and compacts the
        source column, all in one transaction. Without a move the order is
        left untouched. ``image=None`` keeps the current image;
        ``clear_image=True`` removes it.

        Raises:
            ValidationError: If a title is given but empty or too long, or
                an image is given together with clear_image.
            TicketNotFoundError: If the ticket doesn't exist.
            ColumnNotFoundError: If the target column doesn't exist.
        """
        if title is not None:
            title = _clean_title(title)
        if clear_image and image is not None:
            raise ValidationError("Cannot set and clear the image in one edit")
        content = {"title": title, "image": image, "clear_image": clear_image}

        with self._lock:
            ticket = self.store.get_ticket(ticket_id)
            if column_id is None or column_id == ticket.column_id:
                return self.store.update_ticket(ticket_id, **content)

            self.store.get_column(column_id)
            source = self.store.query_tickets(column_id=ticket.column_id)
            target = self.store.query_tickets(column_id=column_id)
            placement = insert_at(target)
            shifts = [
                *_updates(remove_from(source, ticket_id)),
                OrderUpdate(ticket_id=ticket_id, order=placement.order, column_id=column_id),
            ]
            updated = self.store.update_ticket(ticket_id, shifts=shifts, **content)

        logger.info(
            "Ticket %d moved from column %d to column %d at order %d",
            ticket_id,
            ticket.column_id,
            column_id,
            updated.order,
        )
        return updated

    def delete_ticket(self, ticket_id: int) -> int:
        """Delete a ticket and close the gap in its column.

        Returns:
            The deleted ticket's ID.

        Raises:
            TicketNotFoundError: If the ticket doesn't exist.
        """
        with self._lock:
            ticket = self.store.get_ticket(ticket_id)
            tickets = self.store.query_tickets(column_id=ticket.column_id)
            shifts = _updates(remove_from(tickets, ticket_id))
            self.store.delete_ticket(ticket_id, shifts=shifts)

        logger.info(
            "Ticket %d deleted from column %d (%d shifted)",
            ticket_id,
            ticket.column_id,
            len(shifts),
        )
        return ticket_id

    def reorder_on_drop(
        self,
        ticket_id: int,
        target_column_id: int,
        target_position: int,
    ) -> Ticket:
        """Apply a drag-and-drop result.

        Within a column the ticket moves to ``target_position`` and the run
        in between shifts by one. Across columns the move runs in two
        transactions: first the source column is compacted and the ticket is
        appended to the target column, then it is moved to
        ``target_position`` there. A position past the end appends.

        Raises:
            ValidationError: If target_position < 0.
            TicketNotFoundError: If the ticket doesn't exist.
            ColumnNotFoundError: If the target column doesn't exist.
            PartialMoveError: If the second transaction of a cross-column move fails.
        """
        if target_position < 0:
            raise ValidationError(f"target_position must be >= 0, got {target_position}")

        with self._lock:
            ticket = self.store.get_ticket(ticket_id)
            source_column_id = ticket.column_id

            if target_column_id == source_column_id:
                return self._move_within_column(ticket_id, source_column_id, target_position)

            self.store.get_column(target_column_id)
            source = self.store.query_tickets(column_id=source_column_id)
            target = self.store.query_tickets(column_id=target_column_id)
            placement = insert_at(target)
            self.store.bulk_update_orders(
                [
                    *_updates(remove_from(source, ticket_id)),
                    OrderUpdate(
                        ticket_id=ticket_id, order=placement.order, column_id=target_column_id
                    ),
                ]
            )
            logger.info(
                "Ticket %d moved from column %d to column %d",
                ticket_id,
                source_column_id,
                target_column_id,
            )

            try:
                return self._move_within_column(ticket_id, target_column_id, target_position)
            except StoreError as e:
                logger.error(
                    "Ticket %d left at end of column %d: %s", ticket_id, target_column_id, e
                )
                raise PartialMoveError(ticket_id, source_column_id, target_column_id) from e

    def batch_reindex(self, column_id: int, ordered_ids: Sequence[int]) -> list[Ticket]:
        """Renumber a column from an observed sequence of ticket IDs.

        Tickets not listed (outside the materialized window) keep their
        relative order after the listed ones. Only changed tickets are
        written.

        Returns:
            The column's tickets in their new order.

        Raises:
            ValidationError: On duplicate IDs or IDs from another column.
            ColumnNotFoundError: If the column doesn't exist.
        """
        repeated = [ticket_id for ticket_id, n in Counter(ordered_ids).items() if n > 1]
        if repeated:
            raise ValidationError(f"Ticket {repeated[0]} appears more than once")

        with self._lock:
            self.store.get_column(column_id)
            tickets = self.store.query_tickets(column_id=column_id)
            try:
                changes = reindex_full(tickets, ordered_ids)
            except OrderingError as e:
                raise ValidationError(str(e)) from e

            if changes:
                self.store.bulk_update_orders(_updates(changes))
                logger.info("Column %d reindexed (%d changed)", column_id, len(changes))
            return self.store.query_tickets(column_id=column_id)

    # --- Helpers ---

    def _move_within_column(self, ticket_id: int, column_id: int, position: int) -> Ticket:
        tickets = self.store.query_tickets(column_id=column_id)
        position = min(position, len(tickets) - 1)
        changes = move_within(tickets, ticket_id, position)
        if changes:
            self.store.bulk_update_orders(_updates(changes))
            logger.debug(
                "Ticket %d moved to order %d in column %d (%d changed)",
                ticket_id,
                position,
                column_id,
                len(changes),
            )
        return self.store.get_ticket(ticket_id)

    def _page_size(self, page_size: int | None) -> int:
        if page_size is None:
            return self.page_size
        if page_size < 1:
            raise ValidationError(f"page_size must be >= 1, got {page_size}")
        return page_size
