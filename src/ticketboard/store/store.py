"""BoardStore - Main API for board persistence."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ticketboard.store.database import Database
from ticketboard.store.exceptions import (
    ColumnNotFoundError,
    StoreError,
    StoreUnavailableError,
    TicketNotFoundError,
)
from ticketboard.store.models import DEFAULT_COLUMNS, Column, OrderUpdate, Ticket

logger = logging.getLogger(__name__)


class BoardStore:
    """Main API for board persistence.

    Provides the lookups and writes the board needs for Columns and Tickets:
    point lookups by id, range scans by order within a column, counts, and
    atomic batches of order rewrites. Every public method runs in its own
    session and commits (or rolls back) before returning.
    """

    def __init__(
        self,
        db_path: str = "ticketboard.db",
        seed_titles: Sequence[str] = DEFAULT_COLUMNS,
    ) -> None:
        """Open the store, creating tables and seeding columns on first run.

        Args:
            db_path: Path to SQLite database file
            seed_titles: Column titles to create when the store is empty

        Raises:
            StoreUnavailableError: If the database cannot be opened or seeded
        """
        self._db = Database(db_path)
        try:
            self._db.create_tables()
            self.seed_on_first_run(seed_titles)
        except (SQLAlchemyError, OSError) as e:
            self._db.close()
            raise StoreUnavailableError(f"Cannot open board store at '{db_path}': {e}") from e

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    # --- Column Operations ---

    def seed_on_first_run(self, titles: Sequence[str]) -> bool:
        """Create the default columns if no column exists yet.

        Args:
            titles: Column titles, in display order

        Returns:
            True if the columns were created by this call
        """
        session = self._db.get_session()
        try:
            existing = session.execute(select(func.count(Column.id))).scalar_one()
            if existing:
                return False
            session.add_all([Column(title=title) for title in titles])
            session.commit()
            logger.info("Seeded %d columns", len(titles))
            return True
        except SQLAlchemyError:
            session.rollback()
            raise
        finally:
            session.close()

    def list_columns(self) -> list[Column]:
        """List all columns, ordered by id (seed order).

        Raises:
            StoreUnavailableError: If the database cannot be read
        """
        try:
            with self._db.get_session() as session:
                result = session.execute(select(Column).order_by(Column.id))
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Cannot read columns: {e}") from e

    def get_column(self, column_id: int) -> Column:
        """Get column by ID.

        Raises:
            ColumnNotFoundError: If column doesn't exist
            StoreError: If the read fails
        """
        try:
            with self._db.get_session() as session:
                return self._get_column(session, column_id)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read column {column_id}") from e

    # --- Ticket Operations ---

    def create_ticket(
        self,
        column_id: int,
        title: str,
        order: int,
        image: str | None = None,
        shifts: Iterable[OrderUpdate] = (),
    ) -> Ticket:
        """Insert a ticket and apply order shifts in one transaction.

        Args:
            column_id: The column to insert into
            title: Raw ticket title
            order: Order value for the new ticket
            image: Optional image payload
            shifts: Order rewrites for existing tickets

        Returns:
            Created Ticket with generated ID

        Raises:
            ColumnNotFoundError: If column doesn't exist
            TicketNotFoundError: If a shifted ticket doesn't exist
            StoreError: If the write fails
        """
        session = self._db.get_session()
        try:
            self._get_column(session, column_id)
            self._apply_updates(session, shifts)
            ticket = Ticket(column_id=column_id, title=title, order=order, image=image)
            session.add(ticket)
            session.commit()
            session.refresh(ticket)
            return ticket
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"Failed to create ticket in column {column_id}") from e
        except TicketNotFoundError:
            session.rollback()
            raise
        finally:
            session.close()

    def get_ticket(self, ticket_id: int) -> Ticket:
        """Get ticket by ID.

        Raises:
            TicketNotFoundError: If ticket doesn't exist
            StoreError: If the read fails
        """
        try:
            with self._db.get_session() as session:
                return self._get_ticket(session, ticket_id)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read ticket {ticket_id}") from e

    def update_ticket(
        self,
        ticket_id: int,
        title: str | None = None,
        image: str | None = None,
        shifts: Iterable[OrderUpdate] = (),
        clear_image: bool = False,
    ) -> Ticket:
        """Update ticket content fields and apply order shifts in one transaction.

        Only provided content fields are updated; ``clear_image`` sets the
        image back to NULL. Order and column change only through ``shifts``,
        which may include this ticket itself.

        Raises:
            TicketNotFoundError: If the ticket or a shifted ticket doesn't exist
            StoreError: If the write fails
        """
        session = self._db.get_session()
        try:
            ticket = self._get_ticket(session, ticket_id)
            if title is not None:
                ticket.title = title
            if clear_image:
                ticket.image = None
            elif image is not None:
                ticket.image = image
            self._apply_updates(session, shifts)
            session.commit()
            session.refresh(ticket)
            return ticket
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"Failed to update ticket {ticket_id}") from e
        except TicketNotFoundError:
            session.rollback()
            raise
        finally:
            session.close()

    def delete_ticket(self, ticket_id: int, shifts: Iterable[OrderUpdate] = ()) -> None:
        """Delete a ticket and apply order shifts in one transaction.

        Raises:
            TicketNotFoundError: If the ticket or a shifted ticket doesn't exist
            StoreError: If the write fails
        """
        session = self._db.get_session()
        try:
            ticket = self._get_ticket(session, ticket_id)
            session.delete(ticket)
            self._apply_updates(session, shifts)
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(f"Failed to delete ticket {ticket_id}") from e
        except TicketNotFoundError:
            session.rollback()
            raise
        finally:
            session.close()

    def query_tickets(
        self,
        column_id: int | None = None,
        order_above: int | None = None,
        order_at_least: int | None = None,
        limit: int | None = None,
    ) -> list[Ticket]:
        """Range query over tickets, sorted by order ascending.

        Args:
            column_id: Filter by column (None = all columns)
            order_above: Only tickets with order > this value
            order_at_least: Only tickets with order >= this value
            limit: Max results to return

        Returns:
            Matching tickets, ordered by (order, id)

        Raises:
            StoreError: If the read fails
        """
        stmt = select(Ticket)

        if column_id is not None:
            stmt = stmt.where(Ticket.column_id == column_id)
        if order_above is not None:
            stmt = stmt.where(Ticket.order > order_above)
        if order_at_least is not None:
            stmt = stmt.where(Ticket.order >= order_at_least)

        stmt = stmt.order_by(Ticket.order, Ticket.id)
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            with self._db.get_session() as session:
                return list(session.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to query tickets of column {column_id}") from e

    def count_tickets(
        self,
        column_id: int | None = None,
        order_above: int | None = None,
    ) -> int:
        """Count tickets, optionally within a column and above an order.

        Raises:
            StoreError: If the read fails
        """
        stmt = select(func.count(Ticket.id))
        if column_id is not None:
            stmt = stmt.where(Ticket.column_id == column_id)
        if order_above is not None:
            stmt = stmt.where(Ticket.order > order_above)
        try:
            with self._db.get_session() as session:
                return session.execute(stmt).scalar_one()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to count tickets of column {column_id}") from e

    def bulk_update_orders(self, updates: Iterable[OrderUpdate]) -> list[Ticket]:
        """Apply a batch of order rewrites atomically.

        Args:
            updates: Order (and optional column) rewrites

        Returns:
            The rewritten tickets, in the order the updates were given

        Raises:
            TicketNotFoundError: If any ticket doesn't exist; nothing is written
            StoreError: If the write fails
        """
        session = self._db.get_session()
        try:
            tickets = self._apply_updates(session, updates)
            session.commit()
            for ticket in tickets:
                session.refresh(ticket)
            return tickets
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError("Failed to apply order updates") from e
        except TicketNotFoundError:
            session.rollback()
            raise
        finally:
            session.close()

    # --- Helpers ---

    def _get_column(self, session: Session, column_id: int) -> Column:
        column = session.get(Column, column_id)
        if column is None:
            raise ColumnNotFoundError(f"Column with id '{column_id}' not found")
        return column

    def _get_ticket(self, session: Session, ticket_id: int) -> Ticket:
        ticket = session.get(Ticket, ticket_id)
        if ticket is None:
            raise TicketNotFoundError(f"Ticket with id '{ticket_id}' not found")
        return ticket

    def _apply_updates(self, session: Session, updates: Iterable[OrderUpdate]) -> list[Ticket]:
        tickets = []
        for update in updates:
            ticket = self._get_ticket(session, update.ticket_id)
            if update.column_id is not None:
                ticket.column_id = update.column_id
            ticket.order = update.order
            tickets.append(ticket)
        return tickets
