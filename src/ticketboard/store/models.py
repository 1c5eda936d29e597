"""SQLAlchemy models for the board store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy
from typing import Any

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)

# Seeded once, on first store initialization
DEFAULT_COLUMNS: tuple[str, ...] = (
    "No Status",
    "First Call",
    "Negotiation",
    "Win-Closed",
    "Lost-Closed",
)

TITLE_MAX_LENGTH = 500


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Column(Base):
    """Column model - a named lane holding an ordered sequence of tickets."""

    __tablename__ = "columns"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)

    tickets: Mapped[list[Ticket]] = relationship("Ticket", back_populates="column")

    def __init__(self, title: str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.title = title

    def __repr__(self) -> str:
        return f"<Column(id={self.id!r}, title={self.title!r})>"


class Ticket(Base):
    """Ticket model - a single orderable item in exactly one column."""

    __tablename__ = "tickets"
    __table_args__ = (Index("ix_tickets_column_order", "column_id", "order"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    column_id: Mapped[int] = mapped_column(Integer, ForeignKey("columns.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    column: Mapped[Column] = relationship("Column", back_populates="tickets")

    def __init__(
        self,
        column_id: int,
        title: str,
        order: int,
        image: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.column_id = column_id
        self.title = title
        self.order = order
        self.image = image

    def __repr__(self) -> str:
        return (
            f"<Ticket(id={self.id!r}, column_id={self.column_id!r}, order={self.order!r}, "
            f"title={self.title!r})>"
        )


@dataclass(frozen=True)
class OrderUpdate:
    """A single order (and optionally column) rewrite for a ticket.

    Attributes:
        ticket_id: The ticket to rewrite.
        order: New order value within the ticket's column.
        column_id: New column, or None to leave the column unchanged.
    """

    ticket_id: int
    order: int
    column_id: int | None = None
