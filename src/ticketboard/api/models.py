"""Pydantic models for REST API."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Ticket models


class TicketCreate(BaseModel):
    """Request model for adding a ticket to a column."""

    title: str = Field(..., min_length=1, description="Stripped and length-checked by the board")
    image: str | None = None
    position: int | None = Field(default=None, ge=0, description="Insert position; omit to append")


class TicketUpdate(BaseModel):
    """Request model for editing a ticket (partial update)."""

    title: str | None = Field(default=None, min_length=1)
    column_id: int | None = Field(default=None, description="Move to this column (appends)")
    image: str | None = Field(default=None, description="New image; omit to keep the current one")
    clear_image: bool = Field(default=False, description="Remove the current image")


class TicketDrop(BaseModel):
    """Request model for a drag-and-drop result."""

    column_id: int
    position: int = Field(..., ge=0)


class TicketResponse(BaseModel):
    """Response model for a ticket."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    column_id: int
    title: str
    order: int
    image: str | None
    created_at: datetime
    updated_at: datetime


def ticket_to_response(ticket: Any) -> TicketResponse:
    """Convert a Ticket model to TicketResponse."""
    return TicketResponse.model_validate(ticket)


# Column models


class ColumnReorder(BaseModel):
    """Request model for resequencing a column from its displayed order."""

    ticket_ids: list[int]


class ColumnResponse(BaseModel):
    """Response model for a column with its materialized tickets."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    tickets: list[TicketResponse]
    remaining: int


def column_to_response(column: Any) -> ColumnResponse:
    """Convert a ColumnView to ColumnResponse."""
    return ColumnResponse.model_validate(column)


class PartialMoveDetail(BaseModel):
    """Error detail for a move that must be retried."""

    ticket_id: int
    source_column_id: int
    target_column_id: int
    retryable: bool = True
