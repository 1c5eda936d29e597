"""Ticket endpoints: fetch, edit, delete, drop."""

from fastapi import APIRouter, status

from ticketboard.api.dependencies import BoardServiceDep
from ticketboard.api.models import (
    APIResponse,
    TicketDrop,
    TicketResponse,
    TicketUpdate,
    ticket_to_response,
)

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.get("/{ticket_id}", response_model=APIResponse[TicketResponse])
def get_ticket(ticket_id: int, board: BoardServiceDep) -> APIResponse[TicketResponse]:
    """Get a ticket by ID."""
    ticket = board.get_ticket(ticket_id)
    return APIResponse(data=ticket_to_response(ticket))


@router.patch("/{ticket_id}", response_model=APIResponse[TicketResponse])
def edit_ticket(
    ticket_id: int, ticket: TicketUpdate, board: BoardServiceDep
) -> APIResponse[TicketResponse]:
    """Edit a ticket; a new column_id moves it to the end of that column."""
    updated = board.edit_ticket(
        ticket_id,
        title=ticket.title,
        column_id=ticket.column_id,
        image=ticket.image,
        clear_image=ticket.clear_image,
    )
    return APIResponse(data=ticket_to_response(updated))


@router.delete("/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ticket(ticket_id: int, board: BoardServiceDep) -> None:
    """Delete a ticket."""
    board.delete_ticket(ticket_id)


@router.post("/{ticket_id}/drop", response_model=APIResponse[TicketResponse])
def drop_ticket(
    ticket_id: int, drop: TicketDrop, board: BoardServiceDep
) -> APIResponse[TicketResponse]:
    """Apply a drag-and-drop result."""
    moved = board.reorder_on_drop(
        ticket_id,
        target_column_id=drop.column_id,
        target_position=drop.position,
    )
    return APIResponse(data=ticket_to_response(moved))
