"""Column endpoints: board load, load more, add ticket, resequence."""

from fastapi import APIRouter, Query, status

from ticketboard.api.dependencies import BoardServiceDep
from ticketboard.api.models import (
    APIResponse,
    ColumnReorder,
    ColumnResponse,
    TicketCreate,
    TicketResponse,
    column_to_response,
    ticket_to_response,
)

router = APIRouter(prefix="/columns", tags=["columns"])


@router.get("", response_model=APIResponse[list[ColumnResponse]])
def list_columns(
    board: BoardServiceDep,
    page_size: int | None = Query(default=None, ge=1, description="Tickets per column"),
) -> APIResponse[list[ColumnResponse]]:
    """List all columns with their first page of tickets."""
    columns = board.list_columns_with_first_page(page_size=page_size)
    return APIResponse(data=[column_to_response(c) for c in columns])


@router.get("/{column_id}/tickets", response_model=APIResponse[ColumnResponse])
def load_more_tickets(
    column_id: int,
    board: BoardServiceDep,
    shown: int = Query(default=0, ge=0, description="Tickets already shown in this column"),
    page_size: int | None = Query(default=None, ge=1, description="Tickets to load"),
) -> APIResponse[ColumnResponse]:
    """Load the next page of a column's tickets."""
    column = board.load_more_tickets(column_id, already_shown=shown, page_size=page_size)
    return APIResponse(data=column_to_response(column))


@router.post(
    "/{column_id}/tickets",
    response_model=APIResponse[TicketResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_ticket(
    column_id: int, ticket: TicketCreate, board: BoardServiceDep
) -> APIResponse[TicketResponse]:
    """Add a ticket to a column."""
    created = board.create_ticket(
        column_id,
        title=ticket.title,
        image=ticket.image,
        position=ticket.position,
    )
    return APIResponse(data=ticket_to_response(created))


@router.put("/{column_id}/order", response_model=APIResponse[list[TicketResponse]])
def reorder_column(
    column_id: int, reorder: ColumnReorder, board: BoardServiceDep
) -> APIResponse[list[TicketResponse]]:
    """Resequence a column from its displayed order."""
    tickets = board.batch_reindex(column_id, reorder.ticket_ids)
    return APIResponse(data=[ticket_to_response(t) for t in tickets])
