"""Ordering engine - keeps per-column order values dense.

Every function takes a column's tickets (any objects with ``id`` and
``order``), works out the target sequence, and returns only the tickets whose
order has to change. Nothing here touches the store or mutates its inputs.

Tickets are sequenced by ``(order, id)`` and renumbered by position, so the
result is always ``0..N-1`` even if the stored values had drifted.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ticketboard.ordering.exceptions import OrderingError
from ticketboard.ordering.models import Orderable, ShiftSet

logger = logging.getLogger(__name__)


def _sequence(tickets: Sequence[Orderable]) -> list[int | None]:
    return [t.id for t in sorted(tickets, key=lambda t: (t.order, t.id))]


def _renumber(sequence: list[int | None], tickets: Sequence[Orderable]) -> dict[int, int]:
    """Diff a target sequence against current orders. None marks a free slot."""
    current = {t.id: t.order for t in tickets}
    return {
        ticket_id: index
        for index, ticket_id in enumerate(sequence)
        if ticket_id is not None and current[ticket_id] != index
    }


def _index_of(sequence: list[int | None], ticket_id: int) -> int:
    try:
        return sequence.index(ticket_id)
    except ValueError:
        raise OrderingError(f"Ticket {ticket_id} is not in this column") from None


def insert_at(tickets: Sequence[Orderable], position: int | None = None) -> ShiftSet:
    """Make room for a new ticket at ``position``.

    Args:
        tickets: Current tickets of the target column.
        position: Target order value, or None to append.

    Returns:
        ShiftSet with the new ticket's order and the existing tickets to shift.

    Raises:
        OrderingError: If position is outside 0..len(tickets).
    """
    sequence = _sequence(tickets)
    if position is None:
        position = len(sequence)
    if not 0 <= position <= len(sequence):
        raise OrderingError(f"Position {position} outside 0..{len(sequence)}")

    sequence.insert(position, None)
    shifted = _renumber(sequence, tickets)
    logger.debug("insert_at %d shifts %d tickets", position, len(shifted))
    return ShiftSet(order=position, shifted=shifted)


def remove_from(tickets: Sequence[Orderable], ticket_id: int) -> dict[int, int]:
    """Close the gap left by removing ``ticket_id`` from its column.

    The removed ticket itself is never part of the result.

    Raises:
        OrderingError: If the ticket is not among ``tickets``.
    """
    sequence = _sequence(tickets)
    sequence.pop(_index_of(sequence, ticket_id))
    shifted = _renumber(sequence, tickets)
    logger.debug("remove_from ticket %d shifts %d tickets", ticket_id, len(shifted))
    return shifted


def move_within(tickets: Sequence[Orderable], ticket_id: int, position: int) -> dict[int, int]:
    """Move a ticket to ``position`` inside its own column.

    Equivalent to a removal followed by an insertion at ``position``; the
    run between the old and new slot shifts by one. The moved ticket is
    included when its own order changes.

    Raises:
        OrderingError: If the ticket is missing or position is outside 0..N-1.
    """
    sequence = _sequence(tickets)
    sequence.pop(_index_of(sequence, ticket_id))
    if not 0 <= position <= len(sequence):
        raise OrderingError(f"Position {position} outside 0..{len(sequence)}")

    sequence.insert(position, ticket_id)
    return _renumber(sequence, tickets)


def reindex_full(tickets: Sequence[Orderable], ordered_ids: Sequence[int]) -> dict[int, int]:
    """Reassign orders from an externally observed sequence.

    ``ordered_ids`` usually covers the materialized page window, which is
    always a prefix of the column. Tickets it leaves out keep their relative
    order and follow the listed ones.

    Raises:
        OrderingError: On duplicate ids or ids that are not in the column.
    """
    known = {t.id for t in tickets}
    seen: set[int] = set()
    for ticket_id in ordered_ids:
        if ticket_id in seen:
            raise OrderingError(f"Ticket {ticket_id} appears more than once")
        if ticket_id not in known:
            raise OrderingError(f"Ticket {ticket_id} is not in this column")
        seen.add(ticket_id)

    rest = [ticket_id for ticket_id in _sequence(tickets) if ticket_id not in seen]
    return _renumber([*ordered_ids, *rest], tickets)
