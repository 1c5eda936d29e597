"""Pagination - cursor-based "load more" paging per column."""

from ticketboard.pagination.models import Page
from ticketboard.pagination.paginator import Paginator, cursor_for

__all__ = [
    "Page",
    "Paginator",
    "cursor_for",
]
