"""Exceptions for the ordering engine."""


class OrderingError(ValueError):
    """Requested position or sequence is inconsistent with the column."""
