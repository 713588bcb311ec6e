"""Querying error taxonomy.

Configuration conflicts are not errors (they are logged as warnings).
Invalid column references surface from the data table at apply time as
``UnknownColumnError``.
"""

from __future__ import annotations

__all__ = [
    "ColumnOptionsError",
    "InvalidArgumentError",
    "InvalidFilterConditionError",
    "InvalidSortingOrderError",
    "QueryingError",
]


class QueryingError(Exception):
    """Base class for querying errors."""


class InvalidArgumentError(QueryingError, ValueError):
    """Raised when an API call receives a value outside its enumerated set."""


class InvalidSortingOrderError(InvalidArgumentError):
    """Raised for sorting orders other than asc / desc / none."""


class InvalidFilterConditionError(InvalidArgumentError):
    """Raised for unknown filter conditions."""


class ColumnOptionsError(QueryingError, ValueError):
    """Raised when a column options entry has an unexpected shape."""
