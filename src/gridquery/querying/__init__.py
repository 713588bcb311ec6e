"""Querying controllers: one controller per query aspect plus the coordinator."""

from .errors import (
    ColumnOptionsError,
    InvalidArgumentError,
    InvalidFilterConditionError,
    InvalidSortingOrderError,
    QueryingError,
)
from .filtering_controller import FilteringController, FilteringState
from .options import (
    ColumnOptions,
    ColumnOptionsMap,
    ColumnSortingOrder,
    FilteringOptions,
    SortingOptions,
    column_options_from_dict,
)
from .options_loader import ColumnOptionsFileLoader
from .querying_controller import QueryingController, QueryingState
from .sorting_controller import SortingController, SortingState

__all__ = [
    "ColumnOptions",
    "ColumnOptionsError",
    "ColumnOptionsFileLoader",
    "ColumnOptionsMap",
    "ColumnSortingOrder",
    "FilteringController",
    "FilteringOptions",
    "FilteringState",
    "InvalidArgumentError",
    "InvalidFilterConditionError",
    "InvalidSortingOrderError",
    "QueryingController",
    "QueryingError",
    "QueryingState",
    "SortingController",
    "SortingOptions",
    "SortingState",
    "column_options_from_dict",
]
