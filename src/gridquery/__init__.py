"""gridquery - querying core for interactive data grids.

Maintains a derived, re-orderable view over an immutable data table.
Each query aspect (filtering, sorting) is owned by its own controller and
contributes one modifier to the pipeline composed by the
``QueryingController``.
"""

from .data.data_table import DataTable, UnknownColumnError
from .data.modifiers import ChainModifier, FilterModifier, FilterRule, SortModifier
from .querying.options import ColumnOptions, ColumnSortingOrder, FilteringOptions, SortingOptions
from .querying.querying_controller import QueryingController, QueryingState

__all__ = [
    "ChainModifier",
    "ColumnOptions",
    "ColumnSortingOrder",
    "DataTable",
    "FilterModifier",
    "FilterRule",
    "FilteringOptions",
    "QueryingController",
    "QueryingState",
    "SortModifier",
    "SortingOptions",
    "UnknownColumnError",
]
