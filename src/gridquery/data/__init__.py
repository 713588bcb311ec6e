"""Data table and modifier primitives consumed by the querying controllers."""

from .data_table import (
    ColumnValueType,
    Comparator,
    DataTable,
    UnknownColumnError,
    infer_column_type,
)
from .modifiers import (
    ChainModifier,
    DataModifier,
    FilterCondition,
    FilterModifier,
    FilterRule,
    SortModifier,
)

__all__ = [
    "ChainModifier",
    "ColumnValueType",
    "Comparator",
    "DataModifier",
    "DataTable",
    "FilterCondition",
    "FilterModifier",
    "FilterRule",
    "SortModifier",
    "UnknownColumnError",
    "infer_column_type",
]
