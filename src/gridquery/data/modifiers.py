"""Data modifiers.

A modifier is an immutable descriptor of a table transformation. Modifiers
are frozen dataclasses so two value-equal descriptors always produce the
same output for the same input table.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable, Dict, Optional, Tuple

from .data_table import Comparator, DataTable

__all__ = [
    "ChainModifier",
    "DataModifier",
    "FilterCondition",
    "FilterModifier",
    "FilterRule",
    "SortModifier",
    "SORT_DIRECTIONS",
]

SORT_DIRECTIONS = ("asc", "desc")


class DataModifier(ABC):
    """Base class of immutable table transformations."""

    @abstractmethod
    def modify_table(self, table: DataTable) -> DataTable:
        """Return a new table derived from ``table``."""


@dataclass(frozen=True)
class SortModifier(DataModifier):
    """Stable single-column sort; ties keep their input order."""

    order_by_column: str
    direction: str = "asc"
    compare: Optional[Comparator] = None

    def __post_init__(self) -> None:
        if self.direction not in SORT_DIRECTIONS:
            raise ValueError(f"Unsupported sort direction: {self.direction!r}")

    def modify_table(self, table: DataTable) -> DataTable:
        values = table.get_column(self.order_by_column)
        compare = self.compare or table.get_default_comparator(self.order_by_column)
        key = cmp_to_key(compare)
        # sorted(reverse=True) keeps equal elements in their original order
        order = sorted(
            range(len(values)),
            key=lambda i: key(values[i]),
            reverse=self.direction == "desc",
        )
        return table.derive(order)


class FilterCondition(str, Enum):
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "doesNotContain"
    EQUALS = "equals"
    DOES_NOT_EQUAL = "doesNotEqual"
    BEGINS_WITH = "beginsWith"
    ENDS_WITH = "endsWith"
    GREATER_THAN = "greaterThan"
    GREATER_THAN_OR_EQUAL_TO = "greaterThanOrEqualTo"
    LESS_THAN = "lessThan"
    LESS_THAN_OR_EQUAL_TO = "lessThanOrEqualTo"
    EMPTY = "empty"
    NOT_EMPTY = "notEmpty"


def _text(value: Any) -> str:
    return "" if value is None else str(value).casefold()


def _ordered(op: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def check(cell: Any, value: Any) -> bool:
        if cell is None or value is None:
            return False
        try:
            return op(cell, value)
        except TypeError:
            return False

    return check


_CONDITIONS: Dict[FilterCondition, Callable[[Any, Any], bool]] = {
    FilterCondition.CONTAINS: lambda cell, value: _text(value) in _text(cell),
    FilterCondition.DOES_NOT_CONTAIN: lambda cell, value: _text(value) not in _text(cell),
    FilterCondition.EQUALS: lambda cell, value: cell == value,
    FilterCondition.DOES_NOT_EQUAL: lambda cell, value: cell != value,
    FilterCondition.BEGINS_WITH: lambda cell, value: _text(cell).startswith(_text(value)),
    FilterCondition.ENDS_WITH: lambda cell, value: _text(cell).endswith(_text(value)),
    FilterCondition.GREATER_THAN: _ordered(lambda cell, value: cell > value),
    FilterCondition.GREATER_THAN_OR_EQUAL_TO: _ordered(lambda cell, value: cell >= value),
    FilterCondition.LESS_THAN: _ordered(lambda cell, value: cell < value),
    FilterCondition.LESS_THAN_OR_EQUAL_TO: _ordered(lambda cell, value: cell <= value),
    FilterCondition.EMPTY: lambda cell, _value: cell is None or cell == "",
    FilterCondition.NOT_EMPTY: lambda cell, _value: not (cell is None or cell == ""),
}


@dataclass(frozen=True)
class FilterRule:
    column_id: str
    condition: FilterCondition
    value: Any = None

    def matches(self, cell: Any) -> bool:
        return _CONDITIONS[FilterCondition(self.condition)](cell, self.value)


@dataclass(frozen=True)
class FilterModifier(DataModifier):
    """Keep the rows satisfying every rule."""

    rules: Tuple[FilterRule, ...] = ()

    def modify_table(self, table: DataTable) -> DataTable:
        columns = {rule.column_id: table.get_column(rule.column_id) for rule in self.rules}
        kept = [
            i
            for i in range(table.get_row_count())
            if all(rule.matches(columns[rule.column_id][i]) for rule in self.rules)
        ]
        return table.derive(kept)


@dataclass(frozen=True)
class ChainModifier(DataModifier):
    """Apply modifiers in sequence; an empty chain is the identity."""

    modifiers: Tuple[DataModifier, ...] = ()

    def modify_table(self, table: DataTable) -> DataTable:
        result = table.apply_modifier(None)
        for modifier in self.modifiers:
            result = modifier.modify_table(result)
        return result
