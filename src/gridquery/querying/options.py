"""Column options consumed by the querying controllers.

The column options map is read-only from the querying side. It is an
insertion-ordered ``dict`` (column id -> ``ColumnOptions``); declaration
order matters for resolving sorting conflicts.

Plain configuration shape accepted by ``column_options_from_dict``::

    {
        "name": {"sorting": {"order": "asc", "compare": my_cmp}},
        "age": {"filtering": {"condition": "greaterThan", "value": 18}},
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from ..data.data_table import Comparator
from ..data.modifiers import FilterCondition
from .errors import ColumnOptionsError, InvalidFilterConditionError, InvalidSortingOrderError

__all__ = [
    "ColumnOptions",
    "ColumnOptionsMap",
    "ColumnSortingOrder",
    "FilteringOptions",
    "SortingOptions",
    "column_options_from_dict",
    "normalize_filter_condition",
    "normalize_sorting_order",
]


class ColumnSortingOrder(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"
    NONE = "none"


_ORDER_ALIASES = {
    "asc": ColumnSortingOrder.ASCENDING,
    "ascending": ColumnSortingOrder.ASCENDING,
    "desc": ColumnSortingOrder.DESCENDING,
    "descending": ColumnSortingOrder.DESCENDING,
    "none": ColumnSortingOrder.NONE,
}

SortingOrderLike = Union[ColumnSortingOrder, str, None]


def normalize_sorting_order(order: SortingOrderLike) -> ColumnSortingOrder:
    """Map ``order`` onto ``ColumnSortingOrder``; ``None`` means no sorting.

    Raises InvalidSortingOrderError for anything outside the enumerated set.
    """
    if order is None:
        return ColumnSortingOrder.NONE
    if isinstance(order, ColumnSortingOrder):
        return order
    if isinstance(order, str):
        found = _ORDER_ALIASES.get(order.strip().lower())
        if found is not None:
            return found
    raise InvalidSortingOrderError(
        f"Invalid sorting order {order!r}; expected one of 'asc', 'desc', 'none'"
    )


def normalize_filter_condition(condition: Union[FilterCondition, str]) -> FilterCondition:
    if isinstance(condition, FilterCondition):
        return condition
    try:
        return FilterCondition(condition)
    except ValueError:
        raise InvalidFilterConditionError(f"Invalid filter condition {condition!r}") from None


@dataclass(frozen=True)
class SortingOptions:
    order: ColumnSortingOrder = ColumnSortingOrder.NONE
    compare: Optional[Comparator] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "order", normalize_sorting_order(self.order))


@dataclass(frozen=True)
class FilteringOptions:
    condition: Optional[FilterCondition] = None
    value: Any = None

    def __post_init__(self) -> None:
        if self.condition is not None:
            object.__setattr__(self, "condition", normalize_filter_condition(self.condition))


@dataclass(frozen=True)
class ColumnOptions:
    sorting: Optional[SortingOptions] = None
    filtering: Optional[FilteringOptions] = None


ColumnOptionsMap = Dict[str, ColumnOptions]


def _sorting_from_raw(column_id: str, raw: Any) -> Optional[SortingOptions]:
    if raw is None or isinstance(raw, SortingOptions):
        return raw
    if not isinstance(raw, Mapping):
        raise ColumnOptionsError(f"Column '{column_id}': 'sorting' must be a mapping")
    compare = raw.get("compare")
    if compare is not None and not callable(compare):
        raise ColumnOptionsError(f"Column '{column_id}': 'sorting.compare' must be callable")
    return SortingOptions(order=raw.get("order"), compare=compare)


def _filtering_from_raw(column_id: str, raw: Any) -> Optional[FilteringOptions]:
    if raw is None or isinstance(raw, FilteringOptions):
        return raw
    if not isinstance(raw, Mapping):
        raise ColumnOptionsError(f"Column '{column_id}': 'filtering' must be a mapping")
    return FilteringOptions(condition=raw.get("condition"), value=raw.get("value"))


def column_options_from_dict(raw: Mapping[str, Any] | None) -> ColumnOptionsMap:
    """Build an ordered column options map from plain configuration data."""
    result: ColumnOptionsMap = {}
    for column_id, entry in (raw or {}).items():
        if isinstance(entry, ColumnOptions):
            result[column_id] = entry
            continue
        if entry is None:
            entry = {}
        if not isinstance(entry, Mapping):
            raise ColumnOptionsError(f"Column '{column_id}': options must be a mapping")
        result[column_id] = ColumnOptions(
            sorting=_sorting_from_raw(column_id, entry.get("sorting")),
            filtering=_filtering_from_raw(column_id, entry.get("filtering")),
        )
    return result
