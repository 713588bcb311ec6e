"""Sorting controller.

Manages the sorting aspect of the querying pipeline. Three inputs are
reconciled into one ``SortModifier``: explicit ``set_sorting`` calls,
the declarative per-column ``sorting`` options, and the previously
recorded state.

Only one column can drive sorting at a time. When several columns declare
a sorting order, the last declared one wins and a warning is logged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..config import settings
from ..data.modifiers import SortModifier
from ..services.event_bus import QueryingEvent
from .options import ColumnSortingOrder, SortingOrderLike, normalize_sorting_order

if TYPE_CHECKING:  # pragma: no cover
    from .querying_controller import QueryingController

__all__ = ["SortingController", "SortingState"]

_logger = logging.getLogger(__name__)

_TOGGLE_NEXT = {
    ColumnSortingOrder.ASCENDING: ColumnSortingOrder.DESCENDING,
    ColumnSortingOrder.DESCENDING: ColumnSortingOrder.NONE,
    ColumnSortingOrder.NONE: ColumnSortingOrder.ASCENDING,
}


@dataclass(frozen=True)
class SortingState:
    """Sorting value state. A column with order ``none`` is inert."""

    order: ColumnSortingOrder = ColumnSortingOrder.NONE
    column_id: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.column_id is not None and self.order is not ColumnSortingOrder.NONE


class SortingController:
    def __init__(self, querying: "QueryingController") -> None:
        self._querying = querying
        self.current_sorting: Optional[SortingState] = None
        # Sorting applied on creation or after options are reloaded with changes
        self._initial_sorting: Optional[SortingState] = None
        self.modifier: Optional[SortModifier] = None

    @property
    def initial_sorting(self) -> Optional[SortingState]:
        return self._initial_sorting

    def set_sorting(self, order: SortingOrderLike, column_id: Optional[str] = None) -> None:
        """Set the sorting state.

        Marks the querying controller dirty when ``(column_id, order)``
        differs from the current state. The modifier is rebuilt in any case
        so it follows the current comparator configuration.

        Raises InvalidSortingOrderError for an unknown ``order``.
        """
        state = SortingState(order=normalize_sorting_order(order), column_id=column_id)
        previous = self.current_sorting
        self.current_sorting = state
        # State and modifier are installed before anyone is told about the change
        self.modifier = self._create_modifier()
        if state == previous:
            return
        _logger.debug(
            "sorting changed: column=%s order=%s (was %s)", column_id, state.order.value, previous
        )
        self._querying.mark_dirty()
        self._querying.publish(
            QueryingEvent.SORTING_CHANGED,
            {"column_id": state.column_id, "order": state.order.value},
        )

    def toggle(self, column_id: str) -> ColumnSortingOrder:
        """Advance ``column_id`` through asc -> desc -> none and return the new order."""
        current = self.current_sorting
        if current is None or current.column_id != column_id:
            order = ColumnSortingOrder.ASCENDING
        else:
            order = _TOGGLE_NEXT[current.order]
        self.set_sorting(order, column_id)
        return order

    def load_options(self) -> None:
        """Load the sorting state declared in the column options.

        Applied only when it differs from the previously loaded state, so
        a more recent ``set_sorting`` call survives an unchanged reload.
        """
        state, ignored = self._get_sorting_options()
        if state == self._initial_sorting:
            self._refresh_modifier()
            return
        self._initial_sorting = state
        self.set_sorting(state.order, state.column_id)
        if ignored:
            self._report_conflict(state.column_id, ignored)

    def _get_sorting_options(self) -> Tuple[SortingState, List[str]]:
        options_map = self._querying.column_options_map
        if not options_map:
            return SortingState(), []

        found: Optional[SortingState] = None
        ignored: List[str] = []
        for column_id in reversed(list(options_map)):
            sorting = options_map[column_id].sorting
            if sorting is None or sorting.order is ColumnSortingOrder.NONE:
                continue
            if found is None:
                found = SortingState(order=sorting.order, column_id=column_id)
                continue
            ignored.append(column_id)
            if not settings.REPORT_ALL_SORTING_CONFLICTS:
                break
        return found or SortingState(), ignored

    def _report_conflict(self, winner: Optional[str], ignored: List[str]) -> None:
        _logger.warning(
            "Only one column can be sorted at a time. Data will be sorted only by the "
            'last found column with the sorting order defined in the options: "%s" '
            "(ignored: %s).",
            winner,
            ", ".join(f'"{c}"' for c in reversed(ignored)),
        )
        self._querying.publish(
            QueryingEvent.SORTING_CONFLICT,
            {"column_id": winner, "ignored": list(reversed(ignored))},
        )

    def _refresh_modifier(self) -> None:
        # Comparator configuration may change while the sorted column and order do not
        modifier = self._create_modifier()
        if modifier != self.modifier:
            _logger.debug("sorting modifier changed without state change: %s", modifier)
            self._querying.mark_dirty()
        self.modifier = modifier

    def _create_modifier(self) -> Optional[SortModifier]:
        state = self.current_sorting
        if state is None or not state.is_active:
            return None
        column_options = self._querying.column_options_map.get(state.column_id)
        sorting = column_options.sorting if column_options else None
        return SortModifier(
            order_by_column=state.column_id,
            direction=state.order.value,
            compare=sorting.compare if sorting else None,
        )
