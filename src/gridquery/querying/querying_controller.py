"""Querying controller.

Owns one controller per query aspect and the shared ``should_be_updated``
flag, and composes the aspect modifiers into the pipeline applied to the
data table.

Composition order: filtering (row subsetting) runs before sorting (row
ordering), so comparators only see rows that survive the filter and sort
ties are resolved against the filtered set.

State machine::

    UNCONFIGURED --load_options--> DIRTY --proceed--> IDLE
                                     ^                  |
                                     +--state change----+
"""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, List, Mapping, Optional

from ..data.data_table import DataTable
from ..data.modifiers import ChainModifier, DataModifier
from ..services.event_bus import EventBus, QueryingEvent
from .filtering_controller import FilteringController
from .options import ColumnOptions, column_options_from_dict
from .sorting_controller import SortingController

__all__ = ["QueryingController", "QueryingState"]

_logger = logging.getLogger(__name__)


class QueryingState(str, Enum):
    UNCONFIGURED = "unconfigured"
    IDLE = "idle"
    DIRTY = "dirty"


class QueryingController:
    """Coordinator of the querying aspects of a grid.

    Usage:
        querying = QueryingController(table, {"v": {"sorting": {"order": "desc"}}})
        querying.load_options()
        view = querying.proceed()
    """

    def __init__(
        self,
        data_table: DataTable,
        column_options_map: Mapping[str, Any] | None = None,
        *,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.data_table = data_table
        self.event_bus = event_bus
        self._column_options_map = column_options_from_dict(column_options_map)
        self._should_be_updated = False
        self._loaded = False
        self.presentation_table: Optional[DataTable] = None
        self.filtering = FilteringController(self)
        self.sorting = SortingController(self)

    # Configuration ----------------------------------------------------
    @property
    def column_options_map(self) -> Mapping[str, ColumnOptions]:
        return MappingProxyType(self._column_options_map)

    def set_column_options(self, column_options_map: Mapping[str, Any] | None) -> None:
        """Replace the column options wholesale and reload every aspect."""
        self._column_options_map = column_options_from_dict(column_options_map)
        self.load_options()

    def load_options(self) -> None:
        self.filtering.load_options()
        self.sorting.load_options()
        self._loaded = True

    def set_data_table(self, data_table: DataTable) -> None:
        self.data_table = data_table
        self.mark_dirty()

    # Dirty flag -------------------------------------------------------
    @property
    def should_be_updated(self) -> bool:
        return self._should_be_updated

    def mark_dirty(self) -> None:
        self._should_be_updated = True

    @property
    def state(self) -> QueryingState:
        if not self._loaded:
            return QueryingState.UNCONFIGURED
        return QueryingState.DIRTY if self._should_be_updated else QueryingState.IDLE

    # Pipeline ---------------------------------------------------------
    def get_modifiers(self) -> List[DataModifier]:
        """Active modifiers in application order (filtering before sorting)."""
        return [m for m in (self.filtering.modifier, self.sorting.modifier) if m is not None]

    def get_pipeline(self) -> ChainModifier:
        return ChainModifier(tuple(self.get_modifiers()))

    def proceed(self, force: bool = False) -> DataTable:
        """Recompute the presentation table when stale and clear the flag.

        Errors raised by the data table (e.g. ``UnknownColumnError``) propagate;
        the flag and the previous presentation table are left untouched.
        """
        if not (self._should_be_updated or force) and self.presentation_table is not None:
            return self.presentation_table
        pipeline = self.get_pipeline()
        view = self.data_table.apply_modifier(pipeline)
        self.presentation_table = view
        self._should_be_updated = False
        _logger.debug(
            "presentation table recomputed: modifiers=%d rows=%d/%d",
            len(pipeline.modifiers),
            view.get_row_count(),
            self.data_table.get_row_count(),
        )
        self.publish(QueryingEvent.VIEW_UPDATED, {"row_count": view.get_row_count()})
        return view

    def publish(self, name: QueryingEvent, payload: Any = None) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(name, payload)
