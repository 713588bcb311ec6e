"""Filtering controller.

Manages the filtering aspect of the querying pipeline. Unlike sorting,
several columns may filter at once; their rules are combined with a
logical AND into a single ``FilterModifier``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Optional, Tuple, Union

from ..data.modifiers import FilterCondition, FilterModifier, FilterRule
from ..services.event_bus import QueryingEvent
from .options import normalize_filter_condition

if TYPE_CHECKING:  # pragma: no cover
    from .querying_controller import QueryingController

__all__ = ["FilteringController", "FilteringState"]

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilteringState:
    rules: Tuple[FilterRule, ...] = ()

    @property
    def is_active(self) -> bool:
        return bool(self.rules)

    def rule_for(self, column_id: str) -> Optional[FilterRule]:
        return next((r for r in self.rules if r.column_id == column_id), None)


class FilteringController:
    def __init__(self, querying: "QueryingController") -> None:
        self._querying = querying
        self.current_filtering: Optional[FilteringState] = None
        self._initial_filtering: Optional[FilteringState] = None
        self.modifier: Optional[FilterModifier] = None

    @property
    def initial_filtering(self) -> Optional[FilteringState]:
        return self._initial_filtering

    def set_filter(
        self,
        column_id: str,
        condition: Union[FilterCondition, str, None],
        value: Any = None,
    ) -> None:
        """Set (or with ``condition=None`` remove) the filter rule of one column."""
        rules = list(self.current_filtering.rules) if self.current_filtering else []
        index = next((i for i, r in enumerate(rules) if r.column_id == column_id), None)
        if condition is None:
            if index is not None:
                del rules[index]
        else:
            rule = FilterRule(column_id, normalize_filter_condition(condition), value)
            if index is None:
                rules.append(rule)
            else:
                rules[index] = rule
        self._apply(FilteringState(tuple(rules)))

    def clear_filter(self, column_id: Optional[str] = None) -> None:
        if column_id is None:
            self._apply(FilteringState())
        else:
            self.set_filter(column_id, None)

    def set_filtering(self, rules: Iterable[FilterRule]) -> None:
        normalized = tuple(
            FilterRule(r.column_id, normalize_filter_condition(r.condition), r.value) for r in rules
        )
        self._apply(FilteringState(normalized))

    def load_options(self) -> None:
        state = self._get_filtering_options()
        if state == self._initial_filtering:
            return
        self._initial_filtering = state
        self._apply(state)

    def _get_filtering_options(self) -> FilteringState:
        rules = []
        for column_id, options in self._querying.column_options_map.items():
            filtering = options.filtering
            if filtering is None or filtering.condition is None:
                continue
            rules.append(FilterRule(column_id, filtering.condition, filtering.value))
        return FilteringState(tuple(rules))

    def _apply(self, state: FilteringState) -> None:
        previous = self.current_filtering
        self.current_filtering = state
        self.modifier = FilterModifier(state.rules) if state.is_active else None
        if state == previous:
            return
        _logger.debug("filtering changed: %d rule(s)", len(state.rules))
        self._querying.mark_dirty()
        self._querying.publish(
            QueryingEvent.FILTERING_CHANGED,
            {
                "rules": [
                    {"column_id": r.column_id, "condition": r.condition.value, "value": r.value}
                    for r in state.rules
                ]
            },
        )
