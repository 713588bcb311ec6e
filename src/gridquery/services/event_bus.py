"""EventBus for querying notifications.

Lightweight synchronous publish/subscribe mechanism with typed events.
Hosts subscribe to learn when query state changes, when configuration
conflicts are detected and when a new presentation view is available.

Goals:
 - Decouple the querying controllers from the host UI
 - Safe error isolation: one failing handler doesn't break the publish cycle
 - Allow one-shot (once) subscriptions

Dispatch is synchronous and single-threaded; hosts driving the bus from
several threads must serialize their calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "QueryingEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]


class QueryingEvent(str, Enum):
    SORTING_CHANGED = "sorting_changed"
    FILTERING_CHANGED = "filtering_changed"
    SORTING_CONFLICT = "sorting_conflict"
    VIEW_UPDATED = "view_updated"
    DIAGNOSTIC_RECORDED = "diagnostic_recorded"


@dataclass
class Event:
    name: str  # matches QueryingEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | QueryingEvent) -> str:
    return name.value if isinstance(name, QueryingEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Handlers are invoked from a snapshot of the subscriber list so they can
    subscribe/unsubscribe while an event is being dispatched.
    """

    def __init__(self) -> None:
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------
    def subscribe(
        self, name: str | QueryingEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        key = _key(name)
        sub = Subscription(event=key, handler=handler, once=once)
        self._subs.setdefault(key, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        bucket = self._subs.get(sub.event)
        if bucket:
            self._subs[sub.event] = [s for s in bucket if s is not sub]
            if not self._subs[sub.event]:
                self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        self._subs.clear()
        self._errors.clear()

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def publish(self, name: str | QueryingEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        subs = list(self._subs.get(key, ()))
        to_remove: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - capture any handler failure
                self._errors.append((evt, exc))
            else:
                if sub.once:
                    to_remove.append(sub)
        for sub in to_remove:
            self.unsubscribe(sub)
        return evt

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def subscriber_count(self, name: str | QueryingEvent) -> int:
        return len(self._subs.get(_key(name), ()))

    def list_events(self) -> list[str]:
        return list(self._subs.keys())

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        return list(self._errors)
