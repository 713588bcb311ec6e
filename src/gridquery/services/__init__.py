"""Host-facing services: event notifications and the diagnostics channel."""

from .diagnostics import DiagnosticEntry, DiagnosticsLog
from .event_bus import Event, EventBus, QueryingEvent, Subscription

__all__ = [
    "DiagnosticEntry",
    "DiagnosticsLog",
    "Event",
    "EventBus",
    "QueryingEvent",
    "Subscription",
]
