"""Diagnostics channel.

Captures recent log records of the ``gridquery`` logger namespace into a
ring buffer so a host can surface warnings (e.g. sorting configuration
conflicts) in its own UI. Optionally publishes
``QueryingEvent.DIAGNOSTIC_RECORDED`` on an ``EventBus``.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from ..config import settings
from .event_bus import EventBus, QueryingEvent

__all__ = ["DiagnosticEntry", "DiagnosticsLog"]


@dataclass(frozen=True)
class DiagnosticEntry:
    level: str
    name: str
    message: str
    created: float


class _RingBufferHandler(logging.Handler):
    def __init__(self, log: "DiagnosticsLog") -> None:
        super().__init__()
        self._log = log

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self._log._ingest_record(record)


class DiagnosticsLog:
    def __init__(
        self,
        capacity: int = settings.DIAGNOSTICS_CAPACITY,
        *,
        event_bus: Optional[EventBus] = None,
        level: int = logging.WARNING,
    ) -> None:
        self._entries: Deque[DiagnosticEntry] = deque(maxlen=capacity)
        self._event_bus = event_bus
        self._handler = _RingBufferHandler(self)
        self._handler.setLevel(level)
        self._logger: Optional[logging.Logger] = None
        self._previous_level: Optional[int] = None

    # Lifecycle --------------------------------------------------------
    def attach(self, logger_name: str = settings.LOGGER_NAME) -> None:
        if self._logger is not None:
            return
        logger = logging.getLogger(logger_name)
        logger.addHandler(self._handler)
        # Make sure records at the handler level reach us
        if logger.getEffectiveLevel() > self._handler.level:
            self._previous_level = logger.level
            logger.setLevel(self._handler.level)
        self._logger = logger

    def detach(self) -> None:
        if self._logger is None:
            return
        self._logger.removeHandler(self._handler)
        if self._previous_level is not None:
            self._logger.setLevel(self._previous_level)
            self._previous_level = None
        self._logger = None

    @property
    def attached(self) -> bool:
        return self._logger is not None

    # Internal ingestion -----------------------------------------------
    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = DiagnosticEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
        )
        self._entries.append(entry)
        if self._event_bus is not None:
            self._event_bus.publish(
                QueryingEvent.DIAGNOSTIC_RECORDED,
                {"level": entry.level, "name": entry.name, "message": entry.message[:120]},
            )

    # Query ------------------------------------------------------------
    def recent(self, limit: Optional[int] = None) -> List[DiagnosticEntry]:
        data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter_entries(
        self, *, level: str | None = None, name_contains: str | None = None
    ) -> List[DiagnosticEntry]:
        out: List[DiagnosticEntry] = []
        for e in self.recent():
            if level and e.level != level:
                continue
            if name_contains and name_contains not in e.name:
                continue
            out.append(e)
        return out

    def clear(self) -> None:
        self._entries.clear()
