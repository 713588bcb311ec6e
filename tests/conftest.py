# Shared fixtures for the querying tests. Qt tests run on the offscreen platform.

import os

import pytest

from gridquery.data.data_table import DataTable
from gridquery.services.event_bus import EventBus

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def make_table():
    """Five rows; ids 2 and 4 share the highest value."""
    return DataTable(
        {
            "id": [1, 2, 3, 4, 5],
            "v": [5, 9, 1, 9, 3],
            "name": ["delta", "Alpha", "echo", "bravo", "charlie"],
        }
    )


@pytest.fixture
def table():
    return make_table()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def recorded(bus):
    """Collect (event name, payload) pairs published on the bus."""
    events = []
    for name in (
        "sorting_changed",
        "filtering_changed",
        "sorting_conflict",
        "view_updated",
    ):
        bus.subscribe(name, lambda evt: events.append((evt.name, evt.payload)))
    return events
