"""Pytest fixtures for Event Planner tests."""

from datetime import date, datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from eventplanner.app import create_app
from eventplanner.config import TestingConfig
from eventplanner.lib.events import EventSystem
from eventplanner.lib.storage import MemoryStorage
from eventplanner.lib.store import Store
from eventplanner.planner import EventPlanner


def _event_fields(**overrides) -> dict:
    """Valid create-event form values, dated tomorrow."""
    fields = {
        "title": "Launch",
        "description": "Product launch party",
        "date": (date.today() + timedelta(days=1)).isoformat(),
        "time": "18:30",
        "location": "Main Hall",
        "capacity": "10",
        "category": "social",
    }
    fields.update(overrides)
    return fields


def _registration_fields(**overrides) -> dict:
    fields = {"name": "Ada Lovelace", "email": "ada@example.com", "phone": "555-0100"}
    fields.update(overrides)
    return fields


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, moment: datetime | None = None):
        self.moment = moment or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.moment

    def advance(self, **kwargs) -> None:
        self.moment += timedelta(**kwargs)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def event_system():
    return EventSystem()


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def store(storage, event_system, clock):
    s = Store(storage, events=event_system, clock=clock)
    s.load()
    return s


@pytest.fixture
def planner(storage):
    """A planner session backed by in-memory storage, with socketio mocked."""
    return EventPlanner(storage=storage, socketio=MagicMock())


@pytest.fixture
def app(planner):
    return create_app(planner, TestingConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def event_fields():
    """Factory for valid create-event form values."""
    return _event_fields


@pytest.fixture
def registration_fields():
    """Factory for valid registration form values."""
    return _registration_fields
