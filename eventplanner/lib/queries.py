"""Read-only views derived from the store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable

from eventplanner.constants import HOME_PREVIEW_LIMIT, NOT_AVAILABLE
from eventplanner.lib.models import Event, Registration


@dataclass
class JoinedRegistration:
    registration: Registration
    event: Event | None


def registered_count(event: Event) -> int:
    return len(event.registered_users)


def is_event_full(event: Event) -> bool:
    """Whether the Register action should be disabled for this event."""
    return registered_count(event) >= event.capacity


def upcoming_events(events: Iterable[Event], today: date | None = None) -> list[Event]:
    """Events dated today or later, oldest first.

    Events sharing a date stay in creation order.
    """
    today = today or date.today()
    return sorted((e for e in events if e.date >= today), key=lambda e: e.date)


def home_preview(events: Iterable[Event], today: date | None = None) -> list[Event]:
    return upcoming_events(events, today)[:HOME_PREVIEW_LIMIT]


def user_registrations(
    registrations: Iterable[Registration], events: Iterable[Event]
) -> list[JoinedRegistration]:
    """Every registration paired with its event, or None if the event is gone."""
    by_id = {}
    for event in events:
        by_id.setdefault(event.id, event)
    return [JoinedRegistration(r, by_id.get(r.event_id)) for r in registrations]


def schedule_entries(
    registrations: Iterable[Registration], events: Iterable[Event]
) -> list[dict[str, Any]]:
    """Rows for the schedule page; missing events degrade to NOT_AVAILABLE."""
    rows = []
    for joined in user_registrations(registrations, events):
        reg, event = joined.registration, joined.event
        rows.append(
            {
                "id": reg.id,
                "event_id": reg.event_id,
                "event_title": reg.event_title,
                "date": event.date if event else NOT_AVAILABLE,
                "time": (event.time if event else "") or NOT_AVAILABLE,
                "location": (event.location if event else "") or NOT_AVAILABLE,
                "registered_at": reg.registered_at,
            }
        )
    return rows
