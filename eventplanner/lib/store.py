"""Events and registrations held in memory and mirrored to key-value storage."""

from __future__ import annotations

import dataclasses
import json
import logging
from datetime import date, datetime, timezone
from typing import Any, Callable

from eventplanner.constants import EVENTS_KEY, REGISTRATIONS_KEY
from eventplanner.lib.events import EventSystem
from eventplanner.lib.models import Category, Event, Registration
from eventplanner.lib.storage import KeyValueStorage, StorageCorruptError


class StoreLoadError(Exception):
    """Persisted data could not be parsed (only raised in strict mode)."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """Format like a browser's Date.toISOString(): millisecond precision, Z suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


class Store:
    """Single source of truth for events and registrations.

    Both collections are loaded once by `load()`. Every mutation is followed by
    an explicit save of the collection it touched and an `events_update` or
    `registrations_update` notification on the event system.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        events: EventSystem | None = None,
        strict: bool = False,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.storage = storage
        self.events: list[Event] = []
        self.registrations: list[Registration] = []
        self._notifier = events or EventSystem()
        self._strict = strict
        self._clock = clock
        self._last_id = 0

    def load(self) -> None:
        """Read both collections from storage. Missing keys load as empty lists."""
        self.events = self._load_collection(EVENTS_KEY, Event.from_dict)
        self.registrations = self._load_collection(REGISTRATIONS_KEY, Registration.from_dict)
        logging.info(
            f"Loaded {len(self.events)} event(s) and {len(self.registrations)} registration(s)"
        )

    def _load_collection(self, key: str, from_dict: Callable[[dict[str, Any]], Any]) -> list:
        try:
            raw = self.storage.get(key)
        except StorageCorruptError as e:
            raise StoreLoadError(f"Storage could not be read: {e}") from e
        if raw is None:
            return []
        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError(f"expected a JSON array, got {type(items).__name__}")
            return [from_dict(item) for item in items]
        except (ValueError, KeyError, TypeError) as e:
            if self._strict:
                raise StoreLoadError(f"Malformed data under storage key '{key}': {e}") from e
            logging.error(f"Malformed data under storage key '{key}', resetting to empty: {e}")
            self._keep_failed_value(key, raw)
            return []

    def _keep_failed_value(self, key: str, raw: str) -> None:
        # The next save overwrites `key`, so the unreadable value is copied aside first
        failed_key = f"{key}.failed-{self._clock().strftime('%Y-%m-%d-%H%M%S')}"
        self.storage.set(failed_key, raw)
        logging.warning(f"Kept the unreadable value under storage key '{failed_key}'")

    def save_events(self) -> None:
        self.storage.set(EVENTS_KEY, json.dumps([e.to_dict() for e in self.events]))

    def save_registrations(self) -> None:
        self.storage.set(
            REGISTRATIONS_KEY, json.dumps([r.to_dict() for r in self.registrations])
        )

    def save(self) -> None:
        """Write both collections back to storage."""
        self.save_events()
        self.save_registrations()

    def _new_id(self, existing: list) -> int:
        """Creation time in epoch milliseconds, bumped past any id already handed out."""
        candidate = int(self._clock().timestamp() * 1000)
        highest = max((item.id for item in existing), default=0)
        new_id = max(candidate, highest + 1, self._last_id + 1)
        self._last_id = new_id
        return new_id

    def get_event(self, event_id: int) -> Event | None:
        return next((e for e in self.events if e.id == event_id), None)

    def create_event(self, fields: dict[str, Any]) -> Event:
        """Append a new event built from form fields and persist it."""
        event_date = fields["date"]
        if isinstance(event_date, str):
            event_date = date.fromisoformat(event_date)
        event = Event(
            id=self._new_id(self.events),
            title=fields["title"],
            description=fields["description"],
            date=event_date,
            time=fields["time"],
            location=fields["location"],
            capacity=int(fields["capacity"]),
            category=Category(fields.get("category") or Category.CONFERENCE.value),
            created_at=iso_timestamp(self._clock()),
            registered_users=[],
        )
        self.events.append(event)
        logging.info(f"Created event {event.id}: {event.title}")
        self.save_events()
        self._notifier.emit("events_update")
        return event

    def register_for_event(self, event: Event, fields: dict[str, Any]) -> Registration:
        """Record a registration globally and on the matching event.

        Capacity is not checked here. The two collections are written as two
        separate saves.
        """
        registration = Registration(
            id=self._new_id(self.registrations),
            event_id=event.id,
            event_title=event.title,
            name=fields["name"],
            email=fields["email"],
            phone=fields["phone"],
            registered_at=iso_timestamp(self._clock()),
        )
        self.registrations.append(registration)
        self.save_registrations()
        self._notifier.emit("registrations_update")

        self.events = [
            dataclasses.replace(e, registered_users=[*e.registered_users, registration])
            if e.id == event.id
            else e
            for e in self.events
        ]
        self.save_events()
        self._notifier.emit("events_update")
        logging.info(f"Registered {registration.name} for event {event.id}: {event.title}")
        return registration
