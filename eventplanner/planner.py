"""Application session: storage, store and view state wired together."""

from __future__ import annotations

import logging
import os
from datetime import date
from typing import Any

from eventplanner.constants import DEFAULT_STORAGE_FILE, get_data_directory
from eventplanner.lib.events import EventSystem
from eventplanner.lib.models import Event
from eventplanner.lib.queries import (
    JoinedRegistration,
    home_preview,
    schedule_entries,
    upcoming_events,
    user_registrations,
)
from eventplanner.lib.storage import FileStorage, KeyValueStorage
from eventplanner.lib.store import Store
from eventplanner.lib.view_controller import ViewController


class EventPlanner:
    """Owns all state for one planner session.

    Routes reach the session through `current_app.planner`; nothing else is
    global. Store changes are forwarded to connected pages over socketio when
    one is attached.

    Attributes:
        storage: Key-value backend the store persists to.
        store: Events and registrations.
        view: Current screen and draft forms.
        events: Change notifications emitted by the store.
    """

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        data_dir: str | None = None,
        storage_file: str = DEFAULT_STORAGE_FILE,
        strict_load: bool = False,
        socketio=None,
    ) -> None:
        """Build the session and load persisted state.

        Args:
            storage: Backend to use. Defaults to a FileStorage under data_dir.
            data_dir: Directory for the storage file. Defaults to the user data directory.
            storage_file: Storage file name, or an absolute path.
            strict_load: Fail instead of resetting when persisted data is malformed.
            socketio: SocketIO instance for broadcasting store changes.
        """
        if storage is None:
            if not os.path.isabs(storage_file):
                storage_file = os.path.join(data_dir or get_data_directory(), storage_file)
            storage = FileStorage(storage_file, strict=strict_load)
        self.storage = storage
        self.socketio = socketio

        self.events = EventSystem()
        self.events.on("events_update", lambda: self._broadcast("events_update"))
        self.events.on("registrations_update", lambda: self._broadcast("registrations_update"))

        self.store = Store(storage, events=self.events, strict=strict_load)
        self.store.load()
        # The view controller reads the store, so it comes after load()
        self.view = ViewController(self.store)

    def _broadcast(self, event_name: str) -> None:
        if self.socketio:
            logging.debug("Broadcasting event: " + event_name)
            self.socketio.emit(event_name, namespace="/")

    def upcoming_events(self, today: date | None = None) -> list[Event]:
        return upcoming_events(self.store.events, today)

    def home_preview(self, today: date | None = None) -> list[Event]:
        return home_preview(self.store.events, today)

    def user_registrations(self) -> list[JoinedRegistration]:
        return user_registrations(self.store.registrations, self.store.events)

    def schedule(self) -> list[dict[str, Any]]:
        return schedule_entries(self.store.registrations, self.store.events)

    def get_state(self) -> dict[str, Any]:
        """Summary of the view state for the JSON API, camelCase like the records."""
        selected = self.view.selected_event
        return {
            "currentView": self.view.current_view.value,
            "selectedEvent": selected.id if selected else None,
            "formData": dict(self.view.form_data),
            "registrationData": dict(self.view.registration_data),
            "eventCount": len(self.store.events),
            "registrationCount": len(self.store.registrations),
        }
