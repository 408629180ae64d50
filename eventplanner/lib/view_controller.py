"""Screen navigation and draft form state for the planner UI.

Handles which view is showing, the event picked for registration, and the
in-progress create/register forms. Submitting a form hands the validated
values to the store.
"""

from __future__ import annotations

import enum
import logging
from datetime import date
from typing import Any

from flask_babel import _

from eventplanner.lib.models import Category, Event
from eventplanner.lib.queries import is_event_full
from eventplanner.lib.store import Store


class View(enum.Enum):
    HOME = "home"
    EVENTS = "events"
    CREATE = "create"
    REGISTER = "register"
    SCHEDULE = "schedule"


# Views reachable from the persistent navigation bar
NAV_VIEWS = (View.HOME, View.EVENTS, View.SCHEDULE)

EVENT_FIELDS = ("title", "description", "date", "time", "location", "capacity")
REGISTRATION_FIELDS = ("name", "email", "phone")


def empty_event_form() -> dict[str, str]:
    form = {name: "" for name in EVENT_FIELDS}
    form["category"] = Category.CONFERENCE.value
    return form


def empty_registration_form() -> dict[str, str]:
    return {name: "" for name in REGISTRATION_FIELDS}


def validate_event_form(form: dict[str, Any]) -> str | None:
    """Return an error message for the first problem found, or None."""
    for name in EVENT_FIELDS:
        if not str(form.get(name) or "").strip():
            return _("Please fill in the %s field") % name
    try:
        date.fromisoformat(str(form["date"]))
    except ValueError:
        return _("Invalid date: %s") % form["date"]
    try:
        capacity = int(form["capacity"])
    except (TypeError, ValueError):
        return _("Capacity must be a whole number")
    if capacity < 1:
        return _("Capacity must be at least 1")
    if form.get("category") not in {c.value for c in Category}:
        return _("Unknown category: %s") % form.get("category")
    return None


def validate_registration_form(form: dict[str, Any]) -> str | None:
    for name in REGISTRATION_FIELDS:
        if not str(form.get(name) or "").strip():
            return _("Please fill in the %s field") % name
    if "@" not in form["email"]:
        return _("Please enter a valid email address")
    return None


class ViewController:
    """Current screen plus draft form values. Mutates the store on submit."""

    def __init__(self, store: Store) -> None:
        self._store = store
        self.current_view: View = View.HOME
        self.selected_event: Event | None = None
        self.form_data: dict[str, str] = empty_event_form()
        self.registration_data: dict[str, str] = empty_registration_form()

    def _show(self, view: View) -> None:
        logging.debug(f"View change: {self.current_view.value} -> {view.value}")
        self.current_view = view

    def navigate(self, view: View | str) -> bool:
        """Top-level navigation. Only home, events and schedule are reachable."""
        try:
            view = View(view)
        except ValueError:
            logging.warning(f"Unknown view: {view}")
            return False
        if view not in NAV_VIEWS:
            logging.warning(f"View is not reachable from navigation: {view.value}")
            return False
        if self.current_view == View.REGISTER:
            self.selected_event = None
        self._show(view)
        return True

    def explore_events(self) -> None:
        self.navigate(View.EVENTS)

    def open_create(self) -> None:
        self._show(View.CREATE)

    def cancel_create(self) -> None:
        self._show(View.EVENTS)

    def update_form(self, **values: str) -> None:
        for name, value in values.items():
            if name in self.form_data:
                self.form_data[name] = value

    def update_registration(self, **values: str) -> None:
        for name, value in values.items():
            if name in self.registration_data:
                self.registration_data[name] = value

    def submit_create(self) -> tuple[bool, str]:
        """Create an event from the draft. Returns (success, message)."""
        error = validate_event_form(self.form_data)
        if error:
            logging.debug(f"Rejected event form: {error}")
            return (False, error)
        fields = {name: value.strip() for name, value in self.form_data.items()}
        event = self._store.create_event(fields)
        self.form_data = empty_event_form()
        self._show(View.EVENTS)
        return (True, _("Event created: %s") % event.title)

    def select_event(self, event_id: int) -> tuple[bool, str]:
        """Open the registration form for an event that still has room."""
        event = self._store.get_event(event_id)
        if event is None:
            logging.warning(f"Event not found: {event_id}")
            return (False, _("Event not found"))
        if is_event_full(event):
            return (False, _("This event is full: %s") % event.title)
        self.selected_event = event
        self._show(View.REGISTER)
        return (True, event.title)

    def cancel_registration(self) -> None:
        self.selected_event = None
        self._show(View.EVENTS)

    def submit_registration(self) -> tuple[bool, str]:
        """Register the draft contact details for the selected event."""
        if self.selected_event is None:
            return (False, _("No event selected"))
        error = validate_registration_form(self.registration_data)
        if error:
            logging.debug(f"Rejected registration form: {error}")
            return (False, error)
        fields = {name: value.strip() for name, value in self.registration_data.items()}
        event = self.selected_event
        self._store.register_for_event(event, fields)
        self.registration_data = empty_registration_form()
        self.selected_event = None
        self._show(View.SCHEDULE)
        return (True, _("You are registered for %s") % event.title)
