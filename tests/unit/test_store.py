"""Unit tests for the Store."""

import json
from datetime import date, timedelta
from unittest.mock import MagicMock

import pytest

from eventplanner.lib.events import EventSystem
from eventplanner.lib.models import Category
from eventplanner.lib.storage import MemoryStorage
from eventplanner.lib.store import Store, StoreLoadError, iso_timestamp


class TestStoreLoad:
    """Loading collections from storage."""

    def test_missing_keys_load_as_empty(self, store):
        assert store.events == []
        assert store.registrations == []

    def test_loads_persisted_collections(self, store, storage, clock, event_fields):
        store.create_event(event_fields())

        reloaded = Store(storage, clock=clock)
        reloaded.load()

        assert [e.to_dict() for e in reloaded.events] == [e.to_dict() for e in store.events]

    def test_malformed_json_resets_to_empty(self, caplog):
        storage = MemoryStorage({"events": "{not json", "registrations": "[]"})
        store = Store(storage)

        store.load()

        assert store.events == []
        assert "Malformed data under storage key 'events'" in caplog.text

    def test_non_list_value_resets_to_empty(self):
        storage = MemoryStorage({"events": json.dumps({"id": 1})})
        store = Store(storage)

        store.load()

        assert store.events == []

    def test_record_missing_fields_resets_to_empty(self):
        storage = MemoryStorage({"registrations": json.dumps([{"name": "x"}])})
        store = Store(storage)

        store.load()

        assert store.registrations == []

    def test_malformed_value_is_kept_under_failed_key(self, clock, caplog):
        storage = MemoryStorage({"events": "{not json"})
        store = Store(storage, clock=clock)

        store.load()
        store.save()

        assert storage.get("events") == "[]"
        assert storage.get("events.failed-2026-01-01-120000") == "{not json"
        assert "events.failed-2026-01-01-120000" in caplog.text

    def test_bad_record_is_kept_under_failed_key(self, clock):
        raw = json.dumps([{"name": "x"}])
        storage = MemoryStorage({"registrations": raw})

        Store(storage, clock=clock).load()

        assert storage.get("registrations.failed-2026-01-01-120000") == raw

    def test_malformed_json_raises_in_strict_mode(self):
        storage = MemoryStorage({"events": "{not json"})
        store = Store(storage, strict=True)

        with pytest.raises(StoreLoadError, match="events"):
            store.load()


class TestCreateEvent:
    """Creating events."""

    def test_new_event_has_empty_registrations(self, store, event_fields):
        event = store.create_event(event_fields())

        assert event.registered_users == []
        assert store.events == [event]

    def test_fields_are_converted(self, store, event_fields):
        event = store.create_event(event_fields(capacity="3", category="workshop"))

        assert event.capacity == 3
        assert event.category == Category.WORKSHOP
        assert event.date == date.today() + timedelta(days=1)

    def test_missing_category_defaults_to_conference(self, store, event_fields):
        fields = event_fields()
        del fields["category"]

        event = store.create_event(fields)

        assert event.category == Category.CONFERENCE

    def test_ids_unique_when_created_in_the_same_millisecond(self, store, event_fields):
        # The frozen clock never moves, so every id comes from the same timestamp
        ids = [store.create_event(event_fields(title=f"E{n}")).id for n in range(5)]

        assert len(set(ids)) == 5
        assert ids == sorted(ids)

    def test_id_is_creation_time_in_milliseconds(self, store, clock, event_fields):
        event = store.create_event(event_fields())

        assert event.id == int(clock().timestamp() * 1000)
        assert event.created_at == iso_timestamp(clock())
        assert event.created_at.endswith("Z")

    def test_ids_stay_ahead_of_loaded_ids(self, clock, event_fields):
        future_id = int(clock().timestamp() * 1000) + 10_000
        storage = MemoryStorage()
        first = Store(storage, clock=clock)
        first.create_event(event_fields())
        data = json.loads(storage.get("events"))
        data[0]["id"] = future_id
        storage.set("events", json.dumps(data))

        store = Store(storage, clock=clock)
        store.load()
        event = store.create_event(event_fields())

        assert event.id == future_id + 1

    def test_persists_events(self, store, storage, event_fields):
        event = store.create_event(event_fields())

        saved = json.loads(storage.get("events"))
        assert saved == [event.to_dict()]

    def test_emits_events_update(self, storage, clock, event_fields):
        events = EventSystem()
        handler = MagicMock()
        events.on("events_update", handler)
        store = Store(storage, events=events, clock=clock)

        store.create_event(event_fields())

        handler.assert_called_once_with()


class TestRegisterForEvent:
    """Registering for events."""

    def test_both_collections_grow_by_one_with_same_id(
        self, store, event_fields, registration_fields
    ):
        event = store.create_event(event_fields())

        registration = store.register_for_event(event, registration_fields())

        assert store.registrations == [registration]
        updated = store.get_event(event.id)
        assert [r.id for r in updated.registered_users] == [registration.id]

    def test_registration_copies_event_title(self, store, event_fields, registration_fields):
        event = store.create_event(event_fields(title="Launch"))

        registration = store.register_for_event(event, registration_fields())

        assert registration.event_id == event.id
        assert registration.event_title == "Launch"

    def test_event_is_replaced_not_mutated(self, store, event_fields, registration_fields):
        event = store.create_event(event_fields())

        store.register_for_event(event, registration_fields())

        assert event.registered_users == []
        assert store.get_event(event.id) is not event

    def test_other_events_are_untouched(self, store, event_fields, registration_fields):
        first = store.create_event(event_fields(title="First"))
        second = store.create_event(event_fields(title="Second"))

        store.register_for_event(second, registration_fields())

        assert store.get_event(first.id) is first
        assert len(store.get_event(second.id).registered_users) == 1

    def test_capacity_not_enforced(self, store, event_fields, registration_fields):
        event = store.create_event(event_fields(capacity="1"))

        store.register_for_event(event, registration_fields(name="One"))
        store.register_for_event(store.get_event(event.id), registration_fields(name="Two"))

        assert len(store.get_event(event.id).registered_users) == 2

    def test_registration_ids_unique(self, store, event_fields, registration_fields):
        event = store.create_event(event_fields())

        ids = [store.register_for_event(event, registration_fields()).id for _ in range(3)]

        assert len(set(ids)) == 3

    def test_both_keys_persisted(self, store, storage, event_fields, registration_fields):
        event = store.create_event(event_fields())
        registration = store.register_for_event(event, registration_fields())

        saved_regs = json.loads(storage.get("registrations"))
        saved_events = json.loads(storage.get("events"))
        assert saved_regs == [registration.to_dict()]
        assert saved_events[0]["registeredUsers"] == [registration.to_dict()]

    def test_emits_both_updates(self, storage, clock, event_fields, registration_fields):
        events = EventSystem()
        calls = []
        events.on("events_update", lambda: calls.append("events"))
        events.on("registrations_update", lambda: calls.append("registrations"))
        store = Store(storage, events=events, clock=clock)
        event = store.create_event(event_fields())
        calls.clear()

        store.register_for_event(event, registration_fields())

        assert calls == ["registrations", "events"]


class TestRoundTrip:
    def test_reload_reproduces_collections(
        self, store, storage, clock, event_fields, registration_fields
    ):
        a = store.create_event(event_fields(title="A"))
        store.create_event(event_fields(title="B", category="other"))
        store.register_for_event(a, registration_fields())

        reloaded = Store(storage, clock=clock)
        reloaded.load()

        assert reloaded.events == store.events
        assert reloaded.registrations == store.registrations

    def test_explicit_save_writes_both_keys(self, clock, event_fields):
        storage = MemoryStorage()
        store = Store(storage, clock=clock)
        store.save()

        assert storage.get("events") == "[]"
        assert storage.get("registrations") == "[]"


def test_get_event_returns_none_for_unknown_id(store):
    assert store.get_event(12345) is None
