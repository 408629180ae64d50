"""Event and registration records with their JSON storage representation."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from typing import Any


class Category(enum.Enum):
    CONFERENCE = "conference"
    WORKSHOP = "workshop"
    SEMINAR = "seminar"
    NETWORKING = "networking"
    SOCIAL = "social"
    OTHER = "other"


@dataclass
class Registration:
    """A single sign-up for an event.

    `event_id` is a lookup-only reference: the event may no longer exist.
    `event_title` is copied from the event when the registration is made.
    """

    id: int
    event_id: int
    event_title: str
    name: str
    email: str
    phone: str
    registered_at: str  # ISO 8601

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "eventId": self.event_id,
            "eventTitle": self.event_title,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "registeredAt": self.registered_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Registration:
        return cls(
            id=data["id"],
            event_id=data["eventId"],
            event_title=data.get("eventTitle", ""),
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            registered_at=data["registeredAt"],
        )


@dataclass
class Event:
    """An event users can register for.

    `registered_users` is a denormalized copy of the registrations made for
    this event, kept alongside the global registration list.
    """

    id: int
    title: str
    description: str
    date: date
    time: str
    location: str
    capacity: int
    category: Category
    created_at: str  # ISO 8601
    registered_users: list[Registration] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat(),
            "time": self.time,
            "location": self.location,
            "capacity": self.capacity,
            "category": self.category.value,
            "createdAt": self.created_at,
            "registeredUsers": [r.to_dict() for r in self.registered_users],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Event:
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            description=data.get("description", ""),
            date=date.fromisoformat(data["date"]),
            time=data.get("time", ""),
            location=data.get("location", ""),
            capacity=int(data["capacity"]),
            category=Category(data.get("category", Category.CONFERENCE.value)),
            created_at=data["createdAt"],
            # Older records may lack the list entirely
            registered_users=[
                Registration.from_dict(r) for r in data.get("registeredUsers") or []
            ],
        )
