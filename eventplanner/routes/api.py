"""JSON views of the planner state."""

from flask import Blueprint, jsonify

from eventplanner.lib.current_app import get_planner_instance
from eventplanner.lib.queries import is_event_full

api_bp = Blueprint("api", __name__)


def _event_json(event) -> dict:
    data = event.to_dict()
    data["isFull"] = is_event_full(event)
    return data


@api_bp.route("/get_events")
def get_events():
    """All events in creation order.
    ---
    tags:
      - Events
    responses:
      200:
        description: List of events, each with an extra isFull flag
    """
    planner = get_planner_instance()
    return jsonify([_event_json(e) for e in planner.store.events])


@api_bp.route("/get_upcoming_events")
def get_upcoming_events():
    """Events dated today or later, sorted by date."""
    planner = get_planner_instance()
    return jsonify([_event_json(e) for e in planner.upcoming_events()])


@api_bp.route("/get_registrations")
def get_registrations():
    """Registrations joined with their event (null when the event is gone).
    ---
    tags:
      - Registration
    responses:
      200:
        description: List of registrations in registration order
    """
    planner = get_planner_instance()
    result = []
    for joined in planner.user_registrations():
        data = joined.registration.to_dict()
        data["event"] = joined.event.to_dict() if joined.event else None
        result.append(data)
    return jsonify(result)


@api_bp.route("/get_state")
def get_state():
    return jsonify(get_planner_instance().get_state())
