"""Create-event form routes."""

from flask import Blueprint, flash, redirect, request, url_for

from eventplanner.lib.current_app import get_planner_instance

events_bp = Blueprint("events", __name__)


@events_bp.route("/events/new", methods=["GET"])
def open_create():
    """Show the create event form."""
    get_planner_instance().view.open_create()
    return redirect(url_for("home.home"))


@events_bp.route("/events/new", methods=["POST"])
def create_event():
    """Create an event from the submitted form.
    ---
    tags:
      - Events
    parameters:
      - name: title
        in: formData
        type: string
        required: true
      - name: description
        in: formData
        type: string
        required: true
      - name: date
        in: formData
        type: string
        required: true
        description: ISO date (YYYY-MM-DD)
      - name: time
        in: formData
        type: string
        required: true
      - name: location
        in: formData
        type: string
        required: true
      - name: capacity
        in: formData
        type: integer
        required: true
      - name: category
        in: formData
        type: string
        description: conference, workshop, seminar, networking, social or other
    responses:
      302:
        description: Redirects to the current view (events on success, the form on error)
    """
    planner = get_planner_instance()
    planner.view.update_form(**request.form.to_dict())
    success, message = planner.view.submit_create()
    if success:
        flash(message, "is-success")
    else:
        flash(message, "is-danger")
    return redirect(url_for("home.home"))


@events_bp.route("/events/cancel", methods=["GET"])
def cancel_create():
    get_planner_instance().view.cancel_create()
    return redirect(url_for("home.home"))
