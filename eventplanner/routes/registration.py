"""Event registration routes."""

from flask import Blueprint, flash, redirect, request, url_for

from eventplanner.lib.current_app import get_planner_instance

registration_bp = Blueprint("registration", __name__)


@registration_bp.route("/events/<int:event_id>/register", methods=["GET"])
def select_event(event_id):
    """Open the registration form for an event.
    ---
    tags:
      - Registration
    parameters:
      - name: event_id
        in: path
        type: integer
        required: true
    responses:
      302:
        description: Redirects to the register view, or back to events if the event is full
    """
    planner = get_planner_instance()
    success, message = planner.view.select_event(event_id)
    if not success:
        flash(message, "is-warning")
    return redirect(url_for("home.home"))


@registration_bp.route("/register", methods=["POST"])
def register():
    """Register for the selected event.
    ---
    tags:
      - Registration
    parameters:
      - name: name
        in: formData
        type: string
        required: true
      - name: email
        in: formData
        type: string
        required: true
      - name: phone
        in: formData
        type: string
        required: true
    responses:
      302:
        description: Redirects to the schedule on success, the form on error
    """
    planner = get_planner_instance()
    planner.view.update_registration(**request.form.to_dict())
    success, message = planner.view.submit_registration()
    if success:
        flash(message, "is-success")
    else:
        flash(message, "is-danger")
    return redirect(url_for("home.home"))


@registration_bp.route("/register/cancel", methods=["GET"])
def cancel_registration():
    get_planner_instance().view.cancel_registration()
    return redirect(url_for("home.home"))
