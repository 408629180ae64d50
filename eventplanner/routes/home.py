import flask_babel
from flask import Blueprint, flash, redirect, render_template, url_for

from eventplanner.lib.current_app import get_planner_instance, get_site_name
from eventplanner.lib.models import Category
from eventplanner.lib.queries import is_event_full, registered_count
from eventplanner.lib.view_controller import NAV_VIEWS, View

_ = flask_babel.gettext


home_bp = Blueprint("home", __name__)


def _view_context(planner) -> tuple[str, dict]:
    """Template name and variables for whatever view is current."""
    view = planner.view
    current = view.current_view
    if current == View.EVENTS:
        return "events.html", {
            "events": planner.store.events,
            "is_event_full": is_event_full,
            "registered_count": registered_count,
        }
    if current == View.CREATE:
        return "create.html", {"form": view.form_data, "categories": list(Category)}
    if current == View.REGISTER:
        return "register.html", {
            "event": view.selected_event,
            "form": view.registration_data,
        }
    if current == View.SCHEDULE:
        return "schedule.html", {"entries": planner.schedule()}
    upcoming = planner.upcoming_events()
    return "home.html", {
        "preview": planner.home_preview(),
        "has_upcoming": len(upcoming) > 0,
    }


@home_bp.route("/")
def home():
    """Render the current view.
    ---
    tags:
      - Pages
    responses:
      200:
        description: HTML page for the current view (home, events, create, register or schedule)
    """
    planner = get_planner_instance()
    template, context = _view_context(planner)
    return render_template(
        template,
        site_title=get_site_name(),
        current_view=planner.view.current_view.value,
        nav_views=[v.value for v in NAV_VIEWS],
        **context,
    )


@home_bp.route("/nav/<view>")
def navigate(view):
    """Top-level navigation: Home, Events, My Schedule."""
    planner = get_planner_instance()
    if not planner.view.navigate(view):
        # MSG: Message shown when navigating to a page that doesn't exist in the menu
        flash(_("Unknown page: %s") % view, "is-warning")
    return redirect(url_for("home.home"))


@home_bp.route("/explore")
def explore():
    get_planner_instance().view.explore_events()
    return redirect(url_for("home.home"))


@home_bp.route("/browse")
def browse():
    """Browse Events button on the empty schedule page."""
    get_planner_instance().view.navigate(View.EVENTS)
    return redirect(url_for("home.home"))
