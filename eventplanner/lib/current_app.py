from flask import current_app

from eventplanner.planner import EventPlanner


def get_planner_instance() -> EventPlanner:
    """Get the current app's EventPlanner instance
    This function returns the EventPlanner session attached to the current app.
    Returns:
        EventPlanner: The EventPlanner instance stored on the current app.
    """
    return current_app.planner


def get_site_name() -> str:
    """Get the site name from the current app's configuration
    Returns:
        str: The site name stored in the current app's configuration.
    """
    return current_app.config["SITE_NAME"]
