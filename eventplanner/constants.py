import os
import sys

LANGUAGES = {
    "en": "English",
}

EVENTS_KEY = "events"
REGISTRATIONS_KEY = "registrations"

# Shown on the home page
HOME_PREVIEW_LIMIT = 3

# Placeholder for schedule fields whose event no longer exists
NOT_AVAILABLE = "N/A"

DEFAULT_STORAGE_FILE = "storage.json"


def get_data_directory():
    """
    Returns the writable data directory for the application.
    Windows: %APPDATA%/eventplanner
    Linux/Mac: ~/.eventplanner
    """
    if sys.platform == "win32":
        base_path = os.environ.get("APPDATA") or os.path.expanduser("~")
        path = os.path.join(base_path, "eventplanner")
    else:
        path = os.path.expanduser("~/.eventplanner")

    if not os.path.exists(path):
        os.makedirs(path)

    return path
