from eventplanner.planner import EventPlanner
from eventplanner.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    EventPlanner.__name__,
]
