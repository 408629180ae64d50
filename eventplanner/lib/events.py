"""In-process change notifications between the store and its observers."""

from __future__ import annotations

from typing import Callable


class EventSystem:
    """Synchronous dispatcher that lets the store announce changes without
    knowing about socketio, logging or the web layer.

    Handlers run in registration order; exceptions bubble up to the emitter.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Callable]] = {}

    def on(self, event_name: str, handler: Callable) -> None:
        self._handlers.setdefault(event_name, []).append(handler)

    def emit(self, event_name: str, *args, **kwargs) -> None:
        for handler in list(self._handlers.get(event_name, [])):
            handler(*args, **kwargs)
