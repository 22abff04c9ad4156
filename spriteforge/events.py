"""Game event dispatching with numbered listeners."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from enum import IntEnum
from typing import Any

logger = logging.getLogger(__name__)


class EventType(IntEnum):
    """Game-level events that listeners can subscribe to."""

    PLAY_BUTTON_PRESSED = 0
    ASTEROID_DESTROYED = 1
    ENEMY_DESTROYED = 2
    SCORE_REACHED = 3


EventCallback = Callable[[EventType, Any], None]


class EventDispatcher:
    """Routes events to the callbacks registered for them, in registration order."""

    def __init__(self) -> None:
        self._listeners: dict[EventType, list[tuple[int, EventCallback]]] = {}
        self._ids = itertools.count(1)

    def register_listener(self, event: EventType, callback: EventCallback) -> int:
        """Subscribe ``callback`` to ``event`` and return its listener id (from 1 up)."""
        if not callable(callback):
            raise TypeError("listener callback must be callable")
        listener_id = next(self._ids)
        self._listeners.setdefault(event, []).append((listener_id, callback))
        return listener_id

    def unregister_listener(self, event: EventType, listener_id: int) -> None:
        """Remove the listener with ``listener_id`` from ``event``, if present."""
        if listener_id == 0:
            raise ValueError("listener id 0 is never issued")
        listeners = self._listeners.get(event)
        if listeners:
            self._listeners[event] = [
                entry for entry in listeners if entry[0] != listener_id
            ]

    def dispatch(self, event: EventType, trigger: Any) -> None:
        """Call every listener of ``event``; a failing listener does not stop the rest."""
        for _listener_id, callback in list(self._listeners.get(event, ())):
            try:
                callback(event, trigger)
            except Exception:
                logger.exception("Error in event callback for %s", event.name)