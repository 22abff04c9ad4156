"""Input events and the observer-based handler that fans them out."""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto


class EventKind(Enum):
    """Kinds of input event the engine distinguishes."""

    QUIT = auto()
    KEY_DOWN = auto()
    KEY_UP = auto()
    MOUSE_BUTTON_DOWN = auto()
    MOUSE_BUTTON_UP = auto()
    MOUSE_MOTION = auto()
    OTHER = auto()


@dataclass(frozen=True)
class InputEvent:
    """A single input event, with the pointer position or key where relevant."""

    kind: EventKind
    position: tuple[float, float] | None = None
    key: str | None = None


class EventObserver(ABC):
    """Something that wants to be told about input events."""

    @abstractmethod
    def on_notify(self, event: InputEvent) -> None:
        """React to ``event``."""


class InputHandler:
    """Forwards events to observers, holding them only weakly.

    Observers that have been garbage-collected are dropped before each
    notification round.
    """

    def __init__(self) -> None:
        self._observers: list[weakref.ref] = []

    @property
    def observers(self) -> list[EventObserver]:
        """The observers that are still alive, in the order they were added."""
        return [obs for ref in self._observers if (obs := ref()) is not None]

    def add_observer(self, observer: EventObserver) -> None:
        """Start notifying ``observer``; it must support weak references."""
        if observer is None:
            raise TypeError("cannot add a None observer")
        self._observers.append(weakref.ref(observer))

    def remove_observer(self, observer: EventObserver) -> None:
        """Stop notifying ``observer`` (every registration of it)."""
        if observer is None:
            raise TypeError("cannot remove a None observer")
        self._observers = [ref for ref in self._observers if ref() is not observer]

    def forward_event(self, event: InputEvent) -> None:
        """Notify every live observer of ``event``."""
        self._observers = [ref for ref in self._observers if ref() is not None]
        for ref in list(self._observers):
            observer = ref()
            if observer is not None:
                observer.on_notify(event)

    def handle_events(self, events: Iterable[InputEvent]) -> bool:
        """Forward each event in turn; return whether any of them was a quit request."""
        quit_requested = False
        for event in events:
            if event.kind is EventKind.QUIT:
                quit_requested = True
            self.forward_event(event)
        return quit_requested