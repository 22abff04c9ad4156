"""Clickable user-interface widgets."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from spriteforge import services
from spriteforge.camera import Camera
from spriteforge.input import EventKind, EventObserver, InputEvent
from spriteforge.objects import WireObject

logger = logging.getLogger(__name__)


class Button(WireObject, EventObserver):
    """A rectangle outline that calls a callback when clicked inside."""

    def __init__(
        self,
        position: Sequence[float],
        size: Sequence[float],
        shader: Any,
        color: Sequence[float],
    ) -> None:
        super().__init__(position, size, shader, color)
        if shader is None:
            logger.warning("Button created with no shader")
        self._callback: Callable[[], None] | None = None

    def on_notify(self, event: InputEvent) -> None:
        """Click the button when a mouse press lands inside it."""
        if event.kind is not EventKind.MOUSE_BUTTON_DOWN or event.position is None:
            return
        point = (float(event.position[0]), float(event.position[1]))
        camera = services.get(Camera)
        if camera is not None:
            point = camera.screen_to_world(point)
        else:
            logger.warning("No camera available for button coordinate conversion")
        if self._is_inside(point):
            self.clicked()

    def on_click(self, callback: Callable[[], None] | None) -> None:
        """Set the callback run on each click, replacing any previous one."""
        self._callback = callback

    def clicked(self) -> None:
        """Run the click callback; errors it raises are logged, not propagated."""
        if self._callback is None:
            return
        try:
            self._callback()
        except Exception:
            logger.exception("Error in button click callback")

    def _is_inside(self, point: tuple[float, float]) -> bool:
        px, py = point
        x, y = self.position
        w, h = self.size
        return x <= px <= x + w and y <= py <= y + h