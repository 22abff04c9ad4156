"""Frame-based sprite animations and a controller that switches between them."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

logger = logging.getLogger(__name__)

Frame = tuple[float, float, float, float]

_DEFAULT_FRAME_DELAY_MS = 100
_EMPTY_FRAME: Frame = (0.0, 0.0, 0.0, 0.0)


class Animation:
    """A cycle of texture regions that advances at most once per frame delay.

    ``clock`` returns seconds and defaults to :func:`time.monotonic`.
    """

    def __init__(
        self,
        frame_delay_ms: int,
        texture: Any,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if frame_delay_ms <= 0:
            logger.warning(
                "Invalid frame delay %sms, using %sms instead",
                frame_delay_ms,
                _DEFAULT_FRAME_DELAY_MS,
            )
            frame_delay_ms = _DEFAULT_FRAME_DELAY_MS
        if texture is None:
            logger.warning("Animation created with no texture")
        self._frame_delay_ms = int(frame_delay_ms)
        self._texture = texture
        self._clock = clock
        self._frames: list[Frame] = []
        self._index = 0
        self._last_frame_time = clock()

    @property
    def frame_delay_ms(self) -> int:
        return self._frame_delay_ms

    @property
    def texture(self) -> Any:
        return self._texture

    @property
    def frames(self) -> tuple[Frame, ...]:
        return tuple(self._frames)

    def clone(self) -> Animation:
        """A fresh animation with the same delay, texture and frames."""
        copy = Animation(self._frame_delay_ms, self._texture, self._clock)
        copy._frames = list(self._frames)
        return copy

    def add_frame(self, coords: Sequence[float]) -> None:
        """Append a frame given as four texture coordinates."""
        x, y, z, w = coords
        self._frames.append((float(x), float(y), float(z), float(w)))

    def play(self) -> bool:
        """Advance if the delay has passed; True while on the last frame."""
        if not self._frames:
            return False
        now = self._clock()
        if now - self._last_frame_time >= self._frame_delay_ms / 1000.0:
            self._index = (self._index + 1) % len(self._frames)
            self._last_frame_time = now
        return self._index == len(self._frames) - 1

    def current_frame(self) -> Frame:
        """The frame being shown; all zeros when there are no frames."""
        if not self._frames:
            logger.warning("current_frame() called on empty animation")
            return _EMPTY_FRAME
        return self._frames[self._index]

    def reset(self) -> None:
        """Go back to the first frame and restart the delay."""
        self._index = 0
        self._last_frame_time = self._clock()


class AnimationController:
    """Named animations, one of them current, with one-shot playback back to idle."""

    def __init__(self) -> None:
        self._animations: dict[str, Animation] = {}
        self._once = False
        self._current = ""
        self.idle = ""

    @property
    def current_name(self) -> str:
        return self._current

    def add_animation(self, name: str, animation: Animation) -> None:
        self._animations[name] = animation

    def set_current(self, name: str) -> None:
        """Switch animation, unless a one-shot animation is still running."""
        if not self._once:
            self._current = name

    def current(self) -> Animation | None:
        """The current animation, or ``None`` if none is registered under its name."""
        return self._animations.get(self._current)

    def play_once(self, name: str) -> None:
        """Play ``name`` through once, then return to the idle animation."""
        self._current = name
        self._once = True

    def play(self) -> None:
        """Advance the current animation."""
        animation = self._animations.get(self._current)
        if animation is None:
            raise KeyError(f"no animation named {self._current!r}")
        finished = animation.play()
        if self._once and finished:
            self._current = self.idle
            self._once = False