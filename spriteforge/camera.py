"""Camera holding projection and view matrices, plus a global camera holder."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from enum import Enum, auto

import numpy as np

logger = logging.getLogger(__name__)

Vec2 = tuple[float, float]

_FIELD_OF_VIEW_DEGREES = 45.0
_NEAR = 0.1
_FAR = 100.0


def _vec2(value: Sequence[float]) -> Vec2:
    x, y = value
    return (float(x), float(y))


def _is_valid_size(size: Vec2) -> bool:
    return size[0] > 0.0 and size[1] > 0.0


def _orthographic(left, right, bottom, top, near, far) -> np.ndarray:
    matrix = np.identity(4)
    matrix[0, 0] = 2.0 / (right - left)
    matrix[1, 1] = 2.0 / (top - bottom)
    matrix[2, 2] = -2.0 / (far - near)
    matrix[0, 3] = -(right + left) / (right - left)
    matrix[1, 3] = -(top + bottom) / (top - bottom)
    matrix[2, 3] = -(far + near) / (far - near)
    return matrix


def _perspective(fovy_radians, aspect, near, far) -> np.ndarray:
    focal = 1.0 / math.tan(fovy_radians / 2.0)
    matrix = np.zeros((4, 4))
    matrix[0, 0] = focal / aspect
    matrix[1, 1] = focal
    matrix[2, 2] = -(far + near) / (far - near)
    matrix[2, 3] = -(2.0 * far * near) / (far - near)
    matrix[3, 2] = -1.0
    return matrix


class ProjectionType(Enum):
    ORTHOGRAPHIC = auto()
    PERSPECTIVE = auto()


class Camera:
    """Projection for a window plus a 2D scroll/zoom view, both cached lazily.

    The orthographic projection maps window pixels with the origin at the top left.
    """

    def __init__(
        self,
        window_size: Sequence[float],
        projection_type: ProjectionType = ProjectionType.ORTHOGRAPHIC,
    ) -> None:
        self._window_size = _vec2(window_size)
        self._projection_type = projection_type
        self._view_position: Vec2 = (0.0, 0.0)
        self._zoom = 1.0
        self._projection = np.identity(4)
        self._view = np.identity(4)
        self._projection_dirty = True
        self._view_dirty = True

    @property
    def projection_type(self) -> ProjectionType:
        return self._projection_type

    @property
    def window_size(self) -> Vec2:
        return self._window_size

    @window_size.setter
    def window_size(self, size: Sequence[float]) -> None:
        new = _vec2(size)
        if new != self._window_size:
            self._window_size = new
            self._projection_dirty = True

    @property
    def view_position(self) -> Vec2:
        return self._view_position

    @view_position.setter
    def view_position(self, position: Sequence[float]) -> None:
        new = _vec2(position)
        if new != self._view_position:
            self._view_position = new
            self._view_dirty = True

    @property
    def zoom(self) -> float:
        return self._zoom

    @zoom.setter
    def zoom(self, value: float) -> None:
        value = float(value)
        if value <= 0.0:
            logger.warning("Invalid zoom value %s, using 1.0 instead", value)
            value = 1.0
        if value != self._zoom:
            self._zoom = value
            self._view_dirty = True

    def projection_matrix(self) -> np.ndarray:
        """The projection matrix; identity while the window size is invalid."""
        if self._projection_dirty:
            self._update_projection()
            self._projection_dirty = False
        return self._projection.copy()

    def view_matrix(self) -> np.ndarray:
        """Zoom followed by a shift that puts ``view_position`` at the origin."""
        if self._view_dirty:
            self._update_view()
            self._view_dirty = False
        return self._view.copy()

    def view_projection_matrix(self) -> np.ndarray:
        return self.projection_matrix() @ self.view_matrix()

    def screen_to_world(self, screen_pos: Sequence[float]) -> Vec2:
        """Convert window pixel coordinates to world coordinates."""
        if not _is_valid_size(self._window_size):
            raise ValueError(f"invalid window size {self._window_size}")
        sx, sy = _vec2(screen_pos)
        width, height = self._window_size
        normalized = np.array(
            [(sx / width) * 2.0 - 1.0, 1.0 - (sy / height) * 2.0, 0.0, 1.0]
        )
        world = np.linalg.inv(self.view_projection_matrix()) @ normalized
        return (float(world[0]), float(world[1]))

    def _update_projection(self) -> None:
        if not _is_valid_size(self._window_size):
            logger.error("Invalid window size %s for projection matrix", self._window_size)
            self._projection = np.identity(4)
            return
        width, height = self._window_size
        if self._projection_type is ProjectionType.ORTHOGRAPHIC:
            self._projection = _orthographic(0.0, width, height, 0.0, -1.0, 1.0)
        else:
            self._projection = _perspective(
                math.radians(_FIELD_OF_VIEW_DEGREES), width / height, _NEAR, _FAR
            )

    def _update_view(self) -> None:
        scale = np.diag([self._zoom, self._zoom, 1.0, 1.0])
        shift = np.identity(4)
        shift[0, 3] = -self._view_position[0]
        shift[1, 3] = -self._view_position[1]
        self._view = scale @ shift


class CameraManager:
    """Holder of the single global camera."""

    _instance: Camera | None = None

    @classmethod
    def initialize(cls, window_size: Sequence[float]) -> Camera:
        """Create the global camera for a window of ``window_size``."""
        size = _vec2(window_size)
        if not _is_valid_size(size):
            raise ValueError(f"invalid window size {size} for camera initialization")
        cls._instance = Camera(size)
        return cls._instance

    @classmethod
    def get(cls) -> Camera | None:
        """The global camera, or ``None`` if it was never initialized."""
        if cls._instance is None:
            logger.warning("CameraManager not initialized")
        return cls._instance

    @classmethod
    def update_window_size(cls, size: Sequence[float]) -> None:
        """Pass a new window size to the global camera, if there is one."""
        if cls._instance is None:
            logger.warning("CameraManager not initialized, cannot update window size")
            return
        cls._instance.window_size = size

    @classmethod
    def reset(cls) -> None:
        """Drop the global camera."""
        cls._instance = None