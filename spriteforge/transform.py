"""2D transform with cached model matrix and dirty tracking."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np

Vec2 = tuple[float, float]


def _vec2(value: Sequence[float]) -> Vec2:
    x, y = value
    return (float(x), float(y))


def _translation(x: float, y: float) -> np.ndarray:
    matrix = np.identity(4)
    matrix[0, 3] = x
    matrix[1, 3] = y
    return matrix


def _rotation_z(radians: float) -> np.ndarray:
    c, s = math.cos(radians), math.sin(radians)
    matrix = np.identity(4)
    matrix[0, 0], matrix[0, 1] = c, -s
    matrix[1, 0], matrix[1, 1] = s, c
    return matrix


def _uniform_scale_xy(factor: float) -> np.ndarray:
    return np.diag([factor, factor, 1.0, 1.0])


class Transform:
    """Position, size, rotation (degrees) and uniform scale of a rectangle.

    The model matrix rotates and scales about the rectangle's centre and is
    recomputed lazily when the transform changes.
    """

    def __init__(
        self,
        position: Sequence[float] = (0.0, 0.0),
        size: Sequence[float] = (1.0, 1.0),
        angle: float = 0.0,
        scale: float = 1.0,
    ) -> None:
        self._position = _vec2(position)
        self._size = _vec2(size)
        self._angle = float(angle)
        self._scale = float(scale)
        self._matrix = np.identity(4)
        self._cached_center: Vec2 = (0.0, 0.0)
        self._transform_dirty = True
        self._center_dirty = True

    def __repr__(self) -> str:
        return (
            f"Transform(position={self._position}, size={self._size}, "
            f"angle={self._angle}, scale={self._scale})"
        )

    # Position
    @property
    def position(self) -> Vec2:
        return self._position

    @position.setter
    def position(self, value: Sequence[float]) -> None:
        new = _vec2(value)
        if new != self._position:
            self._position = new
            self._mark_dirty()

    def translate(self, delta: Sequence[float]) -> None:
        """Move by ``delta``; a zero delta changes nothing."""
        dx, dy = _vec2(delta)
        if dx != 0.0 or dy != 0.0:
            x, y = self._position
            self._position = (x + dx, y + dy)
            self._mark_dirty()

    # Size
    @property
    def size(self) -> Vec2:
        return self._size

    @size.setter
    def size(self, value: Sequence[float]) -> None:
        new = _vec2(value)
        if new != self._size:
            self._size = new
            self._mark_dirty()

    def scale_size(self, factor: Sequence[float]) -> None:
        """Multiply the size component-wise by ``factor``."""
        fx, fy = _vec2(factor)
        if fx != 1.0 or fy != 1.0:
            w, h = self._size
            self._size = (w * fx, h * fy)
            self._mark_dirty()

    # Rotation
    @property
    def angle(self) -> float:
        return self._angle

    @angle.setter
    def angle(self, value: float) -> None:
        value = float(value)
        if value != self._angle:
            self._angle = value
            self._transform_dirty = True

    def rotate(self, delta_angle: float) -> None:
        """Add ``delta_angle`` degrees to the rotation."""
        if delta_angle != 0.0:
            self._angle += float(delta_angle)
            self._transform_dirty = True

    # Scale
    @property
    def scale(self) -> float:
        return self._scale

    @scale.setter
    def scale(self, value: float) -> None:
        value = float(value)
        if value != self._scale:
            self._scale = value
            self._transform_dirty = True

    # Centre
    @property
    def center_position(self) -> Vec2:
        if self._center_dirty:
            x, y = self._position
            w, h = self._size
            self._cached_center = (x + 0.5 * w, y + 0.5 * h)
            self._center_dirty = False
        return self._cached_center

    @center_position.setter
    def center_position(self, center: Sequence[float]) -> None:
        cx, cy = _vec2(center)
        w, h = self._size
        self.position = (cx - 0.5 * w, cy - 0.5 * h)

    # Matrix
    @property
    def model_matrix(self) -> np.ndarray:
        """The 4x4 model matrix (column-vector convention)."""
        if self._transform_dirty:
            self._update_matrix()
        return self._matrix.copy()

    def set_transform(
        self,
        position: Sequence[float],
        size: Sequence[float],
        angle: float,
        scale: float,
    ) -> None:
        """Set every component at once, marking dirty only if something changed."""
        position, size = _vec2(position), _vec2(size)
        angle, scale = float(angle), float(scale)
        changed = (position, size, angle, scale) != (
            self._position,
            self._size,
            self._angle,
            self._scale,
        )
        self._position, self._size, self._angle, self._scale = position, size, angle, scale
        if changed:
            self._mark_dirty()

    @property
    def is_dirty(self) -> bool:
        return self._transform_dirty

    def mark_clean(self) -> None:
        """Clear the dirty flags without recomputing anything."""
        self._transform_dirty = False
        self._center_dirty = False

    @property
    def bounds(self) -> Vec2:
        """The corner opposite ``position``."""
        x, y = self._position
        w, h = self._size
        return (x + w, y + h)

    def contains(self, point: Sequence[float]) -> bool:
        """Whether ``point`` lies inside the unrotated rectangle, edges included."""
        px, py = _vec2(point)
        x, y = self._position
        w, h = self._size
        return x <= px <= x + w and y <= py <= y + h

    @staticmethod
    def extract_position(matrix: np.ndarray) -> Vec2:
        """Translation part of a 4x4 matrix."""
        m = np.asarray(matrix, dtype=float)
        return (float(m[0, 3]), float(m[1, 3]))

    @staticmethod
    def lerp(a: Transform, b: Transform, t: float) -> Transform:
        """Linear interpolation of every component between ``a`` and ``b``."""

        def mix(p: float, q: float) -> float:
            return p + (q - p) * t

        return Transform(
            (mix(a._position[0], b._position[0]), mix(a._position[1], b._position[1])),
            (mix(a._size[0], b._size[0]), mix(a._size[1], b._size[1])),
            mix(a._angle, b._angle),
            mix(a._scale, b._scale),
        )

    def _mark_dirty(self) -> None:
        self._transform_dirty = True
        self._center_dirty = True

    def _update_matrix(self) -> None:
        cx, cy = self.center_position
        self._matrix = (
            _translation(cx, cy)
            @ _rotation_z(math.radians(self._angle))
            @ _uniform_scale_xy(self._scale)
            @ _translation(-cx, -cy)
        )
        self._transform_dirty = False


class TransformManager:
    """Batch helpers over collections of transforms."""

    _shared: TransformManager | None = None

    @classmethod
    def instance(cls) -> TransformManager:
        """The shared manager."""
        if cls._shared is None:
            cls._shared = cls()
        return cls._shared

    def update_all(self, transforms: Iterable[Transform | None]) -> None:
        """Recompute the matrix of every dirty transform; ``None`` entries are skipped."""
        for transform in transforms:
            if transform is not None and transform.is_dirty:
                transform.model_matrix  # noqa: B018 - forces the recomputation

    def dirty_count(self, transforms: Iterable[Transform | None]) -> int:
        """Number of dirty transforms, ignoring ``None`` entries."""
        return sum(1 for t in transforms if t is not None and t.is_dirty)