"""Objects that collect many rectangles into a single draw call.

:class:`BatchObject` bakes rotated quads with per-vertex colours into one
vertex list. :class:`InstancedBatchObject` draws one unit quad once per
object, with per-instance position, size, rotation and colour.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from spriteforge import services
from spriteforge.camera import Camera
from spriteforge.objects import Color, DrawCommand, GameObject, Vec2, WireObject

DEFAULT_COLOR: Color = (1.0, 1.0, 1.0, 0.3)

UNIT_QUAD_TRIANGLES: tuple[Vec2, ...] = (
    (0.0, 0.0),
    (1.0, 0.0),
    (1.0, 1.0),
    (1.0, 1.0),
    (0.0, 1.0),
    (0.0, 0.0),
)

BatchVertex = tuple[float, float, float, float, float, float]


def _color_of(obj: GameObject) -> Color:
    if isinstance(obj, WireObject):
        return obj.color
    return DEFAULT_COLOR


def _quad_vertices(obj: GameObject) -> tuple[Vec2, ...]:
    """The object's rectangle, rotated about its centre, as two triangles."""
    x, y = obj.position
    w, h = obj.size
    angle = math.radians(obj.angle)
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    half_w, half_h = w * 0.5, h * 0.5

    rot_x = half_w * cos_a - half_h * sin_a
    rot_y = half_w * sin_a + half_h * cos_a
    rot_x2 = half_w * cos_a + half_h * sin_a
    rot_y2 = half_w * sin_a - half_h * cos_a

    cx, cy = x + w * 0.5, y + h * 0.5
    bottom_left = (cx - rot_x, cy - rot_y)
    bottom_right = (cx + rot_x2, cy + rot_y2)
    top_left = (cx - rot_x2, cy - rot_y2)
    top_right = (cx + rot_x, cy + rot_y)
    return (bottom_left, bottom_right, top_left, bottom_right, top_right, top_left)


def _require_shader(shader: Any, owner: str) -> None:
    if shader is None:
        raise TypeError(f"{owner} needs a shader")


def _remove_first(objects: list[GameObject], obj: GameObject) -> bool:
    for index, item in enumerate(objects):
        if item is obj:
            del objects[index]
            return True
    return False


@dataclass(frozen=True, eq=False)
class BatchDrawCommand(DrawCommand):
    """A draw call whose vertices each carry their own colour."""

    colors: tuple[Color, ...] = ()


@dataclass(frozen=True)
class InstanceData2D:
    """Per-instance data: centre, size, rotation in radians and colour."""

    position: Vec2
    size: Vec2
    rotation: float
    color: Color


@dataclass(frozen=True, eq=False)
class InstancedDrawCommand(DrawCommand):
    """A draw call that repeats its vertices once per instance."""

    instances: tuple[InstanceData2D, ...] = ()

    @property
    def instance_count(self) -> int:
        return len(self.instances)


class BatchObject(GameObject):
    """Draws all of its objects as coloured, rotated quads in one call.

    The vertex data is cached; it is rebuilt after the set of objects
    changes or after :meth:`make_dirty`, not when an object merely moves.
    """

    def __init__(self, shader: Any) -> None:
        _require_shader(shader, "BatchObject")
        super().__init__((0.0, 0.0), (0.0, 0.0), shader)
        self._objects: list[GameObject] = []
        self._cache: tuple[BatchVertex, ...] = ()
        self._batch_dirty = True

    @property
    def objects(self) -> tuple[GameObject, ...]:
        return tuple(self._objects)

    @property
    def object_count(self) -> int:
        return len(self._objects)

    @property
    def is_empty(self) -> bool:
        return not self._objects

    def add_object(self, obj: GameObject) -> None:
        if obj is None:
            raise TypeError("cannot add None to a batch")
        self._objects.append(obj)
        self._batch_dirty = True

    def remove_object(self, obj: GameObject) -> None:
        """Remove the first occurrence of ``obj``, if any."""
        if _remove_first(self._objects, obj):
            self._batch_dirty = True

    def clear(self) -> None:
        self._objects.clear()
        self._batch_dirty = True

    def build_batch(self) -> None:
        """Drop the cached vertices if the batch changed."""
        if not self._batch_dirty:
            return
        self._cache = ()
        self._batch_dirty = False

    def batch_vertices(self) -> tuple[BatchVertex, ...]:
        """Interleaved ``(x, y, r, g, b, a)`` vertices, six per object."""
        if self._batch_dirty:
            self.build_batch()
        if not self._cache:
            vertices: list[BatchVertex] = []
            for obj in self._objects:
                color = _color_of(obj)
                vertices.extend((vx, vy, *color) for vx, vy in _quad_vertices(obj))
            self._cache = tuple(vertices)
        return self._cache

    def make_dirty(self) -> None:
        """Force the vertex data to be rebuilt on next use."""
        self._batch_dirty = True
        self._cache = ()

    def draw(self) -> list[DrawCommand]:
        """A single command holding every object's quad, or nothing if empty."""
        if not self._objects:
            return []
        vertices = self.batch_vertices()
        if not vertices:
            return []
        camera = services.get(Camera)
        uniforms: dict[str, Any] = {}
        if camera is not None:
            uniforms = {
                "projection": camera.projection_matrix(),
                "view": camera.view_matrix(),
                "model": np.identity(4),
            }
        return [
            BatchDrawCommand(
                shader=self.shader,
                primitive="triangles",
                vertices=tuple((v[0], v[1]) for v in vertices),
                uniforms=uniforms,
                colors=tuple((v[2], v[3], v[4], v[5]) for v in vertices),
            )
        ]


class InstancedBatchObject(GameObject):
    """Draws a unit quad once per object, placed by per-instance data."""

    def __init__(self, shader: Any) -> None:
        _require_shader(shader, "InstancedBatchObject")
        super().__init__((0.0, 0.0), (0.0, 0.0), shader)
        self._objects: list[GameObject] = []
        self._instances: tuple[InstanceData2D, ...] = ()
        self._instances_dirty = True

    @property
    def objects(self) -> tuple[GameObject, ...]:
        return tuple(self._objects)

    @property
    def object_count(self) -> int:
        return len(self._objects)

    @property
    def is_empty(self) -> bool:
        return not self._objects

    @property
    def instances(self) -> tuple[InstanceData2D, ...]:
        return self._instances

    def add_object(self, obj: GameObject) -> None:
        if obj is None:
            raise TypeError("cannot add None to an instanced batch")
        self._objects.append(obj)
        self._instances_dirty = True

    def remove_object(self, obj: GameObject) -> None:
        """Remove the first occurrence of ``obj``, if any."""
        if _remove_first(self._objects, obj):
            self._instances_dirty = True

    def clear(self) -> None:
        self._objects.clear()
        self._instances_dirty = True

    def make_dirty(self) -> None:
        self._instances_dirty = True

    def build_instances(self) -> tuple[InstanceData2D, ...]:
        """Recompute the instance data if it is stale, and return it."""
        if self._instances_dirty:
            self._instances = tuple(
                InstanceData2D(
                    position=obj.center_position,
                    size=obj.size,
                    rotation=math.radians(obj.angle),
                    color=_color_of(obj),
                )
                for obj in self._objects
            )
            self._instances_dirty = False
        return self._instances

    def draw(self) -> list[DrawCommand]:
        """One instanced command for every object; needs a registered camera."""
        if not self._objects:
            return []
        instances = self.build_instances()
        camera = services.get(Camera)
        if camera is None:
            raise RuntimeError("no camera available for instanced rendering")
        if not instances:
            return []
        return [
            InstancedDrawCommand(
                shader=self.shader,
                primitive="triangles",
                vertices=UNIT_QUAD_TRIANGLES,
                uniforms={
                    "projection": camera.projection_matrix(),
                    "view": camera.view_matrix(),
                },
                instances=instances,
            )
        ]


def _as_vec2(value: Sequence[float]) -> Vec2:
    x, y = value
    return (float(x), float(y))