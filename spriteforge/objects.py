"""Drawable game objects, render layers and the physics mix-in.

Drawing does not talk to a graphics API: each ``draw`` returns the draw
commands (shader, primitive, vertices, uniforms, texture) that a backend
would submit, in the order they should be submitted.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from spriteforge import services
from spriteforge.camera import Camera
from spriteforge.transform import Transform

Vec2 = tuple[float, float]
Color = tuple[float, float, float, float]

UNIT_QUAD_LINES: tuple[Vec2, ...] = (
    (0.0, 0.0), (1.0, 0.0),
    (1.0, 0.0), (1.0, 1.0),
    (1.0, 1.0), (0.0, 1.0),
    (0.0, 1.0), (0.0, 0.0),
)

QUAD_TEXCOORDS: tuple[Vec2, ...] = (
    (0.0, 0.0),
    (1.0, 0.0),
    (0.0, 1.0),
    (1.0, 0.0),
    (1.0, 1.0),
    (0.0, 1.0),
)


@dataclass(frozen=True, eq=False)
class DrawCommand:
    """One draw call: what to draw, with which shader, uniforms and texture."""

    shader: Any
    primitive: str
    vertices: tuple[Vec2, ...]
    uniforms: dict[str, Any] = field(default_factory=dict)
    texture: Any = None
    texcoords: tuple[Vec2, ...] = ()

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)


def _color(value: Sequence[float]) -> Color:
    r, g, b, a = value
    return (float(r), float(g), float(b), float(a))


def _camera_uniforms(model: np.ndarray) -> dict[str, Any]:
    camera = services.get(Camera)
    if camera is not None:
        return {
            "projection": camera.projection_matrix(),
            "view": camera.view_matrix(),
            "model": model,
        }
    return {
        "projection": model,
        "view": np.identity(4),
        "model": np.identity(4),
    }


class GameObject:
    """A rectangle in the world with a shader, collision bits and child objects."""

    def __init__(self, position: Sequence[float], size: Sequence[float], shader: Any) -> None:
        self.transform = Transform(position, size)
        self.shader = shader
        self.name = ""
        self.collision_layer = 0
        self.collision_mask = 0
        self.children: list[GameObject] = []
        self._buffer: tuple[Vec2, ...] = ()
        self._buffer_dirty = True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, {self.transform!r})"

    @property
    def position(self) -> Vec2:
        return self.transform.position

    @position.setter
    def position(self, value: Sequence[float]) -> None:
        self.transform.position = value
        self._buffer_dirty = True

    @property
    def size(self) -> Vec2:
        return self.transform.size

    @size.setter
    def size(self, value: Sequence[float]) -> None:
        self.transform.size = value
        self._buffer_dirty = True

    @property
    def angle(self) -> float:
        return self.transform.angle

    @angle.setter
    def angle(self, value: float) -> None:
        self.transform.angle = value
        self._buffer_dirty = True

    @property
    def scale(self) -> float:
        return self.transform.scale

    @scale.setter
    def scale(self, value: float) -> None:
        self.transform.scale = value
        self._buffer_dirty = True

    @property
    def center_position(self) -> Vec2:
        return self.transform.center_position

    @center_position.setter
    def center_position(self, value: Sequence[float]) -> None:
        self.transform.center_position = value
        self._buffer_dirty = True

    @property
    def buffer_dirty(self) -> bool:
        """Whether the vertex buffer must be rebuilt on the next draw."""
        return self._buffer_dirty

    def translate(self, delta: Sequence[float]) -> None:
        self.transform.translate(delta)
        self._buffer_dirty = True

    def can_collide_with(self, other: GameObject) -> bool:
        """Whether this object's mask includes ``other``'s layer."""
        return (self.collision_mask & other.collision_layer) != 0

    def add_child(self, child: GameObject) -> None:
        """Centre ``child`` on this object and draw it after this one."""
        child.center_position = self.center_position
        self.children.append(child)

    def vertices(self) -> tuple[Vec2, ...]:
        """The quad as two triangles in world coordinates."""
        x, y = self.position
        w, h = self.size
        return (
            (x, y),
            (x + w, y),
            (x, y + h),
            (x + w, y),
            (x + w, y + h),
            (x, y + h),
        )

    def draw(self) -> list[DrawCommand]:
        """Commands for this object followed by those of its children."""
        if self.transform.is_dirty or self._buffer_dirty:
            self._buffer = self.vertices()
            self._buffer_dirty = False
        commands = [
            DrawCommand(
                shader=self.shader,
                primitive="triangles",
                vertices=self._buffer,
                uniforms=_camera_uniforms(self.transform.model_matrix),
            )
        ]
        for child in self.children:
            commands.extend(child.draw())
        return commands


class WireObject(GameObject):
    """A rectangle outline in a single colour, drawn from a unit square."""

    def __init__(
        self,
        position: Sequence[float],
        size: Sequence[float],
        shader: Any,
        color: Sequence[float],
    ) -> None:
        super().__init__(position, size, shader)
        self._color = _color(color)

    @property
    def color(self) -> Color:
        return self._color

    @color.setter
    def color(self, value: Sequence[float]) -> None:
        self._color = _color(value)

    def vertices(self) -> tuple[Vec2, ...]:
        """The unit square as four line segments; the model matrix places it."""
        return UNIT_QUAD_LINES

    def model_matrix(self) -> np.ndarray:
        """Moves the unit square to ``position`` and stretches it to ``size``."""
        x, y = self.position
        w, h = self.size
        matrix = np.diag([w, h, 1.0, 1.0])
        matrix[0, 3] = x
        matrix[1, 3] = y
        return matrix

    def draw(self) -> list[DrawCommand]:
        uniforms = {"col": self._color, **_camera_uniforms(self.model_matrix())}
        commands = [
            DrawCommand(
                shader=self.shader,
                primitive="lines",
                vertices=UNIT_QUAD_LINES,
                uniforms=uniforms,
            )
        ]
        for child in self.children:
            commands.extend(child.draw())
        return commands


class TexturedObject(GameObject):
    """A quad showing a texture; a texture is anything with a ``size``."""

    def __init__(
        self,
        position: Sequence[float],
        size: Sequence[float],
        shader: Any,
        texture: Any,
    ) -> None:
        super().__init__(position, size, shader)
        self.texture = texture

    def set_texture(self, texture: Any) -> None:
        """Swap the texture and take on its size; the same texture changes nothing."""
        if texture is self.texture:
            return
        self.texture = texture
        if texture is not None:
            self.size = texture.size

    def draw(self) -> list[DrawCommand]:
        """The textured quad's command, then those of its children."""
        commands = super().draw()
        commands[0] = dataclasses.replace(
            commands[0], texture=self.texture, texcoords=QUAD_TEXCOORDS
        )
        return commands


class RenderLayer:
    """An ordered collection of objects drawn together."""

    def __init__(self) -> None:
        self.objects: list[GameObject | None] = []

    def add_object(self, obj: GameObject | None) -> None:
        self.objects.append(obj)

    def remove_object(self, obj: GameObject | None) -> None:
        """Remove every occurrence of ``obj``."""
        self.objects = [item for item in self.objects if item is not obj]

    def draw(self) -> list[DrawCommand]:
        """Commands of every object in order; empty slots are skipped."""
        commands: list[DrawCommand] = []
        for item in self.objects:
            if item is not None:
                commands.extend(item.draw())
        return commands


class PhysicObject:
    """Mix-in for objects that react to collisions."""

    def collide(self, other: GameObject) -> None:
        """Called when this object overlaps ``other``; ignores it by default."""