"""Axis-aligned collision detection with layer/mask filtering."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum, IntFlag, auto

from spriteforge.objects import GameObject, PhysicObject

logger = logging.getLogger(__name__)


class CollisionLayer(IntFlag):
    NONE = 0
    PLAYER = 1 << 0
    ASTEROID = 1 << 1
    BULLET = 1 << 2
    POWERUP = 1 << 3
    EFFECT = 1 << 4


class Role(Enum):
    """Kinds of game object with a predefined layer and mask."""

    PLAYER = auto()
    PROJECTILE = auto()
    ASTEROID = auto()
    POWERUP = auto()


_ROLE_SETUP: dict[Role, tuple[CollisionLayer, CollisionLayer]] = {
    Role.PLAYER: (
        CollisionLayer.PLAYER,
        CollisionLayer.ASTEROID | CollisionLayer.BULLET | CollisionLayer.POWERUP,
    ),
    Role.PROJECTILE: (
        CollisionLayer.BULLET,
        CollisionLayer.ASTEROID | CollisionLayer.PLAYER,
    ),
    Role.ASTEROID: (
        CollisionLayer.ASTEROID,
        CollisionLayer.BULLET | CollisionLayer.PLAYER,
    ),
    Role.POWERUP: (CollisionLayer.POWERUP, CollisionLayer.PLAYER),
}


def setup_collision_mask(obj: GameObject, role: Role) -> None:
    """Give ``obj`` the collision layer and mask that belong to ``role``."""
    layer, mask = _ROLE_SETUP[role]
    obj.collision_layer = layer
    obj.collision_mask = mask


class CollisionDetector:
    """Tracks objects and reports overlaps between them."""

    def __init__(self) -> None:
        self.objects: list[GameObject] = []

    def add_object(self, obj: GameObject, role: Role | None = None) -> None:
        """Track ``obj``, first setting its layer and mask if a ``role`` is given."""
        if obj is None:
            raise TypeError("cannot add None to the collision detector")
        if role is not None:
            setup_collision_mask(obj, role)
        self.objects.append(obj)

    def remove_object(self, obj: GameObject) -> None:
        """Stop tracking ``obj`` (every occurrence of it)."""
        if obj is None:
            raise TypeError("cannot remove None from the collision detector")
        self.objects = [item for item in self.objects if item is not obj]

    def try_move(self, obj: GameObject) -> bool:
        """Whether ``obj`` overlaps any other tracked object, regardless of masks."""
        if obj is None:
            raise TypeError("try_move needs an object")
        return any(
            self.check_collision(obj.position, obj.size, item.position, item.size)
            for item in self.objects
            if item is not obj
        )

    def check_collisions(self) -> None:
        """Call ``collide`` on both members of every overlapping pair.

        A pair is considered only if the earlier object's mask includes the
        later object's layer. Errors raised by ``collide`` are logged.
        """
        objects = list(self.objects)
        for i, first in enumerate(objects):
            for second in objects[i + 1:]:
                if not first.can_collide_with(second):
                    continue
                if not self.check_collision(
                    first.position, first.size, second.position, second.size
                ):
                    continue
                for this, other in ((first, second), (second, first)):
                    if isinstance(this, PhysicObject):
                        try:
                            this.collide(other)
                        except Exception:
                            logger.exception("Error in collision callback for %r", this)

    @staticmethod
    def check_collision(
        pos1: Sequence[float],
        size1: Sequence[float],
        pos2: Sequence[float],
        size2: Sequence[float],
    ) -> bool:
        """Axis-aligned overlap test; touching edges count, empty rectangles never do."""
        x1, y1 = pos1
        w1, h1 = size1
        x2, y2 = pos2
        w2, h2 = size2
        if w1 <= 0 or h1 <= 0 or w2 <= 0 or h2 <= 0:
            return False
        if x1 + w1 < x2 or x2 + w2 < x1:
            return False
        if y1 + h1 < y2 or y2 + h2 < y1:
            return False
        return True