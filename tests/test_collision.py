import pytest

from spriteforge.collision import (
    CollisionDetector,
    CollisionLayer,
    Role,
    setup_collision_mask,
)
from spriteforge.objects import GameObject, PhysicObject


class Body(GameObject, PhysicObject):
    def __init__(self, position, size):
        super().__init__(position, size, None)
        self.hits = []

    def collide(self, other):
        self.hits.append(other)


class Exploding(GameObject, PhysicObject):
    def collide(self, other):
        raise RuntimeError("boom")


def _with_role(role):
    obj = GameObject((0, 0), (1, 1), None)
    setup_collision_mask(obj, role)
    return obj


@pytest.mark.parametrize(
    "role, bit",
    [(Role.PLAYER, 1), (Role.ASTEROID, 2), (Role.PROJECTILE, 4), (Role.POWERUP, 8)],
)
def test_role_layers_use_single_bits(role, bit):
    assert _with_role(role).collision_layer == bit


def test_role_masks_pair_up():
    player = _with_role(Role.PLAYER)
    rock = _with_role(Role.ASTEROID)
    bullet = _with_role(Role.PROJECTILE)
    powerup = _with_role(Role.POWERUP)
    assert player.can_collide_with(rock) and rock.can_collide_with(player)
    assert bullet.can_collide_with(rock) and rock.can_collide_with(bullet)
    assert not powerup.can_collide_with(rock)
    assert not rock.can_collide_with(powerup)
    assert not bullet.can_collide_with(powerup)


@pytest.mark.parametrize(
    "role, layer, mask",
    [
        (Role.PLAYER, CollisionLayer.PLAYER,
         CollisionLayer.ASTEROID | CollisionLayer.BULLET | CollisionLayer.POWERUP),
        (Role.PROJECTILE, CollisionLayer.BULLET,
         CollisionLayer.ASTEROID | CollisionLayer.PLAYER),
        (Role.ASTEROID, CollisionLayer.ASTEROID,
         CollisionLayer.BULLET | CollisionLayer.PLAYER),
        (Role.POWERUP, CollisionLayer.POWERUP, CollisionLayer.PLAYER),
    ],
)
def test_setup_collision_mask(role, layer, mask):
    obj = GameObject((0, 0), (1, 1), None)
    setup_collision_mask(obj, role)
    assert obj.collision_layer == layer
    assert obj.collision_mask == mask


def test_check_collision_overlap_and_separation():
    assert CollisionDetector.check_collision((0, 0), (10, 10), (5, 5), (10, 10))
    assert not CollisionDetector.check_collision((0, 0), (10, 10), (20, 0), (10, 10))
    assert not CollisionDetector.check_collision((0, 0), (10, 10), (0, 20), (10, 10))


def test_check_collision_touching_edges_counts():
    assert CollisionDetector.check_collision((0, 0), (10, 10), (10, 0), (10, 10))


def test_check_collision_empty_rectangle_never_collides():
    assert not CollisionDetector.check_collision((0, 0), (0, 10), (0, 0), (10, 10))
    assert not CollisionDetector.check_collision((0, 0), (10, 10), (0, 0), (10, -1))


def test_add_object_with_role_sets_mask():
    detector = CollisionDetector()
    obj = GameObject((0, 0), (1, 1), None)
    detector.add_object(obj, Role.ASTEROID)
    assert detector.objects == [obj]
    assert obj.collision_layer == CollisionLayer.ASTEROID


def test_add_and_remove_none_raise():
    detector = CollisionDetector()
    with pytest.raises(TypeError):
        detector.add_object(None)
    with pytest.raises(TypeError):
        detector.remove_object(None)
    with pytest.raises(TypeError):
        detector.try_move(None)


def test_try_move_ignores_itself():
    detector = CollisionDetector()
    a = GameObject((0, 0), (10, 10), None)
    detector.add_object(a)
    assert detector.try_move(a) is False
    b = GameObject((5, 5), (10, 10), None)
    detector.add_object(b)
    assert detector.try_move(a) is True


def test_remove_object_stops_tracking():
    detector = CollisionDetector()
    a = GameObject((0, 0), (10, 10), None)
    b = GameObject((5, 5), (10, 10), None)
    detector.add_object(a)
    detector.add_object(b)
    detector.remove_object(b)
    assert detector.objects == [a]
    assert detector.try_move(a) is False


def test_check_collisions_notifies_both_sides():
    detector = CollisionDetector()
    ship = Body((0, 0), (10, 10))
    rock = Body((5, 5), (10, 10))
    detector.add_object(ship, Role.PLAYER)
    detector.add_object(rock, Role.ASTEROID)
    detector.check_collisions()
    assert ship.hits == [rock]
    assert rock.hits == [ship]


def test_check_collisions_respects_mask_of_earlier_object():
    detector = CollisionDetector()
    powerup = Body((0, 0), (10, 10))
    rock = Body((5, 5), (10, 10))
    detector.add_object(powerup, Role.POWERUP)
    detector.add_object(rock, Role.ASTEROID)
    detector.check_collisions()
    assert powerup.hits == []
    assert rock.hits == []


def test_check_collisions_skips_separated_objects():
    detector = CollisionDetector()
    ship = Body((0, 0), (10, 10))
    rock = Body((50, 50), (10, 10))
    detector.add_object(ship, Role.PLAYER)
    detector.add_object(rock, Role.ASTEROID)
    detector.check_collisions()
    assert ship.hits == [] and rock.hits == []


def test_failing_collide_does_not_stop_the_other_side():
    detector = CollisionDetector()
    bad = Exploding((0, 0), (10, 10), None)
    rock = Body((5, 5), (10, 10))
    detector.add_object(bad, Role.PLAYER)
    detector.add_object(rock, Role.ASTEROID)
    detector.check_collisions()
    assert rock.hits == [bad]


def test_plain_objects_are_not_notified():
    detector = CollisionDetector()
    plain = GameObject((0, 0), (10, 10), None)
    rock = Body((5, 5), (10, 10))
    detector.add_object(plain, Role.PLAYER)
    detector.add_object(rock, Role.ASTEROID)
    detector.check_collisions()
    assert rock.hits == [plain]