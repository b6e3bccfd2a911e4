import math

from astroblast.camera import CAMERA_DISTANCE, MainCamera, spawn_camera
from astroblast.ecs import World
from astroblast.geometry import Transform, Vec3


def _close(a: Vec3, b: Vec3) -> bool:
    return all(math.isclose(p, q, abs_tol=1e-9) for p, q in zip(a, b))


def test_spawn_camera_is_deferred_until_commands_apply():
    world = World()
    entity = spawn_camera(world)
    assert entity not in world
    world.apply_commands()
    assert world.has(entity, Transform, MainCamera)


def test_camera_position_and_orientation():
    world = World()
    entity = spawn_camera(world)
    world.apply_commands()
    transform = world.get(entity, Transform)
    assert transform.translation == Vec3(0.0, CAMERA_DISTANCE, 0.0)
    assert _close(transform.forward(), Vec3(0.0, -1.0, 0.0))
    assert _close(transform.rotation.rotate(Vec3.Y), Vec3.Z)


def test_only_one_camera_per_spawn():
    world = World()
    spawn_camera(world)
    world.apply_commands()
    assert len(list(world.query(MainCamera))) == 1