"""Asteroids: timed random spawning and spinning."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Protocol

from astroblast.assets import SceneAssets
from astroblast.collision import CollisionDamage
from astroblast.ecs import Entity, Time, Timer, World
from astroblast.geometry import Transform, Vec3
from astroblast.health import Health
from astroblast.movement import moving_object

VELOCITY_SCALAR = 5.0
ACCELERATION_SCALAR = 1.0
SPAWN_RANGE_X = (-25.0, 25.0)
SPAWN_RANGE_Z = (0.0, 25.0)
SPAWN_TIME_SECONDS = 1.0
ROTATE_SPEED = 2.5
RADIUS = 2.5
HEALTH = 80.0
COLLISION_DAMAGE = 35.0


class _Random(Protocol):
    def random(self) -> float: ...


@dataclass(frozen=True)
class Asteroid:
    """Marks an entity as an asteroid."""


@dataclass
class SpawnTimer:
    """Repeating timer that paces asteroid spawning."""

    timer: Timer = field(
        default_factory=lambda: Timer(SPAWN_TIME_SECONDS, repeating=True)
    )


def _in_range(rng: _Random, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return low + (high - low) * rng.random()


def random_unit_vector(rng: _Random) -> Vec3:
    """A random direction in the XZ plane, or zero if none was drawn."""
    return Vec3(_in_range(rng, (-1.0, 1.0)), 0.0, _in_range(rng, (-1.0, 1.0))).normalize_or_zero()


def _spawn_timer(world: World) -> SpawnTimer:
    try:
        return world.resource(SpawnTimer)
    except KeyError:
        spawn_timer = SpawnTimer()
        world.insert_resource(spawn_timer)
        return spawn_timer


def _asteroid_scene(world: World) -> str | None:
    try:
        return world.resource(SceneAssets).asteroid
    except KeyError:
        return None


def spawn_asteroid(world: World, rng: _Random | None = None) -> Entity | None:
    """Queue a new asteroid each time the spawn timer fires; return it if one was queued."""
    spawn_timer = _spawn_timer(world)
    spawn_timer.timer.tick(world.resource(Time).delta)
    if not spawn_timer.timer.just_finished:
        return None

    rng = rng if rng is not None else random.Random()
    translation = Vec3(_in_range(rng, SPAWN_RANGE_X), 0.0, _in_range(rng, SPAWN_RANGE_Z))
    velocity = random_unit_vector(rng) * VELOCITY_SCALAR
    acceleration = random_unit_vector(rng) * ACCELERATION_SCALAR

    return world.commands.spawn(
        moving_object(translation, velocity, acceleration, RADIUS, _asteroid_scene(world)),
        Asteroid(),
        Health(HEALTH),
        CollisionDamage(COLLISION_DAMAGE),
    )


def rotate_asteroids(world: World) -> None:
    """Spin every asteroid about its own Z axis."""
    angle = ROTATE_SPEED * world.resource(Time).delta
    for _, transform, _ in world.query(Transform, Asteroid):
        transform.rotate_local_z(angle)