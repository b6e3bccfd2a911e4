"""Velocity, acceleration and the systems that integrate them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from astroblast.collision import Collider
from astroblast.ecs import Time, World
from astroblast.geometry import Transform, Vec3


@dataclass
class Velocity:
    value: Vec3


@dataclass
class Acceleration:
    value: Vec3


@dataclass(frozen=True)
class Model:
    """The scene an entity is drawn with."""

    scene: Any


def moving_object(
    translation: Vec3,
    velocity: Vec3,
    acceleration: Vec3,
    radius: float,
    scene: Any = None,
) -> tuple[Any, ...]:
    """Components of an object that moves, accelerates and collides."""
    components: tuple[Any, ...] = (
        Transform.from_translation(translation),
        Velocity(velocity),
        Acceleration(acceleration),
        Collider(radius),
    )
    if scene is not None:
        components += (Model(scene),)
    return components


def update_velocity(world: World) -> None:
    delta = world.resource(Time).delta
    for _, acceleration, velocity in world.query(Acceleration, Velocity):
        velocity.value = velocity.value + acceleration.value * delta


def update_position(world: World) -> None:
    delta = world.resource(Time).delta
    for _, velocity, transform in world.query(Velocity, Transform):
        transform.translation = transform.translation + velocity.value * delta