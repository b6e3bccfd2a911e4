"""Removal of far-away, dead and, at game over, all destructible entities."""

from __future__ import annotations

from astroblast.ecs import World
from astroblast.geometry import Transform, Vec3
from astroblast.health import Health

DESPAWN_DISTANCE = 100.0


def despawn_far_away_entities(world: World) -> None:
    """Queue removal of destructible entities that left the playing field."""
    for entity, transform, _ in world.query(Transform, Health):
        if transform.translation.distance(Vec3.ZERO) > DESPAWN_DISTANCE:
            world.commands.despawn(entity)


def despawn_dead_entities(world: World) -> None:
    """Queue removal of entities with no health left."""
    for entity, health in world.query(Health):
        if health.is_dead():
            world.commands.despawn(entity)


def despawn_all_entities(world: World) -> None:
    """Queue removal of every entity that has health."""
    for entity, _ in world.query(Health):
        world.commands.despawn(entity)