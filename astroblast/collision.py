"""Sphere collision detection, collision events and collision damage."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field

from astroblast.ecs import Entity, Events, World
from astroblast.geometry import Transform
from astroblast.health import Health


@dataclass
class Collider:
    """A bounding sphere and the entities it touched in the last detection pass."""

    radius: float
    colliding_entities: list[Entity] = field(default_factory=list)


@dataclass
class CollisionDamage:
    """Damage dealt to whatever collides with the holder."""

    amount: float


@dataclass(frozen=True)
class CollisionEvent:
    """``entity`` ran into ``collided_entity``."""

    entity: Entity
    collided_entity: Entity


def _collision_events(world: World) -> Events[CollisionEvent]:
    try:
        return world.resource(Events)
    except KeyError:
        events: Events[CollisionEvent] = Events()
        world.insert_resource(events)
        return events


def collision_detection(world: World) -> None:
    """Record, for every collider, the other colliders whose spheres overlap it."""
    bodies = list(world.query(Transform, Collider))
    found: defaultdict[Entity, list[Entity]] = defaultdict(list)

    for entity_a, transform_a, collider_a in bodies:
        for entity_b, transform_b, collider_b in bodies:
            if entity_a == entity_b:
                continue
            distance = transform_a.translation.distance(transform_b.translation)
            if distance < collider_a.radius + collider_b.radius:
                found[entity_a].append(entity_b)

    for entity, _, collider in bodies:
        collider.colliding_entities = list(found.get(entity, ()))


def handle_collisions(world: World, marker: type) -> None:
    """Send a collision event for each hit between a ``marker`` entity and another kind."""
    events = _collision_events(world)
    for entity, collider, _ in world.query(Collider, marker):
        for collided in collider.colliding_entities:
            if world.has(collided, Collider, marker):
                continue
            events.send(CollisionEvent(entity, collided))


def apply_collision_damage(world: World) -> None:
    """Consume collision events, taking the other side's damage from each entity's health."""
    for event in _collision_events(world).drain():
        health = world.get(event.entity, Health)
        if health is None:
            continue
        damage = world.get(event.collided_entity, CollisionDamage)
        if damage is None:
            continue
        health.damage(damage.amount)