"""The player's spaceship: spawning, flight controls, weapons and shield."""

from __future__ import annotations

from typing import Any

from astroblast.assets import SceneAssets
from astroblast.collision import CollisionDamage
from astroblast.ecs import Entity, Time, World
from astroblast.geometry import Transform, Vec3
from astroblast.health import Health
from astroblast.input import Keyboard, KeyCode
from astroblast.movement import Velocity, moving_object
from astroblast.state import GameState, StateMachine

STARTING_TRANSLATION = Vec3(0.0, 0.0, -20.0)
SPACESHIP_RADIUS = 5.0
SPACESHIP_SPEED = 25.0
SPACESHIP_ROTATION_SPEED = 2.5
SPACESHIP_ROLL_SPEED = 2.5
SPACESHIP_HEALTH = 100.0
SPACESHIP_COLLISION_DAMAGE = 100.0
MISSILE_SPEED = 50.0
MISSILE_FORWARD_SPAWN_SCALAR = 7.5
MISSILE_RADIUS = 1.0
MISSILE_HEALTH = 1.0
MISSILE_COLLISION_DAMAGE = 5.0


class Spaceship:
    """Marks the player's spaceship."""

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Spaceship)

    def __hash__(self) -> int:
        return hash(Spaceship)

    def __repr__(self) -> str:
        return "Spaceship()"


class SpaceshipShield:
    """Marks a spaceship whose shield is raised."""

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SpaceshipShield)

    def __hash__(self) -> int:
        return hash(SpaceshipShield)

    def __repr__(self) -> str:
        return "SpaceshipShield()"


class SpaceshipMissile:
    """Marks a missile fired by the spaceship."""

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SpaceshipMissile)

    def __hash__(self) -> int:
        return hash(SpaceshipMissile)

    def __repr__(self) -> str:
        return "SpaceshipMissile()"


def _scene_assets(world: World) -> SceneAssets:
    try:
        return world.resource(SceneAssets)
    except KeyError:
        return SceneAssets()


def _single(world: World, *component_types: type) -> tuple[Any, ...] | None:
    """The only spaceship's entity and components, or ``None`` unless exactly one exists."""
    matches = list(world.query(Spaceship, *component_types))
    if len(matches) != 1:
        return None
    entity, _, *components = matches[0]
    return (entity, *components)


def spawn_spaceship(world: World) -> Entity:
    """Queue a fresh spaceship at its starting position."""
    return world.commands.spawn(
        moving_object(
            STARTING_TRANSLATION,
            Vec3.ZERO,
            Vec3.ZERO,
            SPACESHIP_RADIUS,
            _scene_assets(world).spaceship,
        ),
        Spaceship(),
        Health(SPACESHIP_HEALTH),
        CollisionDamage(SPACESHIP_COLLISION_DAMAGE),
    )


def spaceship_movement_controls(world: World) -> None:
    """Turn, roll and thrust the spaceship from the held keys."""
    found = _single(world, Transform, Velocity)
    if found is None:
        return
    _, transform, velocity = found
    keyboard = world.resource(Keyboard)
    delta = world.resource(Time).delta

    rotation = 0.0
    roll = 0.0
    movement = 0.0

    if keyboard.pressed(KeyCode.D):
        rotation = -SPACESHIP_ROTATION_SPEED * delta
    elif keyboard.pressed(KeyCode.A):
        rotation = SPACESHIP_ROTATION_SPEED * delta

    if keyboard.pressed(KeyCode.S):
        movement = -SPACESHIP_SPEED
    elif keyboard.pressed(KeyCode.W):
        movement = SPACESHIP_SPEED

    if keyboard.pressed(KeyCode.SHIFT_LEFT):
        roll = -SPACESHIP_ROLL_SPEED * delta
    elif keyboard.pressed(KeyCode.CONTROL_LEFT):
        roll = SPACESHIP_ROLL_SPEED * delta

    # Yaw about the world Y axis, then roll relative to the current orientation.
    transform.rotate_y(rotation)
    transform.rotate_local_z(roll)

    velocity.value = -transform.forward() * movement


def spaceship_weapon_controls(world: World) -> Entity | None:
    """Queue a missile ahead of the spaceship while Space is held; return it if fired."""
    found = _single(world, Transform)
    if found is None:
        return None
    _, transform = found
    if not world.resource(Keyboard).pressed(KeyCode.SPACE):
        return None
    heading = -transform.forward()
    return world.commands.spawn(
        moving_object(
            transform.translation + heading * MISSILE_FORWARD_SPAWN_SCALAR,
            heading * MISSILE_SPEED,
            Vec3.ZERO,
            MISSILE_RADIUS,
            _scene_assets(world).missiles,
        ),
        SpaceshipMissile(),
        Health(MISSILE_HEALTH),
        CollisionDamage(MISSILE_COLLISION_DAMAGE),
    )


def spaceship_shield_controls(world: World) -> None:
    """Queue raising the spaceship's shield while Tab is held."""
    found = _single(world)
    if found is None:
        return
    (spaceship,) = found
    if world.resource(Keyboard).pressed(KeyCode.TAB):
        world.commands.insert(spaceship, SpaceshipShield())


def spaceship_destroyed(world: World) -> None:
    """Request game over unless exactly one spaceship exists."""
    if _single(world) is None:
        world.resource(StateMachine).set_next(GameState.GAME_OVER)