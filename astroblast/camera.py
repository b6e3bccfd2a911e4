"""The camera looking down on the playing field."""

from __future__ import annotations

from dataclasses import dataclass

from astroblast.ecs import Entity, World
from astroblast.geometry import Transform, Vec3

CAMERA_DISTANCE = 80.0


@dataclass(frozen=True)
class MainCamera:
    """Marks the camera the game is viewed through."""


def spawn_camera(world: World) -> Entity:
    """Queue a camera above the origin, looking down with +Z as up."""
    transform = Transform.from_xyz(0.0, CAMERA_DISTANCE, 0.0).looking_at(Vec3.ZERO, Vec3.Z)
    return world.commands.spawn(transform, MainCamera())