"""A top-down asteroid shooter built on a small entity-component-system core."""

__version__ = "0.1.0"

__all__ = [
    "assets",
    "asteroids",
    "camera",
    "collision",
    "debug",
    "despawn",
    "ecs",
    "game",
    "geometry",
    "health",
    "input",
    "movement",
    "schedule",
    "spaceship",
    "state",
]