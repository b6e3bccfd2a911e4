"""Scene assets shared by the systems that spawn visible objects."""

from __future__ import annotations

from dataclasses import dataclass

from astroblast.ecs import World

ASTEROID_SCENE = "Asteroid.glb#Scene0"
SPACESHIP_SCENE = "Spaceship.glb#Scene0"
MISSILES_SCENE = "Missiles.glb#Scene0"


@dataclass(frozen=True)
class SceneAssets:
    """Handles of the scenes drawn for each kind of object; ``None`` until loaded."""

    asteroid: str | None = None
    spaceship: str | None = None
    missiles: str | None = None


def load_assets(world: World) -> SceneAssets:
    """Replace the world's scene assets with the game's scenes."""
    assets = SceneAssets(
        asteroid=ASTEROID_SCENE,
        spaceship=SPACESHIP_SCENE,
        missiles=MISSILES_SCENE,
    )
    world.insert_resource(assets)
    return assets