"""Logging of entity positions for debugging."""

from __future__ import annotations

import logging

from astroblast.ecs import World
from astroblast.geometry import Transform

logger = logging.getLogger(__name__)


def print_position(world: World) -> None:
    """Log the identifier and translation of every entity with a transform."""
    for entity, transform in world.query(Transform):
        logger.info("Entity %r is at position %r,", entity, transform.translation)