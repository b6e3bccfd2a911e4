"""Assembly of the game's world and schedule, the frame loop and the command line."""

from __future__ import annotations

import argparse
import functools
import logging
import math
import random
from collections.abc import Sequence
from typing import Any

from astroblast.assets import SceneAssets, load_assets
from astroblast.asteroids import Asteroid, SpawnTimer, rotate_asteroids, spawn_asteroid
from astroblast.camera import MainCamera, spawn_camera
from astroblast.collision import (
    Collider,
    apply_collision_damage,
    collision_detection,
    handle_collisions,
)
from astroblast.debug import print_position
from astroblast.despawn import (
    despawn_all_entities,
    despawn_dead_entities,
    despawn_far_away_entities,
)
from astroblast.ecs import Time, World
from astroblast.geometry import Quat, Transform, Vec3
from astroblast.input import Keyboard, KeyCode
from astroblast.movement import update_position, update_velocity
from astroblast.schedule import InGameSet, Schedule
from astroblast.spaceship import (
    Spaceship,
    SpaceshipMissile,
    SpaceshipShield,
    spaceship_destroyed,
    spaceship_movement_controls,
    spaceship_shield_controls,
    spaceship_weapon_controls,
    spawn_spaceship,
)
from astroblast.state import (
    GameState,
    StateMachine,
    game_state_input_events,
    in_state,
    transition_to_in_game,
)

CLEAR_COLOR = (0.1, 0.0, 0.15)
AMBIENT_BRIGHTNESS = 0.75
WINDOW_SIZE = (960, 720)
VERTICAL_FOV = math.pi / 4.0
DEFAULT_FPS = 60
DEFAULT_HEADLESS_FRAMES = 600

logger = logging.getLogger(__name__)


def _spawn_asteroid_system(world: World) -> None:
    try:
        rng = world.resource(random.Random)
    except KeyError:
        rng = None
    spawn_asteroid(world, rng)


def create_world() -> World:
    """A world holding every resource the game's systems read."""
    world = World()
    world.insert_resource(Time())
    world.insert_resource(Keyboard())
    world.insert_resource(StateMachine())
    world.insert_resource(SceneAssets())
    world.insert_resource(SpawnTimer())
    world.insert_resource(random.Random())
    return world


def build_schedule() -> Schedule:
    """The game's systems, registered in their sets and states."""
    schedule = Schedule()

    schedule.add_startup_system(load_assets)
    schedule.add_startup_system(spawn_camera)
    schedule.add_startup_system(spawn_spaceship)

    schedule.add_system(despawn_far_away_entities, in_set=InGameSet.DESPAWN_ENTITIES)
    schedule.add_system(despawn_dead_entities, in_set=InGameSet.DESPAWN_ENTITIES)

    schedule.add_system(spaceship_movement_controls, in_set=InGameSet.USER_INPUT)
    schedule.add_system(spaceship_weapon_controls, in_set=InGameSet.USER_INPUT)
    schedule.add_system(spaceship_shield_controls, in_set=InGameSet.USER_INPUT)

    schedule.add_system(update_velocity, in_set=InGameSet.ENTITY_UPDATES)
    schedule.add_system(update_position, in_set=InGameSet.ENTITY_UPDATES)
    schedule.add_system(_spawn_asteroid_system, in_set=InGameSet.ENTITY_UPDATES)
    schedule.add_system(rotate_asteroids, in_set=InGameSet.ENTITY_UPDATES)
    for marker in (Asteroid, Spaceship, SpaceshipMissile):
        schedule.add_system(
            functools.partial(handle_collisions, marker=marker),
            in_set=InGameSet.ENTITY_UPDATES,
        )
    schedule.add_system(apply_collision_damage, in_set=InGameSet.ENTITY_UPDATES)
    schedule.add_system(spaceship_destroyed, in_set=InGameSet.ENTITY_UPDATES)

    schedule.add_system(collision_detection, in_set=InGameSet.COLLISION_DETECTION)

    schedule.add_system(game_state_input_events)
    schedule.add_system(transition_to_in_game, run_if=in_state(GameState.GAME_OVER))

    schedule.add_on_enter(GameState.GAME_OVER, despawn_all_entities)
    schedule.add_on_enter(GameState.GAME_OVER, spawn_spaceship)
    return schedule


class Game:
    """A world driven frame by frame through the game's schedule."""

    def __init__(self, seed: int | None = None, debug: bool = False) -> None:
        self.world = create_world()
        self.world.insert_resource(random.Random(seed))
        self.schedule = build_schedule()
        if debug:
            self.schedule.add_system(print_position)
        self.started = False

    @property
    def state(self) -> GameState:
        return self.world.resource(StateMachine).current

    @property
    def keyboard(self) -> Keyboard:
        return self.world.resource(Keyboard)

    def startup(self) -> None:
        """Run the startup systems; a game starts only once."""
        if self.started:
            raise RuntimeError("the game has already started")
        self.started = True
        self.schedule.run_startup(self.world)

    def step(self, delta: float) -> None:
        """Advance the game by one frame of ``delta`` seconds."""
        if delta < 0.0:
            raise ValueError("frame delta cannot be negative")
        if not self.started:
            self.startup()
        self.world.resource(Time).advance(delta)
        self.schedule.run_update(self.world)
        self.keyboard.clear_just_pressed()


def _project(
    camera: Transform, point: Vec3, size: tuple[int, int]
) -> tuple[float, float, float] | None:
    """Screen position and pixels per world unit of ``point``, or ``None`` if behind."""
    q = camera.rotation
    view = Quat(-q.x, -q.y, -q.z, q.w).rotate(point - camera.translation)
    depth = -view.z
    if depth <= 0.0:
        return None
    width, height = size
    half_height = depth * math.tan(VERTICAL_FOV / 2.0)
    half_width = half_height * width / height
    screen_x = (view.x / half_width + 1.0) * width / 2.0
    screen_y = (1.0 - view.y / half_height) * height / 2.0
    return screen_x, screen_y, (height / 2.0) / half_height


def _shade(color: tuple[int, int, int]) -> tuple[int, int, int]:
    factor = min(1.0, 0.25 + AMBIENT_BRIGHTNESS)
    return tuple(int(channel * factor) for channel in color)  # type: ignore[return-value]


def _draw(pygame: Any, screen: Any, font: Any, game: Game) -> None:
    screen.fill(tuple(int(channel * 255) for channel in CLEAR_COLOR))
    world = game.world
    cameras = list(world.query(Transform, MainCamera))
    if cameras:
        _, camera, _ = cameras[0]
        size = screen.get_size()
        for entity, transform, collider in world.query(Transform, Collider):
            projected = _project(camera, transform.translation, size)
            if projected is None:
                continue
            x, y, scale = projected
            radius = max(1, round(collider.radius * scale))
            if world.has(entity, Spaceship):
                pygame.draw.circle(screen, _shade((80, 200, 255)), (x, y), radius)
                tip = _project(
                    camera, transform.translation - transform.forward() * collider.radius, size
                )
                if tip is not None:
                    pygame.draw.line(screen, (255, 255, 255), (x, y), tip[:2], 3)
                if world.has(entity, SpaceshipShield):
                    pygame.draw.circle(screen, (120, 255, 160), (x, y), radius + 4, 2)
            elif world.has(entity, SpaceshipMissile):
                pygame.draw.circle(screen, _shade((255, 230, 90)), (x, y), radius)
            else:
                pygame.draw.circle(screen, _shade((150, 140, 130)), (x, y), radius)
    if game.state is GameState.PAUSED and font is not None:
        text = font.render("PAUSED", True, (255, 255, 255))
        screen.blit(text, text.get_rect(center=(screen.get_width() / 2, screen.get_height() / 2)))


def _run_window(game: Game, frames: int | None, fps: int) -> None:
    import pygame

    keys = {
        pygame.K_a: KeyCode.A,
        pygame.K_d: KeyCode.D,
        pygame.K_s: KeyCode.S,
        pygame.K_w: KeyCode.W,
        pygame.K_LSHIFT: KeyCode.SHIFT_LEFT,
        pygame.K_LCTRL: KeyCode.CONTROL_LEFT,
        pygame.K_SPACE: KeyCode.SPACE,
        pygame.K_TAB: KeyCode.TAB,
        pygame.K_ESCAPE: KeyCode.ESCAPE,
    }
    pygame.init()
    try:
        screen = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption("Astroblast")
        font = pygame.font.Font(None, 64) if pygame.font.get_init() else None
        clock = pygame.time.Clock()
        game.startup()
        frame = 0
        running = True
        while running and (frames is None or frame < frames):
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and (key := keys.get(event.key)):
                    game.keyboard.press(key)
                elif event.type == pygame.KEYUP and (key := keys.get(event.key)):
                    game.keyboard.release(key)
            game.step(clock.tick(fps) / 1000.0)
            _draw(pygame, screen, font, game)
            pygame.display.flip()
            frame += 1
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game in a window, or for a number of frames without one."""
    parser = argparse.ArgumentParser(prog="astroblast", description="Fly a spaceship among asteroids.")
    parser.add_argument("--headless", action="store_true", help="run without a window")
    parser.add_argument("--frames", type=int, help="stop after this many frames")
    parser.add_argument("--fps", type=int, default=DEFAULT_FPS, help="frames per second")
    parser.add_argument("--seed", type=int, help="seed for asteroid spawning")
    parser.add_argument("--debug", action="store_true", help="log entity positions")
    args = parser.parse_args(argv)
    if args.frames is not None and args.frames < 0:
        parser.error("--frames must not be negative")
    if args.fps <= 0:
        parser.error("--fps must be positive")

    if args.debug:
        logging.basicConfig(level=logging.INFO)
    game = Game(seed=args.seed, debug=args.debug)

    if args.headless:
        frames = DEFAULT_HEADLESS_FRAMES if args.frames is None else args.frames
        game.startup()
        for _ in range(frames):
            game.step(1.0 / args.fps)
        logger.info("ran %d frames; %d entities remain", frames, len(game.world))
    else:
        _run_window(game, args.frames, args.fps)
    return 0