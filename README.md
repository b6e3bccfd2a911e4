# astroblast

A small top-down arcade shooter. You fly a spaceship through a field of
drifting, tumbling asteroids and shoot them with missiles before they hit you.

The game runs on a compact entity-component-system core. Entities carry
components such as a transform, a velocity, an acceleration, a collider,
health and collision damage. Every frame, systems run in ordered stages:
despawning, user input, entity updates and collision detection.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Playing

```
astroblast
```

This opens a pygame window with a camera looking straight down on the
playing field. Objects are drawn as shaded circles. The spaceship has a line
that shows its heading, and a ring appears around it once its shield is
raised.

| Key                    | Action                     |
|------------------------|----------------------------|
| W / S                  | Thrust forward / backward  |
| A / D                  | Turn left / right          |
| Left Ctrl / Left Shift | Roll                       |
| Space                  | Fire missiles (while held) |
| Tab                    | Raise the shield           |
| Escape                 | Pause / resume             |

An asteroid appears about once a second at a random spot, with a random
heading and a slow random acceleration, and it spins as it drifts. Collisions
between different kinds of object deal damage:

- an asteroid has 80 health and deals 35 damage;
- the ship has 100 health and deals 100 damage;
- a missile has 1 health and deals 5 damage.

Anything that runs out of health disappears. So does anything with health
that drifts more than 100 units from the centre of the field. When the ship
is destroyed, every object with health is removed, a fresh ship is placed at
its starting position, and play resumes.

### Command-line options

| Option        | Meaning                                                  |
|---------------|----------------------------------------------------------|
| `--headless`  | Run without a window; 600 frames unless `--frames` is given |
| `--frames N`  | Stop after N frames                                      |
| `--fps N`     | Frames per second (default 60)                           |
| `--seed N`    | Seed for asteroid spawning                               |
| `--debug`     | Log every entity's position each frame                   |

```
astroblast --headless --frames 300 --seed 7
```

## What it does not do

There are no 3D models and no textures. The scene names in
`astroblast.assets.SceneAssets` (`Asteroid.glb#Scene0` and so on) are
recorded but never loaded, and the window draws flat circles in their place.
The shield is only a marker: raising it does not change how damage is dealt.
There is no score, no sound and no saved state.

## Using it as a library

You can drive the game without a window, for tests or experiments:

```python
from astroblast.game import Game
from astroblast.input import KeyCode

game = Game(seed=1)
game.startup()
game.keyboard.press(KeyCode.W)
for _ in range(60):
    game.step(1 / 60)
print(game.state, len(game.world))
```

- `astroblast.ecs.World` holds entities, their components and typed
  resources. Changes queued through `world.commands` are applied by
  `World.apply_commands`. The module also provides `Events`, `Timer` and
  `Time`.
- `astroblast.schedule.Schedule` runs the startup systems and the per-frame
  systems in `InGameSet` order. The sets run only while the game is in
  `GameState.IN_GAME`. The schedule also runs the systems registered for
  entering a `GameState`.
- `astroblast.state.StateMachine` holds the current and pending
  `GameState`.
- `astroblast.game.create_world` and `astroblast.game.build_schedule`
  assemble the full game.
- `astroblast.geometry` provides the `Vec3`, `Quat` and `Transform` types.

The systems are plain functions that take the world. They live in
`astroblast.movement`, `astroblast.collision`, `astroblast.despawn`,
`astroblast.asteroids`, `astroblast.spaceship`, `astroblast.camera`,
`astroblast.assets`, `astroblast.state` and `astroblast.debug`.