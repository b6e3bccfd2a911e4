"""Game states and the transitions between them."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from astroblast.input import Keyboard, KeyCode

if TYPE_CHECKING:
    from astroblast.ecs import World


class GameState(Enum):
    IN_GAME = auto()
    PAUSED = auto()
    GAME_OVER = auto()


@dataclass
class StateMachine:
    """The current state and the one requested for the next frame."""

    current: GameState = GameState.IN_GAME
    pending: GameState | None = None

    def set_next(self, state: GameState) -> None:
        self.pending = state

    def apply_transition(self) -> tuple[GameState, GameState] | None:
        """Move to the pending state; return ``(exited, entered)`` if the state changed."""
        entered, self.pending = self.pending, None
        if entered is None or entered == self.current:
            return None
        exited, self.current = self.current, entered
        return exited, entered


def in_state(state: GameState) -> Callable[[World], bool]:
    """A run condition true while the world is in ``state``."""

    def condition(world: World) -> bool:
        return world.resource(StateMachine).current == state

    return condition


def game_state_input_events(world: World) -> None:
    """Escape toggles between playing and paused."""
    if not world.resource(Keyboard).just_pressed(KeyCode.ESCAPE):
        return
    machine = world.resource(StateMachine)
    if machine.current == GameState.IN_GAME:
        machine.set_next(GameState.PAUSED)
    elif machine.current == GameState.PAUSED:
        machine.set_next(GameState.IN_GAME)


def transition_to_in_game(world: World) -> None:
    world.resource(StateMachine).set_next(GameState.IN_GAME)