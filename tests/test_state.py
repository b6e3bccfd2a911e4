import pytest

from astroblast.ecs import World
from astroblast.input import Keyboard, KeyCode
from astroblast.state import (
    GameState,
    StateMachine,
    game_state_input_events,
    in_state,
    transition_to_in_game,
)


def make_world(state=GameState.IN_GAME, escape=False):
    world = World()
    world.insert_resource(StateMachine(current=state))
    keyboard = Keyboard()
    if escape:
        keyboard.press(KeyCode.ESCAPE)
    world.insert_resource(keyboard)
    return world


def test_default_state_is_in_game():
    assert StateMachine().current == GameState.IN_GAME


def test_transition_reports_exited_and_entered():
    machine = StateMachine()
    machine.set_next(GameState.PAUSED)
    assert machine.apply_transition() == (GameState.IN_GAME, GameState.PAUSED)
    assert machine.current == GameState.PAUSED
    assert machine.pending is None


def test_transition_to_same_state_does_nothing():
    machine = StateMachine()
    machine.set_next(GameState.IN_GAME)
    assert machine.apply_transition() is None
    assert machine.pending is None


def test_no_pending_state_means_no_transition():
    machine = StateMachine(current=GameState.GAME_OVER)
    assert machine.apply_transition() is None
    assert machine.current == GameState.GAME_OVER


@pytest.mark.parametrize("state", list(GameState))
def test_in_state_matches_only_current(state):
    world = make_world(state)
    assert in_state(state)(world)
    others = [s for s in GameState if s != state]
    assert not any(in_state(s)(world) for s in others)


@pytest.mark.parametrize(
    "current, expected",
    [
        (GameState.IN_GAME, GameState.PAUSED),
        (GameState.PAUSED, GameState.IN_GAME),
        (GameState.GAME_OVER, None),
    ],
)
def test_escape_toggles_pause(current, expected):
    world = make_world(current, escape=True)
    game_state_input_events(world)
    assert world.resource(StateMachine).pending == expected


def test_without_escape_nothing_changes():
    world = make_world(GameState.IN_GAME)
    game_state_input_events(world)
    assert world.resource(StateMachine).pending is None


def test_held_escape_does_not_toggle_again():
    world = make_world(GameState.IN_GAME, escape=True)
    world.resource(Keyboard).clear_just_pressed()
    game_state_input_events(world)
    assert world.resource(StateMachine).pending is None


def test_transition_to_in_game_requests_in_game():
    world = make_world(GameState.GAME_OVER)
    transition_to_in_game(world)
    machine = world.resource(StateMachine)
    assert machine.apply_transition() == (GameState.GAME_OVER, GameState.IN_GAME)