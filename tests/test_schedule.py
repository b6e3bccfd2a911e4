from dataclasses import dataclass

from astroblast.ecs import World
from astroblast.schedule import InGameSet, Schedule
from astroblast.state import GameState, StateMachine


@dataclass
class Marker:
    pass


def make_world(state=GameState.IN_GAME):
    world = World()
    world.insert_resource(StateMachine(current=state))
    return world


def recorder(log, name):
    def system(world):
        log.append(name)

    return system


def test_sets_run_in_chain_order_regardless_of_registration():
    log = []
    schedule = Schedule()
    schedule.add_system(recorder(log, "collide"), in_set=InGameSet.COLLISION_DETECTION)
    schedule.add_system(recorder(log, "update"), in_set=InGameSet.ENTITY_UPDATES)
    schedule.add_system(recorder(log, "input"), in_set=InGameSet.USER_INPUT)
    schedule.add_system(recorder(log, "despawn"), in_set=InGameSet.DESPAWN_ENTITIES)
    schedule.add_system(recorder(log, "free"))
    schedule.run_update(make_world())
    assert log == ["despawn", "input", "update", "collide", "free"]


def test_in_game_sets_pause_outside_in_game():
    log = []
    schedule = Schedule()
    schedule.add_system(recorder(log, "update"), in_set=InGameSet.ENTITY_UPDATES)
    schedule.add_system(recorder(log, "free"))
    schedule.run_update(make_world(GameState.PAUSED))
    assert log == ["free"]


def test_commands_flushed_after_despawn_set():
    world = make_world()
    target = world.spawn(Marker())
    seen = []
    schedule = Schedule()
    schedule.add_system(
        lambda w: w.commands.despawn(target), in_set=InGameSet.DESPAWN_ENTITIES
    )
    schedule.add_system(lambda w: seen.append(target in w), in_set=InGameSet.USER_INPUT)
    schedule.run_update(world)
    assert seen == [False]


def test_commands_applied_at_end_of_frame():
    world = make_world()
    seen = []
    schedule = Schedule()
    schedule.add_system(
        lambda w: seen.append(w.commands.spawn(Marker())), in_set=InGameSet.ENTITY_UPDATES
    )
    schedule.run_update(world)
    assert seen[0] in world


def test_run_if_skips_system():
    log = []
    schedule = Schedule()
    schedule.add_system(recorder(log, "never"), run_if=lambda w: False)
    schedule.add_system(recorder(log, "always"), run_if=lambda w: True)
    schedule.run_update(make_world())
    assert log == ["always"]


def test_on_enter_runs_once_before_update_systems():
    log = []
    world = make_world()
    schedule = Schedule()
    schedule.add_on_enter(GameState.GAME_OVER, recorder(log, "enter"))
    schedule.add_system(recorder(log, "free"))
    world.resource(StateMachine).set_next(GameState.GAME_OVER)
    schedule.run_update(world)
    schedule.run_update(world)
    assert log == ["enter", "free", "free"]
    assert world.resource(StateMachine).current == GameState.GAME_OVER


def test_transition_to_same_state_skips_on_enter():
    log = []
    world = make_world()
    schedule = Schedule()
    schedule.add_on_enter(GameState.IN_GAME, recorder(log, "enter"))
    world.resource(StateMachine).set_next(GameState.IN_GAME)
    schedule.run_update(world)
    assert log == []


def test_startup_runs_initial_on_enter_then_systems_and_applies_commands():
    log = []
    world = make_world()
    spawned = []
    schedule = Schedule()
    schedule.add_on_enter(GameState.IN_GAME, recorder(log, "enter"))
    schedule.add_startup_system(recorder(log, "first"))
    schedule.add_startup_system(lambda w: spawned.append(w.commands.spawn(Marker())))
    schedule.run_startup(world)
    assert log == ["enter", "first"]
    assert spawned[0] in world


def test_custom_set_condition():
    log = []
    schedule = Schedule(set_condition=lambda w: False)
    schedule.add_system(recorder(log, "update"), in_set=InGameSet.ENTITY_UPDATES)
    schedule.run_update(make_world())
    assert log == []