from dataclasses import dataclass

import pytest

from astroblast.ecs import Events, Time, Timer, World


@dataclass
class Position:
    x: float
    y: float


@dataclass
class Speed:
    value: float


@dataclass
class Marker:
    pass


def test_spawn_and_get_component():
    world = World()
    entity = world.spawn(Position(1.0, 2.0), Speed(3.0))
    assert world.get(entity, Position) == Position(1.0, 2.0)
    assert world.get(entity, Speed) == Speed(3.0)
    assert world.get(entity, Marker) is None


def test_spawn_flattens_nested_bundles():
    world = World()
    entity = world.spawn((Position(0.0, 0.0), [Speed(1.0)]), Marker())
    assert world.has(entity, Position, Speed, Marker)


def test_spawned_entities_are_distinct():
    world = World()
    entities = [world.spawn(Marker()) for _ in range(10)]
    assert len(set(entities)) == len(entities)
    assert len(world) == len(entities)


def test_query_filters_and_keeps_spawn_order():
    world = World()
    a = world.spawn(Position(0, 0), Speed(1))
    world.spawn(Position(5, 5))
    c = world.spawn(Speed(2), Position(1, 1))
    result = list(world.query(Speed, Position))
    assert result == [(a, Speed(1), Position(0, 0)), (c, Speed(2), Position(1, 1))]


def test_query_yields_live_components():
    world = World()
    entity = world.spawn(Position(0.0, 0.0))
    for _, position in world.query(Position):
        position.x = 9.0
    assert world.get(entity, Position).x == 9.0


def test_query_is_safe_when_despawning_during_iteration():
    world = World()
    for _ in range(3):
        world.spawn(Marker())
    for entity, _ in world.query(Marker):
        world.despawn(entity)
    assert len(world) == 0


def test_despawn_reports_existence():
    world = World()
    entity = world.spawn(Marker())
    assert world.despawn(entity) is True
    assert world.despawn(entity) is False
    assert entity not in world


def test_insert_adds_and_replaces():
    world = World()
    entity = world.spawn(Speed(1.0))
    world.insert(entity, Speed(2.0), Marker())
    assert world.get(entity, Speed) == Speed(2.0)
    assert world.has(entity, Marker)


def test_insert_into_missing_entity_raises():
    world = World()
    entity = world.spawn(Marker())
    world.despawn(entity)
    with pytest.raises(KeyError):
        world.insert(entity, Speed(1.0))


def test_has_requires_all_types_and_existing_entity():
    world = World()
    entity = world.spawn(Speed(1.0))
    assert world.has(entity, Speed)
    assert not world.has(entity, Speed, Marker)
    world.despawn(entity)
    assert not world.has(entity)


def test_resources_round_trip_and_missing_raises():
    world = World()
    time = Time()
    world.insert_resource(time)
    assert world.resource(Time) is time
    with pytest.raises(KeyError):
        world.resource(Timer)


def test_command_spawn_is_deferred_with_reserved_id():
    world = World()
    entity = world.commands.spawn(Speed(4.0))
    assert entity not in world
    world.apply_commands()
    assert world.get(entity, Speed) == Speed(4.0)
    assert len(world.commands) == 0


def test_command_despawn_and_insert_are_deferred():
    world = World()
    doomed = world.spawn(Marker())
    kept = world.spawn(Speed(1.0))
    world.commands.despawn(doomed)
    world.commands.despawn(doomed)
    world.commands.insert(kept, Marker())
    assert doomed in world
    assert not world.has(kept, Marker)
    world.apply_commands()
    assert doomed not in world
    assert world.has(kept, Marker)


def test_commands_apply_in_order():
    world = World()
    entity = world.commands.spawn(Speed(1.0))
    world.commands.insert(entity, Speed(2.0))
    world.commands.apply(world)
    assert world.get(entity, Speed) == Speed(2.0)


def test_events_drain_in_order_once():
    events = Events()
    events.send("first")
    events.send("second")
    assert len(events) == 2
    assert events.drain() == ["first", "second"]
    assert events.drain() == []


def test_repeating_timer_finishes_and_wraps():
    timer = Timer(1.0, repeating=True)
    timer.tick(0.5)
    assert not timer.just_finished
    timer.tick(0.5)
    assert timer.just_finished
    assert timer.elapsed == pytest.approx(0.0)
    timer.tick(2.5)
    assert timer.times_finished_this_tick == 2
    assert timer.elapsed == pytest.approx(0.5)


def test_once_timer_finishes_only_once():
    timer = Timer(1.0)
    timer.tick(1.5)
    assert timer.just_finished
    assert timer.elapsed == pytest.approx(timer.duration)
    timer.tick(1.5)
    assert timer.finished
    assert not timer.just_finished


def test_timer_rejects_bad_values():
    with pytest.raises(ValueError):
        Timer(0.0)
    with pytest.raises(ValueError):
        Timer(1.0).tick(-0.1)


def test_time_advance_accumulates():
    time = Time()
    time.advance(0.25)
    time.advance(0.5)
    assert time.delta == 0.5
    assert time.elapsed == pytest.approx(0.25 + 0.5)
    with pytest.raises(ValueError):
        time.advance(-1.0)