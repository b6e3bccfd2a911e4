"""Ordering of the game's systems within a frame."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum, auto

from astroblast.ecs import World
from astroblast.state import GameState, StateMachine, in_state

System = Callable[[World], object]
Condition = Callable[[World], bool]


class InGameSet(Enum):
    """Sets of in-game systems, run in the order declared here."""

    DESPAWN_ENTITIES = auto()
    USER_INPUT = auto()
    ENTITY_UPDATES = auto()
    COLLISION_DETECTION = auto()


@dataclass(frozen=True)
class _Entry:
    system: System
    run_if: Condition | None = None


def _run_all(entries: Iterable[_Entry], world: World) -> None:
    for entry in entries:
        if entry.run_if is None or entry.run_if(world):
            entry.system(world)


class Schedule:
    """Startup, per-frame and on-enter systems.

    Each frame first applies any pending state change and runs the systems
    registered for the entered state. Then the in-game sets run in order
    while ``set_condition`` holds, with deferred commands flushed after
    despawning; then systems outside any set; then remaining commands.
    """

    def __init__(self, set_condition: Condition | None = None) -> None:
        self._set_condition = set_condition or in_state(GameState.IN_GAME)
        self._startup: list[_Entry] = []
        self._sets: dict[InGameSet, list[_Entry]] = {s: [] for s in InGameSet}
        self._unordered: list[_Entry] = []
        self._on_enter: defaultdict[GameState, list[_Entry]] = defaultdict(list)

    def add_startup_system(self, system: System) -> None:
        self._startup.append(_Entry(system))

    def add_system(
        self,
        system: System,
        in_set: InGameSet | None = None,
        run_if: Condition | None = None,
    ) -> None:
        entry = _Entry(system, run_if)
        if in_set is None:
            self._unordered.append(entry)
        else:
            self._sets[in_set].append(entry)

    def add_on_enter(self, state: GameState, system: System) -> None:
        self._on_enter[state].append(_Entry(system))

    def run_startup(self, world: World) -> None:
        machine = self._state_machine(world)
        if machine is not None:
            _run_all(self._on_enter[machine.current], world)
            world.apply_commands()
        _run_all(self._startup, world)
        world.apply_commands()

    def run_update(self, world: World) -> None:
        self._apply_state_transition(world)
        for in_game_set, entries in self._sets.items():
            if self._set_condition(world):
                _run_all(entries, world)
            if in_game_set is InGameSet.DESPAWN_ENTITIES:
                world.apply_commands()
        _run_all(self._unordered, world)
        world.apply_commands()

    @staticmethod
    def _state_machine(world: World) -> StateMachine | None:
        try:
            return world.resource(StateMachine)
        except KeyError:
            return None

    def _apply_state_transition(self, world: World) -> None:
        machine = self._state_machine(world)
        if machine is None:
            return
        transition = machine.apply_transition()
        if transition is None:
            return
        _, entered = transition
        _run_all(self._on_enter[entered], world)
        world.apply_commands()