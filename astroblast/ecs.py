"""A small entity-component store with deferred commands, events, timers and time."""

from __future__ import annotations

import itertools
import math
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, order=True)
class Entity:
    """Identifier of one object in a world."""

    index: int


def _flatten(items: Iterable[Any]) -> Iterator[Any]:
    for item in items:
        if isinstance(item, (tuple, list)):
            yield from _flatten(item)
        else:
            yield item


class Commands:
    """A queue of world changes applied later, in order."""

    def __init__(self, reserve: Callable[[], Entity]) -> None:
        self._reserve = reserve
        self._queue: list[Callable[[World], object]] = []

    def __len__(self) -> int:
        return len(self._queue)

    def spawn(self, *args: Any) -> Entity:
        """Queue a new entity; its identifier is reserved at once."""
        entity = self._reserve()
        components = tuple(_flatten(args))
        self._queue.append(lambda world: world._place(entity, components))
        return entity

    def despawn(self, entity: Entity) -> None:
        self._queue.append(lambda world: world.despawn(entity))

    def insert(self, entity: Entity, *args: Any) -> None:
        components = tuple(_flatten(args))
        self._queue.append(lambda world: world.insert(entity, *components))

    def apply(self, world: World) -> None:
        queue, self._queue = self._queue, []
        for operation in queue:
            operation(world)


@dataclass
class Events(Generic[T]):
    """A queue of events read once by draining."""

    _pending: list[T] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self._pending)

    def send(self, event: T) -> None:
        self._pending.append(event)

    def drain(self) -> list[T]:
        events, self._pending = self._pending, []
        return events


@dataclass
class Timer:
    """Counts elapsed seconds towards a duration, optionally repeating."""

    duration: float
    repeating: bool = False
    elapsed: float = 0.0
    finished: bool = False
    times_finished_this_tick: int = 0

    def __post_init__(self) -> None:
        if self.duration <= 0.0:
            raise ValueError("timer duration must be positive")

    @property
    def just_finished(self) -> bool:
        return self.times_finished_this_tick > 0

    def tick(self, delta: float) -> Timer:
        if delta < 0.0:
            raise ValueError("cannot tick a timer by a negative delta")
        if not self.repeating and self.finished:
            self.times_finished_this_tick = 0
            return self
        self.elapsed += delta
        self.finished = self.elapsed >= self.duration
        if not self.finished:
            self.times_finished_this_tick = 0
        elif self.repeating:
            self.times_finished_this_tick = math.floor(self.elapsed / self.duration)
            self.elapsed %= self.duration
        else:
            self.times_finished_this_tick = 1
            self.elapsed = self.duration
        return self


@dataclass
class Time:
    """Frame time: the last delta and the total elapsed, in seconds."""

    delta: float = 0.0
    elapsed: float = 0.0

    def advance(self, delta: float) -> None:
        if delta < 0.0:
            raise ValueError("time cannot move backwards")
        self.delta = delta
        self.elapsed += delta


class World:
    """Entities with typed components, plus typed resources."""

    def __init__(self) -> None:
        self._ids = itertools.count()
        self._entities: dict[Entity, dict[type, Any]] = {}
        self._resources: dict[type, Any] = {}
        self.commands = Commands(self._reserve)

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity: object) -> bool:
        return entity in self._entities

    def _reserve(self) -> Entity:
        return Entity(next(self._ids))

    def _place(self, entity: Entity, components: Iterable[Any]) -> None:
        self._entities[entity] = {type(c): c for c in components}

    def spawn(self, *args: Any) -> Entity:
        entity = self._reserve()
        self._place(entity, _flatten(args))
        return entity

    def despawn(self, entity: Entity) -> bool:
        """Remove an entity; return whether it existed."""
        return self._entities.pop(entity, None) is not None

    def insert(self, entity: Entity, *args: Any) -> None:
        components = self._entities.get(entity)
        if components is None:
            raise KeyError(f"entity {entity.index} does not exist")
        components.update((type(c), c) for c in _flatten(args))

    def get(self, entity: Entity, component_type: type[T]) -> T | None:
        return self._entities.get(entity, {}).get(component_type)

    def has(self, entity: Entity, *args: type) -> bool:
        components = self._entities.get(entity)
        return components is not None and all(t in components for t in args)

    def query(self, *args: type) -> Iterator[tuple[Any, ...]]:
        """Yield ``(entity, *components)`` for every entity holding all the types."""
        matches = [
            (entity, *(components[t] for t in args))
            for entity, components in self._entities.items()
            if all(t in components for t in args)
        ]
        return iter(matches)

    def insert_resource(self, resource: Any) -> None:
        self._resources[type(resource)] = resource

    def resource(self, resource_type: type[T]) -> T:
        try:
            return self._resources[resource_type]
        except KeyError:
            raise KeyError(f"resource {resource_type.__name__} is not present") from None

    def apply_commands(self) -> None:
        self.commands.apply(self)