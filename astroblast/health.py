"""Hit points of destructible objects."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Health:
    value: float

    def damage(self, amount: float) -> None:
        self.value -= amount

    def is_dead(self) -> bool:
        return self.value <= 0.0