"""Keyboard state tracked between frames."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class KeyCode(Enum):
    """Keys the game reacts to."""

    A = auto()
    D = auto()
    S = auto()
    W = auto()
    SHIFT_LEFT = auto()
    CONTROL_LEFT = auto()
    SPACE = auto()
    TAB = auto()
    ESCAPE = auto()


@dataclass
class Keyboard:
    """Which keys are held, and which went down this frame."""

    _pressed: set[KeyCode] = field(default_factory=set)
    _just_pressed: set[KeyCode] = field(default_factory=set)

    def press(self, key: KeyCode) -> None:
        if key not in self._pressed:
            self._just_pressed.add(key)
        self._pressed.add(key)

    def release(self, key: KeyCode) -> None:
        self._pressed.discard(key)

    def pressed(self, key: KeyCode) -> bool:
        return key in self._pressed

    def just_pressed(self, key: KeyCode) -> bool:
        return key in self._just_pressed

    def clear_just_pressed(self) -> None:
        """Forget this frame's key-down events; held keys stay held."""
        self._just_pressed.clear()