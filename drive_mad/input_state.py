from __future__ import annotations

from dataclasses import dataclass

LEFT = "left"
RIGHT = "right"


@dataclass(frozen=True)
class InputState:
    steer_left: bool = False
    steer_right: bool = False


class SteeringInput:
    """Held-button steering shared by the keyboard and the on-screen buttons."""

    def __init__(self) -> None:
        self._held = {LEFT: False, RIGHT: False}

    def press(self, direction: str) -> None:
        if direction in self._held:
            self._held[direction] = True

    def release(self, direction: str) -> None:
        if direction in self._held:
            self._held[direction] = False

    def release_all(self) -> None:
        for direction in self._held:
            self._held[direction] = False

    def set(self, *, steer_left: bool, steer_right: bool) -> None:
        self._held[LEFT] = bool(steer_left)
        self._held[RIGHT] = bool(steer_right)

    def sample(self) -> InputState:
        return InputState(steer_left=self._held[LEFT], steer_right=self._held[RIGHT])
