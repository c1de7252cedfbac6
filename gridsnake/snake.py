"""The snake: its body, heading and power-ups."""

from __future__ import annotations

import math
import time
from typing import Callable

from .bullet import Point, direction_offset


class Snake:
    """A snake whose body is a list of cells, head first."""

    def __init__(
        self,
        length: int,
        head: Point,
        direction: str,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._invincible_until: float | None = None
        self.has_shield = False
        self.body: list[Point] = []
        self.direction = direction
        self.reset(length, head, direction)

    def reset(self, length: int, head: Point, direction: str) -> None:
        """Lay the body out in a straight line behind the head."""
        dx, dy = direction_offset(direction)
        self.direction = direction
        hx, hy = head
        self.body = [(hx - i * dx, hy - i * dy) for i in range(length)]

    def head(self) -> Point:
        return self.body[0]

    def next_head(self) -> Point:
        """The cell the head reaches on the next move."""
        dx, dy = direction_offset(self.direction)
        x, y = self.head()
        return (x + dx, y + dy)

    def score(self) -> int:
        return len(self.body)

    def _advance(self, grow: bool) -> bool:
        target = self.next_head()
        if not grow:
            self.body.pop()
        if not self.is_invincible() and target in self.body:
            if not self.has_shield:
                return False
            self.has_shield = False
        self.body.insert(0, target)
        return True

    def move(self) -> bool:
        """Move one cell; return False if the snake bit itself."""
        return self._advance(grow=False)

    def move_and_grow(self) -> bool:
        """Move one cell keeping the tail; return False on self-collision."""
        return self._advance(grow=True)

    def activate_invincible(self, seconds: float) -> None:
        """Become invincible for the given time; zero ends invincibility."""
        self._invincible_until = self._clock() + seconds

    def is_invincible(self) -> bool:
        return self._invincible_until is not None and self._clock() < self._invincible_until

    def invincible_remaining(self) -> int:
        """Whole seconds of invincibility left, rounded up."""
        if not self.is_invincible():
            return 0
        return math.ceil(self._invincible_until - self._clock())

    def activate_shield(self) -> None:
        self.has_shield = True