"""Directions on the grid and the bullets the snake fires."""

from __future__ import annotations

from dataclasses import dataclass

Point = tuple[int, int]

_OFFSETS: dict[str, Point] = {
    "u": (0, -1),
    "d": (0, 1),
    "r": (1, 0),
    "l": (-1, 0),
}


def direction_offset(direction: str) -> Point:
    """Return the unit step for a direction letter ('u', 'd', 'l' or 'r')."""
    try:
        return _OFFSETS[direction]
    except KeyError:
        raise ValueError(f"unknown direction: {direction!r}") from None


@dataclass
class Bullet:
    """A projectile travelling one cell per move in a fixed direction."""

    position: Point
    direction: str

    def __post_init__(self) -> None:
        direction_offset(self.direction)

    def _ahead(self) -> Point:
        dx, dy = direction_offset(self.direction)
        x, y = self.position
        return (x + dx, y + dy)

    def move(self) -> None:
        """Advance the bullet by one cell."""
        self.position = self._ahead()

    def path(self) -> list[Point]:
        """Return the current cell and the cell the next move reaches."""
        return [self.position, self._ahead()]