"""Game rules: the board, food, obstacles, bullets and each tick."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Callable

from .bullet import Bullet, Point, direction_offset
from .obstacle import Obstacle, ObstacleKind
from .snake import Snake

SHAPE_TEMPLATES: tuple[tuple[Point, ...], ...] = (
    ((0, 0), (1, 0), (2, 0), (1, 1), (1, 2)),  # T
    ((0, 0), (0, 1), (0, 2), (1, 2), (2, 2)),  # L
    ((1, 0), (0, 1), (1, 1), (2, 1), (1, 2)),  # cross
    ((0, 0), (0, 1), (1, 0), (1, 1), (0, 2), (1, 2)),  # rectangle
    ((0, 0), (1, 0), (1, 1), (2, 1), (2, 2)),  # Z
)

_SHAPE_ATTEMPTS = 50
_MIN_HEAD_DISTANCE = 10
_GOLDEN_INVINCIBLE_SECONDS = 10


def rotate_point(point: Point, rotation: int) -> Point:
    """Rotate a point by a multiple of 90 degrees (1, 2 or 3; else unchanged)."""
    x, y = point
    if rotation == 1:
        return (-y, x)
    if rotation == 2:
        return (-x, -y)
    if rotation == 3:
        return (y, -x)
    return point


@dataclass
class Food:
    """A food item that disappears when its remaining time runs out."""

    remaining: int
    location: Point
    golden: bool = False

    def step(self) -> None:
        self.remaining -= 1


class Game:
    """State and rules of one game of snake."""

    BULLET_COOLDOWN_MAX = 50

    def __init__(
        self,
        width: int,
        height: int,
        length: int,
        head: Point,
        direction: str,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.snake = Snake(length, head, direction, clock=clock)
        self.food: list[Food] = []
        self.obstacles: list[Obstacle] = []
        self.bullets: list[Bullet] = []
        self.bullet_cooldown = 0
        self.game_over = False

    def _inside(self, point: Point) -> bool:
        x, y = point
        return 0 <= x < self.width and 0 <= y < self.height

    def _is_deadly(self, point: Point) -> bool:
        return any(
            o.kind is ObstacleKind.HARD and o.location == point for o in self.obstacles
        )

    def _food_index(self, point: Point) -> int | None:
        return next((i for i, f in enumerate(self.food) if f.location == point), None)

    def _has_obstacle(self, point: Point) -> bool:
        return any(o.location == point for o in self.obstacles)

    def reset(self, length: int, head: Point, direction: str) -> None:
        """Start over with a fresh snake and a newly generated set of obstacles."""
        self.game_over = False
        self.snake.reset(length, head, direction)
        self.food.clear()
        self.clear_obstacles()
        for _ in range(25):
            self.generate_obstacle(ObstacleKind.HARD)
            self.generate_obstacle(ObstacleKind.SOFT)

    def _bullet_hits(self, bullet: Bullet) -> bool:
        for point in bullet.path():
            if not self._inside(point):
                return True
            for index, obstacle in enumerate(self.obstacles):
                if obstacle.location == point:
                    del self.obstacles[index]
                    return True
        return False

    def _move_bullets(self) -> None:
        for _ in range(2):
            survivors = []
            for bullet in self.bullets:
                if self._bullet_hits(bullet):
                    continue
                bullet.move()
                survivors.append(bullet)
            self.bullets = survivors

    def _food_step(self) -> None:
        for item in self.food:
            item.step()
        self.food = [item for item in self.food if item.remaining > 0]

    def _end(self) -> bool:
        self.game_over = True
        return False

    def step(self) -> bool:
        """Advance the game one tick; return False once the snake is dead."""
        if self.bullet_cooldown > 0:
            self.bullet_cooldown -= 1
        self._move_bullets()

        if self.game_over:
            return False
        snake = self.snake
        target = snake.next_head()
        if not self._inside(target):
            return self._end()
        if not snake.is_invincible() and self._is_deadly(target):
            return self._end()

        food_index = self._food_index(target)
        if food_index is not None:
            if self.food[food_index].golden:
                snake.activate_invincible(_GOLDEN_INVINCIBLE_SECONDS)
            if not snake.move_and_grow():
                return self._end()
            del self.food[food_index]
        elif not snake.move():
            return self._end()
        self._food_step()

        head = snake.head()
        kept: list[Obstacle] = []
        for index, obstacle in enumerate(self.obstacles):
            if obstacle.location != head or obstacle.kind is not ObstacleKind.SOFT:
                kept.append(obstacle)
                continue
            if snake.is_invincible():
                continue
            if snake.has_shield:
                snake.has_shield = False
                continue
            if len(snake.body) > 1:
                snake.body.pop()
            else:
                self.obstacles = kept + self.obstacles[index:]
                return self._end()
        self.obstacles = kept
        return True

    def change_direction(self, direction: str) -> None:
        direction_offset(direction)
        self.snake.direction = direction

    def generate_food(self, lifetime: int) -> None:
        """Place one food item on a random free cell; 30% of items are golden."""
        while True:
            point = (self.rng.randrange(self.width), self.rng.randrange(self.height))
            if (
                not self._is_deadly(point)
                and point not in self.snake.body
                and self._food_index(point) is None
            ):
                golden = self.rng.randrange(10) < 3
                self.food.append(Food(lifetime, point, golden))
                return

    def _obstacle_cell_free(self, point: Point, head: Point) -> bool:
        distance = abs(point[0] - head[0]) + abs(point[1] - head[1])
        return (
            distance >= _MIN_HEAD_DISTANCE
            and point not in self.snake.body
            and self._food_index(point) is None
            and not self._is_deadly(point)
            and not self._has_obstacle(point)
        )

    def generate_obstacle(self, kind: ObstacleKind) -> None:
        """Try to place a randomly shaped obstacle; fall back to a single cell."""
        head = self.snake.head()
        for _ in range(_SHAPE_ATTEMPTS):
            template = SHAPE_TEMPLATES[self.rng.randrange(len(SHAPE_TEMPLATES))]
            rotation = self.rng.randrange(4)
            shape = [rotate_point(p, rotation) for p in template]

            min_x = min(0, *(p[0] for p in shape))
            max_x = max(0, *(p[0] for p in shape))
            min_y = min(0, *(p[1] for p in shape))
            max_y = max(0, *(p[1] for p in shape))
            shape_width = max_x - min_x + 1
            shape_height = max_y - min_y + 1

            base_x = self.rng.randrange(self.width - shape_width)
            base_y = self.rng.randrange(self.height - shape_height)
            cells = [(base_x + x - min_x, base_y + y - min_y) for x, y in shape]

            if all(self._inside(c) and self._obstacle_cell_free(c, head) for c in cells):
                self.obstacles.extend(Obstacle(kind, c) for c in cells)
                return

        point = (self.rng.randrange(self.width), self.rng.randrange(self.height))
        if self._obstacle_cell_free(point, head):
            self.obstacles.append(Obstacle(kind, point))

    def clear_obstacles(self) -> None:
        self.obstacles.clear()

    def fire_bullet(self) -> None:
        """Fire from the head unless the gun is cooling down."""
        if self.bullet_cooldown > 0:
            return
        self.bullets.append(Bullet(self.snake.head(), self.snake.direction))
        self.bullet_cooldown = self.BULLET_COOLDOWN_MAX

    def can_fire_bullet(self) -> bool:
        return self.bullet_cooldown == 0

    def reset_bullet_cooldown(self) -> None:
        self.bullet_cooldown = 0