"""A playable session: timing, input queue, food schedule and high score."""

from __future__ import annotations

import contextlib
import random
import time
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .bullet import Point
from .game import Game

BOARD_WIDTH = 55
BOARD_HEIGHT = 50
INITIAL_LENGTH = 4
INITIAL_HEAD: Point = (8, 8)
INITIAL_DIRECTION = "r"
TICK_MS = 200
MIN_FOOD_INTERVAL = 2
MAX_FOOD_INTERVAL = 15
FOOD_LIFETIME = 50
INVINCIBLE_SKILL_SECONDS = 5
DEFAULT_HIGH_SCORE = INITIAL_LENGTH

BULLET_READY_TEXT = "子弹: 就绪"

_KEY_DIRECTIONS = {"w": "u", "s": "d", "a": "l", "d": "r"}
_VERTICAL = frozenset("ud")


def load_high_score(path: str | Path) -> int:
    """Read the stored high score; never less than the starting snake length."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError:
        return DEFAULT_HIGH_SCORE
    tokens = text.split()
    try:
        value = int(tokens[0])
    except (IndexError, ValueError):
        value = 0
    return max(value, DEFAULT_HIGH_SCORE)


def save_high_score(path: str | Path, score: int) -> None:
    """Store the high score; a file that cannot be written is left alone."""
    with contextlib.suppress(OSError):
        Path(path).write_text(str(score), encoding="utf-8")


@dataclass(frozen=True)
class TickOutcome:
    """What happened during one tick of a running game."""

    alive: bool
    score: int
    high_score: int
    record: bool = False
    invincible_remaining: int = 0


class Session:
    """One player's sequence of games, driven by ticks and key presses."""

    def __init__(
        self,
        score_path: str | Path | None = None,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.score_path = Path(score_path) if score_path is not None else None
        self.game = Game(
            BOARD_WIDTH,
            BOARD_HEIGHT,
            INITIAL_LENGTH,
            INITIAL_HEAD,
            INITIAL_DIRECTION,
            rng=self.rng,
            clock=clock,
        )
        self.high_score = (
            load_high_score(self.score_path)
            if self.score_path is not None
            else DEFAULT_HIGH_SCORE
        )
        self.over = True
        self.started = False
        self.paused = False
        self._pending: deque[str] = deque()
        self._new_step = True
        self._ticks = 0
        self._food_interval = self._next_food_interval()

    @property
    def running(self) -> bool:
        return self.started and not self.over and not self.paused

    def _next_food_interval(self) -> int:
        return self.rng.randrange(MIN_FOOD_INTERVAL, MAX_FOOD_INTERVAL)

    def start(self) -> bool:
        """Begin a new game if none is in progress; return whether one began."""
        if not self.over:
            return False
        self._pending.clear()
        game = self.game
        game.reset(INITIAL_LENGTH, INITIAL_HEAD, INITIAL_DIRECTION)
        self.over = False
        self.started = True
        self.paused = False
        game.snake.has_shield = False
        game.snake.activate_invincible(0)
        self._ticks = 0
        self._food_interval = self._next_food_interval()
        game.reset_bullet_cooldown()
        return True

    def toggle_pause(self) -> bool:
        """Pause or resume a game in progress; return whether it is now paused."""
        if not self.started or self.over:
            return self.paused
        self.paused = not self.paused
        return self.paused

    def press(self, key: str) -> None:
        """Handle a key: w/a/s/d turn, space fires, i and p use skills,
        t pauses and r restarts."""
        key = key.lower()
        if key == "t":
            self.toggle_pause()
            return
        if key == "r":
            self.start()
            return
        if self.paused or not self.started or self.over:
            return
        if self._new_step:
            self._pending.clear()
            self._new_step = False

        game = self.game
        if key in _KEY_DIRECTIONS:
            self._pending.append(_KEY_DIRECTIONS[key])
        elif key == " ":
            if game.can_fire_bullet():
                game.fire_bullet()
        elif key == "i":
            game.snake.activate_invincible(INVINCIBLE_SKILL_SECONDS)
        elif key == "p":
            game.snake.activate_shield()

    def _apply_pending_turn(self) -> None:
        # Turns along the current axis are meaningless and are dropped.
        while self._pending:
            current = self.game.snake.direction
            wanted = self._pending.popleft()
            if (current in _VERTICAL) == (wanted in _VERTICAL):
                continue
            self.game.change_direction(wanted)
            break

    def tick(self) -> TickOutcome | None:
        """Advance a running game by one tick; None when it is not running."""
        if self.over or self.paused:
            return None
        game = self.game
        if game.bullet_cooldown > 0:
            game.bullet_cooldown -= 1

        self._apply_pending_turn()
        alive = game.step()
        score = game.snake.score()

        if not alive:
            self.over = True
            self.started = False
            record = score > self.high_score
            if record:
                self.high_score = score
                if self.score_path is not None:
                    save_high_score(self.score_path, score)
            return TickOutcome(False, score, self.high_score, record, 0)

        self._ticks += 1
        if self._ticks == self._food_interval:
            self._ticks = 0
            game.generate_food(FOOD_LIFETIME)
            self._food_interval = self._next_food_interval()
        self._new_step = True
        return TickOutcome(
            True, score, self.high_score, False, game.snake.invincible_remaining()
        )

    def bullet_status(self) -> str:
        """Text describing whether the gun is ready or how long it is cooling."""
        cooldown = self.game.bullet_cooldown
        if cooldown == 0:
            return BULLET_READY_TEXT
        seconds = cooldown * TICK_MS // 1000
        return f"子弹冷却: {seconds}秒"