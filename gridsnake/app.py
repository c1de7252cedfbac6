"""Windowed front end: a name prompt and the game board."""

from __future__ import annotations

import argparse
from pathlib import Path

try:
    import tkinter as tk
    from tkinter import messagebox
except ImportError:
    tk = None
    messagebox = None

from .game import Food
from .obstacle import Obstacle, ObstacleKind
from .session import TICK_MS, Session
from .snake import Snake

GRID_SIZE = 20
SIDE_PANEL_WIDTH = 300
DEFAULT_SCORE_FILE = "highestScore.txt"

GRID_COLOUR = "#c8c8c8"
SNAKE_COLOUR = "#00ff00"
SHIELD_COLOUR = "#00ffff"
INVINCIBLE_COLOUR = "#ffd700"
FOOD_COLOUR = "#ff0000"
GOLDEN_FOOD_COLOUR = "#0000ff"
HARD_OBSTACLE_COLOUR = "#646464"
SOFT_OBSTACLE_COLOUR = "#ffff00"
BULLET_COLOUR = "#0000ff"


def snake_colour(snake: Snake) -> str:
    """Shield takes precedence over invincibility."""
    if snake.has_shield:
        return SHIELD_COLOUR
    if snake.is_invincible():
        return INVINCIBLE_COLOUR
    return SNAKE_COLOUR


def food_colour(food: Food) -> str:
    return GOLDEN_FOOD_COLOUR if food.golden else FOOD_COLOUR


def obstacle_colour(obstacle: Obstacle) -> str:
    if obstacle.kind is ObstacleKind.HARD:
        return HARD_OBSTACLE_COLOUR
    return SOFT_OBSTACLE_COLOUR


def game_over_message(score: int, high_score: int, record: bool) -> tuple[str, str, str]:
    """Return the title, heading and detail shown when a game ends."""
    title = "游戏结束"
    if record:
        return title, "恭喜打破记录！", f"新记录：{score}"
    return title, "游戏结束！", f"本次得分：{score}\n历史最高：{high_score}"


def _require_tk() -> None:
    if tk is None:
        raise RuntimeError("tkinter is not available")


class GameWindow:
    """The board with its score panel and controls."""

    def __init__(self, main_window: MainWindow, session: Session) -> None:
        _require_tk()
        self.main_window = main_window
        self.session = session
        self._after_id: str | None = None

        game = session.game
        board_w = game.width * GRID_SIZE
        board_h = game.height * GRID_SIZE

        self.top = tk.Toplevel(main_window.root)
        self.top.title("贪吃蛇")
        self.top.resizable(False, False)
        self.canvas = tk.Canvas(
            self.top, width=board_w, height=board_h, bg="white", highlightthickness=0
        )
        self.canvas.pack(side=tk.LEFT)

        panel = tk.Frame(self.top, width=SIDE_PANEL_WIDTH, height=board_h)
        panel.pack(side=tk.LEFT, fill=tk.Y)
        panel.pack_propagate(False)

        self._high = tk.StringVar()
        self._score = tk.StringVar()
        self._invincible = tk.StringVar()
        self._bullet = tk.StringVar()
        for label, var in (
            ("最高分", self._high),
            ("得分", self._score),
            ("无敌剩余", self._invincible),
        ):
            row = tk.Frame(panel)
            row.pack(anchor="w", pady=4, padx=10)
            tk.Label(row, text=f"{label}：", font=("黑体", 12)).pack(side=tk.LEFT)
            tk.Label(row, textvariable=var, font=("黑体", 12)).pack(side=tk.LEFT)
        tk.Label(panel, textvariable=self._bullet, font=("黑体", 12)).pack(
            anchor="w", pady=4, padx=10
        )

        self.start_button = tk.Button(panel, text="开始", command=self._on_start)
        self.start_button.pack(fill=tk.X, padx=10, pady=4)
        self.pause_button = tk.Button(
            panel, text="暂停", command=self._on_pause, state=tk.DISABLED
        )
        self.pause_button.pack(fill=tk.X, padx=10, pady=4)
        tk.Button(panel, text="返回", command=self.close).pack(fill=tk.X, padx=10, pady=4)

        self.top.bind("<KeyPress>", self._on_key)
        self.top.protocol("WM_DELETE_WINDOW", self.close)
        self._sync()
        self._refresh()
        self.top.focus_set()

    def _on_start(self) -> None:
        self.session.start()
        self._sync()
        self._refresh()
        self.top.focus_set()

    def _on_pause(self) -> None:
        self.session.toggle_pause()
        self._sync()
        self._refresh()
        self.top.focus_set()

    def _on_key(self, event) -> None:
        key = " " if event.keysym == "space" else event.keysym.lower()
        self.session.press(key)
        self._sync()
        self._refresh()

    def _sync(self) -> None:
        session = self.session
        self.start_button.config(state=tk.NORMAL if session.over else tk.DISABLED)
        can_pause = session.started and not session.over
        self.pause_button.config(
            state=tk.NORMAL if can_pause else tk.DISABLED,
            text="继续" if session.paused else "暂停",
        )
        if session.running and self._after_id is None:
            self._after_id = self.top.after(TICK_MS, self._on_timer)

    def _on_timer(self) -> None:
        self._after_id = None
        outcome = self.session.tick()
        self._refresh()
        if outcome is not None and not outcome.alive:
            self._sync()
            title, heading, detail = game_over_message(
                outcome.score, outcome.high_score, outcome.record
            )
            messagebox.showinfo(title, f"{heading}\n{detail}", parent=self.top)
            return
        self._sync()

    def _refresh(self) -> None:
        session = self.session
        snake = session.game.snake
        self._high.set(str(session.high_score))
        self._score.set(str(snake.score()))
        self._invincible.set(str(snake.invincible_remaining()))
        self._bullet.set(session.bullet_status())
        self._draw()

    def _cell(self, point, colour: str, oval: bool = False) -> None:
        x, y = point
        box = (x * GRID_SIZE, y * GRID_SIZE, (x + 1) * GRID_SIZE, (y + 1) * GRID_SIZE)
        if oval:
            self.canvas.create_oval(*box, fill=colour, outline="black")
        else:
            self.canvas.create_rectangle(*box, fill=colour, outline="black")

    def _draw(self) -> None:
        canvas = self.canvas
        game = self.session.game
        canvas.delete("all")
        board_w = game.width * GRID_SIZE
        board_h = game.height * GRID_SIZE
        for x in range(game.width + 1):
            canvas.create_line(x * GRID_SIZE, 0, x * GRID_SIZE, board_h, fill=GRID_COLOUR)
        for y in range(game.height + 1):
            canvas.create_line(0, y * GRID_SIZE, board_w, y * GRID_SIZE, fill=GRID_COLOUR)

        colour = snake_colour(game.snake)
        for point in game.snake.body:
            self._cell(point, colour)
        for item in game.food:
            self._cell(item.location, food_colour(item), oval=True)
        for obstacle in game.obstacles:
            self._cell(obstacle.location, obstacle_colour(obstacle))

        half = GRID_SIZE // 2
        for bullet in game.bullets:
            x, y = bullet.position
            canvas.create_rectangle(
                x * GRID_SIZE, y * GRID_SIZE, x * GRID_SIZE + 5, y * GRID_SIZE + 5,
                fill=BULLET_COLOUR, outline=BULLET_COLOUR,
            )
            (x0, y0), (x1, y1) = bullet.path()[:2]
            canvas.create_line(
                x0 * GRID_SIZE + half, y0 * GRID_SIZE + half,
                x1 * GRID_SIZE + half, y1 * GRID_SIZE + half,
                fill=BULLET_COLOUR,
            )

    def close(self) -> None:
        """Stop the game clock, close the board and bring back the main window."""
        if self._after_id is not None:
            self.top.after_cancel(self._after_id)
            self._after_id = None
        self.top.destroy()
        if self.main_window.game_window is self:
            self.main_window.game_window = None
        self.main_window.root.deiconify()


class MainWindow:
    """The opening window that asks for the player's name."""

    def __init__(self, score_path: str | Path = DEFAULT_SCORE_FILE) -> None:
        _require_tk()
        self.score_path = Path(score_path)
        self.game_window: GameWindow | None = None

        self.root = tk.Tk()
        self.root.title("贪吃蛇")
        self._name = tk.StringVar()
        self._name.trace_add("write", self._on_name_changed)

        tk.Label(self.root, text="玩家名称：").pack(padx=20, pady=(20, 4))
        tk.Entry(self.root, textvariable=self._name).pack(padx=20, pady=4)
        self.enter_button = tk.Button(
            self.root, text="进入游戏", command=self._enter, state=tk.DISABLED
        )
        self.enter_button.pack(fill=tk.X, padx=20, pady=4)
        tk.Button(self.root, text="退出", command=self._on_close).pack(
            fill=tk.X, padx=20, pady=(4, 20)
        )
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

    @property
    def player_name(self) -> str:
        return self._name.get().strip()

    def _on_name_changed(self, *_args) -> None:
        self.enter_button.config(state=tk.NORMAL if self.player_name else tk.DISABLED)

    def _enter(self) -> None:
        if self.game_window is not None:
            self.game_window.close()
        self.game_window = GameWindow(self, Session(self.score_path))
        self.root.withdraw()

    def _on_close(self) -> None:
        if messagebox.askyesno("退出游戏", "确定要退出吗？", parent=self.root):
            if self.game_window is not None:
                self.game_window.close()
            self.root.destroy()

    def run(self) -> None:
        self.root.mainloop()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="gridsnake", description="Play snake.")
    parser.add_argument(
        "--score-file",
        default=DEFAULT_SCORE_FILE,
        help="file that keeps the highest score",
    )
    args = parser.parse_args(argv)
    MainWindow(args.score_file).run()
    return 0