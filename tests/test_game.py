import random

import pytest

from gridsnake.game import Food, Game, rotate_point
from gridsnake.obstacle import Obstacle, ObstacleKind


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def make_game(width=20, height=20, head=(8, 8), direction="r", seed=0):
    return Game(width, height, 4, head, direction, rng=random.Random(seed), clock=FakeClock())


@pytest.mark.parametrize("point", [(1, 2), (-3, 5), (0, 0), (4, -1)])
def test_rotations_compose(point):
    assert rotate_point(point, 0) == point
    once = rotate_point(point, 1)
    assert rotate_point(once, 1) == rotate_point(point, 2)
    assert rotate_point(rotate_point(point, 2), 1) == rotate_point(point, 3)
    assert rotate_point(rotate_point(point, 3), 1) == point


def test_food_step_counts_down():
    food = Food(3, (1, 1))
    food.step()
    assert food.remaining == 2


def test_step_moves_snake():
    game = make_game()
    target = game.snake.next_head()
    assert game.step() is True
    assert game.snake.head() == target


def test_wall_ends_game():
    game = make_game(width=10, height=10, head=(9, 5))
    assert game.step() is False
    assert game.game_over is True
    assert game.step() is False


def test_hard_obstacle_kills():
    game = make_game()
    game.obstacles.append(Obstacle(ObstacleKind.HARD, game.snake.next_head()))
    assert game.step() is False
    assert game.game_over


def test_invincible_ignores_hard_obstacle():
    game = make_game()
    target = game.snake.next_head()
    game.obstacles.append(Obstacle(ObstacleKind.HARD, target))
    game.snake.activate_invincible(5)
    assert game.step() is True
    assert game.snake.head() == target


def test_eating_food_grows_snake():
    game = make_game()
    game.food.append(Food(50, game.snake.next_head(), False))
    before = game.snake.score()
    assert game.step()
    assert game.snake.score() == before + 1
    assert game.food == []


def test_golden_food_grants_invincibility():
    game = make_game()
    game.food.append(Food(50, game.snake.next_head(), True))
    assert game.step()
    assert game.snake.is_invincible()
    assert game.snake.invincible_remaining() == 10


def test_food_expires():
    game = make_game()
    game.food.append(Food(1, (0, 0), False))
    game.step()
    assert game.food == []


def test_soft_obstacle_shortens_snake():
    game = make_game()
    game.obstacles.append(Obstacle(ObstacleKind.SOFT, game.snake.next_head()))
    before = game.snake.score()
    assert game.step()
    assert game.snake.score() == before - 1
    assert game.obstacles == []


def test_shield_absorbs_soft_obstacle():
    game = make_game()
    game.obstacles.append(Obstacle(ObstacleKind.SOFT, game.snake.next_head()))
    game.snake.activate_shield()
    before = game.snake.score()
    assert game.step()
    assert game.snake.score() == before
    assert game.snake.has_shield is False
    assert game.obstacles == []


def test_soft_obstacle_kills_single_segment_snake():
    game = Game(20, 20, 1, (8, 8), "r", rng=random.Random(0), clock=FakeClock())
    game.obstacles.append(Obstacle(ObstacleKind.SOFT, game.snake.next_head()))
    assert game.step() is False
    assert game.game_over


def test_fire_bullet_starts_cooldown():
    game = make_game()
    assert game.can_fire_bullet()
    game.fire_bullet()
    assert len(game.bullets) == 1
    assert game.bullet_cooldown == Game.BULLET_COOLDOWN_MAX
    assert not game.can_fire_bullet()
    game.fire_bullet()
    assert len(game.bullets) == 1
    game.step()
    assert game.bullet_cooldown == Game.BULLET_COOLDOWN_MAX - 1
    game.reset_bullet_cooldown()
    assert game.can_fire_bullet()


def test_bullet_destroys_obstacle():
    game = make_game()
    game.obstacles.append(Obstacle(ObstacleKind.HARD, (11, 8)))
    game.fire_bullet()
    assert game.step()
    assert game.step()
    assert game.obstacles == []
    assert game.bullets == []


def test_bullet_leaves_board():
    game = make_game(direction="u", head=(8, 3))
    game.fire_bullet()
    game.change_direction("r")
    for _ in range(3):
        game.step()
    assert game.bullets == []


def test_change_direction_rejects_unknown():
    game = make_game()
    with pytest.raises(ValueError):
        game.change_direction("x")


def test_generate_food_fills_free_cells():
    game = Game(5, 5, 4, (3, 2), "r", rng=random.Random(1), clock=FakeClock())
    free = 5 * 5 - game.snake.score()
    for _ in range(free):
        game.generate_food(50)
    locations = {f.location for f in game.food}
    assert len(locations) == free
    assert locations.isdisjoint(game.snake.body)
    assert all(f.remaining == 50 for f in game.food)
    assert len(locations | set(game.snake.body)) == 25


def test_reset_generates_valid_obstacles():
    game = Game(55, 50, 4, (8, 8), "r", rng=random.Random(3), clock=FakeClock())
    game.food.append(Food(5, (30, 30)))
    game.game_over = True
    game.reset(4, (8, 8), "r")
    assert game.game_over is False
    assert game.food == []
    cells = [o.location for o in game.obstacles]
    assert len(cells) == len(set(cells))
    head = game.snake.head()
    for x, y in cells:
        assert 0 <= x < 55 and 0 <= y < 50
        assert abs(x - head[0]) + abs(y - head[1]) >= 10
    assert set(cells).isdisjoint(game.snake.body)
    kinds = {o.kind for o in game.obstacles}
    assert kinds == {ObstacleKind.HARD, ObstacleKind.SOFT}


def test_clear_obstacles():
    game = make_game()
    game.generate_obstacle(ObstacleKind.HARD)
    game.obstacles.append(Obstacle(ObstacleKind.SOFT, (0, 0)))
    game.clear_obstacles()
    assert game.obstacles == []