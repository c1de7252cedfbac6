import pytest

from gridsnake.app import (
    FOOD_COLOUR,
    GOLDEN_FOOD_COLOUR,
    HARD_OBSTACLE_COLOUR,
    INVINCIBLE_COLOUR,
    SHIELD_COLOUR,
    SNAKE_COLOUR,
    SOFT_OBSTACLE_COLOUR,
    food_colour,
    game_over_message,
    main,
    obstacle_colour,
    snake_colour,
)
from gridsnake.game import Food
from gridsnake.obstacle import Obstacle, ObstacleKind
from gridsnake.snake import Snake


def make_snake():
    return Snake(4, (8, 8), "r", clock=lambda: 0.0)


def test_plain_snake_colour():
    assert snake_colour(make_snake()) == SNAKE_COLOUR


def test_invincible_snake_colour():
    snake = make_snake()
    snake.activate_invincible(5)
    assert snake_colour(snake) == INVINCIBLE_COLOUR


def test_shield_beats_invincibility():
    snake = make_snake()
    snake.activate_invincible(5)
    snake.activate_shield()
    assert snake_colour(snake) == SHIELD_COLOUR


def test_snake_colours_distinct():
    plain = make_snake()
    invincible = make_snake()
    invincible.activate_invincible(5)
    shielded = make_snake()
    shielded.activate_shield()
    colours = {snake_colour(plain), snake_colour(invincible), snake_colour(shielded)}
    assert len(colours) == 3


def test_food_colours():
    assert food_colour(Food(10, (1, 1), golden=True)) == GOLDEN_FOOD_COLOUR
    assert food_colour(Food(10, (1, 1))) == FOOD_COLOUR


def test_obstacle_colours():
    assert obstacle_colour(Obstacle(ObstacleKind.HARD, (0, 0))) == HARD_OBSTACLE_COLOUR
    assert obstacle_colour(Obstacle(ObstacleKind.SOFT, (0, 0))) == SOFT_OBSTACLE_COLOUR
    assert HARD_OBSTACLE_COLOUR != SOFT_OBSTACLE_COLOUR


def test_record_message():
    title, heading, detail = game_over_message(9, 9, True)
    assert title == "游戏结束"
    assert heading == "恭喜打破记录！"
    assert "9" in detail


def test_plain_game_over_message_shows_both_scores():
    title, heading, detail = game_over_message(7, 31, False)
    assert title == "游戏结束"
    assert heading == "游戏结束！"
    assert "7" in detail and "31" in detail


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit) as excinfo:
        main(["--no-such-option"])
    assert excinfo.value.code == 2