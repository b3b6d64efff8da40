"""
Mutable game state owned by the GameController.

Renderers and other collaborators never see this object; they get a
GameState snapshot instead.
"""

import random
from typing import Tuple

from config import GameConfig
from domain.constants import RIGHT, START
from domain.grid import Grid
from domain.snake import Snake
from .food import place_food


class EngineState:
    """
    Attributes:
        snake: the Snake entity, head first
        direction: direction applied on the last tick
        pending_direction: direction the next tick will commit
        food: (x, y) of the food cell
        score: points collected this game
        level: derived from score, starts at 1
        tick_interval_ms: time between simulation steps
        phase: start / playing / paused / gameOver
    """

    def __init__(self, snake: Snake, food: Tuple[int, int], tick_interval_ms: float):
        self.snake = snake
        self.direction = RIGHT
        self.pending_direction = RIGHT
        self.food = food
        self.score = 0
        self.level = 1
        self.tick_interval_ms = tick_interval_ms
        self.phase = START

    def __repr__(self):
        return (
            f"<EngineState phase={self.phase}, snake={list(self.snake.positions)}, "
            f"food={self.food}, score={self.score}, level={self.level}>"
        )


def new_state(grid: Grid, config: GameConfig, rng: random.Random) -> EngineState:
    """
    Fresh game: a one-cell snake in the middle of the board heading right,
    zero score, level 1, initial speed and newly placed food.
    """
    snake = Snake([grid.center])
    food = place_food(snake, grid, rng, config.max_food_attempts)
    return EngineState(snake, food, config.initial_tick_ms)
