"""
Food placement by rejection sampling.
"""

import logging
import random
from typing import Tuple

from domain.grid import Grid
from domain.snake import Snake

logger = logging.getLogger(__name__)


def place_food(snake: Snake, grid: Grid, rng: random.Random, max_attempts: int) -> Tuple[int, int]:
    """
    Pick a uniformly random cell not covered by the snake.

    Sampling gives up after max_attempts draws and keeps the last cell even
    if the snake is on it, so a nearly full board can never hang the game.
    """
    attempts = 0
    while True:
        cell = (rng.randrange(grid.width), rng.randrange(grid.height))
        attempts += 1
        if not snake.occupies(cell):
            logger.debug(f"Food placed at {cell} after {attempts} attempt(s)")
            return cell
        if attempts >= max_attempts:
            logger.warning(
                f"Food placement gave up after {attempts} attempts "
                f"(snake covers {len(snake)}/{grid.cell_count} cells); using occupied cell {cell}"
            )
            return cell
