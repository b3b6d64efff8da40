"""
The per-tick update: commit direction, move, detect collisions, eat.
"""

import logging
import random
from typing import Optional, Tuple

from config import GameConfig
from domain.constants import DIRECTION_DELTAS, WALL, SELF
from domain.grid import Grid
from .food import place_food
from .scoring import award_food
from .state import EngineState

logger = logging.getLogger(__name__)


class StepOutcome:
    """
    What a single tick did.

    Attributes:
        kind: 'moved', 'ate', 'wall' or 'self'
        head: the candidate head cell computed this tick
        leveled_up: whether eating pushed the level up
    """

    MOVED = "moved"
    ATE = "ate"
    WALL = WALL
    SELF = SELF

    def __init__(self, kind: str, head: Optional[Tuple[int, int]], leveled_up: bool = False):
        self.kind = kind
        self.head = head
        self.leveled_up = leveled_up

    @property
    def fatal(self) -> bool:
        return self.kind in (self.WALL, self.SELF)

    @property
    def ate(self) -> bool:
        return self.kind == self.ATE

    def __repr__(self):
        return f"<StepOutcome {self.kind} head={self.head} leveled_up={self.leveled_up}>"


def step(state: EngineState, grid: Grid, config: GameConfig, rng: random.Random) -> StepOutcome:
    """
    Advance the game by one tick.

    On a wall or self collision the snake is left exactly as it was; the
    caller is responsible for moving the game into gameOver. The self check
    runs against the whole pre-move body, tail included, so turning into
    the cell the tail is about to leave is still a collision.
    """
    state.direction = state.pending_direction

    dx, dy = DIRECTION_DELTAS[state.direction]
    hx, hy = state.snake.head
    head = (hx + dx, hy + dy)
    logger.debug(f"New head position: {head}, grid bounds: {grid.width}x{grid.height}")

    if not grid.in_bounds(head):
        logger.debug("Wall collision detected")
        return StepOutcome(StepOutcome.WALL, head)

    if state.snake.occupies(head):
        logger.debug("Self collision detected")
        return StepOutcome(StepOutcome.SELF, head)

    state.snake.positions.appendleft(head)

    if head != state.food:
        # normal move: drop the tail
        state.snake.positions.pop()
        return StepOutcome(StepOutcome.MOVED, head)

    # grow: keep the tail
    leveled_up = award_food(state, config)
    state.food = place_food(state.snake, grid, rng, config.max_food_attempts)
    if leveled_up:
        logger.info(f"Level up! New level: {state.level}, tick interval: {state.tick_interval_ms}ms")
    return StepOutcome(StepOutcome.ATE, head, leveled_up=leveled_up)
