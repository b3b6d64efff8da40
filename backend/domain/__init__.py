"""
Domain entities for the snake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (database, HTTP, webhooks, etc.).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, DIRECTION_DELTAS, OPPOSITES,
    START, PLAYING, PAUSED, GAME_OVER, PHASES,
)
from .grid import Grid, GridConfigurationError
from .snake import Snake
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'DIRECTION_DELTAS', 'OPPOSITES',
    'START', 'PLAYING', 'PAUSED', 'GAME_OVER', 'PHASES',
    'Grid', 'GridConfigurationError',
    'Snake',
    'GameState',
]
