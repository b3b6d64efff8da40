"""
Base player interface for autopilot input.

A player looks at a GameState snapshot and proposes the next direction,
which the driver feeds into GameController.submit_direction like any
other input source.
"""

import random
from typing import Optional

from domain.game_state import GameState


class Player:
    """
    Base class/interface for player logic.

    Args:
        rng: random source used to break ties; defaults to a fresh Random
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> str:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of: "UP", "DOWN", "LEFT", "RIGHT"
        """
        raise NotImplementedError
