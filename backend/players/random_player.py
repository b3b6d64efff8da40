"""
Random player implementation - picks random safe moves.
"""

from typing import List, Dict, Tuple

from domain.constants import DIRECTION_DELTAS, OPPOSITES, VALID_MOVES
from domain.game_state import GameState
from .base import Player


def safe_moves(game_state: GameState) -> Dict[str, Tuple[int, int]]:
    """
    Map each direction that survives the next tick to the head cell it leads to.

    The whole body counts as an obstacle, tail included, matching the
    engine's collision rule. Reversing is excluded for snakes longer than one
    cell because the input buffer would reject it anyway.
    """
    snake_positions = game_state.snake_positions
    head_x, head_y = snake_positions[0]

    moves = {}
    for move, (dx, dy) in DIRECTION_DELTAS.items():
        if len(snake_positions) > 1 and move == OPPOSITES[game_state.direction]:
            continue

        new_x, new_y = head_x + dx, head_y + dy

        # Check wall collisions
        if (new_x < 0 or new_x >= game_state.width or
            new_y < 0 or new_y >= game_state.height):
            continue

        # Check self collisions
        if (new_x, new_y) in snake_positions:
            continue

        moves[move] = (new_x, new_y)
    return moves


class RandomPlayer(Player):
    """
    A random AI that picks a valid direction that avoids walls and self-collisions.
    """

    def get_move(self, game_state: GameState) -> str:
        valid_moves: List[str] = sorted(safe_moves(game_state))

        # If no valid moves, just return a random move (we'll die anyway)
        if not valid_moves:
            return self.rng.choice(sorted(VALID_MOVES))

        return self.rng.choice(valid_moves)
