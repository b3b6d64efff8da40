"""
Greedy player implementation - heads straight for the food.
"""

from domain.game_state import GameState
from .base import Player
from .random_player import safe_moves


class GreedyPlayer(Player):
    """
    Picks the safe move that brings the head closest (Manhattan distance) to
    the food. Falls back to the committed direction when nothing is safe.
    """

    def get_move(self, game_state: GameState) -> str:
        moves = safe_moves(game_state)
        if not moves:
            return game_state.direction

        fx, fy = game_state.food
        best = min(abs(x - fx) + abs(y - fy) for x, y in moves.values())
        candidates = sorted(
            move for move, (x, y) in moves.items()
            if abs(x - fx) + abs(y - fy) == best
        )
        return self.rng.choice(candidates)
