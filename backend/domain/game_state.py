"""
GameState entity - a read-only snapshot of the game at a point in time.
"""

from typing import List, Tuple, Dict, Any


class GameState:
    """
    A snapshot of the game handed to renderers, players and the HTTP layer.

    Attributes:
        phase: one of start / playing / paused / gameOver
        snake_positions: list of (x, y) from head to tail
        direction: the committed direction of the last tick
        pending_direction: the buffered direction for the next tick
        food: (x, y) of the food cell
        score, high_score, level: scoring figures
        tick_interval_ms: current time between simulation steps
        initial_tick_ms: tick interval at level 1, used for the speed figure
        width, height: board dimensions
        new_high_score: whether the last game over beat the stored high score
    """

    def __init__(
        self,
        phase: str,
        snake_positions: List[Tuple[int, int]],
        direction: str,
        pending_direction: str,
        food: Tuple[int, int],
        score: int,
        high_score: int,
        level: int,
        tick_interval_ms: float,
        initial_tick_ms: float,
        width: int,
        height: int,
        new_high_score: bool = False
    ):
        self.phase = phase
        self.snake_positions = snake_positions
        self.direction = direction
        self.pending_direction = pending_direction
        self.food = food
        self.score = score
        self.high_score = high_score
        self.level = level
        self.tick_interval_ms = tick_interval_ms
        self.initial_tick_ms = initial_tick_ms
        self.width = width
        self.height = height
        self.new_high_score = new_high_score

    @property
    def length(self) -> int:
        return len(self.snake_positions)

    @property
    def speed(self) -> float:
        """Speed relative to level 1, e.g. 1.2 when ticks are 20% faster."""
        return round(self.initial_tick_ms / self.tick_interval_ms, 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase,
            "snake": [list(cell) for cell in self.snake_positions],
            "direction": self.direction,
            "pending_direction": self.pending_direction,
            "food": list(self.food),
            "score": self.score,
            "high_score": self.high_score,
            "level": self.level,
            "length": self.length,
            "tick_interval_ms": self.tick_interval_ms,
            "speed": f"{self.speed:.1f}x",
            "width": self.width,
            "height": self.height,
            "new_high_score": self.new_high_score,
        }

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        H = snake head
        S = snake body
        Row 0 is printed first since y grows downwards on screen.
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        fx, fy = self.food
        if 0 <= fx < self.width and 0 <= fy < self.height:
            board[fy][fx] = 'F'

        for pos_idx, (x, y) in enumerate(self.snake_positions):
            board[y][x] = 'H' if pos_idx == 0 else 'S'

        result = [f"{y:2d} {' '.join(board[y])}" for y in range(self.height)]
        # x-axis labels use the last digit to keep columns aligned
        result.append("   " + " ".join(str(x % 10) for x in range(self.width)))

        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState phase={self.phase}, length={self.length}, food={self.food}, "
            f"score={self.score}, level={self.level}>"
        )
