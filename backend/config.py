"""
Game configuration.

Defaults reproduce the classic browser game (480x360 canvas, 20px cells,
150ms ticks). Every value can be overridden through SNAKE_* environment
variables, which may also live in a .env file.
"""

import os
from dataclasses import dataclass, fields
from typing import Optional, Mapping

from dotenv import load_dotenv

from domain import constants
from domain.grid import Grid

load_dotenv()

ENV_PREFIX = "SNAKE_"


@dataclass
class GameConfig:
    canvas_width: int = constants.CANVAS_WIDTH
    canvas_height: int = constants.CANVAS_HEIGHT
    cell_size: int = constants.CELL_SIZE
    initial_tick_ms: int = constants.INITIAL_TICK_MS
    speed_increment_ms: int = constants.SPEED_INCREMENT_MS
    min_tick_ms: int = constants.MIN_TICK_MS
    points_per_food: int = constants.POINTS_PER_FOOD
    level_up_points: int = constants.LEVEL_UP_POINTS
    max_food_attempts: int = constants.MAX_FOOD_ATTEMPTS
    min_swipe_distance: int = constants.MIN_SWIPE_DISTANCE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GameConfig":
        """
        Build a config from SNAKE_<FIELD> variables, e.g. SNAKE_CELL_SIZE=10.

        Raises:
            ValueError: if a variable is set but is not an integer
        """
        environ = os.environ if environ is None else environ
        overrides = {}
        for field in fields(cls):
            name = ENV_PREFIX + field.name.upper()
            raw = environ.get(name)
            if raw is None or raw.strip() == "":
                continue
            try:
                overrides[field.name] = int(raw)
            except ValueError:
                raise ValueError(f"{name} must be an integer, got {raw!r}") from None
        return cls(**overrides)

    def validate(self) -> None:
        """Reject settings the simulation cannot run with."""
        for name in ("initial_tick_ms", "min_tick_ms", "points_per_food",
                     "level_up_points", "max_food_attempts"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.speed_increment_ms < 0:
            raise ValueError(f"speed_increment_ms cannot be negative, got {self.speed_increment_ms}")
        if self.min_swipe_distance < 0:
            raise ValueError(f"min_swipe_distance cannot be negative, got {self.min_swipe_distance}")

    def grid(self) -> Grid:
        """
        Derive the board from the canvas size.

        Raises:
            GridConfigurationError: if the canvas holds no whole cell
        """
        return Grid.from_canvas(self.canvas_width, self.canvas_height, self.cell_size)
