"""
Grid model - the fixed-size discrete coordinate space the snake lives on.
"""

from typing import Tuple


class GridConfigurationError(ValueError):
    """Raised when the grid would have no usable cells."""


class Grid:
    """
    A width x height board of integer cells.

    Pure geometry: it holds no game state and never changes after creation.
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise GridConfigurationError(
                f"Grid dimensions must be at least 1x1, got {width}x{height}."
            )
        self.width = width
        self.height = height

    @classmethod
    def from_canvas(cls, canvas_width: int, canvas_height: int, cell_size: int) -> "Grid":
        """
        Derive the grid from a pixel area divided into square cells.

        Partial cells at the right/bottom edge are dropped (floor division).
        """
        if cell_size <= 0:
            raise GridConfigurationError(f"Cell size must be positive, got {cell_size}.")
        return cls(canvas_width // cell_size, canvas_height // cell_size)

    def in_bounds(self, cell: Tuple[int, int]) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    @property
    def center(self) -> Tuple[int, int]:
        return (self.width // 2, self.height // 2)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height)

    def __repr__(self):
        return f"<Grid {self.width}x{self.height}>"
