# board.py
# The N x N grid of number tiles that the move engine and the spawner mutate in place.

from dataclasses import dataclass
from typing import List, Optional, Tuple


class OutOfRangeError(IndexError):
    """Raised for coordinates outside the grid or negative tile values."""


@dataclass
class Tile:
    """A single cell of the board. A value of 0 means the cell is empty."""
    value: int = 0

    def __post_init__(self):
        if self.value < 0:
            raise ValueError("Tile value cannot be negative.")

    def is_empty(self) -> bool:
        return self.value == 0


class Board:
    """
    An N x N grid of Tiles addressed by (row, column).

    The grid is not allocated by the constructor; call init_empty() once
    (or use Board.empty()). Restarting a game should use fill_with_zeros(),
    which keeps the already allocated tiles.
    """

    def __init__(self, size: int = 4):
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise ValueError("Board size must be a positive integer.")
        self.size = size
        self.cells: List[List[Tile]] = []

    @classmethod
    def empty(cls, size: int = 4) -> "Board":
        board = cls(size)
        board.init_empty()
        return board

    def init_empty(self) -> None:
        """Allocates the grid with every cell at value 0."""
        self.cells = [[Tile() for _ in range(self.size)] for _ in range(self.size)]

    def fill_with_zeros(self) -> None:
        """Resets every existing tile to 0 without reallocating the grid."""
        for row in self.cells:
            for tile in row:
                tile.value = 0

    def _check_coordinates(self, row: int, column: int) -> None:
        if not self.cells:
            raise OutOfRangeError("Board has not been allocated; call init_empty() first.")
        if not (0 <= row < self.size and 0 <= column < self.size):
            raise OutOfRangeError(
                f"Coordinates ({row}, {column}) are outside a {self.size}x{self.size} board."
            )

    def get(self, row: int, column: int) -> Tile:
        self._check_coordinates(row, column)
        return self.cells[row][column]

    def set(self, row: int, column: int, value: int) -> None:
        self._check_coordinates(row, column)
        if value < 0:
            raise OutOfRangeError(f"Tile value must be non-negative, got {value}.")
        self.cells[row][column].value = value

    def is_full(self) -> bool:
        """
        True iff every cell holds a nonzero value.
        A full board may still allow a merging move.
        """
        if not self.cells:
            return False
        return all(not tile.is_empty() for row in self.cells for tile in row)

    def empty_cells(self) -> List[Tuple[int, int]]:
        """
        Get coordinates of empty cells in row-major order.
        Returns:
            List[Tuple[int, int]]: List of (row, col) tuples for empty cells.
        """
        empty = []
        for row in range(len(self.cells)):
            for col in range(self.size):
                if self.cells[row][col].is_empty():
                    empty.append((row, col))
        return empty

    def values(self) -> List[List[int]]:
        """Returns a copy of the grid as a list of lists of ints."""
        return [[tile.value for tile in row] for row in self.cells]

    def load(self, values: List[List[int]]) -> None:
        """
        Replaces every value in place from an N x N list of lists.
        Raises:
            ValueError: If the list is not a square matrix matching the board size.
            OutOfRangeError: If any value is negative. Nothing is written in that case.
        """
        if len(values) != self.size or not all(len(row) == self.size for row in values):
            raise ValueError(f"Values must form a {self.size}x{self.size} matrix.")
        for row in values:
            for value in row:
                if value < 0:
                    raise OutOfRangeError(f"Tile value must be non-negative, got {value}.")
        if not self.cells:
            self.init_empty()
        for r, row in enumerate(values):
            for c, value in enumerate(row):
                self.set(r, c, value)

    def max_value(self) -> Optional[int]:
        if not self.cells:
            return None
        return max(tile.value for row in self.cells for tile in row)

    def __repr__(self) -> str:
        return f"Board(size={self.size}, values={self.values()})"
