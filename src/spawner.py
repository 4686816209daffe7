# spawner.py
# Seeded placement of new tiles into empty cells.

import logging
import random
from typing import Optional, Tuple

from board import Board

logger = logging.getLogger(__name__)

# A new tile is a 4 with this probability, otherwise a 2.
TILE_FOUR_PROBABILITY = 0.1

def draw_tile_value(rng: random.Random) -> int:
    """Draws the value of a new tile (90% chance of 2, 10% chance of 4)."""
    return 4 if rng.random() < TILE_FOUR_PROBABILITY else 2

def initial_tile_count(seed: int, size: int) -> int:
    """
    Number of tiles placed when a game starts.
    Args:
        seed (int): The session seed.
        size (int): The dimension of the N x N board.
    Returns:
        int: 2 + seed % size, never filling the whole board.
    """
    return max(1, min(2 + seed % size, size * size - 1))

class Spawner:
    """
    Places new tiles on a board.

    Two generators are kept: a seeded one, reseeded whenever a game is
    populated so that a seed reproduces the whole game, and an unseeded one
    for non-deterministic spawns.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._seeded = random.Random(seed)
        self._unseeded = random.Random()

    def _place(self, board: Board, rng: random.Random) -> Optional[Tuple[int, int, int]]:
        empty_cells = board.empty_cells()
        if not empty_cells:
            return None
        row, col = rng.choice(empty_cells)
        value = draw_tile_value(rng)
        board.set(row, col, value)
        return row, col, value

    def populate_initial(self, board: Board, seed: int, tile_count: Optional[int] = None) -> None:
        """
        Reseeds the generator and places the starting tiles on a freshly allocated board.
        Args:
            board (Board): The board to populate.
            seed (int): The seed for this game.
            tile_count (Optional[int]): Tiles to place. Defaults to initial_tile_count(seed, size).
        """
        self.seed = seed
        self._seeded.seed(seed)
        if tile_count is None:
            tile_count = initial_tile_count(seed, board.size)
        for _ in range(tile_count):
            if self._place(board, self._seeded) is None:
                break
        logger.debug("Placed %d initial tiles with seed %d", tile_count, seed)

    def populate_initial_reset(self, board: Board, seed: int, tile_count: Optional[int] = None) -> None:
        """Same placement as populate_initial() on a board whose tiles are reused."""
        board.fill_with_zeros()
        self.populate_initial(board, seed, tile_count)

    def spawn_one(self, board: Board, deterministic: bool = True) -> Optional[Tuple[int, int, int]]:
        """
        Inserts one tile into a uniformly chosen empty cell.
        Args:
            board (Board): The board to add a tile to.
            deterministic (bool): Use the seeded generator if True, the unseeded one otherwise.
        Returns:
            Optional[Tuple[int, int, int]]: (row, col, value) of the new tile,
                                            or None if the board had no empty cell.
        """
        rng = self._seeded if deterministic else self._unseeded
        spawned = self._place(board, rng)
        if spawned is None:
            logger.debug("No empty cell, nothing spawned")
        else:
            logger.debug("Spawned %d at (%d, %d)", spawned[2], spawned[0], spawned[1])
        return spawned
