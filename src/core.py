# core.py
# This file holds the slide-and-merge logic for the number tile game.
# Moves mutate a Board in place; see board.py for the grid itself.

from enum import Enum
from typing import List, Tuple

from board import Board

class GameProgressState(Enum):
    """Represents the current progress state of a game session."""
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    PAUSED = "PAUSED"
    WON = "WON"
    LOST = "LOST"

class Direction(Enum):
    """Represents the possible move directions."""
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

# --- Line Manipulation (Core Move Logic Helpers) ---

def _compress_line(line: List[int]) -> List[int]:
    """
    Drops the zeros of a line, keeping the nonzero values in their original order.
    Args:
        line (List[int]): The line to compress, in traversal order.
    Returns:
        List[int]: The nonzero values only (not padded).
    """
    return [value for value in line if value != 0]

def _merge_line(line: List[int]) -> List[int]:
    """
    Merges adjacent identical numbers in a compressed line, front to back.
    A merged tile is never merged again in the same pass, so [2, 2, 2] gives [4, 2].
    Args:
        line (List[int]): A compressed line (no zeros).
    Returns:
        List[int]: The merged values (not padded).
    """
    merged = []
    read_idx = 0
    while read_idx < len(line):
        current_val = line[read_idx]
        if read_idx + 1 < len(line) and current_val == line[read_idx + 1]:
            merged.append(current_val * 2)
            read_idx += 2 # Skip current and next tile (which was merged)
        else:
            merged.append(current_val)
            read_idx += 1
    return merged

def process_line(line: List[int]) -> Tuple[List[int], bool]:
    """
    Applies compress, merge and re-pad to a single line moving towards index 0.
    Args:
        line (List[int]): The line values in traversal order.
    Returns:
        Tuple[List[int], bool]: The processed line and whether it differs from the input.
    """
    merged = _merge_line(_compress_line(line))
    final_line = merged + [0] * (len(line) - len(merged))
    return final_line, final_line != list(line)

# --- Board Traversal ---

def line_coordinates(size: int, direction: Direction, index: int) -> List[Tuple[int, int]]:
    """
    Coordinates of one line, ordered from the wall the tiles slide towards.
    Rows are used for LEFT/RIGHT and columns for UP/DOWN.
    Raises:
        ValueError: If an invalid direction is specified.
    """
    near_to_far = range(size)
    far_to_near = range(size - 1, -1, -1)
    if direction == Direction.LEFT:
        return [(index, col) for col in near_to_far]
    if direction == Direction.RIGHT:
        return [(index, col) for col in far_to_near]
    if direction == Direction.UP:
        return [(row, index) for row in near_to_far]
    if direction == Direction.DOWN:
        return [(row, index) for row in far_to_near]
    raise ValueError(f"Invalid direction specified: {direction!r}")

# --- Core Game Move Processing ---

def apply_move(board: Board, direction: Direction) -> bool:
    """
    Slides and merges every line of the board in the given direction, in place.
    All lines are computed before anything is written back.
    Args:
        board (Board): The board to mutate.
        direction (Direction): The direction to move.
    Returns:
        bool: True if at least one cell changed.
    Raises:
        ValueError: If an invalid direction is specified.
    """
    pending = []
    for index in range(board.size):
        coordinates = line_coordinates(board.size, direction, index)
        line = [board.get(row, col).value for row, col in coordinates]
        new_line, changed = process_line(line)
        if changed:
            pending.append((coordinates, new_line))

    for coordinates, new_line in pending:
        for (row, col), value in zip(coordinates, new_line):
            board.set(row, col, value)
    return bool(pending)

# --- Game State Checks ---

def check_for_win(board: Board, goal_value: int) -> bool:
    """
    Check if any tile has reached the goal value.
    Args:
        board (Board): The game board.
        goal_value (int): The tile value that signifies a win.
    Returns:
        bool: True if some tile is >= goal_value.
    """
    highest = board.max_value()
    return highest is not None and highest >= goal_value

def has_legal_moves(board: Board) -> bool:
    """
    Checks if any move would change the board.
    A full board still has a legal move when two orthogonal neighbours are equal.
    """
    if not board.cells:
        return False
    if board.empty_cells():
        # An empty cell helps only if some tile can slide into it.
        return bool(board.max_value())
    values = board.values()
    n = board.size
    for r in range(n):
        for c in range(n):
            if c + 1 < n and values[r][c] == values[r][c + 1]:
                return True
            if r + 1 < n and values[r][c] == values[r + 1][c]:
                return True
    return False

def apply(board: Board, direction: Direction, goal_value: int) -> bool:
    """
    Applies a move and reports whether the goal value is present afterwards.
    The result says nothing about whether the move changed the board; use
    apply_move() for that.
    """
    apply_move(board, direction)
    return check_for_win(board, goal_value)
