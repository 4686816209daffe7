import pytest

import core
from board import Board
from core import Direction


def make_board(values):
    board = Board(len(values))
    board.load(values)
    return board


@pytest.mark.parametrize("line, expected", [
    ([2, 2, 2, 0], [4, 2, 0, 0]),
    ([2, 2, 2, 2], [4, 4, 0, 0]),
    ([0, 2, 0, 2], [4, 0, 0, 0]),
    ([4, 4, 8, 0], [8, 8, 0, 0]),
    ([2, 4, 8, 16], [2, 4, 8, 16]),
    ([0, 0, 0, 0], [0, 0, 0, 0]),
    ([8], [8]),
    ([0, 8, 0, 4], [8, 4, 0, 0]),
])
def test_process_line(line, expected):
    result, changed = core.process_line(line)
    assert result == expected
    assert changed == (result != line)


def test_compression_keeps_order():
    line = [0, 2, 0, 4, 8, 0, 16]
    result, _ = core.process_line(line)
    assert [v for v in result if v] == [2, 4, 8, 16]


def test_move_left_no_triple_merge():
    board = make_board([[2, 2, 2, 0], [0] * 4, [0] * 4, [0] * 4])
    assert core.apply_move(board, Direction.LEFT)
    assert board.values()[0] == [4, 2, 0, 0]


def test_move_right():
    board = make_board([[2, 2, 2, 0], [0, 4, 0, 4], [0] * 4, [0] * 4])
    core.apply_move(board, Direction.RIGHT)
    assert board.values()[:2] == [[0, 0, 2, 4], [0, 0, 0, 8]]


def test_move_up_and_down():
    values = [
        [2, 0, 0, 0],
        [2, 4, 0, 0],
        [2, 0, 0, 0],
        [0, 4, 0, 8],
    ]
    up = make_board(values)
    core.apply_move(up, Direction.UP)
    assert up.values() == [
        [4, 8, 0, 8],
        [2, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ]

    down = make_board(values)
    core.apply_move(down, Direction.DOWN)
    assert down.values() == [
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [2, 0, 0, 0],
        [4, 8, 0, 8],
    ]


def test_move_without_change_is_idempotent():
    values = [[2, 4], [0, 0]]
    board = make_board(values)
    assert not core.apply_move(board, Direction.LEFT)
    assert not core.apply_move(board, Direction.LEFT)
    assert board.values() == values


def test_apply_reports_win():
    board = make_board([[2, 2], [0, 0]])
    assert core.apply(board, Direction.LEFT, 4)
    assert board.values() == [[4, 0], [0, 0]]


def test_apply_reports_existing_goal_without_change():
    board = make_board([[8, 2], [0, 0]])
    assert core.apply(board, Direction.LEFT, 8)
    assert board.values() == [[8, 2], [0, 0]]


def test_apply_below_goal():
    board = make_board([[2, 2], [0, 0]])
    assert not core.apply(board, Direction.LEFT, 8)


def test_locked_board_does_not_change():
    values = [[2, 4], [4, 2]]
    board = make_board(values)
    for direction in Direction:
        assert not core.apply_move(board, direction)
    assert board.values() == values
    assert board.is_full()
    assert not core.has_legal_moves(board)


def test_full_board_with_merge_has_legal_moves():
    board = make_board([[2, 2], [4, 8]])
    assert board.is_full()
    assert core.has_legal_moves(board)


def test_no_equal_neighbours_along_axis_after_move():
    board = make_board([
        [2, 2, 4, 4],
        [2, 0, 2, 2],
        [4, 0, 4, 16],
        [32, 32, 2, 0],
    ])
    core.apply_move(board, Direction.LEFT)
    for row in board.values():
        for left, right in zip(row, row[1:]):
            assert left == 0 or left != right


def test_invalid_direction():
    board = Board.empty(2)
    with pytest.raises(ValueError):
        core.apply_move(board, "DIAGONAL")


def test_empty_board_has_no_legal_moves():
    board = Board.empty(3)
    for direction in Direction:
        assert not core.apply_move(board, direction)
    assert not core.has_legal_moves(board)


def test_single_tile_with_space_has_legal_moves():
    board = make_board([[2, 4], [8, 0]])
    assert core.has_legal_moves(board)
    assert core.apply_move(board, Direction.RIGHT)
