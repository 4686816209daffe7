import pytest

from board import Board, OutOfRangeError, Tile


def test_init_empty_gives_zero_board():
    for size in range(2, 6):
        board = Board.empty(size)
        assert board.values() == [[0] * size for _ in range(size)]
        assert not board.is_full()
        assert len(board.empty_cells()) == size * size


def test_constructor_does_not_allocate():
    board = Board(3)
    with pytest.raises(OutOfRangeError):
        board.get(0, 0)
    assert not board.is_full()
    board.init_empty()
    assert board.get(0, 0).is_empty()


@pytest.mark.parametrize("size", [0, -1, 2.5, True])
def test_invalid_size(size):
    with pytest.raises(ValueError):
        Board(size)


@pytest.mark.parametrize("row, column", [(-1, 0), (0, -1), (4, 0), (0, 4)])
def test_out_of_range_coordinates(row, column):
    board = Board.empty(4)
    with pytest.raises(OutOfRangeError):
        board.get(row, column)
    with pytest.raises(OutOfRangeError):
        board.set(row, column, 2)


def test_negative_value_rejected():
    board = Board.empty(2)
    with pytest.raises(OutOfRangeError):
        board.set(0, 0, -2)
    with pytest.raises(ValueError):
        Tile(-1)


def test_fill_with_zeros_keeps_tiles():
    board = Board.empty(2)
    board.load([[2, 4], [8, 16]])
    tile = board.get(1, 1)
    assert board.is_full()

    board.fill_with_zeros()

    assert board.values() == [[0, 0], [0, 0]]
    assert board.get(1, 1) is tile


def test_is_full_ignores_possible_merges():
    board = Board.empty(2)
    board.load([[2, 2], [2, 2]])
    assert board.is_full()


def test_empty_cells_row_major():
    board = Board.empty(2)
    board.set(0, 1, 2)
    assert board.empty_cells() == [(0, 0), (1, 0), (1, 1)]


def test_load_rejects_wrong_shape():
    board = Board.empty(2)
    with pytest.raises(ValueError):
        board.load([[2, 2, 2], [0, 0, 0]])


def test_max_value():
    board = Board.empty(3)
    assert board.max_value() == 0
    board.set(2, 1, 64)
    assert board.max_value() == 64
    assert Board(3).max_value() is None


def test_load_with_negative_value_writes_nothing():
    board = Board.empty(2)
    board.load([[16, 16], [16, 16]])
    with pytest.raises(OutOfRangeError):
        board.load([[2, 4], [-1, 8]])
    assert board.values() == [[16, 16], [16, 16]]
