import numpy as np

from block_blast.game import Board, Color, INVALID_TINT, project_preview


def test_legal_hover_tints_footprint_with_piece_colour(make_piece):
    board = Board()
    piece = make_piece("square", Color.PURPLE)
    preview = project_preview(board, piece, 1, 2)
    assert preview.valid
    assert sorted(preview.cells) == [(1, 2), (1, 3), (2, 2), (2, 3)]
    for r, c in preview.cells:
        assert preview.grid[r, c] == -int(Color.PURPLE)
    assert np.count_nonzero(preview.grid) == 4


def test_illegal_hover_keeps_committed_cells(make_piece):
    board = Board()
    board.grid[2, 3] = int(Color.YELLOW)
    preview = project_preview(board, make_piece("square"), 1, 2)
    assert not preview.valid
    assert preview.grid[2, 3] == int(Color.YELLOW)
    assert preview.grid[1, 2] == INVALID_TINT
    assert (2, 3) not in preview.cells


def test_hover_past_the_edge_tints_only_inside_cells(make_piece):
    board = Board()
    preview = project_preview(board, make_piece("horizontal3"), 8, 7)
    assert not preview.valid
    assert sorted(preview.cells) == [(8, 7), (8, 8)]
    assert preview.grid.shape == (9, 9)


def test_projection_never_mutates_board(make_piece):
    board = Board()
    board.grid[0, :] = 1
    before = board.snapshot()
    for row in range(-1, 10):
        for col in range(-1, 10):
            project_preview(board, make_piece("t_shape"), row, col)
    np.testing.assert_array_equal(board.grid, before)


def test_each_hover_is_independent(make_piece):
    board = Board()
    piece = make_piece("single")
    first = project_preview(board, piece, 0, 0)
    second = project_preview(board, piece, 5, 5)
    assert second.grid[0, 0] == 0
    assert first.grid[5, 5] == 0
    np.testing.assert_array_equal(project_preview(board, piece, 0, 0).grid, first.grid)


def test_no_piece_gives_plain_copy():
    board = Board()
    board.grid[4, 4] = 2
    preview = project_preview(board, None, 0, 0)
    assert not preview.valid
    assert preview.cells == ()
    np.testing.assert_array_equal(preview.grid, board.grid)
    assert preview.grid is not board.grid
