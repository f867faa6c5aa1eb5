from block_blast.game import PieceGenerator
from block_blast.visualization.layout import BoardLayout


def test_cell_at_maps_pixels_to_cells():
    layout = BoardLayout(cell_size=40, margin=20, header=80)
    ox, oy = layout.board_origin
    assert layout.cell_at(ox, oy) == (0, 0)
    assert layout.cell_at(ox + 39, oy + 39) == (0, 0)
    assert layout.cell_at(ox + 40 * 8 + 5, oy + 40 * 3 + 5) == (3, 8)
    assert layout.cell_at(ox - 1, oy) is None
    assert layout.cell_at(ox, oy + layout.board_px) is None


def test_anchor_for_drag_rounds_to_nearest_cell():
    layout = BoardLayout()
    ox, oy = layout.board_origin
    grab = (layout.cell_size // 2, layout.cell_size // 2)
    x = ox + 4 * layout.cell_size + grab[0]
    y = oy + 2 * layout.cell_size + grab[1]
    assert layout.anchor_for_drag(x, y, grab) == (2, 4)
    assert layout.anchor_for_drag(x + 15, y - 15, grab) == (2, 4)
    assert layout.anchor_for_drag(x + 25, y, grab) == (2, 5)


def test_tray_slots():
    layout = BoardLayout(pool_size=2)
    piece = PieceGenerator().make_piece("square")
    for slot in range(2):
        x, y = layout.slot_origin(slot, piece)
        assert layout.slot_at(x + 1, y + 1) == slot
    assert layout.slot_at(layout.margin - 1, layout.tray_top + 5) is None
    assert layout.slot_at(layout.margin + 5, layout.tray_top - 1) is None


def test_window_fits_board_and_tray():
    layout = BoardLayout()
    width, height = layout.window_size
    assert width == layout.board_px + 2 * layout.margin
    assert height > layout.tray_top
