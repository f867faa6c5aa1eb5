"""Screen geometry shared by the renderer and the input loop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from block_blast.game.pieces import Coordinate, Piece


@dataclass(frozen=True)
class BoardLayout:
    grid_size: int = 9
    pool_size: int = 2
    cell_size: int = 40
    margin: int = 20
    header: int = 80
    tray_cell_size: int = 30

    @property
    def board_px(self) -> int:
        return self.grid_size * self.cell_size

    @property
    def board_origin(self) -> Tuple[int, int]:
        return self.margin, self.margin + self.header

    @property
    def tray_top(self) -> int:
        return self.board_origin[1] + self.board_px + self.margin

    @property
    def slot_width(self) -> int:
        return self.board_px // self.pool_size

    @property
    def window_size(self) -> Tuple[int, int]:
        width = self.board_px + 2 * self.margin
        height = self.tray_top + 4 * self.tray_cell_size + self.margin
        return width, height

    def cell_at(self, x: int, y: int) -> Optional[Coordinate]:
        """Board ``(row, col)`` under pixel ``(x, y)``, or ``None`` off the board."""
        ox, oy = self.board_origin
        if not (ox <= x < ox + self.board_px and oy <= y < oy + self.board_px):
            return None
        return (y - oy) // self.cell_size, (x - ox) // self.cell_size

    def anchor_for_drag(self, x: int, y: int, grab_offset: Tuple[int, int]) -> Tuple[int, int]:
        """Anchor cell for a piece whose top-left corner sits at ``(x, y) - grab_offset``.

        Rounds to the nearest cell and may return coordinates off the board,
        which the engine then rejects.
        """
        ox, oy = self.board_origin
        left = x - grab_offset[0] - ox
        top = y - grab_offset[1] - oy
        half = self.cell_size // 2
        return (top + half) // self.cell_size, (left + half) // self.cell_size

    def cell_rect(self, row: int, col: int) -> Tuple[int, int, int, int]:
        ox, oy = self.board_origin
        return ox + col * self.cell_size, oy + row * self.cell_size, self.cell_size - 1, self.cell_size - 1

    def slot_origin(self, slot: int, piece: Piece) -> Tuple[int, int]:
        """Top-left pixel of a tray piece, centred in its slot."""
        ox = self.margin + slot * self.slot_width
        w = piece.template.width * self.tray_cell_size
        h = piece.template.height * self.tray_cell_size
        x = ox + (self.slot_width - w) // 2
        y = self.tray_top + (4 * self.tray_cell_size - h) // 2
        return x, y

    def slot_at(self, x: int, y: int) -> Optional[int]:
        if not (self.tray_top <= y < self.tray_top + 4 * self.tray_cell_size):
            return None
        index = (x - self.margin) // self.slot_width
        if x < self.margin or not 0 <= index < self.pool_size:
            return None
        return int(index)
