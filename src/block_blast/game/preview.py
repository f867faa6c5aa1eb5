"""Read-only hover projection of a board."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .grid import EMPTY, Board
from .pieces import Coordinate, Piece


# Marker for footprint cells of an illegal placement.  Legal placements are
# tinted with the negated piece colour instead.
INVALID_TINT = -128


@dataclass(frozen=True)
class Preview:
    grid: np.ndarray
    valid: bool
    cells: Tuple[Coordinate, ...] = ()


def project_preview(board: Board, piece: Optional[Piece], row: int, col: int) -> Preview:
    """Return a copy of ``board`` with ``piece`` ghosted at ``(row, col)``.

    Only in-bounds cells that are currently empty are tinted; occupied cells
    keep their committed colour.  The board itself is never modified.
    """
    grid = board.snapshot()
    if piece is None:
        return Preview(grid=grid, valid=False)

    valid = board.can_place(piece, row, col)
    tint = -int(piece.color) if valid else INVALID_TINT
    tinted = []
    for r, c in piece.cells_at(row, col):
        if board.is_inside(r, c) and grid[r, c] == EMPTY:
            grid[r, c] = tint
            tinted.append((r, c))
    return Preview(grid=grid, valid=valid, cells=tuple(tinted))
