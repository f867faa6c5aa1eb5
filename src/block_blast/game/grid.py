from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional

import numpy as np

from .errors import IllegalPlacement
from .pieces import Color, Coordinate, Piece


EMPTY = 0
DEFAULT_SIZE = 9


@dataclass(frozen=True)
class CompletedLines:
    rows: FrozenSet[int] = frozenset()
    cols: FrozenSet[int] = frozenset()

    @property
    def count(self) -> int:
        return len(self.rows) + len(self.cols)

    def __bool__(self) -> bool:
        return self.count > 0


class Board:
    """Square grid of cells for block placement.

    The grid uses 0 for empty cells and ``Color`` values for occupied ones.
    Its dimensions are fixed at construction; only placement and line
    clearing mutate it.
    """

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        self.size = int(size)
        self.grid = np.zeros((self.size, self.size), dtype=np.int8)

    @classmethod
    def from_array(cls, grid: np.ndarray) -> "Board":
        grid = np.asarray(grid)
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
            raise ValueError(f"expected a square grid, got shape {grid.shape}")
        board = cls(grid.shape[0])
        board.grid[:] = grid
        return board

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def copy(self) -> "Board":
        return Board.from_array(self.grid)

    def snapshot(self) -> np.ndarray:
        return self.grid.copy()

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get_cell(self, row: int, col: int) -> Optional[Color]:
        """Colour at ``(row, col)`` or ``None`` when empty.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if not self.is_inside(row, col):
            raise IndexError(f"cell ({row}, {col}) out of bounds")
        value = int(self.grid[row, col])
        return Color(value) if value != EMPTY else None

    def can_place(self, piece: Optional[Piece], row: int, col: int) -> bool:
        if piece is None:
            return False
        for r, c in piece.cells_at(row, col):
            if not self.is_inside(r, c):
                return False
            if self.grid[r, c] != EMPTY:
                return False
        return True

    def place(self, piece: Piece, row: int, col: int) -> int:
        """Write the piece's colour into its footprint and return the cell count.

        Callers are expected to check ``can_place`` first; an infeasible
        placement raises ``IllegalPlacement`` and leaves the grid untouched.
        """
        if not self.can_place(piece, row, col):
            raise IllegalPlacement(row, col)
        cells = piece.cells_at(row, col)
        for r, c in cells:
            self.grid[r, c] = int(piece.color)
        return len(cells)

    def detect_completed_lines(self) -> CompletedLines:
        filled = self.grid != EMPTY
        rows = np.flatnonzero(np.all(filled, axis=1))
        cols = np.flatnonzero(np.all(filled, axis=0))
        return CompletedLines(
            rows=frozenset(int(r) for r in rows),
            cols=frozenset(int(c) for c in cols),
        )

    def clear_lines(self, rows: Iterable[int], cols: Iterable[int]) -> int:
        """Empty every cell of the given rows and columns.

        Returns the number of occupied cells that were emptied, so a repeat
        call with the same lines returns 0.
        """
        mask = np.zeros(self.grid.shape, dtype=bool)
        for r in rows:
            mask[r, :] = True
        for c in cols:
            mask[:, c] = True
        cleared = int(np.count_nonzero(self.grid[mask]))
        self.grid[mask] = EMPTY
        return cleared

    def legal_anchors(self, piece: Optional[Piece]) -> List[Coordinate]:
        """All ``(row, col)`` anchors where ``piece`` fits."""
        if piece is None:
            return []
        return [
            (row, col)
            for row in range(self.size)
            for col in range(self.size)
            if self.can_place(piece, row, col)
        ]

    def has_legal_placement(self, piece: Optional[Piece]) -> bool:
        if piece is None:
            return False
        for row in range(self.size):
            for col in range(self.size):
                if self.can_place(piece, row, col):
                    return True
        return False

    def has_any_legal_placement(self, pieces: Iterable[Optional[Piece]]) -> bool:
        return any(self.has_legal_placement(piece) for piece in pieces)

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def filled_ratio(self) -> float:
        return self.filled_count() / float(self.size * self.size)

    def render_ascii(self) -> str:
        return "\n".join("".join("█" if cell else "·" for cell in row) for row in self.grid)
