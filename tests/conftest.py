from typing import Iterable, List

import numpy as np
import pytest

from block_blast.game import Color, PieceGenerator


class ScriptedGenerator(PieceGenerator):
    """Hands out pieces by shape id in order, then keeps repeating ``fallback``."""

    def __init__(self, shapes: Iterable[str], fallback: str = "single", color: Color = Color.BLUE) -> None:
        super().__init__()
        self.shapes: List[str] = list(shapes)
        self.fallback = fallback
        self.color = color

    def random_piece(self):
        shape = self.shapes.pop(0) if self.shapes else self.fallback
        return self.make_piece(shape, self.color)


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


def checker_grid(size: int = 9, first_row: int = 0) -> np.ndarray:
    """Grid whose empty cells never touch each other, so only 1x1 pieces fit."""
    grid = np.zeros((size, size), dtype=np.int8)
    for r in range(first_row, size):
        for c in range(size):
            if (r + c) % 2 == 1:
                grid[r, c] = int(Color.GREEN)
    return grid


@pytest.fixture
def make_piece():
    generator = PieceGenerator()
    return generator.make_piece


@pytest.fixture
def clock():
    return FakeClock()
