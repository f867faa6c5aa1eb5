from __future__ import annotations

import itertools
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

import numpy as np


Coordinate = Tuple[int, int]


class Color(IntEnum):
    """Piece palette. ``0`` is reserved for empty grid cells."""

    ORANGE = 1
    RED = 2
    BLUE = 3
    GREEN = 4
    PURPLE = 5
    CYAN = 6
    YELLOW = 7


COLOR_RGB: Dict[Color, Tuple[int, int, int]] = {
    Color.ORANGE: (255, 165, 0),
    Color.RED: (255, 69, 0),
    Color.BLUE: (30, 144, 255),
    Color.GREEN: (50, 205, 50),
    Color.PURPLE: (147, 112, 219),
    Color.CYAN: (0, 206, 209),
    Color.YELLOW: (255, 215, 0),
}


@dataclass(frozen=True)
class ShapeTemplate:
    """Footprint of a piece relative to its top-left anchor.

    ``cells`` holds ``(row_offset, col_offset)`` pairs.  A template must be
    non-empty and every offset must lie inside its ``height x width`` box.
    """

    id: str
    cells: FrozenSet[Coordinate]
    width: int
    height: int

    def __post_init__(self) -> None:
        if not self.cells:
            raise ValueError(f"shape {self.id!r} has an empty footprint")
        for dr, dc in self.cells:
            if not (0 <= dr < self.height and 0 <= dc < self.width):
                raise ValueError(
                    f"shape {self.id!r}: offset ({dr}, {dc}) outside {self.height}x{self.width}"
                )

    @classmethod
    def from_mask(cls, shape_id: str, mask: np.ndarray) -> "ShapeTemplate":
        """Build a template from a 0/1 mask, trimming empty border rows/cols."""
        rows, cols = np.nonzero(np.asarray(mask))
        if rows.size == 0:
            raise ValueError(f"shape {shape_id!r} has an empty footprint")
        top, left = int(rows.min()), int(cols.min())
        cells = frozenset((int(r) - top, int(c) - left) for r, c in zip(rows, cols))
        return cls(
            id=shape_id,
            cells=cells,
            width=int(cols.max()) - left + 1,
            height=int(rows.max()) - top + 1,
        )

    @property
    def size(self) -> int:
        return len(self.cells)

    def mask(self) -> np.ndarray:
        m = np.zeros((self.height, self.width), dtype=np.int8)
        for dr, dc in self.cells:
            m[dr, dc] = 1
        return m


BASE_SHAPES = {
    "single": np.array([[1]], dtype=np.int8),
    "horizontal2": np.array([[1, 1]], dtype=np.int8),
    "horizontal3": np.array([[1, 1, 1]], dtype=np.int8),
    "vertical2": np.array([[1], [1]], dtype=np.int8),
    "vertical3": np.array([[1], [1], [1]], dtype=np.int8),
    "square": np.array([[1, 1], [1, 1]], dtype=np.int8),
    "l_shape": np.array([[1, 0], [1, 1]], dtype=np.int8),
    "reversed_l": np.array([[0, 1], [1, 1]], dtype=np.int8),
    "t_shape": np.array([[1, 1, 1], [0, 1, 0]], dtype=np.int8),
}

CATALOG: Tuple[ShapeTemplate, ...] = tuple(
    ShapeTemplate.from_mask(shape_id, mask) for shape_id, mask in BASE_SHAPES.items()
)


@dataclass(frozen=True)
class Piece:
    template: ShapeTemplate
    color: Color
    instance_id: int

    @property
    def size(self) -> int:
        return self.template.size

    def cells_at(self, row: int, col: int) -> List[Coordinate]:
        """Absolute board cells covered when anchored at ``(row, col)``."""
        return [(row + dr, col + dc) for dr, dc in sorted(self.template.cells)]


class PieceGenerator:
    """Samples pieces uniformly from a catalog and palette.

    Each call is independent; nothing prevents the same template from being
    offered in several slots at once.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        catalog: Sequence[ShapeTemplate] = CATALOG,
        palette: Sequence[Color] = tuple(Color),
    ) -> None:
        if not catalog or not palette:
            raise ValueError("catalog and palette must be non-empty")
        self.rng = rng or random.Random()
        self.catalog = tuple(catalog)
        self.palette = tuple(palette)
        self._ids = itertools.count(1)

    def random_piece(self) -> Piece:
        template = self.rng.choice(self.catalog)
        color = self.rng.choice(self.palette)
        return Piece(template=template, color=color, instance_id=next(self._ids))

    def make_piece(self, shape_id: str, color: Color = Color.ORANGE) -> Piece:
        """Build a specific piece, e.g. for scripted boards."""
        template = template_by_id(shape_id, self.catalog)
        return Piece(template=template, color=color, instance_id=next(self._ids))


def template_by_id(shape_id: str, catalog: Sequence[ShapeTemplate] = CATALOG) -> ShapeTemplate:
    for template in catalog:
        if template.id == shape_id:
            return template
    raise KeyError(shape_id)


def template_index(template: ShapeTemplate, catalog: Sequence[ShapeTemplate] = CATALOG) -> int:
    return list(catalog).index(template)
