from __future__ import annotations


class BlockBlastError(Exception):
    """Base class for errors raised by the game engine."""


class IllegalPlacement(BlockBlastError):
    """A piece does not fit at the requested anchor."""

    def __init__(self, row: int, col: int, message: str | None = None) -> None:
        self.row = row
        self.col = col
        super().__init__(message or f"piece does not fit at ({row}, {col})")


class InvalidPieceReference(BlockBlastError, IndexError):
    """A pool slot index outside the piece pool."""

    def __init__(self, slot: int, pool_size: int) -> None:
        self.slot = slot
        self.pool_size = pool_size
        super().__init__(f"slot {slot} out of range for a pool of {pool_size}")


class GameOverError(BlockBlastError):
    """A move was attempted after the session ended."""
