"""Block Blast: a 9x9 block-placement puzzle.

Pieces from a two-slot tray are dropped onto the board; full rows and
columns clear and score.  ``block_blast.game`` holds the engine,
``block_blast.env`` a Gymnasium environment around it and
``block_blast.visualization`` a pygame front end.
"""

from .game import (
    BlockBlastGame,
    Board,
    ClearEvent,
    Color,
    GameConfig,
    GameStatus,
    IllegalPlacement,
    InvalidPieceReference,
    Piece,
    PieceGenerator,
    ScoringRules,
    project_preview,
)

__all__ = [
    "BlockBlastGame",
    "Board",
    "ClearEvent",
    "Color",
    "GameConfig",
    "GameStatus",
    "IllegalPlacement",
    "InvalidPieceReference",
    "Piece",
    "PieceGenerator",
    "ScoringRules",
    "project_preview",
]
