"""Game module for Block Blast.

Exports the core game engine and supporting classes:
- Board: Grid representation, placement checks and line clearing
- Piece / ShapeTemplate / PieceGenerator: Piece catalog and sampling
- ScoringRules: Points per placed cell and per completed line
- BlockBlastGame: Session state machine (pool, score, game over)
- project_preview: Read-only hover projection
- SettleScheduler: Cancellable deferred callbacks for the settle delay
- HighScoreStore implementations: Best-score persistence
"""

from .errors import BlockBlastError, GameOverError, IllegalPlacement, InvalidPieceReference
from .pieces import CATALOG, COLOR_RGB, Color, Piece, PieceGenerator, ShapeTemplate
from .grid import Board, CompletedLines, EMPTY
from .rules import ScoringRules
from .preview import INVALID_TINT, Preview, project_preview
from .highscore import HighScoreStore, HighScoreTracker, JsonHighScoreStore, MemoryHighScoreStore
from .settle import SettleScheduler
from .core import BlockBlastGame, ClearEvent, CommitResult, GameConfig, GameStatus

__all__ = [
    "BlockBlastError",
    "GameOverError",
    "IllegalPlacement",
    "InvalidPieceReference",
    "CATALOG",
    "COLOR_RGB",
    "Color",
    "Piece",
    "PieceGenerator",
    "ShapeTemplate",
    "Board",
    "CompletedLines",
    "EMPTY",
    "ScoringRules",
    "INVALID_TINT",
    "Preview",
    "project_preview",
    "HighScoreStore",
    "HighScoreTracker",
    "JsonHighScoreStore",
    "MemoryHighScoreStore",
    "SettleScheduler",
    "BlockBlastGame",
    "ClearEvent",
    "CommitResult",
    "GameConfig",
    "GameStatus",
]
