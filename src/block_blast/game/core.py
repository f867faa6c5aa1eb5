from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from .errors import GameOverError, IllegalPlacement, InvalidPieceReference
from .grid import Board, CompletedLines
from .highscore import HighScoreStore, HighScoreTracker
from .pieces import Coordinate, Piece, PieceGenerator
from .preview import Preview, project_preview
from .rules import ScoringRules


LOGGER = logging.getLogger(__name__)


class GameStatus(Enum):
    ACTIVE = "active"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    grid_size: int = 9
    pool_size: int = 2
    # Pause between awarding clear points and emptying the lines.  Zero or
    # less clears inside ``commit_placement``.
    settle_delay_ms: int = 600
    random_seed: Optional[int] = None
    max_episode_steps: int = 10000


@dataclass(frozen=True)
class ClearEvent:
    event_id: int
    rows: FrozenSet[int]
    cols: FrozenSet[int]
    points_awarded: int

    @property
    def line_count(self) -> int:
        return len(self.rows) + len(self.cols)

    def cells(self, size: int) -> FrozenSet[Coordinate]:
        """Distinct board cells covered by the cleared lines."""
        row_cells = {(r, c) for r in self.rows for c in range(size)}
        col_cells = {(r, c) for c in self.cols for r in range(size)}
        return frozenset(row_cells | col_cells)


@dataclass(frozen=True)
class CommitResult:
    slot: int
    row: int
    col: int
    cells_placed: int
    placement_points: int
    clear_event: Optional[ClearEvent]
    game_over: bool

    @property
    def points_awarded(self) -> int:
        clear_points = self.clear_event.points_awarded if self.clear_event else 0
        return self.placement_points + clear_points


class BlockBlastGame:
    """Game session: board, piece pool, score and the game-over rule.

    A commit places the piece and awards its points straight away.  Completed
    lines are awarded immediately too, but stay on the board as a pending
    clear until ``resolve_clear`` (or ``settle``) runs, which lets the
    presentation layer animate them first.  The game-over check waits until
    no clear is pending, since clearing can free space for the pool.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        high_scores: Optional[HighScoreStore] = None,
        generator: Optional[PieceGenerator] = None,
    ) -> None:
        self.config = config or GameConfig()
        if self.config.pool_size < 1:
            raise ValueError("pool_size must be at least 1")
        self.rules = rules or ScoringRules()
        self.generator = generator or PieceGenerator(random.Random(self.config.random_seed))
        self.board = Board(self.config.grid_size)
        self.high_scores = HighScoreTracker(high_scores)

        self.pieces: List[Piece] = []
        self.score = 0
        self.status = GameStatus.ACTIVE
        self.total_pieces_placed = 0
        self.total_lines_cleared = 0
        self.step_count = 0
        self._pending: List[ClearEvent] = []
        self._events: List[ClearEvent] = []
        self._event_ids = itertools.count(1)

        self.start()

    # ---------- Read-only surface ----------
    @property
    def high_score(self) -> int:
        return self.high_scores.value

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    @property
    def pending_clears(self) -> Tuple[ClearEvent, ...]:
        return tuple(self._pending)

    def piece_at(self, slot: int) -> Piece:
        if not 0 <= slot < len(self.pieces):
            raise InvalidPieceReference(slot, len(self.pieces))
        return self.pieces[slot]

    def can_commit(self, slot: int, row: int, col: int) -> bool:
        if self.game_over or not 0 <= slot < len(self.pieces):
            return False
        return self._settled_board().can_place(self.pieces[slot], row, col)

    def valid_actions(self) -> List[Tuple[int, int, int]]:
        """List of ``(slot, row, col)`` commits that would be accepted."""
        if self.game_over:
            return []
        board = self._settled_board()
        return [
            (slot, row, col)
            for slot, piece in enumerate(self.pieces)
            for row, col in board.legal_anchors(piece)
        ]

    def preview(self, slot: int, row: int, col: int) -> Preview:
        """Hover projection, judged like ``can_commit`` against the settled board."""
        return project_preview(self._settled_board(), self.piece_at(slot), row, col)

    # ---------- Transitions ----------
    def start(self) -> None:
        """Begin a new session, discarding any pending clears."""
        self.board.reset()
        self.score = 0
        self.total_pieces_placed = 0
        self.total_lines_cleared = 0
        self.step_count = 0
        self._pending.clear()
        self._events.clear()
        self.pieces = [self.generator.random_piece() for _ in range(self.config.pool_size)]
        self.status = GameStatus.ACTIVE
        self._check_game_over()
        LOGGER.debug("New session started with pieces %s", [p.template.id for p in self.pieces])

    def commit_placement(self, slot: int, row: int, col: int) -> CommitResult:
        """Place the piece in ``slot`` with its top-left cell at ``(row, col)``.

        Raises:
            InvalidPieceReference: If ``slot`` is outside the pool.
            GameOverError: If the session already ended.
            IllegalPlacement: If the piece does not fit; nothing changes.
        """
        piece = self.piece_at(slot)
        if self.game_over:
            raise GameOverError("session is over; call start() to play again")
        # A drop during the settle delay lands on the cleared board.
        if not self._settled_board().can_place(piece, row, col):
            raise IllegalPlacement(row, col)
        self.settle()

        cells_placed = self.board.place(piece, row, col)
        placement_points = self.rules.placement_score(cells_placed)
        self.total_pieces_placed += 1
        self.step_count += 1

        event = None
        lines = self.board.detect_completed_lines()
        if lines:
            event = self._emit_clear(lines)
        gained = placement_points + (event.points_awarded if event else 0)
        self._award(gained)

        self.pieces[slot] = self.generator.random_piece()

        if event is not None and self.config.settle_delay_ms <= 0:
            self.resolve_clear(event)
        elif not self._pending:
            self._check_game_over()

        LOGGER.debug(
            "Placed %s at (%d, %d): +%d, score %d",
            piece.template.id, row, col, gained, self.score,
        )
        return CommitResult(
            slot=slot,
            row=row,
            col=col,
            cells_placed=cells_placed,
            placement_points=placement_points,
            clear_event=event,
            game_over=self.game_over,
        )

    def resolve_clear(self, event: ClearEvent) -> bool:
        """Empty the lines of a pending clear.

        Returns ``False`` for events that are not pending, e.g. ones already
        resolved or left over from a previous session.
        """
        if event not in self._pending:
            return False
        self._pending.remove(event)
        cleared = self.board.clear_lines(event.rows, event.cols)
        LOGGER.debug("Cleared rows %s cols %s (%d cells)", sorted(event.rows), sorted(event.cols), cleared)
        if not self._pending:
            self._check_game_over()
        return True

    def settle(self) -> int:
        """Resolve every pending clear and return how many there were."""
        resolved = 0
        for event in list(self._pending):
            if self.resolve_clear(event):
                resolved += 1
        return resolved

    def drain_clear_events(self) -> List[ClearEvent]:
        events, self._events = self._events, []
        return events

    # ---------- Internals ----------
    def _settled_board(self) -> Board:
        if not self._pending:
            return self.board
        board = self.board.copy()
        for event in self._pending:
            board.clear_lines(event.rows, event.cols)
        return board

    def _emit_clear(self, lines: CompletedLines) -> ClearEvent:
        points = self.rules.score_for_lines(lines)
        event = ClearEvent(
            event_id=next(self._event_ids),
            rows=lines.rows,
            cols=lines.cols,
            points_awarded=points,
        )
        self.total_lines_cleared += lines.count
        self._pending.append(event)
        self._events.append(event)
        return event

    def _award(self, points: int) -> None:
        if points <= 0:
            return
        self.score += points
        if self.high_scores.offer(self.score):
            LOGGER.info("New high score: %d", self.score)

    def _check_game_over(self) -> None:
        if self.board.has_any_legal_placement(self.pieces):
            return
        self.status = GameStatus.GAME_OVER
        LOGGER.info(
            "Game over: score %d after %d pieces, %d lines",
            self.score, self.total_pieces_placed, self.total_lines_cleared,
        )

    # ---------- Snapshots ----------
    def get_state(self) -> dict:
        return {
            "grid": self.board.snapshot(),
            "pieces": [(p.template.id, p.color) for p in self.pieces],
            "score": self.score,
            "high_score": self.high_score,
            "game_over": self.game_over,
            "pending_clears": len(self._pending),
            "filled_ratio": self.board.filled_ratio(),
        }

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "pieces_placed": self.total_pieces_placed,
            "lines_cleared": self.total_lines_cleared,
            "avg_score_per_piece": self.score / max(1, self.total_pieces_placed),
            "avg_lines_per_piece": self.total_lines_cleared / max(1, self.total_pieces_placed),
        }
