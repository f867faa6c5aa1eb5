from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np
import pygame

from block_blast.game import COLOR_RGB, BlockBlastGame, ClearEvent, Color, INVALID_TINT, Piece
from .layout import BoardLayout


BACKGROUND = (58, 74, 159)
EMPTY_CELL = (26, 36, 86)
GRID_LINE = (34, 34, 34)
INVALID_GHOST = (255, 0, 0)
FLASH = (255, 255, 255)
TEXT = (240, 240, 240)
SCORE_TEXT = (255, 215, 0)
BEST_TEXT = (255, 69, 0)


def _blend(color: Tuple[int, int, int], other: Tuple[int, int, int], t: float) -> Tuple[int, int, int]:
    return tuple(int(a + (b - a) * t) for a, b in zip(color, other))  # type: ignore[return-value]


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return EMPTY_CELL
    if v == INVALID_TINT:
        return _blend(EMPTY_CELL, INVALID_GHOST, 0.5)
    if v < 0:
        # Ghost of a legal placement: the piece colour at half strength.
        return _blend(EMPTY_CELL, COLOR_RGB[Color(-v)], 0.5)
    return COLOR_RGB[Color(v)]


class Renderer:
    def __init__(self, layout: BoardLayout) -> None:
        self.layout = layout
        self.font = pygame.font.SysFont(None, 28)
        self.big_font = pygame.font.SysFont(None, 48)

    def draw_grid(self, screen: pygame.Surface, grid: np.ndarray, clearing: Iterable[ClearEvent] = ()) -> None:
        flashing = set()
        for event in clearing:
            flashing |= event.cells(self.layout.grid_size)
        h, w = grid.shape
        for row in range(h):
            for col in range(w):
                color = _color_for_value(int(grid[row, col]))
                if (row, col) in flashing:
                    color = _blend(color, FLASH, 0.6)
                pygame.draw.rect(screen, color, pygame.Rect(*self.layout.cell_rect(row, col)))

    def draw_piece(self, screen: pygame.Surface, piece: Piece, origin: Tuple[int, int], cell_size: int) -> None:
        x0, y0 = origin
        for dr, dc in piece.template.cells:
            rect = pygame.Rect(x0 + dc * cell_size, y0 + dr * cell_size, cell_size - 1, cell_size - 1)
            pygame.draw.rect(screen, COLOR_RGB[piece.color], rect)

    def draw_tray(self, screen: pygame.Surface, game: BlockBlastGame, dragging: Optional[int]) -> None:
        for slot, piece in enumerate(game.pieces):
            if slot == dragging:
                continue
            self.draw_piece(screen, piece, self.layout.slot_origin(slot, piece), self.layout.tray_cell_size)

    def draw_header(self, screen: pygame.Surface, game: BlockBlastGame) -> None:
        m = self.layout.margin
        screen.blit(self.font.render(f"Score: {game.score}", True, SCORE_TEXT), (m, m))
        screen.blit(self.font.render(f"Best: {game.high_score}", True, BEST_TEXT), (m, m + 30))
        hint = self.font.render("R: restart  Esc: quit", True, TEXT)
        screen.blit(hint, (self.layout.window_size[0] - m - hint.get_width(), m))

    def draw_game_over(self, screen: pygame.Surface) -> None:
        text = self.big_font.render("Game Over - press R", True, TEXT)
        ox, oy = self.layout.board_origin
        rect = text.get_rect(center=(ox + self.layout.board_px // 2, oy + self.layout.board_px // 2))
        screen.blit(text, rect)

    def draw_score_flashes(self, screen: pygame.Surface, points: Iterable[int]) -> None:
        ox, oy = self.layout.board_origin
        centre = ox + self.layout.board_px // 2
        for i, value in enumerate(points):
            text = self.big_font.render(f"+{value}", True, SCORE_TEXT)
            screen.blit(text, text.get_rect(midbottom=(centre, oy - 4 - i * 36)))

    def draw_restart_prompt(self, screen: pygame.Surface) -> None:
        ox, oy = self.layout.board_origin
        shade = pygame.Surface((self.layout.board_px, self.layout.board_px), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 160))
        screen.blit(shade, (ox, oy))
        text = self.big_font.render("Restart? Y / N", True, TEXT)
        screen.blit(text, text.get_rect(center=(ox + self.layout.board_px // 2, oy + self.layout.board_px // 2)))

    def draw(
        self,
        screen: pygame.Surface,
        game: BlockBlastGame,
        grid: np.ndarray,
        clearing: Iterable[ClearEvent] = (),
        dragging: Optional[int] = None,
        drag_origin: Optional[Tuple[int, int]] = None,
        score_flashes: Iterable[int] = (),
        confirming_restart: bool = False,
    ) -> None:
        screen.fill(BACKGROUND)
        self.draw_header(screen, game)
        self.draw_grid(screen, grid, clearing)
        self.draw_tray(screen, game, dragging)
        if dragging is not None and drag_origin is not None:
            self.draw_piece(screen, game.pieces[dragging], drag_origin, self.layout.cell_size)
        self.draw_score_flashes(screen, score_flashes)
        if confirming_restart:
            self.draw_restart_prompt(screen)
        elif game.game_over:
            self.draw_game_over(screen)
        pygame.display.flip()
