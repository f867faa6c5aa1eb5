from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

import pygame

from block_blast.game import (
    BlockBlastGame,
    ClearEvent,
    GameConfig,
    IllegalPlacement,
    JsonHighScoreStore,
    SettleScheduler,
)
from .layout import BoardLayout
from .renderer import Renderer


LOGGER = logging.getLogger(__name__)

DEFAULT_HIGHSCORE_FILE = Path.home() / ".block_blast_highscore.json"
SCORE_FLASH_MS = 1000


class PlayController:
    """Routes pointer events to the session and owns the settle timers."""

    def __init__(self, game: BlockBlastGame, layout: BoardLayout, scheduler: SettleScheduler) -> None:
        self.game = game
        self.layout = layout
        self.scheduler = scheduler
        self.clearing: Dict[int, ClearEvent] = {}
        # "+N" popups still on screen, keyed by clear event id.
        self.score_flashes: Dict[int, int] = {}
        self.confirming_restart = False
        self.dragging: Optional[int] = None
        self.pointer: Tuple[int, int] = (0, 0)
        # Pointer offset from the dragged piece's top-left corner.
        self.grab_offset = (layout.cell_size // 2, layout.cell_size // 2)
        self._settle_handles: Dict[int, int] = {}

    def request_restart(self) -> None:
        """Restart at once after game over; otherwise ask for confirmation."""
        if self.game.game_over:
            self.restart()
        else:
            self.confirming_restart = True
            self.dragging = None

    def answer_restart(self, confirmed: bool) -> None:
        if not self.confirming_restart:
            return
        self.confirming_restart = False
        if confirmed:
            self.restart()

    def restart(self) -> None:
        self.scheduler.cancel_all()
        self.clearing.clear()
        self.score_flashes.clear()
        self._settle_handles.clear()
        self.confirming_restart = False
        self.dragging = None
        self.game.start()

    def press(self, pos: Tuple[int, int]) -> None:
        if self.game.game_over or self.confirming_restart:
            return
        self.pointer = pos
        self.dragging = self.layout.slot_at(*pos)

    def move(self, pos: Tuple[int, int]) -> None:
        self.pointer = pos

    def release(self, pos: Tuple[int, int]) -> None:
        slot, self.dragging = self.dragging, None
        if slot is None or self.layout.cell_at(*pos) is None:
            return
        row, col = self.layout.anchor_for_drag(pos[0], pos[1], self.grab_offset)
        try:
            self.game.commit_placement(slot, row, col)
        except IllegalPlacement:
            LOGGER.debug("Rejected drop of slot %d at (%d, %d)", slot, row, col)
            return
        self._forget_settled()
        for event in self.game.drain_clear_events():
            self._schedule_clear(event)
            self._flash_score(event)

    def _forget_settled(self) -> None:
        """Stop flashing clears the session already resolved during a drop."""
        pending = {event.event_id for event in self.game.pending_clears}
        for event_id in [e for e in self.clearing if e not in pending]:
            del self.clearing[event_id]
            self.scheduler.cancel(self._settle_handles.pop(event_id))

    def _schedule_clear(self, event: ClearEvent) -> None:
        self.clearing[event.event_id] = event

        def settle() -> None:
            self.clearing.pop(event.event_id, None)
            self._settle_handles.pop(event.event_id, None)
            self.game.resolve_clear(event)

        self._settle_handles[event.event_id] = self.scheduler.schedule(self.game.config.settle_delay_ms, settle)

    def _flash_score(self, event: ClearEvent) -> None:
        self.score_flashes[event.event_id] = event.points_awarded
        self.scheduler.schedule(SCORE_FLASH_MS, lambda: self.score_flashes.pop(event.event_id, None))

    def hover_anchor(self) -> Optional[Tuple[int, int]]:
        if self.dragging is None or self.layout.cell_at(*self.pointer) is None:
            return None
        return self.layout.anchor_for_drag(self.pointer[0], self.pointer[1], self.grab_offset)

    def display_grid(self):
        anchor = self.hover_anchor()
        if anchor is None:
            return self.game.board.snapshot()
        return self.game.preview(self.dragging, *anchor).grid

    def drag_origin(self) -> Optional[Tuple[int, int]]:
        if self.dragging is None:
            return None
        return self.pointer[0] - self.grab_offset[0], self.pointer[1] - self.grab_offset[1]


def run(config: Optional[GameConfig] = None, highscore_file: Optional[Path] = None) -> None:
    config = config or GameConfig()
    store = JsonHighScoreStore(highscore_file or DEFAULT_HIGHSCORE_FILE)
    game = BlockBlastGame(config, high_scores=store)
    layout = BoardLayout(grid_size=config.grid_size, pool_size=config.pool_size)

    pygame.init()
    try:
        screen = pygame.display.set_mode(layout.window_size)
        pygame.display.set_caption("Block Blast")
        renderer = Renderer(layout)
        controller = PlayController(game, layout, SettleScheduler(clock=pygame.time.get_ticks))
        clock = pygame.time.Clock()
        LOGGER.info("Starting game; best score %d", game.high_score)

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if controller.confirming_restart:
                        if event.key in (pygame.K_y, pygame.K_RETURN):
                            controller.answer_restart(True)
                        elif event.key in (pygame.K_n, pygame.K_ESCAPE):
                            controller.answer_restart(False)
                    elif event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        controller.request_restart()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    controller.press(event.pos)
                elif event.type == pygame.MOUSEMOTION:
                    controller.move(event.pos)
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    controller.release(event.pos)

            controller.scheduler.poll()
            renderer.draw(
                screen,
                game,
                controller.display_grid(),
                clearing=controller.clearing.values(),
                dragging=controller.dragging,
                drag_origin=controller.drag_origin(),
                score_flashes=controller.score_flashes.values(),
                confirming_restart=controller.confirming_restart,
            )
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    logging.basicConfig(level=logging.INFO)
    run()
