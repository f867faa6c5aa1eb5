from __future__ import annotations

import dataclasses
import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_blast.game import (
    CATALOG,
    COLOR_RGB,
    BlockBlastGame,
    Color,
    GameConfig,
    GameOverError,
    IllegalPlacement,
    PieceGenerator,
    ScoringRules,
)
from block_blast.game.pieces import template_index


def _compute_action_mask(game: BlockBlastGame) -> np.ndarray:
    size = game.board.size
    k = game.config.pool_size
    mask = np.zeros((k, size, size), dtype=np.bool_)
    for slot, row, col in game.valid_actions():
        mask[slot, row, col] = True
    return mask


class BlockBlastEnv(gym.Env):
    """Placement environment: one action drops one tray piece.

    Actions are ``(slot, row, col)``.  Lines clear inside the step, so the
    board in every observation is settled.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        rules: Optional[ScoringRules] = None,
        score_scale: float = 0.01,
        invalid_action_penalty: float = -0.1,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        config = dataclasses.replace(config or GameConfig(), settle_delay_ms=0)
        self.game = BlockBlastGame(config, rules=rules)
        self.render_mode = render_mode

        self.score_scale = float(score_scale)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)

        size = config.grid_size
        k = config.pool_size
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=len(Color), shape=(size, size), dtype=np.int8),
                "pieces": spaces.Box(low=0, high=len(CATALOG) - 1, shape=(k,), dtype=np.int8),
                "colors": spaces.Box(low=1, high=len(Color), shape=(k,), dtype=np.int8),
            }
        )
        self.action_space = spaces.MultiDiscrete((k, size, size))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        pieces = np.array([template_index(p.template) for p in self.game.pieces], dtype=np.int8)
        colors = np.array([int(p.color) for p in self.game.pieces], dtype=np.int8)
        return {
            "grid": self.game.board.snapshot(),
            "pieces": pieces,
            "colors": colors,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "high_score": self.game.high_score,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.generator = PieceGenerator(random.Random(seed))
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        slot, row, col = map(int, action)
        reward_components: Dict[str, float] = {}
        gained = 0
        try:
            result = self.game.commit_placement(slot, row, col)
        except (IllegalPlacement, GameOverError):
            reward_components["invalid"] = self.invalid_action_penalty
        else:
            gained = result.points_awarded
            reward_components["score"] = self.score_scale * float(gained)

        terminated = bool(self.game.game_over)
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        self._steps += 1
        truncated = self._steps >= self.game.config.max_episode_steps

        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = float(gained)
        return self._get_obs(), float(sum(reward_components.values())), terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self.game.board.grid
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                value = int(grid[y, x])
                color = COLOR_RGB[Color(value)] if value else (26, 36, 86)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img
