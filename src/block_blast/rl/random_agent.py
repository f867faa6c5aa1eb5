from __future__ import annotations

import logging
from typing import Optional

import gymnasium as gym
import numpy as np

import block_blast.env  # noqa: F401


LOGGER = logging.getLogger(__name__)


def run_random(steps: int = 200, seed: Optional[int] = None) -> float:
    """Play uniformly among legal placements; return the total reward."""
    env = gym.make("BlockBlast-9x9-v0")
    rng = np.random.default_rng(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        valid = np.argwhere(info["action_mask"])
        if len(valid):
            action = valid[rng.integers(len(valid))]
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            LOGGER.info("Episode %d finished with score %d", episodes, info["score"])
            obs, info = env.reset()
    env.close()
    LOGGER.info("Random agent total reward: %.2f over %d finished episodes", total_reward, episodes)
    return total_reward


if __name__ == "__main__":  # pragma: no cover
    logging.basicConfig(level=logging.INFO)
    run_random()
