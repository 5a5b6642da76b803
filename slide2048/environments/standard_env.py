import gymnasium
from gymnasium import spaces
import numpy as np

from slide2048.config import ACTION_NAMES, DEFAULT_SIZE
from slide2048.game.game_2048 import Game2048

REWARD_MODES = ("raw_score", "log_merge", "potential_log")


class Standard2048Env(gymnasium.Env):
    """
    Gymnasium environment around one 2048 session.

    Actions are 0: up, 1: right, 2: down, 3: left. Observations are the raw
    value board. The session's spawner draws from the environment's
    `np_random`, so `reset(seed=...)` makes an episode reproducible.
    """

    metadata = {"render_modes": ["human"]}

    def __init__(self, render_mode=None, reward_mode="raw_score", size=DEFAULT_SIZE):
        super().__init__()

        if reward_mode not in REWARD_MODES:
            raise ValueError(f"Unknown reward_mode: {reward_mode}. Must be one of {REWARD_MODES}.")

        self.size = size
        self.reward_mode = reward_mode
        self.render_mode = render_mode
        self.game = None

        self.action_space = spaces.Discrete(len(ACTION_NAMES))
        self.observation_space = spaces.Box(low=0,
                                            high=np.iinfo(np.int32).max,
                                            shape=(size, size),
                                            dtype=np.int32)

    def _get_episode_info(self):
        return {
            "score": self.game.current_score(),
            "max_tile": self.game.get_max_tile(),
            "won": self.game.is_won()
        }

    def action_mask(self):
        """Boolean mask over actions, True where the move would change the board."""
        mask = np.zeros(self.action_space.n, dtype=bool)
        for direction in self.game.get_valid_moves():
            mask[int(direction)] = True
        return mask

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        self.game = Game2048(size=self.size, rng=self.np_random)

        observation = self.game.board
        info = self._get_episode_info()

        if self.render_mode == "human":
            self.render()
        return observation, info

    def step(self, action):
        result = self.game.move(ACTION_NAMES[int(action)])
        observation = self.game.board

        # initialize additive reward components
        potential_bonus = 0.0
        cost_of_living_penalty = 0.0
        merged_tiles = list(result.merged_values)

        if not result.changed:
            reward = -1  # Punish invalid moves
        else:
            # Determine base reward based on reward mode
            if self.reward_mode in ("log_merge", "potential_log"):
                base_reward = float(np.sum(np.log2(merged_tiles))) if merged_tiles else 0.0
            else:
                base_reward = result.score_gained

            if self.reward_mode == "potential_log":
                # Potential Reward: small bonus for every empty cell on the board after the move
                potential_bonus = 0.01 * len(self.game.grid.empty_cells())

                # Cost of Living: small penalty for any valid move that results in zero merges
                if not merged_tiles:
                    cost_of_living_penalty = -0.1

            reward = base_reward + potential_bonus + cost_of_living_penalty

        terminated = self.game.is_won() or self.game.is_game_over()
        truncated = False

        info = {
            "num_empty_cells": len(self.game.grid.empty_cells()),
            "potential_bonus": float(potential_bonus),
            "cost_of_living_penalty": float(cost_of_living_penalty),
            "merged_tiles": merged_tiles,
            "raw_score_delta": result.score_gained,
            "reward_mode": self.reward_mode
        }

        if terminated:
            info.update(self._get_episode_info())

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, info

    def render(self):
        if self.render_mode == "human":
            print(self.game)
