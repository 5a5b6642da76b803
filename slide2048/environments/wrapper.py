import gymnasium
from gymnasium import spaces
import numpy as np


class Log2Wrapper(gymnasium.ObservationWrapper):
    """
    Converts raw tile values to their log2 representation.

    Tile values grow exponentially (2 up to 2^17 on a 4x4 board); log2 puts
    them on a linear scale:
    - 0    -> 0.0 (empty)
    - 2    -> 1.0
    - 2048 -> 11.0

    Args:
        env (gymnasium.Env): The environment to wrap.
        policy_type (str): 'mlp' or 'cnn'. 'cnn' adds a leading channel axis,
                           giving (1, H, W).
    """
    def __init__(self, env, policy_type="mlp"):
        super().__init__(env)

        if policy_type not in ["mlp", "cnn"]:
            raise ValueError(f"Unknown policy_type: {policy_type}. Must be 'mlp' or 'cnn'.")

        self.policy_type = policy_type

        height, width = self.env.observation_space.shape
        if self.policy_type == "cnn":
            self.output_shape = (1, height, width)
        else:
            self.output_shape = (height, width)

        self.observation_space = spaces.Box(
            low=0.0,
            high=32.0,  # log2 of the int32 ceiling
            shape=self.output_shape,
            dtype=np.float32
        )

    def observation(self, obs):
        processed_obs = np.zeros(obs.shape, dtype=np.float32)

        # log2(0) would be -inf, so only positive cells are transformed
        positive_mask = (obs > 0)
        processed_obs[positive_mask] = np.log2(obs[positive_mask])

        return processed_obs.reshape(self.output_shape)
