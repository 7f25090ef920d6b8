"""
Random agent for Minehunt.

Serves as a baseline by clicking random hidden cells.
"""
from typing import Optional

import numpy as np

from .base_agent import BaseAgent


# ============================================================================
# Random Agent
# ============================================================================

class RandomAgent(BaseAgent):
    """
    Agent that clicks hidden cells uniformly at random.

    This provides a baseline for comparing the deduction agent.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        """
        Initialize the random agent.

        Args:
            seed: Random seed for reproducibility.
        """
        self.rng = np.random.default_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select a random valid action.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Random action index from valid actions.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = np.where(valid_actions)[0]

        if len(valid_indices) == 0:
            # Nothing left to click; the controller ignores this
            return 0

        return int(self.rng.choice(valid_indices))
