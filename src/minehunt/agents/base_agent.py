"""
Base agent interface for automated Minehunt players.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from ..game.board import HIDDEN_OBSERVATION


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for Minehunt agents.

    Agents pick the next cell to click from the visible board. Board
    size can change between levels, so positions are always derived
    from the observation's shape.
    """

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Action index (row * width + col).
        """

    @staticmethod
    def action_to_position(action: int, width: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        row, col = divmod(int(action), width)
        return row, col

    @staticmethod
    def position_to_action(row: int, col: int, width: int) -> int:
        """Convert (row, col) position to flat action index."""
        return row * width + col

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get valid actions mask from observation.

        Args:
            observation: 2D array of cell states.

        Returns:
            Boolean mask where True = valid action.
        """
        return observation.flatten() == HIDDEN_OBSERVATION

    def reset(self) -> None:
        """Reset agent state for a new session."""
        pass
