"""
Gymnasium environment wrapper for Minehunt.

Provides a standard RL interface over a single-level session.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import HIDDEN_OBSERVATION, MINE_OBSERVATION
from .config import LEVELS, LevelConfig
from .controller import GameState, LevelController


# ============================================================================
# Minehunt Environment
# ============================================================================

class MinehuntEnv(gym.Env):
    """
    Gymnasium environment for Minehunt.

    Observation:
        2D array where:
        - -1 = hidden cell
        - 0-8 = revealed safe cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size size * size.
        Action i corresponds to cell at (i // size, i % size).

    Rewards:
        - +1 for finding a mine
        - +10 bonus for finding the last mine
        - -0.1 for clicking a safe cell
        - -0.5 for invalid action (already revealed)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    MINE_REWARD = 1.0
    CLEAR_BONUS = 10.0
    SAFE_PENALTY = -0.1
    INVALID_PENALTY = -0.5

    def __init__(
        self,
        level: Optional[LevelConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minehunt environment.

        Args:
            level: Level to play (default: first level of LEVELS).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.level = level or LEVELS[0]
        self.render_mode = render_mode
        self.controller = LevelController((self.level,), rng=random.Random())

        size = self.level.size
        self.observation_space = spaces.Box(
            low=HIDDEN_OBSERVATION,
            high=MINE_OBSERVATION,
            shape=(size, size),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(size * size)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducible mine layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.controller.rng.seed(seed)
        self.controller.restart()
        return self.controller.observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Click the cell behind an action.

        Args:
            action: Cell index to click (row * size + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = divmod(int(action), self.level.size)
        reward = self._calculate_reward(row, col)

        observation = self.controller.observation()
        terminated = not self.controller.is_playing
        return observation, reward, terminated, False, self._get_info()

    def _calculate_reward(self, row: int, col: int) -> float:
        """Apply the click and score its outcome."""
        clicks_before = self.controller.total_clicks
        mines_before = self.controller.exploded_mines
        self.controller.click(row, col)

        if self.controller.total_clicks == clicks_before:
            return self.INVALID_PENALTY
        if self.controller.exploded_mines == mines_before:
            return self.SAFE_PENALTY
        if self.controller.state is GameState.ALL_COMPLETE:
            return self.MINE_REWARD + self.CLEAR_BONUS
        return self.MINE_REWARD

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "clicks": self.controller.total_clicks,
            "exploded_mines": self.controller.exploded_mines,
            "remaining_mines": self.controller.remaining_mines,
            "game_state": self.controller.state.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self.controller.board.render()
        if self.render_mode == "human":
            print(self.controller.board.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = hidden cell.
        """
        return (self.controller.observation() == HIDDEN_OBSERVATION).flatten()
