"""
Evaluation module for Minehunt agents.

Plays full sessions (every level in order) with an agent and
collects click statistics.
"""
import logging
import random
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import numpy as np

from ..agents.base_agent import BaseAgent
from ..game.board import HIDDEN_OBSERVATION
from ..game.config import LEVELS, LevelConfig, validate_levels
from ..game.controller import GameState, LevelController
from ..game.scoring import ScoreReporter

logger = logging.getLogger(__name__)


# ============================================================================
# Evaluation Configuration
# ============================================================================

@dataclass
class EvaluationConfig:
    """Configuration for evaluating an agent."""

    num_sessions: int = 100
    # Default: one click per cell of every level
    max_clicks_per_session: Optional[int] = None
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.num_sessions < 1:
            raise ValueError("Number of sessions must be positive")
        limit = self.max_clicks_per_session
        if limit is not None and limit < 1:
            raise ValueError("Click limit must be positive")


# ============================================================================
# Session Statistics
# ============================================================================

@dataclass
class SessionStats:
    """Statistics for a single session."""

    total_clicks: int = 0
    safe_clicks: int = 0
    levels_cleared: int = 0
    completed: bool = False


# ============================================================================
# Agent Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare agents over full Minehunt sessions.

    A session starts at the first level, advances after every clear and
    ends when the last level is cleared or the click limit is reached.
    """

    def __init__(
        self,
        levels: Iterable[LevelConfig] = LEVELS,
        config: Optional[EvaluationConfig] = None,
        reporter: Optional[ScoreReporter] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            levels: Level sequence to play.
            config: Evaluation settings.
            reporter: Receives the click total of every completed session.
        """
        self.levels = validate_levels(levels)
        self.config = config or EvaluationConfig()
        self.reporter = reporter
        self.max_clicks = self.config.max_clicks_per_session or sum(
            level.cell_count for level in self.levels
        )

    def play_session(
        self, agent: BaseAgent, controller: LevelController
    ) -> SessionStats:
        """
        Play one session from the first level.

        Args:
            agent: Agent choosing the clicks.
            controller: Controller to drive; it is restarted first.

        Returns:
            Statistics of the session.
        """
        controller.restart()
        agent.reset()
        stats = SessionStats()

        for _ in range(self.max_clicks):
            if controller.state is GameState.LEVEL_COMPLETE:
                stats.levels_cleared += 1
                controller.advance_level()
            elif controller.state is GameState.ALL_COMPLETE:
                break

            observation = controller.observation()
            valid_actions = observation.flatten() == HIDDEN_OBSERVATION
            action = agent.select_action(observation, valid_actions)
            row, col = agent.action_to_position(action, observation.shape[1])

            mines_before = controller.exploded_mines
            clicks_before = controller.total_clicks
            controller.click(row, col)
            accepted = controller.total_clicks > clicks_before
            if accepted and controller.exploded_mines == mines_before:
                stats.safe_clicks += 1

        if controller.state is GameState.LEVEL_COMPLETE:
            stats.levels_cleared += 1
        elif controller.state is GameState.ALL_COMPLETE:
            stats.levels_cleared += 1
            stats.completed = True
        stats.total_clicks = controller.total_clicks
        return stats

    def evaluate(self, agent: BaseAgent) -> Dict[str, float]:
        """
        Evaluate a single agent.

        Args:
            agent: Agent to evaluate.

        Returns:
            Dictionary with evaluation metrics.
        """
        controller = LevelController(
            self.levels,
            reporter=self.reporter,
            rng=random.Random(self.config.seed),
        )

        sessions = [
            self.play_session(agent, controller)
            for _ in range(self.config.num_sessions)
        ]
        clicks = np.array([s.total_clicks for s in sessions], dtype=float)
        wasted = np.array([s.safe_clicks for s in sessions], dtype=float)
        cleared = np.array([s.levels_cleared for s in sessions], dtype=float)
        completed = sum(1 for s in sessions if s.completed)

        logger.debug(
            "%s: %d/%d sessions completed",
            type(agent).__name__, completed, len(sessions),
        )

        return {
            "sessions": float(len(sessions)),
            "completion_rate": completed / len(sessions),
            "avg_clicks": float(clicks.mean()),
            "min_clicks": float(clicks.min()),
            "max_clicks": float(clicks.max()),
            "avg_safe_clicks": float(wasted.mean()),
            "avg_levels_cleared": float(cleared.mean()),
        }

    def compare(
        self, agents: Dict[str, BaseAgent]
    ) -> Dict[str, Dict[str, float]]:
        """
        Evaluate several agents on the same settings.

        Args:
            agents: Agents keyed by display name.

        Returns:
            Metrics keyed by the same names.
        """
        return {name: self.evaluate(agent) for name, agent in agents.items()}
