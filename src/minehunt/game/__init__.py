"""
Minehunt game module.

Provides the board engine: mine placement, neighbour counting,
reveal logic, level progression and score reporting.
"""
from .errors import (
    MinehuntError,
    InvalidLevelConfig,
    InvalidTransition,
    ScoreReportError,
)
from .config import LevelConfig, LEVELS, load_levels, validate_levels
from .board import Board, generate_mines, count_neighbors, neighbors
from .reveal import RevealResult, reveal
from .scoring import (
    ScoreReporter,
    ScoreRecord,
    InMemoryScoreReporter,
    JsonScoreReporter,
    BackgroundScoreReporter,
)
from .controller import GameState, SessionSnapshot, LevelController
from .environment import MinehuntEnv

__all__ = [
    "MinehuntError",
    "InvalidLevelConfig",
    "InvalidTransition",
    "ScoreReportError",
    "LevelConfig",
    "LEVELS",
    "load_levels",
    "validate_levels",
    "Board",
    "generate_mines",
    "count_neighbors",
    "neighbors",
    "RevealResult",
    "reveal",
    "ScoreReporter",
    "ScoreRecord",
    "InMemoryScoreReporter",
    "JsonScoreReporter",
    "BackgroundScoreReporter",
    "GameState",
    "SessionSnapshot",
    "LevelController",
    "MinehuntEnv",
]
