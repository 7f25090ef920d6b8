"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minehunt.game import (
    Board,
    InMemoryScoreReporter,
    LevelConfig,
    LevelController,
    LEVELS,
)


# ============================================================================
# Level Fixtures
# ============================================================================

@pytest.fixture
def first_level() -> LevelConfig:
    """First level of the default sequence (8x8, 5 mines)."""
    return LEVELS[0]


@pytest.fixture
def tiny_level() -> LevelConfig:
    """A 5x5 level with a single mine."""
    return LevelConfig(99, 5, 1)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def corner_mine_board(tiny_level: LevelConfig) -> Board:
    """
    5x5 board with its only mine in the bottom-right corner.

    Every cell except the mine and its three neighbours has count 0.
    """
    is_mine = np.zeros((5, 5), dtype=bool)
    is_mine[4, 4] = True
    return Board.from_mines(tiny_level, is_mine)


@pytest.fixture
def wall_board() -> Board:
    """
    6x6 board with a column of mines splitting it in two.

    Column 2 holds mines on every row, so a flood fill started on
    the right edge can never cross to column 0.
    """
    level = LevelConfig(7, 6, 6)
    is_mine = np.zeros((6, 6), dtype=bool)
    is_mine[:, 2] = True
    return Board.from_mines(level, is_mine)


# ============================================================================
# Controller Fixtures
# ============================================================================

@pytest.fixture
def reporter() -> InMemoryScoreReporter:
    """Reporter recording submitted totals."""
    return InMemoryScoreReporter()


@pytest.fixture
def controller(reporter: InMemoryScoreReporter) -> LevelController:
    """Controller over the default three levels."""
    return LevelController(LEVELS, reporter=reporter, rng=random.Random(7))


@pytest.fixture
def single_level_controller(
    first_level: LevelConfig, reporter: InMemoryScoreReporter
) -> LevelController:
    """Controller whose only level is the first default level."""
    return LevelController(
        (first_level,), reporter=reporter, rng=random.Random(11)
    )
