"""
Level controller for Minehunt.

Owns the active board, the click counters and the game state machine
for a whole session of consecutive levels.
"""
import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .board import Board
from .config import LEVELS, LevelConfig, validate_levels
from .errors import InvalidTransition
from .reveal import reveal
from .scoring import ScoreReporter

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of a session."""

    PLAYING = auto()
    LEVEL_COMPLETE = auto()
    ALL_COMPLETE = auto()


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Read-only view of a session after an action.

    Attributes:
        level_index: Position of the active level in the sequence.
        level: Active level definition.
        revealed: Copy of the revealed grid.
        observation: Visible board, see Board.observation.
        total_clicks: Accepted clicks since the last restart.
        exploded_mines: Mines found on the active level.
        remaining_mines: Mines still hidden on the active level.
        state: Current game state.
    """

    level_index: int
    level: LevelConfig
    revealed: np.ndarray
    observation: np.ndarray
    total_clicks: int
    exploded_mines: int
    remaining_mines: int
    state: GameState


# ============================================================================
# Level Controller
# ============================================================================

class LevelController:
    """
    Drives a session through an ordered sequence of levels.

    Clicks are accepted only while playing and only on hidden, in-bounds
    cells; anything else is ignored without counting. Finding the last
    mine of a level completes it, and completing the final level submits
    the total click count to the score reporter.
    """

    def __init__(
        self,
        levels: Iterable[LevelConfig] = LEVELS,
        reporter: Optional[ScoreReporter] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the controller and start the first level.

        Args:
            levels: Ordered level definitions, never modified.
            reporter: Receives the final click total of a session.
            rng: Random source for mine placement.
        """
        self.levels: Tuple[LevelConfig, ...] = validate_levels(levels)
        self.reporter = reporter
        self.rng = rng or random.Random()

        self._level_index = 0
        self._total_clicks = 0
        self._exploded_mines = 0
        self._state = GameState.PLAYING
        self._board = Board.generate(self.levels[0], self.rng)
        logger.debug("Session created with %d levels", len(self.levels))

    # ========================================================================
    # Transitions
    # ========================================================================

    def start_level(self, index: int) -> SessionSnapshot:
        """
        (Re)start a level with a fresh board, keeping the click total.

        Args:
            index: Position of the level in the sequence.

        Returns:
            Snapshot of the new level.
        """
        if not 0 <= index < len(self.levels):
            raise IndexError(f"No level at index {index}")

        level = self.levels[index]
        self._level_index = index
        self._board = Board.generate(level, self.rng)
        self._exploded_mines = 0
        self._state = GameState.PLAYING
        logger.info(
            "Level %d started (%dx%d, %d mines)",
            level.id, level.size, level.size, level.mines,
        )
        return self.snapshot()

    def restart(self) -> SessionSnapshot:
        """Start over from the first level with no clicks counted."""
        self._total_clicks = 0
        logger.info("Session restarted")
        return self.start_level(0)

    def advance_level(self) -> SessionSnapshot:
        """
        Move on to the next level after a clear.

        Raises:
            InvalidTransition: If the current level is not complete.
        """
        if self._state is not GameState.LEVEL_COMPLETE:
            raise InvalidTransition(
                f"Cannot advance while {self._state.name.lower()}"
            )
        return self.start_level(self._level_index + 1)

    def click(self, row: int, col: int) -> SessionSnapshot:
        """
        Apply a player click.

        Args:
            row: Row index of the clicked cell.
            col: Column index of the clicked cell.

        Returns:
            Snapshot after the click (unchanged for ignored clicks).
        """
        if not self._accepts_click(row, col):
            return self.snapshot()

        self._total_clicks += 1
        board = self._board
        result = reveal(
            row, col, board.is_mine, board.neighbor_count, board.revealed
        )
        board.revealed = result.revealed

        if result.hit_mine:
            self._exploded_mines += 1
            logger.debug(
                "Mine found at (%d, %d): %d/%d",
                row, col, self._exploded_mines, self.level.mines,
            )
            if self._exploded_mines == self.level.mines:
                self._complete_level()

        return self.snapshot()

    def _accepts_click(self, row: int, col: int) -> bool:
        """Check if a click should be counted and applied."""
        if self._state is GameState.PLAYING:
            if not self._board.in_bounds(row, col):
                return False
            return not self._board.revealed[row, col]
        if self._state in (GameState.LEVEL_COMPLETE, GameState.ALL_COMPLETE):
            return False
        raise AssertionError(f"Unhandled state {self._state}")

    def _complete_level(self) -> None:
        """Switch to the right terminal state after the last mine."""
        if not self.is_last_level:
            self._state = GameState.LEVEL_COMPLETE
            logger.info(
                "Level %d cleared after %d clicks",
                self.level.id, self._total_clicks,
            )
            return

        self._state = GameState.ALL_COMPLETE
        logger.info("All levels cleared in %d clicks", self._total_clicks)
        self._report_score()

    def _report_score(self) -> None:
        """Hand the final total to the reporter; failures never undo the win."""
        if self.reporter is None:
            return
        try:
            self.reporter.submit(self._total_clicks)
        except Exception:
            logger.exception(
                "Score submission of %d clicks failed", self._total_clicks
            )

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def board(self) -> Board:
        """Board of the active level."""
        return self._board

    @property
    def level(self) -> LevelConfig:
        """Active level definition."""
        return self.levels[self._level_index]

    @property
    def level_index(self) -> int:
        return self._level_index

    @property
    def total_clicks(self) -> int:
        return self._total_clicks

    @property
    def exploded_mines(self) -> int:
        return self._exploded_mines

    @property
    def remaining_mines(self) -> int:
        return self.level.mines - self._exploded_mines

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_playing(self) -> bool:
        """Check if clicks are currently accepted."""
        return self._state is GameState.PLAYING

    @property
    def is_last_level(self) -> bool:
        """Check if the active level is the final one."""
        return self._level_index == len(self.levels) - 1

    def observation(self) -> np.ndarray:
        """Visible board of the active level."""
        return self._board.observation()

    def valid_actions(self) -> List[Tuple[int, int]]:
        """Cells a click would currently be accepted on."""
        if not self.is_playing:
            return []
        return self._board.valid_actions()

    def snapshot(self) -> SessionSnapshot:
        """Capture the current session state."""
        return SessionSnapshot(
            level_index=self._level_index,
            level=self.level,
            revealed=self._board.revealed.copy(),
            observation=self._board.observation(),
            total_clicks=self._total_clicks,
            exploded_mines=self._exploded_mines,
            remaining_mines=self.remaining_mines,
            state=self._state,
        )
