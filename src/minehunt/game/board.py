"""
Board module for Minehunt.

Implements mine placement, neighbour counting and the board
container holding the three co-indexed grids of a level.
"""
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .config import LevelConfig


# Observation value of a revealed mine
MINE_OBSERVATION = 9
HIDDEN_OBSERVATION = -1


# ============================================================================
# Placement
# ============================================================================

def generate_mines(
    size: int,
    mine_count: int,
    rng: Optional[random.Random] = None,
) -> np.ndarray:
    """
    Choose distinct mined cells uniformly at random.

    Args:
        size: Board side length.
        mine_count: Number of mines to place.
        rng: Optional random source for reproducible boards.

    Returns:
        Boolean array of shape (size, size), True where a mine sits.
    """
    assert 0 < mine_count < size * size, "mine count out of range"
    rng = rng or random.Random()

    is_mine = np.zeros((size, size), dtype=bool)
    for index in rng.sample(range(size * size), mine_count):
        is_mine[index // size, index % size] = True
    return is_mine


# ============================================================================
# Neighbor Utilities
# ============================================================================

def neighbors(row: int, col: int, size: int) -> List[Tuple[int, int]]:
    """
    Get in-bounds 8-neighbours of a cell.

    Args:
        row: Row index of center cell.
        col: Column index of center cell.
        size: Board side length.

    Returns:
        List of (row, col) tuples, edge cells have fewer entries.
    """
    result = []
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            new_row = row + delta_row
            new_col = col + delta_col
            if 0 <= new_row < size and 0 <= new_col < size:
                result.append((new_row, new_col))
    return result


def count_neighbors(is_mine: np.ndarray) -> np.ndarray:
    """
    Count mined neighbours for every cell.

    The grid is zero-padded by one cell and the eight shifted views are
    summed, so edge cells only see their in-bounds neighbours.

    Args:
        is_mine: Boolean mine grid.

    Returns:
        int8 array of the same shape; mined cells hold 0.
    """
    height, width = is_mine.shape
    padded = np.pad(is_mine.astype(np.int8), 1)
    counts = np.zeros((height, width), dtype=np.int8)
    for delta_row in (0, 1, 2):
        for delta_col in (0, 1, 2):
            if delta_row == 1 and delta_col == 1:
                continue
            counts += padded[
                delta_row:delta_row + height,
                delta_col:delta_col + width,
            ]
    counts[is_mine] = 0
    return counts


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Grids for one level.

    Attributes:
        level: Level this board was generated for.
        is_mine: True where a mine sits.
        neighbor_count: Mined neighbour count (0-8), unused for mines.
        revealed: True where the player uncovered the cell.
    """

    level: LevelConfig
    is_mine: np.ndarray = field(repr=False)
    neighbor_count: np.ndarray = field(repr=False)
    revealed: np.ndarray = field(repr=False)

    @classmethod
    def generate(
        cls, level: LevelConfig, rng: Optional[random.Random] = None
    ) -> "Board":
        """Create a fresh, fully hidden board for a level."""
        is_mine = generate_mines(level.size, level.mines, rng)
        return cls.from_mines(level, is_mine)

    @classmethod
    def from_mines(cls, level: LevelConfig, is_mine: np.ndarray) -> "Board":
        """
        Create a hidden board from a known mine layout.

        Args:
            level: Level the layout belongs to.
            is_mine: Boolean grid matching the level size and mine count.

        Returns:
            Board with neighbour counts computed.
        """
        is_mine = np.asarray(is_mine, dtype=bool)
        if is_mine.shape != (level.size, level.size):
            raise ValueError(
                f"Mine grid shape {is_mine.shape} does not match level size"
            )
        if int(is_mine.sum()) != level.mines:
            raise ValueError(
                f"Mine grid holds {int(is_mine.sum())} mines, "
                f"level expects {level.mines}"
            )
        return cls(
            level=level,
            is_mine=is_mine,
            neighbor_count=count_neighbors(is_mine),
            revealed=np.zeros_like(is_mine, dtype=bool),
        )

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def size(self) -> int:
        """Board side length."""
        return self.level.size

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.size and 0 <= col < self.size

    def mine_positions(self) -> List[Tuple[int, int]]:
        """Positions of every mine, in row-major order."""
        return [(int(r), int(c)) for r, c in np.argwhere(self.is_mine)]

    def valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can still be clicked.

        Returns:
            List of hidden (row, col) positions.
        """
        return [(int(r), int(c)) for r, c in np.argwhere(~self.revealed)]

    def observation(self) -> np.ndarray:
        """
        Get the visible board as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                0-8 = revealed safe cell with adjacent mine count
                9 = revealed mine
        """
        obs = np.full(self.is_mine.shape, HIDDEN_OBSERVATION, dtype=np.int8)
        safe = self.revealed & ~self.is_mine
        obs[safe] = self.neighbor_count[safe]
        obs[self.revealed & self.is_mine] = MINE_OBSERVATION
        return obs

    def render(self) -> str:
        """Render the visible board as plain text."""
        lines = []
        for obs_row in self.observation():
            cells = []
            for val in obs_row:
                if val == HIDDEN_OBSERVATION:
                    cells.append(".")
                elif val == MINE_OBSERVATION:
                    cells.append("*")
                elif val == 0:
                    cells.append(" ")
                else:
                    cells.append(str(val))
            lines.append(" ".join(cells))
        return "\n".join(lines)
