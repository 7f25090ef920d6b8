"""
Reveal logic for Minehunt.

Applies a single click to a board's revealed grid, expanding
zero-count regions the way classic minesweeper does.
"""
from dataclasses import dataclass

import numpy as np

from .board import neighbors


@dataclass(frozen=True)
class RevealResult:
    """
    Outcome of revealing one cell.

    Attributes:
        revealed: New revealed grid (the input grid is left untouched).
        hit_mine: Whether the clicked cell held a mine.
        newly_revealed: Number of cells uncovered by this click.
    """

    revealed: np.ndarray
    hit_mine: bool
    newly_revealed: int


def reveal(
    row: int,
    col: int,
    is_mine: np.ndarray,
    neighbor_count: np.ndarray,
    revealed: np.ndarray,
) -> RevealResult:
    """
    Reveal a cell and flood-fill from it if it has no mined neighbours.

    A mined cell is uncovered alone. A safe cell with count 0 uncovers its
    whole 8-connected zero region plus the numbered cells bordering it;
    mines are never uncovered by the fill.

    Args:
        row: Row index of the clicked cell.
        col: Column index of the clicked cell.
        is_mine: Boolean mine grid.
        neighbor_count: Adjacent mine counts.
        revealed: Current revealed grid.

    Returns:
        RevealResult with a fresh revealed grid.
    """
    size = is_mine.shape[0]
    assert 0 <= row < size and 0 <= col < size, "click out of bounds"
    assert not revealed[row, col], "cell already revealed"

    new_revealed = revealed.copy()
    new_revealed[row, col] = True

    if is_mine[row, col]:
        return RevealResult(new_revealed, hit_mine=True, newly_revealed=1)

    uncovered = 1
    if neighbor_count[row, col] == 0:
        uncovered += _flood_fill(
            row, col, is_mine, neighbor_count, new_revealed
        )

    return RevealResult(new_revealed, hit_mine=False, newly_revealed=uncovered)


def _flood_fill(
    row: int,
    col: int,
    is_mine: np.ndarray,
    neighbor_count: np.ndarray,
    revealed: np.ndarray,
) -> int:
    """
    Uncover the zero region around (row, col) in place.

    Cells are marked revealed as they are pushed, so each one enters
    the stack at most once.

    Returns:
        Number of cells uncovered besides the starting one.
    """
    size = is_mine.shape[0]
    stack = [(row, col)]
    uncovered = 0

    while stack:
        current_row, current_col = stack.pop()
        for next_row, next_col in neighbors(current_row, current_col, size):
            if revealed[next_row, next_col] or is_mine[next_row, next_col]:
                continue
            revealed[next_row, next_col] = True
            uncovered += 1
            if neighbor_count[next_row, next_col] == 0:
                stack.append((next_row, next_col))

    return uncovered
