"""
Logic-based agent for Minehunt.

Reads the revealed counts to find cells that must hold a mine and
clicks those first, falling back to a guess that avoids cells known
to be safe.
"""
from dataclasses import dataclass
from typing import Optional, Set, Tuple

import numpy as np

from .base_agent import BaseAgent
from ..game.board import HIDDEN_OBSERVATION, MINE_OBSERVATION, neighbors


Position = Tuple[int, int]


@dataclass
class Deduction:
    """Cells whose content follows from the visible counts."""

    mines: Set[Position]
    safe: Set[Position]


# ============================================================================
# Logic Agent
# ============================================================================

class LogicAgent(BaseAgent):
    """
    Agent that deduces mines from single-count constraints.

    Strategy:
        1. For every revealed count, compare it with the mines already
           found (or deduced) around it.
        2. If the unresolved neighbours exactly cover the missing mines,
           they are all mines. If no mine is missing, they are all safe.
        3. Repeat until nothing changes, then click a deduced mine.
        4. Otherwise guess among hidden cells not known to be safe.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        """
        Initialize the logic agent.

        Args:
            seed: Random seed used for guesses.
        """
        self.rng = np.random.default_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select a known mine if there is one, otherwise guess.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Action index to click.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = np.where(valid_actions)[0]

        if len(valid_indices) == 0:
            return 0

        width = observation.shape[1]
        deduction = self.deduce(observation)

        for row, col in sorted(deduction.mines):
            action = self.position_to_action(row, col, width)
            if valid_actions[action]:
                return action

        candidates = [
            index for index in valid_indices
            if self.action_to_position(index, width) not in deduction.safe
        ]
        if not candidates:
            candidates = list(valid_indices)
        return int(self.rng.choice(candidates))

    def deduce(self, observation: np.ndarray) -> Deduction:
        """
        Find hidden cells that must be mines or must be safe.

        Args:
            observation: 2D array of cell states.

        Returns:
            Deduction with hidden mine and safe positions.
        """
        size = observation.shape[0]
        mines: Set[Position] = set()
        safe: Set[Position] = set()
        counts = [
            (int(r), int(c))
            for r, c in np.argwhere(
                (observation >= 0) & (observation != MINE_OBSERVATION)
            )
        ]

        changed = True
        while changed:
            changed = False
            for row, col in counts:
                known_mines = 0
                unresolved = []
                for pos in neighbors(row, col, size):
                    value = observation[pos]
                    if value == MINE_OBSERVATION or pos in mines:
                        known_mines += 1
                    elif value == HIDDEN_OBSERVATION and pos not in safe:
                        unresolved.append(pos)

                if not unresolved:
                    continue

                missing = int(observation[row, col]) - known_mines
                if missing == 0:
                    safe.update(unresolved)
                    changed = True
                elif missing == len(unresolved):
                    mines.update(unresolved)
                    changed = True

        return Deduction(mines=mines, safe=safe)
