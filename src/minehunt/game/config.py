"""
Level configuration for Minehunt.

Defines the immutable level definition, the default level sequence
and a loader for custom sequences stored as JSON.
"""
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Tuple, Union

from .errors import InvalidLevelConfig


# ============================================================================
# Level Definition
# ============================================================================

@dataclass(frozen=True)
class LevelConfig:
    """
    Configuration for a single Minehunt level.

    Attributes:
        id: Level identifier shown to the player.
        size: Board side length (the board is size x size).
        mines: Number of mines the player has to find.
    """

    id: int
    size: int
    mines: int

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure the level can produce a board with at least one safe cell."""
        if self.size < 1:
            raise InvalidLevelConfig(
                f"Level {self.id}: board size must be positive"
            )
        if self.mines <= 0:
            raise InvalidLevelConfig(
                f"Level {self.id}: level needs at least one mine"
            )
        max_mines = self.cell_count - 1
        if self.mines > max_mines:
            raise InvalidLevelConfig(
                f"Level {self.id}: too many mines (max {max_mines})"
            )

    @property
    def cell_count(self) -> int:
        """Total number of cells on the board."""
        return self.size * self.size

    @property
    def density(self) -> float:
        """Fraction of cells holding a mine."""
        return self.mines / self.cell_count


# Level sequence of the original challenge
LEVELS: Tuple[LevelConfig, ...] = (
    LevelConfig(1, 8, 5),
    LevelConfig(2, 10, 7),
    LevelConfig(3, 12, 8),
)


# ============================================================================
# Sequence Helpers
# ============================================================================

def validate_levels(levels: Iterable[LevelConfig]) -> Tuple[LevelConfig, ...]:
    """
    Freeze and check a level sequence.

    Args:
        levels: Ordered level definitions.

    Returns:
        The sequence as a tuple.

    Raises:
        InvalidLevelConfig: If the sequence is empty or holds
            something other than LevelConfig.
    """
    sequence = tuple(levels)
    if not sequence:
        raise InvalidLevelConfig("Level sequence must not be empty")
    for level in sequence:
        if not isinstance(level, LevelConfig):
            raise InvalidLevelConfig(f"Not a level definition: {level!r}")
    return sequence


def load_levels(path: Union[str, Path]) -> Tuple[LevelConfig, ...]:
    """
    Load a level sequence from a JSON file.

    The file holds a list of objects with ``id``, ``size`` and
    ``mines`` keys, in play order.

    Args:
        path: Location of the JSON file.

    Returns:
        Validated level sequence.

    Raises:
        InvalidLevelConfig: If the file content is not a valid sequence.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise InvalidLevelConfig("Level file must contain a JSON list")

    return validate_levels(_level_from_dict(entry) for entry in data)


def _level_from_dict(entry: Any) -> LevelConfig:
    """Build a level from one decoded JSON object."""
    try:
        level_id = int(entry["id"])
        size = int(entry["size"])
        mines = int(entry["mines"])
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidLevelConfig(f"Malformed level entry: {entry!r}") from exc
    return LevelConfig(level_id, size, mines)
