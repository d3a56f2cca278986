"""
Configuration for boards and play runs.
"""
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Size and mine count of the game a Board plays.

    The Board sizes its grid from it and passes it to
    ``GameSurface.launch`` as (width, height, mines). ``num_mines`` is
    also the total the guess heuristic spreads over unclued cells.

    Attributes:
        width: Columns on the surface.
        height: Rows on the surface.
        num_mines: Mines hidden on the surface, at least one cell left safe.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.width * self.height


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)

DIFFICULTIES = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Play Configuration
# ============================================================================

@dataclass
class PlayConfig:
    """
    Options for a single play run.

    Attributes:
        mark_flags: Right-click deduced mines on the surface as well.
        seed: Seed for guess tie-breaking (None for a fresh seed).
        max_resets: Give up after this many mine triggers (None plays on).
    """

    mark_flags: bool = True
    seed: Optional[int] = None
    max_resets: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_resets is not None and self.max_resets < 0:
            raise ValueError("max_resets cannot be negative")
