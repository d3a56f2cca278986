"""
Game surface interface.

The engine never touches the outside world directly. Every click, flag,
observation and restart goes through a GameSurface implementation.
"""
from abc import ABC, abstractmethod

from .position import Position


# ============================================================================
# Game Surface Interface
# ============================================================================

class GameSurface(ABC):
    """
    Abstract base class for anything that presents a playable grid.

    Implementations raise SurfaceError subclasses on failure; the engine
    lets those propagate and never retries a single call.
    """

    @abstractmethod
    def launch(self, width: int, height: int, mines: int) -> None:
        """
        Make the surface playable.

        Args:
            width: Number of columns.
            height: Number of rows.
            mines: Total mines on the board.

        Raises:
            SurfaceUnavailable: If the surface cannot be reached.
        """

    @abstractmethod
    def observe(self, position: Position) -> str:
        """Return the current render token of the cell at ``position``."""

    @abstractmethod
    def click(self, position: Position) -> None:
        """Issue a primary click on the cell at ``position``."""

    @abstractmethod
    def right_click(self, position: Position) -> None:
        """Issue a secondary click (flag) on the cell at ``position``."""

    @abstractmethod
    def is_won(self) -> bool:
        """Check if the surface shows a won game."""

    @abstractmethod
    def reset(self) -> None:
        """Restart the underlying game."""

    def close(self) -> None:
        """Release any resources held by the surface."""
        pass
