"""
Grid coordinates with boundary-aware neighbor enumeration.
"""
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True, order=True)
class Position:
    """
    Immutable 0-indexed (row, col) coordinate on the board.

    Attributes:
        row: Row index.
        col: Column index.
    """

    row: int
    col: int

    def __str__(self) -> str:
        return f"Position(row = {self.row}, col = {self.col})"

    def coords(self) -> str:
        """Render as 1-based (col, row), the way the game labels squares."""
        return f"({self.col + 1}, {self.row + 1})"

    def in_range(self, rows: int, cols: int) -> bool:
        """Check if position lies on a rows x cols board."""
        return 0 <= self.row < rows and 0 <= self.col < cols

    def surrounding(self) -> List["Position"]:
        """Return the 8 positions around this one, bounds ignored."""
        positions = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                positions.append(
                    Position(self.row + delta_row, self.col + delta_col)
                )
        return positions

    def surrounding_in_range(self, rows: int, cols: int) -> List["Position"]:
        """
        Return the surrounding positions that lie on the board.

        Args:
            rows: Number of rows on the board.
            cols: Number of columns on the board.

        Returns:
            3 positions for a corner, 5 for an edge, 8 for an interior point.
        """
        return [
            position for position in self.surrounding()
            if position.in_range(rows, cols)
        ]
