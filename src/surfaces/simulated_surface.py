"""
In-memory game surface.

Plays by the same rules as minesweeperonline.com: mines are placed on the
first click so it is always safe, zero cells cascade, and the mine that
ends a game renders differently from the mines revealed after it.
"""
from typing import Iterable, List, Optional, Set, Tuple

import numpy as np

from solver.errors import ElementNotFound, SurfaceUnavailable
from solver.position import Position
from solver.surface import GameSurface
from solver.tokens import (
    BLANK_TOKEN,
    FLAGGED_TOKEN,
    MINE_REVEALED_TOKEN,
    MINE_TRIGGER_TOKEN,
    clue_token,
)


# ============================================================================
# Simulated Surface
# ============================================================================

class SimulatedSurface(GameSurface):
    """
    Minesweeper game held entirely in memory.

    Keeps the ground-truth mine layout, so tests can check every deduction
    against it. Every call is appended to ``calls`` as (method, position).
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        layout: Optional[Iterable[Tuple[int, int]]] = None,
    ) -> None:
        """
        Initialize the surface.

        Args:
            seed: Seed for mine placement.
            layout: Fixed (row, col) mine positions, kept across resets.
                When None, mines are placed at random on the first click.
        """
        self.rng = np.random.default_rng(seed)
        self._fixed_layout: Optional[Set[Position]] = (
            {Position(row, col) for row, col in layout}
            if layout is not None else None
        )
        self.width = 0
        self.height = 0
        self.num_mines = 0
        self.calls: List[Tuple[str, Optional[Position]]] = []
        self._launched = False
        self._mines: Set[Position] = set()
        self._revealed: Set[Position] = set()
        self._flagged: Set[Position] = set()
        self._exploded: Optional[Position] = None
        self._first_click = True

    @classmethod
    def from_layout(
        cls, rows: int, cols: int, mines: Iterable[Tuple[int, int]]
    ) -> "SimulatedSurface":
        """
        Create an already-launched surface with a fixed mine layout.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            mines: (row, col) mine positions.
        """
        surface = cls(layout=mines)
        surface.launch(cols, rows, len(surface._fixed_layout))
        surface.calls.clear()
        return surface

    # ========================================================================
    # Layout (Low-level)
    # ========================================================================

    def _check_launched(self) -> None:
        if not self._launched:
            raise SurfaceUnavailable("Surface has not been launched")

    def _check_position(self, position: Position) -> None:
        self._check_launched()
        if not position.in_range(self.height, self.width):
            raise ElementNotFound(f"No square at {position.coords()}")

    def _place_mines(self, exclude: Position) -> None:
        """Place mines at random, keeping ``exclude`` mine-free."""
        positions = [
            Position(row, col)
            for row in range(self.height)
            for col in range(self.width)
            if Position(row, col) != exclude
        ]
        chosen = self.rng.choice(
            len(positions), size=self.num_mines, replace=False
        )
        self._mines = {positions[index] for index in chosen}

    def adjacent_mines(self, position: Position) -> int:
        """Count mines around ``position``."""
        return sum(
            1 for neighbor in position.surrounding_in_range(
                self.height, self.width
            )
            if neighbor in self._mines
        )

    def is_mine(self, position: Position) -> bool:
        """Ground truth: check if ``position`` holds a mine."""
        return position in self._mines

    @property
    def mines(self) -> Set[Position]:
        """Ground-truth mine positions."""
        return set(self._mines)

    @property
    def is_lost(self) -> bool:
        """Check if a mine has been clicked in the current game."""
        return self._exploded is not None

    # ========================================================================
    # Surface Interface
    # ========================================================================

    def launch(self, width: int, height: int, mines: int) -> None:
        """Set up a fresh game of the given size."""
        if width < 1 or height < 1:
            raise SurfaceUnavailable("Board dimensions must be positive")
        if self._fixed_layout is not None:
            if mines != len(self._fixed_layout):
                raise SurfaceUnavailable(
                    f"Layout has {len(self._fixed_layout)} mines, "
                    f"asked for {mines}"
                )
            if any(not p.in_range(height, width) for p in self._fixed_layout):
                raise SurfaceUnavailable("Layout does not fit the board")
        elif mines > width * height - 1:
            raise SurfaceUnavailable(f"Too many mines (max {width * height - 1})")

        self.width = width
        self.height = height
        self.num_mines = mines
        self._launched = True
        self.calls.append(("launch", None))
        self._new_game()

    def _new_game(self) -> None:
        self._revealed.clear()
        self._flagged.clear()
        self._exploded = None
        if self._fixed_layout is not None:
            self._mines = set(self._fixed_layout)
            self._first_click = False
        else:
            self._mines = set()
            self._first_click = True

    def observe(self, position: Position) -> str:
        """Return the token for the cell at ``position``."""
        self._check_position(position)
        self.calls.append(("observe", position))
        if position == self._exploded:
            return MINE_TRIGGER_TOKEN
        if self._exploded is not None and position in self._mines:
            if position not in self._flagged:
                return MINE_REVEALED_TOKEN
        if position in self._flagged:
            return FLAGGED_TOKEN
        if position in self._revealed:
            return clue_token(self.adjacent_mines(position))
        return BLANK_TOKEN

    def click(self, position: Position) -> None:
        """Reveal the cell at ``position``, cascading from zeros."""
        self._check_position(position)
        self.calls.append(("click", position))
        if self.is_lost or self.is_won():
            return
        if position in self._flagged or position in self._revealed:
            return

        if self._first_click:
            self._first_click = False
            self._place_mines(position)

        if position in self._mines:
            self._exploded = position
            return
        self._reveal_region(position)

    def _reveal_region(self, start: Position) -> None:
        """Reveal ``start`` and every cell reachable through zero clues."""
        stack = [start]
        while stack:
            position = stack.pop()
            if position in self._revealed or position in self._flagged:
                continue
            self._revealed.add(position)
            if self.adjacent_mines(position) == 0:
                stack.extend(
                    neighbor
                    for neighbor in position.surrounding_in_range(
                        self.height, self.width
                    )
                    if neighbor not in self._revealed
                )

    def right_click(self, position: Position) -> None:
        """Toggle a flag on a hidden cell."""
        self._check_position(position)
        self.calls.append(("right_click", position))
        if self.is_lost or position in self._revealed:
            return
        if position in self._flagged:
            self._flagged.discard(position)
        else:
            self._flagged.add(position)

    def is_won(self) -> bool:
        """Check if every safe cell has been revealed."""
        self._check_launched()
        if self.is_lost or self._first_click:
            return False
        safe_cells = self.width * self.height - len(self._mines)
        return len(self._revealed) >= safe_cells

    def reset(self) -> None:
        """Start a new game on the same board size."""
        self._check_launched()
        self.calls.append(("reset", None))
        self._new_game()

    def calls_to(self, method: str) -> List[Optional[Position]]:
        """Positions passed to ``method``, in call order."""
        return [position for name, position in self.calls if name == method]
