"""
Cell module for the Minesweeper solver.

A cell is one square of the board: its state machine (blank, revealed
number, flagged mine) and the deduction rules it can answer from the
current state of its neighbors.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, Iterable, Optional, Set, Tuple

from .errors import InvariantViolation
from .position import Position
from .surface import GameSurface
from .tokens import BLANK_TOKEN, decode_clue, is_mine_trigger


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible states of a cell."""

    BLANK = auto()
    NUMBER = auto()
    MINE = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(eq=False)
class Cell:
    """
    Represents a single square of the Minesweeper grid.

    Neighbors are shared references to the other cells of the same grid.
    They take no part in equality or hashing, so a cell can sit in sets
    while its neighbors point back at it.

    Attributes:
        position: Location on the board.
        state: Current state (blank, number, or mine).
        attribute: Last render token observed for this cell.
    """

    position: Position
    state: CellState = CellState.BLANK
    attribute: str = BLANK_TOKEN
    _number: Optional[int] = field(default=None, repr=False)
    _neighbors: Optional[FrozenSet["Cell"]] = field(default=None, repr=False)

    def __hash__(self) -> int:
        return hash(self.position)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return (
            self.position == other.position
            and self.state == other.state
            and self._number == other._number
            and self.attribute == other.attribute
        )

    # ========================================================================
    # Neighbor Wiring
    # ========================================================================

    def assign_neighbors(self, neighbors: Iterable["Cell"]) -> None:
        """
        Wire this cell to its neighbors.

        Args:
            neighbors: The cells surrounding this one.

        Raises:
            InvariantViolation: If neighbors were already assigned.
        """
        if self._neighbors is not None:
            raise InvariantViolation(
                f"Neighbors already assigned for {self.position}"
            )
        self._neighbors = frozenset(neighbors)

    @property
    def neighbors(self) -> FrozenSet["Cell"]:
        """The cells surrounding this one (empty until wired)."""
        if self._neighbors is None:
            return frozenset()
        return self._neighbors

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def is_blank(self) -> bool:
        """Check if cell is unresolved."""
        return self.state == CellState.BLANK

    @property
    def is_number(self) -> bool:
        """Check if cell shows a revealed clue."""
        return self.state == CellState.NUMBER

    @property
    def is_mine(self) -> bool:
        """Check if cell is flagged or triggered as a mine."""
        return self.state == CellState.MINE

    @property
    def number(self) -> int:
        """
        The revealed clue.

        Raises:
            InvariantViolation: If the cell has not been revealed.
        """
        if self.state != CellState.NUMBER or self._number is None:
            raise InvariantViolation(f"{self.position} is not a number")
        return self._number

    # ========================================================================
    # State Transitions
    # ========================================================================

    def flag(self, surface: GameSurface, mark_on_surface: bool = True) -> None:
        """
        Mark this cell as a mine.

        Args:
            surface: Surface to right-click on.
            mark_on_surface: Whether to place the flag on the surface too.

        Raises:
            InvariantViolation: If the cell is not blank.
        """
        if self.state != CellState.BLANK:
            raise InvariantViolation(f"Cannot flag non-blank {self.position}")
        self.state = CellState.MINE
        if mark_on_surface:
            surface.right_click(self.position)

    def click(self, surface: GameSurface) -> None:
        """Click this cell on the surface. State changes only via observe()."""
        surface.click(self.position)

    def reset(self) -> None:
        """Return to blank, keeping neighbors."""
        self.state = CellState.BLANK
        self.attribute = BLANK_TOKEN
        self._number = None

    def observe(self, surface: GameSurface) -> Tuple[bool, bool]:
        """
        Read this cell's token from the surface and update state.

        Args:
            surface: Surface to read from.

        Returns:
            Tuple of (updated, boom). ``updated`` is True when the cell became
            a number, ``boom`` when it turned out to be the mine just clicked.

        Raises:
            InvariantViolation: If the cell is not blank.
        """
        if self.state != CellState.BLANK:
            raise InvariantViolation(f"Cannot observe non-blank {self.position}")

        token = surface.observe(self.position)
        if token == self.attribute:
            return False, False

        self.attribute = token
        if is_mine_trigger(token):
            self.state = CellState.MINE
            return False, True

        clue = decode_clue(token)
        if clue is not None:
            self.state = CellState.NUMBER
            self._number = clue
            return True, False

        return False, False

    # ========================================================================
    # Neighbor Queries
    # ========================================================================

    @property
    def bomb_neighbors(self) -> FrozenSet["Cell"]:
        """Neighbors that are mines."""
        return frozenset(cell for cell in self.neighbors if cell.is_mine)

    @property
    def blank_neighbors(self) -> FrozenSet["Cell"]:
        """Neighbors still unresolved."""
        return frozenset(cell for cell in self.neighbors if cell.is_blank)

    @property
    def non_zero_number_neighbors(self) -> FrozenSet["Cell"]:
        """Neighbors showing a positive clue."""
        return frozenset(
            cell for cell in self.neighbors
            if cell.is_number and cell.number > 0
        )

    @property
    def bombs_remaining(self) -> int:
        """Mines still hidden among the blank neighbors."""
        return self.number - len(self.bomb_neighbors)

    @property
    def should_join_workset(self) -> bool:
        """Check if this cell's clue can still drive deductions."""
        return (
            self.is_number
            and self.number > 0
            and bool(self.blank_neighbors)
        )

    # ========================================================================
    # Deduction Rules
    # ========================================================================

    def neighbors_to_flag(self) -> FrozenSet["Cell"]:
        """
        Blank neighbors that are certainly mines.

        When the blank count matches the mines still missing, every blank
        neighbor is a mine. Otherwise fall back to the subset rule.
        """
        blank = self.blank_neighbors
        if len(blank) == self.bombs_remaining:
            return blank
        return self._more_to_flag(blank)

    def _more_to_flag(self, blank: FrozenSet["Cell"]) -> FrozenSet["Cell"]:
        """
        Subset flag rule.

        For a numbered neighbor ``m``, the blanks that only ``m`` can see
        must carry the mines ``m`` needs beyond ours. If there are exactly
        that many of them, all of them are mines.
        """
        remaining = self.bombs_remaining
        to_flag: Set[Cell] = set()
        for other in self.non_zero_number_neighbors:
            diff = other.blank_neighbors - blank
            if len(diff) == other.bombs_remaining - remaining:
                to_flag.update(diff)
        return frozenset(to_flag)

    def neighbors_to_reveal(self) -> Tuple[bool, FrozenSet["Cell"]]:
        """
        Blank neighbors that are certainly safe.

        Returns:
            Tuple of (exhausted, cells). ``exhausted`` is True once every
            mine around this cell is flagged; the cell then has nothing more
            to give and ``cells`` is all of its blank neighbors.
        """
        if self.number == len(self.bomb_neighbors):
            return True, self.blank_neighbors
        return False, self._more_to_reveal()

    def _more_to_reveal(self) -> FrozenSet["Cell"]:
        """
        Subset reveal rule.

        If our blanks are a subset of a numbered neighbor's blanks and both
        still miss the same number of mines, that neighbor's extra blanks
        are safe.
        """
        blank = self.blank_neighbors
        remaining = self.bombs_remaining
        to_reveal: Set[Cell] = set()
        for other in self.non_zero_number_neighbors:
            other_blank = other.blank_neighbors
            if blank <= other_blank and remaining == other.bombs_remaining:
                to_reveal.update(other_blank - blank)
        return frozenset(to_reveal)

    # ========================================================================
    # Rendering
    # ========================================================================

    def to_observation(self) -> int:
        """
        Convert cell to an observation value.

        Returns:
            -1: Blank cell
            -2: Mine
            0-8: Revealed clue
        """
        if self.state == CellState.BLANK:
            return -1
        if self.state == CellState.MINE:
            return -2
        return self.number
