"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from solver import Board, BoardConfig, CellGrid, GameSurface, PlayConfig, Position
from solver.tokens import BLANK_TOKEN, MINE_TRIGGER_TOKEN, clue_token
from surfaces import SimulatedSurface


# ============================================================================
# Scripted Surface
# ============================================================================

class ScriptedSurface(GameSurface):
    """
    Surface whose tokens are set directly by the test.

    Clicking a position listed in ``mines`` renders it as the mine trigger.
    """

    def __init__(self, mines: Iterable[Tuple[int, int]] = ()) -> None:
        self.tokens: Dict[Position, str] = {}
        self.mines = {Position(row, col) for row, col in mines}
        self.calls: List[Tuple[str, Optional[Position]]] = []
        self.won = False

    def set_clue(self, row: int, col: int, digit: int) -> None:
        self.tokens[Position(row, col)] = clue_token(digit)

    def launch(self, width: int, height: int, mines: int) -> None:
        self.calls.append(("launch", None))

    def observe(self, position: Position) -> str:
        self.calls.append(("observe", position))
        return self.tokens.get(position, BLANK_TOKEN)

    def click(self, position: Position) -> None:
        self.calls.append(("click", position))
        if position in self.mines:
            self.tokens[position] = MINE_TRIGGER_TOKEN

    def right_click(self, position: Position) -> None:
        self.calls.append(("right_click", position))

    def is_won(self) -> bool:
        return self.won

    def reset(self) -> None:
        self.calls.append(("reset", None))
        self.tokens.clear()

    def calls_to(self, method: str) -> List[Optional[Position]]:
        return [position for name, position in self.calls if name == method]


# ============================================================================
# Surface Fixtures
# ============================================================================

@pytest.fixture
def scripted_surface() -> ScriptedSurface:
    """Create a surface with every cell blank."""
    return ScriptedSurface()


@pytest.fixture
def corner_mine_surface() -> SimulatedSurface:
    """Create a 3x3 simulated game with a single mine at (0, 0)."""
    return SimulatedSurface.from_layout(3, 3, [(0, 0)])


@pytest.fixture
def pattern_surface() -> SimulatedSurface:
    """
    Create a 2x4 simulated game with mines at (0, 1) and (0, 3).

    Revealing the bottom row gives clues 1, 1, 2, 1, enough for the
    subset rules to finish the board without guessing.
    """
    return SimulatedSurface.from_layout(2, 4, [(0, 1), (0, 3)])


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def corner_mine_board(corner_mine_surface: SimulatedSurface) -> Board:
    """Create a board over the 3x3 single-mine game."""
    return Board(
        corner_mine_surface, BoardConfig(3, 3, 1), PlayConfig(seed=0)
    )


@pytest.fixture
def pattern_board(pattern_surface: SimulatedSurface) -> Board:
    """Create a board over the 2x4 subset-pattern game."""
    return Board(pattern_surface, BoardConfig(4, 2, 2), PlayConfig(seed=0))


@pytest.fixture
def scripted_board(scripted_surface: ScriptedSurface) -> Board:
    """Create a 5x5 board with 10 mines over a scripted surface."""
    return Board(scripted_surface, BoardConfig(5, 5, 10), PlayConfig(seed=0))


# ============================================================================
# Grid Fixtures
# ============================================================================

@pytest.fixture
def small_grid() -> CellGrid:
    """Create a 3x3 grid."""
    return CellGrid(3, 3)


@pytest.fixture
def wide_grid() -> CellGrid:
    """Create a 2x4 grid."""
    return CellGrid(2, 4)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
