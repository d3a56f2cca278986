"""
Minesweeper solver module.

Provides the board engine, the cell state machine and deduction rules,
the neighbor graph, and the game surface interface they play through.
"""
from .position import Position
from .cell import Cell, CellState
from .grid import CellGrid
from .board import Board, GameResult, GameState
from .config import BoardConfig, PlayConfig, BEGINNER, INTERMEDIATE, EXPERT, DIFFICULTIES
from .surface import GameSurface
from .errors import (
    MinesweeperError,
    InvariantViolation,
    SurfaceError,
    SurfaceUnavailable,
    ElementNotFound,
    StaleReference,
)

__all__ = [
    "Position",
    "Cell",
    "CellState",
    "CellGrid",
    "Board",
    "GameResult",
    "GameState",
    "BoardConfig",
    "PlayConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "DIFFICULTIES",
    "GameSurface",
    "MinesweeperError",
    "InvariantViolation",
    "SurfaceError",
    "SurfaceUnavailable",
    "ElementNotFound",
    "StaleReference",
]
