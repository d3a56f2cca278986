"""
Board module for the Minesweeper solver.

Owns the cell grid and the four classification sets, and runs the play
loop: flag what is certain, reveal what is certain, otherwise guess the
least risky blank cell. Every reveal is followed by a flood fill that reads
the surface until the board settles or a mine goes off.
"""
import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import FrozenSet, Iterable, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell
from .config import BoardConfig, PlayConfig
from .grid import CellGrid
from .surface import GameSurface
from .tokens import (
    LOG_FLAG,
    LOG_GAME_COMPLETE,
    LOG_GAME_RESET,
    LOG_REVEAL,
    LOG_REVEAL_RANDOM,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of a play run."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass
class GameResult:
    """
    Outcome of a play run.

    Attributes:
        state: Final state (WON, or LOST when the reset cap was hit).
        resets: Mines triggered along the way.
        guesses: Guess-phase clicks.
        flags: Cells flagged by deduction.
        reveals: Reveal phases run.
        steps: Loop iterations.
        elapsed: Wall-clock seconds.
    """

    state: GameState = GameState.PLAYING
    resets: int = 0
    guesses: int = 0
    flags: int = 0
    reveals: int = 0
    steps: int = 0
    elapsed: float = 0.0

    @property
    def won(self) -> bool:
        """Check if the run ended in a win."""
        return self.state == GameState.WON


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Board engine driving a game surface.

    Every cell sits in exactly one of ``blank``, ``bombs`` or ``numbers``;
    ``workset`` is the part of ``numbers`` whose clues may still yield a
    deduction. Only the Board moves cells between these sets.
    """

    def __init__(
        self,
        surface: GameSurface,
        config: Optional[BoardConfig] = None,
        play_config: Optional[PlayConfig] = None,
    ) -> None:
        """
        Initialize the board.

        Args:
            surface: Surface the board plays on.
            config: Board dimensions and mine count.
            play_config: Flagging, seeding and reset cap options.
        """
        start_time = time.perf_counter()

        self.surface = surface
        self.config = config or BoardConfig()
        self.play_config = play_config or PlayConfig()
        self.rows = self.config.height
        self.cols = self.config.width
        self.mines = self.config.num_mines
        self.mark_flags = self.play_config.mark_flags
        self.rng = np.random.default_rng(self.play_config.seed)

        self.grid = CellGrid(self.rows, self.cols)
        self._blank: Set[Cell] = set()
        self._bombs: Set[Cell] = set()
        self._numbers: Set[Cell] = set()
        self._workset: Set[Cell] = set()
        self._rebuild_sets()

        self.result = GameResult()

        logger.debug(
            "%.3f seconds to initialize a board with %d cells",
            time.perf_counter() - start_time,
            len(self.grid),
        )

    # ========================================================================
    # Classification Sets (Low-level)
    # ========================================================================

    def _rebuild_sets(self) -> None:
        """Clear every set and put all cells back into blank."""
        self._blank.clear()
        self._bombs.clear()
        self._numbers.clear()
        self._workset.clear()
        self._blank.update(self.grid)

    def _mark_flagged(self, cell: Cell) -> None:
        """Move a cell from blank to bombs."""
        self._blank.discard(cell)
        self._bombs.add(cell)

    def _mark_revealed(self, cell: Cell) -> None:
        """Move a cell from blank to numbers."""
        self._blank.discard(cell)
        self._numbers.add(cell)

    @property
    def blank(self) -> FrozenSet[Cell]:
        """Unresolved cells."""
        return frozenset(self._blank)

    @property
    def bombs(self) -> FrozenSet[Cell]:
        """Cells flagged as mines."""
        return frozenset(self._bombs)

    @property
    def numbers(self) -> FrozenSet[Cell]:
        """Revealed numbered cells."""
        return frozenset(self._numbers)

    @property
    def workset(self) -> FrozenSet[Cell]:
        """Numbered cells whose clue may still yield a deduction."""
        return frozenset(self._workset)

    def get_cell(self, row: int, col: int) -> Cell:
        """Get the cell at (row, col)."""
        return self.grid[row, col]

    # ========================================================================
    # Play Loop (High-level)
    # ========================================================================

    def launch(self) -> None:
        """Make the surface playable for this board's dimensions."""
        start_time = time.perf_counter()
        self.surface.launch(self.cols, self.rows, self.mines)
        logger.debug(
            "%.3f seconds to launch the surface",
            time.perf_counter() - start_time,
        )

    @property
    def game_state(self) -> GameState:
        """Current state of the run."""
        if not self._blank:
            return GameState.WON
        if self._reset_cap_exceeded():
            return GameState.LOST
        return GameState.PLAYING

    @property
    def is_playing(self) -> bool:
        """Check if the run is still going."""
        return self.game_state == GameState.PLAYING

    def _reset_cap_exceeded(self) -> bool:
        cap = self.play_config.max_resets
        return cap is not None and self.result.resets > cap

    def play(self) -> GameResult:
        """
        Play until every cell is resolved.

        Mines triggered along the way reset the board and play carries on,
        unless the configured reset cap is exceeded.

        Returns:
            Counters and final state of the run.
        """
        start_time = time.perf_counter()
        while self.is_playing:
            self.step()
        self.result.state = self.game_state
        self.result.elapsed += time.perf_counter() - start_time

        if self.result.won:
            logger.info(LOG_GAME_COMPLETE)
        else:
            logger.info("Giving up after %d resets", self.result.resets)
        return self.result

    def step(self) -> Optional[str]:
        """
        Run one iteration of the play loop.

        Returns:
            The phase taken ("flag", "reveal" or "guess"), or None if there
            is nothing left to do.
        """
        if not self.is_playing:
            return None
        self.result.steps += 1

        to_flag = self.get_cells_to_flag()
        if to_flag:
            logger.info(LOG_FLAG)
            self.flag_all(to_flag)
            return "flag"

        to_reveal = self.get_cells_to_reveal()
        if to_reveal:
            logger.info(LOG_REVEAL)
            self.result.reveals += 1
            self.reveal_all(to_reveal)
            return "reveal"

        # Mines walled in by other mines touch no clue and are never deduced
        if self.surface.is_won():
            logger.info(LOG_FLAG)
            self.claim_remaining()
            return "flag"

        logger.info(LOG_REVEAL_RANDOM)
        self.reveal_random()
        return "guess"

    # ========================================================================
    # Deduction Phases (Mid-level)
    # ========================================================================

    def get_cells_to_flag(self) -> Set[Cell]:
        """Union of certain mines across the workset."""
        to_flag: Set[Cell] = set()
        for cell in self._workset:
            to_flag.update(cell.neighbors_to_flag())
        return to_flag

    def get_cells_to_reveal(self) -> Set[Cell]:
        """
        Union of certain safe cells across the workset.

        Cells that report themselves exhausted are dropped from the workset
        in the same pass, whether or not they produced anything.
        """
        to_reveal: Set[Cell] = set()
        exhausted: Set[Cell] = set()
        for cell in self._workset:
            done, neighbors = cell.neighbors_to_reveal()
            if done:
                exhausted.add(cell)
            to_reveal.update(neighbors)
        self._workset -= exhausted
        return to_reveal

    def flag_all(self, to_flag: Iterable[Cell]) -> None:
        """Flag each cell and move it to bombs."""
        for cell in self._sorted(to_flag):
            cell.flag(self.surface, self.mark_flags)
            self._mark_flagged(cell)
            self.result.flags += 1
            logger.debug("Flagged %s", cell.position.coords())

    def claim_remaining(self) -> None:
        """
        Move every blank cell to bombs once the surface reports a win.

        Nothing is clicked: a won surface has already marked its mines.
        """
        for cell in self._sorted(self._blank):
            cell.flag(self.surface, mark_on_surface=False)
            self._mark_flagged(cell)
            self.result.flags += 1
        logger.info(LOG_GAME_COMPLETE)

    def reveal_all(self, to_reveal: Iterable[Cell]) -> None:
        """
        Click every cell in ``to_reveal`` and propagate from them.

        When the request covers every remaining blank cell the game is over
        once they are clicked. Each is read once for its clue and marked
        revealed without propagating further.
        """
        cells = self._sorted(to_reveal)
        if set(cells) == self._blank:
            for cell in cells:
                cell.click(self.surface)
            for cell in cells:
                _, boom = cell.observe(self.surface)
                if boom:
                    logger.info("BOOM at %s", cell.position.coords())
                    self.reset_game()
                    return
                self._mark_revealed(cell)
            logger.info(LOG_GAME_COMPLETE)
            return

        for cell in cells:
            cell.click(self.surface)
        self.update_from(cells)

    def update_from(self, cells: Iterable[Cell]) -> None:
        """
        Flood-fill from ``cells`` until the board is stable.

        Each cell is observed once. A cell that turns into a number moves
        to ``numbers``, may join the workset, and queues its blank
        neighbors, so a zero clue clears its whole region. A mine resets
        the game and stops the fill.
        """
        start_time = time.perf_counter()
        frontier: Set[Cell] = set(cells)
        visited: Set[Cell] = set()
        counter = 0

        while frontier:
            popped = frontier.pop()
            if popped in visited:
                continue
            visited.add(popped)

            updated, boom = popped.observe(self.surface)
            if boom:
                logger.info("BOOM at %s", popped.position.coords())
                self.reset_game()
                return
            if updated:
                frontier.update(popped.blank_neighbors - visited)
                self._mark_revealed(popped)
                if popped.should_join_workset:
                    self._workset.add(popped)
                counter += 1

        if counter:
            logger.debug(
                "%.3f seconds to update %d cells",
                time.perf_counter() - start_time,
                counter,
            )

    # ========================================================================
    # Guessing
    # ========================================================================

    def choose_guess(self) -> Tuple[Cell, float]:
        """
        Pick the blank cell least likely to hold a mine.

        Cells with no clue around them share the leftover mines evenly.
        Each workset cell offers its blank neighbors at
        ``bombs_remaining / len(blank_neighbors)``. The lowest ratio wins;
        equal ratios pool their cells and one is drawn at random.

        Returns:
            Tuple of (cell, estimated mine probability).
        """
        no_numbers = [
            cell for cell in self._blank
            if not cell.non_zero_number_neighbors
        ]
        if no_numbers:
            pool: Set[Cell] = set(no_numbers)
            lowest_prob = min(
                1.0, (self.mines - len(self._bombs)) / len(no_numbers)
            )
        else:
            pool = set(self._blank)
            lowest_prob = 1.0

        for cell in self._workset:
            blank_neighbors = cell.blank_neighbors
            if not blank_neighbors:
                continue
            prob = cell.bombs_remaining / len(blank_neighbors)
            if prob < lowest_prob:
                lowest_prob = prob
                pool = set(blank_neighbors)
            elif prob == lowest_prob:
                pool.update(blank_neighbors)

        candidates = self._sorted(pool)
        choice = candidates[int(self.rng.integers(len(candidates)))]
        return choice, lowest_prob

    def reveal_random(self) -> None:
        """Click the best guess and propagate from it."""
        cell, prob = self.choose_guess()
        logger.debug(
            "Guessing %s with mine probability %.3f",
            cell.position.coords(),
            prob,
        )
        self.result.guesses += 1
        cell.click(self.surface)
        self.update_from([cell])

    # ========================================================================
    # Reset
    # ========================================================================

    def reset_game(self) -> None:
        """Restart the surface and forget everything learned so far."""
        logger.info(LOG_GAME_RESET)
        self.result.resets += 1
        self.surface.reset()
        for cell in self.grid:
            cell.reset()
        self._rebuild_sets()

    # ========================================================================
    # State Accessors
    # ========================================================================

    @staticmethod
    def _sorted(cells: Iterable[Cell]) -> List[Cell]:
        """Order cells row-major so seeded runs are reproducible."""
        return sorted(cells, key=lambda cell: cell.position)

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D array where -1 = blank, -2 = flagged, 0-8 = revealed clue.
        """
        obs = np.full((self.rows, self.cols), -1, dtype=np.int8)
        for cell in self.grid:
            obs[cell.position.row, cell.position.col] = cell.to_observation()
        return obs

    def render(self) -> str:
        """Render the board as ASCII text."""
        lines = []
        for cells in self.grid.row_cells():
            row_str = ""
            for cell in cells:
                val = cell.to_observation()
                if val == -1:
                    row_str += "."
                elif val == -2:
                    row_str += "F"
                elif val == 0:
                    row_str += " "
                else:
                    row_str += str(val)
                row_str += " "
            lines.append(row_str)
        return "\n".join(lines)

    def summary(self) -> str:
        """One-line description of dimensions and set sizes."""
        return (
            f"Board(rows={self.rows}, cols={self.cols}, mines={self.mines}, "
            f"blank={len(self._blank)}, bombs={len(self._bombs)}, "
            f"numbers={len(self._numbers)}, workset={len(self._workset)})"
        )

    def __str__(self) -> str:
        return f"{self.summary()}\n{self.render()}"
