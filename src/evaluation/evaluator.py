"""
Evaluation module for the solver.

Plays batches of games on simulated surfaces and reports how often the
solver wins and how much it had to guess along the way.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from solver.board import Board, GameState
from solver.config import BoardConfig, PlayConfig
from surfaces.simulated_surface import SimulatedSurface

logger = logging.getLogger(__name__)


# ============================================================================
# Evaluation Configuration
# ============================================================================

@dataclass
class EvaluationConfig:
    """Configuration for a batch of simulated games."""

    board_config: BoardConfig = field(default_factory=BoardConfig)
    num_games: int = 100
    seed: Optional[int] = None

    # A game that triggers more mines than this counts as lost
    max_resets: Optional[int] = 100

    # Logging
    log_frequency: int = 10


# ============================================================================
# Evaluation Statistics
# ============================================================================

@dataclass
class GameRecord:
    """Statistics for a single game."""

    won: bool = False
    resets: int = 0
    guesses: int = 0
    flags: int = 0
    steps: int = 0
    seconds: float = 0.0


@dataclass
class EvaluationStats:
    """Accumulated statistics over a batch."""

    records: List[GameRecord] = field(default_factory=list)

    @property
    def games_played(self) -> int:
        return len(self.records)

    @property
    def wins(self) -> int:
        return sum(1 for record in self.records if record.won)

    @property
    def win_rate(self) -> float:
        """Fraction of games eventually won."""
        if not self.records:
            return 0.0
        return self.wins / len(self.records)

    def _mean(self, attribute: str) -> float:
        if not self.records:
            return 0.0
        return float(np.mean([getattr(r, attribute) for r in self.records]))

    @property
    def first_try_rate(self) -> float:
        """Fraction of games won without triggering a single mine."""
        if not self.records:
            return 0.0
        clean = sum(1 for r in self.records if r.won and r.resets == 0)
        return clean / len(self.records)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            "games": self.games_played,
            "win_rate": self.win_rate,
            "first_try_rate": self.first_try_rate,
            "avg_resets": self._mean("resets"),
            "avg_guesses": self._mean("guesses"),
            "avg_flags": self._mean("flags"),
            "avg_steps": self._mean("steps"),
            "avg_seconds": self._mean("seconds"),
        }


# ============================================================================
# Evaluator
# ============================================================================

class Evaluator:
    """
    Run the solver over many simulated games.

    Each game gets its own seed, drawn from the batch seed, for both mine
    placement and guess tie-breaking.
    """

    def __init__(self, config: Optional[EvaluationConfig] = None) -> None:
        """
        Initialize the evaluator.

        Args:
            config: Batch configuration.
        """
        self.config = config or EvaluationConfig()

    def play_game(self, board_config: BoardConfig, seed: int) -> GameRecord:
        """
        Play one game to completion.

        Args:
            board_config: Board to play.
            seed: Seed for this game.

        Returns:
            The game's statistics.
        """
        surface = SimulatedSurface(seed=seed)
        board = Board(
            surface,
            board_config,
            PlayConfig(
                mark_flags=True,
                seed=seed,
                max_resets=self.config.max_resets,
            ),
        )
        board.launch()
        result = board.play()
        return GameRecord(
            won=result.state == GameState.WON,
            resets=result.resets,
            guesses=result.guesses,
            flags=result.flags,
            steps=result.steps,
            seconds=result.elapsed,
        )

    def evaluate(
        self, board_config: Optional[BoardConfig] = None
    ) -> EvaluationStats:
        """
        Play the configured number of games.

        Args:
            board_config: Board to play (defaults to the configured one).

        Returns:
            Accumulated statistics.
        """
        board_config = board_config or self.config.board_config
        rng = np.random.default_rng(self.config.seed)
        seeds = rng.integers(0, 2**32, size=self.config.num_games)

        stats = EvaluationStats()
        start_time = time.time()
        for game, seed in enumerate(seeds, start=1):
            stats.records.append(self.play_game(board_config, int(seed)))
            if game % self.config.log_frequency == 0:
                self._log_progress(stats, start_time)
        return stats

    def _log_progress(self, stats: EvaluationStats, start_time: float) -> None:
        """Log batch progress."""
        elapsed = time.time() - start_time
        games_per_sec = stats.games_played / elapsed if elapsed > 0 else 0
        logger.info(
            "Game %d/%d | Win Rate: %.1f%% | Avg Resets: %.2f | "
            "Speed: %.1f games/s",
            stats.games_played,
            self.config.num_games,
            100 * stats.win_rate,
            stats.to_dict()["avg_resets"],
            games_per_sec,
        )

    def compare(
        self, boards: Dict[str, BoardConfig]
    ) -> Dict[str, Dict[str, Any]]:
        """
        Evaluate several board configurations.

        Args:
            boards: Dictionary of name -> board configuration.

        Returns:
            Dictionary of name -> evaluation metrics.
        """
        results = {}
        for name, board_config in boards.items():
            logger.info("Evaluating %s...", name)
            results[name] = self.evaluate(board_config).to_dict()
        return results
