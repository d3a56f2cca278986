"""
Evaluation module for the solver.

Plays batches of simulated games and aggregates the results.
"""
from .evaluator import (
    EvaluationConfig,
    GameRecord,
    EvaluationStats,
    Evaluator,
)

__all__ = [
    "EvaluationConfig",
    "GameRecord",
    "EvaluationStats",
    "Evaluator",
]
