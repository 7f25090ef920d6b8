"""
Evaluation module for Minehunt agents.

Plays complete sessions and reports click statistics.
"""
from .evaluator import EvaluationConfig, SessionStats, Evaluator

__all__ = [
    "EvaluationConfig",
    "SessionStats",
    "Evaluator",
]
