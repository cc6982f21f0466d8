"""Bookkeeping of Markov chain Monte Carlo moves."""

from .exceptions import InvalidProbability, MonteCarloError, MoveInvalidSequence
from .moves import MoveResult, MoveStats, MoveStatus

__all__ = [
    "MoveStatus", "MoveResult", "MoveStats",
    "MonteCarloError", "MoveInvalidSequence", "InvalidProbability",
]
