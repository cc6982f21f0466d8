"""
Acceptance statistics of Markov chain moves.

Every move goes through a proposal followed by exactly one resolution:
accepted, rejected, or impossible (the move could not even be attempted).
"""

import math
from dataclasses import dataclass
from enum import Enum

from .exceptions import InvalidProbability, MoveInvalidSequence


class MoveStatus(Enum):
    """Outcome of a proposed move."""
    ACCEPTED = 'A'
    REJECTED = 'R'
    IMPOSSIBLE = 'I'


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a move together with its acceptance probability."""
    status: MoveStatus = MoveStatus.IMPOSSIBLE
    probability: float = 0.0

    @classmethod
    def accept(cls, prob: float) -> "MoveResult":
        return cls(MoveStatus.ACCEPTED, prob)

    @classmethod
    def reject(cls, prob: float) -> "MoveResult":
        return cls(MoveStatus.REJECTED, prob)

    @classmethod
    def impossible(cls) -> "MoveResult":
        return cls(MoveStatus.IMPOSSIBLE, 0.0)

    @property
    def is_accepted(self) -> bool:
        return self.status is MoveStatus.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.status is MoveStatus.REJECTED

    @property
    def is_impossible(self) -> bool:
        return self.status is MoveStatus.IMPOSSIBLE


class MoveStats:
    """
    Counters for a named move.

    Attributes:
        name: Name identifying the move
        proposed: Number of proposals
        accepted: Number of accepted proposals
        rejected: Number of rejected proposals
        impossible: Number of proposals that could not be carried out
    """

    def __init__(self, name: str = "Unknown"):
        self.name = name
        self.reset()

    def reset(self):
        """Reset all the counters."""
        self.proposed = 0
        self.accepted = 0
        self.rejected = 0
        self.impossible = 0
        self._pending = False
        self._prob_mean = 0.0
        self._prob_count = 0

    def propose(self):
        """Record a proposal; the previous one must have been resolved."""
        if self._pending:
            raise MoveInvalidSequence(self.name)
        self.proposed += 1
        self._pending = True

    def _resolve(self, prob: float):
        if not self._pending:
            raise MoveInvalidSequence(self.name)
        if math.isnan(prob) or not 0.0 <= prob <= 1.0:
            raise InvalidProbability(prob)
        self._pending = False
        self._prob_count += 1
        self._prob_mean += (prob - self._prob_mean) / self._prob_count

    def accept(self, prob: float):
        """The pending proposal was accepted with acceptance probability prob."""
        self._resolve(prob)
        self.accepted += 1

    def reject(self, prob: float):
        """The pending proposal was rejected with acceptance probability prob."""
        self._resolve(prob)
        self.rejected += 1

    def mark_impossible(self):
        """The pending proposal could not be carried out."""
        self._resolve(0.0)
        self.impossible += 1

    def add(self, result: MoveResult):
        """Record a full proposal/resolution cycle from a MoveResult."""
        self.propose()
        if result.status is MoveStatus.ACCEPTED:
            self.accept(result.probability)
        elif result.status is MoveStatus.REJECTED:
            self.reject(result.probability)
        else:
            self.mark_impossible()

    def _ratio(self, count: int) -> float:
        if self.proposed == 0:
            return 0.0
        return count / self.proposed

    @property
    def accepted_ratio(self) -> float:
        return self._ratio(self.accepted)

    @property
    def rejected_ratio(self) -> float:
        return self._ratio(self.rejected)

    @property
    def impossible_ratio(self) -> float:
        return self._ratio(self.impossible)

    @property
    def average_probability(self) -> float:
        """Mean acceptance probability over the resolved proposals."""
        return self._prob_mean

    def __str__(self) -> str:
        return (f"{self.name}(accepted = {self.accepted_ratio:.3e}, "
                f"rejected = {self.rejected_ratio:.3e}, "
                f"impossible = {self.impossible_ratio:.3e}, "
                f"probability = {self.average_probability:.3e})")

    def __repr__(self) -> str:
        return (f"MoveStats(name={self.name!r}, proposed={self.proposed}, "
                f"accepted={self.accepted}, rejected={self.rejected}, "
                f"impossible={self.impossible})")
