"""
Linearly and logarithmically spaced progressions.

Both progressions hold `steps` values starting at `first`; `last` is the
value the progression would reach after `steps` increments and is excluded.
"""

from abc import ABC, abstractmethod
from typing import Iterator

import numpy as np


class _Progression(ABC):
    """Common sequence behaviour of LinSpace and LogSpace."""

    def __init__(self, first: float, last: float, steps: int):
        if not first < last:
            raise ValueError(f"first must be smaller than last, got {first} >= {last}")
        if steps <= 0:
            raise ValueError(f"Number of steps must be positive, got {steps}")
        self.first = first
        self.last = last
        self.steps = int(steps)

    @abstractmethod
    def _value(self, step: int) -> float:
        """Value reached after `step` increments."""
        pass

    def __len__(self) -> int:
        return self.steps

    def __iter__(self) -> Iterator[float]:
        for step in range(self.steps):
            yield self._value(step)

    def __getitem__(self, step: int) -> float:
        if step < 0:
            step += self.steps
        if not 0 <= step < self.steps:
            raise IndexError(f"Step {step} out of range for {self.steps} steps")
        return self._value(step)

    def collect(self, n: int) -> np.ndarray:
        """
        First n values of the progression.

        Unlike iteration, collect keeps going past `last` when n > steps.
        """
        return np.array([self._value(step) for step in range(n)], dtype=np.float64)

    def to_array(self) -> np.ndarray:
        """All the values of the progression."""
        return self.collect(self.steps)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.first!r}, {self.last!r}, {self.steps})"


class LinSpace(_Progression):
    """Evenly spaced values: first, first + h, first + 2h, ... with h = (last - first) / steps."""

    def __init__(self, first: float, last: float, steps: int):
        super().__init__(first, last, steps)
        self.stepsize = (last - first) / self.steps

    def _value(self, step: int) -> float:
        return self.first + self.stepsize * step


class LogSpace(_Progression):
    """
    Geometrically spaced values: first, first * r, first * r^2, ...

    The ratio r is chosen so that `steps` multiplications take first to last.
    """

    def __init__(self, first: float, last: float, steps: int):
        if first <= 0:
            raise ValueError(f"LogSpace requires positive bounds, got first={first}")
        super().__init__(first, last, steps)
        self.ratio = np.exp((np.log(last) - np.log(first)) / self.steps)

    @classmethod
    def from_exponents(cls, start: float, stop: float, steps: int,
                       base: float = 10.0) -> "LogSpace":
        """Progression from base**start to base**stop."""
        if not start < stop:
            raise ValueError(f"start must be smaller than stop, got {start} >= {stop}")
        return cls(base ** start, base ** stop, steps)

    def _value(self, step: int) -> float:
        return float(self.first * self.ratio ** step)
