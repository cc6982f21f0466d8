"""
Small numerical helpers shared by the lattice and Monte Carlo modules.

The index helpers implement the row-major (most significant dimension first)
mixed-radix mapping between integer coordinate tuples and linear site indices.
"""

import numpy as np
from typing import Optional, Sequence


def accumulate_product(values: Sequence[int]) -> int:
    """Product of all the entries (1 for an empty sequence)."""
    result = 1
    for v in values:
        result *= int(v)
    return result


def square(x):
    """Return x * x."""
    return x * x


def sgn(x) -> int:
    """Sign of x as -1, 0 or +1."""
    return int(x > 0) - int(x < 0)


def cbinomial(n: int, k: int) -> int:
    """
    Binomial coefficient (n choose k) with integer arithmetic.

    Returns 0 when k is outside [0, n].
    """
    if k < 0 or k > n:
        return 0
    # (n choose k) == (n choose n-k)
    k = min(k, n - k)
    result = 1
    for i in range(1, k + 1):
        result = result * (n + 1 - i) // i
    return result


def array_to_index(coords: Sequence[int], size: Sequence[int]) -> int:
    """
    Convert integer coordinates to a linear index.

    Each component is wrapped into [0, size[i]) before composing, so every
    integer vector of the right length maps to a valid index.

    Args:
        coords: Integer coordinates, one per dimension
        size: Extent of each dimension

    Returns:
        Linear index in [0, prod(size))

    Raises:
        ValueError: If the lengths of coords and size differ
    """
    if len(coords) != len(size):
        raise ValueError(f"Coordinates dimension {len(coords)} != grid dimension {len(size)}")

    index = 0
    for x, s in zip(coords, size):
        index = index * int(s) + int(x) % int(s)
    return index


def index_to_array(index: int, size: Sequence[int]) -> np.ndarray:
    """
    Convert a linear index to integer coordinates.

    Inverse of array_to_index for indices in [0, prod(size)).

    Args:
        index: Linear index
        size: Extent of each dimension

    Returns:
        Integer array of coordinates, most significant dimension first
    """
    index = int(index)
    coords = np.zeros(len(size), dtype=np.int64)
    for i in range(len(size) - 1, -1, -1):
        s = int(size[i])
        coords[i] = index % s
        index //= s
    return coords


def choose_between(probs: Sequence[float],
                   rng: Optional[np.random.Generator] = None) -> int:
    """
    Pick an index with probability proportional to its weight.

    Args:
        probs: Non-negative, not necessarily normalized weights
        rng: Random generator (default: fresh default_rng)

    Returns:
        Chosen index
    """
    if rng is None:
        rng = np.random.default_rng()
    cumulative = np.cumsum(np.asarray(probs, dtype=np.float64))
    rnd = rng.uniform(0.0, cumulative[-1])
    choice = int(np.searchsorted(cumulative, rnd, side='right'))
    # uniform() can return the upper bound for tiny totals
    return min(choice, len(cumulative) - 1)


def choose_with_probability(prob: float,
                            rng: Optional[np.random.Generator] = None) -> bool:
    """Return True with probability prob."""
    if rng is None:
        rng = np.random.default_rng()
    return bool(rng.random() < prob)
