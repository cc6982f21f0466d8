"""
Bijections between ordered pairs of indices and a single linear index.

Ordered pairs (a, b) with a, b in [0, n) map to b * n + a. When self pairs
are excluded the diagonal is skipped and the range shrinks to [0, n * (n - 1)).
"""

from typing import Tuple


def pair_index(a: int, b: int, n: int, noself: bool = False) -> int:
    """
    Unique index for the ordered pair (a, b).

    Args:
        a: First index in [0, n)
        b: Second index in [0, n)
        n: Number of distinct indices
        noself: Exclude pairs with a == b from the numbering

    Returns:
        Linear pair index
    """
    if noself:
        if a == b:
            raise ValueError(f"Self pair ({a}, {b}) has no index when noself=True")
        return b * (n - 1) + (a if a < b else a - 1)
    return b * n + a


def individual_indices(index: int, n: int, noself: bool = False) -> Tuple[int, int]:
    """
    Inverse of pair_index.

    Args:
        index: Linear pair index
        n: Number of distinct indices
        noself: Whether the numbering skips self pairs

    Returns:
        The pair (a, b)
    """
    if noself:
        b, r = divmod(index, n - 1)
        return (r if r < b else r + 1), b
    return index % n, index // n


def num_pairs(n: int, noself: bool = False) -> int:
    """Number of unordered pairs of n indices, with or without self pairs."""
    return n * (n - 1 if noself else n + 1) // 2
