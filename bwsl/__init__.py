"""
BWSL: Support Library for Lattice Monte Carlo Simulations

Lattice geometry (Bravais lattices, hypercubic grids, minimum-image tables),
Markov-chain move bookkeeping and small numerical helpers.
"""

__version__ = "0.3.0"
__author__ = "Guido Masella"

from . import core
from . import lattices
from . import montecarlo
from . import io

from .lattices import (
    BravaisLattice, CHAIN, SQUARE, CUBIC, TRIANGULAR, get_bravais,
    Boundaries, HyperCubicGrid, Lattice,
)
from .montecarlo import MoveStats, MoveResult, MoveStatus

__all__ = [
    "core", "lattices", "montecarlo", "io",
    "BravaisLattice", "CHAIN", "SQUARE", "CUBIC", "TRIANGULAR", "get_bravais",
    "Boundaries", "HyperCubicGrid", "Lattice",
    "MoveStats", "MoveResult", "MoveStatus",
]
