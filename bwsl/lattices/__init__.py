"""Lattice geometry: Bravais lattices, hypercubic grids and finite lattices."""

from .bravais import (
    BRAVAIS_LATTICES,
    CHAIN,
    CUBIC,
    SQUARE,
    TRIANGULAR,
    BravaisLattice,
    get_bravais,
)
from .grid import Boundaries, HyperCubicGrid
from .lattice import Lattice

__all__ = [
    "BravaisLattice", "CHAIN", "SQUARE", "CUBIC", "TRIANGULAR",
    "BRAVAIS_LATTICES", "get_bravais",
    "Boundaries", "HyperCubicGrid", "Lattice",
]
