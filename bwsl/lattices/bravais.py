"""
BravaisLattice: local geometry of an infinite, translationally invariant lattice.

A Bravais lattice is fixed by its primitive (direct) vectors and by the set of
nearest-neighbor directions. Only half of the directions are stored; the other
half follows from inversion symmetry.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

import numpy as np


@dataclass(frozen=True, eq=False)
class BravaisLattice:
    """
    Infinite Bravais lattice.

    Attributes:
        name: Human readable name of the lattice type
        dim: Dimensionality
        direct_vectors: dim x dim matrix whose rows are the primitive vectors
        neighbor_offsets: (gamma/2) x dim integer offsets of the nearest neighbors
        gamma: Coordination number (twice the number of stored offsets)
        inverse_vectors: Numerical inverse of direct_vectors
    """
    name: str
    dim: int
    direct_vectors: np.ndarray
    neighbor_offsets: np.ndarray
    gamma: int = field(init=False)
    inverse_vectors: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        if self.dim <= 0:
            raise ValueError(f"Dimension must be positive, got {self.dim}")

        direct = np.asarray(self.direct_vectors, dtype=np.float64)
        if direct.size != self.dim ** 2:
            raise ValueError(
                f"Direct vectors need {self.dim ** 2} entries, got {direct.size}")
        direct = direct.reshape(self.dim, self.dim)

        offsets = np.asarray(self.neighbor_offsets, dtype=np.int64)
        if offsets.size == 0 or offsets.size % self.dim != 0:
            raise ValueError(
                f"Neighbor offsets must be a non-empty multiple of {self.dim} entries, "
                f"got {offsets.size}")
        offsets = offsets.reshape(-1, self.dim)

        try:
            inverse = np.linalg.inv(direct)
        except np.linalg.LinAlgError as exc:
            raise ValueError(f"Direct vectors of {self.name} lattice are singular") from exc

        for arr in (direct, offsets, inverse):
            arr.setflags(write=False)

        object.__setattr__(self, 'direct_vectors', direct)
        object.__setattr__(self, 'neighbor_offsets', offsets)
        object.__setattr__(self, 'inverse_vectors', inverse)
        object.__setattr__(self, 'gamma', 2 * offsets.shape[0])

    def _as_vector(self, values, dtype=np.float64) -> np.ndarray:
        arr = np.asarray(values, dtype=dtype)
        if arr.shape != (self.dim,):
            raise ValueError(
                f"Coordinates dimension {arr.shape} != lattice dimension ({self.dim},)")
        return arr

    def real_space(self, coords) -> np.ndarray:
        """
        Real space position of the lattice point with integer coordinates.

        Args:
            coords: Integer coordinates in the primitive basis

        Returns:
            Position sum_j coords[j] * a_j
        """
        return self._as_vector(coords) @ self.direct_vectors

    def inverse_vector(self, vector) -> np.ndarray:
        """Coordinates in the primitive basis of a real space vector (inverse of real_space)."""
        return self._as_vector(vector) @ self.inverse_vectors

    def reciprocal_space(self, coords) -> np.ndarray:
        """
        Reciprocal lattice vector with the given reciprocal coordinates.

        The reciprocal primitive vectors b_j are 2*pi times the columns of
        inverse_vectors, so that a_i . b_j = 2*pi delta_ij.

        Args:
            coords: Coordinates in the reciprocal basis

        Returns:
            Wavevector sum_j coords[j] * b_j
        """
        return 2.0 * np.pi * (self._as_vector(coords) @ self.inverse_vectors.T)

    def vector(self, first, second) -> np.ndarray:
        """Real space vector going from first to second."""
        delta = self._as_vector(second) - self._as_vector(first)
        return delta @ self.direct_vectors

    def distance(self, first, second) -> float:
        """Euclidean distance between two lattice points."""
        return float(np.linalg.norm(self.vector(first, second)))

    def distance_vector(self, first, second) -> Tuple[float, np.ndarray]:
        """Distance and connecting vector in a single evaluation."""
        v = self.vector(first, second)
        return float(np.linalg.norm(v)), v

    def neighbor(self, point, idx: int) -> np.ndarray:
        """
        Coordinates of a nearest neighbor of point.

        Even slots move along +offsets[idx // 2], odd slots along the
        opposite direction.

        Args:
            point: Integer coordinates of the site
            idx: Neighbor slot in [0, gamma)

        Returns:
            Integer coordinates of the neighbor
        """
        if not 0 <= idx < self.gamma:
            raise IndexError(f"Neighbor slot {idx} out of range for coordination {self.gamma}")
        sign = 1 if idx % 2 == 0 else -1
        return self._as_vector(point, dtype=np.int64) + sign * self.neighbor_offsets[idx // 2]

    def __repr__(self) -> str:
        return f"BravaisLattice(name={self.name!r}, dim={self.dim}, gamma={self.gamma})"


CHAIN = BravaisLattice("chain", 1, [1.0], [1])

SQUARE = BravaisLattice("square", 2, [1.0, 0.0,
                                      0.0, 1.0], [1, 0,
                                                  0, 1])

CUBIC = BravaisLattice("cubic", 3, [1.0, 0.0, 0.0,
                                    0.0, 1.0, 0.0,
                                    0.0, 0.0, 1.0], [1, 0, 0,
                                                     0, 1, 0,
                                                     0, 0, 1])

TRIANGULAR = BravaisLattice("triangular", 2, [1.0, 0.0,
                                              0.5, np.sqrt(3.0) / 2.0], [1, 0,
                                                                         0, 1,
                                                                         1, -1])

BRAVAIS_LATTICES: Dict[str, BravaisLattice] = {
    lat.name: lat for lat in (CHAIN, SQUARE, CUBIC, TRIANGULAR)
}


def get_bravais(name: str) -> BravaisLattice:
    """
    Look up one of the canonical Bravais lattices by name.

    Raises:
        ValueError: If the name is not a known lattice type
    """
    try:
        return BRAVAIS_LATTICES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown lattice type: {name}") from None
