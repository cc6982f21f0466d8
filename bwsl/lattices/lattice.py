"""
Lattice: finite realization of a Bravais lattice on a hypercubic grid.

All geometric tables are computed once at construction. Displacements are
stored only relative to the origin site; with periodic boundaries any pair
(a, b) is first mapped onto (0, i) by translation invariance, so the
displacement between every pair of sites costs O(N) storage.
"""

import logging
from typing import Sequence, Tuple, Union

import numpy as np
from scipy import sparse
from tqdm import tqdm

from ..core.mathutils import index_to_array
from .bravais import BravaisLattice
from .grid import Boundaries, HyperCubicGrid

logger = logging.getLogger(__name__)


class Lattice:
    """
    Finite lattice with precomputed positions, minimum-image vectors,
    distances, neighbors and allowed momenta.

    Attributes:
        bravais: Infinite lattice the sites are taken from
        grid: Index space and boundary conditions
    """

    def __init__(self, bravais: BravaisLattice, size: Sequence[int],
                 boundaries: Union[str, Boundaries] = Boundaries.CLOSED,
                 progress: bool = False):
        """
        Build the lattice and all its tables.

        Args:
            bravais: Bravais lattice providing the local geometry
            size: Number of sites along each primitive direction
            boundaries: Open or closed (periodic) boundary conditions
            progress: Show tqdm progress bars while building the tables

        Raises:
            ValueError: If len(size) does not match the Bravais dimension
        """
        if len(size) != bravais.dim:
            raise ValueError(
                f"Size dimension {len(size)} != {bravais.name} lattice dimension {bravais.dim}")

        self.bravais = bravais
        self.grid = HyperCubicGrid(size, boundaries)
        self._progress = progress

        n = self.grid.num_sites
        coords = np.array([index_to_array(i, self.grid.size) for i in range(n)],
                          dtype=np.int64).reshape(n, self.dim)
        coords.setflags(write=False)
        self._coords = coords

        self._positions = self._compute_positions()
        self._vectors = self._compute_vectors()
        self._distances = self._compute_distances()
        self._neighbors = self._compute_neighbors()
        self._momenta = self._compute_momenta()

        for table in (self._positions, self._vectors, self._distances, self._momenta):
            table.setflags(write=False)

        logger.info(
            f"Initialized {self.__class__.__name__} on {bravais.name} lattice with "
            f"size={self.size.tolist()}, {self.boundaries.value} boundaries, {n} sites")

    # ========== Construction ==========

    def _sites(self, desc: str):
        return tqdm(range(self.num_sites), desc=desc, disable=not self._progress,
                    leave=False)

    def _compute_positions(self) -> np.ndarray:
        """Real space position of every site relative to site 0."""
        origin = self._coords[0]
        positions = np.zeros((self.num_sites, self.dim))
        for i in self._sites("positions"):
            positions[i] = self.bravais.vector(origin, self._coords[i])
        return positions

    def _image_shifts(self) -> np.ndarray:
        """Coordinate shifts of the 3^dim nearest periodic images."""
        shape = [3] * self.dim
        shifts = np.array([index_to_array(k, shape) - 1 for k in range(3 ** self.dim)])
        return shifts * self.size

    def _compute_vectors(self) -> np.ndarray:
        """Minimum-image vector from site 0 to every site."""
        origin = self._coords[0]
        shifts = self._image_shifts() if self.has_closed_boundaries else []
        vectors = np.zeros((self.num_sites, self.dim))

        for i in self._sites("vectors"):
            ci = self._coords[i]
            mindist, minvec = self.bravais.distance_vector(origin, ci)

            # first strictly shorter image wins
            for shift in shifts:
                dist, vec = self.bravais.distance_vector(origin, ci + shift)
                if dist < mindist:
                    mindist, minvec = dist, vec

            vectors[i] = minvec
        return vectors

    def _compute_distances(self) -> np.ndarray:
        return np.linalg.norm(self._vectors, axis=1)

    def _compute_neighbors(self) -> Tuple[Tuple[int, ...], ...]:
        """Nearest neighbors of every site, in Bravais neighbor-slot order."""
        neighbors = []
        for i in self._sites("neighbors"):
            nn = []
            for j in range(self.bravais.gamma):
                cj = self.bravais.neighbor(self._coords[i], j)
                if self.has_closed_boundaries or self.grid.is_on_grid(cj):
                    nn.append(self.grid.index(self.grid.enforce_boundaries(cj)))
            neighbors.append(tuple(nn))
        return tuple(neighbors)

    def _compute_momenta(self) -> np.ndarray:
        """
        Momenta allowed by the periodic boundary conditions.

        There are as many as sites, centered around k = 0. Momenta are not
        defined with open boundaries and the table is left empty.
        """
        if self.has_open_boundaries:
            return np.zeros((0, self.dim))

        momenta = np.zeros((self.num_sites, self.dim))
        half = self.size // 2
        for i in self._sites("momenta"):
            kappa = self.bravais.reciprocal_space(self._coords[i] - half)
            momenta[i] = kappa / self.size
        return momenta

    # ========== Grid properties ==========

    @property
    def dim(self) -> int:
        return self.grid.dim

    @property
    def size(self) -> np.ndarray:
        return self.grid.size

    @property
    def num_sites(self) -> int:
        return self.grid.num_sites

    @property
    def boundaries(self) -> Boundaries:
        return self.grid.boundaries

    @property
    def has_open_boundaries(self) -> bool:
        return self.grid.has_open_boundaries

    @property
    def has_closed_boundaries(self) -> bool:
        return self.grid.has_closed_boundaries

    @property
    def gamma(self) -> int:
        """Coordination number of the underlying Bravais lattice."""
        return self.bravais.gamma

    def __len__(self) -> int:
        return self.num_sites

    # ========== Precomputed tables ==========

    @property
    def positions(self) -> np.ndarray:
        return self._positions

    @property
    def vectors(self) -> np.ndarray:
        return self._vectors

    @property
    def distances(self) -> np.ndarray:
        return self._distances

    @property
    def neighbors(self) -> Tuple[Tuple[int, ...], ...]:
        return self._neighbors

    @property
    def momenta(self) -> np.ndarray:
        return self._momenta

    # ========== Index helpers ==========

    def _check_site(self, i: int) -> int:
        if not self.grid.index_is_valid(i):
            raise IndexError(f"Site {i} out of range for lattice with {self.num_sites} sites")
        return int(i)

    def coordinates(self, index: int) -> np.ndarray:
        return self.grid.coordinates(index)

    def index(self, coords) -> int:
        return self.grid.index(coords)

    def enforce_boundaries(self, coords) -> np.ndarray:
        return self.grid.enforce_boundaries(coords)

    def is_on_grid(self, coords) -> bool:
        return self.grid.is_on_grid(coords)

    def mapped_site(self, a: int, b: int) -> int:
        return self.grid.mapped_site(a, b)

    def unmapped_site(self, i: int, a: int) -> int:
        return self.grid.unmapped_site(i, a)

    def pair_index(self, a: int, b: int) -> int:
        return self.grid.pair_index(a, b)

    def individual_indices(self, pair: int) -> Tuple[int, int]:
        return self.grid.individual_indices(pair)

    def jump(self, a: int, b: int) -> np.ndarray:
        return self.grid.jump(a, b)

    # ========== Queries ==========

    def position(self, i: int) -> np.ndarray:
        """Real space position of site i relative to site 0."""
        return self._positions[self._check_site(i)].copy()

    def momentum(self, i: int) -> np.ndarray:
        """
        Allowed momentum with index i.

        Raises:
            ValueError: With open boundaries, where momenta are not defined
        """
        if self.has_open_boundaries:
            raise ValueError("Momenta are not defined with open boundary conditions")
        return self._momenta[self._check_site(i)].copy()

    def vector(self, a: int, b: int) -> np.ndarray:
        """
        Real space vector going from site a to site b.

        With closed boundaries this is the minimum-image vector.
        """
        if self.has_closed_boundaries:
            return self._vectors[self.grid.mapped_site(a, b)].copy()
        return self._positions[self._check_site(b)] - self._positions[self._check_site(a)]

    def distance(self, a: int, b: int) -> float:
        """Distance between sites a and b (minimum image with closed boundaries)."""
        if self.has_closed_boundaries:
            return float(self._distances[self.grid.mapped_site(a, b)])
        return float(np.linalg.norm(self.vector(a, b)))

    def copy_distance(self, a: int, b: int, copy) -> float:
        """
        Distance from site a to a periodic copy of site b.

        Args:
            a: First site
            b: Second site
            copy: Integer number of whole periods the copy of b is shifted by,
                one entry per dimension

        Returns:
            |vector(a, b) + real_space(copy * size)|
        """
        copy = np.asarray(copy, dtype=np.int64)
        shift = self.bravais.real_space(copy * self.size)
        return float(np.linalg.norm(self.vector(a, b) + shift))

    def winding(self, jump_vector) -> np.ndarray:
        """
        Number of times a coordinate displacement wraps around each dimension.

        The displacement is expected to be a multiple of the size along each
        dimension; any remainder is discarded (division truncates toward zero).
        """
        jump_vector = np.asarray(jump_vector, dtype=np.int64)
        if jump_vector.shape != (self.dim,):
            raise ValueError(
                f"Jump dimension {jump_vector.shape} != lattice dimension ({self.dim},)")
        return np.sign(jump_vector) * (np.abs(jump_vector) // self.size)

    def get_neighbors(self, i: int) -> Tuple[int, ...]:
        """Nearest neighbors of site i."""
        return self._neighbors[self._check_site(i)]

    def are_neighbors(self, a: int, b: int) -> bool:
        """Check whether b is among the nearest neighbors of a."""
        return b in self.get_neighbors(a)

    def coordination(self, i: int) -> int:
        """Number of nearest neighbors of site i (smaller at open edges)."""
        return len(self.get_neighbors(i))

    def adjacency_matrix(self) -> sparse.csr_matrix:
        """
        Sparse N x N connectivity matrix.

        Entry (i, j) counts how many neighbor slots of i point to j, which
        on tiny periodic lattices can exceed one.
        """
        row_ind = []
        col_ind = []
        for i, nn in enumerate(self._neighbors):
            row_ind.extend([i] * len(nn))
            col_ind.extend(nn)
        data = np.ones(len(row_ind), dtype=np.int64)
        n = self.num_sites
        return sparse.csr_matrix((data, (row_ind, col_ind)), shape=(n, n))

    def distance_matrix(self) -> np.ndarray:
        """Dense N x N matrix of distance(a, b)."""
        if self.has_open_boundaries:
            diff = self._positions[None, :, :] - self._positions[:, None, :]
            return np.linalg.norm(diff, axis=2)

        # entry [a, b] holds coords(b) - coords(a), wrapped and composed
        delta = np.mod(self._coords[None, :, :] - self._coords[:, None, :], self.size)
        strides = np.cumprod(np.concatenate(([1], self.size[:0:-1])))[::-1]
        return self._distances[delta @ strides]

    def compute_sk(self, occupations, multiplier: float = 1.0) -> np.ndarray:
        """
        Structure factor of a configuration at every allowed momentum.

        S(k) = multiplier * |sum_j n_j exp(i k . x_j)|^2 / N^2, evaluated by a
        direct (not fast) Fourier sum over the sites.

        Args:
            occupations: Occupation n_j of each site
            multiplier: Overall prefactor

        Returns:
            Array with one value per momentum; all zeros with open boundaries
        """
        occupations = np.asarray(occupations, dtype=np.float64)
        n = self.num_sites
        if occupations.shape != (n,):
            raise ValueError(f"Expected {n} occupations, got shape {occupations.shape}")

        if self.has_open_boundaries:
            return np.zeros(n)

        phases = self._momenta @ self._positions.T
        re = np.cos(phases) @ occupations
        im = np.sin(phases) @ occupations
        return multiplier * (re ** 2 + im ** 2) / n ** 2

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}({self.bravais.name}, size={self.size.tolist()}, "
                f"boundaries={self.boundaries.value!r})")
