"""
HyperCubicGrid: finite rectangular index space with open or periodic boundaries.

Sites are addressed either by a linear index in [0, num_sites) or by integer
coordinates, with the row-major convention of bwsl.core.mathutils.
"""

from enum import Enum
from typing import Iterator, Sequence, Tuple, Union

import numpy as np

from ..core.mathutils import accumulate_product, array_to_index, index_to_array
from ..core.pairs import individual_indices, num_pairs, pair_index


class Boundaries(Enum):
    """Boundary conditions of a finite grid."""
    OPEN = "open"
    CLOSED = "closed"

    @classmethod
    def parse(cls, value: Union[str, "Boundaries"]) -> "Boundaries":
        """Accept an enum member or its (case insensitive) name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown boundary conditions: {value}") from None


class HyperCubicGrid:
    """
    Hypercubic grid of integer points.

    Attributes:
        dim: Number of dimensions
        size: Extent of each dimension
        num_sites: Total number of sites
        num_pairs: Number of unordered pairs of sites, self pairs included
        boundaries: Boundary conditions
    """

    def __init__(self, size: Sequence[int],
                 boundaries: Union[str, Boundaries] = Boundaries.CLOSED):
        """
        Initialize a grid.

        Args:
            size: Positive extent of each dimension
            boundaries: Open or closed (periodic) boundary conditions

        Raises:
            ValueError: If size is empty or has non-positive entries
        """
        size = np.array(size, dtype=np.int64).reshape(-1)
        if size.size == 0:
            raise ValueError("Grid needs at least one dimension")
        if np.any(size <= 0):
            raise ValueError(f"Grid sizes must be positive, got {size.tolist()}")
        size.setflags(write=False)

        self._size = size
        self._dim = int(size.size)
        self._num_sites = accumulate_product(size)
        self._num_pairs = num_pairs(self._num_sites)
        self._boundaries = Boundaries.parse(boundaries)

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def size(self) -> np.ndarray:
        return self._size

    @property
    def num_sites(self) -> int:
        return self._num_sites

    @property
    def num_pairs(self) -> int:
        return self._num_pairs

    @property
    def boundaries(self) -> Boundaries:
        return self._boundaries

    @property
    def has_open_boundaries(self) -> bool:
        return self._boundaries is Boundaries.OPEN

    @property
    def has_closed_boundaries(self) -> bool:
        return self._boundaries is Boundaries.CLOSED

    def index_is_valid(self, i: int) -> bool:
        """Check that i is a site index of the grid."""
        return 0 <= i < self._num_sites

    def _check_index(self, i: int) -> int:
        if not self.index_is_valid(i):
            raise IndexError(f"Site {i} out of range for grid with {self._num_sites} sites")
        return int(i)

    def _check_coords(self, coords) -> np.ndarray:
        arr = np.array(coords, dtype=np.int64)
        if arr.shape != (self._dim,):
            raise ValueError(
                f"Coordinates dimension {arr.shape} != grid dimension ({self._dim},)")
        return arr

    def coordinates(self, index: int) -> np.ndarray:
        """Integer coordinates of a site."""
        return index_to_array(self._check_index(index), self._size)

    def index(self, coords) -> int:
        """Linear index of the site at coords (components wrapped onto the grid)."""
        return array_to_index(self._check_coords(coords), self._size)

    def sites(self) -> Iterator[Tuple[int, np.ndarray]]:
        """Iterate over (index, coordinates) of every site."""
        for i in range(self._num_sites):
            yield i, index_to_array(i, self._size)

    def enforce_boundaries(self, coords) -> np.ndarray:
        """
        Bring coordinates back onto the grid according to the boundary conditions.

        With closed boundaries each component is wrapped into [0, size[i]),
        however far outside it lies. With open boundaries the coordinates are
        returned unchanged.

        Returns:
            A new coordinate array
        """
        coords = self._check_coords(coords)
        if self.has_closed_boundaries:
            coords = np.mod(coords, self._size)
        return coords

    def is_on_grid(self, coords) -> bool:
        """Check that every component lies in [0, size[i])."""
        coords = self._check_coords(coords)
        return bool(np.all((coords >= 0) & (coords < self._size)))

    def mapped_site(self, a: int, b: int) -> int:
        """
        Site reached from the origin with the displacement that takes a to b.

        This maps the pair (a, b) onto the pair (0, i), which lets translation
        invariant quantities be stored once per site instead of once per pair.
        """
        delta = self.coordinates(b) - self.coordinates(a)
        return self.index(self.enforce_boundaries(delta))

    def unmapped_site(self, i: int, a: int) -> int:
        """Inverse of mapped_site: the site b such that mapped_site(a, b) == i."""
        target = self.coordinates(a) + self.coordinates(i)
        return self.index(self.enforce_boundaries(target))

    def jump(self, a: int, b: int) -> np.ndarray:
        """
        Integer displacement from site a to site b.

        With closed boundaries the shortest periodic representative is
        returned, each component lying in (-size/2, size/2].
        """
        delta = self.coordinates(b) - self.coordinates(a)
        if self.has_closed_boundaries:
            delta = np.where(2 * delta > self._size, delta - self._size, delta)
            delta = np.where(2 * delta <= -self._size, delta + self._size, delta)
        return delta

    def pair_index(self, a: int, b: int) -> int:
        """Unique index of the ordered pair (a, b) in [0, num_sites**2)."""
        return pair_index(self._check_index(a), self._check_index(b), self._num_sites)

    def individual_indices(self, pair: int) -> Tuple[int, int]:
        """Inverse of pair_index."""
        if not 0 <= pair < self._num_sites ** 2:
            raise IndexError(f"Pair {pair} out of range for grid with {self._num_sites} sites")
        return individual_indices(int(pair), self._num_sites)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(size={self._size.tolist()}, "
                f"boundaries={self._boundaries.value!r})")
