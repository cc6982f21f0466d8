"""
Integration test: Metropolis sampling of a lattice gas.

Particles hop between nearest neighbors of a periodic lattice with a
nearest-neighbor repulsion. The lattice tables drive the moves and MoveStats
keeps track of their outcomes.
"""

import numpy as np
import pytest

from bwsl.core import choose_with_probability
from bwsl.lattices import SQUARE, TRIANGULAR, Lattice
from bwsl.montecarlo import MoveResult, MoveStats


def total_energy(lattice, occupations, repulsion):
    """V/2 n.A.n over all neighbor slots."""
    adjacency = lattice.adjacency_matrix()
    return 0.5 * repulsion * occupations @ (adjacency @ occupations)


def hop(lattice, occupations, beta, repulsion, rng):
    """One hopping move; returns the outcome and the energy change."""
    particles = np.flatnonzero(occupations)
    i = int(rng.choice(particles))
    j = lattice.get_neighbors(i)[rng.integers(lattice.gamma)]
    if occupations[j]:
        return MoveResult.impossible(), 0.0

    # i empties, so it no longer counts as a neighbor of j
    before = sum(occupations[k] for k in lattice.get_neighbors(i))
    after = sum(occupations[k] for k in lattice.get_neighbors(j)) - 1
    delta = repulsion * (after - before)
    prob = min(1.0, float(np.exp(-beta * delta)))

    if choose_with_probability(prob, rng):
        occupations[i] = 0
        occupations[j] = 1
        return MoveResult.accept(prob), delta
    return MoveResult.reject(prob), 0.0


def run_sweeps(lattice, density, beta, repulsion, n_moves, rng):
    occupations = np.zeros(lattice.num_sites)
    occupations[rng.choice(lattice.num_sites, int(density * lattice.num_sites),
                           replace=False)] = 1
    energy = total_energy(lattice, occupations, repulsion)
    stats = MoveStats("Hop")

    for _ in range(n_moves):
        result, delta = hop(lattice, occupations, beta, repulsion, rng)
        stats.add(result)
        energy += delta

    return occupations, energy, stats


class TestMetropolisSweep:
    """Test a Metropolis lattice gas built on the library."""

    @pytest.mark.parametrize("bravais,size", [(SQUARE, [8, 8]), (TRIANGULAR, [6, 6])])
    def test_energy_bookkeeping_accuracy(self, bravais, size, rng):
        """Incremental energies agree with a full recomputation."""
        lattice = Lattice(bravais, size)
        occupations, energy, stats = run_sweeps(lattice, 0.5, 1.0, 1.0, 2000, rng)

        assert energy == pytest.approx(total_energy(lattice, occupations, 1.0))
        assert occupations.sum() == int(0.5 * lattice.num_sites)
        assert stats.proposed == 2000
        assert stats.accepted + stats.rejected + stats.impossible == 2000
        assert stats.impossible > 0

    def test_infinite_temperature_accepts_every_possible_move(self, rng):
        lattice = Lattice(SQUARE, [6, 6])
        _, _, stats = run_sweeps(lattice, 0.25, 0.0, 1.0, 500, rng)
        assert stats.rejected == 0
        assert stats.accepted_ratio + stats.impossible_ratio == pytest.approx(1.0)

    def test_low_temperature_lowers_acceptance(self, rng):
        lattice = Lattice(SQUARE, [6, 6])
        _, _, hot = run_sweeps(lattice, 0.5, 0.1, 1.0, 1000, rng)
        _, _, cold = run_sweeps(lattice, 0.5, 5.0, 1.0, 1000, rng)
        assert cold.average_probability < hot.average_probability

    def test_structure_factor_at_zero_momentum_conserved(self, rng):
        """Hopping conserves the particle number and therefore S(k = 0)."""
        lattice = Lattice(SQUARE, [8, 8])
        occupations, _, _ = run_sweeps(lattice, 0.25, 1.0, 1.0, 500, rng)
        sk = lattice.compute_sk(occupations)
        zero = lattice.index(lattice.size // 2)
        assert sk[zero] == pytest.approx(0.25 ** 2)
