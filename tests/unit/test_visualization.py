"""
Unit tests for lattice plots.

Tests cover style setup, the site, momentum and distance plots, and
figure output.
"""

import os

import numpy as np
import pytest
import matplotlib.pyplot as plt

from bwsl.lattices import CUBIC, Boundaries, Lattice
from bwsl.visualization import LatticePlotter


@pytest.fixture
def plotter(temp_dir):
    """Plotter writing into the test directory."""
    return LatticePlotter(style='draft', figure_dir=str(temp_dir / "figures"))


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


class TestLatticePlotter:
    """Test the LatticePlotter class and its methods."""

    @pytest.mark.parametrize("style", ['publication', 'presentation', 'draft'])
    def test_styles(self, style):
        plotter = LatticePlotter(style=style, dpi=150)
        assert plotter.style == style
        assert plt.rcParams['figure.dpi'] == 150

    def test_invalid_style(self):
        with pytest.raises(ValueError, match="Unknown style"):
            LatticePlotter(style='invalid_style')

    def test_plot_sites(self, plotter, square_4x4):
        fig, ax = plotter.plot_sites(square_4x4, show_indices=True)
        assert fig is not None
        assert len(ax.collections) == 2
        offsets = ax.collections[1].get_offsets()
        assert len(offsets) == 16
        assert len(ax.texts) == 16
        assert "square" in ax.get_title()

    def test_plot_sites_chain_without_bonds(self, plotter, chain_4):
        fig, ax = plotter.plot_sites(chain_4, show_bonds=False)
        assert len(ax.collections) == 1
        np.testing.assert_allclose(ax.collections[0].get_offsets()[:, 1], 0.0)

    def test_plot_sites_on_existing_axes(self, plotter, triangular_6x6):
        fig, ax = plt.subplots()
        fig_out, ax_out = plotter.plot_sites(triangular_6x6, ax=ax)
        assert fig_out is fig
        assert ax_out is ax

    def test_plot_sites_3d_invalid(self, plotter):
        with pytest.raises(ValueError):
            plotter.plot_sites(Lattice(CUBIC, [2, 2, 2]))

    def test_plot_momenta(self, plotter, square_4x4):
        sk = square_4x4.compute_sk(np.ones(16))
        fig, ax = plotter.plot_momenta(square_4x4, sk=sk)
        assert len(ax.collections[0].get_offsets()) == 16
        assert ax.get_xlabel() != ""

    def test_plot_momenta_chain(self, plotter, chain_4):
        fig, ax = plotter.plot_momenta(chain_4, sk=chain_4.compute_sk(np.ones(4)))
        assert len(ax.lines) == 1

    def test_plot_momenta_invalid(self, plotter, open_square_4x4, square_4x4):
        with pytest.raises(ValueError, match="open boundary"):
            plotter.plot_momenta(open_square_4x4)
        with pytest.raises(ValueError):
            plotter.plot_momenta(square_4x4, sk=np.ones(3))

    def test_plot_distance_matrix(self, plotter, rectangular_3x4):
        fig, ax = plotter.plot_distance_matrix(rectangular_3x4)
        assert ax.get_title() == "Pair distances"

    def test_save_figure(self, plotter, square_3x3):
        fig, _ = plotter.plot_sites(square_3x3)
        paths = plotter.save_figure(fig, "square_sites", formats=('png', 'pdf'))
        assert len(paths) == 2
        for path in paths:
            assert os.path.exists(path)

    def test_save_name(self, plotter, temp_dir):
        lattice = Lattice(CUBIC, [2, 2, 2], Boundaries.OPEN)
        plotter.plot_distance_matrix(lattice, save_name="cubic_distances")
        assert (temp_dir / "figures" / "cubic_distances.png").exists()
