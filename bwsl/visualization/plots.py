"""
LatticePlotter: figures of finite lattices and of their reciprocal space.

Sites and nearest-neighbor bonds are drawn in real space; momenta are drawn
in reciprocal space, optionally colored by a structure factor.
"""

import logging
import os
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from matplotlib.collections import LineCollection

from ..lattices.lattice import Lattice

logger = logging.getLogger(__name__)


class LatticePlotter:
    """
    Plotting tools for lattices with a consistent style.
    """

    COLORBLIND_PALETTE = [
        '#377eb8', '#ff7f00', '#4daf4a', '#f781bf',
        '#a65628', '#984ea3', '#999999', '#e41a1c',
        '#dede00', '#377eb8'
    ]

    # style -> (seaborn context, base font size)
    STYLES = {
        'publication': ('paper', 11),
        'presentation': ('talk', 14),
        'draft': ('notebook', 12),
    }

    def __init__(self, style: str = 'draft', dpi: int = 100,
                 figure_dir: str = 'figures'):
        """
        Initialize plotting tools.

        Args:
            style: Plotting style ('publication', 'presentation', 'draft')
            dpi: Resolution for raster outputs
            figure_dir: Directory where save_figure writes, created on first save
        """
        self.dpi = dpi
        self.figure_dir = figure_dir
        self.setup_style(style)

    def setup_style(self, style: str):
        """Configure seaborn and matplotlib for the given style."""
        if style not in self.STYLES:
            raise ValueError(f"Unknown style: {style}")
        self.style = style
        context, font_size = self.STYLES[style]

        sns.set_theme(context=context, style='ticks', palette=self.COLORBLIND_PALETTE)
        plt.rcParams.update({
            'font.size': font_size,
            'axes.titlesize': font_size,
            'axes.labelsize': font_size,
            'figure.dpi': self.dpi,
            'savefig.dpi': self.dpi,
            'savefig.bbox': 'tight',
            'xtick.direction': 'in',
            'ytick.direction': 'in',
        })

    def _axes(self, ax):
        if ax is None:
            fig, ax = plt.subplots(figsize=(6, 6))
        else:
            fig = ax.figure
        return fig, ax

    @staticmethod
    def _planar(points: np.ndarray) -> np.ndarray:
        """Lift 1D points onto the x axis of a plane."""
        points = np.asarray(points, dtype=np.float64)
        if points.shape[1] == 1:
            points = np.hstack([points, np.zeros_like(points)])
        return points

    def plot_sites(self, lattice: Lattice, show_bonds: bool = True,
                   show_indices: bool = False, ax=None,
                   save_name: Optional[str] = None):
        """
        Plot the sites of a 1D or 2D lattice in real space.

        Bonds are drawn along minimum-image vectors, half from each end, so
        bonds crossing a periodic boundary show up as stubs on both sides.

        Args:
            lattice: Lattice to draw
            show_bonds: Draw nearest-neighbor bonds
            show_indices: Annotate every site with its index
            ax: Existing axes to draw on
            save_name: Filename to save

        Returns:
            (fig, ax)
        """
        if lattice.dim > 2:
            raise ValueError("Site plot only supports 1D and 2D lattices")

        fig, ax = self._axes(ax)
        points = self._planar(lattice.positions)

        if show_bonds:
            segments = []
            for i, nn in enumerate(lattice.neighbors):
                for j in nn:
                    half = self._planar(lattice.vector(i, j)[None, :])[0] / 2.0
                    segments.append([points[i], points[i] + half])
            ax.add_collection(LineCollection(segments, colors='0.6', linewidths=1.0,
                                             zorder=1))

        ax.scatter(points[:, 0], points[:, 1], s=40, zorder=2,
                   color=self.COLORBLIND_PALETTE[0])

        if show_indices:
            for i, (x, y) in enumerate(points):
                ax.annotate(str(i), (x, y), textcoords='offset points', xytext=(4, 4),
                            fontsize='small')

        ax.set_xlabel('$x$')
        ax.set_ylabel('$y$')
        ax.set_title(f"{lattice.bravais.name} lattice {tuple(lattice.size.tolist())}, "
                     f"{lattice.boundaries.value} boundaries")
        ax.set_aspect('equal')
        ax.autoscale_view()

        if save_name:
            self.save_figure(fig, save_name)

        return fig, ax

    def plot_momenta(self, lattice: Lattice, sk: Optional[Sequence[float]] = None,
                     ax=None, save_name: Optional[str] = None):
        """
        Plot the allowed momenta, colored by the structure factor if given.

        For 1D lattices with sk the structure factor is plotted against k.

        Returns:
            (fig, ax)
        """
        if lattice.has_open_boundaries:
            raise ValueError("Momenta are not defined with open boundary conditions")
        if lattice.dim > 2:
            raise ValueError("Momentum plot only supports 1D and 2D lattices")

        fig, ax = self._axes(ax)
        momenta = lattice.momenta

        if sk is not None:
            sk = np.asarray(sk, dtype=np.float64)
            if sk.shape != (len(momenta),):
                raise ValueError(f"Expected {len(momenta)} structure factor values, got {sk.shape}")

        if lattice.dim == 1 and sk is not None:
            order = np.argsort(momenta[:, 0])
            ax.plot(momenta[order, 0], sk[order], 'o-')
            ax.set_xlabel('$k$')
            ax.set_ylabel('$S(k)$')
        else:
            points = self._planar(momenta)
            scatter = ax.scatter(points[:, 0], points[:, 1], c=sk, cmap='viridis', s=40)
            if sk is not None:
                fig.colorbar(scatter, ax=ax, label='$S(k)$')
            ax.set_xlabel('$k_x$')
            ax.set_ylabel('$k_y$')
            ax.set_aspect('equal')

        ax.set_title('Allowed momenta')

        if save_name:
            self.save_figure(fig, save_name)

        return fig, ax

    def plot_distance_matrix(self, lattice: Lattice, ax=None,
                             save_name: Optional[str] = None):
        """
        Heatmap of the distance between every pair of sites.

        Returns:
            (fig, ax)
        """
        fig, ax = self._axes(ax)
        sns.heatmap(lattice.distance_matrix(), ax=ax, cmap='rocket', square=True,
                    cbar_kws={'label': 'distance'})
        ax.set_xlabel('site')
        ax.set_ylabel('site')
        ax.set_title('Pair distances')

        if save_name:
            self.save_figure(fig, save_name)

        return fig, ax

    def save_figure(self, fig, name: str, formats: Sequence[str] = ('png',)) -> List[str]:
        """
        Save a figure in the figure directory.

        Args:
            fig: Figure to save
            name: Base filename without extension
            formats: File formats to write

        Returns:
            Paths of the written files
        """
        os.makedirs(self.figure_dir, exist_ok=True)
        paths = []
        for fmt in formats:
            path = os.path.join(self.figure_dir, f"{name}.{fmt}")
            fig.savefig(path, format=fmt)
            paths.append(path)
        logger.info(f"Saved figure {name} as {', '.join(formats)}")
        return paths
