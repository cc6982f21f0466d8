"""Plots of lattices, momenta and structure factors."""

from .plots import LatticePlotter

__all__ = ["LatticePlotter"]
