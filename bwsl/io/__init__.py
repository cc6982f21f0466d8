"""Tabular output of lattice tables."""

from .tables import (
    momenta_frame,
    pairs_frame,
    positions_frame,
    save_table,
    structure_factor_frame,
)

__all__ = [
    "positions_frame", "pairs_frame", "momenta_frame",
    "structure_factor_frame", "save_table",
]
