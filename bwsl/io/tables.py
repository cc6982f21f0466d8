"""
Tabular dumps of lattice tables for external inspection.

Each table is built as a pandas DataFrame and written as delimited text with
a header line of column names followed by one line per site or pair.
"""

import logging
from pathlib import Path
from typing import TextIO, Union

import numpy as np
import pandas as pd

from ..lattices.lattice import Lattice

logger = logging.getLogger(__name__)


def _components(prefix: str, values: np.ndarray, dim: int) -> dict:
    values = np.asarray(values).reshape(-1, dim)
    return {f"{prefix}{k}": values[:, k] for k in range(dim)}


def positions_frame(lattice: Lattice) -> pd.DataFrame:
    """Real space position of every site."""
    data = {"site": np.arange(lattice.num_sites)}
    data.update(_components("x", lattice.positions, lattice.dim))
    return pd.DataFrame(data)


def pairs_frame(lattice: Lattice) -> pd.DataFrame:
    """
    Distance and connecting vector for every ordered pair of sites.

    Rows are ordered by first site, then second site.
    """
    n = lattice.num_sites
    first = np.repeat(np.arange(n), n)
    second = np.tile(np.arange(n), n)
    vectors = np.array([lattice.vector(a, b) for a, b in zip(first, second)])

    data = {"first": first, "second": second,
            "distance": np.linalg.norm(vectors.reshape(-1, lattice.dim), axis=1)}
    data.update(_components("v", vectors, lattice.dim))
    return pd.DataFrame(data)


def momenta_frame(lattice: Lattice) -> pd.DataFrame:
    """Allowed momenta; empty with open boundaries."""
    m = len(lattice.momenta)
    data = {"site": np.arange(m)}
    data.update(_components("k", lattice.momenta, lattice.dim))
    return pd.DataFrame(data)


def structure_factor_frame(lattice: Lattice, sk) -> pd.DataFrame:
    """Allowed momenta together with the structure factor evaluated on them."""
    frame = momenta_frame(lattice)
    sk = np.asarray(sk, dtype=np.float64)
    if len(frame) != len(sk):
        raise ValueError(
            f"Structure factor has {len(sk)} entries but the lattice has {len(frame)} momenta")
    frame["sk"] = sk
    return frame


def save_table(frame: pd.DataFrame, destination: Union[str, Path, TextIO],
               sep: str = ",") -> None:
    """
    Write a table as delimited text.

    Args:
        frame: Table to write
        destination: File path or open text stream
        sep: Field separator
    """
    if isinstance(destination, (str, Path)):
        Path(destination).parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(destination, sep=sep, index=False)
    name = getattr(destination, "name", destination)
    logger.info(f"Wrote {len(frame)} rows to {name}")
