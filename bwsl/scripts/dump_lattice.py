#!/usr/bin/env python3
"""
Dump the geometric tables of a lattice as delimited text.

By default the pairs table of the closed 4x4 square lattice is printed on
standard output: one line per ordered pair of sites with their distance and
connecting vector.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional

from ..io.tables import momenta_frame, pairs_frame, positions_frame, save_table
from ..lattices import BRAVAIS_LATTICES, Boundaries, Lattice, get_bravais

logger = logging.getLogger(__name__)

TABLES = {
    'pairs': pairs_frame,
    'positions': positions_frame,
    'momenta': momenta_frame,
}


@dataclass
class DumpConfig:
    """Configuration for a lattice dump."""
    lattice: str = 'square'
    size: List[int] = None  # one extent per dimension
    open_boundaries: bool = False
    table: str = 'pairs'
    output: Optional[str] = None  # stdout when None
    separator: str = ','
    verbose: bool = False

    def __post_init__(self):
        """Set defaults if not provided."""
        if self.size is None:
            self.size = [4] * get_bravais(self.lattice).dim
        if self.table not in TABLES:
            raise ValueError(f"Unknown table: {self.table}")

    @property
    def boundaries(self) -> Boundaries:
        return Boundaries.OPEN if self.open_boundaries else Boundaries.CLOSED


def run(config: DumpConfig) -> None:
    """Build the configured lattice and write the requested table."""
    lattice = Lattice(get_bravais(config.lattice), config.size, config.boundaries)
    frame = TABLES[config.table](lattice)
    save_table(frame, config.output if config.output else sys.stdout, sep=config.separator)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bwsl-dumplattice',
        description="Print positions, pair distances or momenta of a finite lattice"
    )
    parser.add_argument(
        '--lattice',
        type=str,
        default='square',
        choices=sorted(BRAVAIS_LATTICES),
        help='Bravais lattice type'
    )
    parser.add_argument(
        '--size',
        nargs='+',
        type=int,
        help='Number of sites along each primitive direction (default: 4 each)'
    )
    parser.add_argument(
        '--open',
        action='store_true',
        help='Use open instead of periodic boundary conditions'
    )
    parser.add_argument(
        '--table',
        type=str,
        default='pairs',
        choices=sorted(TABLES),
        help='Table to write'
    )
    parser.add_argument(
        '--output',
        type=str,
        help='Output file (default: standard output)'
    )
    parser.add_argument(
        '--sep',
        type=str,
        default=',',
        help='Field separator'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the lattice dump."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    config = DumpConfig(
        lattice=args.lattice,
        size=args.size,
        open_boundaries=args.open,
        table=args.table,
        output=args.output,
        separator=args.sep,
        verbose=args.verbose
    )

    dim = get_bravais(config.lattice).dim
    if len(config.size) != dim:
        parser.error(f"--size needs {dim} values for the {config.lattice} lattice, "
                     f"got {len(config.size)}")
    if any(s <= 0 for s in config.size):
        parser.error(f"--size values must be positive, got {config.size}")

    logger.debug(f"Dump configuration: {config}")
    run(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
