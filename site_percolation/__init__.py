"""
site_percolation — Incremental Site Percolation Engine
======================================================

Sweeps an activation threshold ``p`` from 0 to 1 over a lattice whose nodes
carry fixed random weights.  A node is active once its weight is ``<= p``;
edges between active nodes are merged in a union-find structure.  Each sweep
step reports the number of clusters and the size of the largest one, and the
first ``p`` at which the top and bottom rows are connected is recorded as the
critical threshold ``p_c``.

Quick start
-----------
>>> import numpy as np
>>> from site_percolation import SitePercolation, generate_square_lattice
>>> side = 16
>>> edges = generate_square_lattice(side)
>>> weights = np.random.default_rng(42).random(side * side)
>>> result = SitePercolation(side * side).run(edges, weights, step=0.01)
>>> result.p_c is not None
True
"""

from .disjoint_set import DisjointSet
from .engine import (
    SitePercolation,
    StepResult,
    SweepRecord,
    SweepResult,
    OrderingViolation,
    sweep_grid,
)
from .lattice import generate_square_lattice, generate_custom, edges_from_config
from .config import load_config, build_rng, generate_weights
from .metrics import sweep_summary, check_monotonic, p_at_fraction, MonotonicityViolation
from .sink import CsvSink, PercolationSink

__all__ = [
    # disjoint set
    "DisjointSet",
    # engine
    "SitePercolation", "StepResult", "SweepRecord", "SweepResult",
    "OrderingViolation", "sweep_grid",
    # lattice
    "generate_square_lattice", "generate_custom", "edges_from_config",
    # config
    "load_config", "build_rng", "generate_weights",
    # metrics
    "sweep_summary", "check_monotonic", "p_at_fraction", "MonotonicityViolation",
    # sink
    "CsvSink", "PercolationSink",
]
