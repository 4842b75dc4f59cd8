"""
Lattice edge-list generation for the site percolation engine.

Uses NetworkX only for graph construction; all outputs are ``(m, 2)`` int64
NumPy arrays of undirected node-index pairs.  Node labelling for a square
lattice of side L is ``index = row * L + col`` with row 0 as the top row, so
the boundary wiring of the engine (first L indices = top, last L = bottom)
lines up with the geometry.
"""

from __future__ import annotations

import warnings
from typing import Sequence

import networkx as nx
import numpy as np


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _graph_to_edge_array(G: nx.Graph) -> np.ndarray:
    """Sorted ``(m, 2)`` edge array with ``u < v`` in every row."""
    if G.number_of_edges() == 0:
        return np.empty((0, 2), dtype=np.int64)
    E = np.array(sorted(tuple(sorted(e)) for e in G.edges()), dtype=np.int64)
    return E


# ---------------------------------------------------------------------------
# Public generators
# ---------------------------------------------------------------------------


def generate_square_lattice(side: int) -> np.ndarray:
    """Nearest-neighbour edges of a ``side x side`` square lattice.

    Parameters
    ----------
    side : int
        Lattice side length L (L >= 1).

    Returns
    -------
    np.ndarray, shape (2 * L * (L - 1), 2), dtype int64
        Edges as ``(u, v)`` with ``u < v``, sorted lexicographically.

    Raises
    ------
    ValueError
        If ``side < 1``.
    """
    side = int(side)
    if side < 1:
        raise ValueError(f"side must be >= 1; got {side}.")
    G = nx.grid_2d_graph(side, side)
    G = nx.relabel_nodes(G, {(r, c): r * side + c for r, c in G.nodes()})
    return _graph_to_edge_array(G)


def generate_custom(n: int, edge_list: Sequence[tuple[int, int]]) -> np.ndarray:
    """Build an edge array from an explicit list of undirected pairs.

    Self-loops are dropped and duplicate pairs (in either orientation) are
    collapsed; both emit a ``UserWarning``.

    Parameters
    ----------
    n : int
        Number of nodes (labels must be in 0..n-1).
    edge_list : sequence of (int, int)
        Undirected edges.

    Returns
    -------
    np.ndarray, shape (m, 2), dtype int64

    Raises
    ------
    ValueError
        If any node index is out of range [0, n-1].
    """
    for u, v in edge_list:
        if not (0 <= u < n and 0 <= v < n):
            raise ValueError(
                f"Edge ({u}, {v}) contains a node index out of range [0, {n - 1}]."
            )

    self_loops = [(u, v) for u, v in edge_list if u == v]
    if self_loops:
        warnings.warn(
            f"generate_custom: dropping {len(self_loops)} self-loop(s) "
            f"{self_loops[:10]}{'...' if len(self_loops) > 10 else ''}.",
            UserWarning,
            stacklevel=2,
        )

    G = nx.Graph()
    G.add_nodes_from(range(n))
    G.add_edges_from((u, v) for u, v in edge_list if u != v)

    n_dupes = len(edge_list) - len(self_loops) - G.number_of_edges()
    if n_dupes > 0:
        warnings.warn(
            f"generate_custom: collapsed {n_dupes} duplicate edge(s).",
            UserWarning,
            stacklevel=2,
        )

    return _graph_to_edge_array(G)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def edges_from_config(lattice_cfg: dict) -> tuple[int, np.ndarray]:
    """Build ``(n_nodes, edges)`` from a lattice config sub-dict.

    Supported types: ``square`` (key ``side``) and ``custom`` (keys ``n``,
    ``edges``).
    """
    ltype = lattice_cfg["type"]

    if ltype == "square":
        side = int(lattice_cfg["side"])
        return side * side, generate_square_lattice(side)
    if ltype == "custom":
        n = int(lattice_cfg["n"])
        return n, generate_custom(n, [tuple(e) for e in lattice_cfg["edges"]])

    raise ValueError(f"Unsupported lattice type: {ltype!r}")
