"""
Site percolation engine.

Nodes carry a fixed weight in [0, 1).  As the activation threshold ``p``
sweeps from 0 to 1, every node with ``weight <= p`` becomes active and every
edge whose two endpoints are active is united.  Two disjoint-set structures
are kept side by side:

  primary   size N     component count and largest-cluster bookkeeping
  boundary  size N+2   only answers "is the top row connected to the bottom
                       row"; index N is the top terminal, N+1 the bottom one

The threshold ``current_p`` is monotonically non-decreasing.  A request to
step backwards is reported to the caller and leaves all state untouched.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from .disjoint_set import DisjointSet
from .sink import PercolationSink


# Sweep upper bound tolerance for the floating grid ``i * step``.
SWEEP_TOLERANCE: float = 1e-10


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class OrderingViolation(RuntimeError):
    """A step was requested with ``p`` below the already-processed threshold.

    Returned (not raised) by :meth:`SitePercolation.advance`.
    """

    def __init__(self, p: float, current_p: float) -> None:
        super().__init__(
            f"Cannot advance to p={p}: threshold already at current_p={current_p}."
        )
        self.p = p
        self.current_p = current_p


# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StepResult:
    """Outcome of one incremental step.

    Attributes
    ----------
    component_count : int
        Components of the primary structure over all N nodes (inactive nodes
        count as singletons).
    largest_cluster_size : int
        Running largest-cluster size after the step.
    error : OrderingViolation or None
        ``None`` on success.
    """
    component_count: int
    largest_cluster_size: int
    error: OrderingViolation | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SweepRecord:
    """One row of the sweep: ``(p, Ncc, Smax, Nmax)``."""
    p: float
    component_count: int
    largest_cluster_size: int
    largest_cluster_fraction: float

    def astuple(self) -> tuple[float, int, int, float]:
        return (
            self.p,
            self.component_count,
            self.largest_cluster_size,
            self.largest_cluster_fraction,
        )


@dataclass(frozen=True)
class SweepResult:
    """Complete output of :meth:`SitePercolation.run`.

    Attributes
    ----------
    records : tuple of SweepRecord
        One record per sweep step, in increasing ``p`` order.
    p_c : float or None
        First sweep threshold at which the top and bottom rows were
        connected; ``None`` if the lattice never percolated.
    n_nodes : int
        Number of lattice nodes.
    step : float
        Sweep increment.
    sink_errors : tuple of str
        Messages for sink failures during the sweep (at most one, since a
        failing sink is detached).
    """
    records: tuple[SweepRecord, ...]
    p_c: float | None
    n_nodes: int
    step: float
    sink_errors: tuple[str, ...] = field(default=())

    def __len__(self) -> int:
        return len(self.records)

    @property
    def percolated(self) -> bool:
        return self.p_c is not None

    def as_tuples(self) -> list[tuple[float, int, int, float]]:
        return [r.astuple() for r in self.records]

    def as_arrays(self) -> dict[str, np.ndarray]:
        """Column-wise view of the records as numpy arrays."""
        return {
            "p": np.array([r.p for r in self.records], dtype=np.float64),
            "component_count": np.array(
                [r.component_count for r in self.records], dtype=np.int64
            ),
            "largest_cluster_size": np.array(
                [r.largest_cluster_size for r in self.records], dtype=np.int64
            ),
            "largest_cluster_fraction": np.array(
                [r.largest_cluster_fraction for r in self.records], dtype=np.float64
            ),
        }


# ---------------------------------------------------------------------------
# Input normalisation
# ---------------------------------------------------------------------------


def as_edge_array(edges: Sequence[tuple[int, int]] | np.ndarray, n: int) -> np.ndarray:
    """Normalise an edge list to an ``(m, 2)`` int64 array over ``[0, n)``.

    Raises
    ------
    ValueError
        If the edges are not pairs or any index is out of range.
    """
    E = np.asarray(edges, dtype=np.int64)
    if E.size == 0:
        return np.empty((0, 2), dtype=np.int64)
    if E.ndim != 2 or E.shape[1] != 2:
        raise ValueError(f"edges must have shape (m, 2); got {E.shape}.")
    bad = (E < 0) | (E >= n)
    if np.any(bad):
        row = int(np.where(bad.any(axis=1))[0][0])
        raise ValueError(
            f"Edge {tuple(E[row].tolist())} contains a node index out of range [0, {n - 1}]."
        )
    return E


def as_weight_array(weights: Sequence[float] | np.ndarray, n: int) -> np.ndarray:
    """Normalise node weights to a float64 array of shape ``(n,)``."""
    w = np.asarray(weights, dtype=np.float64)
    if w.shape != (n,):
        raise ValueError(f"weights must have shape ({n},); got {w.shape}.")
    return w


def sweep_grid(step: float) -> np.ndarray:
    """Thresholds ``0, step, 2*step, ...`` up to 1.0 (with tolerance).

    Each value is computed as ``i * step`` rather than by repeated addition,
    so the grid does not drift.
    """
    step = float(step)
    if not (math.isfinite(step) and step > 0):
        raise ValueError(f"step must be a positive finite number; got {step}.")
    n_points = int(math.floor((1.0 + SWEEP_TOLERANCE) / step)) + 1
    grid = np.arange(n_points, dtype=np.float64) * step
    return grid[grid <= 1.0 + SWEEP_TOLERANCE]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class SitePercolation:
    """Incremental site percolation over a fixed set of ``n_nodes`` nodes.

    Parameters
    ----------
    n_nodes : int
        Number of lattice nodes N.  The boundary wiring assumes a square
        lattice of side ``floor(sqrt(N))``.
    """

    def __init__(self, n_nodes: int) -> None:
        n_nodes = int(n_nodes)
        if n_nodes < 1:
            raise ValueError(f"n_nodes must be >= 1; got {n_nodes}.")
        self.n_nodes = n_nodes
        self.current_p: float = 0.0
        self.active: np.ndarray = np.zeros(n_nodes, dtype=bool)
        self.largest_cluster_size: int = 1
        self.p_c: float | None = None

        self.clusters = DisjointSet(n_nodes)
        self.boundary = DisjointSet(n_nodes + 2)
        self.top = n_nodes
        self.bottom = n_nodes + 1
        self._boundaries_initialized = False
        self._component_count = n_nodes

    def __repr__(self) -> str:
        return (
            f"SitePercolation(n_nodes={self.n_nodes}, current_p={self.current_p}, "
            f"n_active={self.n_active})"
        )

    @property
    def n_active(self) -> int:
        return int(np.count_nonzero(self.active))

    @property
    def side(self) -> int:
        return math.isqrt(self.n_nodes)

    # ------------------------------------------------------------------
    # Boundary structure
    # ------------------------------------------------------------------

    def initialize_boundaries(self) -> None:
        """Wire the top terminal to the first row and the bottom one to the last.

        The lattice side is ``floor(sqrt(N))``.  When N is not a perfect
        square the "last row" is just the final ``side`` indices, so the
        remainder nodes of a partial row are treated as interior.  Calling
        this more than once has no further effect.
        """
        if self._boundaries_initialized:
            return
        side = self.side
        n = self.n_nodes
        for i in range(side):
            self.boundary.unite(self.top, i)
            self.boundary.unite(self.bottom, n - side + i)
        self._boundaries_initialized = True

    def has_percolated(self) -> bool:
        """Whether a path of active nodes joins the top row to the bottom row."""
        return self.boundary.find(self.top) == self.boundary.find(self.bottom)

    # ------------------------------------------------------------------
    # Incremental step
    # ------------------------------------------------------------------

    def advance(
        self,
        edges: Sequence[tuple[int, int]] | np.ndarray,
        weights: Sequence[float] | np.ndarray,
        p: float,
    ) -> StepResult:
        """Raise the threshold to ``p`` and unite every edge with both ends active.

        Parameters
        ----------
        edges : array-like, shape (m, 2)
            Lattice edges as node-index pairs.
        weights : array-like, shape (N,)
            Per-node weights; a node is active once ``weight <= p``.
        p : float
            New threshold.  Must be >= ``current_p``.

        Returns
        -------
        StepResult
            Component count and largest cluster size after the step.  When
            ``p < current_p`` nothing is mutated, the previous values are
            returned and ``error`` holds an :class:`OrderingViolation`.

        Raises
        ------
        ValueError
            If ``p`` is not finite, or edges / weights are malformed.
        """
        p = float(p)
        if not math.isfinite(p):
            raise ValueError(f"p must be finite; got {p}.")

        if p < self.current_p:
            err = OrderingViolation(p, self.current_p)
            warnings.warn(str(err), RuntimeWarning, stacklevel=2)
            return StepResult(self._component_count, self.largest_cluster_size, err)

        E = as_edge_array(edges, self.n_nodes)
        w = as_weight_array(weights, self.n_nodes)

        # Activation: inclusive boundary, never deactivates.
        self.active |= w <= p

        if E.shape[0]:
            eligible = self.active[E[:, 0]] & self.active[E[:, 1]]
            for u, v in E[eligible].tolist():
                if self.clusters.unite(u, v):
                    self.largest_cluster_size = max(
                        self.largest_cluster_size, self.clusters.get_size(u)
                    )
                self.boundary.unite(u, v)

        self.current_p = p
        self._component_count = self.clusters.count_components(self.n_nodes)
        return StepResult(self._component_count, self.largest_cluster_size)

    # ------------------------------------------------------------------
    # Full sweep
    # ------------------------------------------------------------------

    def run(
        self,
        edges: Sequence[tuple[int, int]] | np.ndarray,
        weights: Sequence[float] | np.ndarray,
        step: float,
        sink: PercolationSink | None = None,
    ) -> SweepResult:
        """Sweep ``p`` from 0 to 1 in increments of ``step``.

        Parameters
        ----------
        edges : array-like, shape (m, 2)
            Lattice edges.
        weights : array-like, shape (N,)
            Per-node weights in [0, 1).
        step : float
            Sweep increment, > 0.
        sink : PercolationSink or None, optional
            Receives every record and the per-node cluster roots at each step.
            A sink that raises is detached with a ``RuntimeWarning``; the sweep
            itself always completes.

        Returns
        -------
        SweepResult
            All records plus the critical threshold ``p_c``.

        Raises
        ------
        ValueError
            If the engine has already been advanced; one engine serves one run.
        """
        if self.current_p > 0 or self.active.any():
            raise ValueError(
                f"run() needs a fresh engine; this one is already at "
                f"current_p={self.current_p} with {self.n_active} active node(s)."
            )
        grid = sweep_grid(step)
        E = as_edge_array(edges, self.n_nodes)
        w = as_weight_array(weights, self.n_nodes)

        self.largest_cluster_size = 1
        self.initialize_boundaries()

        records: list[SweepRecord] = []
        sink_errors: list[str] = []
        p_c: float | None = None

        for p in grid.tolist():
            result = self.advance(E, w, p)
            record = SweepRecord(
                p=p,
                component_count=result.component_count,
                largest_cluster_size=result.largest_cluster_size,
                largest_cluster_fraction=result.largest_cluster_size / self.n_nodes,
            )
            records.append(record)

            if sink is not None:
                try:
                    sink.write_step(record)
                    sink.write_roots(p, self.cluster_roots())
                except Exception as exc:
                    msg = f"Sink failed at p={p} ({exc!r}); continuing without it."
                    warnings.warn(msg, RuntimeWarning, stacklevel=2)
                    sink_errors.append(msg)
                    sink = None

            if p_c is None and self.has_percolated():
                p_c = p

        self.p_c = p_c
        return SweepResult(
            records=tuple(records),
            p_c=p_c,
            n_nodes=self.n_nodes,
            step=float(step),
            sink_errors=tuple(sink_errors),
        )

    # ------------------------------------------------------------------
    # Supplementary queries
    # ------------------------------------------------------------------

    def cluster_roots(self) -> np.ndarray:
        """Primary-structure root id of every node, shape ``(N,)``."""
        return self.clusters.roots()

    def active_component_count(self) -> int:
        """Clusters among active nodes only; inactive singletons are excluded."""
        return len({self.clusters.find(i) for i in np.flatnonzero(self.active).tolist()})
