"""
Summary metrics over a completed percolation sweep.

All functions are pure and read only the :class:`SweepResult` they are given.
"""

from __future__ import annotations

import numpy as np

from .engine import SweepResult


class MonotonicityViolation(RuntimeError):
    """Raised when a sweep's component count rises or its largest cluster shrinks."""


def p_at_fraction(result: SweepResult, fraction: float) -> float | None:
    """First sweep threshold at which the largest cluster covers ``fraction`` of N.

    Returns ``None`` if the fraction is never reached.
    """
    for r in result.records:
        if r.largest_cluster_fraction >= fraction:
            return r.p
    return None


def sweep_summary(result: SweepResult) -> dict[str, int | float | None]:
    """Compute summary statistics for a sweep.

    Parameters
    ----------
    result : SweepResult
        Output of :meth:`SitePercolation.run`.

    Returns
    -------
    dict
        Dictionary with keys:

        - ``n_nodes`` : lattice size N
        - ``n_steps`` : number of sweep records
        - ``step`` : sweep increment
        - ``p_c`` : critical threshold, or None if the lattice never percolated
        - ``final_component_count`` : components at the last step
        - ``final_largest_cluster_size`` : largest cluster at the last step
        - ``final_largest_fraction`` : largest cluster / N at the last step
        - ``p_half`` : first p where the largest cluster covers half the lattice
    """
    last = result.records[-1] if result.records else None
    return {
        "n_nodes": result.n_nodes,
        "n_steps": len(result.records),
        "step": result.step,
        "p_c": result.p_c,
        "final_component_count": last.component_count if last else None,
        "final_largest_cluster_size": last.largest_cluster_size if last else None,
        "final_largest_fraction": last.largest_cluster_fraction if last else None,
        "p_half": p_at_fraction(result, 0.5),
    }


def check_monotonic(result: SweepResult) -> None:
    """Verify the sweep never split a cluster.

    Raises
    ------
    MonotonicityViolation
        If the component count increases or the largest cluster size
        decreases between consecutive records.
    """
    cols = result.as_arrays()
    if len(result.records) < 2:
        return

    ncc_up = np.where(np.diff(cols["component_count"]) > 0)[0]
    if ncc_up.size:
        i = int(ncc_up[0]) + 1
        raise MonotonicityViolation(
            f"Component count increased at p={cols['p'][i]} (step {i})."
        )

    smax_down = np.where(np.diff(cols["largest_cluster_size"]) < 0)[0]
    if smax_down.size:
        i = int(smax_down[0]) + 1
        raise MonotonicityViolation(
            f"Largest cluster shrank at p={cols['p'][i]} (step {i})."
        )
