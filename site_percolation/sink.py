"""
Optional output sink for per-step sweep snapshots.

The engine only talks to the :class:`PercolationSink` protocol.  ``CsvSink``
writes the two tabular streams used by earlier tooling:

  percolation_report.csv     p,Ncc,Smax,Nmax
  cluster_of_each_node.csv   p,node_0,...,node_{N-1}   (cluster root ids)

The per-node columns were previously headed ``Nodo_i``; they are now
``node_i`` (see ``NODE_COLUMN_PREFIX``) with the same meaning, one cluster
root id per node.
"""

from __future__ import annotations

import csv
from contextlib import ExitStack
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from .engine import SweepRecord


REPORT_FILENAME = "percolation_report.csv"
ROOTS_FILENAME = "cluster_of_each_node.csv"
REPORT_FIELDS = ["p", "Ncc", "Smax", "Nmax"]
NODE_COLUMN_PREFIX = "node_"


class PercolationSink(Protocol):
    def write_step(self, record: SweepRecord) -> None: ...

    def write_roots(self, p: float, roots: np.ndarray) -> None: ...


class CsvSink:
    """Write sweep records and cluster roots to two CSV files in ``output_dir``.

    Use as a context manager, or call :meth:`close` when done.
    """

    def __init__(self, output_dir: str | Path, n_nodes: int) -> None:
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.n_nodes = int(n_nodes)
        self.report_path = self.output_dir / REPORT_FILENAME
        self.roots_path = self.output_dir / ROOTS_FILENAME

        with ExitStack() as stack:
            self._report_fh = stack.enter_context(self.report_path.open("w", newline=""))
            self._roots_fh = stack.enter_context(self.roots_path.open("w", newline=""))
            # Both opened: keep them past the with-block.
            self._files = stack.pop_all()
        self._report = csv.writer(self._report_fh)
        self._roots = csv.writer(self._roots_fh)

        self._report.writerow(REPORT_FIELDS)
        self._roots.writerow(["p"] + [f"{NODE_COLUMN_PREFIX}{i}" for i in range(self.n_nodes)])

    def __enter__(self) -> CsvSink:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def write_step(self, record: SweepRecord) -> None:
        self._report.writerow(list(record.astuple()))

    def write_roots(self, p: float, roots: np.ndarray) -> None:
        if len(roots) != self.n_nodes:
            raise ValueError(
                f"roots must have length {self.n_nodes}; got {len(roots)}."
            )
        self._roots.writerow([p] + [int(r) for r in roots])

    def close(self) -> None:
        self._files.close()
