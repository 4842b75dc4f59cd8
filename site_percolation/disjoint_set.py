"""
Disjoint-set (union-find) structure for the site percolation engine.

Elements are the integers ``0 .. n-1``.  Storage is allocated once as two
numpy arrays and never resized:

    parent[x]  parent pointer of x (parent[r] == r for a root r)
    size[r]    number of elements in the component rooted at r

``unite`` uses union by size and ``find`` uses full path compression, which
together give amortised near-constant cost per operation.
"""

from __future__ import annotations

import numpy as np


class DisjointSet:
    """Union-find over ``0 .. n-1`` with union by size and path compression.

    Parameters
    ----------
    n : int
        Number of elements managed.  Must be >= 1.

    Raises
    ------
    ValueError
        If ``n < 1``.
    """

    def __init__(self, n: int) -> None:
        n = int(n)
        if n < 1:
            raise ValueError(f"DisjointSet needs at least one element; got n={n}.")
        self._n = n
        self.parent: np.ndarray = np.arange(n, dtype=np.int64)
        self.size: np.ndarray = np.ones(n, dtype=np.int64)

    def __len__(self) -> int:
        return self._n

    def __repr__(self) -> str:
        return f"DisjointSet(n={self._n}, components={self.count_components()})"

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _check(self, x: int) -> int:
        x = int(x)
        if not (0 <= x < self._n):
            raise IndexError(f"Element {x} out of range [0, {self._n - 1}].")
        return x

    def find(self, x: int) -> int:
        """Return the root of ``x``, re-pointing every visited node at it."""
        x = self._check(x)
        parent = self.parent

        root = x
        while parent[root] != root:
            root = int(parent[root])

        # Second pass: full path compression.
        while parent[x] != root:
            nxt = int(parent[x])
            parent[x] = root
            x = nxt
        return root

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def get_size(self, x: int) -> int:
        """Size of the component containing ``x``."""
        return int(self.size[self.find(x)])

    def count_components(self, n: int | None = None) -> int:
        """Number of distinct roots among the first ``n`` elements.

        Every element that was never united is its own singleton component,
        so before any ``unite`` this equals ``n``.

        Parameters
        ----------
        n : int or None, optional
            Prefix length to inspect.  Defaults to all elements.

        Raises
        ------
        ValueError
            If ``n`` is outside ``[0, len(self)]``.
        """
        if n is None:
            n = self._n
        n = int(n)
        if not (0 <= n <= self._n):
            raise ValueError(f"count_components: n must be in [0, {self._n}]; got {n}.")
        if n == 0:
            return 0
        return int(np.unique(self.roots()[:n]).size)

    def roots(self) -> np.ndarray:
        """Root of every element, shape ``(n,)``.

        Resolved for all elements at once by pointer jumping over the parent
        array; the result is written back, so every path ends up compressed.
        """
        parent = self.parent
        while True:
            grand = parent[parent]
            if np.array_equal(grand, parent):
                break
            parent = grand
        self.parent[:] = parent
        return parent.copy()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def unite(self, a: int, b: int) -> bool:
        """Merge the components of ``a`` and ``b``.

        The root of the smaller component is attached under the root of the
        larger one; on a tie ``b``'s root goes under ``a``'s root.

        Returns
        -------
        bool
            ``True`` if two distinct components were merged, ``False`` if
            ``a`` and ``b`` were already connected (no-op).
        """
        ra = self.find(a)
        rb = self.find(b)
        if ra == rb:
            return False
        if self.size[ra] < self.size[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        self.size[ra] += self.size[rb]
        return True
