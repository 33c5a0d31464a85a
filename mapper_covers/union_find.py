# mapper_covers/union_find.py
from __future__ import annotations

from typing import Dict, Iterable, List

import numpy as np

__all__ = ["UnionFind"]


class UnionFind:
    """
    Disjoint-set forest over the integers ``0..n-1``.

    Uses union by rank and path compression (halving), so a sequence of
    ``m`` operations costs ``O(m α(n))``.

    Parameters
    ----------
    n :
        Number of elements. Each starts in its own singleton component.

    Notes
    -----
    Component labels returned by :meth:`connected_components` are the current
    roots. They are arbitrary but consistent within one call: two elements
    share a label iff some chain of unions connects them.
    """

    __slots__ = ("_parent", "_rank")

    def __init__(self, n: int):
        n = int(n)
        if n < 0:
            raise ValueError(f"n must be >= 0. Got {n}.")
        self._parent = np.arange(n, dtype=np.int64)
        self._rank = np.zeros(n, dtype=np.int64)

    def __len__(self) -> int:
        return int(self._parent.shape[0])

    def find(self, x: int) -> int:
        """Root of the component containing ``x``."""
        parent = self._parent
        x = int(x)
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = int(parent[x])
        return x

    def union(self, a: int, b: int) -> int:
        """Merge the components of ``a`` and ``b``; returns the surviving root."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return ra
        rank = self._rank
        if rank[ra] < rank[rb]:
            ra, rb = rb, ra
        self._parent[rb] = ra
        if rank[ra] == rank[rb]:
            rank[ra] += 1
        return ra

    def union_all(self, elements: Iterable[int]) -> int:
        """
        Union every element of a non-empty sequence with its first element.

        Equivalent to folding :meth:`union` over the sequence; the resulting
        components do not depend on the order of the elements.

        Returns
        -------
        root :
            Root of the merged component.
        """
        items = [int(e) for e in elements]
        if len(items) == 0:
            raise ValueError("union_all requires a non-empty sequence.")
        first = items[0]
        root = self.find(first)
        for e in items[1:]:
            root = self.union(first, e)
        return root

    def connected_components(self) -> np.ndarray:
        """
        Component label for every element.

        Returns
        -------
        labels :
            ``(n,)`` int64 array; ``labels[i] == labels[j]`` iff ``i`` and ``j``
            are connected.
        """
        return np.fromiter((self.find(i) for i in range(len(self))), dtype=np.int64, count=len(self))

    @property
    def n_components(self) -> int:
        return int(np.unique(self.connected_components()).size)

    def groups(self) -> Dict[int, List[int]]:
        """Root -> sorted member list, roots in order of first appearance."""
        out: Dict[int, List[int]] = {}
        for i, r in enumerate(self.connected_components().tolist()):
            out.setdefault(r, []).append(i)
        return out
