# mapper_covers/nerve/neighborhood.py
from __future__ import annotations

import itertools
import logging
from typing import Hashable, List, Sequence, Tuple

import numpy as np

__all__ = [
    "all_combinations",
    "grid_multi_index",
    "grid_max_deviation",
    "grid_neighborhood",
]

logger = logging.getLogger(__name__)


def _check_k(k: int) -> int:
    k = int(k)
    if k < 1:
        raise ValueError(f"k must be >= 1 (k-fold intersections use k+1 sets). Got {k}.")
    return k


def all_combinations(index_set: Sequence[Hashable], k: int) -> List[Tuple[Hashable, ...]]:
    """
    Every ``(k+1)``-subset of ``index_set``, in index-set order.

    This is the unpruned candidate set for ``(k+1)``-fold intersections:
    ``C(m, k+1)`` tuples for ``m`` keys.
    """
    k = _check_k(k)
    return list(itertools.combinations(list(index_set), k + 1))


def grid_multi_index(number_intervals: Sequence[int]) -> np.ndarray:
    """
    1-based multi-indices of a grid, last dimension varying fastest.

    Row order matches ``itertools.product`` and lexicographic tuple order,
    so row ``i`` sits at position ``i`` of the index set.

    Returns
    -------
    multi_index :
        ``(prod(number_intervals), d)`` int64 array.
    """
    shape = tuple(int(n) for n in number_intervals)
    d = len(shape)
    return np.indices(shape, dtype=np.int64).reshape(d, -1).T + 1


def grid_max_deviation(
    number_intervals: Sequence[int],
    spacing: Sequence[float],
    interval_length: Sequence[float],
    *,
    tol: float = 0.0,
) -> np.ndarray:
    """
    Largest per-dimension grid-index gap at which two boxes can still overlap.

    Along dimension ``d`` adjacent box centroids are ``spacing[d]`` apart, so
    boxes ``s`` steps apart have centroids ``s * spacing[d]`` apart. These
    *critical distances* (``s = 1..n-1``) are compared against the box length
    (padded by ``2 * tol`` since both boxes carry ``tol`` on each side); boxes
    whose critical distance exceeds it cannot meet.

    Returns
    -------
    max_dev :
        ``(d,)`` int64 array, each entry at least 1.
    """
    out = []
    for n_d, s_d, L_d in zip(number_intervals, spacing, interval_length):
        n_d = int(n_d)
        if n_d <= 1:
            out.append(1)
            continue
        critical = float(s_d) * np.arange(1, n_d, dtype=float)
        n_within = int(np.searchsorted(critical, float(L_d) + 2.0 * float(tol), side="right"))
        out.append(max(1, n_within))
    return np.asarray(out, dtype=np.int64)


def grid_neighborhood(number_intervals: Sequence[int], max_dev: Sequence[int]) -> np.ndarray:
    """
    Positional pairs ``(i, j)``, ``i < j``, of grid cells within ``max_dev``.

    Cells are numbered in :func:`grid_multi_index` order. Rather than testing
    all ``C(m, 2)`` pairs, every cell is paired with the cells reachable by a
    lexicographically positive offset inside the ``max_dev`` box, which keeps
    the work proportional to ``m`` times the neighborhood size.

    Returns
    -------
    pairs :
        ``(p, 2)`` int64 array sorted by ``(i, j)``.
    """
    shape = tuple(int(n) for n in number_intervals)
    dev = [min(int(v), n - 1) for v, n in zip(max_dev, shape)]
    M0 = grid_multi_index(shape) - 1
    pos = np.arange(M0.shape[0], dtype=np.int64)
    upper = np.asarray(shape, dtype=np.int64)

    chunks: List[np.ndarray] = []
    for off in itertools.product(*(range(-v, v + 1) for v in dev)):
        nz = [o for o in off if o != 0]
        if len(nz) == 0 or nz[0] < 0:
            continue
        nb = M0 + np.asarray(off, dtype=np.int64)
        ok = np.all((nb >= 0) & (nb < upper), axis=1)
        if not np.any(ok):
            continue
        j = np.ravel_multi_index(tuple(nb[ok].T), shape)
        chunks.append(np.column_stack([pos[ok], j]))

    if len(chunks) == 0:
        return np.empty((0, 2), dtype=np.int64)
    pairs = np.concatenate(chunks, axis=0).astype(np.int64)
    order = np.lexsort((pairs[:, 1], pairs[:, 0]))
    pairs = pairs[order]

    n_all = M0.shape[0] * (M0.shape[0] - 1) // 2
    logger.debug("grid neighborhood kept %d of %d pairs (max_dev=%s)", pairs.shape[0], n_all, dev)
    return pairs
