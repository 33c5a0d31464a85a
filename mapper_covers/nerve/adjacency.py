# mapper_covers/nerve/adjacency.py
from __future__ import annotations

from typing import Dict, Hashable, Iterable, List, Sequence

import numpy as np

__all__ = ["edgelist_to_adjacency", "valid_pairs"]


def _py(x):
    return x.item() if isinstance(x, np.generic) else x


def edgelist_to_adjacency(edges: Iterable[Sequence[Hashable]]) -> Dict[Hashable, List[Hashable]]:
    """
    Directed adjacency view of an edge list.

    Parameters
    ----------
    edges :
        Iterable of ``(from, to)`` pairs, or an ``(m, 2)`` array.

    Returns
    -------
    adjacency :
        ``from -> [to, ...]`` in first-seen order. Repeated edges are kept, and
        nodes that only ever appear as ``to`` get no entry.
    """
    adj: Dict[Hashable, List[Hashable]] = {}
    for e in edges:
        if len(e) != 2:
            raise ValueError(f"Each edge must be a (from, to) pair. Got {e!r}.")
        src, dst = _py(e[0]), _py(e[1])
        adj.setdefault(src, []).append(dst)
    return adj


def valid_pairs(rows: np.ndarray, *, missing: int = -1) -> np.ndarray:
    """
    Flatten padded candidate rows into ``(from, to)`` pairs.

    Each row is ``[from, to_1, to_2, ...]``; entries equal to ``missing`` (or
    NaN for float input) are skipped.

    Returns
    -------
    pairs :
        ``(p, 2)`` int64 array, row-major over the input.
    """
    R = np.asarray(rows)
    if R.ndim != 2 or R.shape[1] < 2:
        raise ValueError(f"rows must have shape (n, k) with k >= 2. Got {R.shape}.")
    targets = R[:, 1:]
    if np.issubdtype(R.dtype, np.floating):
        keep = ~np.isnan(targets) & (targets != missing)
    else:
        keep = targets != missing
    src = np.broadcast_to(R[:, :1], targets.shape)[keep]
    dst = targets[keep]
    return np.column_stack([src, dst]).astype(np.int64)
