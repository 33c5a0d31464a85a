# mapper_covers/nerve/nerve_utils.py
from __future__ import annotations

import logging
from typing import Any, Dict, Hashable, List, Tuple

import numpy as np

from .combinatorics import canon_edge, canon_simplex

__all__ = ["nerve_simplices", "nerve_edges", "nerve_to_simplex_tree"]

logger = logging.getLogger(__name__)


def nerve_simplices(cover, k: int = 1) -> List[Tuple[Hashable, ...]]:
    """
    Confirmed ``k``-simplices of the nerve of a constructed cover.

    Every candidate from ``cover.neighborhood(k)`` is kept iff the level sets
    of its ``k+1`` keys share at least one point.

    Returns
    -------
    simplices :
        Key tuples, in candidate order.
    """
    candidates = cover.neighborhood(k)
    level_sets = cover.level_sets
    out: List[Tuple[Hashable, ...]] = []
    for tup in candidates:
        common = level_sets[tup[0]].points
        for key in tup[1:]:
            if common.size == 0:
                break
            common = np.intersect1d(common, level_sets[key].points, assume_unique=True)
        if common.size:
            out.append(tup)
    logger.debug("nerve k=%d: %d of %d candidates intersect", int(k), len(out), len(candidates))
    return out


def _positions(cover) -> Dict[Hashable, int]:
    return {key: i for i, key in enumerate(cover.index_set)}


def nerve_edges(cover) -> np.ndarray:
    """
    1-skeleton of the nerve as positional pairs.

    Returns
    -------
    edges :
        ``(p, 2)`` int64 array of canonical ``(i, j)``, ``i < j``, where ``i``
        and ``j`` are positions in ``cover.index_set``. Suitable input for
        :func:`~mapper_covers.nerve.adjacency.edgelist_to_adjacency`.
    """
    pos = _positions(cover)
    edges = [canon_edge(pos[a], pos[b]) for a, b in nerve_simplices(cover, 1)]
    return np.asarray(edges, dtype=np.int64).reshape(-1, 2)


def nerve_to_simplex_tree(cover, *, max_dim: int = 1, filtration_value: float = 0.0) -> Any:
    """
    Build a Gudhi SimplexTree from the nerve of a constructed cover.

    Inserts one vertex per level set (at its index-set position) and every
    confirmed simplex up to ``max_dim``.

    Parameters
    ----------
    cover :
        A constructed cover.
    max_dim :
        Highest simplex dimension to insert.
    filtration_value :
        Filtration assigned to every inserted simplex (static complex).

    Returns
    -------
    st : gudhi.SimplexTree
    """
    try:
        import gudhi
    except ImportError as e:
        raise ImportError("This function requires `gudhi`. Install with `pip install gudhi`.") from e

    st = gudhi.SimplexTree()
    pos = _positions(cover)
    for v in pos.values():
        st.insert([int(v)], filtration=filtration_value)
    for dim in range(1, int(max_dim) + 1):
        for tup in nerve_simplices(cover, dim):
            st.insert(list(canon_simplex([pos[key] for key in tup])), filtration=filtration_value)
    return st
