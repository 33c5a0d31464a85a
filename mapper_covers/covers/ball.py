# mapper_covers/covers/ball.py
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np
from scipy.spatial import cKDTree

from ..config import CoverConfig
from ..errors import InvalidParameterError
from ..level_sets import Key, LevelSet
from ..union_find import UnionFind
from .base import Cover, ParameterField

__all__ = ["BallCover", "radius_neighbors", "component_level_sets"]

logger = logging.getLogger(__name__)


def radius_neighbors(points: np.ndarray, radius: float, *, leafsize: int = 16) -> List[List[int]]:
    """
    For every point, the indices of all points within ``radius`` (itself included).

    Thin wrapper over ``scipy.spatial.cKDTree.query_ball_point`` using the
    Euclidean metric and a closed ball (``dist <= radius``).
    """
    X = np.asarray(points, dtype=float)
    tree = cKDTree(X, leafsize=int(leafsize))
    return [list(nbrs) for nbrs in tree.query_ball_point(X, r=float(radius))]


def component_level_sets(uf: UnionFind) -> List[Tuple[Key, LevelSet]]:
    """
    One level set per union-find component.

    Components are numbered ``1, 2, ...`` in order of their smallest member,
    so the keys do not depend on which root the union-find happened to keep.
    """
    return [((c + 1,), LevelSet(points=members)) for c, members in enumerate(uf.groups().values())]


class BallCover(Cover):
    """
    Cover by connected components of the ``epsilon``-neighborhood relation.

    Two points are linked when their filter values lie within ``epsilon`` of
    each other (Euclidean distance, closed ball); each level set is one
    connected component of that relation. The level sets are therefore unions
    of overlapping balls rather than literal metric balls, and they are
    pairwise disjoint.

    Parameters
    ----------
    filter_values :
        ``(n, d)`` filter values.
    epsilon :
        Non-negative radius.

    Notes
    -----
    - ``epsilon = 0`` with distinct points gives one singleton per point.
    - ``epsilon`` at least the diameter of the data gives a single level set.
    - The query radius is ``epsilon + config.boundary_tol``, so pairs at
      exactly ``epsilon`` stay linked despite rounding.
    - Keys are ``(c,)`` with ``c`` the 1-based component number, ordered by the
      smallest point index in each component. Level sets carry no bounds, so
      :meth:`map_to` is unavailable.

    See Also
    --------
    FixedIntervalCover :
        Axis-aligned overlapping grid cover.
    """
    typename = "ball"
    parameter_fields = (
        ParameterField("epsilon", "float", "Radius of the balls linking nearby points (>= 0)."),
    )

    def __init__(self, filter_values: np.ndarray, epsilon: Optional[float] = None, *, config: Optional[CoverConfig] = None):
        super().__init__(filter_values, config=config)
        self._epsilon: Optional[float] = None
        if epsilon is not None:
            self.set_epsilon(epsilon)

    @property
    def epsilon(self) -> Optional[float]:
        return self._epsilon

    def set_epsilon(self, value: float) -> "BallCover":
        """Validate and assign ``epsilon``; returns the cover."""
        try:
            eps = float(value)
        except (TypeError, ValueError) as e:
            raise InvalidParameterError(f"epsilon must be a real number. Got {value!r}.") from e
        if not np.isfinite(eps) or eps < 0:
            raise InvalidParameterError(f"epsilon must be finite and >= 0. Got {eps}.")
        self._epsilon = eps
        self._invalidate()
        return self

    def _construct_level_sets(self) -> List[Tuple[Key, LevelSet]]:
        radius = self._epsilon + self.config.boundary_tol
        neighbors = radius_neighbors(self.filter_values, radius, leafsize=self.config.kdtree_leafsize)
        uf = UnionFind(self.n_points)
        for nbrs in neighbors:
            uf.union_all(nbrs)
        logger.debug("ball: %d components at epsilon=%g", uf.n_components, self._epsilon)
        return component_level_sets(uf)
