# mapper_covers/config.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

__all__ = ["CoverConfig", "DEFAULT_CONFIG"]


@dataclass(frozen=True)
class CoverConfig:
    """
    Numerical and behavioral settings shared by every cover.

    Attributes
    ----------
    boundary_tol :
        Padding added to both ends of every axis-aligned level set so that
        points lying exactly on a closed boundary stay inside despite rounding.
        Also used to widen the grid-pruning test in ``neighborhood(1)`` and the
        radius of the closed balls in :class:`BallCover`.
    kdtree_leafsize :
        Leaf size of the ``scipy.spatial.cKDTree`` used by :class:`BallCover`.
    validate_on_construct :
        If True, :meth:`Cover.construct_cover` calls :meth:`Cover.validate`
        before returning.
    """
    boundary_tol: float = float(np.sqrt(np.finfo(float).eps))
    kdtree_leafsize: int = 16
    validate_on_construct: bool = False

    def __post_init__(self):
        if not np.isfinite(self.boundary_tol) or self.boundary_tol < 0:
            raise ValueError(f"boundary_tol must be finite and >= 0. Got {self.boundary_tol}.")
        if int(self.kdtree_leafsize) < 1:
            raise ValueError(f"kdtree_leafsize must be >= 1. Got {self.kdtree_leafsize}.")


DEFAULT_CONFIG = CoverConfig()
