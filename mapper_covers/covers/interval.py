# mapper_covers/covers/interval.py
from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from ..config import CoverConfig
from ..errors import InvalidParameterError, MissingParameterError
from ..geometry.boxes import points_in_boxes
from ..level_sets import Key, LevelSet, format_index_key
from ..nerve.neighborhood import grid_max_deviation, grid_multi_index, grid_neighborhood
from .base import Cover, ParameterField

__all__ = ["IntervalCoverBase"]


class IntervalCoverBase(Cover):
    """
    Shared machinery for grid covers made of axis-aligned boxes.

    The index set is the cartesian product of ``1..number_intervals[d]``
    (last dimension varying fastest) and every level set is the closed box
    returned by :meth:`interval_bounds`. Subclasses define the box geometry
    through :meth:`interval_bounds` and :meth:`_grid_geometry`.

    Parameters
    ----------
    filter_values :
        ``(n, d)`` filter values.
    number_intervals :
        Positive integer(s); a scalar is repeated along every dimension.
    percent_overlap :
        Percentage(s) in ``[0, 100)``; a scalar is repeated along every dimension.
    """
    parameter_fields = (
        ParameterField("number_intervals", "int[d]", "Number of intervals along each filter dimension."),
        ParameterField("percent_overlap", "float[d]", "Overlap between adjacent intervals, in percent [0, 100)."),
    )

    def __init__(
        self,
        filter_values: np.ndarray,
        number_intervals=None,
        percent_overlap=None,
        *,
        config: Optional[CoverConfig] = None,
    ):
        super().__init__(filter_values, config=config)
        self._number_intervals: Optional[np.ndarray] = None
        self._percent_overlap: Optional[np.ndarray] = None
        if number_intervals is not None:
            self.set_number_intervals(number_intervals)
        if percent_overlap is not None:
            self.set_percent_overlap(percent_overlap)

    # ----------------------------
    # Parameters
    # ----------------------------

    @property
    def number_intervals(self) -> Optional[np.ndarray]:
        return None if self._number_intervals is None else self._number_intervals.copy()

    @property
    def percent_overlap(self) -> Optional[np.ndarray]:
        return None if self._percent_overlap is None else self._percent_overlap.copy()

    def set_number_intervals(self, value) -> "IntervalCoverBase":
        """Validate and assign ``number_intervals``; returns the cover."""
        arr = self._broadcast_param("number_intervals", value, dtype=float)
        if not np.all(np.isfinite(arr)) or np.any(arr != np.round(arr)):
            raise InvalidParameterError(f"number_intervals must be integers. Got {arr.tolist()}.")
        if np.any(arr < 1):
            raise InvalidParameterError(f"number_intervals must be positive. Got {arr.tolist()}.")
        self._number_intervals = arr.astype(np.int64)
        self._invalidate()
        return self

    def set_percent_overlap(self, value) -> "IntervalCoverBase":
        """Validate and assign ``percent_overlap``; returns the cover."""
        self._percent_overlap = self._check_percent_overlap(value)
        self._invalidate()
        return self

    def _check_percent_overlap(self, value) -> np.ndarray:
        arr = self._broadcast_param("percent_overlap", value, dtype=float)
        if not np.all(np.isfinite(arr)) or np.any(arr < 0) or np.any(arr >= 100):
            raise InvalidParameterError(
                f"The percent overlap must be a percentage between [0, 100). Got {arr.tolist()}."
            )
        return arr

    def _require_number_intervals(self) -> np.ndarray:
        if self._number_intervals is None:
            raise MissingParameterError(f"{type(self).__name__} requires number_intervals to be set.")
        return self._number_intervals

    @property
    def multi_index(self) -> np.ndarray:
        """``(m, d)`` 1-based grid indices in index-set order."""
        return grid_multi_index(self._require_number_intervals())

    # ----------------------------
    # Geometry (subclass hooks)
    # ----------------------------

    def interval_bounds(self, index=None) -> np.ndarray:
        raise NotImplementedError

    def _grid_geometry(self) -> Tuple[np.ndarray, np.ndarray]:
        """``(spacing, interval_length)`` per dimension: centroid step and box length."""
        raise NotImplementedError

    def _check_grid_key(self, key: Key) -> Key:
        n = self._require_number_intervals()
        if len(key) != n.size or any(k < 1 or k > n_d for k, n_d in zip(key, n.tolist())):
            raise KeyError(f"{format_index_key(key)} is not in the index set.")
        return key

    # ----------------------------
    # Construction
    # ----------------------------

    def _construct_level_set(self, key: Key) -> LevelSet:
        self._check_grid_key(key)
        bounds = self.interval_bounds(key)
        return LevelSet(points=points_in_boxes(self.filter_values, bounds)[0], bounds=bounds)

    def _keyed(self, level_sets: List[LevelSet]) -> List[Tuple[Key, LevelSet]]:
        keys = [tuple(int(i) for i in row) for row in self.multi_index]
        return list(zip(keys, level_sets))

    # ----------------------------
    # Nerve candidates
    # ----------------------------

    def neighborhood(self, k: int):
        """
        Candidate ``(k+1)``-fold combinations, grid-pruned for ``k = 1``.

        For pairs, two boxes whose grid indices differ by more than
        ``max_dev[d]`` along any dimension cannot overlap, so only pairs inside
        that window are returned. The result is a superset of the truly
        intersecting pairs. Higher ``k`` falls back to all combinations.
        """
        if int(k) != 1:
            return super().neighborhood(k)
        self._require_built()
        spacing, length = self._grid_geometry()
        max_dev = grid_max_deviation(
            self._number_intervals, spacing, length, tol=self.config.boundary_tol
        )
        pairs = grid_neighborhood(self._number_intervals, max_dev)
        keys = self._index_set
        return [(keys[i], keys[j]) for i, j in pairs.tolist()]
