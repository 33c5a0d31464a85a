# mapper_covers/covers/restrained_interval.py
from __future__ import annotations

from typing import List, Tuple

import numpy as np

from ..geometry.boxes import restrained_interval_bounds, restrained_level_sets
from ..level_sets import Key, LevelSet, as_key
from .interval import IntervalCoverBase

__all__ = ["RestrainedIntervalCover"]


class RestrainedIntervalCover(IntervalCoverBase):
    """
    Interval cover whose boxes are restrained to the range of the filter values.

    With ``p = percent_overlap / 100`` and ``n = number_intervals``::

        interval_length = range / (n - (n - 1) * p)
        step_size       = interval_length * (1 - p)
        level set m     = [min + (m - 1) * step_size, ... + interval_length]

    so the first box starts at the filter minimum and the last one ends at the
    filter maximum.
    """
    typename = "restrained_interval"

    @property
    def interval_length(self) -> np.ndarray:
        self._require_parameters()
        n = self._number_intervals.astype(float)
        p = self._percent_overlap / 100.0
        return self.filter_len / (n - (n - 1.0) * p)

    @property
    def step_size(self) -> np.ndarray:
        return self.interval_length * (1.0 - self._percent_overlap / 100.0)

    def _grid_geometry(self) -> Tuple[np.ndarray, np.ndarray]:
        return self.step_size, self.interval_length

    def interval_bounds(self, index=None) -> np.ndarray:
        """``(m, 2, d)`` bounds of every level set, or ``(2, d)`` for one key."""
        self._require_parameters()
        M = self.multi_index if index is None else np.asarray([self._check_grid_key(as_key(index))])
        B = restrained_interval_bounds(
            M,
            interval_length=self.interval_length,
            step_size=self.step_size,
            filter_min=self.filter_min,
            tol=self.config.boundary_tol,
        )
        return B if index is None else B[0]

    def _construct_level_sets(self) -> List[Tuple[Key, LevelSet]]:
        level_sets = restrained_level_sets(
            self.filter_values,
            self.multi_index,
            interval_length=self.interval_length,
            step_size=self.step_size,
            filter_min=self.filter_min,
            tol=self.config.boundary_tol,
        )
        return self._keyed(level_sets)
