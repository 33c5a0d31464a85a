# mapper_covers/covers/fixed_interval.py
from __future__ import annotations

from typing import List, Tuple

import numpy as np

from ..errors import InvalidParameterError
from ..geometry.boxes import fixed_interval_bounds, fixed_level_sets
from ..level_sets import Key, LevelSet, as_key
from .interval import IntervalCoverBase

__all__ = ["FixedIntervalCover"]


class FixedIntervalCover(IntervalCoverBase):
    """
    Fixed interval cover: a uniform grid of overlapping boxes.

    A two-parameter family (``number_intervals``, ``percent_overlap``). Along
    each dimension the filter range is split into ``number_intervals`` bins of
    width ``base_interval_length``; each level set is a box centred on a bin
    and stretched to ``interval_length`` so that adjacent boxes overlap by
    ``percent_overlap`` percent of their length. Unlike
    :class:`~mapper_covers.covers.restrained_interval.RestrainedIntervalCover`,
    the outer boxes extend past the range of the filter values.

    The Mapper built from this cover may be thought of as a relaxed Reeb graph.

    Examples
    --------
    >>> cover = FixedIntervalCover(x, number_intervals=5, percent_overlap=20)
    >>> cover.construct_cover().index_set[:2]
    [(1,), (2,)]
    """
    typename = "fixed_interval"

    @property
    def base_interval_length(self) -> np.ndarray:
        return self.filter_len / self._require_number_intervals()

    @property
    def interval_length(self) -> np.ndarray:
        self._require_parameters()
        return self.overlap_to_interval_len(self._percent_overlap)

    def _grid_geometry(self) -> Tuple[np.ndarray, np.ndarray]:
        return self.base_interval_length, self.interval_length

    # ----------------------------
    # Parameter conversions
    # ----------------------------

    def overlap_to_interval_len(self, percent_overlap) -> np.ndarray:
        """
        Interval length giving ``percent_overlap`` for the current ``number_intervals``.

        ``L = base + base * p / (1 - p)`` with ``p = percent_overlap / 100``.
        """
        base = self.base_interval_length
        p = self._check_percent_overlap(percent_overlap) / 100.0
        return base + (base * p) / (1.0 - p)

    def interval_len_to_percent_overlap(self, interval_length) -> np.ndarray:
        """
        Inverse of :meth:`overlap_to_interval_len`: ``100 * (1 - base / L)``.

        Raises
        ------
        InvalidParameterError
            If ``interval_length`` is not positive or is shorter than the base
            interval length (which would leave gaps between level sets).
        """
        base = self.base_interval_length
        L = self._broadcast_param("interval_length", interval_length, dtype=float)
        if np.any(L <= 0) or np.any(L < base):
            raise InvalidParameterError(
                f"interval_length must be positive and at least the base interval length "
                f"{base.tolist()}. Got {L.tolist()}."
            )
        return 100.0 * (1.0 - (base / L))

    # ----------------------------
    # Level sets
    # ----------------------------

    def interval_bounds(self, index=None) -> np.ndarray:
        """
        Closed box bounds, padded by ``config.boundary_tol``.

        Returns
        -------
        bounds :
            ``(m, 2, d)`` for the whole index set, or ``(2, d)`` for one key.
        """
        self._require_parameters()
        M = self.multi_index if index is None else np.asarray([self._check_grid_key(as_key(index))])
        B = fixed_interval_bounds(
            M,
            overlap=self._percent_overlap / 100.0,
            number_intervals=self._number_intervals,
            filter_min=self.filter_min,
            filter_len=self.filter_len,
            tol=self.config.boundary_tol,
        )
        return B if index is None else B[0]

    def _construct_level_sets(self) -> List[Tuple[Key, LevelSet]]:
        level_sets = fixed_level_sets(
            self.filter_values,
            self.multi_index,
            overlap=self._percent_overlap / 100.0,
            number_intervals=self._number_intervals,
            filter_min=self.filter_min,
            filter_len=self.filter_len,
            tol=self.config.boundary_tol,
        )
        return self._keyed(level_sets)

    def format(self) -> str:
        n = "unset" if self._number_intervals is None else ", ".join(str(v) for v in self._number_intervals.tolist())
        p = "unset" if self._percent_overlap is None else ", ".join(f"{v:.3g}" for v in self._percent_overlap.tolist())
        return f"Cover: (typename = {self.typename}, number intervals = [{n}], percent overlap = [{p}]%)"
