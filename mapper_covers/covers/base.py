# mapper_covers/covers/base.py
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..config import DEFAULT_CONFIG, CoverConfig
from ..errors import (
    CoverNotBuiltError,
    CoverValidationError,
    InvalidParameterError,
    MissingParameterError,
)
from ..level_sets import Key, LevelSet, as_key, format_index_key
from ..nerve.neighborhood import all_combinations
from .cover_map import cover_map

__all__ = ["ParameterField", "Cover"]

logger = logging.getLogger(__name__)

IndexLike = Union[str, int, Sequence[int], np.ndarray]


def _as_filter_space(X: np.ndarray) -> np.ndarray:
    X = np.array(X, dtype=float)
    if X.ndim == 1:
        X = X.reshape(-1, 1)
    if X.ndim != 2:
        raise ValueError(f"filter_values must be 1D or 2D. Got shape {X.shape}.")
    if X.shape[0] == 0 or X.shape[1] == 0:
        raise ValueError(f"filter_values must be non-empty. Got shape {X.shape}.")
    if not np.all(np.isfinite(X)):
        raise ValueError("filter_values must be finite.")
    X.setflags(write=False)
    return X


@dataclass(frozen=True)
class ParameterField:
    """Introspectable description of one cover parameter (for registries/listings)."""
    name: str
    kind: str
    description: str
    required: bool = True


# ----------------------------
# Base cover API
# ----------------------------

class Cover:
    """
    Base class for covers of a filter space.

    A cover owns an ``(n, d)`` matrix of filter values, a set of strategy
    parameters, and, once :meth:`construct_cover` has run, an ordered
    ``index_set`` of keys together with ``level_sets`` mapping each key to a
    :class:`~mapper_covers.level_sets.LevelSet`.

    Subclasses set ``typename`` and ``parameter_fields`` and implement
    :meth:`_construct_level_sets`. They may override :meth:`_construct_level_set`
    (single-key construction) and :meth:`neighborhood` (candidate pruning).

    Parameters
    ----------
    filter_values :
        Array of shape ``(n, d)``; 1D input is reshaped to ``(n, 1)``. A read-only
        copy is stored.
    config :
        Optional :class:`~mapper_covers.config.CoverConfig`.

    Notes
    -----
    - Parameters are validated by explicit ``set_*`` methods at assignment
      time; an invalid value never reaches the cover.
    - Changing a parameter discards previously constructed level sets.
    - Point indices are 0-based row positions into ``filter_values``.
    """
    typename: ClassVar[str] = "cover"
    parameter_fields: ClassVar[Tuple[ParameterField, ...]] = ()

    def __init__(self, filter_values: np.ndarray, *, config: Optional[CoverConfig] = None):
        self._filter_values = _as_filter_space(filter_values)
        self.config = DEFAULT_CONFIG if config is None else config
        self._index_set: Optional[List[Key]] = None
        self._level_sets: Optional[Dict[Key, LevelSet]] = None

    # ----------------------------
    # Filter space
    # ----------------------------

    @property
    def filter_values(self) -> np.ndarray:
        return self._filter_values

    @property
    def n_points(self) -> int:
        return int(self._filter_values.shape[0])

    @property
    def filter_dim(self) -> int:
        return int(self._filter_values.shape[1])

    @property
    def filter_min(self) -> np.ndarray:
        return self._filter_values.min(axis=0)

    @property
    def filter_max(self) -> np.ndarray:
        return self._filter_values.max(axis=0)

    @property
    def filter_len(self) -> np.ndarray:
        return self.filter_max - self.filter_min

    # ----------------------------
    # Parameters
    # ----------------------------

    def parameters(self) -> Dict[str, Any]:
        """Current parameter values keyed by field name (``None`` when unset)."""
        return {f.name: getattr(self, f.name) for f in self.parameter_fields}

    @classmethod
    def describe(cls) -> Dict[str, Any]:
        """Typename and parameter schema, for external registries."""
        return {
            "typename": cls.typename,
            "parameters": [asdict(f) for f in cls.parameter_fields],
        }

    def _broadcast_param(self, name: str, value: Any, *, dtype: Any = float) -> np.ndarray:
        """Length-1 values broadcast to every filter dimension; other lengths must equal d."""
        try:
            arr = np.atleast_1d(np.asarray(value, dtype=dtype))
        except (TypeError, ValueError) as e:
            raise InvalidParameterError(f"{name} must be numeric. Got {value!r}.") from e
        if arr.ndim != 1:
            raise InvalidParameterError(f"{name} must be a scalar or 1D sequence. Got shape {arr.shape}.")
        if arr.size == 1:
            return np.repeat(arr, self.filter_dim)
        if arr.size != self.filter_dim:
            raise InvalidParameterError(
                f"{name} must be a single scalar or have length equal to the filter "
                f"dimensionality ({self.filter_dim}). Got length {arr.size}."
            )
        return arr

    def _require_parameters(self) -> None:
        missing = [f.name for f in self.parameter_fields if f.required and getattr(self, f.name) is None]
        if missing:
            raise MissingParameterError(
                f"{type(self).__name__} requires {', '.join(missing)} to be set before construct_cover()."
            )

    def _invalidate(self) -> None:
        self._index_set = None
        self._level_sets = None

    # ----------------------------
    # Construction
    # ----------------------------

    def _construct_level_sets(self) -> List[Tuple[Key, LevelSet]]:
        raise NotImplementedError

    def _construct_level_set(self, key: Key) -> LevelSet:
        """Single level set without touching the cover's state. Default: full rebuild on the side."""
        for k, ls in self._construct_level_sets():
            if k == key:
                return ls
        raise KeyError(f"{format_index_key(key)} is not in the index set.")

    def construct_cover(self, index: Optional[IndexLike] = None):
        """
        Build the cover, or a single level set.

        Parameters
        ----------
        index :
            If omitted, ``index_set`` and ``level_sets`` are (re)computed from the
            current parameters and the cover itself is returned. Otherwise the
            point indices of that key are returned; a cached level set is reused
            when available and the cover is not mutated.

        Returns
        -------
        self or points :
            The cover, or an int64 array of point indices.

        Raises
        ------
        MissingParameterError
            If a required parameter has not been set.
        KeyError
            If ``index`` is not a key of the index set.
        CoverValidationError
            If construction produced the same key twice.
        """
        self._require_parameters()
        if index is None:
            pairs = self._construct_level_sets()
            keys = [k for k, _ in pairs]
            if len(set(keys)) != len(keys):
                dup = sorted({k for k in keys if keys.count(k) > 1})
                raise CoverValidationError(
                    f"{self.typename}: construction produced duplicate keys "
                    f"{', '.join(format_index_key(k) for k in dup)}."
                )
            self._index_set = keys
            self._level_sets = dict(pairs)
            logger.debug(
                "%s: constructed %d level sets over %d points (%s)",
                self.typename, len(self._index_set), self.n_points, self.parameters(),
            )
            n_empty = sum(1 for ls in self._level_sets.values() if ls.is_empty)
            if n_empty:
                logger.debug("%s: %d empty level sets", self.typename, n_empty)
            if self.config.validate_on_construct:
                self.validate()
            return self

        key = as_key(index)
        if self._level_sets is not None and key in self._level_sets:
            return self._level_sets[key].points
        return self._construct_level_set(key).points

    # ----------------------------
    # Accessors
    # ----------------------------

    @property
    def is_built(self) -> bool:
        return self._index_set is not None and self._level_sets is not None

    def _require_built(self) -> None:
        if not self.is_built:
            raise CoverNotBuiltError(f"{type(self).__name__} has no level sets; call construct_cover() first.")

    @property
    def index_set(self) -> List[Key]:
        self._require_built()
        return list(self._index_set)

    @property
    def level_sets(self) -> Dict[Key, LevelSet]:
        self._require_built()
        return dict(self._level_sets)

    def level_set(self, index: IndexLike) -> LevelSet:
        self._require_built()
        key = as_key(index)
        try:
            return self._level_sets[key]
        except KeyError:
            raise KeyError(f"{format_index_key(key)} is not in the index set.") from None

    def level_set_bounds(self) -> List[np.ndarray]:
        """``(2, d)`` bounds of every level set, in index-set order."""
        self._require_built()
        out = []
        for k in self._index_set:
            b = self._level_sets[k].bounds
            if b is None:
                raise AttributeError(f"{self.typename} level set {format_index_key(k)} has no bounds.")
            out.append(b)
        return out

    # ----------------------------
    # Nerve candidates
    # ----------------------------

    def neighborhood(self, k: int) -> List[Tuple[Key, ...]]:
        """
        Candidate ``(k+1)``-fold key combinations for the nerve.

        The base implementation returns every ``C(m, k+1)`` combination.
        Overrides may prune, but must never drop a combination whose level
        sets intersect; false positives are removed later by the caller's
        intersection test.
        """
        self._require_built()
        return all_combinations(self._index_set, k)

    # ----------------------------
    # Validation
    # ----------------------------

    def validate(self) -> None:
        """
        Check the structure of a constructed cover.

        Returns ``None`` when the index set and level sets are non-empty, carry
        the same unique keys, reference valid point indices and jointly cover
        every point.

        Raises
        ------
        CoverValidationError
            Naming the first defect found.
        """
        if self._index_set is None or self._level_sets is None:
            raise CoverValidationError("Cover has no index set / level sets; call construct_cover() first.")
        if len(self._index_set) == 0:
            raise CoverValidationError("Cover has an empty index set.")
        if len(set(self._index_set)) != len(self._index_set):
            raise CoverValidationError("Index set contains duplicate keys.")
        if len(self._index_set) != len(self._level_sets):
            raise CoverValidationError(
                f"Index set has {len(self._index_set)} keys but there are {len(self._level_sets)} level sets."
            )
        if set(self._index_set) != set(self._level_sets.keys()):
            raise CoverValidationError("Index set keys differ from level set keys.")

        covered = np.zeros(self.n_points, dtype=bool)
        for key in self._index_set:
            pts = self._level_sets[key].points
            if pts.size and (pts[0] < 0 or pts[-1] >= self.n_points):
                raise CoverValidationError(
                    f"Level set {format_index_key(key)} references point indices outside [0, {self.n_points})."
                )
            covered[pts] = True
        if not covered.all():
            n_missing = int((~covered).sum())
            first = np.flatnonzero(~covered)[:5].tolist()
            raise CoverValidationError(f"{n_missing} points are not covered by any level set (e.g. {first}).")

    # ----------------------------
    # Cover comparison / summary
    # ----------------------------

    def map_to(self, other: "Cover") -> List[Tuple[Key, Key]]:
        """
        Pairs ``(key_self, key_other)`` whose level-set boxes overlap.

        Both covers must be constructed with bounded (axis-aligned) level sets.
        """
        rel = cover_map(self.level_set_bounds(), other.level_set_bounds(), self.filter_dim)
        a, b = self._index_set, other._index_set
        return [(a[i], b[j]) for i, j in rel.tolist()]

    def summarize(self, *, compute_edges: bool = True, verbose: bool = False):
        """
        Counts and overlap evidence for the constructed cover.

        Returns
        -------
        summary :
            A :class:`~mapper_covers.summaries.cover_summary.CoverSummary`.
        """
        from ..summaries.cover_summary import summarize_cover

        summ = summarize_cover(self, compute_edges=compute_edges)
        if verbose:
            print(summ.to_text())
        return summ

    # ----------------------------
    # Formatting
    # ----------------------------

    def format(self) -> str:
        params = ", ".join(f"{k} = {self._format_value(v)}" for k, v in self.parameters().items())
        return f"Cover: (typename = {self.typename}" + (f", {params})" if params else ")")

    @staticmethod
    def _format_value(v: Any) -> str:
        if v is None:
            return "unset"
        if isinstance(v, np.ndarray):
            return "[" + ", ".join(f"{x:.3g}" for x in v.tolist()) + "]"
        return f"{v:.3g}" if isinstance(v, float) else str(v)

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        state = f"{len(self._index_set)} level sets" if self.is_built else "not built"
        return f"<{type(self).__name__} n={self.n_points} d={self.filter_dim} {state}>"
