# mapper_covers/covers/custom.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from ..config import CoverConfig
from ..level_sets import Key, LevelSet, as_key
from .base import Cover, ParameterField

__all__ = ["FunctionCover"]

ConstructFn = Callable[..., Mapping[Any, Any]]


class FunctionCover(Cover):
    """
    Cover whose level sets come from a user-supplied construction function.

    This is the extension point for new covering strategies that do not need a
    subclass: ``construct_fn(filter_values, **params)`` must return a mapping
    from index (key tuple, int or ``"(i j)"`` string) to one of:

    - a sequence or array of point indices (tuples included);
    - a :class:`~mapper_covers.level_sets.LevelSet`;
    - a mapping ``{"points": ..., "bounds": ...}`` (``bounds`` optional).

    Parameters
    ----------
    filter_values :
        ``(n, d)`` filter values.
    construct_fn :
        The construction function.
    typename :
        Name reported by :meth:`format` and :meth:`describe_instance`.
    **params :
        Keyword parameters forwarded to ``construct_fn``.

    Examples
    --------
    >>> def halves(X, cut):
    ...     return {1: np.flatnonzero(X[:, 0] <= cut), 2: np.flatnonzero(X[:, 0] >= cut)}
    >>> FunctionCover(x, halves, typename="halves", cut=0.5).construct_cover()
    """
    typename = "custom"

    def __init__(
        self,
        filter_values: np.ndarray,
        construct_fn: ConstructFn,
        *,
        typename: str = "custom",
        config: Optional[CoverConfig] = None,
        **params: Any,
    ):
        if not callable(construct_fn):
            raise TypeError("construct_fn must be callable.")
        super().__init__(filter_values, config=config)
        self.construct_fn = construct_fn
        self.typename = str(typename)
        self._params: Dict[str, Any] = dict(params)
        self.parameter_fields = tuple(
            ParameterField(name, type(v).__name__, "Forwarded to the construction function.")
            for name, v in self._params.items()
        )

    def __getattr__(self, name: str) -> Any:
        params = self.__dict__.get("_params", {})
        if name in params:
            return params[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def set_params(self, **params: Any) -> "FunctionCover":
        """Update forwarded parameters; returns the cover."""
        self._params.update(params)
        self.parameter_fields = tuple(
            ParameterField(name, type(v).__name__, "Forwarded to the construction function.")
            for name, v in self._params.items()
        )
        self._invalidate()
        return self

    def describe_instance(self) -> Dict[str, Any]:
        return {"typename": self.typename, "parameters": dict(self._params)}

    def _construct_level_sets(self) -> List[Tuple[Key, LevelSet]]:
        raw = self.construct_fn(self.filter_values, **self._params)
        out: List[Tuple[Key, LevelSet]] = []
        for index, value in raw.items():
            if isinstance(value, LevelSet):
                ls = value
            elif isinstance(value, Mapping):
                if "points" not in value:
                    raise ValueError(f"Level set {index!r} mapping must have a 'points' entry.")
                ls = LevelSet(points=value["points"], bounds=value.get("bounds"))
            else:
                ls = LevelSet(points=value)
            out.append((as_key(index), ls))
        out.sort(key=lambda kv: kv[0])
        return out
