# mapper_covers/level_sets.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np

__all__ = [
    "Key",
    "LevelSet",
    "as_key",
    "format_index_key",
    "parse_index_key",
]

Key = Tuple[int, ...]


# ----------------------------
# Index-set keys
# ----------------------------

def format_index_key(key: Sequence[int]) -> str:
    """
    Display form of an index-set key: ``(1, 2, 3) -> "(1 2 3)"``.

    This is the only place keys become strings; :func:`parse_index_key`
    inverts it exactly.
    """
    return "(" + " ".join(str(int(i)) for i in key) + ")"


def parse_index_key(text: str) -> Key:
    """
    Parse ``"(i1 i2 ... id)"`` back into a key tuple.

    Raises
    ------
    ValueError
        If ``text`` is not wrapped in parentheses or holds a non-integer token.
    """
    s = str(text).strip()
    if len(s) < 2 or s[0] != "(" or s[-1] != ")":
        raise ValueError(f"Index key must look like '(i1 i2 ...)'. Got {text!r}.")
    tokens = s[1:-1].split()
    if len(tokens) == 0:
        raise ValueError(f"Index key {text!r} holds no indices.")
    try:
        return tuple(int(t) for t in tokens)
    except ValueError as e:
        raise ValueError(f"Index key {text!r} holds a non-integer index.") from e


def as_key(index: Union[str, int, Sequence[int], np.ndarray]) -> Key:
    """Normalize a user-supplied index (key tuple, int, array or display string) to a key."""
    if isinstance(index, str):
        return parse_index_key(index)
    if isinstance(index, (int, np.integer)):
        return (int(index),)
    arr = np.asarray(index)
    if arr.ndim != 1 or arr.size == 0 or not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"Index must be a non-empty 1D integer sequence. Got {index!r}.")
    return tuple(int(i) for i in arr)


# ----------------------------
# Level sets
# ----------------------------

@dataclass(frozen=True, eq=False)
class LevelSet:
    """
    Points of one open set of a cover.

    Attributes
    ----------
    points :
        Sorted ``int64`` array of 0-based row indices into the filter values.
    bounds :
        Optional ``(2, d)`` array of realized box bounds (row 0 lower,
        row 1 upper) for axis-aligned covers; ``None`` otherwise.
    """
    points: np.ndarray
    bounds: Optional[np.ndarray] = None

    def __post_init__(self):
        pts = np.unique(np.asarray(self.points, dtype=np.int64).reshape(-1))
        pts.setflags(write=False)
        object.__setattr__(self, "points", pts)
        if self.bounds is not None:
            b = np.array(self.bounds, dtype=float)
            if b.ndim == 1:
                b = b.reshape(2, -1)
            if b.ndim != 2 or b.shape[0] != 2:
                raise ValueError(f"bounds must have shape (2, d). Got {b.shape}.")
            b.setflags(write=False)
            object.__setattr__(self, "bounds", b)

    def __len__(self) -> int:
        return int(self.points.size)

    def __iter__(self):
        return iter(self.points.tolist())

    @property
    def is_empty(self) -> bool:
        return self.points.size == 0

    def intersects(self, other: "LevelSet") -> bool:
        return np.intersect1d(self.points, other.points, assume_unique=True).size > 0

    def to_dict(self) -> dict[str, Any]:
        """Plain payload for graph exporters: point list and optional bounds."""
        return {
            "points": self.points.tolist(),
            "bounds": None if self.bounds is None else self.bounds.tolist(),
        }
