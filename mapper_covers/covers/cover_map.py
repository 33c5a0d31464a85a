# mapper_covers/covers/cover_map.py
from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from ..errors import DimensionMismatchError
from ..geometry.boxes import as_box_bounds

__all__ = ["cover_map"]

BoundsLike = Union[np.ndarray, Sequence[np.ndarray]]


def _stack_bounds(bounds: BoundsLike, name: str) -> np.ndarray:
    if isinstance(bounds, np.ndarray):
        B = as_box_bounds(bounds)
    else:
        items = [np.asarray(b, dtype=float) for b in bounds]
        if len(items) == 0:
            return np.empty((0, 2, 0), dtype=float)
        try:
            B = as_box_bounds(np.stack(items, axis=0))
        except ValueError as e:
            raise ValueError(f"{name} must be a list of (2, d) bound arrays.") from e
    return B


def cover_map(bounds_a: BoundsLike, bounds_b: BoundsLike, d: Optional[int] = None) -> np.ndarray:
    """
    Intersection relation between the level sets of two covers.

    Level set ``i`` of cover A maps to level set ``j`` of cover B when their
    closed boxes overlap in every dimension::

        lower_a[i] <= upper_b[j]  and  upper_a[i] >= lower_b[j]

    Parameters
    ----------
    bounds_a, bounds_b :
        Lists of ``(2, d)`` bounds (row 0 lower, row 1 upper), or stacked
        ``(m, 2, d)`` arrays.
    d :
        Dimensionality shared by both covers. Inferred when omitted.

    Returns
    -------
    relation :
        ``(p, 2)`` int64 array of positional pairs ``(i, j)``, sorted by ``i``
        then ``j``. Not symmetric in general.

    Raises
    ------
    DimensionMismatchError
        If the covers (or ``d``) disagree on dimensionality.
    """
    A = _stack_bounds(bounds_a, "bounds_a")
    B = _stack_bounds(bounds_b, "bounds_b")
    if A.shape[0] == 0 or B.shape[0] == 0:
        return np.empty((0, 2), dtype=np.int64)

    if A.shape[2] != B.shape[2]:
        raise DimensionMismatchError(f"Dim mismatch: cover A d={A.shape[2]} vs cover B d={B.shape[2]}.")
    if d is not None and int(d) != A.shape[2]:
        raise DimensionMismatchError(f"Dim mismatch: d={d} but bounds have d={A.shape[2]}.")

    lo_b, hi_b = B[:, 0, :], B[:, 1, :]
    rows = []
    for i in range(A.shape[0]):
        lo_a, hi_a = A[i, 0], A[i, 1]
        hit = np.all((lo_a <= hi_b) & (hi_a >= lo_b), axis=1)
        j = np.flatnonzero(hit)
        if j.size:
            rows.append(np.column_stack([np.full(j.size, i, dtype=np.int64), j]))

    if len(rows) == 0:
        return np.empty((0, 2), dtype=np.int64)
    return np.concatenate(rows, axis=0).astype(np.int64)
