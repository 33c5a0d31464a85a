# mapper_covers/geometry/boxes.py
from __future__ import annotations

from typing import List, Tuple

import numpy as np

from ..errors import DimensionMismatchError
from ..level_sets import LevelSet

__all__ = [
    "as_box_bounds",
    "points_in_boxes",
    "level_set_index",
    "dist_to_boxes",
    "fixed_interval_bounds",
    "restrained_interval_bounds",
    "fixed_level_sets",
    "restrained_level_sets",
]


def _as_points(X: np.ndarray) -> np.ndarray:
    X = np.asarray(X, dtype=float)
    if X.ndim == 1:
        return X.reshape(-1, 1)
    if X.ndim != 2:
        raise ValueError(f"points must be 1D or 2D. Got shape {X.shape}.")
    return X


def as_box_bounds(bounds: np.ndarray) -> np.ndarray:
    """
    Normalize box bounds to shape ``(m, 2, d)``.

    Accepts a single ``(2, d)`` box or a stack ``(m, 2, d)``; ``[:, 0]`` holds
    the lower corners and ``[:, 1]`` the upper corners.
    """
    B = np.asarray(bounds, dtype=float)
    if B.ndim == 2:
        B = B[None, :, :]
    if B.ndim != 3 or B.shape[1] != 2:
        raise ValueError(f"bounds must have shape (2, d) or (m, 2, d). Got {B.shape}.")
    return B


def _check_dims(X: np.ndarray, B: np.ndarray) -> None:
    if X.shape[1] != B.shape[2]:
        raise DimensionMismatchError(
            f"Dim mismatch: points d={X.shape[1]} vs bounds d={B.shape[2]}."
        )


def _fill_box_mask(cols: np.ndarray, lo: np.ndarray, hi: np.ndarray, out: np.ndarray, tmp: np.ndarray) -> np.ndarray:
    """
    ``out[s] = all_d (lo[d] <= cols[d, s] <= hi[d])``, written in place.

    ``out`` and ``tmp`` are boolean scratch buffers of length n_points that the
    caller reuses across boxes.
    """
    out.fill(True)
    for d_i in range(cols.shape[0]):
        np.greater_equal(cols[d_i], lo[d_i], out=tmp)
        out &= tmp
        np.less_equal(cols[d_i], hi[d_i], out=tmp)
        out &= tmp
    return out


# ----------------------------
# Membership tests
# ----------------------------

def points_in_boxes(points: np.ndarray, bounds: np.ndarray) -> List[np.ndarray]:
    """
    Indices of the points inside each closed axis-aligned box.

    Boxes may overlap, so a point can appear in several outputs.

    Parameters
    ----------
    points :
        ``(n, d)`` point matrix (1D input is treated as ``(n, 1)``).
    bounds :
        ``(m, 2, d)`` lower/upper corners, or a single ``(2, d)`` box.

    Returns
    -------
    members :
        List of ``m`` sorted int64 index arrays.

    Raises
    ------
    DimensionMismatchError
        If the boxes and points have different dimension.
    """
    X = _as_points(points)
    B = as_box_bounds(bounds)
    _check_dims(X, B)

    cols = np.ascontiguousarray(X.T)
    test = np.empty(X.shape[0], dtype=bool)
    tmp = np.empty(X.shape[0], dtype=bool)

    out: List[np.ndarray] = []
    for lo, hi in B:
        _fill_box_mask(cols, lo, hi, test, tmp)
        out.append(np.flatnonzero(test).astype(np.int64))
    return out


def level_set_index(points: np.ndarray, bounds: np.ndarray) -> np.ndarray:
    """
    Single-pass assignment of each point to a box of a disjoint cover.

    Each box is widened by machine epsilon. When boxes do overlap, the last box
    containing a point wins.

    Returns
    -------
    index :
        ``(n,)`` int64 array of 0-based box positions; ``-1`` marks points
        outside every box.
    """
    X = _as_points(points)
    B = as_box_bounds(bounds)
    _check_dims(X, B)

    eps = np.finfo(float).eps
    cols = np.ascontiguousarray(X.T)
    test = np.empty(X.shape[0], dtype=bool)
    tmp = np.empty(X.shape[0], dtype=bool)
    res = np.full(X.shape[0], -1, dtype=np.int64)
    for i, (lo, hi) in enumerate(B):
        _fill_box_mask(cols, lo - eps, hi + eps, test, tmp)
        res[test] = i
    return res


def dist_to_boxes(
    positions: np.ndarray,
    interval_length: float,
    number_intervals: int,
    dist_to_lower: np.ndarray,
    dist_to_upper: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Distance from each point to the nearest endpoint of every other interval.

    Intervals are tiled along one filter dimension, each of length
    ``interval_length``. Point ``i`` lies in interval ``positions[i]``
    (1-based), at ``dist_to_lower[i]`` from its lower endpoint and
    ``dist_to_upper[i]`` from its upper endpoint. Each returned distance is
    half the extra length a target interval would need to reach the point.

    Returns
    -------
    target_pos :
        ``(n, number_intervals - 1)`` int64 array; row ``i`` lists every
        interval position except ``positions[i]``, ascending.
    target_dist :
        ``(n, number_intervals - 1)`` float array of the matching distances.
    """
    pos = np.asarray(positions, dtype=np.int64).reshape(-1)
    dtl = np.asarray(dist_to_lower, dtype=float).reshape(-1)
    dtu = np.asarray(dist_to_upper, dtype=float).reshape(-1)
    m = int(number_intervals)
    if m < 1:
        raise ValueError(f"number_intervals must be >= 1. Got {m}.")
    if dtl.shape != pos.shape or dtu.shape != pos.shape:
        raise ValueError(
            f"positions, dist_to_lower and dist_to_upper must have equal length. "
            f"Got {pos.size}, {dtl.size}, {dtu.size}."
        )
    if pos.size and (pos.min() < 1 or pos.max() > m):
        raise ValueError(f"positions must lie in [1, {m}].")

    n = pos.size
    all_pos = np.arange(1, m + 1, dtype=np.int64)
    mask = all_pos[None, :] != pos[:, None]
    target_pos = np.broadcast_to(all_pos, (n, m))[mask].reshape(n, m - 1)

    gap = np.abs(target_pos - pos[:, None]) - 1
    near = np.where(target_pos < pos[:, None], dtl[:, None], dtu[:, None])
    target_dist = near + gap * float(interval_length)
    return target_pos, target_dist


# ----------------------------
# Grid-structured batches
# ----------------------------

def fixed_interval_bounds(
    multi_index: np.ndarray,
    *,
    overlap: np.ndarray,
    number_intervals: np.ndarray,
    filter_min: np.ndarray,
    filter_len: np.ndarray,
    tol: float = 0.0,
) -> np.ndarray:
    """
    Box bounds of a fixed interval cover.

    For a 1-based multi-index ``m``::

        base     = filter_len / number_intervals
        length   = base + base * overlap / (1 - overlap)
        centroid = filter_min + (m - 1) * base + base / 2
        bounds   = [centroid - length/2 - tol, centroid + length/2 + tol]

    Parameters
    ----------
    multi_index :
        ``(m, d)`` 1-based grid indices (or a single ``(d,)`` index).
    overlap :
        Overlap *fraction* per dimension, in ``[0, 1)``.

    Returns
    -------
    bounds :
        ``(m, 2, d)`` float array.
    """
    M = np.atleast_2d(np.asarray(multi_index, dtype=float))
    base = np.asarray(filter_len, dtype=float) / np.asarray(number_intervals, dtype=float)
    p = np.asarray(overlap, dtype=float)
    length = base + (base * p) / (1.0 - p)
    half = length / 2.0 + float(tol)
    centroid = np.asarray(filter_min, dtype=float) + (M - 1.0) * base + base / 2.0
    return np.stack([centroid - half, centroid + half], axis=1)


def restrained_interval_bounds(
    multi_index: np.ndarray,
    *,
    interval_length: np.ndarray,
    step_size: np.ndarray,
    filter_min: np.ndarray,
    tol: float = 0.0,
) -> np.ndarray:
    """
    Box bounds of a restrained interval cover: ``[min + (m-1)*step, ... + length]``.

    Returns
    -------
    bounds :
        ``(m, 2, d)`` float array, each side padded by ``tol``.
    """
    M = np.atleast_2d(np.asarray(multi_index, dtype=float))
    lo = np.asarray(filter_min, dtype=float) + (M - 1.0) * np.asarray(step_size, dtype=float)
    hi = lo + np.asarray(interval_length, dtype=float)
    return np.stack([lo - float(tol), hi + float(tol)], axis=1)


def _level_sets_from_bounds(points: np.ndarray, bounds: np.ndarray) -> List[LevelSet]:
    members = points_in_boxes(points, bounds)
    return [LevelSet(points=idx, bounds=b) for idx, b in zip(members, bounds)]


def fixed_level_sets(
    points: np.ndarray,
    multi_index: np.ndarray,
    *,
    overlap: np.ndarray,
    number_intervals: np.ndarray,
    filter_min: np.ndarray,
    filter_len: np.ndarray,
    tol: float = 0.0,
) -> List[LevelSet]:
    """
    Level sets (with realized bounds) of a fixed interval cover, one per row
    of ``multi_index``. See :func:`fixed_interval_bounds` for the geometry.
    """
    X = _as_points(points)
    M = np.atleast_2d(np.asarray(multi_index))
    if M.shape[1] != X.shape[1]:
        raise DimensionMismatchError(
            f"Dim mismatch: points d={X.shape[1]} vs multi-index d={M.shape[1]}."
        )
    B = fixed_interval_bounds(
        M,
        overlap=overlap,
        number_intervals=number_intervals,
        filter_min=filter_min,
        filter_len=filter_len,
        tol=tol,
    )
    return _level_sets_from_bounds(X, B)


def restrained_level_sets(
    points: np.ndarray,
    multi_index: np.ndarray,
    *,
    interval_length: np.ndarray,
    step_size: np.ndarray,
    filter_min: np.ndarray,
    tol: float = 0.0,
) -> List[LevelSet]:
    """Level sets (with realized bounds) of a restrained interval cover."""
    X = _as_points(points)
    M = np.atleast_2d(np.asarray(multi_index))
    if M.shape[1] != X.shape[1]:
        raise DimensionMismatchError(
            f"Dim mismatch: points d={X.shape[1]} vs multi-index d={M.shape[1]}."
        )
    B = restrained_interval_bounds(
        M,
        interval_length=interval_length,
        step_size=step_size,
        filter_min=filter_min,
        tol=tol,
    )
    return _level_sets_from_bounds(X, B)
