"""Batch geometric kernels over axis-aligned boxes."""

from __future__ import annotations

from .boxes import (
    as_box_bounds,
    dist_to_boxes,
    fixed_interval_bounds,
    fixed_level_sets,
    level_set_index,
    points_in_boxes,
    restrained_interval_bounds,
    restrained_level_sets,
)

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
