from __future__ import annotations

"""
Public API re-exports for mapper_covers.

Import style:
    from mapper_covers.api import FixedIntervalCover, BallCover, nerve_edges, edgelist_to_adjacency, ...

Notes
-----
- This file is curated (not a dump of every internal helper).
- Low-level kernels stay reachable through their subpackages
  (``mapper_covers.geometry``, ``mapper_covers.nerve``).
"""

# ----------------------------
# Configuration / errors
# ----------------------------
from .config import CoverConfig, DEFAULT_CONFIG
from .errors import (
    CoverError,
    CoverNotBuiltError,
    CoverValidationError,
    DimensionMismatchError,
    InvalidParameterError,
    MissingParameterError,
)

# ----------------------------
# Keys / level sets / union find
# ----------------------------
from .level_sets import Key, LevelSet, format_index_key, parse_index_key
from .union_find import UnionFind

# ----------------------------
# Covers
# ----------------------------
from .covers import (
    BallCover,
    Cover,
    FixedIntervalCover,
    FunctionCover,
    ParameterField,
    RestrainedIntervalCover,
    cover_map,
)

# ----------------------------
# Geometry
# ----------------------------
from .geometry.boxes import dist_to_boxes, level_set_index, points_in_boxes

# ----------------------------
# Nerve
# ----------------------------
from .nerve import (
    all_combinations,
    edgelist_to_adjacency,
    nerve_edges,
    nerve_simplices,
    nerve_to_simplex_tree,
    valid_pairs,
)

# ----------------------------
# Summaries
# ----------------------------
from .summaries import CoverSummary, summarize_cover

__all__ = [
    # config / errors
    "CoverConfig",
    "DEFAULT_CONFIG",
    "CoverError",
    "CoverNotBuiltError",
    "CoverValidationError",
    "DimensionMismatchError",
    "InvalidParameterError",
    "MissingParameterError",
    # keys / level sets
    "Key",
    "LevelSet",
    "format_index_key",
    "parse_index_key",
    "UnionFind",
    # covers
    "Cover",
    "ParameterField",
    "FixedIntervalCover",
    "RestrainedIntervalCover",
    "BallCover",
    "FunctionCover",
    "cover_map",
    # geometry
    "points_in_boxes",
    "level_set_index",
    "dist_to_boxes",
    # nerve
    "all_combinations",
    "nerve_simplices",
    "nerve_edges",
    "nerve_to_simplex_tree",
    "edgelist_to_adjacency",
    "valid_pairs",
    # summaries
    "CoverSummary",
    "summarize_cover",
]
