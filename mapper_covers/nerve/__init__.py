"""Nerve construction: candidate selection, intersection tests and adjacency views."""

from __future__ import annotations

from .adjacency import edgelist_to_adjacency, valid_pairs
from .neighborhood import all_combinations, grid_max_deviation, grid_multi_index, grid_neighborhood
from .nerve_utils import nerve_edges, nerve_simplices, nerve_to_simplex_tree

__all__ = [
    "all_combinations",
    "grid_multi_index",
    "grid_max_deviation",
    "grid_neighborhood",
    "edgelist_to_adjacency",
    "valid_pairs",
    "nerve_simplices",
    "nerve_edges",
    "nerve_to_simplex_tree",
]
