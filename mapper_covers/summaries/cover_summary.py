# mapper_covers/summaries/cover_summary.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..nerve.nerve_utils import nerve_simplices

__all__ = ["CoverSummary", "summarize_cover"]


# ----------------------------
# Summary data container
# ----------------------------

@dataclass
class CoverSummary:
    """
    Summary of a constructed cover and its 1-skeleton.

    Attributes
    ----------
    typename :
        Cover strategy name.
    n_level_sets, n_points :
        Sizes of the index set and of the filter space.
    level_set_sizes :
        ``(n_level_sets,)`` point counts, in index-set order.
    sample_overlap_counts :
        For each point, the number of level sets containing it.
    n_uncovered :
        Points lying in no level set (0 for a valid cover).
    n_empty_level_sets :
        Level sets with no points.
    n_candidate_pairs, n_edges :
        Size of ``neighborhood(1)`` and number of pairs that truly intersect.
        ``None`` when edges were not computed.
    """
    typename: str
    n_level_sets: int
    n_points: int
    level_set_sizes: np.ndarray
    sample_overlap_counts: np.ndarray
    n_uncovered: int
    n_empty_level_sets: int
    n_candidate_pairs: Optional[int] = None
    n_edges: Optional[int] = None
    warnings: Tuple[str, ...] = ()

    @property
    def max_overlap_order(self) -> int:
        return int(self.sample_overlap_counts.max(initial=0))

    def to_text(self) -> str:
        lines: List[str] = []
        lines.append("Cover Summary")
        lines.append(f"  typename = {self.typename}")
        lines.append(f"  n_level_sets = {self.n_level_sets}, n_points = {self.n_points}")

        sizes = self.level_set_sizes
        if sizes.size:
            lines.append(
                f"  level set sizes: min = {int(sizes.min())}, "
                f"median = {float(np.median(sizes)):g}, max = {int(sizes.max())}"
            )
        lines.append(f"  empty level sets = {self.n_empty_level_sets}")
        lines.append(f"  max point overlap order = {self.max_overlap_order}")

        if self.n_edges is not None:
            lines.append("")
            lines.append("  1-skeleton:")
            lines.append(f"    candidate pairs = {self.n_candidate_pairs}")
            lines.append(f"    edges = {self.n_edges}")

        for w in self.warnings:
            lines.append("")
            lines.append(f"  WARNING: {w}")

        return "\n".join(lines)


def summarize_cover(cover, *, compute_edges: bool = True) -> CoverSummary:
    """
    Build a :class:`CoverSummary` for a constructed cover.

    Parameters
    ----------
    cover :
        A cover on which ``construct_cover()`` has run.
    compute_edges :
        If True, also count ``neighborhood(1)`` candidates and confirmed edges.
    """
    index_set = cover.index_set
    level_sets = cover.level_sets
    n = cover.n_points

    sizes = np.asarray([len(level_sets[k]) for k in index_set], dtype=int)
    overlap = np.zeros(n, dtype=int)
    for k in index_set:
        overlap[level_sets[k].points] += 1

    n_uncovered = int(np.sum(overlap == 0))
    n_empty = int(np.sum(sizes == 0))

    warnings: List[str] = []
    if n_uncovered:
        warnings.append(f"{n_uncovered} points are not covered by any level set.")

    n_cand = n_edges = None
    if compute_edges and len(index_set) > 1:
        n_cand = len(cover.neighborhood(1))
        n_edges = len(nerve_simplices(cover, 1))
    elif compute_edges:
        n_cand = n_edges = 0

    return CoverSummary(
        typename=cover.typename,
        n_level_sets=len(index_set),
        n_points=n,
        level_set_sizes=sizes,
        sample_overlap_counts=overlap,
        n_uncovered=n_uncovered,
        n_empty_level_sets=n_empty,
        n_candidate_pairs=n_cand,
        n_edges=n_edges,
        warnings=tuple(warnings),
    )
