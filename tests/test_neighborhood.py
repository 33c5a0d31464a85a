import itertools

import numpy as np
import pytest

from mapper_covers.covers import FixedIntervalCover, RestrainedIntervalCover
from mapper_covers.nerve.neighborhood import (
    all_combinations,
    grid_max_deviation,
    grid_multi_index,
    grid_neighborhood,
)


def test_all_combinations_counts():
    keys = [(1,), (2,), (3,), (4,)]
    assert all_combinations(keys, 1) == list(itertools.combinations(keys, 2))
    assert len(all_combinations(keys, 2)) == 4
    assert all_combinations(keys, 3) == [tuple(keys)]
    assert all_combinations(keys, 4) == []


def test_all_combinations_rejects_k_below_one():
    with pytest.raises(ValueError):
        all_combinations([(1,), (2,)], 0)


def test_grid_multi_index_is_lexicographic():
    M = grid_multi_index([2, 3])
    assert [tuple(r) for r in M.tolist()] == list(itertools.product(range(1, 3), range(1, 4)))


def test_grid_max_deviation_from_critical_distances():
    # adjacent centroids 2 apart; critical distances 2, 4, 6, 8
    assert grid_max_deviation([5], [2.0], [2.0]).tolist() == [1]
    assert grid_max_deviation([5], [2.0], [4.0]).tolist() == [2]
    assert grid_max_deviation([5], [2.0], [3.9]).tolist() == [1]
    assert grid_max_deviation([5], [2.0], [100.0]).tolist() == [4]
    assert grid_max_deviation([1], [2.0], [2.0]).tolist() == [1]


def test_grid_max_deviation_tolerance_widens():
    assert grid_max_deviation([5], [2.0], [4.0 - 1e-12], tol=1e-9).tolist() == [2]


def test_grid_neighborhood_1d():
    pairs = grid_neighborhood([4], [1])
    assert pairs.tolist() == [[0, 1], [1, 2], [2, 3]]
    pairs = grid_neighborhood([4], [2])
    assert pairs.tolist() == [[0, 1], [0, 2], [1, 2], [1, 3], [2, 3]]


def test_grid_neighborhood_matches_brute_force_window():
    shape, dev = [4, 3, 2], [1, 2, 1]
    M = grid_multi_index(shape)
    expected = [
        [i, j]
        for i, j in itertools.combinations(range(M.shape[0]), 2)
        if np.all(np.abs(M[i] - M[j]) <= np.asarray(dev))
    ]
    assert grid_neighborhood(shape, dev).tolist() == expected


def test_grid_neighborhood_single_cell():
    assert grid_neighborhood([1, 1], [1, 1]).shape == (0, 2)


def _true_pairs(cover):
    ls = cover.level_sets
    return {
        (a, b)
        for a, b in itertools.combinations(cover.index_set, 2)
        if ls[a].intersects(ls[b])
    }


def _box_pairs(cover):
    ls = cover.level_sets
    out = set()
    for a, b in itertools.combinations(cover.index_set, 2):
        ba, bb = ls[a].bounds, ls[b].bounds
        if np.all(ba[0] <= bb[1]) and np.all(ba[1] >= bb[0]):
            out.add((a, b))
    return out


@pytest.mark.parametrize("cover_cls", [FixedIntervalCover, RestrainedIntervalCover])
@pytest.mark.parametrize("overlap", [0, 10, 33.3, 50, 66.7, 80, 95])
def test_pruned_pairs_are_superset_of_intersecting_pairs(cover_cls, overlap):
    rng = np.random.default_rng(3)
    X = rng.uniform(-1.0, 1.0, size=(300, 2))
    cover = cover_cls(X, number_intervals=[3, 3], percent_overlap=overlap).construct_cover()
    candidates = set(cover.neighborhood(1))
    assert _true_pairs(cover) <= candidates
    assert _box_pairs(cover) <= candidates
    assert candidates <= set(itertools.combinations(cover.index_set, 2))


def test_pruning_drops_far_pairs():
    X = np.linspace(0.0, 1.0, 50)
    cover = FixedIntervalCover(X, number_intervals=10, percent_overlap=20).construct_cover()
    candidates = cover.neighborhood(1)
    assert len(candidates) == 9
    assert ((1,), (3,)) not in candidates


def test_higher_order_neighborhood_is_all_combinations():
    X = np.linspace(0.0, 1.0, 20)
    cover = FixedIntervalCover(X, number_intervals=4, percent_overlap=30).construct_cover()
    assert cover.neighborhood(2) == list(itertools.combinations(cover.index_set, 3))
