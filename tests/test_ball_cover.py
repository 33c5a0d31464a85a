import itertools

import numpy as np
import pytest
from scipy.spatial.distance import pdist

from mapper_covers.config import CoverConfig
from mapper_covers.covers import BallCover
from mapper_covers.covers.ball import component_level_sets
from mapper_covers.errors import InvalidParameterError, MissingParameterError
from mapper_covers.union_find import UnionFind


def test_zero_radius_gives_singletons(cloud_2d):
    cover = BallCover(cloud_2d, epsilon=0.0).construct_cover()
    n = cloud_2d.shape[0]
    assert len(cover.index_set) == n
    assert cover.index_set == [(c,) for c in range(1, n + 1)]
    assert all(len(ls) == 1 for ls in cover.level_sets.values())
    assert cover.level_sets[(1,)].points.tolist() == [0]
    assert cover.validate() is None


def test_radius_at_diameter_gives_one_set(cloud_2d):
    diameter = float(pdist(cloud_2d).max())
    cover = BallCover(cloud_2d, epsilon=diameter).construct_cover()
    assert cover.index_set == [(1,)]
    assert cover.level_sets[(1,)].points.tolist() == list(range(cloud_2d.shape[0]))


@pytest.mark.parametrize("dim", [1, 2, 3])
def test_two_points_at_exact_distance_share_a_set(dim):
    rng = np.random.default_rng(11)
    for _ in range(500):
        X = rng.normal(size=(2, dim))
        for eps in (float(pdist(X).max()), float(np.linalg.norm(X[0] - X[1]))):
            cover = BallCover(X, epsilon=eps).construct_cover()
            assert cover.index_set == [(1,)]


def test_radius_tolerance_follows_config():
    X = np.array([0.0, 1.0])
    strict = BallCover(X, epsilon=0.999, config=CoverConfig(boundary_tol=0.0)).construct_cover()
    loose = BallCover(X, epsilon=0.999, config=CoverConfig(boundary_tol=0.01)).construct_cover()
    assert strict.index_set == [(1,), (2,)]
    assert loose.index_set == [(1,)]


def test_components_of_epsilon_chains():
    X = np.array([0.0, 1.0, 2.0, 10.0, 11.0, 30.0])
    cover = BallCover(X, epsilon=1.0).construct_cover()
    assert cover.index_set == [(1,), (2,), (3,)]
    assert [cover.level_sets[k].points.tolist() for k in cover.index_set] == [[0, 1, 2], [3, 4], [5]]


def test_component_keys_follow_smallest_member():
    X = np.array([10.0, 0.0, 10.5, 0.4])
    cover = BallCover(X, epsilon=0.5).construct_cover()
    assert cover.level_sets[(1,)].points.tolist() == [0, 2]
    assert cover.level_sets[(2,)].points.tolist() == [1, 3]


def test_level_sets_are_disjoint_and_cover(cloud_2d):
    cover = BallCover(cloud_2d, epsilon=0.15).construct_cover()
    seen = np.zeros(cloud_2d.shape[0], dtype=int)
    for ls in cover.level_sets.values():
        seen[ls.points] += 1
    assert np.all(seen == 1)


def test_components_match_brute_force(cloud_2d):
    eps = 0.2
    X = cloud_2d[:60]
    cover = BallCover(X, epsilon=eps).construct_cover()
    label = {}
    for k, ls in cover.level_sets.items():
        for p in ls.points.tolist():
            label[p] = k
    for i, j in itertools.combinations(range(X.shape[0]), 2):
        if np.linalg.norm(X[i] - X[j]) <= eps:
            assert label[i] == label[j]


def test_neighborhood_is_all_pairs(cloud_2d):
    cover = BallCover(cloud_2d, epsilon=0.3).construct_cover()
    m = len(cover.index_set)
    assert len(cover.neighborhood(1)) == m * (m - 1) // 2


@pytest.mark.parametrize("bad", [-0.1, float("inf"), "abc", None])
def test_epsilon_validation(cloud_2d, bad):
    cover = BallCover(cloud_2d)
    with pytest.raises(InvalidParameterError):
        cover.set_epsilon(bad)


def test_requires_epsilon(cloud_2d):
    with pytest.raises(MissingParameterError):
        BallCover(cloud_2d).construct_cover()


def test_ball_level_sets_have_no_bounds(cloud_2d):
    cover = BallCover(cloud_2d, epsilon=0.5).construct_cover()
    with pytest.raises(AttributeError):
        cover.level_set_bounds()


def test_single_index_lookup(cloud_2d):
    X = np.array([0.0, 1.0, 5.0])
    cover = BallCover(X, epsilon=1.0)
    assert cover.construct_cover((2,)).tolist() == [2]
    assert not cover.is_built
    with pytest.raises(KeyError):
        cover.construct_cover((3,))


def test_component_level_sets_from_union_find():
    uf = UnionFind(6)
    uf.union(5, 1)
    uf.union_all([4, 2, 0])
    pairs = component_level_sets(uf)
    assert [k for k, _ in pairs] == [(1,), (2,), (3,)]
    assert [ls.points.tolist() for _, ls in pairs] == [[0, 2, 4], [1, 5], [3]]
