import numpy as np
import pytest

from mapper_covers.union_find import UnionFind


def test_singletons_initially():
    uf = UnionFind(5)
    labels = uf.connected_components()
    assert len(uf) == 5
    assert np.unique(labels).size == 5
    assert uf.n_components == 5


def test_union_merges_components():
    uf = UnionFind(6)
    uf.union(0, 1)
    uf.union(2, 3)
    uf.union(1, 3)
    labels = uf.connected_components()
    assert labels[0] == labels[1] == labels[2] == labels[3]
    assert labels[4] != labels[0]
    assert labels[5] != labels[4]
    assert uf.n_components == 3


def test_union_is_idempotent():
    uf = UnionFind(3)
    r1 = uf.union(0, 1)
    r2 = uf.union(1, 0)
    assert r1 == r2
    assert uf.find(0) == uf.find(1)


@pytest.mark.parametrize("order", [[0, 3, 5, 7], [7, 5, 3, 0], [5, 0, 7, 3]])
def test_union_all_is_order_independent(order):
    uf = UnionFind(8)
    uf.union_all(order)
    labels = uf.connected_components()
    members = set(np.flatnonzero(labels == labels[0]).tolist())
    assert members == {0, 3, 5, 7}
    assert uf.n_components == 5


def test_union_all_single_element_is_noop():
    uf = UnionFind(3)
    uf.union_all([2])
    assert uf.n_components == 3


def test_union_all_rejects_empty():
    uf = UnionFind(3)
    with pytest.raises(ValueError):
        uf.union_all([])


def test_groups_in_first_seen_order():
    uf = UnionFind(5)
    uf.union_all([1, 4])
    uf.union(0, 2)
    groups = list(uf.groups().values())
    assert groups == [[0, 2], [1, 4], [3]]


def test_long_chain_compresses():
    n = 2000
    uf = UnionFind(n)
    for i in range(n - 1):
        uf.union(i, i + 1)
    assert uf.n_components == 1
    root = uf.find(0)
    assert all(uf.find(i) == root for i in range(0, n, 97))


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        UnionFind(-1)
