import numpy as np
import pytest

from mapper_covers.nerve.adjacency import edgelist_to_adjacency, valid_pairs


def test_adjacency_from_edge_list():
    adj = edgelist_to_adjacency([(1, 2), (1, 3), (2, 3)])
    assert adj == {1: [2, 3], 2: [3]}
    assert 3 not in adj
    assert sum(len(v) for v in adj.values()) == 3


def test_adjacency_keeps_duplicates_and_order():
    adj = edgelist_to_adjacency([(5, 1), (2, 9), (5, 1), (5, 0)])
    assert list(adj) == [5, 2]
    assert adj[5] == [1, 1, 0]


def test_adjacency_from_numpy_array():
    adj = edgelist_to_adjacency(np.array([[0, 1], [0, 2]], dtype=np.int64))
    assert adj == {0: [1, 2]}
    assert all(type(k) is int for k in adj)
    assert all(type(v) is int for v in adj[0])


def test_adjacency_with_key_tuples():
    adj = edgelist_to_adjacency([((1, 1), (1, 2)), ((1, 1), (2, 1))])
    assert adj == {(1, 1): [(1, 2), (2, 1)]}


def test_adjacency_rejects_non_pairs():
    with pytest.raises(ValueError):
        edgelist_to_adjacency([(1, 2, 3)])


def test_adjacency_empty():
    assert edgelist_to_adjacency([]) == {}


def test_valid_pairs_skips_missing():
    rows = np.array([[1, 2, -1], [2, 3, 4], [5, -1, -1]])
    assert valid_pairs(rows).tolist() == [[1, 2], [2, 3], [2, 4]]


def test_valid_pairs_nan_padding():
    rows = np.array([[0.0, 1.0, np.nan], [1.0, np.nan, np.nan]])
    assert valid_pairs(rows).tolist() == [[0, 1]]


def test_valid_pairs_shape_check():
    with pytest.raises(ValueError):
        valid_pairs(np.array([1, 2, 3]))
