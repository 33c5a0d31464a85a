import numpy as np
import pytest

from mapper_covers.level_sets import LevelSet, as_key, format_index_key, parse_index_key


@pytest.mark.parametrize("key", [(1,), (1, 2), (3, 10, 7), (12, 1, 1, 4)])
def test_key_display_round_trip(key):
    text = format_index_key(key)
    assert text == "(" + " ".join(str(k) for k in key) + ")"
    assert parse_index_key(text) == key


def test_format_index_key_accepts_numpy():
    assert format_index_key(np.array([2, 5])) == "(2 5)"


@pytest.mark.parametrize("bad", ["1 2", "(1 2", "()", "(1 x)", "(1.5 2)"])
def test_parse_index_key_rejects_malformed(bad):
    with pytest.raises(ValueError):
        parse_index_key(bad)


def test_as_key_normalizes_inputs():
    assert as_key("(1 2)") == (1, 2)
    assert as_key(3) == (3,)
    assert as_key([4, 5]) == (4, 5)
    assert as_key(np.array([1, 1, 2])) == (1, 1, 2)
    with pytest.raises(ValueError):
        as_key([1.5, 2.0])


def test_level_set_points_sorted_unique_readonly():
    ls = LevelSet(points=[5, 1, 3, 1])
    assert ls.points.tolist() == [1, 3, 5]
    assert len(ls) == 3
    assert list(ls) == [1, 3, 5]
    with pytest.raises(ValueError):
        ls.points[0] = 9


def test_level_set_bounds_shape():
    ls = LevelSet(points=[0], bounds=[[0.0, 1.0], [2.0, 3.0]])
    assert ls.bounds.shape == (2, 2)
    flat = LevelSet(points=[0], bounds=[0.0, 1.0])
    assert flat.bounds.shape == (2, 1)
    with pytest.raises(ValueError):
        LevelSet(points=[0], bounds=np.zeros((3, 2)))


def test_level_set_intersects_and_payload():
    a = LevelSet(points=[0, 1, 2])
    b = LevelSet(points=[2, 3])
    c = LevelSet(points=[])
    assert a.intersects(b)
    assert not b.intersects(LevelSet(points=[0]))
    assert c.is_empty and not a.intersects(c)
    assert a.to_dict() == {"points": [0, 1, 2], "bounds": None}
