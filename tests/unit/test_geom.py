# tests/unit/test_geom.py

import pytest

from rasterkit.geom import Point, to_point

def test_point_is_value_type():
    assert Point(2, 3) == Point(2, 3)
    assert hash(Point(2, 3)) == hash(Point(2, 3))
    assert Point(2, 3) != Point(3, 2)

def test_point_is_immutable():
    p = Point(1, 1)
    with pytest.raises(AttributeError):
        p.x = 5

def test_point_unpacks_as_size():
    width, height = Point(20, 10)
    assert (width, height) == (20, 10)
    assert Point(20, 10).area == 200
    assert Point(20, 10).as_tuple() == (20, 10)

def test_to_point_accepts_pairs():
    assert to_point((4, 5)) == Point(4, 5)
    assert to_point(Point(4, 5)) == Point(4, 5)

@pytest.mark.parametrize("value", [(1,), (1, 2, 3), "ab", 7, (1.5, 2)])
def test_to_point_rejects_non_pairs(value):
    with pytest.raises(TypeError):
        to_point(value)
