"""
Tests for the Point2 value type.
"""
import pytest

from convack import Point2


class TestPoint2:
    """Construction, equality and vector helpers."""

    def test_coordinates_are_floats(self):
        p = Point2(3, 4)
        assert p.x == 3.0
        assert p.y == 4.0
        assert isinstance(p.x, float)

    def test_equality_is_exact(self):
        assert Point2(1.0, 2.0) == Point2(1.0, 2.0)
        assert Point2(1.0, 2.0) != Point2(1.0, 2.0 + 1e-12)
        assert not (Point2(1.0, 2.0) == (1.0, 2.0))

    def test_hash_matches_equality(self):
        points = {Point2(1.0, 2.0), Point2(1.0, 2.0), Point2(2.0, 1.0)}
        assert len(points) == 2

    def test_arithmetic(self):
        a = Point2(5.0, 7.0)
        b = Point2(2.0, 3.0)
        assert a + b == Point2(7.0, 10.0)
        assert a - b == Point2(3.0, 4.0)
        assert (a - b).magnitude2() == 25.0
        assert a.dot(b) == 31.0

    def test_unpacking(self):
        x, y = Point2(-1.5, 2.5)
        assert (x, y) == (-1.5, 2.5)

    def test_is_close(self):
        assert Point2(1.0, 1.0).is_close(Point2(1.0 + 1e-12, 1.0 - 1e-12))
        assert not Point2(1.0, 1.0).is_close(Point2(1.1, 1.0))
        assert Point2(1.0, 1.0).is_close(Point2(1.1, 1.0), tolerance=0.2)

    def test_str(self):
        assert str(Point2(42, 69)) == "(42.0,69.0)"
        assert repr(Point2(1, 2)) == "Point2(1.0, 2.0)"

    def test_immutable(self):
        p = Point2(1.0, 2.0)
        with pytest.raises(AttributeError):
            p.x = 5.0
