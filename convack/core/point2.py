"""
Point2 - Immutable 2D coordinate.

Equality is exact: geometric code relies on vertices matching exactly
after construction (hull start detection, polygon equality). Points that
come out of arithmetic should be compared with is_close instead.
"""

from typing import Iterator


class Point2:
    """
    A point in 2D space.

    Attributes:
        x: Coordinate on the X axis
        y: Coordinate on the Y axis
    """

    __slots__ = ['_x', '_y']

    def __init__(self, x: float, y: float):
        self._x = float(x)
        self._y = float(y)

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    def __eq__(self, other) -> bool:
        if not isinstance(other, Point2):
            return NotImplemented
        return self._x == other._x and self._y == other._y

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash((self._x, self._y))

    def __add__(self, other: 'Point2') -> 'Point2':
        return Point2(self._x + other._x, self._y + other._y)

    def __sub__(self, other: 'Point2') -> 'Point2':
        return Point2(self._x - other._x, self._y - other._y)

    def __iter__(self) -> Iterator[float]:
        yield self._x
        yield self._y

    def dot(self, other: 'Point2') -> float:
        """Dot product with another point treated as a vector."""
        return self._x * other._x + self._y * other._y

    def magnitude2(self) -> float:
        """Squared length of this point treated as a vector."""
        return self._x * self._x + self._y * self._y

    def is_close(self, other: 'Point2', tolerance: float = 1e-9) -> bool:
        """Tolerant comparison, for points produced by arithmetic."""
        return abs(self._x - other._x) <= tolerance and abs(self._y - other._y) <= tolerance

    def __repr__(self) -> str:
        return f"Point2({self._x!r}, {self._y!r})"

    def __str__(self) -> str:
        return f"({self._x},{self._y})"
