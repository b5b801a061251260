"""
Convex Polygon - The shape being packed.

A ConvexPolygon owns its vertex list and the accumulated transformation of
every translate/rotate applied since construction. The vertices are always
moved directly; the transformation is bookkeeping that tells the caller
how the polygon got to where it is.

The class assumes, but does not check, that directly supplied vertices
are convex and counter-clockwise. convex_hull always produces such a
polygon from arbitrary input.
"""

import numpy as np
from typing import List, Sequence, Tuple

from .point2 import Point2
from .transformation import Transformation
from .geometry import (
    gift_wrapping,
    merge_hulls,
    polygon_area,
    polygon_contains,
    stack_vertices,
)
from .collision import convex_overlap, get_bounds


def _as_vertex_array(vertices) -> np.ndarray:
    """Shape any supported vertex input into a fresh (N, 2) float64 array."""
    if isinstance(vertices, np.ndarray):
        array = np.array(vertices, dtype=np.float64)
    else:
        array = np.array([(float(v[0]), float(v[1])) if not isinstance(v, Point2) else (v.x, v.y)
                          for v in vertices], dtype=np.float64)
    if array.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError(f"Expected (N, 2) vertices, got shape {array.shape}")
    return np.ascontiguousarray(array)


class ConvexPolygon:
    """
    Convex polygon with placement tracking.

    Properties:
        vertices: (N, 2) vertex array, CCW
        bounds: Bounding box (min_x, min_y, max_x, max_y)
    """

    __slots__ = ['_vertices', '_transformation']

    def __init__(self, vertices=()):
        """
        Construct from vertices that are already convex and CCW.

        Args:
            vertices: Point2 objects, (x, y) pairs or an (N, 2) array
        """
        self._vertices = _as_vertex_array(vertices)
        self._transformation = Transformation()

    @classmethod
    def convex_hull(cls, items: Sequence) -> 'ConvexPolygon':
        """
        Smallest convex polygon around a set of points or convex polygons.

        Given points (in any order, any winding, possibly concave or with
        duplicates) this uses gift wrapping. Given ConvexPolygon instances it
        merges their hulls, using their convexity to binary search each one
        instead of scanning every vertex.

        Returns:
            A new CCW convex polygon without colinear vertices. Inputs of 0, 1
            or 2 points and a single polygon come back unchanged.
        """
        items = list(items)
        if items and all(isinstance(item, ConvexPolygon) for item in items):
            return cls._merge_hulls(items)
        return cls(gift_wrapping(_as_vertex_array(items)))

    @classmethod
    def _merge_hulls(cls, polygons: List['ConvexPolygon']) -> 'ConvexPolygon':
        if len(polygons) == 1:
            return polygons[0].copy()
        buffer, offsets = stack_vertices([p._vertices for p in polygons])
        return cls(merge_hulls(buffer, offsets))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def vertices(self) -> np.ndarray:
        """Vertex array (N, 2). Treat as read-only."""
        return self._vertices

    def get_vertices(self) -> List[Point2]:
        """Vertices as Point2 objects."""
        return [Point2(x, y) for x, y in self._vertices.tolist()]

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Get bounding box (min_x, min_y, max_x, max_y)."""
        return get_bounds(self._vertices)

    def area(self) -> float:
        """Signed surface area; 0 for fewer than 3 vertices."""
        return polygon_area(self._vertices)

    def contains(self, point: Point2) -> bool:
        """Whether the point is strictly inside. The boundary is outside."""
        return polygon_contains(self._vertices, float(point.x), float(point.y))

    def collides(self, other: 'ConvexPolygon') -> bool:
        """
        Whether the two polygons overlap with a positive area.

        Touching edges or vertices are not a collision, and polygons with
        fewer than 3 vertices never collide with anything.
        """
        return convex_overlap(self._vertices, other._vertices)

    def centroid(self) -> Point2:
        """Average of the vertices. Origin for an empty polygon."""
        if len(self._vertices) == 0:
            return Point2(0.0, 0.0)
        cx, cy = self._vertices.mean(axis=0)
        return Point2(cx, cy)

    def current_transformation(self) -> Transformation:
        """
        Product of all transformations applied since construction.

        Applying its inverse to the current vertices gives back the
        vertices the polygon was constructed with.
        """
        return self._transformation

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def translate(self, x: float, y: float) -> 'ConvexPolygon':
        """Move the polygon by (x, y)."""
        self._apply(Transformation().translate(x, y))
        self._transformation.translate(x, y)
        return self

    def rotate(self, angle_radians: float) -> 'ConvexPolygon':
        """
        Rotate counter-clockwise around the origin.

        To rotate around another point, translate that point to the origin
        first, rotate, then translate back.
        """
        self._apply(Transformation().rotate(angle_radians))
        self._transformation.rotate(angle_radians)
        return self

    def _apply(self, transformation: Transformation):
        self._vertices = transformation.apply_to(self._vertices)

    # -------------------------------------------------------------------------
    # Value semantics
    # -------------------------------------------------------------------------

    def copy(self) -> 'ConvexPolygon':
        """Create a copy of this polygon, transformation included."""
        result = ConvexPolygon(self._vertices)
        result._transformation = self._transformation.copy()
        return result

    def __len__(self) -> int:
        return len(self._vertices)

    def __eq__(self, other) -> bool:
        """
        Same vertex loop, regardless of which vertex the loop starts at.

        Both polygons are assumed to be minimal (no colinear vertices).
        """
        if not isinstance(other, ConvexPolygon):
            return NotImplemented
        mine = self.get_vertices()
        theirs = other.get_vertices()
        if len(mine) != len(theirs):
            return False
        if not mine:
            return True

        n = len(mine)
        for offset in range(n):
            if all(mine[i] == theirs[(i + offset) % n] for i in range(n)):
                return True
        return False

    __hash__ = None

    def __repr__(self) -> str:
        # At most 32 vertices, to keep debugging output readable.
        shown = [str(p) for p in self.get_vertices()[:32]]
        if len(self._vertices) > 32:
            shown.append("...")
        return f"ConvexPolygon([{', '.join(shown)}])"
