"""
Placement - Where the next polygon goes.

The beam search decides the order in which polygons are inserted; this
module decides the position of one insertion. The polygon is rotated to a
few evenly spaced orientations, and for each one it is slid in from a
number of directions until it rests against the polygons already packed.
The resting position that leaves the least white space in the convex hull
of the packing wins.
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Optional
import math

from convack.config import PackingConfig, CONFIG
from convack.core.convex_polygon import ConvexPolygon
from convack.core.collision import collides_any
from convack.core.geometry import merge_hulls, polygon_area, stack_vertices


@dataclass
class Placement:
    """
    Rigid motion that puts a polygon in its packed position.

    The polygon's pivot is moved to the origin, rotated by `angle`, and
    then moved by (dx, dy).
    """

    pivot_x: float = 0.0
    pivot_y: float = 0.0
    angle: float = 0.0
    dx: float = 0.0
    dy: float = 0.0

    def apply(self, polygon: ConvexPolygon) -> ConvexPolygon:
        """Move the polygon in place. Returns the same polygon."""
        return (polygon
                .translate(-self.pivot_x, -self.pivot_y)
                .rotate(self.angle)
                .translate(self.dx, self.dy))


def _max_radius(vertices: np.ndarray) -> float:
    if len(vertices) == 0:
        return 0.0
    return float(np.sqrt((vertices ** 2).sum(axis=1)).max())


def _slide_distance(
    vertices: np.ndarray,
    ux: float,
    uy: float,
    placed: np.ndarray,
    offsets: np.ndarray,
    far: float,
    iterations: int
) -> Optional[float]:
    """
    Shortest distance along (ux, uy) at which the polygon is clear.

    Returns:
        The distance, or None if even `far` collides
    """
    if not collides_any(vertices, 0.0, 0.0, placed, offsets):
        return 0.0
    if collides_any(vertices, far * ux, far * uy, placed, offsets):
        return None

    lo = 0.0
    hi = far
    for _ in range(iterations):
        mid = 0.5 * (lo + hi)
        if collides_any(vertices, mid * ux, mid * uy, placed, offsets):
            lo = mid
        else:
            hi = mid
    return hi


def find_placement(
    polygon: ConvexPolygon,
    placed: List[ConvexPolygon],
    config: PackingConfig = None
) -> Placement:
    """
    Find a non-overlapping position for a polygon next to a packed set.

    Args:
        polygon: The polygon to place (not modified)
        placed: Polygons already in their packed positions
        config: Number of directions, rotations and bisection steps

    Returns:
        The best Placement found. With nothing placed yet, the polygon is
        centred on the origin.
    """
    cfg = config or CONFIG
    pivot = polygon.centroid()

    if not placed:
        return Placement(pivot.x, pivot.y, 0.0, 0.0, 0.0)

    buffer, offsets = stack_vertices([p.vertices for p in placed])
    placed_hull = merge_hulls(buffer, offsets)
    reach = _max_radius(buffer)
    covered = sum(p.area() for p in placed) + polygon.area()

    best = None
    best_waste = math.inf

    for r in range(cfg.rotations):
        angle = 2.0 * math.pi * r / cfg.rotations
        centred = Placement(pivot.x, pivot.y, angle, 0.0, 0.0).apply(polygon.copy())
        trial = centred.vertices
        # Beyond this distance the two bounding discs are disjoint.
        far = reach + _max_radius(trial) + 1.0

        for d in range(cfg.directions):
            theta = 2.0 * math.pi * d / cfg.directions
            ux = math.cos(theta)
            uy = math.sin(theta)

            distance = _slide_distance(trial, ux, uy, buffer, offsets, far, cfg.slide_iterations)
            if distance is None:
                continue
            dx = distance * ux
            dy = distance * uy

            moved = trial + np.array([dx, dy])
            hull_buffer, hull_offsets = stack_vertices([placed_hull, moved])
            hull_area = polygon_area(merge_hulls(hull_buffer, hull_offsets))
            waste = 1.0 - covered / hull_area if hull_area > 0 else 0.0

            if waste < best_waste:
                best_waste = waste
                best = Placement(pivot.x, pivot.y, angle, dx, dy)

            if distance == 0.0:
                break  # Every other direction rests at the same spot

    if best is None:
        # Only reachable with non-finite coordinates; keep the polygon centred.
        best = Placement(pivot.x, pivot.y, 0.0, 0.0, 0.0)
    return best
