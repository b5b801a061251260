"""
Collision Detection - Separating Axis Theorem for convex polygons.

Two convex polygons only collide when they overlap with a positive area.
Shared edges and shared vertices are contact, not collision.

This module provides:
1. AABB pre-check - Ultra-fast bounding box filter
2. SAT (Separating Axis Theorem) - Exact test for convex CCW polygons
3. Shapely-based - Independent check used to verify finished packings
4. Batch checks over a packed set of polygons
"""

import numpy as np
from numba import njit
from typing import List, Tuple
import math

from shapely.geometry import Polygon
from shapely.validation import make_valid


# =============================================================================
# AXIS-ALIGNED BOUNDING BOX (AABB) CHECKS
# =============================================================================

@njit(cache=True)
def get_bounds(vertices: np.ndarray) -> Tuple[float, float, float, float]:
    """
    Get axis-aligned bounding box for vertices.

    Returns:
        (min_x, min_y, max_x, max_y), infinite and inverted when empty
    """
    min_x = math.inf
    min_y = math.inf
    max_x = -math.inf
    max_y = -math.inf

    for i in range(len(vertices)):
        x = vertices[i, 0]
        y = vertices[i, 1]
        if x < min_x:
            min_x = x
        if x > max_x:
            max_x = x
        if y < min_y:
            min_y = y
        if y > max_y:
            max_y = y

    return min_x, min_y, max_x, max_y


@njit(cache=True)
def bounds_overlap(
    b1_min_x: float, b1_min_y: float, b1_max_x: float, b1_max_y: float,
    b2_min_x: float, b2_min_y: float, b2_max_x: float, b2_max_y: float
) -> bool:
    """
    Check if two AABBs overlap with a positive area.

    Boxes that only touch do not overlap.
    """
    return not (
        b1_max_x <= b2_min_x or b2_max_x <= b1_min_x or
        b1_max_y <= b2_min_y or b2_max_y <= b1_min_y
    )


# =============================================================================
# SEPARATING AXIS THEOREM (SAT)
# =============================================================================

@njit(cache=True)
def separating_axis_exists(edge_vertices: np.ndarray, other_vertices: np.ndarray) -> bool:
    """
    Whether one of the edges of a CCW convex polygon separates it from another.

    Each edge's inward normal is a candidate axis. The polygon owning the
    edges lies entirely on the positive side of it, so the edge separates
    when every vertex of the other polygon projects to zero or less,
    measured from the edge's origin vertex.
    """
    n = len(edge_vertices)
    m = len(other_vertices)

    for i in range(n):
        j = (i + 1) % n
        origin_x = edge_vertices[i, 0]
        origin_y = edge_vertices[i, 1]
        edge_x = edge_vertices[j, 0] - origin_x
        edge_y = edge_vertices[j, 1] - origin_y
        if edge_x == 0.0 and edge_y == 0.0:
            continue  # Duplicate vertex, no axis

        # Perpendicular (inward normal) - potential separating axis
        axis_x = -edge_y
        axis_y = edge_x

        separated = True
        for k in range(m):
            projection = (axis_x * (other_vertices[k, 0] - origin_x) +
                          axis_y * (other_vertices[k, 1] - origin_y))
            if projection > 0.0:
                separated = False
                break
        if separated:
            return True

    return False


@njit(cache=True)
def convex_overlap(verts1: np.ndarray, verts2: np.ndarray) -> bool:
    """
    Check if two convex CCW polygons overlap with a positive area.

    Polygons with fewer than 3 vertices have no area and never overlap.
    """
    if len(verts1) < 3 or len(verts2) < 3:
        return False

    b1_min_x, b1_min_y, b1_max_x, b1_max_y = get_bounds(verts1)
    b2_min_x, b2_min_y, b2_max_x, b2_max_y = get_bounds(verts2)
    if not bounds_overlap(b1_min_x, b1_min_y, b1_max_x, b1_max_y,
                          b2_min_x, b2_min_y, b2_max_x, b2_max_y):
        return False

    if separating_axis_exists(verts1, verts2):
        return False
    if separating_axis_exists(verts2, verts1):
        return False
    return True  # No separating axis found = overlapping


@njit(cache=True)
def collides_any(
    vertices: np.ndarray,
    dx: float,
    dy: float,
    placed: np.ndarray,
    offsets: np.ndarray
) -> bool:
    """
    Check a translated polygon against every polygon of a packed set.

    Args:
        vertices: (N, 2) vertices of the polygon to test
        dx, dy: Translation to apply to it first
        placed: Vertex buffer of the packed polygons
        offsets: Start of each packed polygon in the buffer, plus its length

    Returns:
        True if it overlaps any packed polygon
    """
    n = len(vertices)
    if n < 3:
        return False

    moved = np.empty((n, 2), dtype=np.float64)
    for i in range(n):
        moved[i, 0] = vertices[i, 0] + dx
        moved[i, 1] = vertices[i, 1] + dy

    for p in range(len(offsets) - 1):
        if convex_overlap(moved, placed[offsets[p]:offsets[p + 1]]):
            return True
    return False


# =============================================================================
# SHAPELY-BASED COLLISION (Independent verification)
# =============================================================================

def shapely_overlap(verts1: np.ndarray, verts2: np.ndarray) -> bool:
    """
    Check if two polygons overlap using Shapely.

    Slower than SAT and shares no code with it.
    Returns True if interiors intersect (not just touching).
    """
    if len(verts1) < 3 or len(verts2) < 3:
        return False

    p1 = Polygon(verts1)
    p2 = Polygon(verts2)

    # Colinear vertices leave nothing to overlap with
    if p1.area == 0.0 or p2.area == 0.0:
        return False

    if not p1.is_valid:
        p1 = make_valid(p1)
    if not p2.is_valid:
        p2 = make_valid(p2)

    return p1.intersects(p2) and not p1.touches(p2)


# =============================================================================
# MAIN COLLISION CHECKING FUNCTIONS
# =============================================================================

def polygons_overlap(verts1: np.ndarray, verts2: np.ndarray, use_shapely: bool = False) -> bool:
    """
    Check if two convex polygons overlap.

    Args:
        verts1: First polygon vertices (N, 2)
        verts2: Second polygon vertices (M, 2)
        use_shapely: Use Shapely instead of SAT

    Returns:
        True if overlapping, False otherwise
    """
    if use_shapely:
        return shapely_overlap(verts1, verts2)
    return convex_overlap(verts1, verts2)


def check_any_collision(polygons, use_shapely: bool = False) -> bool:
    """
    Check if ANY pair of polygons collides.

    Args:
        polygons: List of ConvexPolygon
        use_shapely: Use Shapely for the detailed check

    Returns:
        True if any collision exists, False otherwise
    """
    n = len(polygons)
    all_bounds = [polygon.bounds for polygon in polygons]

    for i in range(n):
        for j in range(i + 1, n):
            # Quick AABB check
            if bounds_overlap(*all_bounds[i], *all_bounds[j]):
                if polygons_overlap(polygons[i].vertices, polygons[j].vertices, use_shapely):
                    return True

    return False


def check_all_collisions(polygons, use_shapely: bool = False) -> List[Tuple[int, int]]:
    """
    Find ALL colliding pairs.

    Args:
        polygons: List of ConvexPolygon
        use_shapely: Use Shapely for the detailed check

    Returns:
        List of (i, j) tuples for colliding pairs
    """
    n = len(polygons)
    all_bounds = [polygon.bounds for polygon in polygons]
    collisions = []

    for i in range(n):
        for j in range(i + 1, n):
            if bounds_overlap(*all_bounds[i], *all_bounds[j]):
                if polygons_overlap(polygons[i].vertices, polygons[j].vertices, use_shapely):
                    collisions.append((i, j))

    return collisions


def validate_packing(polygons, use_shapely: bool = False) -> Tuple[bool, List[Tuple[int, int]]]:
    """
    Validate a packed set for collisions.

    With use_shapely the result does not depend on the SAT code that
    produced the packing, but contacts found by bisection may then show up
    as overlaps of a few ulps.

    Returns:
        (is_valid, list_of_collisions)
    """
    collisions = check_all_collisions(polygons, use_shapely=use_shapely)
    return len(collisions) == 0, collisions


# =============================================================================
# WARMUP
# =============================================================================

def warmup():
    """Warm up JIT compilation."""
    verts = np.array([
        [0.0, 0.0],
        [1.0, 0.0],
        [1.0, 1.0],
        [0.0, 1.0]
    ], dtype=np.float64)
    offsets = np.array([0, 4], dtype=np.int64)

    _ = get_bounds(verts)
    _ = bounds_overlap(0.0, 0.0, 1.0, 1.0, 0.5, 0.5, 1.5, 1.5)
    _ = separating_axis_exists(verts, verts)
    _ = convex_overlap(verts, verts)
    _ = collides_any(verts, 0.5, 0.5, verts, offsets)
