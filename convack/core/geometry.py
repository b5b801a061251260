"""
Convex Geometry Kernels - Exact predicates and hull construction.

Every kernel here works on (N, 2) float64 vertex arrays and is compiled
with Numba. None of them use fastmath: the hull algorithms depend on
cross products that come out exactly zero for colinear input, and on
exact coordinate matches to detect when a hull loop closes.

Conventions:
- Polygons are counter-clockwise and not closed (last vertex connects
  back to the first).
- Fewer than 3 vertices is a valid, degenerate polygon without area.
"""

import numpy as np
from numba import njit


# Search modes for the extreme-vertex binary search
LEFTMOST = 0     # Minimum x, ties broken by minimum y
CLOCKWISE = 1    # Most clockwise vertex as seen from a query point


# =============================================================================
# PREDICATES
# =============================================================================

@njit(cache=True)
def is_left(ax: float, ay: float, bx: float, by: float, qx: float, qy: float) -> float:
    """
    Which side of the line through a and b the query point is on.

    Returns:
        Positive if q is left of a->b, negative if right, zero if on the line
    """
    return (bx - ax) * (qy - ay) - (by - ay) * (qx - ax)


@njit(cache=True)
def _distance2(ax: float, ay: float, bx: float, by: float) -> float:
    dx = bx - ax
    dy = by - ay
    return dx * dx + dy * dy


@njit(cache=True)
def more_clockwise(qx: float, qy: float, bx: float, by: float, cx: float, cy: float) -> bool:
    """
    Whether c should replace b as the next gift-wrapping vertex after q.

    c wins if it is strictly right of q->b, or colinear with it and
    further away from q. Points equal to q never win.
    """
    turn = is_left(qx, qy, bx, by, cx, cy)
    if turn < 0.0:
        return True
    if turn == 0.0:
        return _distance2(qx, qy, cx, cy) > _distance2(qx, qy, bx, by)
    return False


@njit(cache=True)
def _lex_less(ax: float, ay: float, bx: float, by: float) -> bool:
    if ax != bx:
        return ax < bx
    return ay < by


# =============================================================================
# MEASURES
# =============================================================================

@njit(cache=True)
def polygon_area(vertices: np.ndarray) -> float:
    """Signed area using the shoelace formula. CCW is positive."""
    n = len(vertices)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = i - 1 if i > 0 else n - 1
        area += vertices[j, 0] * vertices[i, 1] - vertices[j, 1] * vertices[i, 0]
    return area / 2.0


@njit(cache=True)
def polygon_contains(vertices: np.ndarray, px: float, py: float) -> bool:
    """
    Whether the point is strictly inside a CCW convex polygon.

    The boundary counts as outside.
    """
    n = len(vertices)
    if n < 3:
        return False

    for i in range(n):
        j = (i + 1) % n
        if is_left(vertices[i, 0], vertices[i, 1], vertices[j, 0], vertices[j, 1], px, py) <= 0.0:
            return False
    return True


# =============================================================================
# GIFT WRAPPING
# =============================================================================

@njit(cache=True)
def gift_wrapping(points: np.ndarray) -> np.ndarray:
    """
    Convex hull of a point set, CCW, without colinear or duplicate vertices.

    Args:
        points: (N, 2) array of points in any order

    Returns:
        (H, 2) hull vertices, starting at the minimum (x, y) point.
        Inputs of 0, 1 or 2 points are returned unchanged.
    """
    n = len(points)
    if n <= 2:
        return points.copy()

    # The leftmost point (lowest on ties) is always on the hull.
    start = 0
    for i in range(1, n):
        if _lex_less(points[i, 0], points[i, 1], points[start, 0], points[start, 1]):
            start = i
    sx = points[start, 0]
    sy = points[start, 1]

    hull = np.empty((n, 2), dtype=np.float64)
    h = 0
    lx = sx
    ly = sy
    while h < n:
        hull[h, 0] = lx
        hull[h, 1] = ly
        h += 1

        # Initial candidate must differ from the last hull vertex.
        best = -1
        for i in range(n):
            if points[i, 0] != lx or points[i, 1] != ly:
                best = i
                break
        if best < 0:
            break  # All points coincide

        bx = points[best, 0]
        by = points[best, 1]
        for i in range(n):
            if more_clockwise(lx, ly, bx, by, points[i, 0], points[i, 1]):
                bx = points[i, 0]
                by = points[i, 1]

        lx = bx
        ly = by
        if lx == sx and ly == sy:
            break

    return hull[:h].copy()


# =============================================================================
# EXTREME VERTEX SEARCH ON A CONVEX CYCLE
# =============================================================================

@njit(cache=True)
def _beats(vertices, base, n, i, j, mode, qx, qy) -> bool:
    """Whether vertex i of the cycle is preferred over vertex j."""
    a = base + (i + n) % n
    b = base + (j + n) % n
    if mode == LEFTMOST:
        return _lex_less(vertices[a, 0], vertices[a, 1], vertices[b, 0], vertices[b, 1])
    return more_clockwise(qx, qy, vertices[b, 0], vertices[b, 1], vertices[a, 0], vertices[a, 1])


@njit(cache=True)
def _settle(vertices, base, n, start, mode, qx, qy) -> int:
    """
    Walk to a neighbouring vertex while one is preferred.

    On a convex cycle the preference is unimodal, so this ends on the
    global extreme. It normally takes zero or one step after the binary
    search; colinear ties and vertices equal to the query point can take
    a few more.
    """
    i = start
    for _ in range(2 * n):
        best = i
        nxt = (i + 1) % n
        prv = (i + n - 1) % n
        if _beats(vertices, base, n, nxt, best, mode, qx, qy):
            best = nxt
        if _beats(vertices, base, n, prv, best, mode, qx, qy):
            best = prv
        if best == i:
            break
        i = best
    return i


@njit(cache=True)
def extreme_index(vertices, base, n, mode, qx, qy) -> int:
    """
    Binary search for the preferred vertex of a convex cycle.

    The cycle occupies vertices[base:base + n]. The search keeps a chain
    [a, b] known to hold the maximum, testing whether the midpoint is a
    local maximum and otherwise descending into the half where the
    maximum must be, based on the direction of the edges at a and c.

    Args:
        vertices: Vertex buffer
        base: Offset of the cycle in the buffer
        n: Number of vertices in the cycle
        mode: LEFTMOST or CLOCKWISE
        qx, qy: Query point for CLOCKWISE mode

    Returns:
        Index of the vertex within the cycle (0 <= index < n)
    """
    if n <= 3:
        best = 0
        for i in range(1, n):
            if _beats(vertices, base, n, i, best, mode, qx, qy):
                best = i
        return best

    up_a = _beats(vertices, base, n, 1, 0, mode, qx, qy)
    if not up_a and not _beats(vertices, base, n, n - 1, 0, mode, qx, qy):
        return _settle(vertices, base, n, 0, mode, qx, qy)

    a = 0
    b = n
    found = -1
    while b - a > 1:
        c = (a + b) // 2
        up_c = _beats(vertices, base, n, c + 1, c, mode, qx, qy)
        if not up_c and not _beats(vertices, base, n, c - 1, c, mode, qx, qy):
            found = c
            break

        if up_a:
            if not up_c:
                b = c
            elif _beats(vertices, base, n, a, c, mode, qx, qy):
                b = c
            else:
                a = c
                up_a = up_c
        else:
            if up_c:
                a = c
                up_a = up_c
            elif _beats(vertices, base, n, c, a, mode, qx, qy):
                b = c
            else:
                a = c
                up_a = up_c

    if found < 0:
        found = a
    return _settle(vertices, base, n, found, mode, qx, qy)


# =============================================================================
# HULL MERGING (CHAN'S ALGORITHM, SECOND PHASE)
# =============================================================================

@njit(cache=True)
def merge_hulls(vertices: np.ndarray, offsets: np.ndarray) -> np.ndarray:
    """
    Convex hull around several convex CCW polygons.

    Args:
        vertices: (N, 2) buffer with every polygon's vertices back to back
        offsets: (k + 1,) start of each polygon in the buffer, plus N

    Returns:
        (H, 2) hull vertices, CCW, starting at the minimum (x, y) vertex
    """
    k = len(offsets) - 1
    total = offsets[k]

    start_poly = -1
    start_idx = 0
    for p in range(k):
        n = offsets[p + 1] - offsets[p]
        if n == 0:
            continue
        i = extreme_index(vertices, offsets[p], n, LEFTMOST, 0.0, 0.0)
        if start_poly < 0:
            start_poly = p
            start_idx = i
        else:
            cur = offsets[start_poly] + start_idx
            new = offsets[p] + i
            if _lex_less(vertices[new, 0], vertices[new, 1], vertices[cur, 0], vertices[cur, 1]):
                start_poly = p
                start_idx = i

    if start_poly < 0:
        return np.empty((0, 2), dtype=np.float64)

    sx = vertices[offsets[start_poly] + start_idx, 0]
    sy = vertices[offsets[start_poly] + start_idx, 1]

    hull = np.empty((total, 2), dtype=np.float64)
    h = 0
    owner = start_poly
    idx = start_idx
    while h < total:
        base = offsets[owner]
        n_owner = offsets[owner + 1] - base
        qx = vertices[base + idx, 0]
        qy = vertices[base + idx, 1]
        hull[h, 0] = qx
        hull[h, 1] = qy
        h += 1

        # The owner's next vertex is the natural first candidate.
        best_poly = owner
        best_idx = _settle(vertices, base, n_owner, (idx + 1) % n_owner, CLOCKWISE, qx, qy)
        bx = vertices[base + best_idx, 0]
        by = vertices[base + best_idx, 1]

        for p in range(k):
            n = offsets[p + 1] - offsets[p]
            if p == owner or n == 0:
                continue
            j = extreme_index(vertices, offsets[p], n, CLOCKWISE, qx, qy)
            cx = vertices[offsets[p] + j, 0]
            cy = vertices[offsets[p] + j, 1]
            if more_clockwise(qx, qy, bx, by, cx, cy):
                best_poly = p
                best_idx = j
                bx = cx
                by = cy

        if bx == qx and by == qy:
            break  # Nothing but the current vertex left
        if bx == sx and by == sy:
            break

        owner = best_poly
        idx = best_idx

    return hull[:h].copy()


def stack_vertices(vertex_arrays) -> tuple:
    """
    Pack a list of (N_i, 2) arrays into one buffer plus offsets.

    Returns:
        (buffer, offsets) as used by merge_hulls and collides_any
    """
    offsets = np.zeros(len(vertex_arrays) + 1, dtype=np.int64)
    for i, verts in enumerate(vertex_arrays):
        offsets[i + 1] = offsets[i] + len(verts)
    if offsets[-1] == 0:
        return np.empty((0, 2), dtype=np.float64), offsets
    buffer = np.ascontiguousarray(np.concatenate(vertex_arrays, axis=0), dtype=np.float64)
    return buffer, offsets


# =============================================================================
# WARMUP
# =============================================================================

def warmup():
    """Warm up JIT compilation."""
    square = np.array([
        [0.0, 0.0],
        [1.0, 0.0],
        [1.0, 1.0],
        [0.0, 1.0]
    ], dtype=np.float64)
    shifted = square + 2.0

    _ = is_left(0.0, 0.0, 1.0, 0.0, 0.5, 0.5)
    _ = polygon_area(square)
    _ = polygon_contains(square, 0.5, 0.5)
    _ = gift_wrapping(square)
    buffer, offsets = stack_vertices([square, shifted])
    _ = merge_hulls(buffer, offsets)


if __name__ == "__main__":
    warmup()

    star = np.array([
        [100.0, 0.0], [20.0, 20.0], [0.0, 100.0], [-20.0, 20.0],
        [-100.0, 0.0], [-20.0, -20.0], [0.0, -100.0], [20.0, -20.0],
    ], dtype=np.float64)
    hull = gift_wrapping(star)
    print(f"\nHull of star ({len(hull)} vertices):")
    print(hull)
    print(f"Hull area: {polygon_area(hull):.1f} sq units")
