"""
Transformation - 2D affine transformation matrix.

The matrix is stored column-major as six scalars [a, b, c, d, e, f]:

    | a  c  e |
    | b  d  f |
    | 0  0  1 |

The bottom row is left out since no supported operation changes it.
Each rotate/translate call left-multiplies its own matrix onto the current
one, so operations take effect in the order they were called in.
"""

import numpy as np
from numba import njit
from typing import Tuple
import math

from .point2 import Point2


# =============================================================================
# NUMBA-ACCELERATED KERNEL
# =============================================================================

@njit(cache=True)
def transform_vertices(vertices: np.ndarray, data: np.ndarray) -> np.ndarray:
    """
    Apply an affine matrix to every vertex.

    Args:
        vertices: (N, 2) array of vertex coordinates
        data: The six matrix scalars [a, b, c, d, e, f]

    Returns:
        Transformed vertices array (N, 2)
    """
    n = len(vertices)
    result = np.empty((n, 2), dtype=np.float64)

    for i in range(n):
        x = vertices[i, 0]
        y = vertices[i, 1]
        result[i, 0] = data[0] * x + data[2] * y + data[4]
        result[i, 1] = data[1] * x + data[3] * y + data[5]

    return result


# =============================================================================
# TRANSFORMATION CLASS
# =============================================================================

class Transformation:
    """
    Accumulated rotation and translation of a 2D shape.

    Starts out as the identity. Rotations are counter-clockwise around the
    origin, in radians.

    Example:
        t = Transformation().translate(0, 10).rotate(math.pi / 2)
        t.apply(Point2(0, 0))  # -> (-10, 0)
    """

    __slots__ = ['data']

    def __init__(self, data=None):
        if data is None:
            self.data = np.array([1.0, 0.0, 0.0, 1.0, 0.0, 0.0], dtype=np.float64)
        else:
            self.data = np.array(data, dtype=np.float64).reshape(6)

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> 'Transformation':
        """Build from a 3x3 (or 2x3) affine matrix."""
        m = np.asarray(matrix, dtype=np.float64)
        return cls([m[0, 0], m[1, 0], m[0, 1], m[1, 1], m[0, 2], m[1, 2]])

    def translate(self, x: float, y: float) -> 'Transformation':
        """Move by (x, y) after everything applied so far."""
        self.data[4] += x
        self.data[5] += y
        return self

    def rotate(self, angle_radians: float) -> 'Transformation':
        """Rotate around the origin after everything applied so far."""
        cosine = math.cos(angle_radians)
        sine = math.sin(angle_radians)

        # Computed from the old values only, column by column.
        old = self.data.copy()
        self.data[0] = cosine * old[0] - sine * old[1]
        self.data[1] = sine * old[0] + cosine * old[1]
        self.data[2] = cosine * old[2] - sine * old[3]
        self.data[3] = sine * old[2] + cosine * old[3]
        self.data[4] = cosine * old[4] - sine * old[5]
        self.data[5] = sine * old[4] + cosine * old[5]
        return self

    def apply(self, point: Point2) -> Point2:
        """Transform a single point."""
        a, b, c, d, e, f = self.data
        return Point2(a * point.x + c * point.y + e, b * point.x + d * point.y + f)

    def apply_to(self, vertices: np.ndarray) -> np.ndarray:
        """Transform an (N, 2) vertex array, returning a new array."""
        return transform_vertices(vertices, self.data)

    def then(self, other: 'Transformation') -> 'Transformation':
        """Composition that applies this transformation first, then `other`."""
        return Transformation.from_matrix(other.matrix() @ self.matrix())

    def inverse(self) -> 'Transformation':
        """
        The transformation that undoes this one.

        Rotations and translations never make the matrix singular, so the
        determinant is assumed to be non-zero.
        """
        a, b, c, d, e, f = self.data
        det = a * d - b * c
        ia = d / det
        ib = -b / det
        ic = -c / det
        id_ = a / det
        return Transformation([
            ia, ib, ic, id_,
            -(ia * e + ic * f),
            -(ib * e + id_ * f),
        ])

    def matrix(self) -> np.ndarray:
        """Full 3x3 homogeneous matrix."""
        a, b, c, d, e, f = self.data
        return np.array([
            [a, c, e],
            [b, d, f],
            [0.0, 0.0, 1.0],
        ], dtype=np.float64)

    def rotation_angle(self) -> float:
        """Rotation part of the matrix, in radians within (-pi, pi]."""
        return math.atan2(self.data[1], self.data[0])

    def translation(self) -> Tuple[float, float]:
        """Translation part of the matrix."""
        return float(self.data[4]), float(self.data[5])

    def copy(self) -> 'Transformation':
        return Transformation(self.data)

    def is_close(self, other: 'Transformation', tolerance: float = 1e-9) -> bool:
        return bool(np.allclose(self.data, other.data, rtol=0.0, atol=tolerance))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transformation):
            return NotImplemented
        return bool(np.array_equal(self.data, other.data))

    __hash__ = None

    def __repr__(self) -> str:
        a, b, c, d, e, f = self.data
        return f"Transformation([[{a:.6g}, {c:.6g}, {e:.6g}], [{b:.6g}, {d:.6g}, {f:.6g}]])"


def warmup():
    """Warm up JIT compilation."""
    verts = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]], dtype=np.float64)
    _ = transform_vertices(verts, Transformation().rotate(0.5).data)
