"""
Shared test fixtures for the packing tests.
"""
import math

import numpy as np
import pytest

from convack import ConvexPolygon, PackingConfig, Point2, warmup


@pytest.fixture(scope="session", autouse=True)
def compiled_kernels():
    """JIT-compile the numba kernels once for the whole session."""
    warmup()


@pytest.fixture
def triangle():
    """A CCW triangle with a 50 wide base and 50 height."""
    return [Point2(0.0, 0.0), Point2(50.0, 0.0), Point2(25.0, 50.0)]


@pytest.fixture
def star():
    """A four-pointed star centred around 0,0. Not convex."""
    return [
        Point2(100.0, 0.0),
        Point2(20.0, 20.0),
        Point2(0.0, 100.0),
        Point2(-20.0, 20.0),
        Point2(-100.0, 0.0),
        Point2(-20.0, -20.0),
        Point2(0.0, -100.0),
        Point2(20.0, -20.0),
    ]


@pytest.fixture
def colinear():
    """100 vertices in a long line."""
    return [Point2(1.1 * i, 2.2 * i) for i in range(100)]


@pytest.fixture
def fast_config():
    """A small search so packing tests stay quick."""
    return PackingConfig(beam_width=3, directions=8, rotations=2, slide_iterations=30)


def regular_polygon(num_sides: int, radius: float = 10.0) -> ConvexPolygon:
    """Regular polygon centred on the origin, CCW."""
    vertices = []
    for i in range(num_sides):
        angle = 2.0 * math.pi / num_sides * i
        vertices.append((math.cos(angle) * radius, math.sin(angle) * radius))
    return ConvexPolygon(vertices)


def random_convex_polygon(rng: np.random.Generator, spread: int = 20, shift: int = 30) -> ConvexPolygon:
    """Hull of a few integer points, at an integer offset. Always has area."""
    while True:
        points = rng.integers(-spread, spread, size=(6, 2)).astype(np.float64)
        points += rng.integers(-shift, shift, size=2)
        hull = ConvexPolygon.convex_hull(points)
        if len(hull) >= 3 and hull.area() > 0:
            return hull
