"""
Tests for positioning a single polygon next to a packed set.
"""
import math

import numpy as np
import pytest

from convack import ConvexPolygon, PackingConfig, Placement, Point2
from convack.beam.placement import find_placement

from conftest import regular_polygon


class TestPlacement:
    """The rigid motion itself."""

    def test_apply_moves_in_place(self, triangle):
        polygon = ConvexPolygon(triangle)
        result = Placement(25.0, 0.0, math.pi, 10.0, 5.0).apply(polygon)
        assert result is polygon
        np.testing.assert_allclose(
            polygon.vertices, [[35.0, 5.0], [-15.0, 5.0], [10.0, -45.0]], atol=1e-9
        )

    def test_apply_is_tracked(self, triangle):
        polygon = Placement(1.0, 2.0, 0.5, 3.0, 4.0).apply(ConvexPolygon(triangle))
        assert polygon.current_transformation().rotation_angle() == pytest.approx(0.5)

    def test_default_is_identity(self, triangle):
        polygon = Placement().apply(ConvexPolygon(triangle))
        assert polygon == ConvexPolygon(triangle)


class TestFindPlacement:
    """Sliding a polygon into contact."""

    def test_first_polygon_is_centred(self, triangle):
        polygon = ConvexPolygon(triangle)
        placement = find_placement(polygon, [])
        moved = placement.apply(polygon.copy())
        assert moved.centroid().is_close(Point2(0.0, 0.0))
        assert moved.area() == pytest.approx(polygon.area())

    def test_polygon_not_modified(self, triangle):
        polygon = ConvexPolygon(triangle)
        placed = [ConvexPolygon(triangle)]
        find_placement(polygon, placed, PackingConfig(directions=4, rotations=1))
        assert polygon == ConvexPolygon(triangle)
        assert polygon.current_transformation().translation() == (0.0, 0.0)

    def test_no_overlap_and_close_by(self, fast_config):
        placed = [regular_polygon(4)]
        polygon = regular_polygon(6)
        placement = find_placement(polygon, placed, fast_config)
        moved = placement.apply(polygon.copy())

        assert not moved.collides(placed[0])
        # Slid in from beyond reach, so it rests within touching distance
        assert math.hypot(placement.dx, placement.dy) <= 20.001

    def test_against_several_polygons(self, fast_config):
        placed = [
            regular_polygon(3),
            regular_polygon(5).translate(25, 0),
            regular_polygon(4).translate(0, 25),
        ]
        for sides in (3, 4, 8):
            moved = find_placement(regular_polygon(sides), placed, fast_config).apply(regular_polygon(sides))
            for other in placed:
                assert not moved.collides(other)

    def test_rotations_are_evenly_spaced(self, triangle):
        config = PackingConfig(directions=8, rotations=4, slide_iterations=20)
        placement = find_placement(ConvexPolygon(triangle), [ConvexPolygon(triangle)], config)
        assert placement.angle in [0.0, math.pi / 2, math.pi, 3 * math.pi / 2]
