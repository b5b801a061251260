"""
Tests for packing a list of polygons with the beam search.
"""
import numpy as np
import pytest
from shapely.geometry import Polygon as ShapelyPolygon

from convack import BeamSearch, ConvexPolygon, PackingConfig, Scene, validate_packing

from conftest import regular_polygon


def assert_no_overlap_area(polygons):
    """Independent check: pairwise intersections have no measurable area."""
    shapes = [ShapelyPolygon(p.vertices) for p in polygons]
    for i in range(len(shapes)):
        for j in range(i + 1, len(shapes)):
            assert shapes[i].intersection(shapes[j]).area < 1e-9, (i, j)


def mixed_polygons():
    return [
        regular_polygon(3, 12.0),
        regular_polygon(4, 8.0).translate(100, 100),
        ConvexPolygon([(0, 0), (30, 0), (30, 5), (0, 5)]),
        regular_polygon(6, 6.0).translate(-40, 7),
    ]


class TestBeamSearch:
    """End to end packing."""

    def test_empty_is_noop(self, fast_config):
        polygons = []
        BeamSearch.pack(Scene(fast_config), polygons)
        assert polygons == []

    def test_single_polygon_is_centred(self, triangle, fast_config):
        polygon = ConvexPolygon(triangle)
        BeamSearch.pack(Scene(fast_config), [polygon])
        assert abs(polygon.centroid().x) < 1e-9
        assert abs(polygon.centroid().y) < 1e-9
        assert polygon.current_transformation().translation() == pytest.approx((-25.0, -50.0 / 3.0))

    def test_no_collisions(self, fast_config):
        polygons = mixed_polygons()
        BeamSearch.pack(Scene(fast_config), polygons)
        is_valid, collisions = validate_packing(polygons)
        assert is_valid, collisions
        assert_no_overlap_area(polygons)

    def test_order_and_shapes_kept(self, fast_config):
        polygons = mixed_polygons()
        originals = [p.copy() for p in polygons]
        identities = [id(p) for p in polygons]

        BeamSearch.pack(Scene(fast_config), polygons)

        assert [id(p) for p in polygons] == identities
        for polygon, original in zip(polygons, originals):
            assert len(polygon) == len(original)
            assert polygon.area() == pytest.approx(original.area())

    def test_transformation_maps_back(self, fast_config):
        polygons = [ConvexPolygon(p.vertices) for p in mixed_polygons()]
        originals = [p.vertices.copy() for p in polygons]
        BeamSearch.pack(Scene(fast_config), polygons)

        for polygon, original in zip(polygons, originals):
            inverse = polygon.current_transformation().inverse()
            np.testing.assert_allclose(inverse.apply_to(polygon.vertices), original, atol=1e-9)

    def test_packed_tightly(self, fast_config):
        polygons = [regular_polygon(4, 10.0) for _ in range(4)]
        BeamSearch.pack(Scene(fast_config), polygons)
        hull = ConvexPolygon.convex_hull(polygons)
        covered = sum(p.area() for p in polygons)
        # Four squares spread apart would leave most of the hull empty
        assert covered / hull.area() > 0.4
        assert validate_packing(polygons)[0]
        assert_no_overlap_area(polygons)

    def test_greedy_beam(self):
        config = PackingConfig(beam_width=1, directions=8, rotations=1, slide_iterations=30)
        polygons = mixed_polygons()
        BeamSearch.pack(Scene(config), polygons)
        assert validate_packing(polygons)[0]


class TestCallbacks:
    """Progress reporting and early stopping."""

    def test_callback_per_round(self, fast_config):
        rounds = []
        polygons = mixed_polygons()
        BeamSearch.pack(Scene(fast_config), polygons, callback=lambda i, score: rounds.append((i, score)))

        assert [i for i, _ in rounds] == [1, 2, 3]
        assert all(score < 1.0 for _, score in rounds)

    def test_stop_completes_greedily(self, fast_config):
        polygons = mixed_polygons()
        rounds = []
        BeamSearch.pack(Scene(fast_config), polygons,
                        callback=lambda i, score: rounds.append(i), should_stop=lambda: True)
        assert rounds == [1, 2, 3]
        assert validate_packing(polygons)[0]

    def test_stop_is_checked_each_round(self, fast_config):
        checks = []

        def should_stop():
            checks.append(True)
            return False

        BeamSearch.pack(Scene(fast_config), mixed_polygons(), should_stop=should_stop)
        assert len(checks) == 3

    def test_verbose_reporting(self, fast_config, capsys):
        fast_config.verbose = True
        fast_config.progress_bar = False
        BeamSearch.pack(Scene(fast_config), mixed_polygons())
        out = capsys.readouterr().out
        assert "Beam Search Packing" in out
        assert "Packing Complete" in out
