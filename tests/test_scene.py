"""
Tests for the Scene entry point and its configuration.
"""
import pytest

from convack import CONFIG, ConvexPolygon, PackingConfig, Scene, validate_packing

from conftest import regular_polygon


class TestPackingConfig:

    def test_defaults(self):
        config = PackingConfig()
        assert config.beam_width == 10
        assert config.verbose is False
        assert config.validate() is config

    @pytest.mark.parametrize("field", ["beam_width", "directions", "rotations", "slide_iterations"])
    def test_rejects_values_below_one(self, field):
        config = PackingConfig(**{field: 0})
        with pytest.raises(ValueError, match=field):
            config.validate()


class TestScene:
    """Beam width handling and packing through the scene."""

    def test_default_beam_width(self):
        scene = Scene()
        assert scene.get_beam_width() == 10
        assert scene.beam_width == 10

    def test_set_beam_width(self):
        scene = Scene()
        scene.set_beam_width(3)
        assert scene.get_beam_width() == 3
        scene.beam_width = 5
        assert scene.get_beam_width() == 5

    def test_scene_does_not_share_config(self):
        scene = Scene()
        scene.set_beam_width(2)
        assert CONFIG.beam_width == 10
        assert Scene().get_beam_width() == 10

    def test_invalid_beam_width(self):
        scene = Scene()
        with pytest.raises(ValueError):
            scene.set_beam_width(0)
        with pytest.raises(ValueError):
            scene.beam_width = -1
        assert scene.get_beam_width() == 10

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            Scene(PackingConfig(beam_width=0))

    def test_pack_empty(self):
        polygons = []
        Scene().pack(polygons)
        assert polygons == []

    def test_pack(self, fast_config):
        polygons = [regular_polygon(sides, 5.0 + sides).translate(sides * 50, 0) for sides in range(3, 8)]
        Scene(fast_config).pack(polygons)

        is_valid, collisions = validate_packing(polygons)
        assert is_valid, collisions
        # Packed around the origin, not where they started
        hull = ConvexPolygon.convex_hull(polygons)
        assert max(abs(v) for v in hull.bounds) < 100.0
