"""
Core module - Convex geometry, collision detection and transformations.
"""

from .point2 import Point2

from .transformation import Transformation

from .geometry import (
    is_left,
    polygon_area,
    polygon_contains,
    gift_wrapping,
    merge_hulls,
    stack_vertices,
)

from .collision import (
    bounds_overlap,
    separating_axis_exists,
    convex_overlap,
    collides_any,
    shapely_overlap,
    polygons_overlap,
    check_any_collision,
    check_all_collisions,
    validate_packing,
)

from .convex_polygon import ConvexPolygon


def warmup(verbose: bool = False):
    """JIT-compile every kernel of the core module."""
    from .geometry import warmup as warmup_geometry
    from .collision import warmup as warmup_collision
    from .transformation import warmup as warmup_transformation

    warmup_geometry()
    warmup_collision()
    warmup_transformation()

    if verbose:
        print("JIT warmup complete for core module")


__all__ = [
    'Point2',
    'Transformation',
    'ConvexPolygon',
    'is_left',
    'polygon_area',
    'polygon_contains',
    'gift_wrapping',
    'merge_hulls',
    'stack_vertices',
    'bounds_overlap',
    'separating_axis_exists',
    'convex_overlap',
    'collides_any',
    'shapely_overlap',
    'polygons_overlap',
    'check_any_collision',
    'check_all_collisions',
    'validate_packing',
    'warmup',
]
