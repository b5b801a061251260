"""
Convack - Pack convex polygons tightly together.
"""

from .config import PackingConfig, CONFIG
from .core import (
    Point2,
    Transformation,
    ConvexPolygon,
    check_any_collision,
    check_all_collisions,
    validate_packing,
    warmup,
)
from .beam import PackingCandidate, CandidateArena, Placement, BeamSearch
from .scene import Scene

__version__ = "0.1.0"

__all__ = [
    'PackingConfig',
    'CONFIG',
    'Point2',
    'Transformation',
    'ConvexPolygon',
    'check_any_collision',
    'check_all_collisions',
    'validate_packing',
    'warmup',
    'PackingCandidate',
    'CandidateArena',
    'Placement',
    'BeamSearch',
    'Scene',
]
