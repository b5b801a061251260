"""
Scene - A space to pack convex polygons into.

Hand the scene a list of convex polygons and it moves each one to its
packed position. The transformation that got each polygon there is
available afterwards through polygon.current_transformation().
"""

from dataclasses import replace
from typing import Callable, List, Optional

from convack.config import PackingConfig, CONFIG
from convack.core.convex_polygon import ConvexPolygon
from convack.beam.beam_search import BeamSearch


class Scene:
    """
    Packing settings plus the entry point to pack a list of polygons.

    Example:
        scene = Scene()
        scene.set_beam_width(5)
        scene.pack(polygons)
    """

    def __init__(self, config: PackingConfig = None):
        self.config = replace(config or CONFIG).validate()

    @property
    def beam_width(self) -> int:
        """
        How many sub-optimal partial packings the search keeps exploring.

        A greater beam width finds better packings that require a less
        optimal intermediate result, at the cost of more processing. A beam
        width of 1 is a greedy search.
        """
        return self.config.beam_width

    @beam_width.setter
    def beam_width(self, value: int):
        self.set_beam_width(value)

    def set_beam_width(self, new_beam_width: int):
        if new_beam_width < 1:
            raise ValueError(f"Beam width must be at least 1, got {new_beam_width}")
        self.config.beam_width = new_beam_width

    def get_beam_width(self) -> int:
        return self.config.beam_width

    def pack(
        self,
        convex_polygons: List[ConvexPolygon],
        callback: Optional[Callable[[int, float], None]] = None,
        should_stop: Optional[Callable[[], bool]] = None
    ):
        """
        Pack the polygons tightly around the origin, in place.

        The list keeps its order, so results correlate to inputs by index.
        """
        # Only one algorithm so far.
        BeamSearch.pack(self, convex_polygons, callback=callback, should_stop=should_stop)
