"""
Packing Candidates - Nodes of the beam search tree.

Each candidate places one more polygon on top of its parent's partial
packing. Candidates live in a CandidateArena and refer to their parent by
integer handle, so the search can drop whole branches by pruning the
arena down to the candidates that are still reachable from the frontier.
"""

from typing import Dict, Iterable, List, Optional

from convack.core.convex_polygon import ConvexPolygon


class CandidateArena:
    """
    Flat storage for the candidates of one search.

    Parents are always added before their children, so a parent's handle
    is always smaller than the handles of its children.
    """

    def __init__(self):
        self._candidates: List['PackingCandidate'] = []

    def add(self, candidate: 'PackingCandidate') -> int:
        """Store a candidate and return its handle."""
        self._candidates.append(candidate)
        return len(self._candidates) - 1

    def __getitem__(self, handle: int) -> 'PackingCandidate':
        return self._candidates[handle]

    def __len__(self) -> int:
        return len(self._candidates)

    def chain(self, handle: Optional[int]) -> List['PackingCandidate']:
        """Candidates from the root down to (and including) the given one."""
        nodes = []
        while handle is not None:
            node = self._candidates[handle]
            nodes.append(node)
            handle = node.parent
        nodes.reverse()
        return nodes

    def prune(self, live: Iterable[int]) -> Dict[int, int]:
        """
        Drop every candidate that is not an ancestor of a live one.

        Handles are renumbered; parent links of the kept candidates are
        rewritten to match.

        Returns:
            Mapping from old handle to new handle for every kept candidate
        """
        keep = set()
        for handle in live:
            while handle is not None and handle not in keep:
                keep.add(handle)
                handle = self._candidates[handle].parent

        remap = {}
        kept = []
        for old in sorted(keep):
            remap[old] = len(kept)
            kept.append(self._candidates[old])

        for candidate in kept:
            if candidate.parent is not None:
                candidate.parent = remap[candidate.parent]

        self._candidates = kept
        return remap


class PackingCandidate:
    """
    A partial packing: its parent's packing plus one newly placed polygon.

    Attributes:
        packed_objects: The full list of polygons being packed (not owned)
        pack_here: The polygon placed by this candidate, in its packed position
        parent: Arena handle of the parent candidate, None for a root
        polygon_index: Index in packed_objects of the polygon placed here
        placement: How pack_here was derived from packed_objects[polygon_index]
        depth: Number of polygons placed so far, this one included
        score: Fraction of the packing's hull area that is wasted (lower is better)
    """

    __slots__ = ['packed_objects', 'pack_here', 'parent', 'polygon_index',
                 'placement', 'depth', '_arena', '_score']

    def __init__(
        self,
        packed_objects: List[ConvexPolygon],
        pack_here: ConvexPolygon,
        parent: Optional[int] = None,
        arena: Optional[CandidateArena] = None,
        polygon_index: Optional[int] = None,
        placement=None
    ):
        if parent is not None and arena is None:
            raise ValueError("A candidate with a parent needs the arena holding that parent")

        self.packed_objects = packed_objects
        self.pack_here = pack_here
        self.parent = parent
        self.polygon_index = polygon_index
        self.placement = placement
        self._arena = arena
        self.depth = 1 if parent is None else arena[parent].depth + 1
        self._score = self.compute_score()

    @property
    def score(self) -> float:
        return self._score

    def get_score(self) -> float:
        return self._score

    def placed_polygons(self) -> List[ConvexPolygon]:
        """Every polygon placed so far, in insertion order."""
        if self.parent is None:
            return [self.pack_here]
        ancestors = self._arena.chain(self.parent)
        return [node.pack_here for node in ancestors] + [self.pack_here]

    def placed_indices(self) -> List[Optional[int]]:
        """Indices into packed_objects, in insertion order."""
        if self.parent is None:
            return [self.polygon_index]
        ancestors = self._arena.chain(self.parent)
        return [node.polygon_index for node in ancestors] + [self.polygon_index]

    def is_complete(self) -> bool:
        """Whether every polygon of packed_objects has been placed."""
        return self.depth >= len(self.packed_objects)

    def compute_score(self) -> float:
        """
        Wasted area: 1 - (sum of placed areas) / (area of their convex hull).

        A degenerate packing without hull area scores 0.
        """
        placed = self.placed_polygons()
        covered = sum(polygon.area() for polygon in placed)
        hull_area = ConvexPolygon.convex_hull(placed).area()
        if hull_area <= 0:
            return 0.0
        return 1.0 - covered / hull_area

    def __lt__(self, other: 'PackingCandidate') -> bool:
        return self._score < other._score

    def __repr__(self) -> str:
        return (f"PackingCandidate(polygon={self.polygon_index}, depth={self.depth}, "
                f"score={self._score:.4f})")
