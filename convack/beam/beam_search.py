"""
Beam Search - Choose the order in which polygons are packed.

Packing order matters: a polygon that fits snugly into a gap left by two
earlier ones can only do so if it comes after them. The beam search grows
partial packings one polygon at a time and keeps only the `beam_width`
partial packings with the least wasted hull area in each round.

Round by round:
1. Every polygon is a root candidate, centred on the origin
2. Each surviving candidate is expanded with every polygon it has not
   placed yet, positioned by find_placement
3. The best `beam_width` children survive; the rest of the tree is pruned
4. After len(polygons) rounds the best complete candidate is replayed
   onto the caller's polygons
"""

import heapq
import time
from typing import Callable, List, Optional

from tqdm import tqdm

from convack.core.convex_polygon import ConvexPolygon
from convack.core.collision import validate_packing
from .packing_candidate import CandidateArena, PackingCandidate
from .placement import find_placement


class BeamSearch:
    """
    Beam search over insertion orders. Stateless; see pack().

    Example:
        BeamSearch.pack(Scene(), polygons)
    """

    @staticmethod
    def pack(
        scene,
        convex_polygons: List[ConvexPolygon],
        callback: Optional[Callable[[int, float], None]] = None,
        should_stop: Optional[Callable[[], bool]] = None
    ):
        """
        Pack the polygons in place.

        Args:
            scene: Scene providing the beam width and packing config
            convex_polygons: Polygons to pack; moved in place, order kept
            callback: Called as callback(round_index, best_score) after each round
            should_stop: Checked before each round. Once it returns True the
                search narrows to a greedy completion of the best candidate.
        """
        if not convex_polygons:
            return

        cfg = scene.config
        beam_width = scene.get_beam_width()
        n = len(convex_polygons)
        start_time = time.time()

        if cfg.verbose:
            print(f"\n{'='*60}")
            print("Beam Search Packing")
            print(f"  Polygons: {n}")
            print(f"  Beam width: {beam_width}")
            print(f"  Directions: {cfg.directions}, rotations: {cfg.rotations}")
            print(f"{'='*60}")

        arena = CandidateArena()

        # Every polygon is a legitimate first move.
        roots = []
        for index, polygon in enumerate(convex_polygons):
            placement = find_placement(polygon, [], cfg)
            candidate = PackingCandidate(
                convex_polygons,
                placement.apply(polygon.copy()),
                parent=None,
                arena=arena,
                polygon_index=index,
                placement=placement,
            )
            roots.append(arena.add(candidate))

        frontier = BeamSearch._select(arena, roots, beam_width)

        if cfg.verbose and cfg.progress_bar:
            pbar = tqdm(total=n - 1, desc="Packing")

        stopped = False
        for round_index in range(1, n):
            if not stopped and should_stop is not None and should_stop():
                stopped = True
                if cfg.verbose:
                    print(f"\n  Stop requested in round {round_index}, completing greedily")
            width = 1 if stopped else beam_width

            children = []
            for handle in frontier:
                children.extend(BeamSearch._expand(arena, handle, convex_polygons, cfg))
            frontier = BeamSearch._select(arena, children, width)

            best_score = arena[frontier[0]].score
            if callback is not None:
                callback(round_index, best_score)

            if cfg.verbose and cfg.progress_bar:
                pbar.update(1)
                pbar.set_postfix({'waste': f'{best_score:.4f}', 'nodes': len(arena)})

        if cfg.verbose and cfg.progress_bar:
            pbar.close()

        best = arena[frontier[0]]
        for node in arena.chain(frontier[0]):
            node.placement.apply(convex_polygons[node.polygon_index])

        if cfg.verbose:
            elapsed = time.time() - start_time
            is_valid, collisions = validate_packing(convex_polygons)
            print(f"\n  ✅ Packing Complete!")
            print(f"     Order: {best.placed_indices()}")
            print(f"     Waste: {best.score:.1%}")
            print(f"     Valid: {is_valid} ({len(collisions)} collisions)")
            print(f"     Time: {elapsed:.2f}s")

    @staticmethod
    def _expand(
        arena: CandidateArena,
        handle: int,
        convex_polygons: List[ConvexPolygon],
        cfg
    ) -> List[int]:
        """Add one child per polygon the candidate has not placed yet."""
        node = arena[handle]
        placed = node.placed_polygons()
        done = set(node.placed_indices())

        children = []
        for index, polygon in enumerate(convex_polygons):
            if index in done:
                continue
            placement = find_placement(polygon, placed, cfg)
            child = PackingCandidate(
                convex_polygons,
                placement.apply(polygon.copy()),
                parent=handle,
                arena=arena,
                polygon_index=index,
                placement=placement,
            )
            children.append(arena.add(child))
        return children

    @staticmethod
    def _select(arena: CandidateArena, handles: List[int], width: int) -> List[int]:
        """
        Keep the `width` lowest-score candidates and prune the arena to them.

        Ties keep their insertion order.

        Returns:
            Surviving handles (renumbered), best first
        """
        best = heapq.nsmallest(width, handles, key=lambda handle: arena[handle].score)
        remap = arena.prune(best)
        return [remap[handle] for handle in best]
