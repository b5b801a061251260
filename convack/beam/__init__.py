"""
Beam module - Order search over partial packings.
"""

from .packing_candidate import PackingCandidate, CandidateArena
from .placement import Placement, find_placement
from .beam_search import BeamSearch

__all__ = [
    'PackingCandidate',
    'CandidateArena',
    'Placement',
    'find_placement',
    'BeamSearch',
]
