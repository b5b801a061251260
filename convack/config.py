"""
Convack - Packing Configuration
All search and placement settings in one place.
"""

from dataclasses import dataclass


@dataclass
class PackingConfig:
    """
    Configuration for packing a scene.

    The beam width is the main knob: a wider beam keeps more sub-optimal
    intermediate packings alive, so the search is less likely to get stuck
    in a local optimum, at the cost of more work per round. A beam width of
    1 turns the search into a purely greedy packer.
    """

    # === Beam Search ===
    beam_width: int = 10

    # === Placement ===
    directions: int = 16          # Slide directions tried per insertion
    rotations: int = 4            # Evenly spaced orientations per insertion
    slide_iterations: int = 40    # Bisection steps when sliding into contact

    # === Verbosity ===
    verbose: bool = False
    progress_bar: bool = True

    def validate(self) -> 'PackingConfig':
        """Raise ValueError if any setting is out of range."""
        if self.beam_width < 1:
            raise ValueError(f"beam_width must be at least 1, got {self.beam_width}")
        if self.directions < 1:
            raise ValueError(f"directions must be at least 1, got {self.directions}")
        if self.rotations < 1:
            raise ValueError(f"rotations must be at least 1, got {self.rotations}")
        if self.slide_iterations < 1:
            raise ValueError(f"slide_iterations must be at least 1, got {self.slide_iterations}")
        return self


# Global configuration instance
CONFIG = PackingConfig()
