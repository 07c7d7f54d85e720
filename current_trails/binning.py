"""
Speed classification of particles into opacity buckets.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import DEFAULT_BINS
from .particle import Particle


@dataclass
class Bin:
    """Particles drawn at one opacity during a single tick."""

    alpha: float
    lower: float
    particles: List[Particle] = field(default_factory=list)

    def __len__(self):
        return len(self.particles)


class MagnitudeBinner:
    """
    Sorts particles into ordered buckets by normalized speed.

    A particle is classified only when its speed exceeds the lowest
    threshold. Above that, a speed sitting exactly on a threshold belongs to
    the bucket starting there: 0.2 goes to the 0.2 bucket, never the 0.1 one.
    """

    def __init__(self, bins: Sequence[Tuple[float, float]] = DEFAULT_BINS):
        self.thresholds = [float(lo) for lo, _ in bins]
        self.alphas = [float(alpha) for _, alpha in bins]

    @property
    def lowest(self) -> float:
        return self.thresholds[0]

    def classify(self, m: float) -> Optional[int]:
        """
        Index of the bucket for normalized speed m.

        Returns:
            Bucket index, or None when m does not exceed the lowest threshold
        """
        if not m > self.thresholds[0]:
            return None
        for index in range(len(self.thresholds) - 1, 0, -1):
            if m >= self.thresholds[index]:
                return index
        return 0

    def empty_bins(self) -> List[Bin]:
        """Fresh, empty buckets ordered low -> high."""
        return [
            Bin(alpha=alpha, lower=lower)
            for lower, alpha in zip(self.thresholds, self.alphas)
        ]

    def partition(self, particles: Iterable[Particle]) -> List[Bin]:
        """
        Build this tick's buckets.

        Particles below the lowest threshold are left out; they are not drawn.
        """
        bins = self.empty_bins()
        for p in particles:
            index = self.classify(p.m)
            if index is not None:
                bins[index].particles.append(p)
        return bins
