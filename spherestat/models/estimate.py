"""
Result models for location estimates and bootstrap confidence cones.
"""

import math
from typing import Optional, Tuple
from dataclasses import dataclass

from .point import SpherePoint


@dataclass(frozen=True)
class LocationEstimate:
    """Point estimate of central location with provenance."""

    point: SpherePoint
    estimator: str
    iterations: int = 1
    converged: bool = True
    degenerate: bool = False  # Undefined direction replaced by the canonical pole
    seed_index: Optional[int] = None  # Sample index of the medoid seed, if any

    def to_geographic(self) -> Tuple[float, float]:
        """Estimate as (latitude, longitude) in degrees."""
        return self.point.to_geographic()


@dataclass(frozen=True)
class ConfidenceCones:
    """
    Half vertex angles (degrees) of the 95% and 99% confidence cones
    centred at the point estimate.
    """

    c95: float
    c99: float
    resamples: int

    def contains(self, estimate: SpherePoint, point: SpherePoint, level: int = 95) -> bool:
        """Check whether a point lies inside the cone of given level around estimate."""
        if level == 95:
            radius = self.c95
        elif level == 99:
            radius = self.c99
        else:
            raise ValueError(f"Unsupported confidence level: {level}")
        return math.degrees(estimate.separation(point)) <= radius


@dataclass(frozen=True)
class BootstrapResult:
    """Point estimate together with its bootstrap confidence cones."""

    estimate: LocationEstimate
    cones: ConfidenceCones
    seed: int

    def as_tuple(self) -> Tuple[SpherePoint, float, float]:
        """Get (estimate, c95, c99)."""
        return self.estimate.point, self.cones.c95, self.cones.c99
