"""
Point model: a point on the unit sphere S².
"""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from ..utils.numerics import sincosd, vhat3


@dataclass(frozen=True)
class SpherePoint:
    """
    Immutable unit vector in 3D Cartesian space.

    Equivalent to a (latitude, longitude) pair in degrees. Construction
    normalizes the vector; the zero vector becomes the north pole (0, 0, 1).
    """

    x: float
    y: float
    z: float

    def __post_init__(self):
        x, y, z = float(self.x), float(self.y), float(self.z)
        norm2 = x * x + y * y + z * z
        if norm2 == 0 or abs(norm2 - 1.0) > 1e-12:
            x, y, z = vhat3((x, y, z))
        object.__setattr__(self, 'x', x)
        object.__setattr__(self, 'y', y)
        object.__setattr__(self, 'z', z)

    @classmethod
    def from_geographic(cls, lat: float, lon: float) -> 'SpherePoint':
        """
        Create a point from geographic coordinates.

        Args:
            lat: Latitude in decimal degrees, [-90, 90]
            lon: Longitude in decimal degrees, [-180, 180]

        Raises:
            ValueError: If latitude or longitude is out of range
        """
        if not (-90 <= lat <= 90):
            raise ValueError(f"Latitude {lat} not in [-90, 90]")
        if not (-180 <= lon <= 180):
            raise ValueError(f"Longitude {lon} not in [-180, 180]")

        slat, clat = sincosd(lat)
        slon, clon = sincosd(lon)
        return cls(clat * clon, clat * slon, slat)

    @classmethod
    def from_cartesian(cls, x: float, y: float, z: float) -> 'SpherePoint':
        """Create a point from any non-unit vector by normalizing it."""
        return cls(*vhat3((x, y, z)))

    @property
    def cartesian(self) -> Tuple[float, float, float]:
        """Cartesian coordinates (x, y, z)."""
        return (self.x, self.y, self.z)

    def to_geographic(self) -> Tuple[float, float]:
        """
        Get geographic coordinates.

        Returns:
            Tuple of (latitude, longitude) in degrees. Longitude is 0 at the poles.
        """
        r = math.hypot(self.x, self.y)
        lat = math.degrees(math.atan2(self.z, r))
        lon = math.degrees(math.atan2(self.y, self.x))
        return lat, lon

    def separation(self, other: 'SpherePoint') -> float:
        """
        Separation angle (geodesic distance) to another point.

        Args:
            other: Other point

        Returns:
            Angle in radians, in [0, pi]
        """
        ux, uy, uz = self.x, self.y, self.z
        vx, vy, vz = other.x, other.y, other.z
        dot = ux * vx + uy * vy + uz * vz
        if dot > 0:
            chord = math.hypot(math.hypot(ux - vx, uy - vy), uz - vz)
            return 2 * math.asin(min(chord / 2, 1.0))
        if dot < 0:
            chord = math.hypot(math.hypot(ux + vx, uy + vy), uz + vz)
            return math.pi - 2 * math.asin(min(chord / 2, 1.0))
        return math.pi / 2

    def antipode(self) -> 'SpherePoint':
        """Diametrically opposite point."""
        return SpherePoint(-self.x, -self.y, -self.z)


NORTH_POLE = SpherePoint(0.0, 0.0, 1.0)


def as_array(points: Sequence[SpherePoint]) -> np.ndarray:
    """
    Stack a sample of points into an (n, 3) array of Cartesian coordinates.
    """
    if len(points) == 0:
        return np.empty((0, 3))
    return np.array([p.cartesian for p in points], dtype=float)
