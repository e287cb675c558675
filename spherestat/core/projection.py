"""
Tangent-plane (azimuthal equidistant) projection centred at any sphere point.
Lets planar mean and median algorithms operate on spherical data.
"""

import math
from typing import Sequence, Tuple

import numpy as np

from ..models.point import SpherePoint
from ..utils.numerics import EPSILON, sincosd


def _sinc(x: float) -> float:
    if abs(x) < EPSILON:
        return 1.0
    return math.sin(x) / x


def _wrap_longitude(delta: float) -> float:
    if delta > 180:
        delta -= 360
    elif delta <= -180:
        delta += 360
    return delta


def project(center: SpherePoint, point: SpherePoint) -> Tuple[float, float]:
    """
    Forward azimuthal equidistant projection.

    The planar distance from the origin equals the angular distance of
    point from center (radians).

    Args:
        center: Projection centre (tangent point)
        point: Point to project

    Returns:
        Tuple of (x, y) planar coordinates
    """
    kp = 1.0 / _sinc(center.separation(point))

    lat0, lon0 = center.to_geographic()
    lat, lon = point.to_geographic()
    sin0, cos0 = sincosd(lat0)
    sin1, cos1 = sincosd(lat)
    sind, cosd = sincosd(_wrap_longitude(lon - lon0))

    x = kp * cos1 * sind
    y = kp * (cos0 * sin1 - sin0 * cos1 * cosd)
    return x, y


def unproject(center: SpherePoint, x: float, y: float) -> SpherePoint:
    """
    Inverse azimuthal equidistant projection.

    Args:
        center: Projection centre (tangent point)
        x: Planar x coordinate
        y: Planar y coordinate

    Returns:
        Point on the sphere; center itself when (x, y) is at the origin
    """
    c = math.hypot(x, y)
    if c < EPSILON:
        return center

    lat0, lon0 = center.to_geographic()
    sin0, cos0 = sincosd(lat0)
    sinc, cosc = math.sin(c), math.cos(c)

    arg = cosc * sin0 + y * sinc * cos0 / c
    lat = math.degrees(math.asin(max(-1.0, min(1.0, arg))))
    lon = lon0 + math.degrees(math.atan2(x * sinc, c * cos0 * cosc - y * sin0 * sinc))
    lon = _wrap_longitude(lon)

    return SpherePoint.from_geographic(lat, lon)


def project_sample(center: SpherePoint, points: Sequence[SpherePoint]) -> np.ndarray:
    """
    Project a whole sample into the tangent plane at center.

    Returns:
        Array of shape (n, 3) with z fixed at zero, ready for the 3D
        mean and median routines
    """
    xyz = np.zeros((len(points), 3))
    for i, p in enumerate(points):
        xyz[i, 0], xyz[i, 1] = project(center, p)
    return xyz
