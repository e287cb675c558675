"""
Uniform and quasi-uniform point generators on the unit sphere S².

Fibonacci grids follow Swinbank R., Purser R.J., "Fibonacci grids: A novel
approach to global modelling", Q.J.R. Meteorol. Soc. 132(619), 1769-1793 (2006).
"""

import math
import threading
from typing import List, Optional, Tuple

import numpy as np

from ..models.point import SpherePoint
from ..utils.numerics import EPSILON

GOLDEN_RATIO = (1 + math.sqrt(5)) / 2

# Shared stream for callers that do not supply their own generator
_shared_rng = np.random.default_rng()
_shared_lock = threading.Lock()


def _standard_normals(rng: Optional[np.random.Generator]) -> np.ndarray:
    if rng is not None:
        return rng.standard_normal(3)
    with _shared_lock:
        return _shared_rng.standard_normal(3)


def _uniforms(rng: Optional[np.random.Generator], size: int) -> np.ndarray:
    if rng is not None:
        return rng.random(size)
    with _shared_lock:
        return _shared_rng.random(size)


def random_point(rng: Optional[np.random.Generator] = None) -> SpherePoint:
    """
    Uniform pseudo-random point on the sphere.

    Safe for concurrent use when rng is None (the shared generator is locked).

    Args:
        rng: Optional private generator

    Returns:
        Random point
    """
    v = _standard_normals(rng)
    r = math.hypot(math.hypot(v[0], v[1]), v[2])
    while r < EPSILON:
        v = _standard_normals(rng)
        r = math.hypot(math.hypot(v[0], v[1]), v[2])
    return SpherePoint(v[0] / r, v[1] / r, v[2] / r)


def random_points(n: int, rng: Optional[np.random.Generator] = None) -> List[SpherePoint]:
    """Sample of n uniform pseudo-random points."""
    return [random_point(rng) for _ in range(n)]


def fibonacci(n: int) -> List[SpherePoint]:
    """
    Quasi-uniform set of 2n+1 Fibonacci points on the sphere.

    Args:
        n: Half the number of points (negative values are treated as 0)

    Returns:
        List of 2n+1 points ordered from south to north
    """
    n = max(n, 0)
    n21 = 2 * n + 1
    points = []
    for i in range(-n, n + 1):
        sin_phi = 2 * i / n21
        cos_phi = math.sqrt((1 - sin_phi) * (1 + sin_phi))
        lam = (2 * math.pi / GOLDEN_RATIO) * i
        points.append(SpherePoint(cos_phi * math.cos(lam), cos_phi * math.sin(lam), sin_phi))
    return points


def _check_cell(lat: int, lon: int):
    if not (-90 <= lat < 90):
        raise ValueError(f"Cell latitude {lat} not in [-90, 89]")
    if not (-180 <= lon < 180):
        raise ValueError(f"Cell longitude {lon} not in [-180, 179]")


def _cyleq(lat0: float, lon0: float, lat: float, lon: float) -> Tuple[float, float]:
    # Cylindrical equal-area projection
    cos0 = math.cos(math.radians(lat0))
    x = math.radians(lon - lon0) * cos0
    y = math.sin(math.radians(lat)) / cos0
    return x, y


def _cyleq_inverse(lat0: float, lon0: float, x: float, y: float) -> Tuple[float, float]:
    cos0 = math.cos(math.radians(lat0))
    lat = math.degrees(math.asin(max(-1.0, min(1.0, y * cos0))))
    lon = math.degrees(x / cos0) + lon0
    return lat, lon


def cell_random(lat: int, lon: int, n: int, rng: Optional[np.random.Generator] = None) -> List[SpherePoint]:
    """
    Uniform pseudo-random points in the geographic grid cell [lat, lat+1] x [lon, lon+1].

    Args:
        lat: Southern edge of the cell, integer degrees in [-90, 89]
        lon: Western edge of the cell, integer degrees in [-180, 179]
        n: Number of points
        rng: Optional private generator

    Raises:
        ValueError: If the cell indices are out of range
    """
    _check_cell(lat, lon)

    # Uniform in an equal-area plane is uniform on the sphere
    lat0, lon0 = lat + 0.5, lon + 0.5
    xmin, ymin = _cyleq(lat0, lon0, lat, lon)
    xmax, ymax = _cyleq(lat0, lon0, lat + 1, lon + 1)

    points = []
    for _ in range(n):
        u = _uniforms(rng, 2)
        x = u[0] * (xmax - xmin) + xmin
        y = u[1] * (ymax - ymin) + ymin
        plat, plon = _cyleq_inverse(lat0, lon0, x, y)
        # Keep roundoff from pushing edge points out of the cell
        plat = min(max(plat, lat), lat + 1)
        plon = min(max(plon, lon), lon + 1)
        points.append(SpherePoint.from_geographic(plat, plon))
    return points


def cell_fibonacci(lat: int, lon: int, n: int) -> List[SpherePoint]:
    """
    Approximately n Fibonacci points strictly inside the grid cell
    [lat, lat+1] x [lon, lon+1].

    A global Fibonacci grid is sized so that the cell receives about n
    points, and only the points falling inside the cell are kept.

    Raises:
        ValueError: If the cell indices are out of range
    """
    _check_cell(lat, lon)

    sphere_area = 4 * math.pi
    cell_area = math.radians(1) * abs(math.sin(math.radians(lat + 1)) - math.sin(math.radians(lat)))
    m = math.ceil(n * sphere_area / cell_area) // 2
    m21 = 2 * m + 1

    # Only grid rows inside the latitude band can fall in the cell
    first = max(-m, math.floor(m21 * math.sin(math.radians(lat)) / 2) - 1)
    last = min(m, math.ceil(m21 * math.sin(math.radians(lat + 1)) / 2) + 1)

    points = []
    for i in range(first, last + 1):
        sin_phi = 2 * i / m21
        cos_phi = math.sqrt((1 - sin_phi) * (1 + sin_phi))
        phi_deg = math.degrees(math.atan2(sin_phi, cos_phi))
        if not (lat < phi_deg < lat + 1):
            continue
        lam = (2 * math.pi / GOLDEN_RATIO) * i
        sin_lam, cos_lam = math.sin(lam), math.cos(lam)
        lam_deg = math.degrees(math.atan2(sin_lam, cos_lam))
        if not (lon < lam_deg < lon + 1):
            continue
        points.append(SpherePoint(cos_phi * cos_lam, cos_phi * sin_lam, sin_phi))
    return points
