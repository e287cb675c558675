"""
Spatial statistics for point patterns on the unit sphere S².
"""

import math
from typing import Sequence

import numpy as np

from ..models.point import SpherePoint, as_array
from ..utils.numerics import accu_sum
from .medoids import PairwiseDistanceMatrix


def k_poisson(theta: float) -> float:
    """
    K function of a complete spatial random (Poisson) process.

    Args:
        theta: Angular separation in radians, [0, pi]

    Returns:
        2*pi*(1 - cos(theta)), or NaN when theta is out of range
    """
    if not (0 <= theta <= math.pi):
        return math.nan
    return 2 * math.pi * (1 - math.cos(theta))


def k_ripley(points: Sequence[SpherePoint], theta: float) -> float:
    """
    Ripley's K function estimate for a sample.

    Args:
        points: Sample of points
        theta: Angular separation in radians, [0, pi]

    Returns:
        8*pi*k / (n*(n-1)) where k counts unordered pairs separated by at
        most theta; NaN when the sample has fewer than 2 points or theta is
        out of range
    """
    n = len(points)
    if n < 2:
        return math.nan
    if not (0 <= theta <= math.pi):
        return math.nan

    k = int(np.count_nonzero(PairwiseDistanceMatrix(points).upper_triangle <= theta))
    return 8 * math.pi * k / (n * (n - 1))


def discrepancy(points: Sequence[SpherePoint]) -> float:
    """
    Generalized discrepancy of a point set, a measure of equidistribution.

    Reference: J. Cui and W. Freeden, "Equidistribution on the Sphere",
    SIAM J. Sci. Comput. 18(2), 595-609 (1997).
    """
    n = len(points)
    if n == 0:
        return math.nan

    xyz = as_array(points)
    dot = np.clip(xyz @ xyz.T, -1.0, 1.0)
    terms = 1 - 2 * np.log1p(np.sqrt((1 - dot) / 2))
    return math.sqrt(max(accu_sum(terms.ravel()), 0.0)) / (2 * math.sqrt(math.pi) * n)
