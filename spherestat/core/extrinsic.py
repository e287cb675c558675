"""
Extrinsic estimators of location on the unit sphere S².

Both estimators work on the points as vectors in the Euclidean space E³
and then project the result back to the sphere along the shortest path.
"""

import logging
import math
from typing import Sequence

from ..models.estimate import LocationEstimate
from ..models.point import SpherePoint, NORTH_POLE, as_array
from ..utils.numerics import accu_sum, vhat3, vmedian3

logger = logging.getLogger(__name__)


def extrinsic_mean(points: Sequence[SpherePoint]) -> LocationEstimate:
    """
    Extrinsic sample mean.

    The Cartesian coordinates are summed with compensated summation and the
    sum is divided by its Euclidean norm. When the sum is exactly zero
    (e.g. a sample made of antipodal pairs) the direction is undefined: the
    north pole is returned and the estimate is flagged as degenerate.

    Args:
        points: Non-empty sample

    Returns:
        LocationEstimate with estimator 'extrinsic_mean'

    Raises:
        ValueError: If the sample is empty
    """
    if len(points) == 0:
        raise ValueError("Cannot compute extrinsic mean of an empty sample")

    sumx = accu_sum(p.x for p in points)
    sumy = accu_sum(p.y for p in points)
    sumz = accu_sum(p.z for p in points)
    r = math.hypot(math.hypot(sumx, sumy), sumz)

    if r == 0:
        logger.warning(f"Extrinsic mean of {len(points)} point(s) is undefined (vector sum is zero)")
        return LocationEstimate(point=NORTH_POLE, estimator='extrinsic_mean', degenerate=True)

    return LocationEstimate(
        point=SpherePoint(sumx / r, sumy / r, sumz / r),
        estimator='extrinsic_mean'
    )


def extrinsic_median(points: Sequence[SpherePoint]) -> LocationEstimate:
    """
    Extrinsic geometric median: the 3D geometric median of the sample,
    renormalized onto the sphere.

    Args:
        points: Non-empty sample

    Returns:
        LocationEstimate with estimator 'extrinsic_median'

    Raises:
        ValueError: If the sample is empty
    """
    if len(points) == 0:
        raise ValueError("Cannot compute extrinsic median of an empty sample")

    median = vmedian3(as_array(points))
    degenerate = not median.any()
    if degenerate:
        logger.warning(f"Extrinsic median of {len(points)} point(s) is at the origin, direction undefined")

    return LocationEstimate(
        point=SpherePoint(*vhat3(median)),
        estimator='extrinsic_median',
        degenerate=degenerate
    )
