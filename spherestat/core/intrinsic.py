"""
Intrinsic (Frechet) mean and median on the unit sphere S².
"""

import logging
import math
from typing import Callable, Optional, Sequence

import numpy as np

from ..models.estimate import LocationEstimate
from ..models.point import SpherePoint
from ..utils.numerics import EPSILON, vmean3, vmedian3
from .extrinsic import extrinsic_mean, extrinsic_median
from .medoids import medoids
from .projection import project_sample, unproject

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 2 * math.pi * EPSILON
DEFAULT_MAX_ITERATIONS = 1000
DEFAULT_MEDOID_THRESHOLD = 10000


class IntrinsicEstimator:
    """
    Refines a seed location by fixed-point iteration in the tangent plane.

    Each iteration projects the sample into the plane tangent at the current
    centre (azimuthal equidistant projection), takes the planar mean or
    geometric median of the projected points and maps it back to the sphere.
    The iteration stops when the centre moves by no more than the tolerance.
    """

    def __init__(
        self,
        tolerance: float = DEFAULT_TOLERANCE,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        medoid_threshold: int = DEFAULT_MEDOID_THRESHOLD
    ):
        """
        Initialize intrinsic estimator.

        Args:
            tolerance: Angular movement (radians) below which the iteration has converged
            max_iterations: Iteration cap
            medoid_threshold: Largest sample size seeded by a medoid; larger
                samples are seeded by the extrinsic estimate since the medoid
                search is quadratic in time and memory
        """
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be positive, got {max_iterations}")
        self.tolerance = tolerance
        self.max_iterations = max_iterations
        self.medoid_threshold = medoid_threshold

    def mean(self, points: Sequence[SpherePoint]) -> LocationEstimate:
        """
        Intrinsic sample mean: minimizes the sum of squared geodesic
        distances to the sample.

        Args:
            points: Non-empty sample

        Returns:
            LocationEstimate with estimator 'intrinsic_mean'
        """
        if len(points) == 0:
            raise ValueError("Cannot compute intrinsic mean of an empty sample")

        seed_index = None
        if len(points) == 1:
            return LocationEstimate(point=points[0], estimator='intrinsic_mean', seed_index=0)
        if len(points) <= self.medoid_threshold:
            _, seed_index = medoids(points)
            center = points[seed_index]
        else:
            center = extrinsic_mean(points).point

        return self._refine(points, center, vmean3, 'intrinsic_mean', seed_index)

    def median(self, points: Sequence[SpherePoint]) -> LocationEstimate:
        """
        Intrinsic sample median: minimizes the sum of geodesic distances
        to the sample.

        Args:
            points: Non-empty sample

        Returns:
            LocationEstimate with estimator 'intrinsic_median'
        """
        if len(points) == 0:
            raise ValueError("Cannot compute intrinsic median of an empty sample")

        seed_index = None
        if len(points) == 1:
            return LocationEstimate(point=points[0], estimator='intrinsic_median', seed_index=0)
        if len(points) <= self.medoid_threshold:
            seed_index, _ = medoids(points)
            center = points[seed_index]
        else:
            center = extrinsic_median(points).point

        return self._refine(points, center, vmedian3, 'intrinsic_median', seed_index)

    def _refine(
        self,
        points: Sequence[SpherePoint],
        center: SpherePoint,
        planar_estimator: Callable[[np.ndarray], np.ndarray],
        name: str,
        seed_index: Optional[int]
    ) -> LocationEstimate:
        for iteration in range(1, self.max_iterations + 1):
            xyz = project_sample(center, points)
            planar = planar_estimator(xyz)
            new_center = unproject(center, planar[0], planar[1])
            step = center.separation(new_center)
            logger.debug(f"{name} iteration {iteration}: step={step:.3e} rad")

            if step <= self.tolerance:
                return LocationEstimate(
                    point=new_center,
                    estimator=name,
                    iterations=iteration,
                    seed_index=seed_index
                )
            center = new_center

        logger.warning(
            f"{name} did not converge in {self.max_iterations} iterations "
            f"(last step {step:.3e} rad > tolerance {self.tolerance:.3e} rad)"
        )
        return LocationEstimate(
            point=center,
            estimator=name,
            iterations=self.max_iterations,
            converged=False,
            seed_index=seed_index
        )


def intrinsic_mean(points: Sequence[SpherePoint], **options) -> LocationEstimate:
    """Intrinsic mean with IntrinsicEstimator options (tolerance, max_iterations, medoid_threshold)."""
    return IntrinsicEstimator(**options).mean(points)


def intrinsic_median(points: Sequence[SpherePoint], **options) -> LocationEstimate:
    """Intrinsic median with IntrinsicEstimator options (tolerance, max_iterations, medoid_threshold)."""
    return IntrinsicEstimator(**options).median(points)
