"""
Bootstrap confidence cones for location estimates on the unit sphere S².

Non-parametric bootstrap quantile method: the sample is resampled with
replacement, the estimator is recomputed on every resample and the
separations between resample estimates and the full-sample estimate give
the radii of the 95% and 99% confidence cones.
"""

import logging
import math
from typing import Callable, Sequence, Tuple, Union

import numpy as np

from ..models.estimate import BootstrapResult, ConfidenceCones, LocationEstimate
from ..models.point import SpherePoint
from ..utils.numerics import make_generator, resolve_seed
from .extrinsic import extrinsic_mean, extrinsic_median
from .intrinsic import IntrinsicEstimator

logger = logging.getLogger(__name__)

DEFAULT_RESAMPLES = 10000
MIN_RESAMPLES = 100

Estimator = Callable[[Sequence[SpherePoint]], LocationEstimate]

ESTIMATORS = ('extrinsic_mean', 'extrinsic_median', 'intrinsic_mean', 'intrinsic_median')


def resolve_estimator(estimator: Union[str, Estimator], **options) -> Estimator:
    """
    Turn an estimator name into a callable.

    Args:
        estimator: One of ESTIMATORS, or a callable returning a LocationEstimate
        **options: IntrinsicEstimator options (ignored by extrinsic estimators)

    Returns:
        Callable taking a sample and returning a LocationEstimate

    Raises:
        ValueError: If the name is not a known estimator
    """
    if callable(estimator):
        return estimator
    if estimator == 'extrinsic_mean':
        return extrinsic_mean
    if estimator == 'extrinsic_median':
        return extrinsic_median
    if estimator == 'intrinsic_mean':
        return IntrinsicEstimator(**options).mean
    if estimator == 'intrinsic_median':
        return IntrinsicEstimator(**options).median
    raise ValueError(f"Unknown estimator: {estimator!r} (expected one of {', '.join(ESTIMATORS)})")


def bootstrap_cones(
    points: Sequence[SpherePoint],
    estimator: Union[str, Estimator] = 'extrinsic_mean',
    seed: int = 0,
    resamples: int = DEFAULT_RESAMPLES,
    **options
) -> BootstrapResult:
    """
    Compute a location estimate and its bootstrap confidence cones.

    Args:
        points: Non-empty sample
        estimator: Estimator name or callable
        seed: Seed for the private MT19937 generator. 0 derives a seed from
              current time (non-reproducible); any other value makes the
              result reproducible bit for bit.
        resamples: Number of bootstrap rounds B
        **options: IntrinsicEstimator options for intrinsic estimators

    Returns:
        BootstrapResult with the full-sample estimate and cone radii in degrees
    """
    points = list(points)
    n = len(points)
    if n == 0:
        raise ValueError("Cannot bootstrap an empty sample")
    if resamples < MIN_RESAMPLES:
        raise ValueError(f"resamples must be at least {MIN_RESAMPLES}, got {resamples}")

    estimate_fn = resolve_estimator(estimator, **options)
    estimate = estimate_fn(points)

    seed = resolve_seed(seed)
    rng = make_generator(seed)
    logger.info(f"Bootstrapping {estimate.estimator} over {n} point(s): {resamples} resamples, seed={seed}")

    seps = np.empty(resamples)
    for b in range(resamples):
        indices = rng.integers(0, n, size=n)
        resample = [points[i] for i in indices]
        seps[b] = estimate.point.separation(estimate_fn(resample).point)

    seps.sort()
    c95 = math.degrees(seps[resamples * 95 // 100 - 1])
    c99 = math.degrees(seps[resamples * 99 // 100 - 1])
    logger.info(f"Confidence cones for {estimate.estimator}: c95={c95:.6f} deg, c99={c99:.6f} deg")

    return BootstrapResult(
        estimate=estimate,
        cones=ConfidenceCones(c95=c95, c99=c99, resamples=resamples),
        seed=seed
    )


def extrinsic_mean_boot(points, seed: int = 0, resamples: int = DEFAULT_RESAMPLES) -> Tuple[SpherePoint, float, float]:
    """Extrinsic mean with 95% and 99% cone half-angles (degrees)."""
    return bootstrap_cones(points, 'extrinsic_mean', seed, resamples).as_tuple()


def extrinsic_median_boot(points, seed: int = 0, resamples: int = DEFAULT_RESAMPLES) -> Tuple[SpherePoint, float, float]:
    """Extrinsic median with 95% and 99% cone half-angles (degrees)."""
    return bootstrap_cones(points, 'extrinsic_median', seed, resamples).as_tuple()


def intrinsic_mean_boot(points, seed: int = 0, resamples: int = DEFAULT_RESAMPLES, **options) -> Tuple[SpherePoint, float, float]:
    """Intrinsic mean with 95% and 99% cone half-angles (degrees)."""
    return bootstrap_cones(points, 'intrinsic_mean', seed, resamples, **options).as_tuple()


def intrinsic_median_boot(points, seed: int = 0, resamples: int = DEFAULT_RESAMPLES, **options) -> Tuple[SpherePoint, float, float]:
    """Intrinsic median with 95% and 99% cone half-angles (degrees)."""
    return bootstrap_cones(points, 'intrinsic_median', seed, resamples, **options).as_tuple()
