"""
Estimation workflow functions for spherestat.

This module contains the workflow functions that read estimator settings
from a configuration dictionary, run the estimators on a sample and log
the progress.
"""

import logging
from typing import Dict, Sequence

from .models.estimate import BootstrapResult, LocationEstimate
from .models.point import SpherePoint
from .core import ESTIMATORS, bootstrap_cones, medoids, resolve_estimator
from .core.bootstrap import DEFAULT_RESAMPLES
from .core.intrinsic import DEFAULT_MAX_ITERATIONS, DEFAULT_MEDOID_THRESHOLD, DEFAULT_TOLERANCE
from .utils.config_loader import get_config_value

logger = logging.getLogger(__name__)


def _setting(config: dict, key_path: str, default):
    # A key present with no value (YAML null) falls back to the default
    value = get_config_value(config, key_path)
    return default if value is None else value


def _estimation_options(config: dict) -> Dict:
    return {
        'tolerance': float(_setting(config, 'estimation.tolerance', DEFAULT_TOLERANCE)),
        'max_iterations': int(_setting(config, 'estimation.max_iterations', DEFAULT_MAX_ITERATIONS)),
        'medoid_threshold': int(_setting(config, 'estimation.medoid_threshold', DEFAULT_MEDOID_THRESHOLD)),
    }


def _options_for(estimator: str, config: dict) -> Dict:
    # Only the intrinsic estimators are tunable
    if estimator.startswith('intrinsic'):
        return _estimation_options(config)
    return {}


def estimate_location(
    points: Sequence[SpherePoint],
    estimator: str,
    config: dict
) -> LocationEstimate:
    """
    Estimate the central location of a sample.

    Args:
        points: Sample of points
        estimator: Estimator name (see core.ESTIMATORS)
        config: Configuration dictionary

    Returns:
        LocationEstimate
    """
    logger.info(f"Estimating {estimator} for {len(points)} point(s)")
    options = _options_for(estimator, config)
    if options:
        logger.info(
            f"Intrinsic options: tolerance={options['tolerance']:.3e} rad, "
            f"max_iterations={options['max_iterations']}, medoid_threshold={options['medoid_threshold']}"
        )

    estimate = resolve_estimator(estimator, **options)(points)

    lat, lon = estimate.to_geographic()
    logger.info(f"  {estimator}: lat={lat:.6f}, lon={lon:.6f}, iterations={estimate.iterations}")
    if estimate.degenerate:
        logger.warning(f"  {estimator} is degenerate, reported location is the canonical pole")
    if not estimate.converged:
        logger.warning(f"  {estimator} did not converge")
    return estimate


def estimate_with_confidence(points: Sequence[SpherePoint], config: dict) -> BootstrapResult:
    """
    Estimate location and bootstrap confidence cones using the 'bootstrap'
    section of the configuration.

    Args:
        points: Sample of points
        config: Configuration dictionary

    Returns:
        BootstrapResult
    """
    estimator = _setting(config, 'bootstrap.estimator', 'extrinsic_mean')
    resamples = int(_setting(config, 'bootstrap.resamples', DEFAULT_RESAMPLES))
    seed = int(_setting(config, 'bootstrap.seed', 0))

    logger.info(f"Starting bootstrap for {len(points)} point(s) using {estimator}")
    if seed == 0:
        logger.info("Seed 0: using time-based seed (results are not reproducible)")

    result = bootstrap_cones(
        points,
        estimator=estimator,
        seed=seed,
        resamples=resamples,
        **_options_for(estimator, config)
    )

    lat, lon = result.estimate.to_geographic()
    logger.info(
        f"Bootstrap complete: lat={lat:.6f}, lon={lon:.6f}, "
        f"c95={result.cones.c95:.4f} deg, c99={result.cones.c99:.4f} deg"
    )
    return result


def summarize_sample(points: Sequence[SpherePoint], config: dict) -> Dict:
    """
    Run every estimator on a sample.

    Args:
        points: Sample of points
        config: Configuration dictionary

    Returns:
        Dictionary with one LocationEstimate per estimator name and the
        medoid indices under 'medoids'
    """
    total = len(points)
    logger.info(f"Summarizing sample of {total} point(s)")
    if total == 0:
        logger.warning("Sample is empty - skipping estimation")
        return {'medoids': medoids(points)}

    summary = {}
    for idx, name in enumerate(ESTIMATORS, 1):
        logger.info(f"[{idx}/{len(ESTIMATORS)}] {name}")
        summary[name] = estimate_location(points, name, config)

    threshold = _estimation_options(config)['medoid_threshold']
    if total <= threshold:
        summary['medoids'] = medoids(points)
    else:
        logger.info(f"Sample larger than medoid threshold ({threshold}) - skipping medoids")
    return summary
