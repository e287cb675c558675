"""
Core estimation engine: tangent-plane projection, extrinsic and intrinsic
estimators, medoids, bootstrap confidence cones and point generators.
"""

from .projection import project, unproject, project_sample
from .extrinsic import extrinsic_mean, extrinsic_median
from .medoids import medoids, PairwiseDistanceMatrix, NO_MEDOID
from .intrinsic import IntrinsicEstimator, intrinsic_mean, intrinsic_median
from .bootstrap import (
    bootstrap_cones,
    resolve_estimator,
    extrinsic_mean_boot,
    extrinsic_median_boot,
    intrinsic_mean_boot,
    intrinsic_median_boot,
    ESTIMATORS,
)
from .generators import random_point, random_points, fibonacci, cell_random, cell_fibonacci
from .spatial import k_poisson, k_ripley, discrepancy

__all__ = [
    'project',
    'unproject',
    'project_sample',
    'extrinsic_mean',
    'extrinsic_median',
    'medoids',
    'PairwiseDistanceMatrix',
    'NO_MEDOID',
    'IntrinsicEstimator',
    'intrinsic_mean',
    'intrinsic_median',
    'bootstrap_cones',
    'resolve_estimator',
    'extrinsic_mean_boot',
    'extrinsic_median_boot',
    'intrinsic_mean_boot',
    'intrinsic_median_boot',
    'ESTIMATORS',
    'random_point',
    'random_points',
    'fibonacci',
    'cell_random',
    'cell_fibonacci',
    'k_poisson',
    'k_ripley',
    'discrepancy',
]
