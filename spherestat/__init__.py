"""
spherestat - location estimation and bootstrap confidence cones for points
on the unit sphere S².
"""

from .models import SpherePoint, LocationEstimate, ConfidenceCones, BootstrapResult
from .core import (
    extrinsic_mean,
    extrinsic_median,
    intrinsic_mean,
    intrinsic_median,
    medoids,
    bootstrap_cones,
)

__version__ = '0.1.0'

__all__ = [
    'SpherePoint',
    'LocationEstimate',
    'ConfidenceCones',
    'BootstrapResult',
    'extrinsic_mean',
    'extrinsic_median',
    'intrinsic_mean',
    'intrinsic_median',
    'medoids',
    'bootstrap_cones',
]
