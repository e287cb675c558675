"""
Data models for sphere points, location estimates and confidence cones.
"""

from .point import SpherePoint, NORTH_POLE, as_array
from .estimate import LocationEstimate, ConfidenceCones, BootstrapResult

__all__ = [
    'SpherePoint',
    'NORTH_POLE',
    'as_array',
    'LocationEstimate',
    'ConfidenceCones',
    'BootstrapResult',
]
