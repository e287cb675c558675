"""
Utility functions and helpers.
"""

from .config_loader import load_config, get_config_value
from .numerics import (
    EPSILON,
    accu_sum,
    accu_dot,
    sincosd,
    vhat3,
    vmean3,
    vmedian3,
    separations,
    resolve_seed,
    make_generator,
)

__all__ = [
    'load_config',
    'get_config_value',
    'EPSILON',
    'accu_sum',
    'accu_dot',
    'sincosd',
    'vhat3',
    'vmean3',
    'vmedian3',
    'separations',
    'resolve_seed',
    'make_generator',
]
