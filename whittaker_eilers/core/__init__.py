"""
Whittaker-Eilers Core Module

Banded penalized least-squares solver, scratch buffers, input validation
and the interpolation algorithm built on them.
"""

from .approximation import (
    WhittakerEilersApproximation, SmoothingConfig, locate_insertion, coincident_knot,
)
from .scratch import ScratchPool, SmoothingWorkspace, default_pool

__all__ = [
    'WhittakerEilersApproximation',
    'SmoothingConfig',
    'locate_insertion',
    'coincident_knot',
    'ScratchPool',
    'SmoothingWorkspace',
    'default_pool',
]
