"""
Whittaker-Eilers Utilities Module

Input coercion and logging helpers.
"""

from .tensor_ops import is_defined, tensor_to_numpy, as_float_array, as_scalar
from .logging import setup_logging

__all__ = [
    'is_defined',
    'tensor_to_numpy',
    'as_float_array',
    'as_scalar',
    'setup_logging',
]
