"""
Whittaker-Eilers High-Level API

Simple functions for smoothing and interpolating tabulated samples.  This is
the main interface most users will interact with; each call builds a
:class:`WhittakerEilersApproximation` from the given configuration.
"""

import logging
from typing import Any, Optional

import numpy as np

from .core.approximation import WhittakerEilersApproximation, SmoothingConfig
from .core.validation import validate_tables
from .utils.tensor_ops import as_float_array, as_scalar

logger = logging.getLogger(__name__)

def _approximation(config: Optional[SmoothingConfig]) -> WhittakerEilersApproximation:
    return WhittakerEilersApproximation(config)

def required_data_points(degree):
    """
    Number of data points required for the desired degree of interpolation

    Example:
        >>> required_data_points(1)
        2
        >>> required_data_points(4)
        5
    """
    return WhittakerEilersApproximation.get_required_data_points(degree)

def interpolate(
    x,
    x_table,
    y_table,
    y_stride: int = 1,
    result: Any = None,
    smoothing: Optional[float] = None,
    config: Optional[SmoothingConfig] = None,
):
    """
    Interpolate channel-interleaved samples at a single abscissa

    The result is continuous in ``x``, including at the knots.  Queries within
    ``config.coincident_tolerance`` (relative) of a knot are evaluated as lying
    on it, since the inserted spacing would be too small to factor reliably.

    Args:
        x: Query abscissa; values outside the table are extrapolated
        x_table: Strictly increasing knot abscissas
        y_table: Dependent values, ``y_stride`` per knot
        y_stride: Number of channels
        result: Optional buffer to overwrite and return
        smoothing: Curvature penalty weight (lambda); ``config.smoothing`` if omitted
        config: Smoothing configuration

    Returns:
        ``result`` or a new array with one value per channel

    Example:
        >>> interpolate(1.5, [0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 4.0, 9.0])
        array([2.81578947])
    """
    return _approximation(config).interpolate_order_zero(
        x, x_table, y_table, y_stride, result=result, smoothing=smoothing
    )

def interpolate_many(
    xs,
    x_table,
    y_table,
    y_stride: int = 1,
    smoothing: Optional[float] = None,
    config: Optional[SmoothingConfig] = None,
) -> np.ndarray:
    """
    Interpolate at several abscissas

    Each query point changes the structure of the banded system, so every
    point is solved independently.

    Returns:
        Array of shape ``(len(xs), y_stride)``
    """
    approximation = _approximation(config)
    x_table = as_float_array(x_table, "x_table")
    y_table = as_float_array(y_table, "y_table")
    queries = as_float_array(xs, "xs").ravel()

    # Checked up front so a bad stride never reaches the allocation below
    if approximation.config.validate_inputs:
        validate_tables(x_table, y_table, y_stride)

    logger.debug(f"Interpolating {len(queries)} points over {len(x_table)} knots")

    out = np.empty((len(queries), y_stride))
    for i, x in enumerate(queries):
        approximation.interpolate_order_zero(
            as_scalar(x), x_table, y_table, y_stride, result=out[i], smoothing=smoothing
        )
    return out

def smooth(
    x_table,
    y_table,
    y_stride: int = 1,
    smoothing: Optional[float] = None,
    config: Optional[SmoothingConfig] = None,
) -> np.ndarray:
    """
    Whittaker-Eilers smoothed values at every knot

    Returns:
        Array of shape ``(len(x_table), y_stride)``
    """
    return _approximation(config).smooth(x_table, y_table, y_stride, smoothing=smoothing)
