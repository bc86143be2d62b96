"""
Input Validation

Precondition checks run before a smoothing solve.  Tables that fail them
would otherwise produce division-by-zero artifacts or out-of-range reads
deep inside the banded recurrences.
"""

import math
import numbers
import logging

import numpy as np

from ..exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

MIN_KNOTS = 2

def validate_stride(y_stride) -> None:
    if isinstance(y_stride, bool) or not isinstance(y_stride, numbers.Integral):
        raise InvalidArgumentError("must be an integer", argument="y_stride", value=y_stride)
    if y_stride < 1:
        raise InvalidArgumentError("must be >= 1", argument="y_stride", value=y_stride)

def validate_query(x: float) -> None:
    if not math.isfinite(x):
        raise InvalidArgumentError("query abscissa must be finite", argument="x", value=x)

def validate_tables(x_table: np.ndarray, y_table: np.ndarray, y_stride: int) -> None:
    """Check knot and observation tables against each other

    Args:
        x_table: Knot abscissas, 1-D, strictly increasing, finite
        y_table: Channel-interleaved observations of length ``N * y_stride``
        y_stride: Number of channels

    Raises:
        InvalidArgumentError: on the first violated precondition
    """
    validate_stride(y_stride)

    if x_table.ndim != 1:
        raise InvalidArgumentError(
            f"must be one-dimensional, got shape {x_table.shape}", argument="x_table"
        )

    n_knots = x_table.shape[0]
    if n_knots < MIN_KNOTS:
        raise InvalidArgumentError(
            f"at least {MIN_KNOTS} knots are required, got {n_knots}", argument="x_table"
        )

    if not np.all(np.isfinite(x_table)):
        raise InvalidArgumentError("contains non-finite values", argument="x_table")

    steps = np.diff(x_table)
    if np.any(steps <= 0.0):
        bad = int(np.flatnonzero(steps <= 0.0)[0])
        raise InvalidArgumentError(
            f"must be strictly increasing (x_table[{bad}]={x_table[bad]!r}, "
            f"x_table[{bad + 1}]={x_table[bad + 1]!r})",
            argument="x_table"
        )

    if y_table.ndim != 1:
        raise InvalidArgumentError(
            f"must be one-dimensional, got shape {y_table.shape}", argument="y_table"
        )

    expected = n_knots * y_stride
    if y_table.shape[0] != expected:
        raise InvalidArgumentError(
            f"length must be len(x_table) * y_stride = {expected}, got {y_table.shape[0]}",
            argument="y_table"
        )

    if not np.all(np.isfinite(y_table)):
        raise InvalidArgumentError("contains non-finite values", argument="y_table")

    logger.debug(f"Validated tables: {n_knots} knots, {y_stride} channel(s)")

def validate_result_buffer(result, y_stride: int) -> None:
    try:
        size = len(result)
    except TypeError:
        raise InvalidArgumentError(
            f"must be a mutable sequence, got {type(result).__name__}", argument="result"
        )
    if size < y_stride:
        raise InvalidArgumentError(
            f"must hold at least y_stride={y_stride} values, got length {size}",
            argument="result"
        )
