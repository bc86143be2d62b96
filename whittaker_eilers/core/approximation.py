"""
Whittaker-Eilers Approximation

Interpolates tabulated, channel-interleaved samples at a single abscissa by
Whittaker-Eilers penalized least squares.  The query point is inserted into
the knot table as an extra knot with zero observation weight; the smoothed
curve through all knots is then solved with a banded Cholesky factorization
and read back at the inserted row.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from .banded import (
    difference_scalings, difference_operator, merge_coincident_knot, normal_matrix,
    cholesky_factor, forward_substitution, backward_substitution,
    lapack_factor, lapack_solve,
)
from .scratch import ScratchPool, SmoothingWorkspace, default_pool
from .validation import (
    validate_tables, validate_query, validate_result_buffer,
)
from ..exceptions import (
    validate_smoothing, validate_tolerance, validate_backend, validate_degree,
)
from ..utils.tensor_ops import as_float_array, as_scalar, is_defined

logger = logging.getLogger(__name__)

@dataclass
class SmoothingConfig:
    """Configuration for Whittaker-Eilers smoothing"""
    smoothing: float = 1.0  # lambda, weight of the curvature penalty
    validate_inputs: bool = True
    backend: str = "native"  # "native" recurrences or "scipy" (LAPACK)
    reuse_scratch: bool = True
    coincident_tolerance: float = 1e-5  # relative to the shorter interval beside a knot

    def __post_init__(self):
        validate_smoothing(self.smoothing)
        validate_backend(self.backend)
        validate_tolerance(self.coincident_tolerance)

def locate_insertion(x: float, x_table: np.ndarray) -> int:
    """Row at which the query abscissa is inserted

    Returns the index of the first knot strictly greater than ``x``, or
    ``len(x_table)`` when no knot is.  A query equal to a knot therefore
    lands directly after it.
    """
    greater = np.flatnonzero(x_table > x)
    if greater.size:
        return int(greater[0])
    return int(x_table.shape[0])

def coincident_knot(x: float, k: int, x_table: np.ndarray,
                    tolerance: float) -> Optional[int]:
    """Knot the query lands on, or ``None``

    Only the knots either side of insertion row ``k`` are candidates.  A
    query within ``tolerance`` times the shorter interval beside a knot
    counts as landing on it; closer than that the inserted spacing is too
    small for the factorization to resolve.
    """
    n_knots = x_table.shape[0]
    for j in (k - 1, k):
        if 0 <= j < n_knots:
            spacing = float(np.min(np.diff(x_table[max(j - 1, 0):j + 2])))
            if abs(x - x_table[j]) <= tolerance * spacing:
                return j
    return None

class WhittakerEilersApproximation:
    """
    Whittaker-Eilers smoothing interpolator

    Fits ``z`` minimizing ``sum(w * (y - z)**2) + smoothing * |D z|**2``
    where ``D`` is the divided second difference over the (non-uniform)
    knots, independently for each of ``y_stride`` channels.
    """

    type = "WhittakerEilers"

    def __init__(self, config: Optional[SmoothingConfig] = None,
                 pool: Optional[ScratchPool] = None):
        """Initialize the approximation

        Args:
            config: Smoothing configuration
            pool: Scratch-buffer pool; the shared thread-local pool by default
        """
        self.config = config or SmoothingConfig()
        self.pool = pool if pool is not None else default_pool

        logger.debug(f"Initialized WhittakerEilersApproximation "
                     f"(smoothing={self.config.smoothing}, backend={self.config.backend})")

    @staticmethod
    def get_required_data_points(degree):
        """Number of data points required for the desired degree of interpolation"""
        validate_degree(degree)
        return max(degree + 1, 2)

    def interpolate_order_zero(self, x, x_table, y_table, y_stride: int,
                               result: Any = None,
                               smoothing: Optional[float] = None):
        """Interpolate every channel at ``x``

        A query on a knot (within ``config.coincident_tolerance`` of the
        shorter interval beside it) returns the limit of the inserted-knot
        solve as the query approaches that knot, so the curve is continuous
        across knots.  Just outside the tolerance the inserted spacing is
        resolved directly; accuracy there falls to roughly ``1e-6`` relative.

        Args:
            x: Independent variable at which to interpolate; may lie outside the table
            x_table: Strictly increasing knot abscissas, length ``N``
            y_table: Dependent values, channel ``c`` of knot ``k`` at ``k * y_stride + c``
            y_stride: Number of dependent values per knot
            result: Optional buffer of length ``>= y_stride``, overwritten in place
            smoothing: Overrides ``config.smoothing`` for this call

        Returns:
            ``result``, or a new float64 array of length ``y_stride``

        Raises:
            InvalidArgumentError: if the inputs violate a precondition
            NumericalInstabilityError: if the normal matrix is not positive definite
        """
        smoothing = self._resolve_smoothing(smoothing)
        x = as_scalar(x, "x")
        x_table = as_float_array(x_table, "x_table")
        y_table = as_float_array(y_table, "y_table")

        if self.config.validate_inputs:
            validate_query(x)
            validate_tables(x_table, y_table, y_stride)
            if is_defined(result):
                validate_result_buffer(result, y_stride)

        n_knots = x_table.shape[0]
        k = locate_insertion(x, x_table)

        if x < x_table[0] or x > x_table[-1]:
            logger.debug(f"Extrapolating at x={x} outside [{x_table[0]}, {x_table[-1]}]")

        j = coincident_knot(x, k, x_table, self.config.coincident_tolerance)
        if j is not None:
            logger.debug(f"Query x={x} coincides with knot {j}")
            values = self._smooth_knots(x_table, y_table, y_stride, smoothing, knot=j)[j]
        else:
            logger.debug(f"Inserting x={x} at row {k} of {n_knots + 1}")
            values = self._smooth_with_insertion(x, k, x_table, y_table, y_stride, smoothing)

        # Every channel has solved; only now touch the caller's buffer
        if not is_defined(result):
            result = np.empty(y_stride)
        for n in range(y_stride):
            result[n] = float(values[n])

        return result

    interpolate = interpolate_order_zero

    def smooth(self, x_table, y_table, y_stride: int,
               smoothing: Optional[float] = None) -> np.ndarray:
        """Whittaker-Eilers fit at every knot

        Returns:
            Array of shape ``(N, y_stride)`` with the smoothed value of each
            channel at each knot
        """
        smoothing = self._resolve_smoothing(smoothing)
        x_table = as_float_array(x_table, "x_table")
        y_table = as_float_array(y_table, "y_table")

        if self.config.validate_inputs:
            validate_tables(x_table, y_table, y_stride)

        return self._smooth_knots(x_table, y_table, y_stride, smoothing)

    def _resolve_smoothing(self, smoothing: Optional[float]) -> float:
        if smoothing is None:
            return float(self.config.smoothing)
        validate_smoothing(smoothing)
        return float(smoothing)

    def _workspace(self, m: int) -> SmoothingWorkspace:
        if self.config.reuse_scratch:
            return self.pool.acquire(m)
        return SmoothingWorkspace.allocate(m)

    def _factor(self, ws: SmoothingWorkspace, smoothing: float,
                knot: Optional[int] = None):
        """Assemble and factor ``W + smoothing * D^T D`` from ``ws.xi`` and ``ws.w``"""
        difference_scalings(ws.xi, ws.v1a, ws.v2a)
        difference_operator(ws.v1a, ws.v2a, ws.da)
        if knot is not None:
            merge_coincident_knot(ws.xi, ws.da, knot)
        normal_matrix(ws.da, ws.w, smoothing, ws.dtd)

        if self.config.backend == "scipy":
            return lapack_factor(ws.dtd)

        cholesky_factor(ws.dtd, ws.ca)
        return None

    def _substitute(self, ws: SmoothingWorkspace, factor) -> None:
        """Solve for ``ws.zb`` against the weighted observations ``ws.w * ws.yi``"""
        np.multiply(ws.w, ws.yi, out=ws.b)

        if factor is not None:
            lapack_solve(factor, ws.b, ws.zb)
        else:
            forward_substitution(ws.ca, ws.b, ws.za)
            backward_substitution(ws.ca, ws.za, ws.zb)

    def _smooth_with_insertion(self, x: float, k: int, x_table: np.ndarray,
                               y_table: np.ndarray, y_stride: int,
                               smoothing: float) -> np.ndarray:
        ws = self._workspace(x_table.shape[0] + 1)

        # Knots and weights are shared by every channel
        ws.xi[:k] = x_table[:k]
        ws.xi[k] = x
        ws.xi[k + 1:] = x_table[k:]
        ws.w.fill(1.0)
        ws.w[k] = 0.0

        factor = self._factor(ws, smoothing)

        values = np.empty(y_stride)
        for n in range(y_stride):
            channel = y_table[n::y_stride]
            ws.yi[:k] = channel[:k]
            ws.yi[k] = 0.0
            ws.yi[k + 1:] = channel[k:]

            self._substitute(ws, factor)
            values[n] = ws.zb[k]

        return values

    def _smooth_knots(self, x_table: np.ndarray, y_table: np.ndarray,
                      y_stride: int, smoothing: float,
                      knot: Optional[int] = None) -> np.ndarray:
        n_knots = x_table.shape[0]
        ws = self._workspace(n_knots)

        ws.xi[:] = x_table
        ws.w.fill(1.0)

        factor = self._factor(ws, smoothing, knot)

        fitted = np.empty((n_knots, y_stride))
        for n in range(y_stride):
            ws.yi[:] = y_table[n::y_stride]
            self._substitute(ws, factor)
            fitted[:, n] = ws.zb

        return fitted
