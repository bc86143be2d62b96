"""
Banded Linear Algebra for Whittaker-Eilers Smoothing

Every matrix in the smoother has at most three stored values per row, kept
as an ``(m, 3)`` float array.  For the second-difference operator ``D`` row
``i`` holds ``(D[i, i], D[i, i+1], D[i, i+2])``.  For the symmetric normal
matrix ``A = W + lambda * D^T D`` and its Cholesky factor ``R`` (with
``R^T R = A``) row ``i`` holds the diagonal and the first two
super-diagonals: ``(A[i, i], A[i, i+1], A[i, i+2])``.

The factorization and substitutions are written out as the three-band
recurrences, so a solve costs ``O(m)`` instead of ``O(m^3)``.
"""

import math
import logging

import numpy as np
from scipy.linalg import cholesky_banded, cho_solve_banded, LinAlgError

from ..exceptions import NumericalInstabilityError

logger = logging.getLogger(__name__)

BAND_WIDTH = 3

def difference_scalings(xi: np.ndarray, v1a: np.ndarray, v2a: np.ndarray) -> None:
    """Reciprocal knot spacings for the first and second differences

    ``v1a[i] = 1 / (xi[i+1] - xi[i])`` and ``v2a[i] = 1 / (xi[i+2] - xi[i])``;
    trailing entries with no neighbours are zero.
    """
    m = len(xi)
    v1a[:m - 1] = 1.0 / (xi[1:] - xi[:-1])
    v1a[m - 1] = 0.0
    v2a[:m - 2] = 1.0 / (xi[2:] - xi[:-2])
    v2a[max(m - 2, 0):] = 0.0

def difference_operator(v1a: np.ndarray, v2a: np.ndarray, da: np.ndarray) -> None:
    """Build the divided second-difference operator ``D = V2 diff(V1 diff(I))``

    Args:
        v1a: First-difference scalings
        v2a: Second-difference scalings
        da: ``(m, 3)`` output bands; rows ``m-2`` and ``m-1`` are zeroed
    """
    m = da.shape[0]
    da.fill(0.0)

    # D1 = V1 * diff(I)
    da[:m - 1, 0] = -v1a[:m - 1]
    da[:m - 1, 1] = v1a[:m - 1]

    # D2 = V2 * diff(D1), each row folds two neighbouring D1 rows
    n = m - 2
    if n > 0:
        left = v2a[:n] * -da[:n, 0]
        centre = v2a[:n] * (da[1:n + 1, 0] - da[:n, 1])
        right = v2a[:n] * da[1:n + 1, 1]
        da[:n, 0] = left
        da[:n, 1] = centre
        da[:n, 2] = right

    da[max(m - 2, 0):, :] = 0.0

def merge_coincident_knot(xi: np.ndarray, da: np.ndarray, j: int) -> None:
    """Penalty rows for a zero-weight knot merged into knot ``j``

    As an inserted knot closes onto ``xi[j]`` the row centred on ``j`` splits
    into two rows sharing a free slope.  Minimizing over that slope leaves the
    centred row scaled by ``(p + r) / sqrt(p**2 + r**2)``, with ``p`` and ``r``
    the spacings either side of the knot.  At the end knots the split row
    vanishes and the operator is unchanged.
    """
    m = len(xi)
    if j < 1 or j > m - 2:
        return

    p = xi[j] - xi[j - 1]
    r = xi[j + 1] - xi[j]
    da[j - 1, :] *= (p + r) / math.hypot(p, r)

def normal_matrix(da: np.ndarray, w: np.ndarray, smoothing: float,
                  dtd: np.ndarray) -> None:
    """Assemble the upper bands of ``W + smoothing * D^T D``

    Column ``r`` of ``D`` only meets rows ``r-2``, ``r-1`` and ``r``, so
    each band of the product is a sum of at most three terms.
    """
    m = da.shape[0]

    # Row 0
    dtd[0, 0] = da[0, 0] * da[0, 0]
    dtd[0, 1] = da[0, 0] * da[0, 1]
    dtd[0, 2] = da[0, 0] * da[0, 2]

    # Row 1
    if m > 1:
        dtd[1, 0] = da[0, 1] * da[0, 1] + da[1, 0] * da[1, 0]
        dtd[1, 1] = da[0, 1] * da[0, 2] + da[1, 0] * da[1, 1]
        dtd[1, 2] = da[1, 0] * da[1, 2]

    # Rows >= 2
    if m > 2:
        dtd[2:, 0] = da[:-2, 2] ** 2 + da[1:-1, 1] ** 2 + da[2:, 0] ** 2
        dtd[2:, 1] = da[1:-1, 1] * da[1:-1, 2] + da[2:, 0] * da[2:, 1]
        dtd[2:, 2] = da[2:, 0] * da[2:, 2]

    dtd *= smoothing

    # Add in W
    dtd[:, 0] += w

def _pivot_root(value: float, row: int) -> float:
    if not (value > 0.0 and math.isfinite(value)):
        logger.error(f"Cholesky pivot {value} at row {row} is not positive")
        raise NumericalInstabilityError(
            "normal matrix is not positive definite", row=row, pivot=float(value)
        )
    return math.sqrt(value)

def cholesky_factor(dtd: np.ndarray, ca: np.ndarray) -> None:
    """Factor the banded normal matrix into upper bands ``R`` with ``R^T R = dtd``

    The first two rows have fewer predecessors than the general row and are
    factored separately; the trailing band entries that fall outside the
    matrix are left at zero.

    Raises:
        NumericalInstabilityError: if a pivot is zero, negative or not finite
    """
    m = dtd.shape[0]
    ca.fill(0.0)

    ca[0, 0] = _pivot_root(dtd[0, 0], 0)
    if m == 1:
        return

    ca[0, 1] = dtd[0, 1] / ca[0, 0]
    ca[1, 0] = _pivot_root(dtd[1, 0] - ca[0, 1] * ca[0, 1], 1)

    for j in range(2, m):
        ca[j - 2, 2] = dtd[j - 2, 2] / ca[j - 2, 0]
        ca[j - 1, 1] = (dtd[j - 1, 1] - ca[j - 2, 2] * ca[j - 2, 1]) / ca[j - 1, 0]
        pivot = dtd[j, 0] - ca[j - 2, 2] * ca[j - 2, 2] - ca[j - 1, 1] * ca[j - 1, 1]
        ca[j, 0] = _pivot_root(pivot, j)

    ca[m - 1, 1] = 0.0
    ca[m - 1, 2] = 0.0
    ca[m - 2, 2] = 0.0

def forward_substitution(ca: np.ndarray, b: np.ndarray, za: np.ndarray) -> None:
    """Solve ``R^T za = b``"""
    m = ca.shape[0]
    za[0] = b[0] / ca[0, 0]
    if m == 1:
        return

    za[1] = (b[1] - ca[0, 1] * za[0]) / ca[1, 0]

    for j in range(2, m):
        total = ca[j - 2, 2] * za[j - 2] + ca[j - 1, 1] * za[j - 1]
        za[j] = (b[j] - total) / ca[j, 0]

def backward_substitution(ca: np.ndarray, za: np.ndarray, zb: np.ndarray) -> None:
    """Solve ``R zb = za``"""
    m = ca.shape[0]
    zb[m - 1] = za[m - 1] / ca[m - 1, 0]
    if m == 1:
        return

    zb[m - 2] = (za[m - 2] - ca[m - 2, 1] * zb[m - 1]) / ca[m - 2, 0]

    for j in range(m - 3, -1, -1):
        total = ca[j, 2] * zb[j + 2] + ca[j, 1] * zb[j + 1]
        zb[j] = (za[j] - total) / ca[j, 0]

# LAPACK backend

def to_lapack_upper(dtd: np.ndarray) -> np.ndarray:
    """Convert row bands to LAPACK upper banded form ``ab[u + i - j, j] = A[i, j]``"""
    m = dtd.shape[0]
    ab = np.zeros((BAND_WIDTH, m))
    ab[2, :] = dtd[:, 0]
    ab[1, 1:] = dtd[:m - 1, 1]
    ab[0, 2:] = dtd[:m - 2, 2]
    return ab

def lapack_factor(dtd: np.ndarray) -> np.ndarray:
    """Factor the normal matrix with ``scipy.linalg.cholesky_banded``"""
    try:
        return cholesky_banded(to_lapack_upper(dtd), lower=False)
    except (LinAlgError, ValueError) as e:
        logger.error(f"LAPACK banded Cholesky failed: {e}")
        raise NumericalInstabilityError(f"banded Cholesky failed: {e}")

def lapack_solve(factor: np.ndarray, b: np.ndarray, zb: np.ndarray) -> None:
    """Solve against a factor from :func:`lapack_factor`"""
    zb[:] = cho_solve_banded((factor, False), b)
