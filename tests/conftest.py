"""Shared fixtures for the Whittaker-Eilers test suite."""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from whittaker_eilers.core.scratch import ScratchPool

def dense_difference_operator(xi):
    """Divided second-difference matrix of shape (m - 2, m)"""
    m = len(xi)
    d = np.zeros((m - 2, m))
    for i in range(m - 2):
        v1_left = 1.0 / (xi[i + 1] - xi[i])
        v1_right = 1.0 / (xi[i + 2] - xi[i + 1])
        v2 = 1.0 / (xi[i + 2] - xi[i])
        d[i, i] = v2 * v1_left
        d[i, i + 1] = -v2 * (v1_left + v1_right)
        d[i, i + 2] = v2 * v1_right
    return d

def dense_normal_matrix(xi, w, smoothing):
    d = dense_difference_operator(xi)
    return np.diag(w) + smoothing * d.T @ d

def dense_interpolate(x, x_table, y_channel, smoothing=1.0):
    """Reference solve with full matrices and the same insertion rule"""
    x_table = np.asarray(x_table, dtype=float)
    y_channel = np.asarray(y_channel, dtype=float)
    k = int(np.searchsorted(x_table, x, side="right"))
    xi = np.insert(x_table, k, x)
    yi = np.insert(y_channel, k, 0.0)
    w = np.ones(len(xi))
    w[k] = 0.0
    a = dense_normal_matrix(xi, w, smoothing)
    return np.linalg.solve(a, w * yi)[k]

def band_to_dense(bands):
    """Expand (m, 3) upper bands into a full upper-triangular matrix"""
    m = bands.shape[0]
    out = np.zeros((m, m))
    for i in range(m):
        for j in range(3):
            if i + j < m:
                out[i, i + j] = bands[i, j]
    return out

@pytest.fixture
def dense():
    """Dense reference helpers"""
    class Dense:
        difference_operator = staticmethod(dense_difference_operator)
        normal_matrix = staticmethod(dense_normal_matrix)
        interpolate = staticmethod(dense_interpolate)
        band_to_dense = staticmethod(band_to_dense)
    return Dense

@pytest.fixture
def irregular_knots():
    spacings = np.array([0.7, 1.3, 0.4, 1.1, 0.9, 1.6, 0.5, 1.2, 0.8])
    return np.concatenate([[-2.0], -2.0 + np.cumsum(spacings)])

@pytest.fixture
def pool():
    return ScratchPool()
