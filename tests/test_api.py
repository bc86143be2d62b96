"""
Tests for the functional API in whittaker_eilers.api.
"""

import numpy as np
import pytest

import whittaker_eilers
from whittaker_eilers import (
    interpolate, interpolate_many, smooth, required_data_points, SmoothingConfig,
    InvalidArgumentError,
)

class TestInterpolate:

    def test_single_channel_default_stride(self):
        result = interpolate(1.5, [0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 4.0, 9.0])

        assert result.shape == (1,)
        assert result[0] == pytest.approx(107.0 / 38.0, rel=1e-12)

    def test_config_backend(self):
        config = SmoothingConfig(backend="scipy")

        result = interpolate(1.5, [0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 4.0, 9.0], config=config)

        assert result[0] == pytest.approx(107.0 / 38.0, rel=1e-10)

    def test_version(self):
        assert whittaker_eilers.__version__ == "1.0.0"

    def test_required_data_points(self):
        assert required_data_points(1) == 2
        assert required_data_points(3) == 4

class TestInterpolateMany:

    def test_matches_repeated_calls(self, irregular_knots):
        y = np.column_stack([np.sin(irregular_knots), irregular_knots]).ravel()
        queries = [-2.5, 0.2, 1.5, 3.3, 7.0]

        batch = interpolate_many(queries, irregular_knots, y, 2)

        assert batch.shape == (5, 2)
        for i, x in enumerate(queries):
            np.testing.assert_array_equal(batch[i], interpolate(x, irregular_knots, y, 2))

    def test_linear_channel_recovered(self, irregular_knots):
        y = np.column_stack([np.sin(irregular_knots), irregular_knots]).ravel()
        queries = np.linspace(-3.0, 8.0, 12)

        batch = interpolate_many(queries, irregular_knots, y, 2)

        np.testing.assert_allclose(batch[:, 1], queries, atol=1e-9)

    def test_empty_queries(self):
        batch = interpolate_many([], [0.0, 1.0], [0.0, 1.0])

        assert batch.shape == (0, 1)

    @pytest.mark.parametrize("y_stride", [-1, 0, 1.5])
    def test_bad_stride_rejected_before_allocation(self, y_stride):
        with pytest.raises(InvalidArgumentError) as excinfo:
            interpolate_many([0.5], [0.0, 1.0], [0.0, 1.0], y_stride=y_stride)

        assert excinfo.value.argument == "y_stride"

    def test_empty_queries_still_check_tables(self):
        with pytest.raises(InvalidArgumentError) as excinfo:
            interpolate_many([], [0.0, 1.0, 0.5], [0.0, 1.0, 2.0])

        assert excinfo.value.argument == "x_table"

    def test_continuous_through_knots(self):
        x_table = np.arange(6.0)
        queries = [2.0 - 1e-4, 2.0, 2.0 + 1e-4]

        batch = interpolate_many(queries, x_table, x_table ** 2)

        assert np.ptp(batch[:, 0]) < 2e-3

class TestSmooth:

    def test_shape_and_linear_data(self, irregular_knots):
        y = np.column_stack([1.0 + irregular_knots, -2.0 * irregular_knots]).ravel()

        fitted = smooth(irregular_knots, y, 2)

        assert fitted.shape == (len(irregular_knots), 2)
        np.testing.assert_allclose(fitted[:, 0], 1.0 + irregular_knots, atol=1e-10)
        np.testing.assert_allclose(fitted[:, 1], -2.0 * irregular_knots, atol=1e-10)

    def test_zero_smoothing_returns_samples(self, irregular_knots):
        y = np.sin(3.0 * irregular_knots)

        fitted = smooth(irregular_knots, y, smoothing=0.0)

        np.testing.assert_allclose(fitted[:, 0], y, rtol=1e-14)

    def test_matches_dense_solution(self, irregular_knots, dense):
        y = np.cos(irregular_knots)
        w = np.ones(len(irregular_knots))

        fitted = smooth(irregular_knots, y, smoothing=3.0)

        expected = np.linalg.solve(dense.normal_matrix(irregular_knots, w, 3.0), y)
        np.testing.assert_allclose(fitted[:, 0], expected, rtol=1e-9, atol=1e-12)

    def test_rejects_bad_tables(self):
        with pytest.raises(InvalidArgumentError):
            smooth([0.0, 1.0, 0.5], [0.0, 1.0, 2.0])
