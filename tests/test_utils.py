"""
Tests for whittaker_eilers.utils and whittaker_eilers.exceptions.
"""

import io
import logging

import numpy as np
import pytest
import torch

from whittaker_eilers.exceptions import (
    WhittakerEilersError, InvalidArgumentError, NumericalInstabilityError,
    ConfigurationError, VisualizationError,
)
from whittaker_eilers.utils import (
    is_defined, tensor_to_numpy, as_float_array, as_scalar, setup_logging,
)

@pytest.fixture
def package_logger():
    logger = logging.getLogger("whittaker_eilers")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)

class TestTensorOps:

    def test_is_defined(self):
        assert is_defined(0.0)
        assert is_defined([])
        assert not is_defined(None)

    def test_tensor_to_numpy(self):
        array = tensor_to_numpy(torch.arange(3, dtype=torch.float64))

        np.testing.assert_array_equal(array, [0.0, 1.0, 2.0])

    def test_as_float_array_from_list(self):
        array = as_float_array([1, 2, 3])

        assert array.dtype == np.float64
        assert array.flags["C_CONTIGUOUS"]

    def test_as_float_array_from_tensor(self):
        array = as_float_array(torch.tensor([1.5, 2.5], dtype=torch.float32))

        assert array.dtype == np.float64
        np.testing.assert_array_equal(array, [1.5, 2.5])

    def test_as_float_array_strided_view(self):
        array = as_float_array(np.arange(10.0)[::2])

        assert array.flags["C_CONTIGUOUS"]
        np.testing.assert_array_equal(array, [0.0, 2.0, 4.0, 6.0, 8.0])

    def test_as_scalar(self):
        assert as_scalar(np.float32(0.5)) == 0.5
        assert as_scalar(torch.tensor([2.0])) == 2.0

    def test_as_scalar_rejects_vector_tensor(self):
        with pytest.raises(InvalidArgumentError):
            as_scalar(torch.tensor([1.0, 2.0]))

    def test_as_scalar_rejects_text(self):
        with pytest.raises(InvalidArgumentError) as excinfo:
            as_scalar("abc", name="x")

        assert excinfo.value.argument == "x"

class TestExceptions:

    def test_hierarchy(self):
        for cls in (InvalidArgumentError, NumericalInstabilityError,
                    ConfigurationError, VisualizationError):
            assert issubclass(cls, WhittakerEilersError)

    def test_error_code_in_message(self):
        error = NumericalInstabilityError("normal matrix is not positive definite", row=3, pivot=-0.5)

        assert str(error) == ("[WE_NUMERICAL] Numerical instability: normal matrix is not "
                              "positive definite (row=3, pivot=-0.5)")

    def test_invalid_argument_details(self):
        error = InvalidArgumentError("must be >= 1", argument="y_stride", value=0)

        assert error.error_code == "WE_INVALID_ARGUMENT"
        assert "y_stride" in str(error)
        assert "(got: 0)" in str(error)

    def test_configuration_details(self):
        error = ConfigurationError("bad", config_key="backend", config_value="cuda")

        assert str(error) == "[WE_CONFIG] Configuration error: bad (key: backend, value: cuda)"

class TestSetupLogging:

    def test_writes_to_stream(self, package_logger):
        stream = io.StringIO()
        setup_logging(logging.DEBUG, fmt="%(levelname)s %(message)s", stream=stream)

        logging.getLogger("whittaker_eilers.core").debug("hello")

        assert "DEBUG hello" in stream.getvalue()

    def test_idempotent(self, package_logger):
        before = len(package_logger.handlers)

        setup_logging(logging.INFO, stream=io.StringIO())
        setup_logging(logging.WARNING, stream=io.StringIO())

        assert len(package_logger.handlers) == before + 1
        assert package_logger.level == logging.WARNING
