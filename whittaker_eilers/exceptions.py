"""
Whittaker-Eilers Custom Exceptions

Provides specific exception classes for the errors that can occur while
validating tables, configuring the smoother, solving the banded system
and plotting results.
"""

import math
import numbers

class WhittakerEilersError(Exception):
    """Base exception class for all Whittaker-Eilers errors"""

    def __init__(self, message: str, error_code: str = "WE_GENERAL"):
        super().__init__(message)
        self.error_code = error_code
        self.message = message

    def __str__(self):
        return f"[{self.error_code}] {self.message}"

class InvalidArgumentError(WhittakerEilersError):
    """Raised when a table, stride or result buffer violates a precondition"""

    def __init__(self, message: str, argument: str = None, value=None):
        self.argument = argument
        self.value = value

        if argument:
            full_message = f"Invalid argument '{argument}': {message}"
        else:
            full_message = f"Invalid argument: {message}"

        if value is not None:
            full_message += f" (got: {value!r})"

        super().__init__(full_message, "WE_INVALID_ARGUMENT")

class NumericalInstabilityError(WhittakerEilersError):
    """Raised when the normal matrix is not positive definite"""

    def __init__(self, message: str, row: int = None, pivot: float = None):
        self.row = row
        self.pivot = pivot

        full_message = f"Numerical instability: {message}"

        details = []
        if row is not None:
            details.append(f"row={row}")
        if pivot is not None:
            details.append(f"pivot={pivot:.6g}")

        if details:
            full_message += f" ({', '.join(details)})"

        super().__init__(full_message, "WE_NUMERICAL")

class ConfigurationError(WhittakerEilersError):
    """Raised when configuration is invalid"""

    def __init__(self, message: str, config_key: str = None,
                 config_value: str = None):
        self.config_key = config_key
        self.config_value = config_value

        full_message = f"Configuration error: {message}"

        if config_key:
            full_message += f" (key: {config_key}"
            if config_value:
                full_message += f", value: {config_value}"
            full_message += ")"

        super().__init__(full_message, "WE_CONFIG")

class VisualizationError(WhittakerEilersError):
    """Raised when visualization operations fail"""

    def __init__(self, message: str, plot_type: str = None):
        self.plot_type = plot_type

        if plot_type:
            full_message = f"Visualization failed ({plot_type}): {message}"
        else:
            full_message = f"Visualization failed: {message}"

        super().__init__(full_message, "WE_VISUALIZATION")

# Helper functions for error handling

def validate_smoothing(smoothing):
    """Validate the regularization strength (lambda)"""
    if isinstance(smoothing, bool) or not isinstance(smoothing, numbers.Real):
        raise ConfigurationError(
            f"Smoothing must be a real number, got {type(smoothing).__name__}",
            config_key="smoothing"
        )

    if not math.isfinite(smoothing) or smoothing < 0.0:
        raise ConfigurationError(
            f"Smoothing must be finite and non-negative, got {smoothing}",
            config_key="smoothing",
            config_value=str(smoothing)
        )

def validate_tolerance(tolerance):
    """Validate the relative distance at which a query counts as on a knot"""
    if isinstance(tolerance, bool) or not isinstance(tolerance, numbers.Real):
        raise ConfigurationError(
            f"Coincident tolerance must be a real number, got {type(tolerance).__name__}",
            config_key="coincident_tolerance"
        )

    if not (0.0 <= tolerance < 0.5):
        raise ConfigurationError(
            f"Coincident tolerance must lie in [0, 0.5), got {tolerance}",
            config_key="coincident_tolerance",
            config_value=str(tolerance)
        )

def validate_backend(backend, choices=("native", "scipy")):
    """Validate the banded solver backend name"""
    if backend not in choices:
        raise ConfigurationError(
            f"Backend must be one of {', '.join(choices)}",
            config_key="backend",
            config_value=str(backend)
        )

def validate_degree(degree):
    """Validate a polynomial degree passed to required_data_points"""
    if isinstance(degree, bool) or not isinstance(degree, numbers.Real):
        raise InvalidArgumentError(
            f"degree must be a number, got {type(degree).__name__}",
            argument="degree"
        )

# Export commonly used exceptions for easy import
__all__ = [
    'WhittakerEilersError',
    'InvalidArgumentError',
    'NumericalInstabilityError',
    'ConfigurationError',
    'VisualizationError',
    'validate_smoothing',
    'validate_tolerance',
    'validate_backend',
    'validate_degree',
]
