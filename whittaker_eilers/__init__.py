"""Whittaker-Eilers smoothing and interpolation of tabulated samples."""
__version__="1.0.0"

from .core.approximation import (
    WhittakerEilersApproximation,
    SmoothingConfig,
    locate_insertion,
)
from .api import required_data_points, interpolate, interpolate_many, smooth
from .exceptions import (
    WhittakerEilersError,
    InvalidArgumentError,
    NumericalInstabilityError,
    ConfigurationError,
    VisualizationError,
)
from .utils.logging import setup_logging
