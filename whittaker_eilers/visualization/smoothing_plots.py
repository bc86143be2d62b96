"""
Whittaker-Eilers Visualization

Plots tabulated knots against the smoothed curve evaluated on a dense grid,
making the effect of the curvature penalty visible.
"""

import logging
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt

from ..api import interpolate_many
from ..core.approximation import SmoothingConfig
from ..exceptions import VisualizationError, WhittakerEilersError
from ..utils.tensor_ops import as_float_array

logger = logging.getLogger(__name__)

def plot_smoothing(x_table, y_table, y_stride: int = 1, channel: int = 0,
                   smoothing: Optional[float] = None, n_points: int = 200,
                   config: Optional[SmoothingConfig] = None,
                   ax: Optional[plt.Axes] = None,
                   save_path: Optional[str] = None) -> plt.Figure:
    """Plot one channel's knots and its smoothed curve

    Args:
        x_table: Knot abscissas
        y_table: Channel-interleaved dependent values
        y_stride: Number of channels
        channel: Channel to draw
        smoothing: Curvature penalty weight (lambda)
        n_points: Number of grid points for the curve
        config: Smoothing configuration
        ax: Existing axes to draw on; a new figure is created if omitted
        save_path: Optional path to save the figure

    Returns:
        Matplotlib figure object
    """
    if not 0 <= channel < y_stride:
        raise VisualizationError(f"channel {channel} out of range for y_stride={y_stride}",
                                 plot_type="smoothing")
    if n_points < 2:
        raise VisualizationError(f"n_points must be >= 2, got {n_points}",
                                 plot_type="smoothing")

    x_arr = as_float_array(x_table, "x_table")
    y_arr = as_float_array(y_table, "y_table")

    try:
        grid = np.linspace(x_arr[0], x_arr[-1], n_points)
        curve = interpolate_many(grid, x_arr, y_arr, y_stride,
                                 smoothing=smoothing, config=config)[:, channel]
    except WhittakerEilersError:
        raise
    except Exception as e:
        raise VisualizationError(str(e), plot_type="smoothing")

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))
    else:
        fig = ax.figure

    label = "smoothed" if smoothing is None else f"smoothed (lambda={smoothing:g})"
    ax.plot(x_arr, y_arr[channel::y_stride], "o", label="knots")
    ax.plot(grid, curve, "-", label=label)
    ax.set_xlabel("x")
    ax.set_ylabel(f"y[{channel}]")
    ax.legend()

    if save_path:
        try:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
        except OSError as e:
            raise VisualizationError(f"could not save to {save_path}: {e}", plot_type="smoothing")
        logger.info(f"Smoothing plot saved to {save_path}")

    return fig
