"""Matplotlib plots of smoothed curves."""

from .smoothing_plots import plot_smoothing

__all__ = ['plot_smoothing']
