"""
Visualization Module

Polar charts for alpha sweeps and trajectory plots for simulation output.
"""

from .plotting import (
    plot_coefficients_vs_alpha,
    plot_drag_polar,
    plot_speed_polar,
    plot_trajectory,
    setup_plotting_style
)

__all__ = [
    'plot_coefficients_vs_alpha',
    'plot_drag_polar',
    'plot_speed_polar',
    'plot_trajectory',
    'setup_plotting_style'
]
