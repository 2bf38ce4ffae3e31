"""
Visualization Tests

Tests for polar charts and trajectory plots.
"""

import pytest
import numpy as np
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for testing
import matplotlib.pyplot as plt

from polarsim.aero.sweep import sweep_polar
from polarsim.simulation.runner import history_to_dataframe
from polarsim.vehicles.polars import AURAFIVE, IBEXUL
from polarsim.visualization.plotting import (
    plot_coefficients_vs_alpha,
    plot_drag_polar,
    plot_speed_polar,
    plot_trajectory,
)


@pytest.fixture(scope='module')
def sweeps():
    return [
        ('Aura 5', sweep_polar(AURAFIVE, -10.0, 60.0, 2.0)),
        ('Ibex UL', sweep_polar(IBEXUL, -10.0, 60.0, 2.0)),
    ]


class TestPolarCharts:
    """Test sweep plotting."""

    def test_coefficients(self, sweeps):
        fig = plot_coefficients_vs_alpha(sweeps)
        visible = [ax for ax in fig.axes if ax.get_visible()]
        assert len(visible) == 4
        assert len(visible[0].lines) >= 2
        plt.close(fig)

    def test_odd_column_count_hides_spare_axis(self, sweeps):
        fig = plot_coefficients_vs_alpha(sweeps, columns=('cl', 'cd', 'cp'))
        assert len([ax for ax in fig.axes if ax.get_visible()]) == 3
        plt.close(fig)

    def test_unknown_column(self, sweeps):
        with pytest.raises(ValueError):
            plot_coefficients_vs_alpha(sweeps, columns=('cl', 'lift'))

    def test_drag_polar_save(self, sweeps, tmp_path):
        path = tmp_path / 'polar.png'
        fig = plot_drag_polar(sweeps, save_path=str(path))
        assert path.exists() and path.stat().st_size > 0
        plt.close(fig)

    def test_speed_polar(self, sweeps):
        fig = plot_speed_polar(sweeps)
        assert fig.axes[0].yaxis_inverted()
        plt.close(fig)


class TestTrajectoryPlot:
    """Test trajectory plotting."""

    def test_plot_trajectory(self):
        t = np.linspace(0.0, 5.0, 51)
        history = np.zeros((51, 12))
        history[:, 0] = 11.0 * t
        history[:, 2] = -1000.0 + 2.0 * t
        history[:, 3] = 11.0
        history[:, 5] = 2.0
        fig = plot_trajectory(history_to_dataframe(t, history))
        assert len(fig.axes) == 4
        plt.close(fig)
