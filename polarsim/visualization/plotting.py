"""
Polar and Trajectory Plotting

Matplotlib figures for alpha sweeps (coefficient curves, the CL-CD polar
and the sustained speed polar) and for simulated trajectories.

Sweep plots take the DataFrame returned by sweep_polar/sweep_segments;
trajectory plots take the DataFrame from history_to_dataframe.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from typing import Optional, Sequence, Tuple

import pandas as pd


COEFFICIENT_LABELS = {
    'cl': ('Lift Coefficient', 'CL'),
    'cd': ('Drag Coefficient', 'CD'),
    'cm': ('Pitching Moment', 'CM'),
    'cp': ('Center of Pressure', 'CP (chord fraction)'),
    'ld': ('Glide Ratio', 'L/D'),
    'f': ('Flow Separation', 'f'),
}


def _finish(fig: Figure, save_path: Optional[str]) -> Figure:
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
    return fig


def plot_coefficients_vs_alpha(
    sweeps: Sequence[Tuple[str, pd.DataFrame]],
    columns: Sequence[str] = ('cl', 'cd', 'cm', 'ld'),
    title: str = "Aerodynamic Coefficients",
    figsize: Tuple[float, float] = (12, 8),
    save_path: Optional[str] = None
) -> Figure:
    """
    Plot coefficient curves against angle of attack.

    Parameters
    ----------
    sweeps : sequence of (label, DataFrame)
        One sweep per curve, all sharing the sweep column names
    columns : sequence of str
        Coefficients to plot, one subplot each (keys of COEFFICIENT_LABELS)
    title : str, optional
        Main plot title
    figsize : Tuple[float, float], optional
        Figure size in inches
    save_path : Optional[str], optional
        Path to save figure

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    unknown = [c for c in columns if c not in COEFFICIENT_LABELS]
    if unknown:
        raise ValueError(f"Unknown coefficient columns: {unknown}")

    n = len(columns)
    n_cols = 2 if n > 1 else 1
    n_rows = int(np.ceil(n / n_cols))
    fig, axes = plt.subplots(n_rows, n_cols, figsize=figsize, squeeze=False)
    flat = axes.ravel()

    for ax, column in zip(flat, columns):
        subplot_title, y_label = COEFFICIENT_LABELS[column]
        for label, df in sweeps:
            ax.plot(df['alpha'], df[column], linewidth=1.5, label=label)
        ax.axvline(0.0, color='k', linewidth=0.5, alpha=0.5)
        ax.set_xlabel('Alpha (deg)', fontsize=11)
        ax.set_ylabel(y_label, fontsize=11)
        ax.set_title(subplot_title, fontsize=11, fontweight='bold')
        ax.grid(True, alpha=0.3)
        if len(sweeps) > 1:
            ax.legend(loc='best')

    for ax in flat[n:]:
        ax.set_visible(False)

    fig.suptitle(title, fontsize=13, fontweight='bold')
    return _finish(fig, save_path)


def plot_drag_polar(
    sweeps: Sequence[Tuple[str, pd.DataFrame]],
    title: str = "Polar Curve",
    figsize: Tuple[float, float] = (8, 7),
    save_path: Optional[str] = None
) -> Figure:
    """
    CL against CD, colored by angle of attack.

    The best-glide tangent point (max L/D) is marked for each sweep.
    """
    fig, ax = plt.subplots(figsize=figsize)

    for label, df in sweeps:
        ax.plot(df['cd'], df['cl'], linewidth=1.0, alpha=0.6, label=label)
        sc = ax.scatter(df['cd'], df['cl'], c=df['alpha'], cmap='viridis', s=8)

        best = df.loc[df['ld'].idxmax()]
        ax.plot([0.0, best['cd']], [0.0, best['cl']], 'k--', linewidth=0.8)
        ax.scatter([best['cd']], [best['cl']], c='r', marker='o', s=60, edgecolors='k', zorder=5)
        ax.annotate(f"L/D {best['ld']:.2f} @ {best['alpha']:.1f} deg",
                    (best['cd'], best['cl']), textcoords='offset points', xytext=(8, -12), fontsize=9)

    if sweeps:
        fig.colorbar(sc, ax=ax, label='Alpha (deg)')

    ax.set_xlabel('CD', fontsize=11)
    ax.set_ylabel('CL', fontsize=11)
    ax.set_title(title, fontsize=13, fontweight='bold')
    ax.grid(True, alpha=0.3)
    if len(sweeps) > 1:
        ax.legend(loc='best')

    return _finish(fig, save_path)


def plot_speed_polar(
    sweeps: Sequence[Tuple[str, pd.DataFrame]],
    title: str = "Speed Polar",
    figsize: Tuple[float, float] = (8, 7),
    save_path: Optional[str] = None
) -> Figure:
    """
    Sustained horizontal speed against sustained sink rate.

    Sink rate is drawn positive downward, the way the speed polar of a
    glider is usually read.
    """
    fig, ax = plt.subplots(figsize=figsize)

    for label, df in sweeps:
        ax.plot(df['vxs'], df['vys'], linewidth=1.5, label=label)

    ax.invert_yaxis()
    ax.set_xlabel('Vxs (m/s)', fontsize=11)
    ax.set_ylabel('Vys (m/s)', fontsize=11)
    ax.set_title(title, fontsize=13, fontweight='bold')
    ax.grid(True, alpha=0.3)
    ax.legend(loc='best')

    return _finish(fig, save_path)


def plot_trajectory(
    df: pd.DataFrame,
    title: str = "Flight Trajectory",
    figsize: Tuple[float, float] = (12, 10),
    save_path: Optional[str] = None
) -> Figure:
    """
    Plot a simulated trajectory.

    Parameters
    ----------
    df : pd.DataFrame
        Trajectory table (time, the 12 states, airspeed, altitude)
    title : str, optional
        Main plot title
    figsize : Tuple[float, float], optional
        Figure size in inches
    save_path : Optional[str], optional
        Path to save figure

    Returns
    -------
    Figure
        Matplotlib figure object
    """
    fig, axes = plt.subplots(2, 2, figsize=figsize)
    t = df['time']

    # Side view: altitude against ground distance
    ground = np.hypot(df['x'] - df['x'].iloc[0], df['y'] - df['y'].iloc[0])
    axes[0, 0].plot(ground, df['altitude'], 'b-', linewidth=1.5)
    axes[0, 0].set_xlabel('Distance (m)', fontsize=11)
    axes[0, 0].set_ylabel('Altitude (m)', fontsize=11)
    axes[0, 0].set_title('Glide Path', fontsize=11, fontweight='bold')

    axes[0, 1].plot(t, df['airspeed'], 'k-', label='Airspeed', linewidth=1.5)
    axes[0, 1].plot(t, df['u'], 'r-', label='u', linewidth=1.0)
    axes[0, 1].plot(t, df['w'], 'b-', label='w', linewidth=1.0)
    axes[0, 1].set_ylabel('Velocity (m/s)', fontsize=11)
    axes[0, 1].set_title('Velocity', fontsize=11, fontweight='bold')
    axes[0, 1].legend(loc='best', ncol=3)

    axes[1, 0].plot(t, np.degrees(df['phi']), 'r-', label='Roll', linewidth=1.5)
    axes[1, 0].plot(t, np.degrees(df['theta']), 'g-', label='Pitch', linewidth=1.5)
    axes[1, 0].plot(t, np.degrees(df['psi']), 'b-', label='Yaw', linewidth=1.5)
    axes[1, 0].set_ylabel('Angle (deg)', fontsize=11)
    axes[1, 0].set_title('Euler Angles', fontsize=11, fontweight='bold')
    axes[1, 0].legend(loc='best', ncol=3)

    axes[1, 1].plot(t, np.degrees(df['p']), 'r-', label='p', linewidth=1.5)
    axes[1, 1].plot(t, np.degrees(df['q']), 'g-', label='q', linewidth=1.5)
    axes[1, 1].plot(t, np.degrees(df['r']), 'b-', label='r', linewidth=1.5)
    axes[1, 1].set_ylabel('Rate (deg/s)', fontsize=11)
    axes[1, 1].set_title('Angular Rates', fontsize=11, fontweight='bold')
    axes[1, 1].legend(loc='best', ncol=3)

    for ax in (axes[0, 1], axes[1, 0], axes[1, 1]):
        ax.set_xlabel('Time (s)', fontsize=11)
    for ax in axes.ravel():
        ax.grid(True, alpha=0.3)

    fig.suptitle(title, fontsize=13, fontweight='bold')
    return _finish(fig, save_path)


def setup_plotting_style():
    """
    Set up default matplotlib plotting style for consistent appearance.

    Call this function once at the start of your script for consistent styling.
    """
    plt.style.use('seaborn-v0_8-darkgrid')
    plt.rcParams['figure.facecolor'] = 'white'
    plt.rcParams['axes.facecolor'] = 'white'
    plt.rcParams['axes.grid'] = True
    plt.rcParams['grid.alpha'] = 0.3
    plt.rcParams['font.size'] = 10
    plt.rcParams['lines.linewidth'] = 1.5
