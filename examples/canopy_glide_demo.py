"""
Canopy Glide Demonstration

Loads the Ibex UL glide configuration from YAML, finds the steady glide,
flies 20 seconds from the configured initial state and plots the
trajectory.
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import sys
import os

# Add package to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from polarsim.io.config import load_simulation_config
from polarsim.simulation.runner import SimulationRunner, history_to_dataframe
from polarsim.simulation.trim import find_glide_trim
from polarsim.visualization.plotting import plot_trajectory, setup_plotting_style


def main():
    print("=" * 60)
    print("Canopy Glide - Ibex UL")
    print("=" * 60)
    print()

    config_path = os.path.join(os.path.dirname(__file__), '..', 'config', 'ibex_glide.yaml')
    config = load_simulation_config(config_path)
    print(f"Loaded: {config}")
    print()

    runner = SimulationRunner.from_config(config)

    print("Steady glide:")
    find_glide_trim(runner.sim_config(), airspeed_guess=11.0, verbose=True)
    print()

    state0 = config.create_initial_state()
    print("Initial state:")
    print(state0)
    print()

    t, history = runner.run(state0, config.duration)
    df = history_to_dataframe(t, history)

    final = df.iloc[-1]
    dist = np.hypot(final['x'] - df['x'].iloc[0], final['y'] - df['y'].iloc[0])
    lost = df['altitude'].iloc[0] - final['altitude']
    print(f"Flew {final['time']:.1f} s: {dist:.1f} m forward, {lost:.1f} m lost "
          f"(L/D {dist / max(lost, 1e-6):.2f})")
    print(f"Frame rebuilds: {runner.rebuild_count}")

    output_dir = os.path.join(os.path.dirname(__file__), 'output')
    os.makedirs(output_dir, exist_ok=True)

    setup_plotting_style()
    plot_trajectory(df, title="Ibex UL Glide",
                    save_path=os.path.join(output_dir, 'canopy_glide.png'))
    df.to_csv(os.path.join(output_dir, 'canopy_glide.csv'), index=False)
    print(f"Results saved to: {output_dir}")


if __name__ == "__main__":
    main()
