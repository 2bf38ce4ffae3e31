"""
Brake Turn Demonstration

Glides the Ibex UL hands-up, pulls the left brake after 3 seconds and
releases it after 8. Per-segment omega x r flow gives the turn its roll
and yaw damping; the heading change and bank angle are reported each
second.
"""

import numpy as np
import sys
import os

# Add package to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from polarsim.aero.segments import SegmentControls
from polarsim.core.integrator import RK4Integrator
from polarsim.core.state import SimState
from polarsim.simulation.runner import SimulationRunner, history_to_dataframe
from polarsim.vehicles.ibex import ibex_frame_config


def brake_schedule(t, state):
    if 3.0 <= t < 8.0:
        return SegmentControls(brake_left=0.6)
    return SegmentControls()


def main():
    print("=" * 60)
    print("Left Brake Turn - Ibex UL")
    print("=" * 60)
    print()

    runner = SimulationRunner(ibex_frame_config(), integrator=RK4Integrator(dt=0.01))
    state0 = SimState(z=-800.0, u=11.5, w=1.6, theta=np.radians(-5.0))

    t, history = runner.run(state0, 12.0, schedule=brake_schedule)
    df = history_to_dataframe(t, history)

    print(f"{'t (s)':>6} {'V (m/s)':>8} {'bank':>7} {'heading':>8} {'r (deg/s)':>10}")
    for _, row in df.iloc[::100].iterrows():
        print(f"{row['time']:6.1f} {row['airspeed']:8.2f} {np.degrees(row['phi']):7.1f} "
              f"{np.degrees(row['psi']):8.1f} {np.degrees(row['r']):10.2f}")

    print()
    print(f"Heading change: {np.degrees(df['psi'].iloc[-1] - df['psi'].iloc[0]):.1f} deg")


if __name__ == "__main__":
    main()
