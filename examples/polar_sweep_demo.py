"""
Polar Sweep Demonstration

Sweeps every registered system polar from -10 to 90 deg, reports the best
glide of each, compares the single-polar Ibex model against its 15-segment
build-up, and writes the charts and CSV tables.
"""

import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import sys
import os

# Add package to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from polarsim.aero.segments import SegmentControls
from polarsim.aero.sweep import save_sweep_csv, sweep_polar, sweep_segments
from polarsim.core.composite_frame import build_composite_frame
from polarsim.vehicles.ibex import ibex_frame_config
from polarsim.vehicles.polars import CONTINUOUS_POLARS, IBEXUL
from polarsim.visualization.plotting import (
    plot_coefficients_vs_alpha,
    plot_drag_polar,
    plot_speed_polar,
    setup_plotting_style,
)


def main():
    output_dir = os.path.join(os.path.dirname(__file__), 'output')
    os.makedirs(output_dir, exist_ok=True)

    print(f"{'Polar':<16} {'best L/D':>9} {'alpha':>7} {'Vxs':>7} {'Vys':>7}")
    print("-" * 50)

    sweeps = []
    for key, polar in CONTINUOUS_POLARS.items():
        df = sweep_polar(polar)
        best = df.loc[df['ld'].idxmax()]
        print(f"{polar.name:<16} {best['ld']:9.2f} {best['alpha']:7.1f} "
              f"{best['vxs']:7.2f} {best['vys']:7.2f}")
        sweeps.append((polar.name, df))
        save_sweep_csv(df, os.path.join(output_dir, f'sweep_{key}.csv'))
    print()

    # Single polar against the segment build-up
    frame = build_composite_frame(ibex_frame_config())
    for brake in (0.0, 0.5, 1.0):
        controls = SegmentControls(brake_left=brake, brake_right=brake)
        df = sweep_segments(frame.aero_segments, IBEXUL, frame.cg, controls,
                            min_alpha=-5.0, max_alpha=40.0)
        best = df.loc[df['ld'].idxmax()]
        print(f"Ibex segments, brakes {brake:.1f}: best L/D {best['ld']:.2f} "
              f"at {best['alpha']:.1f} deg, CP {best['cp']:.2f}")
        sweeps.append((f'Ibex segments ({brake:.1f} brake)', df))

    setup_plotting_style()
    plot_coefficients_vs_alpha(sweeps, columns=('cl', 'cd', 'cm', 'ld'),
                               save_path=os.path.join(output_dir, 'coefficients.png'))
    plot_drag_polar(sweeps, save_path=os.path.join(output_dir, 'drag_polar.png'))
    plot_speed_polar(sweeps[:len(CONTINUOUS_POLARS)],
                     save_path=os.path.join(output_dir, 'speed_polar.png'))
    print(f"Charts saved to: {output_dir}")


if __name__ == "__main__":
    main()
