"""
Angle-of-attack sweeps.

sweep_polar evaluates one lumped polar over an alpha range; sweep_segments
sums per-segment forces at each alpha and projects the total back onto the
wind frame, giving pseudo coefficients comparable to the lumped polar.
Both return a pandas DataFrame with one row per alpha.
"""

from typing import Optional

import numpy as np
import pandas as pd

from .coefficients import coeff_to_ss, get_all_coefficients
from .forces import compute_segment_force, compute_wind_frame, sum_all_segments
from .polar import ContinuousPolar
from .segments import SegmentControls


SWEEP_COLUMNS = ['alpha', 'cl', 'cd', 'cy', 'cm', 'cp', 'f', 'cn', 'cl_roll', 'ld', 'vxs', 'vys']

# Normal-force coefficient below which the system CP falls back to the CG
MIN_NORMAL_FORCE = 0.02


def alpha_range(min_alpha: float = -10.0, max_alpha: float = 90.0, step: float = 0.5) -> np.ndarray:
    """Inclusive alpha grid (deg)."""
    n = int(np.floor((max_alpha - min_alpha) / step + 1e-9)) + 1
    return min_alpha + step * np.arange(n)


def _glide_ratio(cl: float, cd: float) -> float:
    return cl / cd if cd > 0.001 else 0.0


def sweep_polar(polar: ContinuousPolar, min_alpha: float = -10.0, max_alpha: float = 90.0,
                step: float = 0.5, beta_deg: float = 0.0, delta: float = 0.0,
                dirty: float = 0.0, rho: float = 1.095) -> pd.DataFrame:
    """
    Sweep a lumped polar over alpha.

    Parameters:
    -----------
    polar : ContinuousPolar
    min_alpha, max_alpha, step : float
        Alpha grid (deg)
    beta_deg : float
        Sideslip (deg)
    delta, dirty : float
        Control amounts passed to the coefficient blender
    rho : float
        Density used for the sustained speeds (kg/m^3)

    Returns:
    --------
    df : pd.DataFrame
        One row per alpha with coefficients, L/D and sustained speeds
    """
    rows = []
    for alpha in alpha_range(min_alpha, max_alpha, step):
        c = get_all_coefficients(alpha, beta_deg, delta, polar, dirty)
        vxs, vys = coeff_to_ss(c.cl, c.cd, polar.s, polar.m, rho)
        rows.append({
            'alpha': float(alpha),
            'cl': c.cl,
            'cd': c.cd,
            'cy': c.cy,
            'cm': c.cm,
            'cp': c.cp,
            'f': c.f,
            'cn': c.cn,
            'cl_roll': c.cl_roll,
            'ld': _glide_ratio(c.cl, c.cd),
            'vxs': vxs,
            'vys': vys,
        })
    return pd.DataFrame(rows, columns=SWEEP_COLUMNS)


def sweep_segments(segments, polar: ContinuousPolar, cg: np.ndarray,
                   controls: Optional[SegmentControls] = None,
                   min_alpha: float = -10.0, max_alpha: float = 90.0, step: float = 0.5,
                   beta_deg: float = 0.0, rho: float = 1.095,
                   airspeed: float = 45.0) -> pd.DataFrame:
    """
    Sweep a segmented vehicle over alpha.

    The summed force is projected onto the lift, wind and side axes and
    normalized by q * polar.s; moments by q * polar.s * polar.chord. The
    system CP follows from the pitch moment and the normal force:

        CN = CL cos(alpha) + CD sin(alpha)
        cp = clamp(cg - cm / CN, 0, 1)

    and falls back to polar.cg when |CN| is small.

    Parameters:
    -----------
    segments : sequence of AeroSegment
    polar : ContinuousPolar
        System polar supplying reference area, chord, mass and cg
    cg : np.ndarray (3,)
        System CG in meters (NED body frame)
    controls : SegmentControls, optional
    airspeed : float
        Airspeed for the force evaluation (m/s)
    """
    if controls is None:
        controls = SegmentControls()
    cg = np.asarray(cg, dtype=float)

    q = 0.5 * rho * airspeed * airspeed
    qS = q * polar.s
    qSc = qS * polar.chord

    rows = []
    for alpha in alpha_range(min_alpha, max_alpha, step):
        forces = [compute_segment_force(seg, alpha, beta_deg, controls, rho, airspeed)
                  for seg in segments]
        frame = compute_wind_frame(alpha, beta_deg)
        system = sum_all_segments(segments, forces, cg, polar.reference_length, frame, controls)

        if qS > 1e-10:
            cl = float(np.dot(frame.lift, system.force)) / qS
            cd = -float(np.dot(frame.wind, system.force)) / qS
            cy = float(np.dot(frame.side, system.force)) / qS
        else:
            cl = cd = cy = 0.0

        if qSc > 1e-10:
            cl_roll, cm, cn = (float(v) for v in system.moment / qSc)
        else:
            cl_roll = cm = cn = 0.0

        a = np.radians(alpha)
        cn_force = cl * np.cos(a) + cd * np.sin(a)
        if abs(cn_force) > MIN_NORMAL_FORCE:
            cp = float(np.clip(polar.cg - cm / cn_force, 0.0, 1.0))
        else:
            cp = polar.cg

        vxs, vys = coeff_to_ss(cl, cd, polar.s, polar.m, rho)
        rows.append({
            'alpha': float(alpha),
            'cl': cl,
            'cd': cd,
            'cy': cy,
            'cm': cm,
            'cp': cp,
            'f': 0.0,
            'cn': cn,
            'cl_roll': cl_roll,
            'ld': _glide_ratio(cl, cd),
            'vxs': vxs,
            'vys': vys,
        })
    return pd.DataFrame(rows, columns=SWEEP_COLUMNS)


def save_sweep_csv(df: pd.DataFrame, filename: str):
    """Write a sweep table to CSV."""
    df.to_csv(filename, index=False)
    print(f"Saved sweep ({len(df)} points) to: {filename}")


if __name__ == "__main__":
    from ..vehicles.polars import AURAFIVE

    df = sweep_polar(AURAFIVE, -10, 40, 5)
    print(df[['alpha', 'cl', 'cd', 'ld', 'vxs', 'vys']].to_string(index=False))
    best = df.loc[df['ld'].idxmax()]
    print(f"\nBest glide: L/D = {best['ld']:.2f} at alpha = {best['alpha']:.1f} deg")
