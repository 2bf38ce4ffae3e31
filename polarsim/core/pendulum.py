"""
Pilot pitch pendulum.

Under a canopy the pilot hangs from the risers and can swing fore and aft
about the riser attachment point. The swing is a damped pendulum:

    I_p theta_p_ddot = tau_gravity + tau_aero - I_p q_dot

    tau_gravity = -m_p g l sin(theta_p - theta_canopy)

where I_p is the pilot inertia about the pivot, l the pivot-to-CG distance
and q_dot the canopy pitch acceleration transmitted through the risers.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .inertia import MassSegment


@dataclass(frozen=True)
class PilotPendulumParams:
    """
    Attributes
    ----------
    pilot_mass : float
        Sum of pilot segment masses (kg)
    Iy_riser : float
        Pitch inertia about the riser pivot (kg*m^2)
    riser_to_cg : float
        Pivot to pilot CG distance (m)
    cg_offset : tuple
        Pilot CG (x, z) relative to the pivot (m)
    """
    pilot_mass: float
    Iy_riser: float
    riser_to_cg: float
    cg_offset: Tuple[float, float]


def _pivot_offset(seg: MassSegment, pivot: Tuple[float, float], height: float) -> Tuple[float, float]:
    x, _, z = seg.position
    return (x - pivot[0]) * height, (z - pivot[1]) * height


def compute_pilot_pendulum_params(pilot_segments: Sequence[MassSegment],
                                  pivot: Tuple[float, float], height: float = 1.875,
                                  total_weight: float = 77.5) -> PilotPendulumParams:
    """
    Pilot inertia about the riser pivot (parallel-axis, x-z plane only).

    Parameters:
    -----------
    pilot_segments : sequence of MassSegment
        Pilot-only points
    pivot : tuple
        (x, z) riser attachment point, normalized NED
    height : float
        Reference length (m)
    total_weight : float
        Mass the ratios refer to (kg)
    """
    pilot_mass = 0.0
    Iy = 0.0
    cg_x = 0.0
    cg_z = 0.0

    for seg in pilot_segments:
        m = seg.mass_ratio * total_weight
        dx, dz = _pivot_offset(seg, pivot, height)
        Iy += m * (dx * dx + dz * dz)
        pilot_mass += m
        cg_x += m * dx
        cg_z += m * dz

    if pilot_mass > 0:
        cg_offset = (cg_x / pilot_mass, cg_z / pilot_mass)
    else:
        cg_offset = (0.0, 0.0)

    return PilotPendulumParams(
        pilot_mass=pilot_mass,
        Iy_riser=Iy,
        riser_to_cg=float(np.hypot(*cg_offset)),
        cg_offset=cg_offset,
    )


def pilot_pendulum_eom(params: PilotPendulumParams, theta_pilot: float, theta_canopy: float,
                       aero_torque: float, q_dot_canopy: float = 0.0,
                       g: float = 9.80665) -> float:
    """
    Pilot swing angular acceleration (rad/s^2).

    Parameters:
    -----------
    params : PilotPendulumParams
    theta_pilot : float
        Pilot pitch angle (rad)
    theta_canopy : float
        Canopy Euler pitch (rad)
    aero_torque : float
        Aerodynamic torque about the pivot (N*m)
    q_dot_canopy : float
        Canopy pitch acceleration (rad/s^2)

    Returns 0 for a degenerate (massless) pilot.
    """
    if params.Iy_riser < 1e-10:
        return 0.0

    tau_gravity = -params.pilot_mass * g * params.riser_to_cg * np.sin(theta_pilot - theta_canopy)
    tau_canopy = -params.Iy_riser * q_dot_canopy
    return float((tau_gravity + aero_torque + tau_canopy) / params.Iy_riser)


def pilot_swing_damping_torque(pilot_segments: Sequence[MassSegment], pivot: Tuple[float, float],
                               theta_dot_pilot: float, rho: float = 1.225,
                               height: float = 1.875, pilot_area: float = 0.55, cd: float = 1.0) -> float:
    """
    Aerodynamic torque opposing the pilot swing (N*m).

    Each pilot point carries frontal area in proportion to its mass ratio
    and sees tangential velocity theta_dot * r:

        dF = -1/2 rho cd A_i v_t |v_t|,   dtau = dF * r
    """
    if abs(theta_dot_pilot) < 1e-10:
        return 0.0

    total_ratio = sum(seg.mass_ratio for seg in pilot_segments)
    if total_ratio <= 0:
        return 0.0

    torque = 0.0
    for seg in pilot_segments:
        dx, dz = _pivot_offset(seg, pivot, height)
        r = np.hypot(dx, dz)
        v_tan = theta_dot_pilot * r
        area = pilot_area * seg.mass_ratio / total_ratio
        torque += -0.5 * rho * cd * area * v_tan * abs(v_tan) * r

    return float(torque)
