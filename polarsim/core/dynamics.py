"""
6DOF equations of motion.

Implements the rigid body dynamics in the body frame:
- Translational dynamics, isotropic or with per-axis (apparent) mass
- Rotational dynamics (Euler's equations, full inertia tensor)
- Euler angle and position kinematics

Anisotropic translational form (Lamb/Kirchhoff):

    m_x u_dot = Fx + m_y r v - m_z q w
    m_y v_dot = Fy + m_z p w - m_x r u
    m_z w_dot = Fz + m_x q u - m_y p v

The mismatch between an axis's own mass and the other axes' masses in the
Coriolis terms is what produces the Munk moment on a canopy.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..aero.forces import evaluate_aero_forces
from ..aero.segments import AeroSegment, SegmentControls
from .frames import body_to_inertial_velocity, euler_rates, gravity_body
from .state import SimState, SimStateDerivative


def translational_eom(force: np.ndarray, mass: float, velocity: np.ndarray,
                      omega: np.ndarray) -> np.ndarray:
    """
    Body-frame acceleration, isotropic mass.

    u_dot = Fx/m + r v - q w
    v_dot = Fy/m + p w - r u
    w_dot = Fz/m + q u - p v
    """
    return np.asarray(force, dtype=float) / mass - np.cross(omega, velocity)


def translational_eom_anisotropic(force: np.ndarray, mass_per_axis: np.ndarray,
                                  velocity: np.ndarray, omega: np.ndarray) -> np.ndarray:
    """
    Body-frame acceleration with a different effective mass per axis.

    Parameters:
    -----------
    force : np.ndarray (3,)
        Total body-frame force (N)
    mass_per_axis : np.ndarray (3,)
        [m_x, m_y, m_z] physical plus apparent mass (kg)
    velocity : np.ndarray (3,)
        [u, v, w] (m/s)
    omega : np.ndarray (3,)
        [p, q, r] (rad/s)

    Returns:
    --------
    accel : np.ndarray (3,)
        [u_dot, v_dot, w_dot] (m/s^2)
    """
    Fx, Fy, Fz = force
    mx, my, mz = mass_per_axis
    u, v, w = velocity
    p, q, r = omega

    return np.array([
        (Fx + my * r * v - mz * q * w) / mx,
        (Fy + mz * p * w - mx * r * u) / my,
        (Fz + mx * q * u - my * p * v) / mz,
    ])


def rotational_eom(moment: np.ndarray, inertia: np.ndarray, omega: np.ndarray) -> np.ndarray:
    """
    Angular acceleration from Euler's equation.

    omega_dot = I^-1 (M - omega x (I omega))

    Parameters:
    -----------
    moment : np.ndarray (3,)
        [L, M, N] about the CG (N*m)
    inertia : np.ndarray (3, 3)
        Inertia tensor [[Ixx, -Ixy, -Ixz], [-Ixy, Iyy, -Iyz], [-Ixz, -Iyz, Izz]]
    omega : np.ndarray (3,)
        [p, q, r] (rad/s)
    """
    omega = np.asarray(omega, dtype=float)
    I_omega = inertia @ omega
    return np.linalg.solve(inertia, np.asarray(moment, dtype=float) - np.cross(omega, I_omega))


@dataclass
class SimConfig:
    """
    Everything one derivative evaluation needs besides the state.

    Attributes
    ----------
    segments : list of AeroSegment
    controls : SegmentControls
    cg : np.ndarray (3,)
        System CG, NED body frame (m)
    inertia : np.ndarray (3, 3)
        Inertia tensor about the CG (kg*m^2)
    mass : float
        Physical system mass (kg), used for weight
    height : float
        Reference length for denormalizing segment positions (m)
    rho : float
        Air density (kg/m^3)
    mass_per_axis : np.ndarray (3,), optional
        Effective mass per axis; selects the anisotropic EOM when set
    """
    segments: List[AeroSegment]
    controls: SegmentControls = field(default_factory=SegmentControls)
    cg: np.ndarray = field(default_factory=lambda: np.zeros(3))
    inertia: np.ndarray = field(default_factory=lambda: np.eye(3))
    mass: float = 81.0
    height: float = 1.875
    rho: float = 1.225
    mass_per_axis: Optional[np.ndarray] = None


def compute_derivatives(state: SimState, config: SimConfig,
                        controls: Optional[SegmentControls] = None) -> SimStateDerivative:
    """
    Time derivative of the 12-state vector.

    1. Aero force and moment with omega x r per segment
    2. Gravity in the body frame, added as m * g_B
    3. Translational dynamics (anisotropic when mass_per_axis is set)
    4. Rotational dynamics
    5. Euler kinematics and inertial velocity

    Parameters:
    -----------
    state : SimState
    config : SimConfig
    controls : SegmentControls, optional
        Overrides config.controls for this evaluation

    Returns:
    --------
    deriv : SimStateDerivative
    """
    if controls is None:
        controls = config.controls

    velocity = state.velocity_body
    omega = state.angular_rates

    aero = evaluate_aero_forces(config.segments, config.cg, config.height,
                                velocity, omega, controls, config.rho)

    total_force = aero.force + config.mass * gravity_body(state.phi, state.theta)

    if config.mass_per_axis is not None:
        accel = translational_eom_anisotropic(total_force, config.mass_per_axis, velocity, omega)
    else:
        accel = translational_eom(total_force, config.mass, velocity, omega)

    omega_dot = rotational_eom(aero.moment, config.inertia, omega)
    euler_dot = euler_rates(state.p, state.q, state.r, state.phi, state.theta)
    pos_dot = body_to_inertial_velocity(state.u, state.v, state.w,
                                        state.phi, state.theta, state.psi)

    return SimStateDerivative.from_vector(np.hstack([pos_dot, accel, euler_dot, omega_dot]))

