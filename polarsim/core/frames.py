"""
Reference-frame algebra.

Frames (all NED: x forward/north, y right/east, z down):
- Inertial frame E (flat earth)
- Body frame B, reached from E by the 3-2-1 Euler sequence (psi, theta, phi)
- Wind frame W, built per segment by aero.forces.compute_wind_frame

Angles are in radians. Euler kinematics are singular at theta = +-90 deg.
"""

import numpy as np


G = 9.80665  # m/s^2


def dcm_body_to_inertial(phi: float, theta: float, psi: float) -> np.ndarray:
    """
    Direction cosine matrix [EB] (body -> inertial), 3-2-1 sequence.

    Parameters:
    -----------
    phi, theta, psi : float
        Roll, pitch and yaw angles (rad)

    Returns:
    --------
    R : np.ndarray, shape (3, 3)
        v_inertial = R @ v_body
    """
    cp, sp = np.cos(phi), np.sin(phi)
    ct, st = np.cos(theta), np.sin(theta)
    cy, sy = np.cos(psi), np.sin(psi)

    return np.array([
        [ct * cy, sp * st * cy - cp * sy, cp * st * cy + sp * sy],
        [ct * sy, sp * st * sy + cp * cy, cp * st * sy - sp * cy],
        [-st, sp * ct, cp * ct],
    ])


def dcm_inertial_to_body(phi: float, theta: float, psi: float) -> np.ndarray:
    """Direction cosine matrix [BE] = [EB]^T (inertial -> body)."""
    return dcm_body_to_inertial(phi, theta, psi).T


def body_to_inertial_velocity(u: float, v: float, w: float,
                              phi: float, theta: float, psi: float) -> np.ndarray:
    """Rotate body-frame velocity into the inertial NED frame."""
    return dcm_body_to_inertial(phi, theta, psi) @ np.array([u, v, w])


def inertial_to_body_velocity(vn: float, ve: float, vd: float,
                              phi: float, theta: float, psi: float) -> np.ndarray:
    """Rotate inertial NED velocity into the body frame."""
    return dcm_inertial_to_body(phi, theta, psi) @ np.array([vn, ve, vd])


def gravity_body(phi: float, theta: float, g: float = G) -> np.ndarray:
    """
    Gravity acceleration in the body frame.

    g_B = [EB]^T [0, 0, g] = g * [-sin(theta), sin(phi)cos(theta), cos(phi)cos(theta)]
    """
    return g * np.array([
        -np.sin(theta),
        np.sin(phi) * np.cos(theta),
        np.cos(phi) * np.cos(theta),
    ])


def euler_rates(p: float, q: float, r: float, phi: float, theta: float) -> np.ndarray:
    """
    Body rates to Euler angle rates (differential kinematic equation).

    Returns:
    --------
    rates : np.ndarray (3,)
        [phi_dot, theta_dot, psi_dot] (rad/s)
    """
    sp, cp = np.sin(phi), np.cos(phi)
    tt = np.tan(theta)
    sec = 1.0 / np.cos(theta)

    return np.array([
        p + sp * tt * q + cp * tt * r,
        cp * q - sp * r,
        sp * sec * q + cp * sec * r,
    ])


def euler_rates_to_body_rates(phi_dot: float, theta_dot: float, psi_dot: float,
                              phi: float, theta: float) -> np.ndarray:
    """
    Inverse of euler_rates.

    p =  phi_dot             - psi_dot sin(theta)
    q =  theta_dot cos(phi)  + psi_dot sin(phi) cos(theta)
    r = -theta_dot sin(phi)  + psi_dot cos(phi) cos(theta)
    """
    sp, cp = np.sin(phi), np.cos(phi)
    st, ct = np.sin(theta), np.cos(theta)

    return np.array([
        phi_dot - psi_dot * st,
        theta_dot * cp + psi_dot * sp * ct,
        -theta_dot * sp + psi_dot * cp * ct,
    ])


def rotating_frame_derivative(vec_dot_body: np.ndarray, omega: np.ndarray,
                              vec: np.ndarray) -> np.ndarray:
    """
    Inertial time derivative of a vector expressed in a rotating frame.

    (dA/dt)_E = (dA/dt)_B + omega x A
    """
    return np.asarray(vec_dot_body, dtype=float) + np.cross(omega, vec)
