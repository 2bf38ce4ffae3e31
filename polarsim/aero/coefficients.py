"""
Coefficient blender for the continuous polar.

Combines the attached-flow and flat-plate sub-models through the
separation function f(alpha), adds sideslip effects, and applies
control-derivative morphing. Valid for alpha in [-180, 180] deg and
beta in [-90, 90] deg.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .polar import ContinuousPolar, apply_all_controls
from .kirchhoff import (
    DEG2RAD,
    separation,
    cl_attached,
    cd_attached,
    cl_plate,
    cd_plate,
    cm_plate,
    cp_plate,
)


G = 9.80665  # m/s^2


@dataclass(frozen=True)
class FullCoefficients:
    """
    Complete coefficient set for one surface at one flow condition.

    Attributes
    ----------
    cl, cd, cy : float
        Lift, drag and side force coefficients (wind axes)
    cm : float
        Pitching moment coefficient about the aerodynamic center
    cn, cl_roll : float
        Yaw and roll moment coefficients from sideslip
    cp : float
        Center of pressure (chord fraction, 0 = leading edge)
    f : float
        Separation function value (1 attached, 0 separated)
    """
    cl: float
    cd: float
    cy: float
    cm: float
    cn: float
    cl_roll: float
    cp: float
    f: float


@dataclass(frozen=True)
class PseudoCoefficients:
    """Pseudo lift/drag coefficients decomposed from a net force."""
    kl: float
    kd: float
    roll: float
    vxs: float
    vys: float
    glide_ratio: float


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


# ─── Individual coefficients (no control morphing) ──────────────────────────

def get_cl(alpha_deg: float, beta_deg: float, polar: ContinuousPolar) -> float:
    """Blended lift coefficient, reduced by cos^2(beta)."""
    f = separation(alpha_deg, polar)
    cl = f * cl_attached(alpha_deg, polar) + (1.0 - f) * cl_plate(alpha_deg, polar.cd_n)
    cos_b = np.cos(beta_deg * DEG2RAD)
    return float(cl * cos_b * cos_b)


def get_cd(alpha_deg: float, beta_deg: float, polar: ContinuousPolar) -> float:
    """Blended drag coefficient with lateral flat-plate drag in sideslip."""
    f = separation(alpha_deg, polar)
    cd = f * cd_attached(alpha_deg, polar) + (1.0 - f) * cd_plate(alpha_deg, polar.cd_n, polar.cd_0)
    b = beta_deg * DEG2RAD
    cos_b = np.cos(b)
    sin_b = np.sin(b)
    return float(cd * cos_b * cos_b + polar.cd_n_lateral * sin_b * sin_b)


def get_cy(beta_deg: float, polar: ContinuousPolar) -> float:
    """Side force coefficient: cy_beta * sin(beta) * cos(beta)."""
    b = beta_deg * DEG2RAD
    return float(polar.cy_beta * np.sin(b) * np.cos(b))


def get_cm(alpha_deg: float, polar: ContinuousPolar) -> float:
    """Blended pitching moment coefficient."""
    f = separation(alpha_deg, polar)
    cm_att = polar.cm_0 + polar.cm_alpha * (alpha_deg - polar.alpha_0) * DEG2RAD
    return float(f * cm_att + (1.0 - f) * cm_plate(alpha_deg))


def get_cp(alpha_deg: float, polar: ContinuousPolar) -> float:
    """Blended center of pressure, clamped to the chord."""
    f = separation(alpha_deg, polar)
    cp_att = _clamp(polar.cp_0 + polar.cp_alpha * (alpha_deg - polar.alpha_0) * DEG2RAD, 0.0, 1.0)
    return _clamp(float(f * cp_att + (1.0 - f) * cp_plate(alpha_deg)), 0.0, 1.0)


# ─── Full bundle ─────────────────────────────────────────────────────────────

def get_all_coefficients(alpha_deg: float, beta_deg: float, delta: float,
                         polar: ContinuousPolar, dirty: float = 0.0) -> FullCoefficients:
    """
    Evaluate every coefficient at once.

    Parameters:
    -----------
    alpha_deg : float
        Angle of attack (deg)
    beta_deg : float
        Sideslip angle (deg)
    delta : float
        Primary control amount (brake, else rear riser, else front riser)
    polar : ContinuousPolar
        Base polar
    dirty : float
        Dirty-flying amount (0..1)

    Returns:
    --------
    coeffs : FullCoefficients
    """
    p = apply_all_controls(polar, delta, dirty)

    f = float(separation(alpha_deg, p))

    cl = f * cl_attached(alpha_deg, p) + (1.0 - f) * cl_plate(alpha_deg, p.cd_n)
    cd = f * cd_attached(alpha_deg, p) + (1.0 - f) * cd_plate(alpha_deg, p.cd_n, p.cd_0)

    b = beta_deg * DEG2RAD
    cos_b = np.cos(b)
    sin_b = np.sin(b)
    cl = cl * cos_b * cos_b
    cd = cd * cos_b * cos_b + p.cd_n_lateral * sin_b * sin_b

    cy = p.cy_beta * sin_b * cos_b

    alpha_rad = (alpha_deg - p.alpha_0) * DEG2RAD
    cm = f * (p.cm_0 + p.cm_alpha * alpha_rad) + (1.0 - f) * cm_plate(alpha_deg)

    cp_att = _clamp(p.cp_0 + p.cp_alpha * alpha_rad, 0.0, 1.0)
    cp = _clamp(float(f * cp_att + (1.0 - f) * cp_plate(alpha_deg)), 0.0, 1.0)

    # Lateral stability terms are not blended by f
    cn = p.cn_beta * sin_b * cos_b
    cl_roll = p.cl_beta * sin_b * cos_b

    return FullCoefficients(
        cl=float(cl),
        cd=float(cd),
        cy=float(cy),
        cm=float(cm),
        cn=float(cn),
        cl_roll=float(cl_roll),
        cp=cp,
        f=f,
    )


# ─── Force conversions ───────────────────────────────────────────────────────

def coeff_to_forces(cl: float, cd: float, cy: float, s: float, m: float,
                    rho: float, v: float) -> dict:
    """
    Convert coefficients to forces (N) at airspeed v.

    Returns:
    --------
    forces : dict
        'lift', 'drag', 'side' (q*S*C) and 'weight' (m*g)
    """
    q = 0.5 * rho * v * v
    return {
        'lift': q * s * cl,
        'drag': q * s * cd,
        'side': q * s * cy,
        'weight': m * G,
    }


def coeff_to_ss(cl: float, cd: float, s: float, m: float, rho: float) -> Tuple[float, float]:
    """
    Sustained (equilibrium glide) speeds from CL and CD.

    At equilibrium the total aerodynamic force balances weight:
        V = sqrt(2 m g / (rho S sqrt(CL^2 + CD^2)))

    Returns:
    --------
    vxs, vys : float
        Horizontal and vertical sustained speeds (m/s)
    """
    ctot = np.sqrt(cl * cl + cd * cd)
    if ctot < 1e-10:
        return 0.0, 0.0
    v = np.sqrt(2.0 * m * G / (rho * s * ctot))
    return float(v * cl / ctot), float(v * cd / ctot)


def net_force_to_pseudo(net_force: np.ndarray, velocity: np.ndarray,
                        mass: float) -> PseudoCoefficients:
    """
    Decompose a net force into pseudo lift/drag coefficients and roll.

    Parameters:
    -----------
    net_force : np.ndarray (3,)
        Total force (aero + weight) in inertial NED (N)
    velocity : np.ndarray (3,)
        Velocity in inertial NED (m/s)
    mass : float
        System mass (kg)

    Returns:
    --------
    pseudo : PseudoCoefficients
        Coefficients normalized by g*v^2 (all zero below 0.01 m/s)
    """
    a = np.asarray(net_force, dtype=float) / mass
    vel = np.asarray(velocity, dtype=float)

    v = np.linalg.norm(vel)
    v_ground = np.hypot(vel[0], vel[1])
    if v < 0.01:
        return PseudoCoefficients(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    # Remove gravity from the down component
    a_aero = np.array([a[0], a[1], a[2] - G])

    # Drag: projection of aero acceleration onto velocity
    a_proj = np.dot(a_aero, vel) / v
    drag = a_proj * vel / v
    drag_mag = np.linalg.norm(drag)
    a_d = -drag_mag if np.dot(drag, vel) > 0 else drag_mag

    # Lift: rejection from velocity
    lift = a_aero - drag
    a_l = np.linalg.norm(lift)

    kl = a_l / (G * v * v)
    kd = a_d / (G * v * v)

    roll = 0.0
    if kl * v_ground * v > 1e-10:
        cos_roll = (1.0 - a[2] / G - kd * v * vel[2]) / (kl * v_ground * v)
        roll = float(np.arccos(_clamp(cos_roll, -1.0, 1.0)))
        if lift[0] * (-vel[1]) + lift[1] * vel[0] < 0:
            roll = -roll

    klkd = kl * kl + kd * kd
    denom = klkd ** 0.75 if klkd > 1e-20 else 1e-10
    glide_ratio = kl / kd if abs(kd) > 1e-10 else 0.0

    return PseudoCoefficients(
        kl=float(kl),
        kd=float(kd),
        roll=roll,
        vxs=float(kl / denom),
        vys=float(kd / denom),
        glide_ratio=float(glide_ratio),
    )
