"""
Segment force evaluation and system summation.

Each segment sees its own local freestream:

    V_local = V_cg + omega x r

so rotation produces roll, pitch and yaw damping directly from the
geometry. Forces are resolved in the local wind frame, then the moment is
taken about the system CG at the segment's center of pressure:

    F_total = sum F_i
    M_total = sum (r_cp,i x F_i) + sum M_0,i

With omega = 0 every segment sees the same alpha and beta, and the
result matches the static path (sum_all_segments).
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .segments import (
    AeroSegment,
    SegmentControls,
    SegmentGeometry,
    segment_geometry,
    segment_coefficients,
)


DEG2RAD = np.pi / 180.0
RAD2DEG = 180.0 / np.pi

# Airspeed below which local alpha/beta are reported as zero
MIN_AIRSPEED = 1e-6


@dataclass(frozen=True)
class WindFrame:
    """
    Aerodynamic direction vectors in the body NED frame.

    wind : direction of travel through the air (drag acts along -wind)
    lift : perpendicular to wind, "up" in the vertical plane
    side : wind x lift
    """
    wind: np.ndarray
    lift: np.ndarray
    side: np.ndarray


@dataclass(frozen=True)
class SegmentForce:
    """Force magnitudes (N), intrinsic pitching moment (N*m) and CP fraction."""
    lift: float
    drag: float
    side: float
    moment: float
    cp: float


@dataclass(frozen=True)
class SegmentAeroResult:
    """Per-segment breakdown from the omega x r evaluation."""
    name: str
    forces: SegmentForce
    local_velocity: np.ndarray
    local_airspeed: float
    local_alpha: float
    local_beta: float
    position_meters: np.ndarray


@dataclass(frozen=True)
class SystemForces:
    """Total aerodynamic force (N) and moment about the CG (N*m), body NED."""
    force: np.ndarray
    moment: np.ndarray


def compute_wind_frame(alpha_deg: float, beta_deg: float) -> WindFrame:
    """
    Wind, lift and side directions for a given alpha and beta.

    At alpha = beta = 0 the wind axis is +x. Positive alpha tilts it toward
    +z, positive beta toward +y.
    """
    a = alpha_deg * DEG2RAD
    b = beta_deg * DEG2RAD

    wind = np.array([np.cos(b) * np.cos(a), np.sin(b) * np.cos(a), np.sin(a)])

    # Horizontal vector perpendicular to the wind; lift = temp x wind
    temp = np.array([-np.sin(b) * np.cos(a), np.cos(b) * np.cos(a), 0.0])
    lift = np.cross(temp, wind)
    norm = np.linalg.norm(lift)
    if norm > 1e-10:
        lift = lift / norm
    else:
        # alpha = +-90: lift points forward
        lift = np.array([-1.0, 0.0, 0.0])

    side = np.cross(wind, lift)
    return WindFrame(wind=wind, lift=lift, side=side)


def compute_segment_force(segment: AeroSegment, alpha_deg: float, beta_deg: float,
                          controls: SegmentControls, rho: float,
                          airspeed: float) -> SegmentForce:
    """
    Force magnitudes for one segment at local flow conditions.

    Parameters:
    -----------
    segment : AeroSegment
    alpha_deg, beta_deg : float
        Local flow angles (deg)
    controls : SegmentControls
    rho : float
        Air density (kg/m^3)
    airspeed : float
        Local airspeed (m/s)

    Returns:
    --------
    force : SegmentForce
    """
    geom = segment_geometry(segment, controls)
    c = segment_coefficients(segment, alpha_deg, beta_deg, controls)
    qS = 0.5 * rho * airspeed * airspeed * geom.S
    return SegmentForce(
        lift=qS * c.cl,
        drag=qS * c.cd,
        side=qS * c.cy,
        moment=qS * geom.chord * c.cm,
        cp=c.cp,
    )


def force_vector(force: SegmentForce, frame: WindFrame) -> np.ndarray:
    """Resolve lift, drag and side magnitudes into a body NED vector."""
    return frame.lift * force.lift - frame.wind * force.drag + frame.side * force.side


def cp_position_meters(geom: SegmentGeometry, cp: float, height: float) -> np.ndarray:
    """
    Center of pressure in meters.

    The CP sits along the chord line, offset from the quarter chord. At zero
    pitch offset the chord runs along -x (leading edge forward); at 90 deg
    it runs along +z (upright pilot, head up). Pilot pitch rotates the
    chord line rigidly.
    """
    offset = -(cp - 0.25) * geom.chord / height
    base = -geom.pitch_offset_deg * DEG2RAD
    off_x = offset * np.cos(base)
    off_z = offset * np.sin(base)

    rot = geom.chord_rotation_rad
    if abs(rot) > 1e-6:
        c, s = np.cos(rot), np.sin(rot)
        off_x, off_z = off_x * c - off_z * s, off_x * s + off_z * c

    pos = geom.position
    return np.array([
        (pos[0] + off_x) * height,
        pos[1] * height,
        (pos[2] + off_z) * height,
    ])


def sum_all_segments(segments: Sequence[AeroSegment], forces: Sequence[SegmentForce],
                     cg_meters: np.ndarray, height: float, frame: WindFrame,
                     controls: SegmentControls) -> SystemForces:
    """
    Sum segment forces and moments about the CG under one shared wind frame.

    Parameters:
    -----------
    segments : sequence of AeroSegment
    forces : sequence of SegmentForce
        Matching per-segment force results
    cg_meters : np.ndarray (3,)
        System CG, NED body frame (m)
    height : float
        Reference length for denormalizing positions (m)
    frame : WindFrame
        Freestream wind frame
    controls : SegmentControls
        Control state the forces were computed at

    Returns:
    --------
    total : SystemForces
    """
    cg = np.asarray(cg_meters, dtype=float)
    total_force = np.zeros(3)
    total_moment = np.zeros(3)

    for seg, f in zip(segments, forces):
        geom = segment_geometry(seg, controls)
        F = force_vector(f, frame)
        r_cp = cp_position_meters(geom, f.cp, height) - cg

        total_force += F
        total_moment += np.cross(r_cp, F)
        total_moment[1] += f.moment

    return SystemForces(force=total_force, moment=total_moment)


def evaluate_static(segments: Sequence[AeroSegment], alpha_deg: float, beta_deg: float,
                    controls: SegmentControls, cg_meters: np.ndarray, height: float,
                    rho: float, airspeed: float) -> SystemForces:
    """Static path: every segment at the freestream alpha/beta and airspeed."""
    forces = [compute_segment_force(seg, alpha_deg, beta_deg, controls, rho, airspeed)
              for seg in segments]
    frame = compute_wind_frame(alpha_deg, beta_deg)
    return sum_all_segments(segments, forces, cg_meters, height, frame, controls)


def local_flow(body_velocity: np.ndarray, omega: np.ndarray,
               r: np.ndarray) -> Tuple[np.ndarray, float, float, float]:
    """
    Local velocity, airspeed, alpha and beta (deg) at lever arm r.

    Returns:
    --------
    v_local : np.ndarray (3,)
    airspeed : float
    alpha_deg, beta_deg : float
        Zero when the airspeed is below MIN_AIRSPEED
    """
    v_local = np.asarray(body_velocity, dtype=float) + np.cross(omega, r)
    airspeed = float(np.linalg.norm(v_local))
    if airspeed > MIN_AIRSPEED:
        alpha = float(np.arctan2(v_local[2], v_local[0]) * RAD2DEG)
        beta = float(np.arcsin(np.clip(v_local[1] / airspeed, -1.0, 1.0)) * RAD2DEG)
    else:
        alpha = 0.0
        beta = 0.0
    return v_local, airspeed, alpha, beta


def evaluate_aero_forces_detailed(segments: Sequence[AeroSegment], cg_meters: np.ndarray,
                                  height: float, body_velocity: np.ndarray,
                                  omega: np.ndarray, controls: SegmentControls,
                                  rho: float) -> Tuple[SystemForces, List[SegmentAeroResult]]:
    """
    Aerodynamic forces with per-segment omega x r correction.

    Parameters:
    -----------
    segments : sequence of AeroSegment
    cg_meters : np.ndarray (3,)
        System CG, NED body frame (m)
    height : float
        Reference length (m)
    body_velocity : np.ndarray (3,)
        CG velocity [u, v, w] in body frame (m/s)
    omega : np.ndarray (3,)
        Body rates [p, q, r] (rad/s)
    controls : SegmentControls
    rho : float
        Air density (kg/m^3)

    Returns:
    --------
    total : SystemForces
    per_segment : list of SegmentAeroResult
    """
    cg = np.asarray(cg_meters, dtype=float)
    omega = np.asarray(omega, dtype=float)

    total_force = np.zeros(3)
    total_moment = np.zeros(3)
    per_segment = []

    for seg in segments:
        # Geometry first so the lever arm reflects the current control state
        geom = segment_geometry(seg, controls)
        pos_m = geom.position * height
        v_local, airspeed, alpha, beta = local_flow(body_velocity, omega, pos_m - cg)

        c = segment_coefficients(seg, alpha, beta, controls)
        qS = 0.5 * rho * airspeed * airspeed * geom.S
        f = SegmentForce(
            lift=qS * c.cl,
            drag=qS * c.cd,
            side=qS * c.cy,
            moment=qS * geom.chord * c.cm,
            cp=c.cp,
        )

        F = force_vector(f, compute_wind_frame(alpha, beta))
        r_cp = cp_position_meters(geom, f.cp, height) - cg

        total_force += F
        total_moment += np.cross(r_cp, F)
        total_moment[1] += f.moment

        per_segment.append(SegmentAeroResult(
            name=seg.name,
            forces=f,
            local_velocity=v_local,
            local_airspeed=airspeed,
            local_alpha=alpha,
            local_beta=beta,
            position_meters=pos_m,
        ))

    return SystemForces(force=total_force, moment=total_moment), per_segment


def evaluate_aero_forces(segments: Sequence[AeroSegment], cg_meters: np.ndarray,
                         height: float, body_velocity: np.ndarray, omega: np.ndarray,
                         controls: SegmentControls, rho: float) -> SystemForces:
    """System totals only (see evaluate_aero_forces_detailed)."""
    total, _ = evaluate_aero_forces_detailed(segments, cg_meters, height, body_velocity,
                                             omega, controls, rho)
    return total
