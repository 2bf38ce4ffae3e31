"""
Glide Trim Calculation

Finds the steady straight glide of an unpowered vehicle: the angle of
attack, pitch attitude and airspeed at which the body-axis accelerations
and the pitch acceleration all vanish.
"""

from typing import Dict, Optional, Tuple

import numpy as np
from scipy.optimize import least_squares

from ..aero.segments import SegmentControls
from ..core.dynamics import SimConfig, compute_derivatives
from ..core.state import SimState


def glide_state(alpha: float, theta: float, airspeed: float, altitude: float = 0.0) -> SimState:
    """
    Wings-level state at a given alpha (rad), pitch (rad) and airspeed (m/s).
    """
    state = SimState()
    state.z = -altitude
    state.u = airspeed * np.cos(alpha)
    state.w = airspeed * np.sin(alpha)
    state.theta = theta
    return state


def find_glide_trim(config: SimConfig, controls: Optional[SegmentControls] = None,
                    airspeed_guess: float = 10.0, alpha_guess_deg: float = 8.0,
                    theta_guess_deg: Optional[float] = None,
                    verbose: bool = False) -> Tuple[SimState, Dict]:
    """
    Find the steady glide for a configured vehicle.

    Parameters
    ----------
    config : SimConfig
        Vehicle configuration (segments, mass, inertia, CG)
    controls : SegmentControls, optional
        Held fixed during the solve (defaults to config.controls)
    airspeed_guess : float
        Initial airspeed guess (m/s)
    alpha_guess_deg : float
        Initial angle of attack guess (deg)
    theta_guess_deg : float, optional
        Initial pitch guess (deg); defaults to alpha minus 20 deg
    verbose : bool
        Print a trim summary

    Returns
    -------
    state_trim : SimState
        Trimmed state
    info : dict
        success, residual_norm, iterations, message, alpha_deg, theta_deg,
        gamma_deg (flight path), airspeed, glide_ratio
    """
    if controls is None:
        controls = config.controls
    if theta_guess_deg is None:
        theta_guess_deg = alpha_guess_deg - 20.0

    x0 = np.array([np.radians(alpha_guess_deg), np.radians(theta_guess_deg), airspeed_guess])

    def residuals(x):
        alpha, theta, airspeed = x
        deriv = compute_derivatives(glide_state(alpha, theta, airspeed), config, controls)
        # u_dot, w_dot, q_dot
        return np.array([deriv.u_dot, deriv.w_dot, deriv.q_dot])

    bounds = np.array([
        (np.radians(-10.0), np.radians(60.0)),   # alpha
        (np.radians(-85.0), np.radians(30.0)),   # theta
        (0.5, 100.0),                            # airspeed
    ]).T

    x0 = np.clip(x0, bounds[0], bounds[1])
    result = least_squares(residuals, x0, bounds=bounds)

    alpha_trim, theta_trim, v_trim = result.x
    state_trim = glide_state(alpha_trim, theta_trim, v_trim)

    gamma = theta_trim - alpha_trim
    glide_ratio = 1.0 / np.tan(-gamma) if gamma < -1e-6 else np.inf

    info = {
        'success': result.success,
        'residual_norm': float(np.linalg.norm(result.fun)),
        'iterations': result.nfev,
        'message': result.message,
        'alpha_deg': float(np.degrees(alpha_trim)),
        'theta_deg': float(np.degrees(theta_trim)),
        'gamma_deg': float(np.degrees(gamma)),
        'airspeed': float(v_trim),
        'glide_ratio': float(glide_ratio),
    }

    if verbose:
        print("Glide trim")
        print(f"  alpha    = {info['alpha_deg']:.2f} deg")
        print(f"  theta    = {info['theta_deg']:.2f} deg")
        print(f"  gamma    = {info['gamma_deg']:.2f} deg")
        print(f"  airspeed = {info['airspeed']:.2f} m/s")
        print(f"  L/D      = {info['glide_ratio']:.2f}")
        print(f"  residual = {info['residual_norm']:.2e} ({info['message']})")

    return state_trim, info
