"""
Kirchhoff separation model.

The separation function f(alpha) is 1 for fully attached flow and 0 for
fully separated flow. Two sigmoids bound the attached region:

    f_fwd  = 1 / (1 + exp((alpha - alpha_stall_fwd) / s1_fwd))
    f_back = 1 / (1 + exp((alpha_stall_back - alpha) / s1_back))
    f      = f_fwd * f_back

Attached-flow and flat-plate sub-models are defined here as well; the
coefficient blender combines them with f.

All functions take alpha in degrees and accept numpy arrays.
"""

import numpy as np

from .polar import ContinuousPolar


DEG2RAD = np.pi / 180.0

# Exponent clamp for the sigmoid; exp(500) is still finite in float64
SIGMOID_CLAMP = 500.0


def sigmoid(x):
    """Decreasing logistic 1 / (1 + exp(x)) with overflow protection."""
    x = np.clip(x, -SIGMOID_CLAMP, SIGMOID_CLAMP)
    result = 1.0 / (1.0 + np.exp(x))
    if np.ndim(result) == 0:
        return float(result)
    return result


def f_fwd(alpha_deg, polar: ContinuousPolar):
    """Forward-stall sigmoid: ~1 below alpha_stall_fwd, ~0 above."""
    return sigmoid((alpha_deg - polar.alpha_stall_fwd) / polar.s1_fwd)


def f_back(alpha_deg, polar: ContinuousPolar):
    """Back-stall sigmoid: ~1 above alpha_stall_back, ~0 below."""
    return sigmoid((polar.alpha_stall_back - alpha_deg) / polar.s1_back)


def separation(alpha_deg, polar: ContinuousPolar):
    """Combined separation function f in [0, 1]."""
    return f_fwd(alpha_deg, polar) * f_back(alpha_deg, polar)


def cl_attached(alpha_deg, polar: ContinuousPolar):
    """Attached-flow lift: cl_alpha * sin(alpha - alpha_0)."""
    return polar.cl_alpha * np.sin((alpha_deg - polar.alpha_0) * DEG2RAD)


def cd_attached(alpha_deg, polar: ContinuousPolar):
    """Attached-flow drag polar: cd_0 + k * CL_att^2."""
    cl = cl_attached(alpha_deg, polar)
    return polar.cd_0 + polar.k * cl * cl


def cl_plate(alpha_deg, cd_n: float):
    """Flat-plate lift: cd_n * sin(alpha) * cos(alpha)."""
    a = alpha_deg * DEG2RAD
    return cd_n * np.sin(a) * np.cos(a)


def cd_plate(alpha_deg, cd_n: float, cd_0: float):
    """Flat-plate drag: cd_n * sin^2(alpha) + cd_0 * cos^2(alpha)."""
    a = alpha_deg * DEG2RAD
    s = np.sin(a)
    c = np.cos(a)
    return cd_n * s * s + cd_0 * c * c


def cm_plate(alpha_deg):
    """Flat-plate pitching moment about the quarter chord: -0.1 * sin(2 alpha)."""
    return -0.1 * np.sin(2.0 * alpha_deg * DEG2RAD)


def cp_plate(alpha_deg):
    """Flat-plate center of pressure: moves from 0.25 to 0.5 chord at 90 deg."""
    return 0.25 + 0.25 * np.sin(np.abs(alpha_deg) * DEG2RAD)
