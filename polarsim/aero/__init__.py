"""
Aerodynamic models.

Continuous polars with control morphing, the Kirchhoff separation blend
between attached flow and a flat plate, per-segment coefficient models and
force summation with omega x r correction.
"""

from .polar import (
    ContinuousPolar,
    SymmetricControl,
    apply_control,
    apply_all_controls,
    lerp_polar,
    validate_polar,
)
from .coefficients import FullCoefficients, get_all_coefficients, coeff_to_ss
from .segments import (
    AeroSegment,
    SegmentControls,
    SegmentKind,
    segment_geometry,
    segment_coefficients,
)
from .forces import SystemForces, evaluate_aero_forces, evaluate_static
from .sweep import sweep_polar, sweep_segments

__all__ = [
    'ContinuousPolar',
    'SymmetricControl',
    'apply_control',
    'apply_all_controls',
    'lerp_polar',
    'validate_polar',
    'FullCoefficients',
    'get_all_coefficients',
    'coeff_to_ss',
    'AeroSegment',
    'SegmentControls',
    'SegmentKind',
    'segment_geometry',
    'segment_coefficients',
    'SystemForces',
    'evaluate_aero_forces',
    'evaluate_static',
    'sweep_polar',
    'sweep_segments',
]
