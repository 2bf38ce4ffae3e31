"""
Continuous polar definition and control-derivative morphing.

A ContinuousPolar is the aerodynamic identity of one surface (or one whole
vehicle): the parameters of the Kirchhoff separation model plus physical
reference values. Angles are stored in degrees and only converted to
radians inside trig calls.

Control channels (brake, front_riser, rear_riser, dirty, ...) are stored as
SymmetricControl blocks. Applying a control shifts each parameter linearly:

    param_eff = param_base + amount * d_param
"""

from dataclasses import dataclass, field, fields, replace
from typing import Dict, List, Optional


# Scalar fields that take part in interpolation between two polars
SCALAR_FIELDS = (
    'cl_alpha', 'alpha_0', 'cd_0', 'k', 'cd_n', 'cd_n_lateral',
    'alpha_stall_fwd', 's1_fwd', 'alpha_stall_back', 's1_back',
    'cy_beta', 'cn_beta', 'cl_beta', 'cm_0', 'cm_alpha',
    'cp_0', 'cp_alpha', 'cg', 'cp_lateral',
    's', 'm', 'chord', 'reference_length',
)

# SymmetricControl field -> ContinuousPolar field it shifts
CONTROL_TARGETS = {
    'd_alpha_0': 'alpha_0',
    'd_cd_0': 'cd_0',
    'd_cl_alpha': 'cl_alpha',
    'd_k': 'k',
    'd_alpha_stall_fwd': 'alpha_stall_fwd',
    'd_alpha_stall_back': 'alpha_stall_back',
    'd_cd_n': 'cd_n',
    'd_cp_0': 'cp_0',
    'd_cp_alpha': 'cp_alpha',
    'cm_delta': 'cm_0',
}

# Primary control channel precedence for the legacy `delta` amount
PRIMARY_CONTROL_ORDER = ('brake', 'rear_riser', 'front_riser')


@dataclass(frozen=True)
class SymmetricControl:
    """
    Parameter deltas at full control input (amount = 1).

    Attributes
    ----------
    d_alpha_0, d_alpha_stall_fwd, d_alpha_stall_back : float
        Angle shifts (deg)
    d_cd_0, d_cl_alpha, d_k, d_cd_n : float
        Drag/lift parameter shifts
    d_cp_0, d_cp_alpha : float
        Center-of-pressure shifts (chord fraction, per rad)
    cm_delta : float
        Shift applied to cm_0
    """
    d_alpha_0: float = 0.0
    d_cd_0: float = 0.0
    d_cl_alpha: float = 0.0
    d_k: float = 0.0
    d_alpha_stall_fwd: float = 0.0
    d_alpha_stall_back: float = 0.0
    d_cd_n: float = 0.0
    d_cp_0: float = 0.0
    d_cp_alpha: float = 0.0
    cm_delta: float = 0.0


@dataclass(frozen=True)
class ContinuousPolar:
    """
    Kirchhoff-model parameters for one aerodynamic surface or vehicle.

    Attributes
    ----------
    cl_alpha : float
        Lift slope (1/rad)
    alpha_0 : float
        Zero-lift angle of attack (deg)
    cd_0 : float
        Parasitic drag coefficient
    k : float
        Induced drag factor (CD = cd_0 + k*CL^2)
    cd_n, cd_n_lateral : float
        Flat-plate normal drag, broadside and in full sideslip
    alpha_stall_fwd, s1_fwd : float
        Forward stall angle (deg) and sigmoid width (deg)
    alpha_stall_back, s1_back : float
        Back stall angle (deg) and sigmoid width (deg)
    cy_beta, cn_beta, cl_beta : float
        Side force, yaw and roll stability derivatives
    cm_0, cm_alpha : float
        Pitching moment at zero lift and slope (1/rad)
    cp_0, cp_alpha : float
        Attached-flow center of pressure (chord fraction) and slope (1/rad)
    s : float
        Reference area (m^2)
    m : float
        Mass (kg)
    chord : float
        Reference chord (m)
    reference_length : float
        Length used to normalize segment positions (m)
    controls : dict
        Control channel name -> SymmetricControl
    """
    name: str
    cl_alpha: float
    alpha_0: float
    cd_0: float
    k: float
    cd_n: float
    cd_n_lateral: float
    alpha_stall_fwd: float
    s1_fwd: float
    alpha_stall_back: float
    s1_back: float
    cy_beta: float
    cn_beta: float
    cl_beta: float
    cm_0: float
    cm_alpha: float
    cp_0: float
    cp_alpha: float
    s: float
    m: float
    chord: float
    type: str = 'Other'
    cg: float = 0.5
    cp_lateral: float = 0.5
    reference_length: float = 1.875
    controls: Dict[str, SymmetricControl] = field(default_factory=dict)


def apply_control(polar: ContinuousPolar, control: Optional[SymmetricControl],
                  amount: float) -> ContinuousPolar:
    """
    Return a copy of `polar` with one control block applied at `amount`.

    Parameters:
    -----------
    polar : ContinuousPolar
        Base polar
    control : SymmetricControl or None
        Deltas at full input
    amount : float
        Control amount (typically 0..1)

    Returns:
    --------
    polar : ContinuousPolar
        Effective polar (the base polar itself if nothing changes)
    """
    if control is None or amount == 0:
        return polar

    changes = {}
    for delta_name, target in CONTROL_TARGETS.items():
        d = getattr(control, delta_name)
        if d != 0:
            changes[target] = getattr(polar, target) + amount * d

    if not changes:
        return polar
    return replace(polar, **changes)


def apply_all_controls(polar: ContinuousPolar, delta: float,
                       dirty: float = 0.0) -> ContinuousPolar:
    """
    Apply the primary control (brake, else rear riser, else front riser)
    at `delta`, then the dirty-flying channel at `dirty`.
    """
    result = polar

    if delta != 0:
        for channel in PRIMARY_CONTROL_ORDER:
            if channel in polar.controls:
                result = apply_control(result, polar.controls[channel], delta)
                break

    if dirty != 0 and 'dirty' in polar.controls:
        result = apply_control(result, polar.controls['dirty'], dirty)

    return result


def lerp_polar(t: float, polar_a: ContinuousPolar,
               polar_b: ContinuousPolar) -> ContinuousPolar:
    """
    Linearly interpolate every scalar field between two polars.

    t = 0 gives polar_a, t = 1 gives polar_b. Name, type and control
    blocks come from polar_a.
    """
    changes = {
        name: getattr(polar_a, name) + t * (getattr(polar_b, name) - getattr(polar_a, name))
        for name in SCALAR_FIELDS
    }
    return replace(polar_a, **changes)


def polar_problems(polar: ContinuousPolar) -> List[str]:
    """List the invariants `polar` violates (empty when valid)."""
    problems = []

    for name in ('cd_0', 'k', 'cd_n', 'cd_n_lateral'):
        if getattr(polar, name) < 0:
            problems.append(f"{name} must be >= 0 (got {getattr(polar, name)})")

    for name in ('s1_fwd', 's1_back', 's', 'm', 'chord', 'reference_length'):
        if getattr(polar, name) <= 0:
            problems.append(f"{name} must be > 0 (got {getattr(polar, name)})")

    if polar.alpha_stall_back >= polar.alpha_stall_fwd:
        problems.append(
            f"alpha_stall_back ({polar.alpha_stall_back}) must be below "
            f"alpha_stall_fwd ({polar.alpha_stall_fwd})"
        )

    return problems


def validate_polar(polar: ContinuousPolar) -> ContinuousPolar:
    """
    Check polar invariants at load time.

    Raises:
    -------
    ValueError
        If any invariant is violated
    """
    problems = polar_problems(polar)
    if problems:
        raise ValueError(f"Invalid polar '{polar.name}': " + "; ".join(problems))
    return polar


def polar_from_dict(data: Dict) -> ContinuousPolar:
    """
    Build a ContinuousPolar from a plain dictionary (e.g. parsed YAML).

    Control blocks are given as a nested mapping of channel -> deltas.
    Unknown keys raise ValueError.
    """
    known = {f.name for f in fields(ContinuousPolar)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown polar fields: {sorted(unknown)}")

    values = dict(data)
    control_known = {f.name for f in fields(SymmetricControl)}
    controls = {}
    for channel, deltas in (values.pop('controls', None) or {}).items():
        bad = set(deltas) - control_known
        if bad:
            raise ValueError(f"Unknown control fields for '{channel}': {sorted(bad)}")
        controls[channel] = SymmetricControl(**deltas)

    return validate_polar(ContinuousPolar(controls=controls, **values))


def polar_to_dict(polar: ContinuousPolar) -> Dict:
    """Plain-dictionary form of a polar, suitable for YAML output."""
    data = {f.name: getattr(polar, f.name) for f in fields(ContinuousPolar) if f.name != 'controls'}
    data['controls'] = {
        channel: {f.name: getattr(ctrl, f.name) for f in fields(SymmetricControl)
                  if getattr(ctrl, f.name) != 0}
        for channel, ctrl in polar.controls.items()
    }
    return data
