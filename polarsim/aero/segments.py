"""
Aerodynamic segments.

A segment is one physical surface of a vehicle: a canopy cell, a brake
flap, the pilot body, the suspension lines, a wingsuit panel. Each segment
is an immutable description (name, normalized NED position, arc angle,
reference area and chord) plus a kind-specific model. Evaluation never
mutates the segment: deployment, pilot pitch and brake-dependent geometry
are recomputed from the control vector on every call.

Supported kinds:
- Parasitic       constant coefficients (lines, pilot chute)
- LiftingBody     full polar, rotated by a fixed pitch offset (pilot)
- UnzippableBlend lifting body morphing between two polars (wingsuit pilot)
- CanopyCell      arc-rotated canopy cell with riser/brake/deploy response
- BrakeFlap       trailing-edge flap that grows with brake input
- WingsuitHead    bluff body acting as a rudder
- WingsuitPanel   wingsuit body/wing panel with throttle morphing
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union

import numpy as np

from .polar import ContinuousPolar, lerp_polar
from .coefficients import get_all_coefficients


DEG2RAD = np.pi / 180.0

Vec3 = Tuple[float, float, float]
Pivot = Tuple[float, float]  # (x, z) normalized NED


# ─── Deployment tuning ──────────────────────────────────────────────────────
# Value at deploy = 0; lerped to 1x (or 0 offset) at deploy = 1

DEPLOY_CD0_MULTIPLIER = 2.0
DEPLOY_CL_ALPHA_FRACTION = 0.3
DEPLOY_CD_N_MULTIPLIER = 1.5
DEPLOY_STALL_FWD_OFFSET = -17.0
DEPLOY_S1_FWD_MULTIPLIER = 4.0

# Forward chord shift at deploy = 0 (normalized)
DEPLOY_CHORD_OFFSET = 0.15

# Pilot pitch below this (deg) leaves the pilot position untouched
PILOT_PITCH_EPS_DEG = 0.01

# Brake flaps below this effective input produce no force
FLAP_BRAKE_EPS = 0.001


class SegmentKind(Enum):
    PARASITIC = 'parasitic'
    LIFTING_BODY = 'lifting_body'
    UNZIPPABLE_BLEND = 'unzippable_blend'
    CANOPY_CELL = 'canopy_cell'
    BRAKE_FLAP = 'brake_flap'
    WINGSUIT_HEAD = 'wingsuit_head'
    WINGSUIT_PANEL = 'wingsuit_panel'


@dataclass
class SegmentControls:
    """
    Full control vector.

    Canopy channels (brakes, risers) and wingsuit throttles are 0..1 (or
    -1..1 for throttles). `deploy` is the canopy inflation fraction,
    `pilot_pitch` the pilot swing angle about the riser pivot (deg),
    `unzip` blends a wingsuit pilot into a slick body. `delta` and `dirty`
    feed the polar's primary and dirty-flying control derivatives.
    """
    brake_left: float = 0.0
    brake_right: float = 0.0
    front_riser_left: float = 0.0
    front_riser_right: float = 0.0
    rear_riser_left: float = 0.0
    rear_riser_right: float = 0.0
    weight_shift_lr: float = 0.0

    elevator: float = 0.0
    rudder: float = 0.0
    aileron_left: float = 0.0
    aileron_right: float = 0.0
    flap: float = 0.0

    pitch_throttle: float = 0.0
    yaw_throttle: float = 0.0
    roll_throttle: float = 0.0
    dihedral: float = 0.5
    wingsuit_deploy: float = 0.0

    deploy: float = 1.0
    pilot_pitch: float = 0.0
    unzip: float = 0.0

    delta: float = 0.0
    dirty: float = 0.0

    def copy(self, **changes) -> 'SegmentControls':
        """Copy with some channels changed."""
        return replace(self, **changes)


@dataclass(frozen=True)
class ControlConstants:
    """Canopy control response tuning."""
    alpha_max_riser: float = 10.0            # deg at full riser
    brake_alpha_coupling_deg: float = 2.5    # deg per unit brake*sensitivity
    max_flap_deflection_deg: float = 50.0    # trailing-edge deflection at full brake
    max_flap_roll_increment_deg: float = 20.0


@dataclass(frozen=True)
class WingsuitConstants:
    """Wingsuit throttle response tuning."""
    pitch_alpha_max_deg: float = 3.5
    pitch_cp_shift: float = 0.13
    yaw_body_y_shift: float = 0.03
    yaw_head_y_shift: float = 0.02
    yaw_roll_coupling_deg: float = 0.3
    yaw_dirty_coupling: float = 0.15
    roll_alpha_max_deg: float = 0.8
    roll_dirty_coupling: float = 0.10
    dihedral_inner_max_deg: float = 16.0
    dihedral_outer_max_deg: float = 30.0


# ─── Segment models (tagged variants) ───────────────────────────────────────

@dataclass(frozen=True)
class Parasitic:
    kind: ClassVar[SegmentKind] = SegmentKind.PARASITIC
    cd: float
    cl: float = 0.0
    cy: float = 0.0


@dataclass(frozen=True)
class LiftingBody:
    kind: ClassVar[SegmentKind] = SegmentKind.LIFTING_BODY
    polar: ContinuousPolar
    pitch_offset_deg: float = 0.0
    pivot: Optional[Pivot] = None


@dataclass(frozen=True)
class UnzippableBlend:
    kind: ClassVar[SegmentKind] = SegmentKind.UNZIPPABLE_BLEND
    polar_a: ContinuousPolar  # unzip = 0 (zipped)
    polar_b: ContinuousPolar  # unzip = 1 (unzipped)
    pitch_offset_deg: float = 0.0
    pivot: Optional[Pivot] = None


@dataclass(frozen=True)
class CanopyCell:
    kind: ClassVar[SegmentKind] = SegmentKind.CANOPY_CELL
    polar: ContinuousPolar
    side: str
    brake_sensitivity: float
    riser_sensitivity: float
    constants: ControlConstants = field(default_factory=ControlConstants)


@dataclass(frozen=True)
class BrakeFlap:
    kind: ClassVar[SegmentKind] = SegmentKind.BRAKE_FLAP
    polar: ContinuousPolar
    side: str
    brake_sensitivity: float
    flap_chord_fraction: float
    parent_cell_s: float
    parent_cell_chord: float
    parent_cell_x: float
    reference_length: float
    constants: ControlConstants = field(default_factory=ControlConstants)


@dataclass(frozen=True)
class WingsuitHead:
    kind: ClassVar[SegmentKind] = SegmentKind.WINGSUIT_HEAD
    cd: float
    constants: WingsuitConstants = field(default_factory=WingsuitConstants)


@dataclass(frozen=True)
class WingsuitPanel:
    kind: ClassVar[SegmentKind] = SegmentKind.WINGSUIT_PANEL
    polar: ContinuousPolar
    side: str
    roll_sensitivity: float
    wing_type: str  # 'body', 'inner' or 'outer'
    constants: WingsuitConstants = field(default_factory=WingsuitConstants)


SegmentModel = Union[Parasitic, LiftingBody, UnzippableBlend, CanopyCell,
                     BrakeFlap, WingsuitHead, WingsuitPanel]


@dataclass(frozen=True)
class AeroSegment:
    """
    One aerodynamic surface.

    Attributes
    ----------
    name : str
        Segment identifier
    position : tuple
        Aerodynamic center, NED body frame, normalized by reference length
    arc_angle_deg : float
        Geometric arc/span angle of the surface (not an Euler angle)
    S : float
        Reference area at full deployment (m^2)
    chord : float
        Reference chord at full deployment (m)
    model : SegmentModel
        Kind-specific evaluation data
    """
    name: str
    position: Vec3
    arc_angle_deg: float
    S: float
    chord: float
    model: SegmentModel

    @property
    def kind(self) -> SegmentKind:
        return self.model.kind

    @property
    def polar(self) -> Optional[ContinuousPolar]:
        """The segment's own polar, if it has one."""
        return getattr(self.model, 'polar', getattr(self.model, 'polar_a', None))


@dataclass(frozen=True)
class SegmentGeometry:
    """
    Segment geometry for one control state.

    Attributes
    ----------
    position : np.ndarray (3,)
        Aerodynamic center, normalized NED
    S, chord : float
        Current reference area (m^2) and chord (m)
    arc_angle_deg : float
        Current arc angle (brake flaps and wingsuit panels vary it)
    pitch_offset_deg : float
        Fixed chord pitch relative to the body frame
    chord_rotation_rad : float
        Dynamic chord rotation from pilot pitch
    """
    position: np.ndarray
    S: float
    chord: float
    arc_angle_deg: float
    pitch_offset_deg: float = 0.0
    chord_rotation_rad: float = 0.0


@dataclass(frozen=True)
class SegmentCoefficients:
    """Coefficients a segment reports to the force evaluator."""
    cl: float
    cd: float
    cy: float
    cm: float
    cp: float


# ─── Shared helpers ─────────────────────────────────────────────────────────

def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _side_sign(side: str) -> float:
    if side == 'right':
        return 1.0
    if side == 'left':
        return -1.0
    return 0.0


def _brake_input(side: str, controls: SegmentControls) -> float:
    if side == 'right':
        return controls.brake_right
    if side == 'left':
        return controls.brake_left
    return 0.0  # no brake lines reach the center cell


def _riser_inputs(side: str, controls: SegmentControls) -> Tuple[float, float]:
    """(front, rear) riser input seen by one side of the canopy."""
    if side == 'right':
        return controls.front_riser_right, controls.rear_riser_right
    if side == 'left':
        return controls.front_riser_left, controls.rear_riser_left
    return (
        0.5 * (controls.front_riser_left + controls.front_riser_right),
        0.5 * (controls.rear_riser_left + controls.rear_riser_right),
    )


def deploy_scales(deploy: float) -> Tuple[float, float, float, float]:
    """
    Deployment geometry factors.

    Returns:
    --------
    d : float
        Clamped deployment fraction
    span_scale, chord_scale : float
        Span (10% -> 100%) and chord (30% -> 100%) multipliers
    chord_offset : float
        Forward position shift (normalized)
    """
    d = _clamp(deploy, 0.0, 1.0)
    return d, 0.1 + 0.9 * d, 0.3 + 0.7 * d, DEPLOY_CHORD_OFFSET * (1.0 - d)


def deploy_morph_polar(polar: ContinuousPolar, deploy: float) -> ContinuousPolar:
    """Polar of partially inflated fabric (unchanged at deploy >= 1)."""
    d = _clamp(deploy, 0.0, 1.0)
    if d >= 1.0:
        return polar
    return replace(
        polar,
        cd_0=polar.cd_0 * (DEPLOY_CD0_MULTIPLIER + (1.0 - DEPLOY_CD0_MULTIPLIER) * d),
        cl_alpha=polar.cl_alpha * (DEPLOY_CL_ALPHA_FRACTION + (1.0 - DEPLOY_CL_ALPHA_FRACTION) * d),
        cd_n=polar.cd_n * (DEPLOY_CD_N_MULTIPLIER + (1.0 - DEPLOY_CD_N_MULTIPLIER) * d),
        alpha_stall_fwd=polar.alpha_stall_fwd + DEPLOY_STALL_FWD_OFFSET * (1.0 - d),
        s1_fwd=polar.s1_fwd * (DEPLOY_S1_FWD_MULTIPLIER + (1.0 - DEPLOY_S1_FWD_MULTIPLIER) * d),
    )


def rotate_about_pivot(x: float, z: float, pivot: Pivot, angle_deg: float) -> Tuple[float, float]:
    """Rotate a point in the x-z plane about `pivot` by `angle_deg`."""
    a = angle_deg * DEG2RAD
    c, s = np.cos(a), np.sin(a)
    dx = x - pivot[0]
    dz = z - pivot[1]
    return dx * c - dz * s + pivot[0], dx * s + dz * c + pivot[1]


def _arc_rotate(alpha_deg: float, beta_deg: float, theta_rad: float) -> Tuple[float, float]:
    """Project freestream (alpha, beta) onto a surface rolled by theta."""
    c, s = np.cos(theta_rad), np.sin(theta_rad)
    return alpha_deg * c + beta_deg * s, -alpha_deg * s + beta_deg * c


def _pilot_position(segment: AeroSegment, pivot: Optional[Pivot],
                    pilot_pitch: float) -> np.ndarray:
    x, y, z = segment.position
    if pivot is not None and abs(pilot_pitch) > PILOT_PITCH_EPS_DEG:
        x, z = rotate_about_pivot(x, z, pivot, pilot_pitch)
    return np.array([x, y, z], dtype=float)


def _blended_polar(model: UnzippableBlend, controls: SegmentControls) -> ContinuousPolar:
    t = _clamp(controls.unzip, 0.0, 1.0)
    if t == 0.0:
        return model.polar_a
    if t == 1.0:
        return model.polar_b
    return lerp_polar(t, model.polar_a, model.polar_b)


def _flap_effective_brake(model: BrakeFlap, controls: SegmentControls) -> float:
    return _brake_input(model.side, controls) * model.brake_sensitivity


def _flap_theta_deg(segment: AeroSegment, model: BrakeFlap, effective_brake: float) -> float:
    if effective_brake < FLAP_BRAKE_EPS:
        return segment.arc_angle_deg
    roll_sign = 1.0 if segment.arc_angle_deg >= 0 else -1.0
    return segment.arc_angle_deg + effective_brake * model.constants.max_flap_roll_increment_deg * roll_sign


def _panel_roll_deg(model: WingsuitPanel, controls: SegmentControls) -> float:
    dihedral = _clamp(controls.dihedral, 0.0, 1.0)
    sign = _side_sign(model.side)
    if model.wing_type == 'inner':
        return sign * model.constants.dihedral_inner_max_deg * dihedral
    if model.wing_type == 'outer':
        return sign * model.constants.dihedral_outer_max_deg * dihedral
    return 0.0


# ─── Geometry per kind ──────────────────────────────────────────────────────

def _geometry_parasitic(segment, model, controls):
    return SegmentGeometry(np.array(segment.position, dtype=float), segment.S,
                           segment.chord, segment.arc_angle_deg)


def _geometry_lifting_body(segment, model, controls):
    return SegmentGeometry(
        position=_pilot_position(segment, model.pivot, controls.pilot_pitch),
        S=segment.S,
        chord=segment.chord,
        arc_angle_deg=segment.arc_angle_deg,
        pitch_offset_deg=model.pitch_offset_deg,
        chord_rotation_rad=controls.pilot_pitch * DEG2RAD,
    )


def _geometry_unzippable(segment, model, controls):
    blended = _blended_polar(model, controls)
    return SegmentGeometry(
        position=_pilot_position(segment, model.pivot, controls.pilot_pitch),
        S=blended.s,
        chord=blended.chord,
        arc_angle_deg=segment.arc_angle_deg,
        pitch_offset_deg=model.pitch_offset_deg,
        chord_rotation_rad=controls.pilot_pitch * DEG2RAD,
    )


def _geometry_canopy_cell(segment, model, controls):
    d, span_scale, chord_scale, chord_offset = deploy_scales(controls.deploy)
    x, y, z = segment.position
    return SegmentGeometry(
        position=np.array([x + chord_offset, y * span_scale, z], dtype=float),
        S=segment.S * chord_scale * span_scale,
        chord=segment.chord * chord_scale,
        arc_angle_deg=segment.arc_angle_deg,
    )


def _geometry_brake_flap(segment, model, controls):
    d, span_scale, chord_scale, chord_offset = deploy_scales(controls.deploy)
    te_x, te_y, te_z = segment.position

    max_s = model.flap_chord_fraction * model.parent_cell_s * chord_scale * span_scale
    max_chord = model.flap_chord_fraction * model.parent_cell_chord * chord_scale
    # CP travels from the trailing edge toward the parent cell quarter chord
    max_cp_shift = 0.25 * model.parent_cell_chord / model.reference_length * chord_scale

    eb = _flap_effective_brake(model, controls)
    x = (model.parent_cell_x + chord_offset
         + (te_x - model.parent_cell_x) * chord_scale
         + eb * max_cp_shift)

    return SegmentGeometry(
        position=np.array([x, te_y * span_scale, te_z], dtype=float),
        S=eb * max_s,
        chord=eb * max_chord,
        arc_angle_deg=_flap_theta_deg(segment, model, eb),
    )


def _geometry_wingsuit_head(segment, model, controls):
    x, y, z = segment.position
    y = y + controls.yaw_throttle * model.constants.yaw_head_y_shift
    return SegmentGeometry(np.array([x, y, z], dtype=float), segment.S,
                           segment.chord, segment.arc_angle_deg)


def _geometry_wingsuit_panel(segment, model, controls):
    x, y, z = segment.position
    if model.wing_type == 'body':
        yaw = _clamp(controls.yaw_throttle, -1.0, 1.0)
        y = y + yaw * model.constants.yaw_body_y_shift
    return SegmentGeometry(np.array([x, y, z], dtype=float), segment.S,
                           segment.chord, _panel_roll_deg(model, controls))


# ─── Coefficients per kind ──────────────────────────────────────────────────

def _coeffs_parasitic(segment, model, alpha_deg, beta_deg, controls):
    return SegmentCoefficients(model.cl, model.cd, model.cy, 0.0, 0.25)


def _coeffs_lifting_body(segment, model, alpha_deg, beta_deg, controls):
    local_alpha = alpha_deg - (model.pitch_offset_deg + controls.pilot_pitch)
    c = get_all_coefficients(local_alpha, beta_deg, controls.delta, model.polar, controls.dirty)
    return SegmentCoefficients(c.cl, c.cd, c.cy, c.cm, c.cp)


def _coeffs_unzippable(segment, model, alpha_deg, beta_deg, controls):
    blended = _blended_polar(model, controls)
    local_alpha = alpha_deg - (model.pitch_offset_deg + controls.pilot_pitch)
    c = get_all_coefficients(local_alpha, beta_deg, controls.delta, blended, controls.dirty)
    return SegmentCoefficients(c.cl, c.cd, c.cy, c.cm, c.cp)


def _coeffs_canopy_cell(segment, model, alpha_deg, beta_deg, controls):
    consts = model.constants
    alpha_local, beta_local = _arc_rotate(alpha_deg, beta_deg, segment.arc_angle_deg * DEG2RAD)

    front, rear = _riser_inputs(model.side, controls)
    d_alpha_riser = (-front + rear) * consts.alpha_max_riser * model.riser_sensitivity

    brake = _brake_input(model.side, controls) * model.brake_sensitivity
    d_alpha_brake = brake * consts.brake_alpha_coupling_deg

    polar = deploy_morph_polar(model.polar, controls.deploy)
    c = get_all_coefficients(alpha_local + d_alpha_riser + d_alpha_brake, beta_local, brake, polar)
    return SegmentCoefficients(c.cl, c.cd, c.cy, c.cm, c.cp)


def _coeffs_brake_flap(segment, model, alpha_deg, beta_deg, controls):
    eb = _flap_effective_brake(model, controls)
    if eb < FLAP_BRAKE_EPS:
        return SegmentCoefficients(0.0, 0.0, 0.0, 0.0, 0.25)

    theta = _flap_theta_deg(segment, model, eb) * DEG2RAD
    alpha_local, beta_local = _arc_rotate(alpha_deg, beta_deg, theta)
    alpha_flap = alpha_local + eb * model.constants.max_flap_deflection_deg

    polar = deploy_morph_polar(model.polar, controls.deploy)
    c = get_all_coefficients(alpha_flap, beta_local, 0.0, polar)

    # Lift of the rolled flap splits into vertical and lateral parts
    return SegmentCoefficients(
        cl=c.cl * np.cos(theta),
        cd=c.cd,
        cy=c.cy + c.cl * np.sin(theta),
        cm=c.cm,
        cp=c.cp,
    )


def _coeffs_wingsuit_head(segment, model, alpha_deg, beta_deg, controls):
    cy = -0.5 * np.sin(beta_deg * DEG2RAD)
    return SegmentCoefficients(0.0, model.cd, float(cy), 0.0, 0.5)


def _coeffs_wingsuit_panel(segment, model, alpha_deg, beta_deg, controls):
    consts = model.constants
    sign = _side_sign(model.side)
    theta = _panel_roll_deg(model, controls) * DEG2RAD
    alpha_local, beta_local = _arc_rotate(alpha_deg, beta_deg, theta)

    pitch_t = _clamp(controls.pitch_throttle, -1.0, 1.0)
    roll_t = _clamp(controls.roll_throttle, -1.0, 1.0)
    yaw_t = _clamp(controls.yaw_throttle, -1.0, 1.0)

    alpha_eff = (alpha_local
                 + pitch_t * consts.pitch_alpha_max_deg
                 + roll_t * consts.roll_alpha_max_deg * model.roll_sensitivity * sign
                 + yaw_t * consts.yaw_roll_coupling_deg * sign)

    dirty = _clamp(
        _clamp(controls.dirty, 0.0, 1.0)
        + yaw_t * consts.yaw_dirty_coupling * sign
        + abs(roll_t) * consts.roll_dirty_coupling,
        0.0, 1.0,
    )

    c = get_all_coefficients(alpha_eff, beta_local, controls.delta, model.polar, dirty)
    return SegmentCoefficients(
        cl=c.cl * np.cos(theta),
        cd=c.cd,
        cy=c.cy + c.cl * np.sin(theta),
        cm=c.cm,
        cp=c.cp + pitch_t * consts.pitch_cp_shift,
    )


_GEOMETRY = {
    SegmentKind.PARASITIC: _geometry_parasitic,
    SegmentKind.LIFTING_BODY: _geometry_lifting_body,
    SegmentKind.UNZIPPABLE_BLEND: _geometry_unzippable,
    SegmentKind.CANOPY_CELL: _geometry_canopy_cell,
    SegmentKind.BRAKE_FLAP: _geometry_brake_flap,
    SegmentKind.WINGSUIT_HEAD: _geometry_wingsuit_head,
    SegmentKind.WINGSUIT_PANEL: _geometry_wingsuit_panel,
}

_COEFFICIENTS = {
    SegmentKind.PARASITIC: _coeffs_parasitic,
    SegmentKind.LIFTING_BODY: _coeffs_lifting_body,
    SegmentKind.UNZIPPABLE_BLEND: _coeffs_unzippable,
    SegmentKind.CANOPY_CELL: _coeffs_canopy_cell,
    SegmentKind.BRAKE_FLAP: _coeffs_brake_flap,
    SegmentKind.WINGSUIT_HEAD: _coeffs_wingsuit_head,
    SegmentKind.WINGSUIT_PANEL: _coeffs_wingsuit_panel,
}


def segment_geometry(segment: AeroSegment, controls: SegmentControls) -> SegmentGeometry:
    """Geometry of `segment` for the given control state."""
    return _GEOMETRY[segment.kind](segment, segment.model, controls)


def segment_coefficients(segment: AeroSegment, alpha_deg: float, beta_deg: float,
                         controls: SegmentControls) -> SegmentCoefficients:
    """
    Coefficients of `segment` at local flow angles.

    Parameters:
    -----------
    segment : AeroSegment
    alpha_deg, beta_deg : float
        Local angle of attack and sideslip (deg)
    controls : SegmentControls

    Returns:
    --------
    coeffs : SegmentCoefficients
    """
    return _COEFFICIENTS[segment.kind](segment, segment.model, alpha_deg, beta_deg, controls)


def evaluate_segment(segment: AeroSegment, alpha_deg: float, beta_deg: float,
                     controls: SegmentControls) -> Tuple[SegmentGeometry, SegmentCoefficients]:
    """Geometry and coefficients in one call."""
    return (segment_geometry(segment, controls),
            segment_coefficients(segment, alpha_deg, beta_deg, controls))


def position_meters(segment: AeroSegment, controls: SegmentControls,
                    reference_length: float) -> np.ndarray:
    """Aerodynamic center in meters (NED body frame)."""
    return segment_geometry(segment, controls).position * reference_length


# ─── Factories ──────────────────────────────────────────────────────────────

def make_parasitic_segment(name: str, position: Vec3, S: float, chord: float,
                           cd: float, cl: float = 0.0, cy: float = 0.0) -> AeroSegment:
    """Constant-coefficient body (lines, pilot chute, equipment)."""
    return AeroSegment(name, tuple(position), 0.0, S, chord, Parasitic(cd=cd, cl=cl, cy=cy))


def make_lifting_body_segment(name: str, position: Vec3, polar: ContinuousPolar,
                              pitch_offset_deg: float = 0.0,
                              pivot: Optional[Pivot] = None) -> AeroSegment:
    """
    Body evaluated with its full polar.

    Parameters:
    -----------
    pitch_offset_deg : float
        Pitch of the body relative to the vehicle frame (deg). A pilot
        hanging under a canopy is +90.
    pivot : tuple, optional
        (x, z) point the body swings about when pilot_pitch changes
    """
    return AeroSegment(name, tuple(position), 0.0, polar.s, polar.chord,
                       LiftingBody(polar, pitch_offset_deg, pivot))


def make_unzippable_segment(name: str, position: Vec3, zipped: ContinuousPolar,
                            unzipped: ContinuousPolar, pitch_offset_deg: float = 0.0,
                            pivot: Optional[Pivot] = None) -> AeroSegment:
    """Lifting body that blends from `zipped` to `unzipped` with controls.unzip."""
    return AeroSegment(name, tuple(position), 0.0, zipped.s, zipped.chord,
                       UnzippableBlend(zipped, unzipped, pitch_offset_deg, pivot))


def make_canopy_cell_segment(name: str, position: Vec3, arc_angle_deg: float, side: str,
                             brake_sensitivity: float, riser_sensitivity: float,
                             polar: ContinuousPolar,
                             constants: Optional[ControlConstants] = None) -> AeroSegment:
    """
    Canopy cell at an arc station.

    Parameters:
    -----------
    arc_angle_deg : float
        Arc angle of the cell along the curved span (0 center, +right)
    side : str
        'left', 'right' or 'center' for brake/riser routing
    brake_sensitivity : float
        Fraction of brake input this cell sees (0 for the center cell)
    riser_sensitivity : float
        Fraction of riser input this cell sees
    """
    return AeroSegment(name, tuple(position), arc_angle_deg, polar.s, polar.chord,
                       CanopyCell(polar, side, brake_sensitivity, riser_sensitivity,
                                  constants or ControlConstants()))


def make_brake_flap_segment(name: str, trailing_edge: Vec3, arc_angle_deg: float, side: str,
                            brake_sensitivity: float, flap_chord_fraction: float,
                            parent_cell_s: float, parent_cell_chord: float,
                            parent_cell_x: float, polar: ContinuousPolar,
                            reference_length: float,
                            constants: Optional[ControlConstants] = None) -> AeroSegment:
    """Trailing-edge brake flap; zero area until the brake is pulled."""
    return AeroSegment(
        name, tuple(trailing_edge), arc_angle_deg, 0.0, 0.0,
        BrakeFlap(polar, side, brake_sensitivity, flap_chord_fraction, parent_cell_s,
                  parent_cell_chord, parent_cell_x, reference_length,
                  constants or ControlConstants()),
    )


def make_wingsuit_head_segment(name: str, position: Vec3, S: float, chord: float, cd: float,
                               constants: Optional[WingsuitConstants] = None) -> AeroSegment:
    """Wingsuit head: drag plus a rudder-like side force in sideslip."""
    return AeroSegment(name, tuple(position), 0.0, S, chord,
                       WingsuitHead(cd, constants or WingsuitConstants()))


def make_wingsuit_panel_segment(name: str, position: Vec3, side: str,
                                polar: ContinuousPolar, roll_sensitivity: float,
                                wing_type: str,
                                constants: Optional[WingsuitConstants] = None) -> AeroSegment:
    """Wingsuit body or wing panel responding to the throttle channels."""
    if wing_type not in ('body', 'inner', 'outer'):
        raise ValueError(f"Unknown wing type: {wing_type}")
    return AeroSegment(name, tuple(position), 0.0, polar.s, polar.chord,
                       WingsuitPanel(polar, side, roll_sensitivity, wing_type,
                                     constants or WingsuitConstants()))
