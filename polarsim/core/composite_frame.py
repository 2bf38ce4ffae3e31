"""
Composite body frame.

A vehicle is assembled from aero segments and a mass distribution. The
CompositeFrame is a snapshot of everything derived from them that only
changes when the deployment fraction or the pilot pitch changes: CG,
physical inertia, apparent mass and the resulting effective mass/inertia.
It is built once per (deploy, pilot_pitch) pair and reused across
integration steps.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..aero.polar import ContinuousPolar
from ..aero.segments import AeroSegment, SegmentControls
from .apparent_mass import (
    ApparentMassResult,
    ApparentMass,
    ApparentInertia,
    CanopyGeometry,
    apparent_mass_at_deploy,
    canopy_geometry_from_polar,
    compute_apparent_mass_result,
    effective_inertia,
    effective_mass,
)
from .dynamics import SimConfig
from .inertia import (
    InertiaComponents,
    MassSegment,
    VehicleMassModel,
    compute_center_of_mass,
    compute_inertia,
    inertia_tensor,
    rotate_pilot_mass,
)


NO_APPARENT_MASS = ApparentMassResult(ApparentMass(0.0, 0.0, 0.0), ApparentInertia(0.0, 0.0, 0.0))


@dataclass(frozen=True)
class CompositeFrameConfig:
    """
    Assembly recipe for a vehicle.

    Attributes
    ----------
    polar : ContinuousPolar
        System polar; supplies total mass and the canopy planform (s, chord)
    aero_segments : tuple of AeroSegment
    mass_model : VehicleMassModel
    pivot : tuple, optional
        (x, z) riser attachment point for pilot rotation
    height : float
        Reference length (m)
    rho : float
        Air density (kg/m^3)
    canopy : bool
        Whether the vehicle carries an inflated canopy (apparent mass)
    """
    polar: ContinuousPolar
    aero_segments: Tuple[AeroSegment, ...]
    mass_model: VehicleMassModel
    pivot: Optional[Tuple[float, float]] = None
    height: float = 1.875
    rho: float = 1.225
    canopy: bool = True


@dataclass(frozen=True)
class CompositeFrame:
    """Cached snapshot of the assembled vehicle."""
    aero_segments: Tuple[AeroSegment, ...]
    weight_segments: Tuple[MassSegment, ...]
    inertia_segments: Tuple[MassSegment, ...]

    cg: np.ndarray
    inertia: InertiaComponents
    total_mass: float

    canopy_geometry: Optional[CanopyGeometry]
    apparent_mass: ApparentMassResult
    effective_mass: np.ndarray
    effective_inertia: InertiaComponents

    height: float
    rho: float
    deploy: float
    pilot_pitch: float


def build_composite_frame(config: CompositeFrameConfig, deploy: float = 1.0,
                          pilot_pitch: float = 0.0) -> CompositeFrame:
    """
    Assemble a CompositeFrame for one deployment and pilot pitch.

    Parameters:
    -----------
    config : CompositeFrameConfig
    deploy : float
        Deployment fraction 0..1
    pilot_pitch : float
        Pilot swing angle (deg)

    Returns:
    --------
    frame : CompositeFrame
    """
    mass = config.polar.m
    sets = rotate_pilot_mass(config.mass_model, pilot_pitch, config.pivot, deploy)

    cg = compute_center_of_mass(sets.weight, config.height, mass)
    inertia = compute_inertia(sets.inertia, config.height, mass, about=cg)

    if config.canopy:
        geom = canopy_geometry_from_polar(config.polar.s, config.polar.chord)
        if deploy < 0.999:
            apparent = apparent_mass_at_deploy(geom, deploy, config.rho)
        else:
            apparent = compute_apparent_mass_result(geom, config.rho)
    else:
        geom = None
        apparent = NO_APPARENT_MASS

    return CompositeFrame(
        aero_segments=tuple(config.aero_segments),
        weight_segments=tuple(sets.weight),
        inertia_segments=tuple(sets.inertia),
        cg=cg,
        inertia=inertia,
        total_mass=mass,
        canopy_geometry=geom,
        apparent_mass=apparent,
        effective_mass=effective_mass(mass, apparent.mass),
        effective_inertia=effective_inertia(inertia, apparent.inertia),
        height=config.height,
        rho=config.rho,
        deploy=deploy,
        pilot_pitch=pilot_pitch,
    )


def frame_needs_rebuild(frame: Optional[CompositeFrame], deploy: float, pilot_pitch: float) -> bool:
    """True when no frame exists or either driver differs by value."""
    return frame is None or frame.deploy != deploy or frame.pilot_pitch != pilot_pitch


def frame_to_sim_config(frame: CompositeFrame, controls: SegmentControls,
                        use_apparent_mass: bool = True) -> SimConfig:
    """
    Per-step SimConfig from a cached frame.

    With apparent mass the effective inertia and per-axis mass are used
    (anisotropic EOM); without it the physical values (isotropic EOM).
    """
    components = frame.effective_inertia if use_apparent_mass else frame.inertia
    return SimConfig(
        segments=list(frame.aero_segments),
        controls=controls,
        cg=frame.cg,
        inertia=inertia_tensor(components),
        mass=frame.total_mass,
        height=frame.height,
        rho=frame.rho,
        mass_per_axis=frame.effective_mass if use_apparent_mass else None,
    )
