"""
Apparent (added) mass for an inflated lifting surface.

A ram-air canopy accelerating through air must also accelerate the air
around it. Treating the canopy as a thin flat plate of span b and chord c
gives the classical potential-flow results:

    m_a_z = (pi/4) rho c^2 b        normal (heave)
    m_a_y = (pi/4) rho b^2 c        spanwise
    m_a_x = (pi/4) rho (0.1 c)^2 b  chordwise, thin plate with 10% thickness

    I_a_xx = (pi/4) rho c^2 b^3 / 12          roll
    I_a_yy = (pi/4) rho b c^3 / 12            pitch
    I_a_zz = (pi/4) rho (0.1 c)^2 b^3 / 12    yaw

Everything scales linearly with rho. The strongly anisotropic values feed
the anisotropic translational EOM, which produces the Munk moment.
"""

from dataclasses import dataclass

import numpy as np

from .inertia import InertiaComponents


PI_4 = np.pi / 4.0

# Chordwise thickness ratio used for the in-plane terms
THICKNESS_RATIO = 0.10


@dataclass(frozen=True)
class CanopyGeometry:
    """Planform used for apparent mass: span (m), chord (m), area (m^2)."""
    span: float
    chord: float
    area: float


@dataclass(frozen=True)
class ApparentMass:
    """Translational apparent mass per body axis (kg)."""
    x: float
    y: float
    z: float

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])


@dataclass(frozen=True)
class ApparentInertia:
    """Rotational apparent inertia per body axis (kg*m^2)."""
    Ixx: float
    Iyy: float
    Izz: float


@dataclass(frozen=True)
class ApparentMassResult:
    mass: ApparentMass
    inertia: ApparentInertia


def canopy_geometry_from_polar(area: float, chord: float) -> CanopyGeometry:
    """Rectangular planform from reference area and chord (span = S / c)."""
    return CanopyGeometry(span=area / chord, chord=chord, area=area)


def compute_apparent_mass(geom: CanopyGeometry, rho: float = 1.225) -> ApparentMass:
    """Flat-plate translational apparent mass (kg)."""
    b, c = geom.span, geom.chord
    t = THICKNESS_RATIO * c
    return ApparentMass(
        x=PI_4 * rho * t * t * b,
        y=PI_4 * rho * b * b * c,
        z=PI_4 * rho * c * c * b,
    )


def compute_apparent_inertia(geom: CanopyGeometry, rho: float = 1.225) -> ApparentInertia:
    """Strip-theory rotational apparent inertia (kg*m^2)."""
    b, c = geom.span, geom.chord
    t = THICKNESS_RATIO * c
    return ApparentInertia(
        Ixx=PI_4 * rho * c * c * b ** 3 / 12.0,
        Iyy=PI_4 * rho * b * c ** 3 / 12.0,
        Izz=PI_4 * rho * t * t * b ** 3 / 12.0,
    )


def compute_apparent_mass_result(geom: CanopyGeometry, rho: float = 1.225) -> ApparentMassResult:
    return ApparentMassResult(
        mass=compute_apparent_mass(geom, rho),
        inertia=compute_apparent_inertia(geom, rho),
    )


def apparent_mass_at_deploy(full_geom: CanopyGeometry, deploy: float,
                            rho: float = 1.225) -> ApparentMassResult:
    """
    Apparent mass during deployment.

    Span scales 10% -> 100% and chord 20% -> 100% with the deployment
    fraction, so a packed canopy carries almost no apparent mass.

    Parameters:
    -----------
    full_geom : CanopyGeometry
        Fully inflated planform
    deploy : float
        Deployment fraction (clamped to 0..1)
    rho : float
        Air density (kg/m^3)
    """
    d = max(0.0, min(1.0, deploy))
    span = full_geom.span * (0.1 + 0.9 * d)
    chord = full_geom.chord * (0.2 + 0.8 * d)
    return compute_apparent_mass_result(CanopyGeometry(span, chord, span * chord), rho)


def effective_mass(physical_mass: float, apparent: ApparentMass) -> np.ndarray:
    """Per-axis effective mass [m + m_a_x, m + m_a_y, m + m_a_z] (kg)."""
    return physical_mass + apparent.as_array()


def effective_inertia(physical: InertiaComponents, apparent: ApparentInertia) -> InertiaComponents:
    """Physical inertia plus apparent inertia on the diagonal only."""
    return InertiaComponents(
        Ixx=physical.Ixx + apparent.Ixx,
        Iyy=physical.Iyy + apparent.Iyy,
        Izz=physical.Izz + apparent.Izz,
        Ixy=physical.Ixy,
        Ixz=physical.Ixz,
        Iyz=physical.Iyz,
    )
