"""
Point-mass inertia model.

Mass segments carry a mass ratio (fraction of the system mass) and a
height-normalized NED position (x forward, y right, z down). Two sets are
used per vehicle:

- weight set:  everything that has weight (pilot, canopy fabric and lines)
- inertia set: the weight set plus air trapped inside the canopy, which
               adds rotational inertia but no weight

Inertia is taken about the system CG (from the weight set) using the
parallel-axis theorem. Products of inertia are reported in the positive
convention (Ixz = sum m x z); inertia_tensor places them with a minus sign.
"""

from dataclasses import dataclass, replace
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from ..aero.segments import DEPLOY_CHORD_OFFSET


@dataclass(frozen=True)
class MassSegment:
    """
    One point mass.

    Attributes
    ----------
    name : str
    mass_ratio : float
        Fraction of the system mass
    position : tuple
        (x, y, z) NED, normalized by the reference length
    """
    name: str
    mass_ratio: float
    position: Tuple[float, float, float]


@dataclass(frozen=True)
class InertiaComponents:
    """Moments (Ixx roll, Iyy pitch, Izz yaw) and products of inertia (kg*m^2)."""
    Ixx: float
    Iyy: float
    Izz: float
    Ixy: float = 0.0
    Ixz: float = 0.0
    Iyz: float = 0.0


ZERO_INERTIA = InertiaComponents(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class VehicleMassModel:
    """
    Mass distribution of a canopy-pilot system split by role.

    Attributes
    ----------
    pilot : tuple of MassSegment
        Pilot body points; these swing about the riser pivot
    structure : tuple of MassSegment
        Canopy fabric and lines (weight and inertia)
    air : tuple of MassSegment
        Trapped air (inertia only)
    """
    pilot: Tuple[MassSegment, ...]
    structure: Tuple[MassSegment, ...] = ()
    air: Tuple[MassSegment, ...] = ()

    @property
    def weight_segments(self) -> List[MassSegment]:
        return list(self.pilot) + list(self.structure)

    @property
    def inertia_segments(self) -> List[MassSegment]:
        return list(self.pilot) + list(self.structure) + list(self.air)


class MassSets(NamedTuple):
    weight: List[MassSegment]
    inertia: List[MassSegment]


class PhysicalMass(NamedTuple):
    name: str
    mass: float
    position: np.ndarray


def calculate_inertia_components(masses: Sequence[float],
                                 positions: Sequence[np.ndarray]) -> InertiaComponents:
    """
    Inertia of point masses about the origin of `positions`.

    Parameters:
    -----------
    masses : sequence of float
        Point masses (kg)
    positions : sequence of array-like (3,)
        Positions (m)
    """
    Ixx = Iyy = Izz = Ixy = Ixz = Iyz = 0.0
    for m, pos in zip(masses, positions):
        x, y, z = pos
        Ixx += m * (y * y + z * z)
        Iyy += m * (x * x + z * z)
        Izz += m * (x * x + y * y)
        Ixy += m * x * y
        Ixz += m * x * z
        Iyz += m * y * z
    return InertiaComponents(Ixx, Iyy, Izz, Ixy, Ixz, Iyz)


def compute_center_of_mass(segments: Sequence[MassSegment], height: float = 1.875,
                           mass: float = 81.0) -> np.ndarray:
    """
    Center of mass in meters (NED body frame).

    Returns the origin for an empty or massless set.
    """
    total = 0.0
    moment = np.zeros(3)
    for seg in segments:
        m = seg.mass_ratio * mass
        total += m
        moment += m * np.asarray(seg.position, dtype=float) * height
    if total == 0.0:
        return np.zeros(3)
    return moment / total


def compute_inertia(segments: Sequence[MassSegment], height: float = 1.875,
                    mass: float = 81.0,
                    about: Optional[np.ndarray] = None) -> InertiaComponents:
    """
    Inertia of a mass set about a reference point.

    Parameters:
    -----------
    segments : sequence of MassSegment
    height : float
        Reference length used to denormalize positions (m)
    mass : float
        System mass the ratios refer to (kg)
    about : np.ndarray (3,), optional
        Reference point in meters. Defaults to the set's own center of mass.

    Returns:
    --------
    inertia : InertiaComponents
    """
    if not segments:
        return ZERO_INERTIA
    if about is None:
        about = compute_center_of_mass(segments, height, mass)
    about = np.asarray(about, dtype=float)

    masses = [seg.mass_ratio * mass for seg in segments]
    positions = [np.asarray(seg.position, dtype=float) * height - about for seg in segments]
    return calculate_inertia_components(masses, positions)


def inertia_tensor(components: InertiaComponents) -> np.ndarray:
    """
    3x3 inertia tensor.

    [[ Ixx, -Ixy, -Ixz],
     [-Ixy,  Iyy, -Iyz],
     [-Ixz, -Iyz,  Izz]]
    """
    c = components
    return np.array([
        [c.Ixx, -c.Ixy, -c.Ixz],
        [-c.Ixy, c.Iyy, -c.Iyz],
        [-c.Ixz, -c.Iyz, c.Izz],
    ])


def physical_mass_positions(segments: Sequence[MassSegment], height: float = 1.875,
                            mass: float = 81.0) -> List[PhysicalMass]:
    """Absolute masses (kg) and positions (m) for display or export."""
    return [
        PhysicalMass(seg.name, seg.mass_ratio * mass,
                     np.asarray(seg.position, dtype=float) * height)
        for seg in segments
    ]


def rotate_pilot_mass(model: VehicleMassModel, pilot_pitch_deg: float,
                      pivot: Optional[Tuple[float, float]], deploy: float = 1.0) -> MassSets:
    """
    Weight and inertia sets for a pilot pitch angle and deployment.

    Pilot points rotate about the riser pivot by `pilot_pitch_deg` in the
    x-z plane. Canopy points (structure and air) move forward
    and contract in span while the canopy is not fully deployed.

    Parameters:
    -----------
    model : VehicleMassModel
    pilot_pitch_deg : float
        Pilot swing angle (deg)
    pivot : tuple or None
        (x, z) riser attachment point, normalized NED. None keeps the pilot
        fixed.
    deploy : float
        Deployment fraction 0..1
    """
    pilot = list(model.pilot)
    if pivot is not None and abs(pilot_pitch_deg) >= 0.01:
        a = np.radians(pilot_pitch_deg)
        c, s = np.cos(a), np.sin(a)
        px, pz = pivot
        rotated = []
        for seg in pilot:
            x, y, z = seg.position
            dx, dz = x - px, z - pz
            rotated.append(replace(seg, position=(dx * c - dz * s + px, y, dx * s + dz * c + pz)))
        pilot = rotated

    structure = list(model.structure)
    air = list(model.air)
    if abs(deploy - 1.0) >= 0.001:
        d = max(0.0, min(1.0, deploy))
        span_scale = 0.1 + 0.9 * d
        chord_offset = DEPLOY_CHORD_OFFSET * (1.0 - d)

        def deployed(seg):
            x, y, z = seg.position
            return replace(seg, position=(x + chord_offset, y * span_scale, z))

        structure = [deployed(seg) for seg in structure]
        air = [deployed(seg) for seg in air]

    return MassSets(weight=pilot + structure, inertia=pilot + structure + air)
