"""
Ibex UL canopy with a hanging pilot.

Seven arc-rotated cells, six brake flaps behind the outer cells, lines,
pilot chute and the pilot body. All positions are NED, normalized by the
1.875 m reference length, origin at the canopy-system reference point.

Mass model (81 kg system):
- pilot: 14-point body (77.5 kg), trimmed 6 deg nose-up under the risers
- structure: fabric and lines, 0.5 kg at each cell (3.5 kg)
- air: trapped air at each cell, inertia only
"""

from typing import List, Tuple

import numpy as np

from ..aero.segments import (
    AeroSegment,
    make_brake_flap_segment,
    make_canopy_cell_segment,
    make_lifting_body_segment,
    make_parasitic_segment,
    make_unzippable_segment,
)
from ..core.composite_frame import CompositeFrameConfig
from ..core.inertia import MassSegment, VehicleMassModel
from .polars import (
    AURAFIVE,
    BRAKE_FLAP,
    CANOPY_CELL,
    CANOPY_SYSTEM_MASS,
    IBEXUL,
    PILOT_MASS,
    SLICKSIN,
)


REFERENCE_LENGTH = 1.875  # m, pilot height

# Pilot placement under the canopy (normalized)
PILOT_FWD_SHIFT = 0.28
PILOT_DOWN_SHIFT = 0.163
TRIM_ANGLE_DEG = 6.0

STRUCTURE_MASS_PER_CELL = 0.5  # kg
AIR_MASS_PER_CELL = 0.011 * PILOT_MASS  # kg

PILOT_AERO_POSITION = (0.38, 0.0, 0.48)
PILOT_PITCH_OFFSET_DEG = 90.0


def _trim_rotate(x: float, z: float) -> Tuple[float, float]:
    """Rotate a point by the trim angle about the origin (4 decimals)."""
    a = np.radians(TRIM_ANGLE_DEG)
    c, s = np.cos(a), np.sin(a)
    return round(x * c + z * s, 4), round(-x * s + z * c, 4)


def _pilot_point(x: float, z: float) -> Tuple[float, float]:
    return _trim_rotate(x + PILOT_FWD_SHIFT, z + PILOT_DOWN_SHIFT)


# Riser attachment point the pilot swings about
PILOT_PIVOT = _trim_rotate(PILOT_FWD_SHIFT, PILOT_DOWN_SHIFT)

# name, mass ratio of pilot mass, x, |y|, z (pilot frame, before shift/trim)
_PILOT_BODY = [
    ('head', 0.14, 0.10, 0.0, 0.280),
    ('torso', 0.435, 0.10, 0.0, 0.480),
    ('upper_arm', 0.0275, 0.08, 0.090, 0.300),
    ('forearm', 0.016, 0.14, 0.080, 0.220),
    ('hand', 0.008, 0.18, 0.070, 0.160),
    ('thigh', 0.1, 0.10, 0.060, 0.720),
    ('shin', 0.0465, 0.08, 0.050, 0.900),
    ('foot', 0.0145, 0.06, 0.050, 1.010),
]

# Canopy mass stations: name, x, y, z
_CANOPY_STATIONS = [
    ('c', 0.165, 0.0, -1.196),
    ('r1', 0.161, 0.322, -1.162),
    ('l1', 0.161, -0.322, -1.162),
    ('r2', 0.151, 0.630, -1.062),
    ('l2', 0.151, -0.630, -1.062),
    ('r3', 0.134, 0.911, -0.901),
    ('l3', 0.134, -0.911, -0.901),
]


def _pilot_segments() -> Tuple[MassSegment, ...]:
    ratio_scale = PILOT_MASS / CANOPY_SYSTEM_MASS
    segments = []
    for name, ratio, x, y, z in _PILOT_BODY:
        px, pz = _pilot_point(x, z)
        if y == 0.0:
            segments.append(MassSegment(name, ratio * ratio_scale, (px, 0.0, pz)))
        else:
            segments.append(MassSegment(f'right_{name}', ratio * ratio_scale, (px, y, pz)))
            segments.append(MassSegment(f'left_{name}', ratio * ratio_scale, (px, -y, pz)))
    return tuple(segments)


def _canopy_segments(prefix: str, mass_per_cell: float) -> Tuple[MassSegment, ...]:
    ratio = mass_per_cell / CANOPY_SYSTEM_MASS
    return tuple(MassSegment(f'{prefix}_{name}', ratio, (x, y, z))
                 for name, x, y, z in _CANOPY_STATIONS)


IBEX_MASS_MODEL = VehicleMassModel(
    pilot=_pilot_segments(),
    structure=_canopy_segments('canopy_structure', STRUCTURE_MASS_PER_CELL),
    air=_canopy_segments('canopy_air', AIR_MASS_PER_CELL),
)


# ─── Aero segments ──────────────────────────────────────────────────────────

# name, (x, y, z), arc angle, side, brake sensitivity, riser sensitivity
IBEX_CELLS = [
    ('cell_c', (0.174, 0.0, -1.220), 0.0, 'center', 0.0, 1.0),
    ('cell_r1', (0.170, 0.358, -1.182), 12.0, 'right', 0.4, 1.0),
    ('cell_l1', (0.170, -0.358, -1.182), -12.0, 'left', 0.4, 1.0),
    ('cell_r2', (0.162, 0.735, -1.114), 24.0, 'right', 0.7, 1.0),
    ('cell_l2', (0.162, -0.735, -1.114), -24.0, 'left', 0.7, 1.0),
    ('cell_r3', (0.145, 1.052, -0.954), 36.0, 'right', 1.0, 1.0),
    ('cell_l3', (0.145, -1.052, -0.954), -36.0, 'left', 1.0, 1.0),
]

# name, trailing edge (x, y, z), arc angle, side, brake sensitivity,
# flap chord fraction, parent cell x
IBEX_FLAPS = [
    ('flap_r1', (-0.664, 0.358, -1.162), 12.0, 'right', 0.4, 0.10, 0.170),
    ('flap_l1', (-0.664, -0.358, -1.162), -12.0, 'left', 0.4, 0.10, 0.170),
    ('flap_r2', (-0.672, 0.735, -1.062), 24.0, 'right', 0.7, 0.20, 0.162),
    ('flap_l2', (-0.672, -0.735, -1.062), -24.0, 'left', 0.7, 0.20, 0.162),
    ('flap_r3', (-0.689, 1.052, -0.901), 36.0, 'right', 1.0, 0.30, 0.145),
    ('flap_l3', (-0.689, -1.052, -0.901), -36.0, 'left', 1.0, 0.30, 0.145),
]

PILOT_TYPES = ('wingsuit', 'slick')


def make_pilot_segment(pilot_type: str = 'wingsuit') -> AeroSegment:
    """
    Pilot body hanging under the canopy.

    A wingsuit pilot blends from the zipped Aura 5 polar to the slick
    skydiver polar as controls.unzip goes 0 -> 1.
    """
    if pilot_type == 'wingsuit':
        return make_unzippable_segment('pilot', PILOT_AERO_POSITION, AURAFIVE, SLICKSIN,
                                       PILOT_PITCH_OFFSET_DEG, PILOT_PIVOT)
    if pilot_type == 'slick':
        return make_lifting_body_segment('pilot', PILOT_AERO_POSITION, SLICKSIN,
                                         PILOT_PITCH_OFFSET_DEG, PILOT_PIVOT)
    raise ValueError(f"Unknown pilot type '{pilot_type}'. Available: {list(PILOT_TYPES)}")


def make_ibex_aero_segments(pilot_type: str = 'wingsuit') -> List[AeroSegment]:
    """
    All aero segments of the Ibex UL system.

    Parameters:
    -----------
    pilot_type : str
        'wingsuit' or 'slick'

    Returns:
    --------
    segments : list of AeroSegment
        7 cells, 6 flaps, lines, pilot chute and pilot (15 total)
    """
    segments = [
        make_canopy_cell_segment(name, pos, arc, side, brake, riser, CANOPY_CELL)
        for name, pos, arc, side, brake, riser in IBEX_CELLS
    ]

    segments += [
        make_brake_flap_segment(name, te, arc, side, brake, fraction,
                                CANOPY_CELL.s, CANOPY_CELL.chord, parent_x,
                                BRAKE_FLAP, REFERENCE_LENGTH)
        for name, te, arc, side, brake, fraction, parent_x in IBEX_FLAPS
    ]

    segments.append(make_parasitic_segment('lines', (0.23, 0.0, -0.40), S=0.35, chord=0.01, cd=1.0))
    segments.append(make_parasitic_segment('pc', (0.10, 0.0, -1.30), S=0.732, chord=0.01, cd=1.0))
    segments.append(make_pilot_segment(pilot_type))
    return segments


def ibex_frame_config(pilot_type: str = 'wingsuit', rho: float = 1.225) -> CompositeFrameConfig:
    """Composite frame recipe for the Ibex UL system."""
    return CompositeFrameConfig(
        polar=IBEXUL,
        aero_segments=tuple(make_ibex_aero_segments(pilot_type)),
        mass_model=IBEX_MASS_MODEL,
        pivot=PILOT_PIVOT,
        height=REFERENCE_LENGTH,
        rho=rho,
        canopy=True,
    )


if __name__ == "__main__":
    from ..core.composite_frame import build_composite_frame

    frame = build_composite_frame(ibex_frame_config())
    print("Ibex UL system")
    print(f"  segments:   {len(frame.aero_segments)}")
    print(f"  mass:       {frame.total_mass:.1f} kg")
    print(f"  CG:         {frame.cg} m")
    print(f"  Ixx/Iyy/Izz {frame.inertia.Ixx:.1f} / {frame.inertia.Iyy:.1f} / {frame.inertia.Izz:.1f} kg*m^2")
    print(f"  apparent:   {frame.apparent_mass.mass}")
