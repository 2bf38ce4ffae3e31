"""
A5 six-segment wingsuit.

Segments: head (bluff body), center body, inner wings (r1/l1) and outer
wings (r2/l2). Chordwise stations are placed by system-chord fraction
measured from the CG; spanwise stations come from the 3D model scale.
"""

from typing import List

from ..aero.segments import (
    AeroSegment,
    make_wingsuit_head_segment,
    make_wingsuit_panel_segment,
)
from ..core.composite_frame import CompositeFrameConfig
from ..core.inertia import MassSegment, VehicleMassModel
from .polars import A5_CENTER, A5_INNER_WING, A5_OUTER_WING, A5_SEGMENTS


A5_SYS_CHORD = 1.8   # m
A5_CG_XC = 0.40      # CG as chord fraction
A5_HEIGHT = 1.875    # m, normalization length
MODEL_SPAN_SCALE = 0.2962

A5_HEAD_S = 0.07
A5_HEAD_CHORD = 0.13
A5_HEAD_CD = 0.42


def chord_station(xc: float) -> float:
    """Normalized x position of a system-chord fraction (positive forward of CG)."""
    return (A5_CG_XC - xc) * A5_SYS_CHORD / A5_HEIGHT


A5_HEAD_POS = (chord_station(0.13), 0.0, 0.0)
A5_CENTER_POS = (chord_station(0.46), 0.0, 0.0)
A5_INNER_X = chord_station(0.48)
A5_INNER_Y = 0.72 * MODEL_SPAN_SCALE
A5_OUTER_X = chord_station(0.37)
A5_OUTER_Y = 1.10 * MODEL_SPAN_SCALE


# name, mass ratio, x, |y|, z
_BODY_POINTS = [
    ('head', 0.14, 0.302049, 0.0, -0.01759),
    ('torso', 0.435, 0.078431, 0.0, 0.0),
    ('upper_arm', 0.0275, 0.174411, 0.158291, 0.0),
    ('forearm', 0.016, 0.141245, 0.247236, 0.0),
    ('hand', 0.008, 0.090994, 0.351759, 0.0),
    ('thigh', 0.1, -0.197951, 0.080402, 0.0),
    ('shin', 0.0465, -0.397951, 0.145729, 0.0),
    ('foot', 0.0145, -0.530112, 0.201005, -0.00503),
]


def _body_segments():
    segments = []
    for name, ratio, x, y, z in _BODY_POINTS:
        if y == 0.0:
            segments.append(MassSegment(name, ratio, (x, 0.0, z)))
        else:
            segments.append(MassSegment(f'right_{name}', ratio, (x, y, z)))
            segments.append(MassSegment(f'left_{name}', ratio, (x, -y, z)))
    return tuple(segments)


WINGSUIT_MASS_MODEL = VehicleMassModel(pilot=_body_segments())


def make_a5_aero_segments() -> List[AeroSegment]:
    """
    The six A5 segments.

    Roll sensitivity: center 0.3, inner wings 0.6 (constrained by the
    body), outer wings 1.0 (hands have the most freedom).
    """
    return [
        make_wingsuit_head_segment('head', A5_HEAD_POS, A5_HEAD_S, A5_HEAD_CHORD, A5_HEAD_CD),
        make_wingsuit_panel_segment('center', A5_CENTER_POS, 'center', A5_CENTER, 0.3, 'body'),
        make_wingsuit_panel_segment('r1', (A5_INNER_X, A5_INNER_Y, 0.0), 'right', A5_INNER_WING, 0.6, 'inner'),
        make_wingsuit_panel_segment('l1', (A5_INNER_X, -A5_INNER_Y, 0.0), 'left', A5_INNER_WING, 0.6, 'inner'),
        make_wingsuit_panel_segment('r2', (A5_OUTER_X, A5_OUTER_Y, 0.0), 'right', A5_OUTER_WING, 1.0, 'outer'),
        make_wingsuit_panel_segment('l2', (A5_OUTER_X, -A5_OUTER_Y, 0.0), 'left', A5_OUTER_WING, 1.0, 'outer'),
    ]


def wingsuit_frame_config(rho: float = 1.225) -> CompositeFrameConfig:
    """Composite frame recipe for the A5 wingsuit (no canopy, no pivot)."""
    return CompositeFrameConfig(
        polar=A5_SEGMENTS,
        aero_segments=tuple(make_a5_aero_segments()),
        mass_model=WINGSUIT_MASS_MODEL,
        pivot=None,
        height=A5_HEIGHT,
        rho=rho,
        canopy=False,
    )
