"""
Aero Segment Tests

Tests for segment kinds, deployment morphing, and the Ibex / A5 vehicle
segment sets.
"""

import pytest
import numpy as np
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from polarsim.aero.segments import (
    SegmentControls,
    SegmentKind,
    deploy_morph_polar,
    deploy_scales,
    make_parasitic_segment,
    make_wingsuit_panel_segment,
    rotate_about_pivot,
    segment_coefficients,
    segment_geometry,
)
from polarsim.aero.forces import compute_segment_force
from polarsim.vehicles.polars import A5_INNER_WING, CANOPY_CELL, IBEX_AREA
from polarsim.vehicles.ibex import (
    PILOT_AERO_POSITION,
    PILOT_PIVOT,
    make_ibex_aero_segments,
    make_pilot_segment,
)
from polarsim.vehicles.wingsuit import make_a5_aero_segments


def by_name(segments):
    return {seg.name: seg for seg in segments}


class TestSegmentKinds:
    """Test per-kind geometry and coefficients."""

    def test_parasitic_constant(self):
        seg = make_parasitic_segment('lines', (0.2, 0.0, -0.4), S=0.35, chord=0.01, cd=1.0)
        c1 = segment_coefficients(seg, 0.0, 0.0, SegmentControls())
        c2 = segment_coefficients(seg, 60.0, 20.0, SegmentControls())
        assert c1 == c2
        assert c1.cd == 1.0 and c1.cl == 0.0

    def test_ibex_segment_kinds(self):
        kinds = [seg.kind for seg in make_ibex_aero_segments()]
        assert kinds.count(SegmentKind.CANOPY_CELL) == 7
        assert kinds.count(SegmentKind.BRAKE_FLAP) == 6
        assert kinds.count(SegmentKind.PARASITIC) == 2
        assert kinds.count(SegmentKind.UNZIPPABLE_BLEND) == 1

    def test_slick_pilot_is_lifting_body(self):
        assert make_pilot_segment('slick').kind == SegmentKind.LIFTING_BODY

    def test_unknown_pilot_type(self):
        with pytest.raises(ValueError):
            make_pilot_segment('tandem')

    def test_cell_area_sums_to_canopy_area(self):
        cells = [seg for seg in make_ibex_aero_segments() if seg.kind == SegmentKind.CANOPY_CELL]
        assert np.isclose(sum(seg.S for seg in cells), IBEX_AREA)

    def test_evaluation_does_not_mutate(self):
        """Evaluating with brakes and partial deploy leaves the segment unchanged."""
        segments = make_ibex_aero_segments()
        before = [seg.position for seg in segments]
        controls = SegmentControls(brake_left=1.0, deploy=0.3, pilot_pitch=15.0)
        for seg in segments:
            segment_geometry(seg, controls)
            segment_coefficients(seg, 10.0, 5.0, controls)
        assert [seg.position for seg in segments] == before


class TestBrakeFlap:
    """Test trailing-edge flaps."""

    def test_zero_brake_zero_force(self):
        flaps = [seg for seg in make_ibex_aero_segments() if seg.kind == SegmentKind.BRAKE_FLAP]
        for flap in flaps:
            f = compute_segment_force(flap, 8.0, 0.0, SegmentControls(), 1.225, 12.0)
            assert f.lift == 0.0 and f.drag == 0.0 and f.side == 0.0
            assert segment_geometry(flap, SegmentControls()).S == 0.0

    def test_flap_grows_with_brake(self):
        flap = by_name(make_ibex_aero_segments())['flap_r3']
        half = segment_geometry(flap, SegmentControls(brake_right=0.5))
        full = segment_geometry(flap, SegmentControls(brake_right=1.0))
        assert 0.0 < half.S < full.S
        assert np.isclose(full.S, 0.30 * CANOPY_CELL.s)
        # CP moves forward from the trailing edge
        assert full.position[0] > half.position[0] > flap.position[0]

    def test_flap_only_sees_own_side(self):
        flap = by_name(make_ibex_aero_segments())['flap_l2']
        assert segment_geometry(flap, SegmentControls(brake_right=1.0)).S == 0.0
        assert segment_geometry(flap, SegmentControls(brake_left=1.0)).S > 0.0


class TestCanopyCell:
    """Test canopy cells: arc rotation, risers, deployment."""

    def test_center_cell_ignores_brakes(self):
        cell = by_name(make_ibex_aero_segments())['cell_c']
        clean = segment_coefficients(cell, 8.0, 0.0, SegmentControls())
        braked = segment_coefficients(cell, 8.0, 0.0, SegmentControls(brake_left=1.0, brake_right=1.0))
        assert clean == braked

    def test_mirror_cells_symmetric(self):
        segs = by_name(make_ibex_aero_segments())
        right = segment_coefficients(segs['cell_r2'], 8.0, 0.0, SegmentControls())
        left = segment_coefficients(segs['cell_l2'], 8.0, 0.0, SegmentControls())
        assert np.isclose(right.cl, left.cl)
        assert np.isclose(right.cd, left.cd)
        assert np.isclose(right.cy, -left.cy)

    def test_front_riser_reduces_alpha(self):
        cell = by_name(make_ibex_aero_segments())['cell_c']
        clean = segment_coefficients(cell, 8.0, 0.0, SegmentControls())
        riser = segment_coefficients(cell, 8.0, 0.0, SegmentControls(front_riser_left=1.0,
                                                                     front_riser_right=1.0))
        assert riser.cl < clean.cl

    def test_deploy_scales(self):
        d, span, chord, offset = deploy_scales(0.0)
        assert d == 0.0
        assert span == pytest.approx(0.1)
        assert chord == pytest.approx(0.3)
        assert offset == pytest.approx(0.15)

        assert np.allclose(deploy_scales(1.0), (1.0, 1.0, 1.0, 0.0))
        assert deploy_scales(2.0)[0] == 1.0

    def test_deploy_geometry(self):
        cell = by_name(make_ibex_aero_segments())['cell_r3']
        packed = segment_geometry(cell, SegmentControls(deploy=0.0))
        full = segment_geometry(cell, SegmentControls(deploy=1.0))
        assert np.isclose(packed.S, cell.S * 0.1 * 0.3)
        assert np.isclose(packed.position[1], 0.1 * cell.position[1])
        assert packed.position[0] > full.position[0]

    def test_deploy_morph_polar(self):
        packed = deploy_morph_polar(CANOPY_CELL, 0.0)
        assert np.isclose(packed.cd_0, 2.0 * CANOPY_CELL.cd_0)
        assert np.isclose(packed.cl_alpha, 0.3 * CANOPY_CELL.cl_alpha)
        assert np.isclose(packed.alpha_stall_fwd, CANOPY_CELL.alpha_stall_fwd - 17.0)
        assert deploy_morph_polar(CANOPY_CELL, 1.0) is CANOPY_CELL


class TestPilotSegment:
    """Test the hanging pilot."""

    def test_pivot_rotation_keeps_distance(self):
        x, z = PILOT_AERO_POSITION[0], PILOT_AERO_POSITION[2]
        xr, zr = rotate_about_pivot(x, z, PILOT_PIVOT, 20.0)
        d0 = np.hypot(x - PILOT_PIVOT[0], z - PILOT_PIVOT[1])
        d1 = np.hypot(xr - PILOT_PIVOT[0], zr - PILOT_PIVOT[1])
        assert np.isclose(d0, d1)

    def test_pilot_pitch_moves_position(self):
        pilot = make_pilot_segment()
        base = segment_geometry(pilot, SegmentControls())
        swung = segment_geometry(pilot, SegmentControls(pilot_pitch=20.0))
        assert np.allclose(base.position, PILOT_AERO_POSITION)
        assert not np.allclose(swung.position, base.position)
        assert np.isclose(swung.chord_rotation_rad, np.radians(20.0))

    def test_unzip_blends_area(self):
        pilot = make_pilot_segment('wingsuit')
        zipped = segment_geometry(pilot, SegmentControls(unzip=0.0))
        unzipped = segment_geometry(pilot, SegmentControls(unzip=1.0))
        half = segment_geometry(pilot, SegmentControls(unzip=0.5))
        assert np.isclose(zipped.S, 2.0)
        assert np.isclose(unzipped.S, 0.5)
        assert np.isclose(half.S, 1.25)


class TestWingsuitSegments:
    """Test the A5 wingsuit panels and head."""

    def test_a5_segment_set(self):
        segs = make_a5_aero_segments()
        assert [s.name for s in segs] == ['head', 'center', 'r1', 'l1', 'r2', 'l2']
        assert segs[0].kind == SegmentKind.WINGSUIT_HEAD

    def test_head_is_rudder(self):
        head = make_a5_aero_segments()[0]
        c = segment_coefficients(head, 10.0, 10.0, SegmentControls())
        assert c.cl == 0.0
        assert c.cy == pytest.approx(-0.5 * np.sin(np.radians(10.0)))

    def test_dihedral_tilts_lift(self):
        segs = by_name(make_a5_aero_segments())
        flat = segment_coefficients(segs['r2'], 10.0, 0.0, SegmentControls(dihedral=0.0))
        full = segment_coefficients(segs['r2'], 10.0, 0.0, SegmentControls(dihedral=1.0))
        assert segment_geometry(segs['r2'], SegmentControls(dihedral=1.0)).arc_angle_deg == 30.0
        assert full.cy > flat.cy
        assert full.cl < flat.cl

    def test_roll_throttle_is_differential(self):
        segs = by_name(make_a5_aero_segments())
        controls = SegmentControls(roll_throttle=1.0, dihedral=0.0)
        right = segment_coefficients(segs['r1'], 8.0, 0.0, controls)
        left = segment_coefficients(segs['l1'], 8.0, 0.0, controls)
        assert right.cl > left.cl

    def test_pitch_throttle_shifts_cp(self):
        center = by_name(make_a5_aero_segments())['center']
        neutral = segment_coefficients(center, 8.0, 0.0, SegmentControls())
        pitched = segment_coefficients(center, 8.0, 0.0, SegmentControls(pitch_throttle=1.0))
        assert pitched.cp == pytest.approx(neutral.cp + 0.13, abs=0.02)

    def test_yaw_throttle_shifts_body(self):
        center = by_name(make_a5_aero_segments())['center']
        geom = segment_geometry(center, SegmentControls(yaw_throttle=1.0))
        assert geom.position[1] == pytest.approx(0.03)

    def test_bad_wing_type(self):
        with pytest.raises(ValueError):
            make_wingsuit_panel_segment('x', (0, 0, 0), 'right', A5_INNER_WING, 1.0, 'tail')
