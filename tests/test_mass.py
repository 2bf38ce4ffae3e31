"""
Mass Model Tests

Tests for point-mass inertia, apparent mass, the pilot pendulum and the
composite vehicle frame.
"""

import pytest
import numpy as np
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from polarsim.core.inertia import (
    MassSegment,
    VehicleMassModel,
    calculate_inertia_components,
    compute_center_of_mass,
    compute_inertia,
    inertia_tensor,
    physical_mass_positions,
    rotate_pilot_mass,
)
from polarsim.core.apparent_mass import (
    apparent_mass_at_deploy,
    canopy_geometry_from_polar,
    compute_apparent_inertia,
    compute_apparent_mass,
    effective_mass,
)
from polarsim.core.pendulum import (
    compute_pilot_pendulum_params,
    pilot_pendulum_eom,
    pilot_swing_damping_torque,
)
from polarsim.core.composite_frame import (
    build_composite_frame,
    frame_needs_rebuild,
    frame_to_sim_config,
)
from polarsim.aero.segments import SegmentControls
from polarsim.vehicles.polars import CANOPY_SYSTEM_MASS, IBEXUL, PILOT_MASS
from polarsim.vehicles.ibex import IBEX_MASS_MODEL, PILOT_PIVOT, ibex_frame_config
from polarsim.vehicles.wingsuit import WINGSUIT_MASS_MODEL, wingsuit_frame_config


def distance_to_pivot(seg, pivot):
    return np.hypot(seg.position[0] - pivot[0], seg.position[2] - pivot[1])


class TestMassModels:
    """Test the vehicle mass distributions."""

    def test_ibex_weight_ratios_sum_to_one(self):
        total = sum(seg.mass_ratio for seg in IBEX_MASS_MODEL.weight_segments)
        assert total == pytest.approx(1.0)

    def test_ibex_pilot_mass(self):
        pilot = sum(seg.mass_ratio for seg in IBEX_MASS_MODEL.pilot) * CANOPY_SYSTEM_MASS
        assert pilot == pytest.approx(PILOT_MASS)

    def test_air_is_inertia_only(self):
        weight = {seg.name for seg in IBEX_MASS_MODEL.weight_segments}
        inertia = {seg.name for seg in IBEX_MASS_MODEL.inertia_segments}
        air = {seg.name for seg in IBEX_MASS_MODEL.air}
        assert air and not (air & weight)
        assert air <= inertia

    def test_wingsuit_ratios_sum_to_one(self):
        total = sum(seg.mass_ratio for seg in WINGSUIT_MASS_MODEL.weight_segments)
        assert total == pytest.approx(1.0)
        assert not WINGSUIT_MASS_MODEL.air

    def test_mirror_symmetry(self):
        """Every off-center point has a mirrored partner."""
        for model in (IBEX_MASS_MODEL, WINGSUIT_MASS_MODEL):
            cg = compute_center_of_mass(model.weight_segments)
            assert cg[1] == pytest.approx(0.0, abs=1e-12)


class TestInertia:
    """Test center of mass and inertia about the CG."""

    def test_two_point_masses(self):
        segs = [MassSegment('a', 0.5, (1.0, 0.0, 0.0)), MassSegment('b', 0.5, (-1.0, 0.0, 0.0))]
        cg = compute_center_of_mass(segs, height=1.0, mass=10.0)
        I = compute_inertia(segs, height=1.0, mass=10.0)
        assert np.allclose(cg, 0.0)
        assert I.Ixx == pytest.approx(0.0)
        assert I.Iyy == pytest.approx(10.0)
        assert I.Izz == pytest.approx(10.0)

    def test_parallel_axis(self):
        """Inertia about the CG is the minimum over parallel axes."""
        segs = IBEX_MASS_MODEL.inertia_segments
        about_cg = compute_inertia(segs)
        about_origin = compute_inertia(segs, about=np.zeros(3))
        assert about_cg.Iyy < about_origin.Iyy
        assert about_cg.Ixx <= about_origin.Ixx

    def test_empty_set(self):
        assert compute_center_of_mass([]).tolist() == [0.0, 0.0, 0.0]
        assert compute_inertia([]).Ixx == 0.0

    def test_product_sign(self):
        I = calculate_inertia_components([2.0], [np.array([1.0, 0.0, 3.0])])
        assert I.Ixz == pytest.approx(6.0)
        T = inertia_tensor(I)
        assert T[0, 2] == pytest.approx(-6.0)
        assert np.allclose(T, T.T)

    def test_ibex_inertia_positive_definite(self):
        frame = build_composite_frame(ibex_frame_config())
        T = inertia_tensor(frame.inertia)
        assert np.all(np.linalg.eigvalsh(T) > 0.0)
        # Tall pendulum: pitch and roll inertia dominate yaw
        assert frame.inertia.Iyy > frame.inertia.Izz

    def test_physical_positions(self):
        rows = physical_mass_positions(IBEX_MASS_MODEL.pilot)
        assert sum(r.mass for r in rows) == pytest.approx(PILOT_MASS)


class TestPilotRotation:
    """Test pilot swing and deployment morphing of the mass sets."""

    def test_rotation_keeps_pivot_distance(self):
        sets = rotate_pilot_mass(IBEX_MASS_MODEL, 25.0, PILOT_PIVOT)
        for before, after in zip(IBEX_MASS_MODEL.pilot, sets.weight):
            assert distance_to_pivot(after, PILOT_PIVOT) == pytest.approx(distance_to_pivot(before, PILOT_PIVOT))

    def test_zero_pitch_is_noop(self):
        sets = rotate_pilot_mass(IBEX_MASS_MODEL, 0.0, PILOT_PIVOT)
        assert sets.weight == IBEX_MASS_MODEL.weight_segments
        assert sets.inertia == IBEX_MASS_MODEL.inertia_segments

    def test_no_pivot_is_noop(self):
        sets = rotate_pilot_mass(WINGSUIT_MASS_MODEL, 30.0, None)
        assert sets.weight == WINGSUIT_MASS_MODEL.weight_segments

    def test_canopy_unaffected_by_pilot_pitch(self):
        sets = rotate_pilot_mass(IBEX_MASS_MODEL, 30.0, PILOT_PIVOT)
        n = len(IBEX_MASS_MODEL.pilot)
        assert sets.weight[n:] == list(IBEX_MASS_MODEL.structure)

    def test_deploy_moves_canopy_only(self):
        sets = rotate_pilot_mass(IBEX_MASS_MODEL, 0.0, PILOT_PIVOT, deploy=0.0)
        n = len(IBEX_MASS_MODEL.pilot)
        assert sets.weight[:n] == list(IBEX_MASS_MODEL.pilot)
        for before, after in zip(IBEX_MASS_MODEL.structure, sets.weight[n:]):
            assert after.position[0] > before.position[0]
            assert after.position[1] == pytest.approx(0.1 * before.position[1])
            assert after.position[2] == before.position[2]


class TestApparentMass:
    """Test flat-plate apparent mass."""

    geom = canopy_geometry_from_polar(IBEXUL.s, IBEXUL.chord)

    def test_geometry(self):
        assert self.geom.span * self.geom.chord == pytest.approx(IBEXUL.s)

    def test_linear_in_rho(self):
        a = compute_apparent_mass(self.geom, 1.0)
        b = compute_apparent_mass(self.geom, 2.0)
        assert np.allclose(b.as_array(), 2.0 * a.as_array())
        ia = compute_apparent_inertia(self.geom, 1.0)
        ib = compute_apparent_inertia(self.geom, 2.0)
        assert ib.Ixx == pytest.approx(2.0 * ia.Ixx)

    def test_axis_ordering(self):
        """Chordwise is smallest; spanwise exceeds normal for a span > chord canopy."""
        m = compute_apparent_mass(self.geom)
        assert m.x < m.z < m.y
        assert m.x > 0.0

    def test_deploy_endpoints(self):
        full = compute_apparent_mass(self.geom)
        packed = apparent_mass_at_deploy(self.geom, 0.0).mass
        half = apparent_mass_at_deploy(self.geom, 0.5).mass
        done = apparent_mass_at_deploy(self.geom, 1.0).mass
        assert packed.z < 0.1 * full.z
        assert packed.z < half.z < full.z
        assert np.allclose(done.as_array(), full.as_array())

    def test_effective_mass(self):
        m = compute_apparent_mass(self.geom)
        eff = effective_mass(81.0, m)
        assert np.allclose(eff, 81.0 + m.as_array())


class TestPendulum:
    """Test the pilot pitch pendulum."""

    params = compute_pilot_pendulum_params(IBEX_MASS_MODEL.pilot, PILOT_PIVOT,
                                           total_weight=CANOPY_SYSTEM_MASS)

    def test_params(self):
        assert self.params.pilot_mass == pytest.approx(PILOT_MASS)
        assert self.params.Iy_riser > 0.0
        assert self.params.riser_to_cg > 0.0
        # Pilot hangs below the pivot
        assert self.params.cg_offset[1] > 0.0

    def test_restoring_torque(self):
        assert pilot_pendulum_eom(self.params, 0.2, 0.0, 0.0) < 0.0
        assert pilot_pendulum_eom(self.params, -0.2, 0.0, 0.0) > 0.0
        assert pilot_pendulum_eom(self.params, 0.1, 0.1, 0.0) == pytest.approx(0.0)

    def test_canopy_acceleration_drags_pilot(self):
        assert pilot_pendulum_eom(self.params, 0.0, 0.0, 0.0, q_dot_canopy=1.0) == pytest.approx(-1.0)

    def test_damping_opposes_rate(self):
        assert pilot_swing_damping_torque(IBEX_MASS_MODEL.pilot, PILOT_PIVOT, 1.0) < 0.0
        assert pilot_swing_damping_torque(IBEX_MASS_MODEL.pilot, PILOT_PIVOT, -1.0) > 0.0
        assert pilot_swing_damping_torque(IBEX_MASS_MODEL.pilot, PILOT_PIVOT, 0.0) == 0.0


class TestCompositeFrame:
    """Test vehicle assembly and frame caching."""

    def test_ibex_frame(self):
        frame = build_composite_frame(ibex_frame_config())
        assert frame.total_mass == pytest.approx(81.0)
        assert np.all(frame.effective_mass > 81.0)
        assert frame.effective_inertia.Ixx > frame.inertia.Ixx
        assert len(frame.aero_segments) == 15
        # CG sits between canopy (above) and pilot (below), close to the pilot
        assert 0.0 < frame.cg[2]

    def test_wingsuit_frame_has_no_apparent_mass(self):
        frame = build_composite_frame(wingsuit_frame_config())
        assert frame.canopy_geometry is None
        assert np.allclose(frame.effective_mass, frame.total_mass)
        assert frame.total_mass == pytest.approx(PILOT_MASS)

    def test_partial_deploy_reduces_apparent_mass(self):
        full = build_composite_frame(ibex_frame_config(), deploy=1.0)
        partial = build_composite_frame(ibex_frame_config(), deploy=0.3)
        assert partial.apparent_mass.mass.z < full.apparent_mass.mass.z

    def test_pilot_pitch_moves_cg(self):
        base = build_composite_frame(ibex_frame_config())
        swung = build_composite_frame(ibex_frame_config(), pilot_pitch=20.0)
        assert not np.allclose(base.cg, swung.cg)
        assert swung.total_mass == base.total_mass

    def test_needs_rebuild(self):
        frame = build_composite_frame(ibex_frame_config(), deploy=0.5, pilot_pitch=10.0)
        assert frame_needs_rebuild(None, 1.0, 0.0)
        assert not frame_needs_rebuild(frame, 0.5, 10.0)
        assert frame_needs_rebuild(frame, 0.6, 10.0)
        assert frame_needs_rebuild(frame, 0.5, 10.5)

    def test_sim_config(self):
        frame = build_composite_frame(ibex_frame_config())
        with_am = frame_to_sim_config(frame, SegmentControls())
        without = frame_to_sim_config(frame, SegmentControls(), use_apparent_mass=False)
        assert with_am.mass_per_axis is not None
        assert without.mass_per_axis is None
        assert with_am.inertia[0, 0] > without.inertia[0, 0]
        assert with_am.mass == without.mass == pytest.approx(81.0)
