"""
Segment Force Summation Tests

Tests for the wind frame, the static and rotating-frame (omega x r) force
paths, rate damping and left/right control symmetry.
"""

import pytest
import numpy as np
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from polarsim.aero.segments import SegmentControls
from polarsim.aero.forces import (
    compute_wind_frame,
    evaluate_aero_forces,
    evaluate_aero_forces_detailed,
    evaluate_static,
    local_flow,
)
from polarsim.core.composite_frame import build_composite_frame
from polarsim.vehicles.ibex import ibex_frame_config
from polarsim.vehicles.wingsuit import wingsuit_frame_config


RHO = 1.225


def body_velocity(airspeed, alpha_deg, beta_deg):
    a, b = np.radians(alpha_deg), np.radians(beta_deg)
    return airspeed * np.array([np.cos(a) * np.cos(b), np.sin(b), np.sin(a) * np.cos(b)])


@pytest.fixture(scope='module')
def ibex_frame():
    return build_composite_frame(ibex_frame_config())


@pytest.fixture(scope='module')
def wingsuit_frame():
    return build_composite_frame(wingsuit_frame_config())


class TestWindFrame:
    """Test wind-axis direction vectors."""

    @pytest.mark.parametrize('alpha,beta', [(0, 0), (10, 0), (30, 15), (-20, -10), (120, 40)])
    def test_orthonormal(self, alpha, beta):
        f = compute_wind_frame(alpha, beta)
        m = np.vstack([f.wind, f.lift, f.side])
        assert np.allclose(m @ m.T, np.eye(3), atol=1e-12)

    def test_level_flight(self):
        f = compute_wind_frame(0.0, 0.0)
        assert np.allclose(f.wind, [1, 0, 0])
        assert np.allclose(f.lift, [0, 0, -1])

    def test_alpha_ninety(self):
        f = compute_wind_frame(90.0, 0.0)
        assert np.allclose(f.lift, [-1, 0, 0], atol=1e-12)


class TestLocalFlow:
    """Test the per-segment local velocity."""

    def test_zero_airspeed_guard(self):
        v, V, alpha, beta = local_flow(np.zeros(3), np.zeros(3), np.array([1.0, 0.0, 0.0]))
        assert V == 0.0 and alpha == 0.0 and beta == 0.0

    def test_rotation_adds_velocity(self):
        v, V, alpha, beta = local_flow(np.array([10.0, 0.0, 0.0]), np.array([0.0, 0.0, 1.0]),
                                       np.array([0.0, 2.0, 0.0]))
        # omega x r = (0,0,1) x (0,2,0) = (-2, 0, 0)
        assert np.allclose(v, [8.0, 0.0, 0.0])
        assert V == pytest.approx(8.0)


class TestRotatingFrameCorrection:
    """omega = 0 must reproduce the static evaluation."""

    @pytest.mark.parametrize('alpha,beta', [(0, 0), (8, 0), (15, 5), (-5, -12), (40, 20)])
    @pytest.mark.parametrize('controls', [
        SegmentControls(),
        SegmentControls(brake_left=0.6, brake_right=0.2),
        SegmentControls(front_riser_right=0.5, pilot_pitch=10.0, unzip=0.3),
    ])
    def test_ibex_static_equivalence(self, ibex_frame, alpha, beta, controls):
        V = 12.0
        static = evaluate_static(ibex_frame.aero_segments, alpha, beta, controls,
                                 ibex_frame.cg, ibex_frame.height, RHO, V)
        dynamic = evaluate_aero_forces(ibex_frame.aero_segments, ibex_frame.cg, ibex_frame.height,
                                       body_velocity(V, alpha, beta), np.zeros(3), controls, RHO)
        assert np.allclose(static.force, dynamic.force, atol=1e-8)
        assert np.allclose(static.moment, dynamic.moment, atol=1e-8)

    def test_wingsuit_static_equivalence(self, wingsuit_frame):
        controls = SegmentControls(roll_throttle=0.4, yaw_throttle=-0.3)
        static = evaluate_static(wingsuit_frame.aero_segments, 10.0, 3.0, controls,
                                 wingsuit_frame.cg, wingsuit_frame.height, RHO, 40.0)
        dynamic = evaluate_aero_forces(wingsuit_frame.aero_segments, wingsuit_frame.cg,
                                       wingsuit_frame.height, body_velocity(40.0, 10.0, 3.0),
                                       np.zeros(3), controls, RHO)
        assert np.allclose(static.force, dynamic.force, atol=1e-8)
        assert np.allclose(static.moment, dynamic.moment, atol=1e-8)

    def test_detailed_breakdown(self, ibex_frame):
        total, per_segment = evaluate_aero_forces_detailed(
            ibex_frame.aero_segments, ibex_frame.cg, ibex_frame.height,
            body_velocity(12.0, 8.0, 0.0), np.array([0.0, 0.0, 0.5]), SegmentControls(), RHO)
        assert len(per_segment) == len(ibex_frame.aero_segments)
        speeds = {r.name: r.local_airspeed for r in per_segment}
        # Yawing right: left tip moves faster than right tip
        assert speeds['cell_l3'] > speeds['cell_r3']


class TestRateDamping:
    """Body rates produce opposing moments."""

    def _moment(self, frame, omega, airspeed=12.0, alpha=8.0):
        return evaluate_aero_forces(frame.aero_segments, frame.cg, frame.height,
                                    body_velocity(airspeed, alpha, 0.0), np.asarray(omega, dtype=float),
                                    SegmentControls(), RHO).moment

    def test_roll_damping(self, ibex_frame):
        dM = self._moment(ibex_frame, [0.3, 0, 0]) - self._moment(ibex_frame, [0, 0, 0])
        assert dM[0] < 0

    def test_pitch_damping(self, ibex_frame):
        dM = self._moment(ibex_frame, [0, 0.3, 0]) - self._moment(ibex_frame, [0, 0, 0])
        assert dM[1] < 0

    def test_yaw_damping(self, ibex_frame):
        dM = self._moment(ibex_frame, [0, 0, 0.3]) - self._moment(ibex_frame, [0, 0, 0])
        assert dM[2] < 0

    def test_wingsuit_roll_damping(self, wingsuit_frame):
        dM = (self._moment(wingsuit_frame, [0.5, 0, 0], airspeed=40.0)
              - self._moment(wingsuit_frame, [0, 0, 0], airspeed=40.0))
        assert dM[0] < 0


class TestControlSymmetry:
    """Symmetric inputs give no roll/yaw; mirrored inputs give mirrored moments."""

    def _system(self, frame, controls):
        return evaluate_static(frame.aero_segments, 8.0, 0.0, controls,
                               frame.cg, frame.height, RHO, 12.0)

    def test_symmetric_brakes(self, ibex_frame):
        s = self._system(ibex_frame, SegmentControls(brake_left=0.7, brake_right=0.7))
        assert abs(s.moment[0]) < 1e-6
        assert abs(s.moment[2]) < 1e-6
        assert abs(s.force[1]) < 1e-6

    def test_opposite_brakes(self, ibex_frame):
        left = self._system(ibex_frame, SegmentControls(brake_left=1.0))
        right = self._system(ibex_frame, SegmentControls(brake_right=1.0))
        assert abs(left.moment[0]) > 1e-3
        assert np.isclose(left.moment[0], -right.moment[0], rtol=1e-6, atol=1e-9)
        assert np.isclose(left.moment[2], -right.moment[2], rtol=1e-6, atol=1e-9)
        assert np.isclose(left.moment[1], right.moment[1], rtol=1e-6, atol=1e-9)

    def test_opposite_risers(self, ibex_frame):
        left = self._system(ibex_frame, SegmentControls(front_riser_left=1.0))
        right = self._system(ibex_frame, SegmentControls(front_riser_right=1.0))
        assert np.isclose(left.moment[0], -right.moment[0], rtol=1e-6, atol=1e-9)
        assert np.isclose(left.moment[2], -right.moment[2], rtol=1e-6, atol=1e-9)

    def test_opposite_roll_throttle(self, wingsuit_frame):
        def system(roll):
            return evaluate_static(wingsuit_frame.aero_segments, 10.0, 0.0,
                                   SegmentControls(roll_throttle=roll), wingsuit_frame.cg,
                                   wingsuit_frame.height, RHO, 40.0)
        pos, neg = system(1.0), system(-1.0)
        assert np.isclose(pos.moment[0], -neg.moment[0], rtol=1e-6, atol=1e-9)
