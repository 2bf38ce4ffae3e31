"""
Aerodynamic Model Tests

Tests for the continuous polar, Kirchhoff separation, the coefficient
blender and the alpha sweeps.
"""

import pytest
import numpy as np
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from polarsim.aero.polar import (
    SymmetricControl,
    apply_control,
    apply_all_controls,
    lerp_polar,
    polar_from_dict,
    polar_to_dict,
    validate_polar,
)
from polarsim.aero.kirchhoff import (
    separation,
    sigmoid,
    cl_plate,
    cd_plate,
    cp_plate,
)
from polarsim.aero.coefficients import (
    get_all_coefficients,
    get_cl,
    get_cd,
    get_cp,
    coeff_to_forces,
    coeff_to_ss,
    net_force_to_pseudo,
)
from polarsim.aero.sweep import sweep_polar, sweep_segments, alpha_range, SWEEP_COLUMNS
from polarsim.aero.segments import SegmentControls
from polarsim.vehicles.polars import (
    AURAFIVE,
    CANOPY_CELL,
    CONTINUOUS_POLARS,
    IBEXUL,
    SLICKSIN,
    get_polar,
)
from polarsim.vehicles.ibex import make_ibex_aero_segments
from dataclasses import replace


ALL_POLARS = list(CONTINUOUS_POLARS.values()) + [CANOPY_CELL]


class TestPolar:
    """Test polar data model and control morphing."""

    def test_registry_polars_are_valid(self):
        """Every registered polar passes validation."""
        for name in CONTINUOUS_POLARS:
            assert get_polar(name).name

    def test_unknown_polar_raises(self):
        with pytest.raises(ValueError):
            get_polar('not_a_wing')

    def test_validate_rejects_bad_polar(self):
        """Negative drag and inverted stall angles are reported together."""
        bad = replace(AURAFIVE, cd_0=-0.1, alpha_stall_back=40.0)
        with pytest.raises(ValueError) as excinfo:
            validate_polar(bad)
        assert 'cd_0' in str(excinfo.value)
        assert 'alpha_stall_back' in str(excinfo.value)

    def test_apply_control_linear(self):
        """param_eff = param + amount * delta."""
        control = SymmetricControl(d_alpha_0=-4.0, d_cd_0=0.1, cm_delta=-0.04)
        p = apply_control(AURAFIVE, control, 0.5)

        assert np.isclose(p.alpha_0, AURAFIVE.alpha_0 - 2.0)
        assert np.isclose(p.cd_0, AURAFIVE.cd_0 + 0.05)
        assert np.isclose(p.cm_0, AURAFIVE.cm_0 - 0.02)
        assert p.cl_alpha == AURAFIVE.cl_alpha

    def test_apply_control_zero_amount_is_identity(self):
        assert apply_control(AURAFIVE, AURAFIVE.controls['brake'], 0.0) is AURAFIVE

    def test_apply_all_controls_brake_then_dirty(self):
        p = apply_all_controls(AURAFIVE, 1.0, 1.0)
        brake = AURAFIVE.controls['brake']
        dirty = AURAFIVE.controls['dirty']
        assert np.isclose(p.cd_0, AURAFIVE.cd_0 + brake.d_cd_0 + dirty.d_cd_0)
        assert np.isclose(p.cp_0, AURAFIVE.cp_0 + brake.d_cp_0 + dirty.d_cp_0)

    def test_no_controls_is_noop(self):
        """A polar without control blocks is unchanged by delta and dirty."""
        assert apply_all_controls(SLICKSIN, 1.0, 1.0) is SLICKSIN

    def test_lerp_endpoints(self):
        """t = 0 gives polar_a, t = 1 gives polar_b on every scalar."""
        a = lerp_polar(0.0, AURAFIVE, SLICKSIN)
        b = lerp_polar(1.0, AURAFIVE, SLICKSIN)
        for name in ('cl_alpha', 'cd_0', 'k', 's', 'chord', 'cg', 'cp_lateral'):
            assert np.isclose(getattr(a, name), getattr(AURAFIVE, name))
            assert np.isclose(getattr(b, name), getattr(SLICKSIN, name))

    def test_lerp_midpoint(self):
        mid = lerp_polar(0.5, AURAFIVE, SLICKSIN)
        assert np.isclose(mid.cd_0, 0.5 * (AURAFIVE.cd_0 + SLICKSIN.cd_0))
        assert mid.name == AURAFIVE.name

    def test_dict_round_trip(self):
        data = polar_to_dict(IBEXUL)
        polar = polar_from_dict(data)
        assert polar == IBEXUL

    def test_dict_unknown_field_raises(self):
        data = polar_to_dict(AURAFIVE)
        data['wingspan'] = 2.0
        with pytest.raises(ValueError):
            polar_from_dict(data)


class TestKirchhoff:
    """Test separation function and flat-plate sub-models."""

    def test_sigmoid_no_overflow(self):
        assert sigmoid(1e6) == pytest.approx(0.0)
        assert sigmoid(-1e6) == pytest.approx(1.0)

    def test_attached_between_stall_angles(self):
        """f ~ 1 well inside the attached range."""
        steep = replace(AURAFIVE, s1_fwd=0.5, s1_back=0.5)
        for alpha in (-20.0, 0.0, 10.0, 25.0):
            assert separation(alpha, steep) > 0.99

    def test_monotonic_beyond_stall(self):
        """f non-increasing above the forward stall and below the back stall."""
        for polar in ALL_POLARS:
            fwd = separation(np.linspace(polar.alpha_stall_fwd, 180.0, 200), polar)
            back = separation(np.linspace(polar.alpha_stall_back, -180.0, 200), polar)
            assert np.all(np.diff(fwd) <= 1e-12)
            assert np.all(np.diff(back) <= 1e-12)

    def test_flat_plate_at_zero(self):
        assert cl_plate(0.0, 1.2) == pytest.approx(0.0)
        assert cd_plate(0.0, 1.2, 0.05) == pytest.approx(0.05)

    def test_flat_plate_at_ninety(self):
        assert cl_plate(90.0, 1.2) == pytest.approx(0.0, abs=1e-12)
        assert cd_plate(90.0, 1.2, 0.05) == pytest.approx(1.2)
        assert cp_plate(90.0) == pytest.approx(0.5)


class TestCoefficients:
    """Test the blended coefficient set."""

    @pytest.mark.parametrize('polar', ALL_POLARS, ids=lambda p: p.name)
    def test_full_envelope_finite_and_cd_positive(self, polar):
        """CD >= 0 and everything finite over the whole sphere."""
        for alpha in np.arange(-180.0, 181.0, 15.0):
            for beta in np.arange(-90.0, 91.0, 15.0):
                c = get_all_coefficients(alpha, beta, 0.0, polar)
                values = [c.cl, c.cd, c.cy, c.cm, c.cn, c.cl_roll, c.cp, c.f]
                assert np.all(np.isfinite(values))
                assert c.cd >= 0.0
                assert 0.0 <= c.cp <= 1.0

    def test_matches_individual_getters(self):
        c = get_all_coefficients(12.0, 5.0, 0.0, AURAFIVE)
        assert c.cl == pytest.approx(get_cl(12.0, 5.0, AURAFIVE))
        assert c.cd == pytest.approx(get_cd(12.0, 5.0, AURAFIVE))
        assert c.cp == pytest.approx(get_cp(12.0, AURAFIVE))

    def test_full_sideslip(self):
        """At beta = 90 lift vanishes and drag is the lateral flat-plate value."""
        c = get_all_coefficients(10.0, 90.0, 0.0, IBEXUL)
        assert c.cl == pytest.approx(0.0, abs=1e-12)
        assert c.cd == pytest.approx(IBEXUL.cd_n_lateral)

    def test_brake_increases_drag(self):
        clean = get_all_coefficients(5.0, 0.0, 0.0, IBEXUL)
        braked = get_all_coefficients(5.0, 0.0, 1.0, IBEXUL)
        assert braked.cd > clean.cd
        assert braked.cm < clean.cm

    def test_coeff_to_forces(self):
        f = coeff_to_forces(1.0, 0.2, 0.0, 2.0, 77.5, 1.225, 10.0)
        assert f['lift'] == pytest.approx(0.5 * 1.225 * 100.0 * 2.0)
        assert f['drag'] == pytest.approx(0.2 * f['lift'])
        assert f['weight'] == pytest.approx(77.5 * 9.80665)

    def test_sustained_speeds_balance_weight(self):
        """Total aero force at the sustained speed equals weight."""
        cl, cd = 0.8, 0.3
        vxs, vys = coeff_to_ss(cl, cd, 2.0, 77.5, 1.225)
        v2 = vxs ** 2 + vys ** 2
        aero = 0.5 * 1.225 * v2 * 2.0 * np.hypot(cl, cd)
        assert aero == pytest.approx(77.5 * 9.80665)
        assert vxs / vys == pytest.approx(cl / cd)

    def test_sustained_speeds_zero_coefficients(self):
        assert coeff_to_ss(0.0, 0.0, 2.0, 77.5, 1.225) == (0.0, 0.0)

    def test_pseudo_coefficients_at_rest(self):
        p = net_force_to_pseudo(np.array([0.0, 0.0, 100.0]), np.zeros(3), 80.0)
        assert p.kl == 0.0 and p.glide_ratio == 0.0

    def test_pseudo_coefficients_steady_glide(self):
        """Zero net force in a 3:1 glide recovers L/D = 3."""
        vel = np.array([15.0, 0.0, 5.0])
        p = net_force_to_pseudo(np.zeros(3), vel, 80.0)
        assert p.glide_ratio == pytest.approx(3.0)
        assert p.roll == pytest.approx(0.0, abs=1e-6)


class TestSweep:
    """Test alpha sweeps."""

    def test_alpha_range_inclusive(self):
        grid = alpha_range(-10.0, 90.0, 0.5)
        assert grid[0] == -10.0
        assert grid[-1] == pytest.approx(90.0)
        assert len(grid) == 201

    def test_sweep_polar_columns(self):
        df = sweep_polar(AURAFIVE, -10.0, 40.0, 1.0)
        assert list(df.columns) == SWEEP_COLUMNS
        assert len(df) == 51
        assert (df['cd'] >= 0).all()

    def test_sweep_polar_best_glide(self):
        """Best L/D of the Aura 5 sits at a moderate angle of attack."""
        df = sweep_polar(AURAFIVE, -5.0, 40.0, 0.5)
        best = df.loc[df['ld'].idxmax()]
        assert 0.0 < best['alpha'] < 25.0
        assert best['ld'] > 1.5

    def test_sweep_segments_ibex(self):
        segments = make_ibex_aero_segments()
        df = sweep_segments(segments, IBEXUL, np.zeros(3), SegmentControls(),
                            min_alpha=0.0, max_alpha=20.0, step=5.0)
        assert len(df) == 5
        assert np.all(np.isfinite(df[['cl', 'cd', 'cm', 'cp']].to_numpy()))
        assert (df['cd'] > 0).all()
        assert ((df['cp'] >= 0) & (df['cp'] <= 1)).all()

    def test_sweep_csv(self, tmp_path):
        df = sweep_polar(SLICKSIN, 0.0, 10.0, 5.0)
        out = tmp_path / 'sweep.csv'
        df.to_csv(out, index=False)
        assert out.read_text().splitlines()[0].startswith('alpha,cl,cd')
