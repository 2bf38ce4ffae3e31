"""
Continuous polar library.

System-level polars for every vehicle the simulator ships, plus the
per-surface polars the segment models evaluate (canopy cell, brake flap,
wingsuit panels). Values are fitted to measured glide data; angles are in
degrees, areas in m^2, chords in m.

Canopy system masses are the full pilot + canopy system (81 kg). Wingsuit
and skydiver polars use the pilot alone (77.5 kg).
"""

from typing import Dict

from ..aero.polar import ContinuousPolar, SymmetricControl, validate_polar


PILOT_MASS = 77.5        # kg
CANOPY_SYSTEM_MASS = 81.0  # kg, pilot + canopy structure
IBEX_AREA = 20.439       # m^2
IBEX_CELL_COUNT = 7


# ─── Wingsuits ──────────────────────────────────────────────────────────────

AURAFIVE = ContinuousPolar(
    name='Aura 5',
    type='Wingsuit',
    cl_alpha=2.9,
    alpha_0=-2.0,
    cd_0=0.097,
    k=0.360,
    cd_n=1.1,
    cd_n_lateral=1.0,
    alpha_stall_fwd=31.5,
    s1_fwd=3.7,
    alpha_stall_back=-34.5,
    s1_back=7.0,
    cy_beta=-0.3,
    cn_beta=0.08,
    cl_beta=-0.08,
    cm_0=-0.02,
    cm_alpha=-0.08,
    cp_0=0.40,
    cp_alpha=-0.05,
    cg=0.40,
    cp_lateral=0.50,
    s=2.0,
    m=PILOT_MASS,
    chord=1.8,
    controls={
        # Arching: CP aft, a little camber and drag, earlier stall
        'brake': SymmetricControl(d_cp_0=0.03, d_alpha_0=-0.5, d_cd_0=0.005,
                                  d_alpha_stall_fwd=-1.0),
        # Loose suit: drag up, lift slope down, CP toward CG
        'dirty': SymmetricControl(d_cd_0=0.025, d_cl_alpha=-0.3, d_k=0.08,
                                  d_alpha_stall_fwd=-3.0, d_cp_0=0.03, d_cp_alpha=0.02),
    },
)

# Same system-level numbers as the Aura 5; the segment model carries the rest
A5_SEGMENTS = ContinuousPolar(
    name='A5 Segments',
    type='Wingsuit',
    cl_alpha=2.9,
    alpha_0=-2.0,
    cd_0=0.097,
    k=0.360,
    cd_n=1.1,
    cd_n_lateral=1.0,
    alpha_stall_fwd=31.5,
    s1_fwd=3.7,
    alpha_stall_back=-34.5,
    s1_back=7.0,
    cy_beta=-0.3,
    cn_beta=0.08,
    cl_beta=-0.08,
    cm_0=-0.02,
    cm_alpha=-0.08,
    cp_0=0.40,
    cp_alpha=-0.05,
    cg=0.40,
    cp_lateral=0.50,
    s=2.0,
    m=PILOT_MASS,
    chord=1.8,
    controls=AURAFIVE.controls,
)

A5_CENTER = ContinuousPolar(
    name='A5 Center',
    type='Wingsuit',
    cl_alpha=3.2,
    alpha_0=-2.0,
    cd_0=0.08,
    k=0.35,
    cd_n=1.2,
    cd_n_lateral=1.0,
    alpha_stall_fwd=31.5,
    s1_fwd=3.7,
    alpha_stall_back=-34.5,
    s1_back=7.0,
    cy_beta=-0.3,
    cn_beta=0.08,
    cl_beta=-0.04,
    cm_0=-0.02,
    cm_alpha=-0.10,
    cp_0=0.25,
    cp_alpha=-0.05,
    cg=0.40,
    cp_lateral=0.50,
    s=0.85,
    m=PILOT_MASS,
    chord=1.93,
    controls={'dirty': SymmetricControl(d_cd_0=0.015, d_cl_alpha=-0.15, d_alpha_stall_fwd=-2.0)},
)

# Shoulder-to-knee fabric; cambered trailing edge gives most of the weathervane
A5_INNER_WING = ContinuousPolar(
    name='A5 Inner Wing',
    type='Wingsuit',
    cl_alpha=2.8,
    alpha_0=-1.0,
    cd_0=0.05,
    k=0.30,
    cd_n=1.0,
    cd_n_lateral=0.8,
    alpha_stall_fwd=31.5,
    s1_fwd=3.7,
    alpha_stall_back=-34.5,
    s1_back=7.0,
    cy_beta=-0.35,
    cn_beta=0.12,
    cl_beta=-0.08,
    cm_0=0.0,
    cm_alpha=-0.05,
    cp_0=0.23,
    cp_alpha=-0.03,
    cg=0.40,
    cp_lateral=0.50,
    s=0.39,
    m=PILOT_MASS,
    chord=1.74,
    controls={'dirty': SymmetricControl(d_cd_0=0.03, d_cl_alpha=-0.4, d_alpha_stall_fwd=-4.0)},
)

A5_OUTER_WING = ContinuousPolar(
    name='A5 Outer Wing',
    type='Wingsuit',
    cl_alpha=2.6,
    alpha_0=-1.0,
    cd_0=0.07,
    k=0.35,
    cd_n=1.0,
    cd_n_lateral=0.8,
    alpha_stall_fwd=31.5,
    s1_fwd=3.7,
    alpha_stall_back=-34.5,
    s1_back=7.0,
    cy_beta=-0.15,
    cn_beta=0.02,
    cl_beta=-0.10,
    cm_0=0.0,
    cm_alpha=-0.05,
    cp_0=0.25,
    cp_alpha=-0.03,
    cg=0.40,
    cp_lateral=0.50,
    s=0.15,
    m=PILOT_MASS,
    chord=0.39,
    controls={'dirty': SymmetricControl(d_cd_0=0.04, d_cl_alpha=-0.5, d_alpha_stall_fwd=-5.0)},
)


# ─── Skydiver ───────────────────────────────────────────────────────────────

SLICKSIN = ContinuousPolar(
    name='Slick Sin',
    type='Slick',
    cl_alpha=1.45,
    alpha_0=0.0,
    cd_0=0.467,
    k=0.70,
    cd_n=1.505,
    cd_n_lateral=1.3,
    alpha_stall_fwd=45.0,
    s1_fwd=8.0,
    alpha_stall_back=-45.0,
    s1_back=8.0,
    cy_beta=-0.2,
    cn_beta=0.04,
    cl_beta=-0.04,
    cm_0=0.0,
    cm_alpha=-0.05,
    cp_0=0.40,
    cp_alpha=-0.01,
    cg=0.50,
    cp_lateral=0.50,
    s=0.5,
    m=PILOT_MASS,
    chord=1.7,
)


# ─── Canopy ─────────────────────────────────────────────────────────────────

IBEXUL = ContinuousPolar(
    name='Ibex UL',
    type='Canopy',
    cl_alpha=1.75,
    alpha_0=-3.0,
    cd_0=0.21,
    k=0.085,
    cd_n=1.1,
    cd_n_lateral=0.8,
    alpha_stall_fwd=15.0,
    s1_fwd=4.0,
    alpha_stall_back=-5.0,
    s1_back=3.0,
    cy_beta=-0.4,
    cn_beta=0.12,
    cl_beta=-0.12,
    cm_0=-0.03,
    cm_alpha=-0.10,
    cp_0=0.40,
    cp_alpha=-0.01,
    cg=0.35,
    cp_lateral=0.50,
    s=IBEX_AREA,
    m=CANOPY_SYSTEM_MASS,
    chord=2.5,
    controls={
        'brake': SymmetricControl(d_alpha_0=-3.0, d_cd_0=0.06, d_cl_alpha=0.15, d_k=0.03,
                                  d_alpha_stall_fwd=-5.0, cm_delta=-0.04),
    },
)

# One of the seven Ibex cells
CANOPY_CELL = ContinuousPolar(
    name='Ibex UL Cell',
    type='Canopy',
    cl_alpha=3.0,
    alpha_0=-3.0,
    cd_0=0.035,
    k=0.04,
    cd_n=1.1,
    cd_n_lateral=0.8,
    alpha_stall_fwd=22.0,
    s1_fwd=6.0,
    alpha_stall_back=-5.0,
    s1_back=3.0,
    cy_beta=-0.4,
    cn_beta=0.12,
    cl_beta=-0.12,
    cm_0=-0.03,
    cm_alpha=-0.10,
    cp_0=0.40,
    cp_alpha=-0.01,
    cg=0.35,
    cp_lateral=0.5,
    s=IBEX_AREA / IBEX_CELL_COUNT,
    m=CANOPY_SYSTEM_MASS,
    chord=2.5,
    controls={
        'brake': SymmetricControl(d_alpha_0=-5.0, d_cd_0=0.09, d_cl_alpha=0.35, d_k=0.03,
                                  d_alpha_stall_fwd=-4.0, cm_delta=-0.04),
    },
)

# Deflected trailing edge; S and chord are overridden per flap by brake input
BRAKE_FLAP = ContinuousPolar(
    name='Brake Flap',
    type='Canopy',
    cl_alpha=4.0,
    alpha_0=0.0,
    cd_0=0.02,
    k=0.05,
    cd_n=1.2,
    cd_n_lateral=0.8,
    alpha_stall_fwd=70.0,
    s1_fwd=8.0,
    alpha_stall_back=-5.0,
    s1_back=3.0,
    cy_beta=-0.1,
    cn_beta=0.02,
    cl_beta=-0.02,
    cm_0=-0.05,
    cm_alpha=-0.05,
    cp_0=0.60,
    cp_alpha=-0.01,
    cg=0.35,
    cp_lateral=0.5,
    s=0.5,
    m=CANOPY_SYSTEM_MASS,
    chord=0.5,
)


# ─── Airplane ───────────────────────────────────────────────────────────────

CARAVAN = ContinuousPolar(
    name='Caravan',
    type='Airplane',
    cl_alpha=4.8,
    alpha_0=-2.0,
    cd_0=0.029,
    k=0.485,
    cd_n=1.2,
    cd_n_lateral=1.0,
    alpha_stall_fwd=22.0,
    s1_fwd=4.0,
    alpha_stall_back=-4.0,
    s1_back=3.0,
    cy_beta=-0.4,
    cn_beta=0.10,
    cl_beta=-0.10,
    cm_0=-0.02,
    cm_alpha=-0.10,
    cp_0=0.39,
    cp_alpha=-0.04,
    cg=0.30,
    cp_lateral=0.30,
    s=2.0,
    m=PILOT_MASS,
    chord=11.0,
)


CONTINUOUS_POLARS: Dict[str, ContinuousPolar] = {
    'aurafive': AURAFIVE,
    'a5segments': A5_SEGMENTS,
    'ibexul': IBEXUL,
    'slicksin': SLICKSIN,
    'caravan': CARAVAN,
}


def get_polar(name: str) -> ContinuousPolar:
    """
    Look up a system polar by registry key.

    Raises:
    -------
    ValueError
        If `name` is not registered
    """
    try:
        polar = CONTINUOUS_POLARS[name]
    except KeyError:
        raise ValueError(
            f"Unknown polar '{name}'. Available: {sorted(CONTINUOUS_POLARS)}"
        ) from None
    return validate_polar(polar)
