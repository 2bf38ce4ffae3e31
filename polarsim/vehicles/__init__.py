"""
Vehicle definitions: polar library, Ibex UL canopy system and A5 wingsuit.
"""

from .polars import CONTINUOUS_POLARS, get_polar
from .ibex import IBEX_MASS_MODEL, ibex_frame_config, make_ibex_aero_segments
from .wingsuit import WINGSUIT_MASS_MODEL, make_a5_aero_segments, wingsuit_frame_config

__all__ = [
    'CONTINUOUS_POLARS',
    'get_polar',
    'IBEX_MASS_MODEL',
    'ibex_frame_config',
    'make_ibex_aero_segments',
    'WINGSUIT_MASS_MODEL',
    'make_a5_aero_segments',
    'wingsuit_frame_config',
]
