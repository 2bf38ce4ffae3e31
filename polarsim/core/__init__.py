"""
Core 6-DOF flight dynamics components.

State vector, frame transforms, equations of motion (with anisotropic
apparent mass), point-mass inertia, the composite vehicle frame and
fixed-step integrators.
"""

from .state import SimState, SimStateDerivative
from .dynamics import SimConfig, compute_derivatives
from .integrator import ForwardEulerIntegrator, RK4Integrator, rk4_step, simulate
from .inertia import MassSegment, InertiaComponents, VehicleMassModel
from .apparent_mass import CanopyGeometry, ApparentMassResult
from .composite_frame import CompositeFrame, CompositeFrameConfig, build_composite_frame

__all__ = [
    'SimState',
    'SimStateDerivative',
    'SimConfig',
    'compute_derivatives',
    'ForwardEulerIntegrator',
    'RK4Integrator',
    'rk4_step',
    'simulate',
    'MassSegment',
    'InertiaComponents',
    'VehicleMassModel',
    'CanopyGeometry',
    'ApparentMassResult',
    'CompositeFrame',
    'CompositeFrameConfig',
    'build_composite_frame',
]
