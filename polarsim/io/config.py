"""
Simulation Configuration System

YAML-based configuration for a simulation run: which vehicle to fly, the
atmosphere, integrator settings, pilot inputs and the initial state.
"""

from dataclasses import fields
from typing import Any, Dict

import numpy as np
import yaml

from ..aero.segments import SegmentControls
from ..core.composite_frame import CompositeFrameConfig
from ..core.integrator import ForwardEulerIntegrator, RK4Integrator
from ..core.state import SimState
from ..environment.atmosphere import StandardAtmosphere
from ..vehicles.ibex import PILOT_TYPES, ibex_frame_config
from ..vehicles.wingsuit import wingsuit_frame_config


VEHICLES = ('ibexul', 'a5segments')

INTEGRATORS = {
    'euler': ForwardEulerIntegrator,
    'rk4': RK4Integrator,
}

INITIAL_STATE_KEYS = ('airspeed', 'alpha', 'roll', 'pitch', 'yaw')


class SimulationConfig:
    """
    Simulation configuration loaded from YAML.

    Attributes
    ----------
    vehicle : str
        Vehicle registry key ('ibexul' or 'a5segments')
    pilot_type : str
        Pilot under the canopy ('wingsuit' or 'slick'); ignored for wingsuits
    altitude : float
        Initial altitude (m MSL)
    rho : float
        Air density (kg/m^3), from the config or the standard atmosphere
    dt : float
        Integration time step (s)
    duration : float
        Simulated time (s)
    integrator : str
        'euler' or 'rk4'
    use_apparent_mass : bool
        Use effective (physical + apparent) mass and inertia
    controls : dict
        SegmentControls field overrides
    initial_state : dict
        airspeed (m/s), alpha/pitch/roll/yaw (deg)
    """

    def __init__(self, config_dict: Dict[str, Any]):
        """
        Parameters
        ----------
        config_dict : dict
            Configuration dictionary (typically from YAML)

        Raises
        ------
        ValueError
            On unknown vehicle, pilot type, integrator or control name
        """
        self.raw_config = config_dict
        self._parse_config()

    def _parse_config(self):
        """Parse and validate the configuration dictionary."""
        vehicle = self.raw_config.get('vehicle', {})
        self.vehicle = vehicle.get('name', 'ibexul')
        if self.vehicle not in VEHICLES:
            raise ValueError(f"Unknown vehicle: {self.vehicle}. Available: {list(VEHICLES)}")
        self.pilot_type = vehicle.get('pilot_type', 'wingsuit')
        if self.pilot_type not in PILOT_TYPES:
            raise ValueError(f"Unknown pilot type: {self.pilot_type}. Available: {list(PILOT_TYPES)}")

        # Environment: explicit density wins over altitude
        environment = self.raw_config.get('environment', {})
        self.altitude = float(environment.get('altitude', 0.0))
        if 'rho' in environment:
            self.rho = float(environment['rho'])
        else:
            self.rho = StandardAtmosphere(self.altitude).density

        simulation = self.raw_config.get('simulation', {})
        self.dt = float(simulation.get('dt', 0.01))
        self.duration = float(simulation.get('duration', 10.0))
        self.integrator = simulation.get('integrator', 'rk4')
        if self.integrator not in INTEGRATORS:
            raise ValueError(f"Unknown integrator: {self.integrator}. Available: {list(INTEGRATORS)}")
        self.use_apparent_mass = bool(simulation.get('use_apparent_mass', True))
        if self.dt <= 0:
            raise ValueError(f"Time step must be positive (got {self.dt})")

        self.controls = dict(self.raw_config.get('controls', {}) or {})
        known = {f.name for f in fields(SegmentControls)}
        unknown = set(self.controls) - known
        if unknown:
            raise ValueError(f"Unknown control inputs: {sorted(unknown)}")

        self.initial_state = dict(self.raw_config.get('initial_state', {}) or {})
        unknown = set(self.initial_state) - set(INITIAL_STATE_KEYS)
        if unknown:
            raise ValueError(f"Unknown initial state keys: {sorted(unknown)}. "
                             f"Available: {list(INITIAL_STATE_KEYS)}")

    def create_frame_config(self) -> CompositeFrameConfig:
        """Composite frame recipe for the configured vehicle."""
        if self.vehicle == 'ibexul':
            return ibex_frame_config(self.pilot_type, self.rho)
        return wingsuit_frame_config(self.rho)

    def create_controls(self) -> SegmentControls:
        """Control vector with the configured overrides."""
        return SegmentControls(**self.controls)

    def create_integrator(self):
        """Fixed-step integrator instance."""
        return INTEGRATORS[self.integrator](dt=self.dt)

    def create_initial_state(self) -> SimState:
        """
        Initial SimState from airspeed, alpha and attitude.

        Body velocity is u = V cos(alpha), w = V sin(alpha); z = -altitude.
        """
        init = self.initial_state
        airspeed = float(init.get('airspeed', 10.0))
        alpha = np.radians(init.get('alpha', 0.0))

        state = SimState()
        state.z = -self.altitude
        state.u = airspeed * np.cos(alpha)
        state.w = airspeed * np.sin(alpha)
        state.phi = np.radians(init.get('roll', 0.0))
        state.theta = np.radians(init.get('pitch', 0.0))
        state.psi = np.radians(init.get('yaw', 0.0))
        return state

    def __repr__(self):
        return (f"SimulationConfig(vehicle='{self.vehicle}', "
                f"rho={self.rho:.4f}, "
                f"dt={self.dt}, "
                f"integrator='{self.integrator}')")


def load_simulation_config(yaml_file: str) -> SimulationConfig:
    """
    Load simulation configuration from YAML file.

    Parameters
    ----------
    yaml_file : str
        Path to YAML configuration file

    Returns
    -------
    SimulationConfig

    Examples
    --------
    >>> config = load_simulation_config('config/ibex_glide.yaml')
    >>> frame_config = config.create_frame_config()
    """
    with open(yaml_file, 'r') as f:
        config_dict = yaml.safe_load(f) or {}

    return SimulationConfig(config_dict)


def save_simulation_config(config: SimulationConfig, yaml_file: str):
    """
    Save simulation configuration to YAML file.

    Parameters
    ----------
    config : SimulationConfig
    yaml_file : str
        Output YAML file path
    """
    with open(yaml_file, 'w') as f:
        yaml.dump(config.raw_config, f, default_flow_style=False, sort_keys=False)

    print(f"Configuration saved to: {yaml_file}")


def create_example_config() -> Dict[str, Any]:
    """
    Example configuration: Ibex UL with a wingsuit pilot, light brakes.

    Returns
    -------
    dict
    """
    return {
        'vehicle': {
            'name': 'ibexul',
            'pilot_type': 'wingsuit',
        },
        'environment': {
            'altitude': 1000.0,  # m
        },
        'simulation': {
            'dt': 0.01,          # s
            'duration': 10.0,    # s
            'integrator': 'rk4',
            'use_apparent_mass': True,
        },
        'controls': {
            'brake_left': 0.2,
            'brake_right': 0.2,
            'deploy': 1.0,
        },
        'initial_state': {
            'airspeed': 11.0,    # m/s
            'alpha': 8.0,        # deg
            'pitch': -4.0,       # deg
            'roll': 0.0,
            'yaw': 0.0,
        },
    }


if __name__ == "__main__":
    config = SimulationConfig(create_example_config())
    print(config)
    print(f"Initial state: {config.create_initial_state()}")
    print(f"Controls: brake L/R = {config.create_controls().brake_left}/"
          f"{config.create_controls().brake_right}")
