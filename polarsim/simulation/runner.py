"""
Simulation driver.

SimulationRunner owns the vehicle's CompositeFrame and rebuilds it only
when the deployment fraction or pilot pitch in the control vector changes
by value. Between rebuilds every step reuses the cached CG, inertia and
effective mass.
"""

from typing import Callable, Optional, Tuple

import numpy as np
import pandas as pd

from ..aero.segments import SegmentControls
from ..core.composite_frame import (
    CompositeFrame,
    CompositeFrameConfig,
    build_composite_frame,
    frame_needs_rebuild,
    frame_to_sim_config,
)
from ..core.dynamics import SimConfig
from ..core.integrator import RK4Integrator, derivative_function
from ..core.state import STATE_NAMES, SimState


ControlSchedule = Callable[[float, SimState], SegmentControls]


def history_to_dataframe(t_history: np.ndarray, state_history: np.ndarray) -> pd.DataFrame:
    """
    Trajectory table: one row per time point.

    Columns: time, the 12 states, airspeed (m/s) and altitude (m).
    """
    df = pd.DataFrame(np.asarray(state_history), columns=list(STATE_NAMES))
    df.insert(0, 'time', np.asarray(t_history))
    df['airspeed'] = np.sqrt(df['u'] ** 2 + df['v'] ** 2 + df['w'] ** 2)
    df['altitude'] = -df['z']
    return df


class SimulationRunner:
    """
    Fixed-step simulation of one vehicle.

    Parameters
    ----------
    frame_config : CompositeFrameConfig
        Vehicle recipe
    controls : SegmentControls, optional
        Initial control vector
    integrator : ForwardEulerIntegrator or RK4Integrator, optional
        Defaults to RK4 at 0.01 s
    use_apparent_mass : bool
        Anisotropic EOM with effective mass/inertia
    """

    def __init__(self, frame_config: CompositeFrameConfig,
                 controls: Optional[SegmentControls] = None,
                 integrator=None, use_apparent_mass: bool = True):
        self.frame_config = frame_config
        self.controls = controls if controls is not None else SegmentControls()
        self.integrator = integrator if integrator is not None else RK4Integrator(dt=0.01)
        self.use_apparent_mass = use_apparent_mass

        self._frame: Optional[CompositeFrame] = None
        self.rebuild_count = 0
        self.time = 0.0

    @classmethod
    def from_config(cls, config) -> 'SimulationRunner':
        """Build a runner from a SimulationConfig."""
        return cls(config.create_frame_config(), config.create_controls(),
                   config.create_integrator(), config.use_apparent_mass)

    @property
    def frame(self) -> CompositeFrame:
        """Composite frame for the current deploy and pilot pitch."""
        deploy = self.controls.deploy
        pilot_pitch = self.controls.pilot_pitch
        if frame_needs_rebuild(self._frame, deploy, pilot_pitch):
            self._frame = build_composite_frame(self.frame_config, deploy, pilot_pitch)
            self.rebuild_count += 1
        return self._frame

    def sim_config(self) -> SimConfig:
        """Per-step SimConfig from the (possibly cached) frame."""
        return frame_to_sim_config(self.frame, self.controls, self.use_apparent_mass)

    def step(self, state: SimState) -> SimState:
        """Advance one integrator step with the current controls."""
        f = derivative_function(self.sim_config(), self.controls)
        new_state = self.integrator.step(state, f)
        self.time += self.integrator.dt
        return new_state

    def run(self, state0: SimState, duration: float,
            schedule: Optional[ControlSchedule] = None,
            stop_at_ground: bool = True) -> Tuple[np.ndarray, np.ndarray]:
        """
        Integrate for `duration` seconds.

        Parameters
        ----------
        state0 : SimState
            Initial state
        duration : float
            Simulated time (s)
        schedule : callable, optional
            schedule(t, state) -> SegmentControls, called before each step
        stop_at_ground : bool
            Stop when altitude drops below zero

        Returns
        -------
        t_history : np.ndarray
        state_history : np.ndarray, shape (n, 12)
            Ends early if the state becomes non-finite or reaches the ground
        """
        dt = self.integrator.dt
        n_steps = int(round(duration / dt))

        t_history = [self.time]
        state_history = [state0.to_array()]
        state = state0.copy()

        for _ in range(n_steps):
            if schedule is not None:
                self.controls = schedule(self.time, state)
            state = self.step(state)

            if not state.is_finite():
                print(f"Simulation diverged at t = {self.time:.3f} s")
                break

            t_history.append(self.time)
            state_history.append(state.to_array())

            if stop_at_ground and state.z > 0.0:
                break

        return np.array(t_history), np.array(state_history)

    def run_dataframe(self, state0: SimState, duration: float,
                      schedule: Optional[ControlSchedule] = None) -> pd.DataFrame:
        """run() as a trajectory DataFrame."""
        t, history = self.run(state0, duration, schedule)
        return history_to_dataframe(t, history)
