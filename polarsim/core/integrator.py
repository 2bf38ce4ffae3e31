"""
Fixed-step integrators for the 12-state flight dynamics.

Implements:
- Forward Euler (1 derivative evaluation per step)
- RK4 (classic 4th-order Runge-Kutta, 4 evaluations per step)

Both are available as plain functions over (SimState, SimConfig) and as
integrator classes that work with any derivative function f(state) -> (12,).
"""

from typing import Callable, Optional, Tuple

import numpy as np

from ..aero.segments import SegmentControls
from .dynamics import SimConfig, compute_derivatives
from .state import SimState, SimStateDerivative


DerivativeFunc = Callable[[SimState], np.ndarray]


def forward_euler_step(state: SimState, deriv: SimStateDerivative, dt: float) -> SimState:
    """state(t + dt) = state(t) + dt * f(state(t))"""
    return SimState.from_vector(state.to_array() + deriv.to_array() * dt)


def rk4_step(state: SimState, config: SimConfig, dt: float,
             controls: Optional[SegmentControls] = None) -> SimState:
    """
    Advance the state by one classic RK4 step.

    k1 = f(x)
    k2 = f(x + dt/2 k1)
    k3 = f(x + dt/2 k2)
    k4 = f(x + dt k3)
    x(t + dt) = x + dt/6 (k1 + 2 k2 + 2 k3 + k4)
    """
    k1 = compute_derivatives(state, config, controls)
    k2 = compute_derivatives(forward_euler_step(state, k1, dt / 2), config, controls)
    k3 = compute_derivatives(forward_euler_step(state, k2, dt / 2), config, controls)
    k4 = compute_derivatives(forward_euler_step(state, k3, dt), config, controls)

    avg = (k1.to_array() + 2 * k2.to_array() + 2 * k3.to_array() + k4.to_array()) / 6.0
    return forward_euler_step(state, SimStateDerivative.from_vector(avg), dt)


def simulate(state: SimState, config: SimConfig, controls: Optional[SegmentControls],
             dt: float, steps: int) -> SimState:
    """
    Run `steps` forward Euler steps and return the final state.

    Parameters:
    -----------
    state : SimState
        Initial state (not modified)
    config : SimConfig
    controls : SegmentControls or None
        Control vector (None uses config.controls)
    dt : float
        Time step (s)
    steps : int
        Number of steps
    """
    current = state.copy()
    for _ in range(steps):
        current = forward_euler_step(current, compute_derivatives(current, config, controls), dt)
    return current


def derivative_function(config: SimConfig,
                        controls: Optional[SegmentControls] = None) -> DerivativeFunc:
    """Wrap compute_derivatives as f(state) -> np.ndarray (12,)."""
    def f(state: SimState) -> np.ndarray:
        return compute_derivatives(state, config, controls).to_array()
    return f


class ForwardEulerIntegrator:
    """
    1st-order forward Euler integrator (fixed time step).

    Cheapest option; adequate for real-time stepping at small dt.
    """

    def __init__(self, dt: float = 0.01):
        """
        Parameters:
        -----------
        dt : float
            Fixed time step (seconds)
        """
        self.dt = dt

    def step(self, state: SimState, derivative_func: DerivativeFunc) -> SimState:
        """Advance state by one time step."""
        return SimState.from_vector(state.to_array() + self.dt * derivative_func(state))

    def integrate(self, state0: SimState, t_span: Tuple[float, float],
                  derivative_func: DerivativeFunc) -> Tuple[np.ndarray, np.ndarray]:
        """
        Integrate from t0 to tf.

        Returns:
        --------
        t_history : np.ndarray
            Time points
        state_history : np.ndarray, shape (n_steps, 12)
            State at each time point
        """
        return _integrate(self, state0, t_span, derivative_func)


class RK4Integrator:
    """
    4th-order Runge-Kutta integrator (fixed time step).

    Classic RK4 method with good accuracy for smooth dynamics.
    """

    def __init__(self, dt: float = 0.01):
        """
        Parameters:
        -----------
        dt : float
            Fixed time step (seconds)
        """
        self.dt = dt

    def step(self, state: SimState, derivative_func: DerivativeFunc) -> SimState:
        """
        Advance state by one time step using RK4.

        Parameters:
        -----------
        state : SimState
            Current state
        derivative_func : Callable
            Function that computes state_dot = f(state)
            Returns: np.ndarray, shape (12,)

        Returns:
        --------
        new_state : SimState
            State at t + dt
        """
        x = state.to_array()
        dt = self.dt

        k1 = derivative_func(state)
        k2 = derivative_func(SimState.from_vector(x + 0.5 * dt * k1))
        k3 = derivative_func(SimState.from_vector(x + 0.5 * dt * k2))
        k4 = derivative_func(SimState.from_vector(x + dt * k3))

        return SimState.from_vector(x + (dt / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4))

    def integrate(self, state0: SimState, t_span: Tuple[float, float],
                  derivative_func: DerivativeFunc) -> Tuple[np.ndarray, np.ndarray]:
        """
        Integrate from t0 to tf.

        Parameters:
        -----------
        state0 : SimState
            Initial state
        t_span : tuple
            (t0, tf) time span
        derivative_func : Callable
            State derivative function

        Returns:
        --------
        t_history : np.ndarray
            Time points
        state_history : np.ndarray, shape (n_steps, 12)
            State at each time point
        """
        return _integrate(self, state0, t_span, derivative_func)


def _integrate(integrator, state0: SimState, t_span: Tuple[float, float],
               derivative_func: DerivativeFunc) -> Tuple[np.ndarray, np.ndarray]:
    t0, tf = t_span
    n_steps = int(round((tf - t0) / integrator.dt)) + 1

    t_history = t0 + integrator.dt * np.arange(n_steps)
    state_history = np.zeros((n_steps, 12))

    current = state0.copy()
    state_history[0, :] = current.to_array()

    for i in range(1, n_steps):
        current = integrator.step(current, derivative_func)
        state_history[i, :] = current.to_array()

    return t_history, state_history


if __name__ == "__main__":
    print("=== Integrator Tests ===\n")

    def exponential_decay(state):
        """Test ODE: dx/dt = -0.5 * x"""
        return -0.5 * state.to_array()

    state0 = SimState(x=1.0)

    print("Test: dx/dt = -0.5 * x, x(0) = 1")
    for integrator in (ForwardEulerIntegrator(dt=0.1), RK4Integrator(dt=0.1)):
        t_hist, x_hist = integrator.integrate(state0, (0.0, 2.0), exponential_decay)
        exact = np.exp(-0.5 * t_hist[-1])
        print(f"  {type(integrator).__name__:24s} x(2) = {x_hist[-1, 0]:.6f} "
              f"(analytical {exact:.6f}, error {abs(x_hist[-1, 0] - exact):.2e})")
