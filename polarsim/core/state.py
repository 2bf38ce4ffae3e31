"""
12-state rigid-body vector for 6DOF flight dynamics.

State includes:
- Position (x, y, z) in NED inertial frame
- Velocity (u, v, w) in body frame
- Euler attitude (phi, theta, psi), 3-2-1 sequence
- Angular rates (p, q, r) in body frame
"""

import numpy as np

from archimedes import struct


STATE_NAMES = ('x', 'y', 'z', 'u', 'v', 'w', 'phi', 'theta', 'psi', 'p', 'q', 'r')


@struct(frozen=False)
class SimState:
    """
    Complete 6DOF state vector.

    State variables (12 total):
    - Position: x, y, z (NED inertial frame, m)
    - Velocity: u, v, w (body frame, m/s)
    - Attitude: phi, theta, psi (Euler roll, pitch, yaw, rad)
    - Angular rates: p, q, r (body frame, rad/s)
    """

    # Position in NED frame (m)
    x: float = 0.0  # North
    y: float = 0.0  # East
    z: float = 0.0  # Down

    # Velocity in body frame (m/s)
    u: float = 0.0
    v: float = 0.0
    w: float = 0.0

    # Euler angles (rad)
    phi: float = 0.0
    theta: float = 0.0
    psi: float = 0.0

    # Angular rates in body frame (rad/s)
    p: float = 0.0
    q: float = 0.0
    r: float = 0.0

    @property
    def position(self) -> np.ndarray:
        """Position vector in NED frame (m)."""
        return np.hstack([self.x, self.y, self.z])

    @position.setter
    def position(self, pos: np.ndarray):
        self.x, self.y, self.z = pos

    @property
    def velocity_body(self) -> np.ndarray:
        """Velocity vector in body frame (m/s)."""
        return np.hstack([self.u, self.v, self.w])

    @velocity_body.setter
    def velocity_body(self, vel: np.ndarray):
        self.u, self.v, self.w = vel

    @property
    def euler_angles(self) -> np.ndarray:
        """[phi, theta, psi] (rad)."""
        return np.hstack([self.phi, self.theta, self.psi])

    @euler_angles.setter
    def euler_angles(self, angles: np.ndarray):
        self.phi, self.theta, self.psi = angles

    @property
    def angular_rates(self) -> np.ndarray:
        """Body rates [p, q, r] (rad/s)."""
        return np.hstack([self.p, self.q, self.r])

    @angular_rates.setter
    def angular_rates(self, omega: np.ndarray):
        self.p, self.q, self.r = omega

    @property
    def airspeed(self) -> float:
        """Total airspeed (m/s), still air."""
        return float(np.linalg.norm(self.velocity_body))

    @property
    def altitude(self) -> float:
        """Altitude above the reference (m, positive up)."""
        return -self.z

    @property
    def alpha(self) -> float:
        """Angle of attack (rad): atan2(w, u)."""
        if self.airspeed < 1e-6:
            return 0.0
        return float(np.arctan2(self.w, self.u))

    @property
    def beta(self) -> float:
        """Sideslip angle (rad): asin(v / V)."""
        V = self.airspeed
        if V < 1e-6:
            return 0.0
        return float(np.arcsin(np.clip(self.v / V, -1.0, 1.0)))

    def is_finite(self) -> bool:
        """True when every state value is finite."""
        return bool(np.all(np.isfinite(self.to_array())))

    def to_array(self) -> np.ndarray:
        """
        Convert state to numpy array.

        Returns:
        --------
        x : np.ndarray, shape (12,)
            [x, y, z, u, v, w, phi, theta, psi, p, q, r]
        """
        return np.hstack([
            self.x, self.y, self.z,
            self.u, self.v, self.w,
            self.phi, self.theta, self.psi,
            self.p, self.q, self.r,
        ]).astype(float)

    def from_array(self, x: np.ndarray):
        """
        Load state from numpy array.

        Parameters:
        -----------
        x : np.ndarray, shape (12,)
            [x, y, z, u, v, w, phi, theta, psi, p, q, r]
        """
        self.x, self.y, self.z = (float(val) for val in x[0:3])
        self.u, self.v, self.w = (float(val) for val in x[3:6])
        self.phi, self.theta, self.psi = (float(val) for val in x[6:9])
        self.p, self.q, self.r = (float(val) for val in x[9:12])

    @classmethod
    def from_vector(cls, x: np.ndarray) -> 'SimState':
        state = cls()
        state.from_array(x)
        return state

    def copy(self) -> 'SimState':
        """Create an independent copy of the state."""
        return SimState.from_vector(self.to_array())

    def __repr__(self) -> str:
        return f"SimState(pos={self.position}, vel={self.velocity_body}, omega={self.angular_rates})"

    def __str__(self) -> str:
        return (
            f"6DOF State:\n"
            f"  Position (NED):   [{self.x:8.2f}, {self.y:8.2f}, {self.z:8.2f}] m\n"
            f"  Velocity (body):  [{self.u:7.2f}, {self.v:7.2f}, {self.w:7.2f}] m/s\n"
            f"  Airspeed:         {self.airspeed:7.2f} m/s\n"
            f"  Euler angles:     [{np.degrees(self.phi):6.2f}, {np.degrees(self.theta):6.2f}, "
            f"{np.degrees(self.psi):6.2f}] deg\n"
            f"  Alpha, Beta:      [{np.degrees(self.alpha):6.2f}, {np.degrees(self.beta):6.2f}] deg\n"
            f"  Angular rates:    [{self.p:7.4f}, {self.q:7.4f}, {self.r:7.4f}] rad/s"
        )


@struct(frozen=False)
class SimStateDerivative:
    """Time derivative of SimState (same ordering, SI units per second)."""

    x_dot: float = 0.0
    y_dot: float = 0.0
    z_dot: float = 0.0
    u_dot: float = 0.0
    v_dot: float = 0.0
    w_dot: float = 0.0
    phi_dot: float = 0.0
    theta_dot: float = 0.0
    psi_dot: float = 0.0
    p_dot: float = 0.0
    q_dot: float = 0.0
    r_dot: float = 0.0

    def to_array(self) -> np.ndarray:
        return np.hstack([
            self.x_dot, self.y_dot, self.z_dot,
            self.u_dot, self.v_dot, self.w_dot,
            self.phi_dot, self.theta_dot, self.psi_dot,
            self.p_dot, self.q_dot, self.r_dot,
        ]).astype(float)

    @classmethod
    def from_vector(cls, xdot: np.ndarray) -> 'SimStateDerivative':
        return cls(*(float(val) for val in xdot[:12]))


if __name__ == "__main__":
    print("=== SimState Tests ===\n")

    state = SimState()
    print("1. Default state:")
    print(state)
    print()

    state.position = np.array([0.0, 0.0, -1000.0])
    state.velocity_body = np.array([11.8, 0.0, 1.7])
    state.euler_angles = np.radians([0.0, -6.0, 0.0])

    print("2. Glide state:")
    print(state)
    print()

    x = state.to_array()
    print(f"3. State as array (shape {x.shape}):")
    print(x)
    print(f"   Round trip equal: {np.allclose(SimState.from_vector(x).to_array(), x)}")
