"""
International Standard Atmosphere (US Standard Atmosphere 1976)

Provides atmospheric properties as a function of altitude:
- Temperature
- Pressure
- Density
- Speed of sound
- Viscosity

Units: SI (m, kg, Pa, K)
"""

import numpy as np


class StandardAtmosphere:
    """
    US Standard Atmosphere 1976 model, SI units.

    Valid from sea level to 32 km, which covers every altitude a canopy or
    wingsuit flight reaches.

    Parameters
    ----------
    altitude : float
        Geometric altitude in meters above MSL

    Attributes
    ----------
    temperature : float
        Static temperature (K)
    pressure : float
        Static pressure (Pa)
    density : float
        Air density (kg/m³)
    speed_of_sound : float
        Speed of sound (m/s)
    dynamic_viscosity : float
        Dynamic viscosity (Pa·s)
    kinematic_viscosity : float
        Kinematic viscosity (m²/s)

    Notes
    -----
    Model covers three atmospheric layers:
    - Troposphere: 0 - 11,000 m (temperature decreases linearly)
    - Lower Stratosphere: 11,000 - 20,000 m (isothermal)
    - Upper Stratosphere: 20,000 - 32,000 m (temperature increases)
    """

    # Sea level conditions
    T0 = 288.15  # K
    P0 = 101325.0  # Pa
    rho0 = 1.225  # kg/m³

    # Gas constant for air (J/(kg·K)) and gravity (m/s²)
    R = 287.05287
    g0 = 9.80665

    gamma = 1.4

    # Sutherland's constants for viscosity
    S = 110.4  # K
    T_ref = 273.15  # K
    mu_ref = 1.716e-5  # Pa·s

    # Layer boundaries (m)
    h_trop = 11000.0
    h_strat1 = 20000.0

    # Temperature lapse rates (K/m)
    lapse_trop = -0.0065
    lapse_strat2 = 0.001

    def __init__(self, altitude: float = 0.0):
        """
        Initialize atmosphere at specified altitude.

        Parameters
        ----------
        altitude : float, optional
            Geometric altitude in meters (default: 0.0, sea level)
        """
        self.altitude = altitude
        self._compute_properties()

    def _compute_properties(self):
        """Compute all atmospheric properties at current altitude."""
        h = self.altitude
        T_trop = self.T0 + self.lapse_trop * self.h_trop
        P_trop = self.P0 * (T_trop / self.T0) ** (-self.g0 / (self.lapse_trop * self.R))

        if h <= self.h_trop:
            # Troposphere
            self.temperature = self.T0 + self.lapse_trop * h
            exponent = -self.g0 / (self.lapse_trop * self.R)
            self.pressure = self.P0 * (self.temperature / self.T0) ** exponent

        elif h <= self.h_strat1:
            # Lower stratosphere (isothermal)
            self.temperature = T_trop
            self.pressure = P_trop * np.exp(-self.g0 * (h - self.h_trop) / (self.R * T_trop))

        else:
            # Upper stratosphere
            P_strat1 = P_trop * np.exp(-self.g0 * (self.h_strat1 - self.h_trop) / (self.R * T_trop))
            self.temperature = T_trop + self.lapse_strat2 * (h - self.h_strat1)
            exponent = -self.g0 / (self.lapse_strat2 * self.R)
            self.pressure = P_strat1 * (self.temperature / T_trop) ** exponent

        # Density from ideal gas law
        self.density = self.pressure / (self.R * self.temperature)

        self.speed_of_sound = np.sqrt(self.gamma * self.R * self.temperature)

        # Viscosity (Sutherland's formula)
        self.dynamic_viscosity = (self.mu_ref * (self.temperature / self.T_ref) ** 1.5 *
                                  (self.T_ref + self.S) / (self.temperature + self.S))
        self.kinematic_viscosity = self.dynamic_viscosity / self.density

    def update(self, altitude: float):
        """
        Update atmospheric properties for new altitude.

        Parameters
        ----------
        altitude : float
            New geometric altitude in meters
        """
        self.altitude = altitude
        self._compute_properties()

    def get_properties(self) -> dict:
        """
        Get all atmospheric properties as dictionary.

        Returns
        -------
        dict
            Dictionary containing all atmospheric properties
        """
        return {
            'altitude': self.altitude,
            'temperature': self.temperature,
            'pressure': self.pressure,
            'density': self.density,
            'speed_of_sound': self.speed_of_sound,
            'dynamic_viscosity': self.dynamic_viscosity,
            'kinematic_viscosity': self.kinematic_viscosity,
            'temperature_C': self.temperature - 273.15,
        }

    def get_dynamic_pressure(self, velocity: float) -> float:
        """
        Dynamic pressure q = 0.5 * rho * V² (Pa).

        Parameters
        ----------
        velocity : float
            True airspeed in m/s
        """
        return 0.5 * self.density * velocity ** 2

    def __repr__(self):
        return (f"StandardAtmosphere(altitude={self.altitude:.0f} m, "
                f"T={self.temperature - 273.15:.1f}°C, "
                f"P={self.pressure / 100:.1f} hPa, "
                f"rho={self.density:.4f} kg/m³)")


if __name__ == "__main__":
    print("=" * 60)
    print("US Standard Atmosphere 1976 (SI)")
    print("=" * 60)
    print()
    print(f"{'Alt (m)':<10} {'T (C)':<10} {'P (hPa)':<12} {'rho (kg/m3)':<14} {'a (m/s)':<10}")
    print("-" * 60)

    for alt in [0, 1000, 2000, 4000, 11000, 15000]:
        props = StandardAtmosphere(alt).get_properties()
        print(f"{alt:<10.0f} {props['temperature_C']:<10.1f} {props['pressure'] / 100:<12.1f} "
              f"{props['density']:<14.4f} {props['speed_of_sound']:<10.1f}")

    print()
    print("Expected values at sea level:")
    print("  T = 15.0 C, P = 1013.25 hPa, rho = 1.225 kg/m3, a = 340.3 m/s")
