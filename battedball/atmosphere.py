"""
Atmosphere Model
================
Air density from temperature, elevation, barometric pressure and
relative humidity, and the horizontal wind vector.

Density follows an empirical vapour-pressure correction for humidity
and an exponential barometric correction for elevation:

    ρ = 0.06261 · 1.2929 · 273/(T+273) · (P·e^(−βh) − 0.3783·RH·SVP/100) / 760

with T in °C, P in mmHg, h in ft and ρ in lb/ft³.
"""

import numpy as np
from dataclasses import dataclass

from .units import f_to_c, in_hg_to_mm_hg, deg_to_rad, mph_to_fps


# ── Empirical constants ───────────────────────────────────────────────────
BETA = 0.0001217              # 1/ft  barometric decay with elevation
KG_M3_TO_LB_FT3 = 0.06261     # density unit conversion
DRY_AIR_DENSITY_STP = 1.2929  # kg/m³ at 0 °C, 760 mmHg
STANDARD_PRESSURE_MM_HG = 760.0


@dataclass
class Environment:
    """
    Atmospheric and wind conditions at the ballpark.
    """
    temperature: float = 70.0         # °F
    elevation: float = 15.0           # ft above sea level
    pressure: float = 29.92           # inHg
    relative_humidity: float = 50.0   # %
    wind_speed: float = 0.0           # mph
    wind_direction: float = 0.0       # degrees clockwise from center field
    wind_height: float = 0.0          # ft above which there is wind

    def calculate_rho(self) -> float:
        """Air density (lb/ft³)."""
        return KG_M3_TO_LB_FT3 * DRY_AIR_DENSITY_STP * (
            273.0
            / (f_to_c(self.temperature) + 273.0)
            * (
                in_hg_to_mm_hg(self.pressure)
                * np.exp(-BETA * self.elevation)
                - 0.3783 * self.relative_humidity * self.calculate_svp() / 100.0
            )
            / STANDARD_PRESSURE_MM_HG
        )

    def calculate_svp(self) -> float:
        """Saturation vapour pressure (mmHg) at the current temperature."""
        temperature_c = f_to_c(self.temperature)

        return 4.5841 * np.exp(
            (18.687 - temperature_c / 234.5)
            * temperature_c
            / (257.14 + temperature_c)
        )

    def calculate_wind_velocity(self) -> np.ndarray:
        """
        Horizontal wind velocity [x, y] in ft/s.

        Direction is compass-like: 0° blows toward center field (+y),
        90° toward the right (+x).
        """
        direction = deg_to_rad(self.wind_direction)
        x = mph_to_fps(self.wind_speed) * np.sin(direction)
        y = mph_to_fps(self.wind_speed) * np.cos(direction)
        return np.array([x, y])


# ── Vectorized version for plotting ──────────────────────────────────────
def density_profile(elevations: np.ndarray, temperature: float = 70.0,
                    pressure: float = 29.92,
                    relative_humidity: float = 50.0) -> dict:
    """
    Air density over an array of elevations with the other conditions held.
    Returns dict with keys 'elevation' and 'density'.
    """
    rho = np.array([
        Environment(temperature=temperature, elevation=h, pressure=pressure,
                    relative_humidity=relative_humidity).calculate_rho()
        for h in elevations
    ])
    return {
        'elevation': np.asarray(elevations),
        'density': rho,
    }
