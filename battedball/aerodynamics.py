"""
Aerodynamic Force Model
=======================
Empirical drag and lift (Magnus) coefficients for a spinning baseball,
and the helpers that feed them.

The fitted coefficients reproduce Alan Nathan's trajectory calculator:
  - Drag coefficient rises with spin, with the spin term fading as the
    ball's rotation decays in flight.
  - Lift coefficient is a saturating function of the spin parameter
    S = rω / v.
"""

import numpy as np

from .units import INCHES_PER_FOOT


# ── Fitted constants ──────────────────────────────────────────────────────
STATIC_DRAG_COEFFICIENT = 0.3008
SPIN_DRAG_COEFFICIENT = 0.0292
TAU = 25.0                      # s  spin decay time constant at 146.7 ft/s
DECAY_REFERENCE_SPEED = 146.7   # ft/s  (100 mph)
C_0_SCALE = 0.07182             # ft²/lb  drag/lift scale for the reference ball
GRAVITY = 32.17404855643        # ft/s²


def calculate_c_0(mass: float, circumference: float, rho: float) -> float:
    """
    Force-scale coefficient folding air density and ball size into one number.

    Rescales the reference-ball coefficient by mass (oz) and circumference (in).
    """
    return C_0_SCALE * rho * (5.125 / mass) * (circumference / 9.125) ** 2


def omega_to_omega_r(circumference: float, omega: float) -> float:
    """Surface speed (ft/s) of a ball spinning at omega rad/s."""
    return (circumference / 2.0 / np.pi) * omega / INCHES_PER_FOOT


def calculate_relative_wind_speed(wind_velocity: np.ndarray, wind_height: float,
                                  velocity: np.ndarray, z: float) -> float:
    """
    Speed of the air "felt" by the ball.

    Wind only acts at or above wind_height; below it this is the ball speed.
    """
    if z >= wind_height:
        return float(np.linalg.norm([
            velocity[0] - wind_velocity[0],
            velocity[1] - wind_velocity[1],
            velocity[2],
        ]))

    return float(np.linalg.norm(velocity))


def wind_offset(wind_component: float, wind_height: float) -> float:
    # Wind term as the fitted model applies it to drag and lift.
    return max(wind_component - wind_height, 0.0)


def calculate_drag_decay(hang_time: float, speed: float) -> float:
    """
    Fraction of the spin's aerodynamic effect left after hang_time seconds.

    Decays faster the faster the ball is moving. A ball at rest has no
    decay rate, so the factor is 1.
    """
    if speed == 0.0:
        return 1.0
    return float(np.exp(-hang_time / (TAU * DECAY_REFERENCE_SPEED / speed)))


def calculate_spin_parameter(omega_r: float, relative_wind_speed: float,
                             drag_decay: float) -> float:
    return (omega_r / relative_wind_speed) * drag_decay


def calculate_drag_coefficient(spin: np.ndarray, drag_decay: float) -> float:
    """
    Drag coefficient that "inflects" around 100 mph exit speed.

    spin is the raw [back, side, gyro] vector in rpm.
    """
    return (STATIC_DRAG_COEFFICIENT
            + SPIN_DRAG_COEFFICIENT * (np.linalg.norm(spin) / 1000.0) * drag_decay)


def calculate_lift_coefficient(s: float) -> float:
    """Lift coefficient C_L = 1 / (2.32 + 0.4/S); zero for a non-spinning ball."""
    if s == 0.0:
        return 0.0
    return 1.0 / (2.32 + 0.4 / s)
