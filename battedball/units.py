"""
Unit Conversion Helpers
=======================
Scalar conversions between the units the inputs are given in and the
units the force model works in (feet, seconds, radians).
"""

import numpy as np


MPH_TO_FPS = 1.467            # mph → ft/s
RPM_TO_RAD_S = np.pi / 30.0   # rpm → rad/s
INCHES_PER_FOOT = 12.0


def f_to_c(fahrenheit: float) -> float:
    """Fahrenheit to Celsius."""
    return (5.0 / 9.0) * (fahrenheit - 32.0)


def in_hg_to_mm_hg(in_hg: float) -> float:
    """Inches of mercury to millimetres of mercury."""
    return in_hg * 1000.0 / 39.37


def deg_to_rad(degrees: float) -> float:
    return degrees * np.pi / 180.0


def mph_to_fps(mph: float) -> float:
    return mph * MPH_TO_FPS


def rpm_to_rad_s(rpm: float) -> float:
    return rpm * RPM_TO_RAD_S
