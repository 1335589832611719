"""
Ball & Impact Definitions
=========================
Physical properties of the ball and the conditions at the moment it
leaves the bat, with the kinematics that turn them into vectors.

Coordinate system:
  x = right of home plate (lateral)
  y = toward center field (downrange)
  z = height above the plate (up positive)
"""

import numpy as np
from dataclasses import dataclass

from .units import deg_to_rad, mph_to_fps, rpm_to_rad_s


# Regulation baseball
REFERENCE_MASS = 5.125            # oz
REFERENCE_CIRCUMFERENCE = 9.125   # in


@dataclass
class Ball:
    mass: float = REFERENCE_MASS                    # oz
    circumference: float = REFERENCE_CIRCUMFERENCE  # in


@dataclass
class Impact:
    """
    Ball state at contact: exit speed, launch geometry, spin and location.
    """
    exit_speed: float = 103.0     # mph
    launch_angle: float = 27.5    # degrees up from the ground
    direction: float = 0.0        # degrees clockwise from 0 = center field
    back_spin: float = 2500.0     # rpm
    side_spin: float = 0.0        # rpm
    gyro_spin: float = 0.0        # rpm
    x: float = 0.0                # ft to the right of the plate
    y: float = 2.0                # ft toward center field from the plate
    z: float = 3.0                # ft above the plate

    @staticmethod
    def calculate_velocity(exit_speed: float, launch_angle: float,
                           direction: float) -> np.ndarray:
        """
        Convert exit speed (mph) + launch angles (deg) to [vx, vy, vz] in ft/s.
        """
        launch = deg_to_rad(launch_angle)
        azim = deg_to_rad(direction)

        # unit vector
        x = np.cos(launch) * np.sin(azim)
        y = np.cos(launch) * np.cos(azim)
        z = np.sin(launch)

        magnitude = mph_to_fps(exit_speed)
        return np.array([x * magnitude, y * magnitude, z * magnitude])

    def calculate_initial_velocity(self) -> np.ndarray:
        return self.calculate_velocity(self.exit_speed, self.launch_angle,
                                       self.direction)

    def initial_position(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    def initial_spin(self) -> np.ndarray:
        """Raw [back, side, gyro] spin in rpm."""
        return np.array([self.back_spin, self.side_spin, self.gyro_spin])

    def calculate_cartesian_spin(self, velocity: np.ndarray) -> np.ndarray:
        """
        Angular velocity [ωx, ωy, ωz] in rad/s, in the same frame as velocity.

        Back and side spin are resolved through the launch geometry; gyro
        spin lies along the velocity direction. The velocity must be
        non-zero.
        """
        launch = deg_to_rad(self.launch_angle)
        azim = deg_to_rad(self.direction)
        speed = np.linalg.norm(velocity)

        x = rpm_to_rad_s(
            self.back_spin * np.cos(azim)
            - self.side_spin * np.sin(launch) * np.sin(azim)
            + self.gyro_spin * velocity[0] / speed
        )

        y = rpm_to_rad_s(
            self.back_spin * np.sin(azim)
            - self.side_spin * np.sin(launch) * np.cos(azim)
            + self.gyro_spin * velocity[1] / speed
        )

        z = rpm_to_rad_s(
            self.side_spin * np.cos(launch)
            + self.gyro_spin * velocity[2] / speed
        )

        return np.array([x, y, z])
