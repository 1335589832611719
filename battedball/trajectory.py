"""
Trajectory Engine
=================
Derives the per-flight constants once, evaluates the acceleration on the
ball (drag + Magnus − gravity) and advances the flight state.

    Ball + Environment + Impact → Constants → Trajectory → State, State, ...

Each step is a pure function of (state, trajectory, delta): it returns a
new State and never mutates the old one, so a sequence of states can be
kept for replay. The step itself has no stopping rule; callers stop once
the ball is on or below the ground (see integrator.py).
"""

import dataclasses
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .aerodynamics import (
    GRAVITY, calculate_c_0, omega_to_omega_r, calculate_relative_wind_speed,
    calculate_drag_decay, calculate_spin_parameter, calculate_drag_coefficient,
    calculate_lift_coefficient, wind_offset,
)
from .atmosphere import Environment
from .exceptions import DegenerateImpactError
from .logger import logger
from .projectile import Ball, Impact


def _read_only(values) -> np.ndarray:
    # Private float copy that cannot be written through.
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class Constants:
    """Quantities fixed for the whole flight. The vectors are read-only."""
    c_0: float
    initial_position: np.ndarray   # ft
    initial_velocity: np.ndarray   # ft/s
    initial_spin: np.ndarray       # rpm [back, side, gyro]
    cartesian_spin: np.ndarray     # rad/s
    omega: float                   # rad/s
    omega_r: float                 # ft/s
    wind_velocity: np.ndarray      # ft/s [x, y]
    wind_height: float             # ft

    def __post_init__(self):
        for name in ('initial_position', 'initial_velocity', 'initial_spin',
                     'cartesian_spin', 'wind_velocity'):
            object.__setattr__(self, name, _read_only(getattr(self, name)))

    @classmethod
    def from_conditions(cls, ball: Ball, environment: Environment,
                        impact: Impact) -> 'Constants':
        """
        Raises DegenerateImpactError if the launch has no speed, the ball has
        no positive finite size, or any derived quantity is not finite.
        """
        for label, value in (('mass', ball.mass), ('circumference', ball.circumference)):
            if not (np.isfinite(value) and value > 0.0):
                raise DegenerateImpactError(
                    f"ball {label} must be positive and finite, got {value}", impact)

        rho = environment.calculate_rho()
        c_0 = calculate_c_0(ball.mass, ball.circumference, rho)
        if not np.isfinite(c_0):
            raise DegenerateImpactError(
                f"force coefficient is not finite (rho={rho}, mass={ball.mass}, "
                f"circumference={ball.circumference})", impact)

        initial_velocity = impact.calculate_initial_velocity()
        if not np.all(np.isfinite(initial_velocity)):
            raise DegenerateImpactError("initial velocity is not finite", impact)
        if np.linalg.norm(initial_velocity) == 0.0:
            raise DegenerateImpactError("exit speed is zero", impact)

        initial_position = impact.initial_position()
        initial_spin = impact.initial_spin()
        cartesian_spin = impact.calculate_cartesian_spin(initial_velocity)
        if not (np.all(np.isfinite(initial_position))
                and np.all(np.isfinite(cartesian_spin))):
            raise DegenerateImpactError("impact point or spin is not finite", impact)

        omega = float(np.linalg.norm(cartesian_spin))
        omega_r = omega_to_omega_r(ball.circumference, omega)
        wind_velocity = environment.calculate_wind_velocity()
        # An infinite wind height is allowed: wind never applies.
        if not np.all(np.isfinite(wind_velocity)) or np.isnan(environment.wind_height):
            raise DegenerateImpactError(
                f"wind is not finite (speed={environment.wind_speed}, "
                f"direction={environment.wind_direction}, "
                f"height={environment.wind_height})", impact)

        logger.debug("Derived constants: rho=%.6f c_0=%.6f omega=%.3f omega_r=%.3f",
                     rho, c_0, omega, omega_r)

        return cls(
            c_0=c_0,
            initial_position=initial_position,
            initial_velocity=initial_velocity,
            initial_spin=initial_spin,
            cartesian_spin=cartesian_spin,
            omega=omega,
            omega_r=omega_r,
            wind_velocity=wind_velocity,
            wind_height=environment.wind_height,
        )

    def get_initial_state(self) -> 'State':
        return State(
            position=self.initial_position,
            velocity=self.initial_velocity,
            spin=self.initial_spin,
            hang_time=0.0,
        )


@dataclass(frozen=True, eq=False)
class State:
    """
    Snapshot of the ball in flight.

    Every State holds its own read-only copies of the vectors, so states
    kept from earlier in a flight cannot be changed through later ones.
    """
    position: np.ndarray   # [x, y, z] ft
    velocity: np.ndarray   # [vx, vy, vz] ft/s
    spin: np.ndarray       # [back, side, gyro] rpm, constant through the flight
    hang_time: float       # s since contact

    def __post_init__(self):
        for name in ('position', 'velocity', 'spin'):
            object.__setattr__(self, name, _read_only(getattr(self, name)))

    def step(self, trajectory: 'Trajectory', delta: float) -> 'State':
        """
        Advance by delta seconds.

        x_{n+1} = x_n + v_n·Δt + a(x_n, v_n)·Δt²/2
        v_{n+1} = v_n + a(x_n, v_n)·Δt
        """
        acceleration = trajectory.calculate_acceleration(self)
        position = self.position + self.velocity * delta + acceleration * (delta * delta) / 2.0
        velocity = self.velocity + acceleration * delta

        return State(
            position=position,
            velocity=velocity,
            spin=self.spin,
            hang_time=self.hang_time + delta,
        )

    def step_rk4(self, trajectory: 'Trajectory', delta: float) -> 'State':
        """
        Advance by delta seconds with 4th-order Runge-Kutta.

        Uses the same acceleration model as step(); spin is carried unchanged.
        """
        def accel(p, v, t):
            return trajectory.calculate_acceleration(
                State(position=p, velocity=v, spin=self.spin, hang_time=t))

        pos, vel, t = self.position, self.velocity, self.hang_time

        k1v = accel(pos, vel, t)
        k1x = vel

        k2v = accel(pos + 0.5 * delta * k1x, vel + 0.5 * delta * k1v, t + 0.5 * delta)
        k2x = vel + 0.5 * delta * k1v

        k3v = accel(pos + 0.5 * delta * k2x, vel + 0.5 * delta * k2v, t + 0.5 * delta)
        k3x = vel + 0.5 * delta * k2v

        k4v = accel(pos + delta * k3x, vel + delta * k3v, t + delta)
        k4x = vel + delta * k3v

        return State(
            position=pos + (delta / 6.0) * (k1x + 2*k2x + 2*k3x + k4x),
            velocity=vel + (delta / 6.0) * (k1v + 2*k2v + 2*k3v + k4v),
            spin=self.spin,
            hang_time=t + delta,
        )

    def get_position(self) -> Tuple[float, float, float]:
        return float(self.position[0]), float(self.position[1]), float(self.position[2])

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    @property
    def has_landed(self) -> bool:
        return self.position[2] <= 0.0

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.position))
                    and np.all(np.isfinite(self.velocity))
                    and np.isfinite(self.hang_time))


class Trajectory:
    """
    A single batted ball's flight model.

    Holds private copies of the ball, environment and impact it was built
    from; changing the caller's records afterwards has no effect.
    """

    def __init__(self, ball: Optional[Ball] = None,
                 environment: Optional[Environment] = None,
                 impact: Optional[Impact] = None):
        self.ball = dataclasses.replace(ball) if ball is not None else Ball()
        self.environment = (dataclasses.replace(environment)
                            if environment is not None else Environment())
        self.impact = dataclasses.replace(impact) if impact is not None else Impact()
        self._constants = Constants.from_conditions(self.ball, self.environment, self.impact)

    @property
    def constants(self) -> Constants:
        return self._constants

    def get_initial_state(self) -> State:
        return self._constants.get_initial_state()

    def calculate_acceleration(self, state: State) -> np.ndarray:
        """Drag + Magnus acceleration, minus gravity (ft/s²)."""
        wind_velocity = self._constants.wind_velocity
        wind_height = self._constants.wind_height
        omega_r = self._constants.omega_r
        velocity = state.velocity

        relative_wind_speed = calculate_relative_wind_speed(
            wind_velocity, wind_height, velocity, state.position[2])

        drag_decay = calculate_drag_decay(state.hang_time, float(np.linalg.norm(velocity)))
        if relative_wind_speed == 0.0:
            s = 0.0
        else:
            s = calculate_spin_parameter(omega_r, relative_wind_speed, drag_decay)

        drag_coefficient = calculate_drag_coefficient(state.spin, drag_decay)

        drag_acceleration = self.calculate_drag_acceleration(
            velocity, wind_velocity, relative_wind_speed, drag_coefficient)
        magnus_acceleration = self.calculate_magnus_acceleration(
            s, velocity, relative_wind_speed)

        acceleration = drag_acceleration + magnus_acceleration
        acceleration[2] -= GRAVITY

        return acceleration

    def calculate_drag_acceleration(self, velocity: np.ndarray, wind_velocity: np.ndarray,
                                    relative_wind_speed: float,
                                    drag_coefficient: float) -> np.ndarray:
        c_0 = self._constants.c_0
        wind_height = self._constants.wind_height

        # No wind on the vertical axis
        return np.array([
            -c_0 * drag_coefficient * relative_wind_speed
            * (velocity[0] - wind_offset(wind_velocity[0], wind_height)),
            -c_0 * drag_coefficient * relative_wind_speed
            * (velocity[1] - wind_offset(wind_velocity[1], wind_height)),
            -c_0 * drag_coefficient * relative_wind_speed * velocity[2],
        ])

    def calculate_magnus_acceleration(self, s: float, velocity: np.ndarray,
                                      relative_wind_speed: float) -> np.ndarray:
        """
        Lift from spin. The first component is always zero: the model
        applies no Magnus force along x.
        """
        lift_coefficient = calculate_lift_coefficient(s)
        omega = self._constants.omega
        if lift_coefficient == 0.0 or omega == 0.0:
            return np.zeros(3)

        c_0 = self._constants.c_0
        cartesian_spin = self._constants.cartesian_spin
        wind_velocity = self._constants.wind_velocity
        wind_height = self._constants.wind_height

        scale = c_0 * (lift_coefficient / omega) * relative_wind_speed
        return np.array([
            0.0,
            scale * (cartesian_spin[2] * velocity[0]
                     - cartesian_spin[0] * velocity[2]),
            scale * (cartesian_spin[0]
                     * (velocity[1] - wind_offset(wind_velocity[1], wind_height))
                     - cartesian_spin[1] * velocity[0]),
        ])
