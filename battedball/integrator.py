"""
Flight Integration Loop
=======================
Drives State.step from contact until the ball comes down.

Two schemes share the same acceleration model:

1. **Euler** (reference): velocity advanced with a(x_n, v_n), position
   with the extra ½·a·Δt² term. Reproduces the fitted reference carries.
2. **RK4**: four-stage Runge-Kutta, more accurate at large timesteps.

The step function has no stopping rule, so the loop enforces one: stop at
the first state on or below the ground, or when hang time or the step
count runs out.

Output: FlightResult dataclass with full state history.
"""

import numpy as np
from dataclasses import dataclass
from typing import Iterator, List, Optional

from scipy.interpolate import interp1d

from .config import INTEGRATION_METHODS, get_config
from .exceptions import NonFiniteStateError
from .logger import logger
from .trajectory import State, Trajectory


@dataclass
class FlightResult:
    """Complete flight output."""
    trajectory: Trajectory
    method: str               # 'euler' or 'rk4'
    dt: float                 # timestep used
    landed: bool              # False if a bound stopped the loop first

    # Arrays, each has shape (N,)
    time: np.ndarray
    x: np.ndarray             # lateral
    y: np.ndarray             # downrange
    z: np.ndarray             # height
    vx: np.ndarray
    vy: np.ndarray
    vz: np.ndarray
    speed: np.ndarray

    @property
    def landing_position(self) -> tuple:
        """Position of the first state at or below the ground (ft)."""
        return float(self.x[-1]), float(self.y[-1]), float(self.z[-1])

    @property
    def carry(self) -> float:
        """Downrange distance at landing (ft)."""
        return float(self.y[-1])

    @property
    def lateral(self) -> float:
        """Distance right of the plate at landing (ft)."""
        return float(self.x[-1])

    @property
    def distance(self) -> float:
        """Horizontal distance from the plate at landing (ft)."""
        return float(np.hypot(self.x[-1], self.y[-1]))

    @property
    def apex(self) -> float:
        """Maximum height reached (ft)."""
        return float(np.max(self.z))

    @property
    def hang_time(self) -> float:
        return float(self.time[-1])

    @property
    def landing_speed(self) -> float:
        return float(self.speed[-1])

    @property
    def landing_angle_deg(self) -> float:
        """Angle of descent at landing (degrees below horizontal)."""
        v_horiz = np.hypot(self.vx[-1], self.vy[-1])
        return float(np.degrees(np.arctan2(-self.vz[-1], v_horiz)))

    def interpolated_landing(self) -> tuple:
        """
        (x, y, hang_time) where the path crosses z = 0, interpolated over the
        last samples instead of taking the first sample below ground.
        """
        if len(self.z) < 2 or not self.landed:
            return self.lateral, self.carry, self.hang_time

        # Cubic needs four samples with strictly falling height
        if len(self.z) >= 4 and np.all(np.diff(self.z[-4:]) < 0):
            n, kind = 4, 'cubic'
        else:
            n, kind = 2, 'linear'
        points = np.vstack([self.x[-n:], self.y[-n:], self.time[-n:]])
        at_ground = interp1d(self.z[-n:], points, kind=kind, axis=1,
                             fill_value='extrapolate', assume_sorted=False)(0.0)
        return float(at_ground[0]), float(at_ground[1]), float(at_ground[2])

    def summary(self) -> str:
        """Human-readable summary string."""
        impact = self.trajectory.impact
        lines = [
            f"╔══════════════════════════════════════════════════════╗",
            f"║  FLIGHT SUMMARY{'':<38s}║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Method       : {self.method.upper():<37s}║",
            f"║  Timestep     : {self.dt:<37.4f}║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Exit speed   : {impact.exit_speed:>10.1f} mph{'':<23s}║",
            f"║  Launch angle : {impact.launch_angle:>10.1f} °{'':<25s}║",
            f"║  Back spin    : {impact.back_spin:>10.0f} rpm{'':<23s}║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Distance     : {self.distance:>10.1f} ft{'':<24s}║",
            f"║  Lateral      : {self.lateral:>10.1f} ft{'':<24s}║",
            f"║  Apex         : {self.apex:>10.1f} ft{'':<24s}║",
            f"║  Hang time    : {self.hang_time:>10.2f} s{'':<25s}║",
            f"║  Land speed   : {self.landing_speed:>10.1f} ft/s{'':<22s}║",
            f"║  Land angle   : {self.landing_angle_deg:>10.1f} °{'':<25s}║",
            f"╚══════════════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)


def _check_method(method: str) -> str:
    if method not in INTEGRATION_METHODS:
        raise ValueError(
            f"Unknown integration method '{method}'. "
            f"Available: {list(INTEGRATION_METHODS)}"
        )
    return method


def iter_states(trajectory: Trajectory, delta: Optional[float] = None,
                method: Optional[str] = None) -> Iterator[State]:
    """
    Yield the initial state, then every following state, forever.

    Stop consuming on whatever condition you like; calling again restarts
    from contact. Raises NonFiniteStateError if a step leaves the reals.
    """
    config = get_config()
    delta = config.time_step if delta is None else delta
    method = _check_method(config.method if method is None else method)

    state = trajectory.get_initial_state()
    yield state

    step_count = 0
    while True:
        if method == 'rk4':
            new_state = state.step_rk4(trajectory, delta)
        else:
            new_state = state.step(trajectory, delta)
        step_count += 1
        if not new_state.is_finite():
            raise NonFiniteStateError(step_count, state)
        state = new_state
        yield state


def simulate(trajectory: Trajectory, delta: Optional[float] = None,
             max_hang_time: Optional[float] = None,
             max_steps: Optional[int] = None,
             method: Optional[str] = None) -> FlightResult:
    """
    Step the flight until the ball is on or below the ground.

    The first state with z <= 0 is the last one recorded. If max_hang_time
    or max_steps is reached first, the result has landed=False.
    """
    config = get_config()
    delta = config.time_step if delta is None else delta
    max_hang_time = config.max_hang_time if max_hang_time is None else max_hang_time
    max_steps = config.max_steps if max_steps is None else max_steps
    method = _check_method(config.method if method is None else method)

    history: List[State] = []
    landed = False
    for step_count, state in enumerate(iter_states(trajectory, delta, method)):
        history.append(state)
        if step_count > 0 and state.has_landed:
            landed = True
            break
        if step_count >= max_steps or state.hang_time >= max_hang_time:
            break

    result = _build_result(history, trajectory, method, delta, landed)
    if landed:
        logger.debug("Landed after %d steps: distance=%.2f ft hang_time=%.2f s",
                     len(history) - 1, result.distance, result.hang_time)
    else:
        logger.warning("Flight stopped before landing at hang_time=%.2f s, z=%.2f ft "
                       "(max_steps=%d, max_hang_time=%.1f s)",
                       result.hang_time, float(result.z[-1]), max_steps, max_hang_time)
    return result


def _build_result(history, trajectory, method, dt, landed):
    """Convert state history to FlightResult."""
    positions = np.array([s.position for s in history])
    velocities = np.array([s.velocity for s in history])

    return FlightResult(
        trajectory=trajectory,
        method=method,
        dt=dt,
        landed=landed,
        time=np.array([s.hang_time for s in history]),
        x=positions[:, 0],
        y=positions[:, 1],
        z=positions[:, 2],
        vx=velocities[:, 0],
        vy=velocities[:, 1],
        vz=velocities[:, 2],
        speed=np.linalg.norm(velocities, axis=1),
    )
