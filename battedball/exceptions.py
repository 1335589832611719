"""battedball exception types.

Exception
└── RuntimeError
    └── TrajectoryError
        ├── DegenerateImpactError  (also a ValueError)
        └── NonFiniteStateError

- DegenerateImpactError: the launch conditions cannot produce a trajectory,
  e.g. a zero exit speed (no direction to resolve gyro spin along) or a
  non-finite derived constant.
- NonFiniteStateError: integration produced a NaN or infinite component.
  Carries the last finite state and the index of the failing step.
"""
from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from battedball.projectile import Impact
    from battedball.trajectory import State

__all__ = (
    'TrajectoryError',
    'DegenerateImpactError',
    'NonFiniteStateError',
)


class TrajectoryError(RuntimeError):
    """Base class for all errors raised while computing a flight."""


class DegenerateImpactError(TrajectoryError, ValueError):
    """Raised when impact conditions do not define a computable trajectory."""

    def __init__(self, reason: str, impact: Optional[Impact] = None):
        self.reason = reason
        self.impact = impact
        super().__init__(f"Degenerate impact: {reason}")


class NonFiniteStateError(TrajectoryError):
    """Raised when a stepped state contains a non-finite component."""

    def __init__(self, step: int, last_state: Optional[State] = None):
        self.step = step
        self.last_state = last_state
        message = f"Non-finite flight state at step {step}"
        if last_state is not None:
            message += f" (last finite hang time {last_state.hang_time:.3f} s)"
        super().__init__(message)
