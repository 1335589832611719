"""
Validation Against Reference Flights
====================================
Compares simulator output against landing points of the same force model
evaluated in single precision.

Default batted ball:
  - 103 mph exit speed, 27.5° launch, straight to center field
  - 2500 rpm back spin
  - 70 °F, 15 ft elevation, 29.92 inHg, 50 % humidity, no wind
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Dict

from .atmosphere import Environment
from .integrator import simulate
from .projectile import Ball, Impact
from .trajectory import Trajectory


# ══════════════════════════════════════════════════════════════════════════
#  Reference data: landing position of the first sample at or below z = 0
# ══════════════════════════════════════════════════════════════════════════

REFERENCE_DEFAULT_HIT = {
    'name': 'Default 103 mph / 27.5° / 2500 rpm',
    'ball': Ball(),
    'environment': Environment(),
    'impact': Impact(),
    'dt': 0.01,
    'landing': (0.0, 423.358, -0.553),  # (x, y, z) ft after 560 steps
    'tolerance': 1e-3,                  # ft, double vs single precision
}


@dataclass
class ValidationResult:
    """Result of one validation comparison."""
    name: str
    ref_landing: tuple
    sim_landing: tuple
    errors: np.ndarray = field(repr=False)   # |sim - ref| per axis (ft)
    tolerance: float
    hang_time: float

    @property
    def max_error(self) -> float:
        return float(np.max(self.errors))

    @property
    def passed(self) -> bool:
        return self.max_error <= self.tolerance


def validate_against_reference(reference: dict, verbose: bool = True) -> ValidationResult:
    """
    Fly the reference conditions and compare the landing sample.
    """
    trajectory = Trajectory(reference['ball'], reference['environment'],
                            reference['impact'])
    result = simulate(trajectory, delta=reference['dt'], method='euler')

    sim = result.landing_position
    ref = reference['landing']
    errors = np.abs(np.array(sim) - np.array(ref))

    vr = ValidationResult(
        name=reference['name'],
        ref_landing=tuple(ref),
        sim_landing=sim,
        errors=errors,
        tolerance=reference['tolerance'],
        hang_time=result.hang_time,
    )

    if verbose:
        print(f"\n{'='*64}")
        print(f"  VALIDATION: {reference['name']}")
        print(f"  Timestep: {reference['dt']} s | Hang time: {result.hang_time:.2f} s")
        print(f"{'='*64}")
        print(f"{'Axis':>6} {'Ref (ft)':>12} {'Sim (ft)':>12} {'|Err| (ft)':>12}")
        print("-" * 64)
        for axis, r, s, e in zip('xyz', ref, sim, errors):
            print(f"{axis:>6} {r:>12.3f} {s:>12.3f} {e:>12.3f}")
        print("-" * 64)
        status = "✓ PASS" if vr.passed else "✗ OUT OF TOLERANCE"
        print(f"  Status: {status} (tolerance {vr.tolerance} ft)")
        print(f"{'='*64}\n")

    return vr


def run_all_validations(verbose: bool = True) -> Dict[str, ValidationResult]:
    """Run validation against all available reference flights."""
    all_results = {}
    for ref_data in [REFERENCE_DEFAULT_HIT]:
        all_results[ref_data['name']] = validate_against_reference(ref_data, verbose=verbose)
    return all_results
