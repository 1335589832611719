"""
Batted Ball Trajectory Simulator
================================
Computes the three-dimensional flight of a struck baseball from its launch
conditions, incorporating:
  - Gravity
  - Spin-dependent aerodynamic drag
  - Magnus lift with in-flight spin decay
  - Air density from temperature, elevation, pressure and humidity
  - Wind above a configurable height

The force model is an empirical fit (Nathan) evaluated once per step, with
an Euler scheme that reproduces the fitted reference carries and an
optional RK4 scheme.
"""

from .units import f_to_c, in_hg_to_mm_hg
from .atmosphere import Environment, density_profile
from .projectile import Ball, Impact
from .trajectory import Constants, State, Trajectory
from .integrator import FlightResult, iter_states, simulate
from .config import SimulationConfig, basic_config, get_config
from .exceptions import TrajectoryError, DegenerateImpactError, NonFiniteStateError
from .logger import logger, enable_file_logging, disable_file_logging
from .validation import (
    validate_against_reference, run_all_validations, REFERENCE_DEFAULT_HIT,
)

__version__ = "1.0.0"
__all__ = [
    'Ball', 'Environment', 'Impact',
    'Constants', 'State', 'Trajectory',
    'FlightResult', 'iter_states', 'simulate',
    'SimulationConfig', 'basic_config', 'get_config',
    'TrajectoryError', 'DegenerateImpactError', 'NonFiniteStateError',
    'logger', 'enable_file_logging', 'disable_file_logging',
    'f_to_c', 'in_hg_to_mm_hg', 'density_profile',
    'validate_against_reference', 'run_all_validations', 'REFERENCE_DEFAULT_HIT',
]
