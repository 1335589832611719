"""
Simulation Settings
===================
Defaults for the caller-side stepping loop. The force model itself has no
tunable settings; its constants are fixed empirical fits.
"""

from typing import NamedTuple

__all__ = ('SimulationConfig', 'INTEGRATION_METHODS', 'basic_config', 'get_config')


INTEGRATION_METHODS = ('euler', 'rk4')


class SimulationConfig(NamedTuple):
    time_step: float = 0.01        # s
    max_hang_time: float = 30.0    # s
    max_steps: int = 10_000
    method: str = 'euler'


_BATTEDBALL_CONFIG = SimulationConfig()


def basic_config(config: SimulationConfig):
    """Replace the process-wide default settings."""
    global _BATTEDBALL_CONFIG
    if config.method not in INTEGRATION_METHODS:
        raise ValueError(
            f"Unknown integration method '{config.method}'. "
            f"Available: {list(INTEGRATION_METHODS)}"
        )
    _BATTEDBALL_CONFIG = config


def get_config() -> SimulationConfig:
    return _BATTEDBALL_CONFIG
