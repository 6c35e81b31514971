"""
Configuration management package

Provides the car specification and scenario configuration classes.
"""

from .simulation import (
    ConfigError,
    CarConfig,
    FloorRequest,
    SimulationConfig
)

from .config_loader import (
    ConfigLoader,
    SCENARIO_DIR,
    DEFAULT_SCENARIO,
    load_simulation_config,
    load_car_config,
    save_simulation_config
)

__all__ = [
    # Simulation
    'ConfigError',
    'CarConfig',
    'FloorRequest',
    'SimulationConfig',

    # Loader
    'ConfigLoader',
    'SCENARIO_DIR',
    'DEFAULT_SCENARIO',
    'load_simulation_config',
    'load_car_config',
    'save_simulation_config',
]
