"""
Configuration loader utility

Reads scenarios (SimulationConfig) and bare car specifications (CarConfig)
from YAML files, and writes scenarios back.
"""

import yaml
from pathlib import Path
from typing import List, Union

from .simulation import CarConfig, ConfigError, SimulationConfig

PathLike = Union[str, Path]

# Scenarios shipped inside the package (installed as package data)
SCENARIO_DIR = Path(__file__).resolve().parent / "scenarios"
DEFAULT_SCENARIO = SCENARIO_DIR / "default.yaml"


class ConfigLoader:
    """Utility class for loading configuration files"""

    @staticmethod
    def _read_yaml(file_path: PathLike) -> dict:
        """
        Parse a YAML file that must contain a mapping (an empty file counts as {}).

        Raises:
            FileNotFoundError: If file doesn't exist
            ConfigError: If the document is not a mapping
        """
        file_path = Path(file_path)
        if not file_path.is_file():
            raise FileNotFoundError(f"Config file not found: {file_path}")

        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{file_path}: expected a mapping at the top level, got {type(data).__name__}")
        return data

    @staticmethod
    def load_simulation(file_path: PathLike) -> SimulationConfig:
        """
        Load a scenario. Keys may sit under a top-level 'simulation' mapping.

        Raises:
            FileNotFoundError: If file doesn't exist
            ConfigError: If a value is out of range or a request falls after the run
        """
        config = SimulationConfig.from_dict(ConfigLoader._read_yaml(file_path))
        config.validate()
        return config

    @staticmethod
    def load_car(file_path: PathLike) -> CarConfig:
        """Load only the building/car/door part of a file (scenario or car-only)."""
        data = ConfigLoader._read_yaml(file_path)
        return CarConfig.from_dict(data.get('simulation', data))

    @staticmethod
    def save_simulation(config: SimulationConfig, file_path: PathLike):
        """Write a scenario in the same layout load_simulation reads."""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, 'w', encoding='utf-8') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    @staticmethod
    def list_scenarios(directory: PathLike = SCENARIO_DIR) -> List[Path]:
        """YAML scenario files in a directory, sorted by name"""
        directory = Path(directory)
        if not directory.is_dir():
            return []
        return sorted(list(directory.glob("*.yaml")) + list(directory.glob("*.yml")))


# Convenience functions
def load_simulation_config(file_path: PathLike) -> SimulationConfig:
    return ConfigLoader.load_simulation(file_path)


def load_car_config(file_path: PathLike) -> CarConfig:
    return ConfigLoader.load_car(file_path)


def save_simulation_config(config: SimulationConfig, file_path: PathLike):
    ConfigLoader.save_simulation(config, file_path)
