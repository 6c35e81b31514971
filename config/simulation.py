"""
Simulation Configuration

Physical specifications of the car and its doors, plus the scenario that
drives a run (tick rate, pacing, duration and timed floor requests).
"""

import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class ConfigError(ValueError):
    """Raised when configuration values have the wrong type or are outside their admissible range."""


_REAL_FIELDS = ('floor_height', 'max_speed', 'acceleration', 'deceleration',
                'door_open_time', 'door_animation_time')


def _require_real(name, value):
    """Raise ConfigError unless value is a finite real number (bools excluded)"""
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
        raise ConfigError(f"{name} must be a finite number, got {value!r}")


@dataclass(frozen=True)
class CarConfig:
    """
    Car and door specifications (immutable after construction)

    Door times are in milliseconds, everything else in SI units.
    """
    floor_count: int = 6
    floor_height: float = 4.0  # meters
    max_speed: float = 2.0  # m/s
    acceleration: float = 1.0  # m/s²
    deceleration: float = 1.0  # m/s²
    door_open_time: float = 2000.0  # ms the doors stay open before auto-close
    door_animation_time: float = 1000.0  # ms for one open or close leg

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Raise ConfigError if any parameter has the wrong type or is out of range"""
        if isinstance(self.floor_count, bool) or not isinstance(self.floor_count, numbers.Integral):
            raise ConfigError(f"floor_count must be an integer, got {self.floor_count!r}")
        for name in _REAL_FIELDS:
            _require_real(name, getattr(self, name))

        if self.floor_count < 2:
            raise ConfigError("floor_count must be at least 2")
        if self.floor_height <= 0:
            raise ConfigError("floor_height must be positive")
        if self.max_speed <= 0:
            raise ConfigError("max_speed must be positive")
        if self.acceleration <= 0:
            raise ConfigError("acceleration must be positive")
        if self.deceleration <= 0:
            raise ConfigError("deceleration must be positive")
        if self.door_open_time < 0:
            raise ConfigError("door_open_time cannot be negative")
        if self.door_animation_time <= 0:
            raise ConfigError("door_animation_time must be positive")

    @property
    def top_position(self) -> float:
        """Height of the highest landing above the lowest one."""
        return (self.floor_count - 1) * self.floor_height

    @property
    def door_open_seconds(self) -> float:
        return self.door_open_time / 1000.0

    @property
    def door_animation_seconds(self) -> float:
        return self.door_animation_time / 1000.0

    def floor_position(self, floor: int) -> float:
        """Nominal car position (m) when level with the given floor."""
        return floor * self.floor_height

    @classmethod
    def from_dict(cls, data: dict) -> 'CarConfig':
        """Create CarConfig from the nested building/car/door layout"""
        building_data = data.get('building', {})
        car_data = data.get('car', {})
        door_data = data.get('door', {})
        return cls(
            floor_count=building_data.get('floor_count', 6),
            floor_height=building_data.get('floor_height', 4.0),
            max_speed=car_data.get('max_speed', 2.0),
            acceleration=car_data.get('acceleration', 1.0),
            deceleration=car_data.get('deceleration', 1.0),
            door_open_time=door_data.get('open_time', 2000.0),
            door_animation_time=door_data.get('animation_time', 1000.0)
        )

    def to_dict(self) -> dict:
        return {
            'building': {
                'floor_count': self.floor_count,
                'floor_height': self.floor_height
            },
            'car': {
                'max_speed': self.max_speed,
                'acceleration': self.acceleration,
                'deceleration': self.deceleration
            },
            'door': {
                'open_time': self.door_open_time,
                'animation_time': self.door_animation_time
            }
        }


@dataclass
class FloorRequest:
    """A floor selection issued at a given simulation time (seconds)"""
    time: float
    floor: int

    def __post_init__(self):
        _require_real('request time', self.time)
        if self.time < 0:
            raise ConfigError("request time cannot be negative")


@dataclass
class SimulationConfig:
    """
    Complete scenario configuration

    Combines the car specification with tick/pacing settings and the
    scripted floor requests.
    """
    car: CarConfig = field(default_factory=CarConfig)
    tick_ms: float = 16.0  # fixed tick period
    realtime_factor: float = 0.0  # 1.0 = realtime, 0.0 = as fast as possible
    duration: float = 30.0  # seconds
    requests: List[FloorRequest] = field(default_factory=list)
    name: Optional[str] = None

    def __post_init__(self):
        for name in ('tick_ms', 'realtime_factor', 'duration'):
            _require_real(name, getattr(self, name))
        if self.tick_ms <= 0:
            raise ConfigError("tick_ms must be positive")
        if self.realtime_factor < 0:
            raise ConfigError("realtime_factor cannot be negative")
        if self.duration <= 0:
            raise ConfigError("duration must be positive")

    @property
    def tick(self) -> float:
        """Tick period in seconds"""
        return self.tick_ms / 1000.0

    @classmethod
    def from_dict(cls, data: dict) -> 'SimulationConfig':
        """Create SimulationConfig from dictionary"""
        sim_data = data.get('simulation', data)

        requests = []
        for item in sim_data.get('requests') or []:
            if not isinstance(item, dict) or 'floor' not in item:
                raise ConfigError(f"request must be a mapping with a 'floor' key, got {item!r}")
            # Floors are not range-checked here; the request gate rejects them at run time
            requests.append(FloorRequest(time=item.get('time', 0.0), floor=item['floor']))

        return cls(
            car=CarConfig.from_dict(sim_data),
            tick_ms=sim_data.get('tick_ms', 16.0),
            realtime_factor=sim_data.get('realtime_factor', 0.0),
            duration=sim_data.get('duration', 30.0),
            requests=requests,
            name=sim_data.get('name')
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        result: Dict[str, Any] = {
            'simulation': {
                **self.car.to_dict(),
                'tick_ms': self.tick_ms,
                'realtime_factor': self.realtime_factor,
                'duration': self.duration,
                'requests': [
                    {'time': request.time, 'floor': request.floor}
                    for request in self.requests
                ]
            }
        }

        if self.name is not None:
            result['simulation']['name'] = self.name

        return result

    def validate(self):
        """Validate configuration consistency"""
        self.car.validate()
        for request in self.requests:
            if request.time > self.duration:
                raise ConfigError(
                    f"request for floor {request.floor} at {request.time}s is after the end of the run ({self.duration}s)"
                )
