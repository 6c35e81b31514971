"""
Car state - the phase enumeration and the immutable state record of one car.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class Phase(str, Enum):
    """Discrete controller phase"""
    IDLE = "IDLE"
    DOORS_CLOSING = "DOORS_CLOSING"
    MOVING_UP = "MOVING_UP"
    MOVING_DOWN = "MOVING_DOWN"
    DOORS_OPENING = "DOORS_OPENING"
    DOORS_OPEN = "DOORS_OPEN"

    @property
    def is_moving(self) -> bool:
        return self in (Phase.MOVING_UP, Phase.MOVING_DOWN)

    @property
    def direction(self) -> int:
        """+1 travelling up, -1 travelling down, 0 otherwise"""
        if self is Phase.MOVING_UP:
            return 1
        if self is Phase.MOVING_DOWN:
            return -1
        return 0

    @property
    def label(self) -> str:
        """Human-readable form used by status displays, e.g. 'MOVING UP'"""
        return self.value.replace("_", " ")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CarState:
    """
    Snapshot of a single car.

    Attributes:
        current_floor: Last floor the car fully stopped at
        target_floor: Pending destination, None when no request is outstanding
        position: Height above the lowest landing in meters
        velocity: Speed magnitude in m/s (direction comes from the phase)
        door_progress: 0.0 fully closed .. 1.0 fully open
        phase: Controller phase
    """
    current_floor: int = 0
    target_floor: Optional[int] = None
    position: float = 0.0
    velocity: float = 0.0
    door_progress: float = 0.0
    phase: Phase = Phase.IDLE

    def evolve(self, **changes) -> 'CarState':
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "current_floor": self.current_floor,
            "target_floor": self.target_floor,
            "position": self.position,
            "velocity": self.velocity,
            "door_progress": self.door_progress,
            "phase": self.phase.value,
        }
