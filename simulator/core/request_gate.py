"""
Request gate - admission control for floor selections.
"""

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .car_state import CarState, Phase


class RejectionReason(str, Enum):
    ALREADY_AT_FLOOR = "AlreadyAtFloor"
    IN_TRANSIT = "InTransit"
    DOORS_CLOSING = "DoorsClosing"
    FLOOR_OUT_OF_RANGE = "FloorOutOfRange"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Accepted:
    """Floor selection admitted; the floor is now the car's target."""
    floor: int

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class CommandRejected:
    """Floor selection refused; the car state is unchanged."""
    floor: object
    reason: RejectionReason

    def __bool__(self) -> bool:
        return False


CommandResult = Union[Accepted, CommandRejected]

# Phases in which a new destination cannot be taken
_BLOCKING_PHASES = {
    Phase.MOVING_UP: RejectionReason.IN_TRANSIT,
    Phase.MOVING_DOWN: RejectionReason.IN_TRANSIT,
    Phase.DOORS_CLOSING: RejectionReason.DOORS_CLOSING,
}


class RequestGate:
    """
    Decides whether a floor selection may be admitted for a given car state.

    Both the controller and any UI gating go through check(), so the rule
    exists in exactly one place.
    """
    def __init__(self, floor_count: int):
        self.floor_count = floor_count

    def check(self, floor, car: CarState) -> Optional[RejectionReason]:
        """
        Returns:
            None when the selection is admissible, otherwise the reason it is not.
        """
        if isinstance(floor, bool) or not isinstance(floor, numbers.Integral):
            return RejectionReason.FLOOR_OUT_OF_RANGE
        if not 0 <= floor < self.floor_count:
            return RejectionReason.FLOOR_OUT_OF_RANGE
        if floor == car.current_floor:
            return RejectionReason.ALREADY_AT_FLOOR
        return _BLOCKING_PHASES.get(car.phase)
