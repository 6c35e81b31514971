"""Core simulation entities"""

from .entity import Entity
from .car_state import CarState, Phase
from .kinematics import KinematicsEngine, MotionStep
from .door import DoorSequencer
from .request_gate import Accepted, CommandRejected, CommandResult, RejectionReason, RequestGate
from .controller import ElevatorController

__all__ = [
    'Entity',
    'CarState',
    'Phase',
    'KinematicsEngine',
    'MotionStep',
    'DoorSequencer',
    'Accepted',
    'CommandRejected',
    'CommandResult',
    'RejectionReason',
    'RequestGate',
    'ElevatorController',
]
