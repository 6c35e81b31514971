"""
Elevator Simulator - Core simulation engine

This package provides the single-car controller (state machine, kinematics,
door sequencing and request gating) and the tick infrastructure that drives it.
"""

__version__ = "0.2.0"

from .core.controller import ElevatorController
from .core.car_state import CarState, Phase
from .core.request_gate import Accepted, CommandRejected, RejectionReason
from .core.kinematics import KinematicsEngine
from .core.door import DoorSequencer
from .core.entity import Entity

from .infrastructure.realtime_env import RealtimeEnvironment
from .infrastructure.tick_scheduler import TickScheduler

__all__ = [
    'ElevatorController',
    'CarState',
    'Phase',
    'Accepted',
    'CommandRejected',
    'RejectionReason',
    'KinematicsEngine',
    'DoorSequencer',
    'Entity',
    'RealtimeEnvironment',
    'TickScheduler',
]
