"""Infrastructure components for simulation"""

from .realtime_env import RealtimeEnvironment
from .tick_scheduler import TickScheduler

__all__ = [
    'RealtimeEnvironment',
    'TickScheduler',
]
