"""
Elevator Car Analyzer

Recording and reporting tools for controller runs.

Components:
- TrajectoryRecorder: Subscribes to a controller and records every tick
- TrapezoidalProfile: Ideal continuous profile used as the analytic reference
"""

__version__ = "0.2.0"

from .trajectory import TrajectoryRecorder
from .profile import TrapezoidalProfile

__all__ = ['TrajectoryRecorder', 'TrapezoidalProfile']
