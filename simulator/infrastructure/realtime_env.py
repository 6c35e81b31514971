"""
RealtimeEnvironment

SimPy environment whose clock can be paced against the wall clock, so a
fixed 16 ms tick lines up with real frames while a viewer is attached.
"""

import simpy
import time


class RealtimeEnvironment(simpy.Environment):
    """
    simpy.Environment with optional pacing.

    After every processed event the environment sleeps until wall time has
    caught up with `now / speed_factor`. When processing falls behind, no
    sleep happens and the shortfall is kept in `max_lag`.

    Args:
        speed_factor (float): Simulated seconds per wall-clock second
            - 1.0 = real-time
            - 2.0 = twice as fast
            - 0.0 = no pacing (plain SimPy behavior)

    Example:
        >>> env = RealtimeEnvironment(speed_factor=1.0)
        >>> # a 16 ms tick process now fires roughly every 16 ms of wall time
    """

    def __init__(self, speed_factor=0.0, initial_time=0):
        super().__init__(initial_time=initial_time)
        self.max_lag = 0.0  # worst wall-clock shortfall seen, in seconds
        self.set_speed(speed_factor)

    def _reset_reference(self):
        self._wall_origin = time.monotonic()
        self._sim_origin = self.now

    def step(self):
        result = super().step()

        if self.speed_factor > 0:
            due = self._wall_origin + (self.now - self._sim_origin) / self.speed_factor
            ahead = due - time.monotonic()
            if ahead > 0:
                time.sleep(ahead)
            else:
                self.max_lag = max(self.max_lag, -ahead)

        return result

    def set_speed(self, speed_factor):
        """
        Change the pacing; it applies from the current instant.

        Raises:
            ValueError: If speed_factor is negative
        """
        if speed_factor < 0:
            raise ValueError(f"speed_factor cannot be negative, got {speed_factor}")
        self.speed_factor = speed_factor
        self._reset_reference()

    def get_speed(self):
        return self.speed_factor
