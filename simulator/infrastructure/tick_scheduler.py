"""
TickScheduler

Drives an ElevatorController with a fixed tick on its own SimPy clock and
issues scripted floor requests between ticks.
"""

import threading
from typing import List, Optional, Tuple

import simpy

from .realtime_env import RealtimeEnvironment


class TickScheduler:
    """
    Fixed-rate driver for a controller.

    Ticks and scripted requests are SimPy processes on the same environment,
    so a request is always handled strictly before or after a tick. `lock`
    is held around every controller call; outer surfaces running on other
    threads (HTTP handlers) take the same lock so their commands also land
    between ticks.
    """
    DEFAULT_TICK = 0.016  # seconds (~60 Hz)

    def __init__(self, controller, tick: float = DEFAULT_TICK, speed_factor: float = 0.0):
        """
        Args:
            controller: ElevatorController to drive
            tick: Tick period in simulated seconds
            speed_factor: Real-time pacing (0.0 = as fast as possible)
        """
        if tick <= 0:
            raise ValueError("tick must be positive")
        self.controller = controller
        self.tick = tick
        self.env = RealtimeEnvironment(speed_factor=speed_factor)
        self.lock = threading.RLock()
        self.results: List[Tuple[float, object]] = []  # (time, CommandResult) of scheduled requests
        self.tick_count = 0
        self._stop_requested = False
        self._tick_process = self.env.process(self._run())

    @property
    def running(self) -> bool:
        return self._tick_process.is_alive and not self._stop_requested

    def _run(self):
        """Tick loop process"""
        try:
            while not self._stop_requested:
                yield self.env.timeout(self.tick)
                if self._stop_requested:
                    break
                with self.lock:
                    self.controller.advance(self.tick)
                self.tick_count += 1
        except simpy.Interrupt:
            pass
        print(f"{self.env.now:.2f} [TickScheduler] Tick loop finished after {self.tick_count} ticks.")
        if self.env.speed_factor > 0 and self.env.max_lag > self.tick:
            print(f"{self.env.now:.2f} [TickScheduler] Fell behind real time by up to {self.env.max_lag * 1000:.0f} ms")

    def schedule_request(self, at: float, floor) -> simpy.Process:
        """
        Issue select_floor(floor) at simulated time `at` (seconds from the start).
        """
        return self.env.process(self._request(at, floor))

    def _request(self, at: float, floor):
        delay = max(0.0, at - self.env.now)
        yield self.env.timeout(delay)
        if self._stop_requested:
            return None
        with self.lock:
            result = self.controller.select_floor(floor)
        self.results.append((self.env.now, result))
        return result

    def run(self, until: Optional[float] = None):
        """
        Run the clock. With until=None the run lasts until stop() is called.
        """
        self.env.run(until=until)

    def stop(self):
        """
        Stop ticking and stop the controller (cancels its pending door timer).
        Safe to call from a subscriber callback or another thread; the tick
        loop exits at its next wake-up.
        """
        self._stop_requested = True
        with self.lock:
            self.controller.stop()
