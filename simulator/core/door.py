import simpy


class DoorSequencer:
    """
    Door timing for one car: linear open/close ramps of the normalized door
    progress, and the auto-close (hold) timer that runs while the doors are open.

    The hold timer is a SimPy process. Only its handle is kept, so a pending
    timer can be interrupted when the car leaves the open phase or when a new
    hold period replaces it.
    """
    def __init__(self, env: simpy.Environment, animation_time: float = 1.0, hold_time: float = 2.0, name: str = "Door"):
        """
        Args:
            env: SimPy environment providing the clock for the hold timer
            animation_time: Seconds for one full open or close leg
            hold_time: Seconds the doors stay open before the hold timer fires
            name: Name used in log lines
        """
        self.env = env
        self.animation_time = animation_time
        self.hold_time = hold_time
        self.name = name
        self._hold_process = None  # Handle to the pending hold timer, if any

    def close(self, progress: float, dt: float) -> float:
        """Advance the closing leg by dt; floored at 0 (fully closed)."""
        return max(0.0, progress - dt / self.animation_time)

    def open(self, progress: float, dt: float) -> float:
        """Advance the opening leg by dt; capped at 1 (fully open)."""
        return min(1.0, progress + dt / self.animation_time)

    @property
    def hold_pending(self) -> bool:
        """True while a hold timer is armed and has not fired or been cancelled."""
        return self._hold_process is not None and self._hold_process.is_alive

    def schedule_hold(self, on_expired):
        """
        Arm the hold timer, replacing any timer that is still pending.

        Args:
            on_expired: Callable invoked (with no arguments) when the hold
                period elapses. It must check the live state itself.
        """
        if self.hold_pending:
            print(f"{self.env.now:.2f} [{self.name}] Replacing pending auto-close timer")
        self.cancel_hold()
        self._hold_process = self.env.process(self._hold(on_expired))
        return self._hold_process

    def cancel_hold(self):
        """Cancel the pending hold timer (no-op if none is pending)."""
        process = self._hold_process
        self._hold_process = None
        if process is not None and process.is_alive and process is not self.env.active_process:
            process.interrupt("cancelled")

    def _hold(self, on_expired):
        """Hold timer process body"""
        try:
            yield self.env.timeout(self.hold_time)
        except simpy.Interrupt:
            return

        if self._hold_process is not self.env.active_process:
            return  # superseded
        self._hold_process = None
        on_expired()
