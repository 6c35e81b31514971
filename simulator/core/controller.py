import math
from typing import Callable, List, Optional

import simpy

from config.simulation import CarConfig
from .entity import Entity
from .car_state import CarState, Phase
from .kinematics import KinematicsEngine
from .door import DoorSequencer
from .request_gate import Accepted, CommandRejected, CommandResult, RequestGate


class ElevatorController(Entity):
    """
    Single-car controller: a fixed-timestep state machine that couples the
    kinematics engine (travel) with the door sequencer (door legs and the
    auto-close timer), gated by the request gate for floor selections.

    The car state is an immutable CarState that is replaced, never edited, so
    a snapshot handed out is never modified afterwards.
    """

    def __init__(self, config: Optional[CarConfig] = None, name: Optional[str] = None):
        """
        Args:
            config: Car specification. None uses the default CarConfig.
            name: Name used in log lines.

        Raises:
            ConfigError: If the configuration is invalid.
        """
        config = config if config is not None else CarConfig()
        config.validate()

        super().__init__(simpy.Environment(), name)
        self.config = config
        self.kinematics = KinematicsEngine(config.max_speed, config.acceleration, config.deceleration)
        self.door = DoorSequencer(self.env, config.door_animation_seconds, config.door_open_seconds,
                                  name=f"{self.name}Door")
        self.gate = RequestGate(config.floor_count)

        self._car = CarState()
        self._subscribers: List[Callable[[CarState], None]] = []
        self._stopped = False

    # ---- observation ----

    def snapshot(self) -> CarState:
        """Latest car state (immutable)."""
        return self._car

    @property
    def phase(self) -> Phase:
        return self._car.phase

    @property
    def stopped(self) -> bool:
        return self._stopped

    def subscribe(self, callback: Callable[[CarState], None]) -> Callable[[], None]:
        """
        Register a callback invoked with the new CarState after every tick.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ---- commands ----

    def select_floor(self, floor) -> CommandResult:
        """
        Request the car to travel to `floor`.

        Returns:
            Accepted if the floor became the target, otherwise CommandRejected
            with the reason. A rejection leaves the state untouched.
        """
        reason = self.gate.check(floor, self._car)
        if reason is not None:
            self._log(f"Floor {floor} rejected: {reason} (phase {self._car.phase})")
            return CommandRejected(floor, reason)

        self._car = self._car.evolve(target_floor=floor)
        self._log(f"Floor {floor} accepted.")
        return Accepted(floor)

    def is_selectable(self, floor) -> bool:
        """Whether select_floor(floor) would be accepted right now."""
        return self.gate.check(floor, self._car) is None

    def selectable_floors(self) -> List[int]:
        return [floor for floor in range(self.config.floor_count) if self.is_selectable(floor)]

    def stop(self):
        """Stop the simulation: cancel the hold timer and ignore further ticks."""
        if self._stopped:
            return
        self._stopped = True
        self.door.cancel_hold()
        self._log("Controller stopped.")

    # ---- tick ----

    def advance(self, dt: float) -> CarState:
        """
        Advance the simulation by dt seconds.

        Phase logic runs first, then the controller clock moves forward by dt
        so any due hold timer fires, then subscribers are notified.
        A zero dt changes nothing.

        Raises:
            ValueError: If dt is negative or not finite.
        """
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"dt must be a finite non-negative number of seconds, got {dt}")
        if dt == 0 or self._stopped:
            return self._car

        phase = self._car.phase
        if phase is Phase.IDLE:
            self._tick_idle()
        elif phase is Phase.DOORS_CLOSING:
            self._tick_doors_closing(dt)
        elif phase.is_moving:
            self._tick_moving(dt)
        elif phase is Phase.DOORS_OPENING:
            self._tick_doors_opening(dt)
        # DOORS_OPEN waits for the hold timer

        until = self.env.now + dt
        if until > self.env.now:
            self.env.run(until=until)

        snapshot = self._car
        for callback in list(self._subscribers):
            callback(snapshot)
        return snapshot

    def _tick_idle(self):
        car = self._car
        if car.target_floor is not None and car.target_floor != car.current_floor:
            self._enter(Phase.DOORS_CLOSING)

    def _tick_doors_closing(self, dt: float):
        car = self._car
        progress = self.door.close(car.door_progress, dt)
        if progress > 0.0:
            self._car = car.evolve(door_progress=progress)
        elif car.target_floor is None:
            self._enter(Phase.IDLE, door_progress=0.0)
        elif car.target_floor > car.current_floor:
            self._enter(Phase.MOVING_UP, door_progress=0.0)
        else:
            self._enter(Phase.MOVING_DOWN, door_progress=0.0)

    def _tick_moving(self, dt: float):
        car = self._car
        target_y = self.config.floor_position(car.target_floor)
        step = self.kinematics.step(car.position, car.velocity, target_y, car.phase.direction, dt)

        if step.arrived:
            self._log(f"Arrived at floor {car.target_floor}.")
            self._enter(Phase.DOORS_OPENING,
                        current_floor=car.target_floor,
                        target_floor=None,
                        velocity=0.0,
                        position=target_y)
            return

        self._car = car.evolve(
            position=min(max(step.position, 0.0), self.config.top_position),
            velocity=min(max(step.velocity, 0.0), self.config.max_speed)
        )

    def _tick_doors_opening(self, dt: float):
        progress = self.door.open(self._car.door_progress, dt)
        if progress < 1.0:
            self._car = self._car.evolve(door_progress=progress)
        else:
            self._enter(Phase.DOORS_OPEN, door_progress=1.0)

    # ---- transitions ----

    def _enter(self, new_phase: Phase, **changes):
        """Commit a phase transition together with any field changes."""
        old_phase = self._car.phase
        self._car = self._car.evolve(phase=new_phase, **changes)
        self._log_state_change(old_phase, new_phase)

        if old_phase is Phase.DOORS_OPEN:
            self.door.cancel_hold()
        if new_phase is Phase.DOORS_OPEN:
            self.door.schedule_hold(self._on_hold_expired)

    def _on_hold_expired(self):
        """Hold timer callback; acts on the live phase only."""
        if self._car.phase is not Phase.DOORS_OPEN:
            return
        if self._car.target_floor is not None:
            self._enter(Phase.DOORS_CLOSING)
        else:
            self._enter(Phase.IDLE)
