import json
from datetime import datetime
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from simulator.core.car_state import CarState, Phase


class TrajectoryRecorder:
    """
    Records every post-tick snapshot of a controller as an independent
    "recorder", and turns the samples into trajectories, phase timelines
    and a JSON Lines event log for offline playback.
    """
    def __init__(self, controller=None):
        self.samples: List[Tuple[float, CarState]] = []
        self.event_log = []  # List of events in standardized format
        self.simulation_metadata = {}
        self._controller = None
        self._unsubscribe = None
        if controller is not None:
            self.attach(controller)

    def attach(self, controller):
        """Subscribe to a controller and record its current state as the first sample."""
        self.detach()
        self._controller = controller
        self._record(controller.snapshot())
        self._unsubscribe = controller.subscribe(self._record)

    def detach(self):
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._unsubscribe = None

    def _record(self, state: CarState):
        timestamp = self._controller.now
        previous = self.samples[-1][1] if self.samples else None
        self.samples.append((timestamp, state))

        if previous is None or previous.phase is not state.phase:
            self._add_event_log("phase", {
                "from": previous.phase.value if previous is not None else None,
                "to": state.phase.value,
                "floor": state.current_floor,
                "target_floor": state.target_floor,
                "position": state.position
            }, timestamp)
        self._add_event_log("car_status", state.to_dict(), timestamp)

    def _add_event_log(self, event_type, event_data, timestamp):
        """
        Add an event to the JSON Lines log.

        Args:
            event_type (str): Type of event ('phase' or 'car_status')
            event_data (dict): Event-specific data
            timestamp (float): Simulated time of the event
        """
        self.event_log.append({
            "time": timestamp,
            "type": event_type,
            "data": event_data
        })

    def set_simulation_metadata(self, metadata):
        """
        Set simulation metadata (called before simulation starts).

        Args:
            metadata (dict): Simulation configuration
        """
        self.simulation_metadata = {
            "format_version": "1.0",
            "timestamp": datetime.now().isoformat(),
            "config": metadata
        }

    # ---- numeric views ----

    def times(self) -> np.ndarray:
        return np.array([t for t, _ in self.samples], dtype=float)

    def positions(self) -> np.ndarray:
        return np.array([s.position for _, s in self.samples], dtype=float)

    def velocities(self) -> np.ndarray:
        return np.array([s.velocity for _, s in self.samples], dtype=float)

    def door_progress(self) -> np.ndarray:
        return np.array([s.door_progress for _, s in self.samples], dtype=float)

    def peak_velocity(self) -> float:
        if not self.samples:
            return 0.0
        return float(np.max(self.velocities()))

    # ---- phase timeline ----

    def transitions(self) -> List[Tuple[float, Phase]]:
        """(time, phase) for the first sample and every phase change"""
        result = []
        for timestamp, state in self.samples:
            if not result or result[-1][1] is not state.phase:
                result.append((timestamp, state.phase))
        return result

    def phase_sequence(self) -> List[Phase]:
        return [phase for _, phase in self.transitions()]

    def arrivals(self) -> List[Tuple[float, int]]:
        """(time, floor) of each arrival, i.e. each entry into DOORS_OPENING"""
        return [
            (timestamp, state.current_floor)
            for timestamp, state in self._phase_entries(Phase.DOORS_OPENING)
        ]

    def travel_times(self) -> List[float]:
        """Duration of each trip, from the start of motion to arrival"""
        durations = []
        departure: Optional[float] = None
        for timestamp, phase in self.transitions():
            if phase.is_moving:
                departure = timestamp
            elif phase is Phase.DOORS_OPENING and departure is not None:
                durations.append(timestamp - departure)
                departure = None
        return durations

    def _phase_entries(self, phase: Phase):
        previous = None
        for timestamp, state in self.samples:
            if state.phase is phase and (previous is None or previous.phase is not phase):
                yield timestamp, state
            previous = state

    # ---- output ----

    def save_event_log(self, filename='trajectory_log.jsonl'):
        """
        Save the collected events in JSON Lines format (metadata first).

        Args:
            filename (str): Name of the output file
        """
        with open(filename, 'w', encoding='utf-8') as f:
            if self.simulation_metadata:
                f.write(json.dumps({"type": "metadata", "data": self.simulation_metadata}) + "\n")
            for event in self.event_log:
                f.write(json.dumps(event) + "\n")
        print(f"Event log saved: {filename} ({len(self.event_log)} events)")

    def plot_trajectory(self, output_filename='trajectory.png', floor_height: Optional[float] = None, show=False):
        """
        Plot car position and velocity over time.

        Args:
            output_filename: PNG file to write
            floor_height: If given, landing heights are drawn as guide lines
            show: Also open an interactive window
        """
        times = self.times()
        fig, (ax_pos, ax_vel) = plt.subplots(2, 1, figsize=(12, 8), sharex=True)

        ax_pos.plot(times, self.positions(), linewidth=2, color='tab:blue', label='Position')
        if floor_height:
            top = float(np.max(self.positions())) if self.samples else 0.0
            for height in np.arange(0.0, top + floor_height, floor_height):
                ax_pos.axhline(height, color='grey', linestyle=':', alpha=0.6)
        for timestamp, floor in self.arrivals():
            ax_pos.annotate(f'{floor}', (timestamp, self._position_at(timestamp)),
                            textcoords='offset points', xytext=(0, 6), ha='center')
        ax_pos.set_ylabel("Position (m)")
        ax_pos.set_title("Car Trajectory")
        ax_pos.grid(True, linestyle='--', alpha=0.7)
        ax_pos.legend(loc='upper right')

        ax_vel.plot(times, self.velocities(), linewidth=2, color='tab:orange', label='Velocity')
        ax_vel.plot(times, self.door_progress(), linewidth=1, color='tab:green', alpha=0.7, label='Door progress')
        ax_vel.set_xlabel("Time (s)")
        ax_vel.set_ylabel("Velocity (m/s) / Door")
        ax_vel.grid(True, linestyle='--', alpha=0.7)
        ax_vel.legend(loc='upper right')

        fig.tight_layout()
        fig.savefig(output_filename, dpi=150, bbox_inches='tight')
        print(f"Trajectory diagram saved: {output_filename}")
        if show:
            plt.show()
        plt.close(fig)
        return output_filename

    def _position_at(self, timestamp: float) -> float:
        for sample_time, state in self.samples:
            if sample_time >= timestamp:
                return state.position
        return self.samples[-1][1].position if self.samples else 0.0
