"""
Trajectory Recorder Tests
"""

import json
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from analyzer.trajectory import TrajectoryRecorder
from simulator.core.car_state import Phase
from simulator.core.controller import ElevatorController

DT = 0.016


@pytest.fixture
def recorded_trip():
    """Controller that has run 0 -> 3 and back to IDLE, with a recorder attached"""
    controller = ElevatorController()
    recorder = TrajectoryRecorder(controller)
    controller.select_floor(3)
    for _ in range(1000):
        controller.advance(DT)
    return controller, recorder


def test_samples_every_tick(recorded_trip):
    controller, recorder = recorded_trip
    # Initial snapshot plus one sample per tick
    assert len(recorder.samples) == 1001
    times = recorder.times()
    assert times[0] == 0.0
    assert np.all(np.diff(times) > 0)
    assert recorder.positions()[-1] == 12.0


def test_phase_sequence(recorded_trip):
    _, recorder = recorded_trip
    assert recorder.phase_sequence() == [
        Phase.IDLE, Phase.DOORS_CLOSING, Phase.MOVING_UP,
        Phase.DOORS_OPENING, Phase.DOORS_OPEN, Phase.IDLE,
    ]


def test_arrivals_and_travel_time(recorded_trip):
    _, recorder = recorded_trip
    arrivals = recorder.arrivals()
    assert len(arrivals) == 1
    assert arrivals[0][1] == 3
    travel_times = recorder.travel_times()
    assert len(travel_times) == 1
    assert abs(travel_times[0] - 8.0) < 0.2
    assert recorder.peak_velocity() == pytest.approx(2.0)


def test_detach_stops_recording(recorded_trip):
    controller, recorder = recorded_trip
    recorder.detach()
    count = len(recorder.samples)
    controller.advance(DT)
    assert len(recorder.samples) == count


def test_save_event_log(recorded_trip, tmp_path):
    _, recorder = recorded_trip
    recorder.set_simulation_metadata({'name': 'trip'})
    path = tmp_path / "log.jsonl"
    recorder.save_event_log(path)

    lines = [json.loads(line) for line in path.read_text().splitlines()]
    assert lines[0]['type'] == 'metadata'
    assert lines[0]['data']['config'] == {'name': 'trip'}
    assert len(lines) == len(recorder.event_log) + 1

    phases = [event['data']['to'] for event in lines[1:] if event['type'] == 'phase']
    assert phases == ['IDLE', 'DOORS_CLOSING', 'MOVING_UP', 'DOORS_OPENING', 'DOORS_OPEN', 'IDLE']
    statuses = [event for event in lines[1:] if event['type'] == 'car_status']
    assert len(statuses) == len(recorder.samples)


def test_plot_trajectory(recorded_trip, tmp_path):
    _, recorder = recorded_trip
    output = tmp_path / "trajectory.png"
    recorder.plot_trajectory(output, floor_height=4.0)
    assert output.exists()
