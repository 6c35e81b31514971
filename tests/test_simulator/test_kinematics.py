"""
Kinematics Engine Tests

Single-step behavior of the trapezoidal integrator and full trips run
step by step.
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest

from simulator.core.kinematics import KinematicsEngine, MotionStep

DT = 0.016


@pytest.fixture
def engine():
    return KinematicsEngine(max_speed=2.0, acceleration=1.0, deceleration=1.0)


def run_trip(engine, start, target):
    direction = 1 if target > start else -1
    position, velocity = start, 0.0
    steps = []
    for _ in range(10000):
        step = engine.step(position, velocity, target, direction, DT)
        steps.append(step)
        if step.arrived:
            return steps
        position, velocity = step.position, step.velocity
    raise AssertionError("never arrived")


def test_deceleration_distance(engine):
    assert engine.deceleration_distance(2.0) == pytest.approx(2.0)
    assert engine.deceleration_distance(0.0) == 0.0
    assert KinematicsEngine(2.0, 1.0, 0.5).deceleration_distance(1.0) == pytest.approx(1.0)


def test_accelerates_from_rest(engine):
    step = engine.step(0.0, 0.0, 12.0, 1, DT)
    assert step.velocity == pytest.approx(0.016)
    assert step.position == pytest.approx(0.016 * 0.016)
    assert not step.arrived


def test_speed_is_capped(engine):
    step = engine.step(0.0, 2.0, 12.0, 1, DT)
    assert step.velocity == 2.0
    assert step.position == pytest.approx(0.032)


def test_brakes_inside_braking_distance(engine):
    # 2 m left at 2 m/s is exactly the braking distance
    step = engine.step(10.0, 2.0, 12.0, 1, DT)
    assert step.velocity == pytest.approx(1.984)


def test_crossing_target_snaps_to_it(engine):
    assert engine.step(11.99, 2.0, 12.0, 1, DT) == MotionStep(12.0, 0.0, True)
    assert engine.step(0.01, 1.0, 0.0, -1, DT) == MotionStep(0.0, 0.0, True)


def test_settles_when_stopped_short_of_target(engine):
    step = engine.step(11.95, 0.0, 12.0, 1, DT)
    assert step.arrived
    assert step.position == 12.0


def test_at_rest_outside_margin_keeps_moving(engine):
    step = engine.step(11.5, 0.0, 12.0, 1, DT)
    assert not step.arrived
    assert step.velocity > 0.0


def test_tiny_distance_arrives_immediately(engine):
    assert engine.step(0.0, 0.0, 0.05, 1, DT).arrived


def test_long_trip_up(engine):
    steps = run_trip(engine, 0.0, 12.0)
    assert steps[-1] == MotionStep(12.0, 0.0, True)
    assert max(step.velocity for step in steps) == 2.0
    assert abs(len(steps) * DT - 8.0) < 0.2
    positions = [step.position for step in steps]
    assert positions == sorted(positions)


def test_long_trip_down(engine):
    steps = run_trip(engine, 20.0, 0.0)
    assert steps[-1].position == 0.0
    assert all(0.0 <= step.position <= 20.0 for step in steps)
    # 20 m: 2 s + 8 s + 2 s
    assert abs(len(steps) * DT - 12.0) < 0.2


def test_short_trip_is_triangular(engine):
    steps = run_trip(engine, 0.0, 2.0)
    peak = max(step.velocity for step in steps)
    assert peak < 2.0 ** 0.5
    assert peak > 1.2
    assert steps[-1].position == 2.0
