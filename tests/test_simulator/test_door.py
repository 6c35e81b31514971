"""
Door Sequencer Tests

Open/close ramps and the auto-close (hold) timer on a bare SimPy clock.
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
import simpy

from simulator.core.door import DoorSequencer


@pytest.fixture
def env():
    return simpy.Environment()


@pytest.fixture
def door(env):
    return DoorSequencer(env, animation_time=1.0, hold_time=2.0)


def test_ramps_are_clamped(door):
    assert door.open(0.0, 0.5) == pytest.approx(0.5)
    assert door.open(0.99, 0.016) == 1.0
    assert door.close(0.01, 0.016) == 0.0
    assert door.close(1.0, 0.25) == pytest.approx(0.75)


def test_full_leg_takes_animation_time(door):
    progress = 0.0
    ticks = 0
    while progress < 1.0:
        progress = door.open(progress, 0.016)
        ticks += 1
    assert ticks == 63


def test_hold_fires_after_hold_time(env, door):
    fired = []
    door.schedule_hold(lambda: fired.append(env.now))
    assert door.hold_pending
    env.run(until=5.0)
    assert fired == [2.0]
    assert not door.hold_pending


def test_rescheduling_replaces_pending_timer(env, door):
    fired = []
    door.schedule_hold(lambda: fired.append(("first", env.now)))
    env.run(until=0.5)
    door.schedule_hold(lambda: fired.append(("second", env.now)))
    env.run(until=10.0)
    assert fired == [("second", 2.5)]


def test_only_one_timer_is_ever_pending(env, door):
    fired = []
    for index in range(5):
        door.schedule_hold(lambda index=index: fired.append(index))
    env.run(until=10.0)
    assert fired == [4]


def test_cancel_hold(env, door):
    fired = []
    door.schedule_hold(lambda: fired.append(env.now))
    env.run(until=1.0)
    door.cancel_hold()
    assert not door.hold_pending
    env.run(until=10.0)
    assert fired == []

    # Cancelling with nothing pending is a no-op
    door.cancel_hold()


def test_callback_may_rearm_the_timer(env, door):
    fired = []

    def on_expired():
        fired.append(env.now)
        if len(fired) < 3:
            door.schedule_hold(on_expired)

    door.schedule_hold(on_expired)
    env.run(until=20.0)
    assert fired == [2.0, 4.0, 6.0]
    assert not door.hold_pending
