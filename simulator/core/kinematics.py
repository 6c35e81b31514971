"""
Kinematics engine for the car.

Integrates position and velocity one fixed step at a time, producing a
trapezoidal velocity profile: accelerate towards max speed, cruise, then
brake once the remaining distance is within the braking distance.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MotionStep:
    """Result of one integration step"""
    position: float
    velocity: float
    arrived: bool = False


class KinematicsEngine:
    """
    Acceleration-limited motion towards a target height.

    The braking test uses v² = 2·a·s and is re-evaluated on every step, so a
    short hop simply peaks below max_speed.
    """

    # Braking starts this far (m) ahead of the ideal braking point
    ARRIVAL_TOLERANCE = 0.1

    def __init__(self, max_speed: float, acceleration: float, deceleration: float,
                 tolerance: float = ARRIVAL_TOLERANCE):
        self.max_speed = max_speed
        self.acceleration = acceleration
        self.deceleration = deceleration
        self.tolerance = tolerance

    def deceleration_distance(self, velocity: float) -> float:
        """Distance needed to come to rest from `velocity` at the configured deceleration."""
        return (velocity * velocity) / (2 * self.deceleration)

    def step(self, position: float, velocity: float, target: float, direction: int, dt: float) -> MotionStep:
        """
        Advance one explicit Euler step of length dt.

        Args:
            position: Current height (m)
            velocity: Current speed magnitude (m/s)
            target: Target height (m)
            direction: +1 for up, -1 for down
            dt: Step length (s)

        Returns:
            MotionStep with the new position/velocity. When the step reaches
            or crosses the target the position is clamped to it exactly and
            the velocity is zero.
        """
        distance = abs(target - position)

        if distance <= self.deceleration_distance(velocity) + self.tolerance:
            new_velocity = max(0.0, velocity - self.deceleration * dt)
        else:
            new_velocity = min(self.max_speed, velocity + self.acceleration * dt)

        new_position = position + direction * new_velocity * dt

        crossed = new_position >= target if direction > 0 else new_position <= target
        # At rest inside the braking margin the brake test would hold the car forever
        settled = new_velocity == 0.0 and abs(target - new_position) <= self.tolerance
        if crossed or settled:
            return MotionStep(position=target, velocity=0.0, arrived=True)

        return MotionStep(position=new_position, velocity=new_velocity)
