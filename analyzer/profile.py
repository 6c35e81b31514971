import math

import matplotlib.pyplot as plt
import numpy as np
import sympy as sp


class TrapezoidalProfile:
    """
    Ideal continuous-time velocity profile for one trip: constant
    acceleration up to max speed, cruise, constant deceleration to rest.
    Short trips never reach max speed and become triangular.

    Serves as the analytic reference the tick-based integration is compared
    against.
    """
    def __init__(self, distance: float, max_speed: float, acceleration: float, deceleration: float):
        if distance < 0:
            raise ValueError("distance cannot be negative")
        if max_speed <= 0 or acceleration <= 0 or deceleration <= 0:
            raise ValueError("max_speed, acceleration and deceleration must be positive")
        self.distance = distance
        self.max_speed = max_speed
        self.acceleration = acceleration
        self.deceleration = deceleration

        # --- Time of each phase ---
        a, d, v_max = acceleration, deceleration, max_speed
        dist_to_reach_max_speed = v_max ** 2 / (2 * a) + v_max ** 2 / (2 * d)

        # Case 1: long trip reaching max speed
        if distance >= dist_to_reach_max_speed:
            self.peak_velocity = v_max
            self.cruise_time = (distance - dist_to_reach_max_speed) / v_max
        # Case 2: short trip, peak below max speed (from D = v²/2a + v²/2d)
        else:
            self.peak_velocity = math.sqrt(2 * distance * a * d / (a + d))
            self.cruise_time = 0.0

        self.accel_time = self.peak_velocity / a
        self.decel_time = self.peak_velocity / d
        self.total_time = self.accel_time + self.cruise_time + self.decel_time

        self._build_expressions()

    @classmethod
    def for_trip(cls, config, start_floor: int, end_floor: int) -> 'TrapezoidalProfile':
        """Profile for travel between two floors of a CarConfig"""
        distance = abs(config.floor_position(end_floor) - config.floor_position(start_floor))
        return cls(distance, config.max_speed, config.acceleration, config.deceleration)

    def _build_expressions(self):
        """Define the piecewise acceleration once in SymPy and integrate it."""
        t = sp.Symbol('t', real=True)
        t_p1 = self.accel_time
        t_p2 = self.accel_time + self.cruise_time
        t_p3 = self.total_time

        a_t = sp.Piecewise((self.acceleration, t <= t_p1), (0, t <= t_p2),
                           (-self.deceleration, t <= t_p3), (0, True))
        # integrate() of a Piecewise yields a continuous antiderivative
        v_t = sp.integrate(a_t, t)
        v_t = v_t - v_t.subs(t, 0)
        d_t = sp.integrate(v_t, t)
        d_t = d_t - d_t.subs(t, 0)

        self.acceleration_expr = a_t
        self.velocity_expr = v_t
        self.distance_expr = d_t

        # Fast numerical functions
        self._v_func = sp.lambdify(t, v_t, 'numpy')
        self._d_func = sp.lambdify(t, d_t, 'numpy')

    @property
    def phase_durations(self):
        """(accelerating, cruising, decelerating) in seconds"""
        return self.accel_time, self.cruise_time, self.decel_time

    def velocity_at(self, time: float) -> float:
        return float(self._v_func(min(max(time, 0.0), self.total_time)))

    def distance_at(self, time: float) -> float:
        return float(self._d_func(min(max(time, 0.0), self.total_time)))

    def sample(self, dt: float = 0.05):
        """
        Sample the profile on a regular grid, endpoint included.

        Returns:
            (times, velocities, distances) as numpy arrays
        """
        times = np.arange(0.0, self.total_time, dt)
        if times.size == 0 or times[-1] < self.total_time:
            times = np.append(times, self.total_time)
        velocities = np.array([self.velocity_at(x) for x in times], dtype=float)
        distances = np.array([self.distance_at(x) for x in times], dtype=float)
        return times, velocities, distances

    def travel_time_error(self, simulated_time: float) -> float:
        """Simulated minus ideal travel time (s)"""
        return simulated_time - self.total_time

    def plot_velocity_profile(self, output_filename='velocity_profile.png', simulated=None, show=False):
        """
        Plot the ideal velocity profile.

        Args:
            output_filename: PNG file to write
            simulated: Optional (times, velocities) of a recorded trip, drawn
                on top with its time axis starting at zero
            show: Also open an interactive window
        """
        times, velocities, _ = self.sample()

        plt.figure(figsize=(10, 6))
        plt.plot(times, velocities, label=f"Ideal profile ({self.distance:.1f} m)")
        if simulated is not None:
            sim_times, sim_velocities = simulated
            sim_times = np.asarray(sim_times, dtype=float)
            plt.plot(sim_times - sim_times[0], sim_velocities, linestyle='--', label="Simulated")
        plt.title("Trapezoidal Velocity Profile")
        plt.xlabel("Time (s)")
        plt.ylabel("Velocity (m/s)")
        plt.axhline(self.max_speed, color='r', linestyle='--', label=f'Max Speed ({self.max_speed} m/s)')
        plt.grid(True)
        plt.legend()
        plt.savefig(output_filename, dpi=150, bbox_inches='tight')
        if show:
            plt.show()
        plt.close()
        return output_filename
