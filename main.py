import sys

# Configuration
from config import DEFAULT_SCENARIO, ConfigLoader, load_simulation_config

# Simulator components
from simulator.core.controller import ElevatorController
from simulator.infrastructure.tick_scheduler import TickScheduler

# Analyzer
from analyzer.trajectory import TrajectoryRecorder
from analyzer.profile import TrapezoidalProfile


def run_simulation(sim_config_path=DEFAULT_SCENARIO, log_file=None, plot=False):
    """
    Load a scenario and run it to the end

    Args:
        sim_config_path: Path to simulation configuration YAML file
        log_file: If given, the JSON Lines event log is written there
        plot: Save the trajectory diagram and the ideal profile of the first trip

    Returns:
        (controller, recorder, scheduler)
    """
    print("--- Loading Configuration ---")
    sim_config = load_simulation_config(sim_config_path)
    car_config = sim_config.car
    print(f"Simulation Config: {sim_config_path}")

    print("--- Initializing Simulation ---")
    controller = ElevatorController(car_config, name="Car_1")
    recorder = TrajectoryRecorder(controller)
    recorder.set_simulation_metadata(sim_config.to_dict())

    scheduler = TickScheduler(controller, tick=sim_config.tick, speed_factor=sim_config.realtime_factor)
    for request in sim_config.requests:
        scheduler.schedule_request(request.time, request.floor)

    print("\n--- Simulation Start ---")
    scheduler.run(until=sim_config.duration)
    print("--- Simulation End ---\n")

    print_summary(controller, recorder, scheduler)

    if log_file:
        recorder.save_event_log(log_file)

    if plot:
        recorder.plot_trajectory("trajectory.png", floor_height=car_config.floor_height)
        arrivals = recorder.arrivals()
        travel_times = recorder.travel_times()
        if arrivals and travel_times:
            profile = TrapezoidalProfile.for_trip(car_config, 0, arrivals[0][1])
            profile.plot_velocity_profile("velocity_profile.png")

    return controller, recorder, scheduler


def print_summary(controller, recorder, scheduler):
    """Print requests, trips and the final car state"""
    config = controller.config
    print("=" * 60)
    print("   RUN SUMMARY")
    print("=" * 60)

    print("Requests:")
    for timestamp, result in scheduler.results:
        if result:
            print(f"  {timestamp:6.2f}s  floor {result.floor}: accepted")
        else:
            print(f"  {timestamp:6.2f}s  floor {result.floor}: rejected ({result.reason})")

    print("Trips:")
    start_floor = 0
    for (arrival_time, floor), travel_time in zip(recorder.arrivals(), recorder.travel_times()):
        ideal = TrapezoidalProfile.for_trip(config, start_floor, floor)
        print(f"  {start_floor} -> {floor}: arrived {arrival_time:.2f}s, travel {travel_time:.2f}s "
              f"(ideal {ideal.total_time:.2f}s, error {ideal.travel_time_error(travel_time):+.2f}s)")
        start_floor = floor

    state = controller.snapshot()
    print(f"Peak velocity: {recorder.peak_velocity():.2f} m/s (limit {config.max_speed} m/s)")
    print(f"Final state: floor {state.current_floor}, {state.phase.label}, position {state.position:.2f} m")
    print("=" * 60)


def main(argv=None):
    """
    Command line entry point: [config.yaml] [--log] [--plot] [--list]

    Returns:
        Process exit status
    """
    argv = sys.argv[1:] if argv is None else list(argv)
    if "--list" in argv:
        for path in ConfigLoader.list_scenarios():
            print(path)
        return 0

    args = [arg for arg in argv if not arg.startswith('--')]
    sim_config_path = args[0] if args else DEFAULT_SCENARIO
    log_file = "trajectory_log.jsonl" if "--log" in argv else None
    run_simulation(sim_config_path=sim_config_path, log_file=log_file, plot="--plot" in argv)
    return 0


if __name__ == '__main__':
    sys.exit(main())
