#!/usr/bin/env python3
"""
Launcher script to run the car controller with real-time viewers
Runs the HTTP API, the WebSocket push server and the paced simulation together
"""
import asyncio
import sys
import threading
import time

from config import DEFAULT_SCENARIO, load_simulation_config
from simulator.core.controller import ElevatorController
from simulator.infrastructure.tick_scheduler import TickScheduler
from visualizer.http_server import run_server
from visualizer.server import VisualizerServer


def run_websocket_server(server):
    """Run WebSocket server in asyncio event loop"""
    asyncio.run(server.start())


def run_visualization(sim_config_path=DEFAULT_SCENARIO, speed_factor=1.0):
    """Run a scenario paced in real time with the HTTP and WebSocket servers"""
    print("=" * 60)
    print("Elevator Car Simulation - Real-time Visualization")
    print("=" * 60)

    sim_config = load_simulation_config(sim_config_path)
    controller = ElevatorController(sim_config.car, name="Car_1")
    scheduler = TickScheduler(controller, tick=sim_config.tick, speed_factor=speed_factor)
    for request in sim_config.requests:
        scheduler.schedule_request(request.time, request.floor)

    # Create WebSocket server and subscribe it to the controller
    server = VisualizerServer(host='localhost', port=8765, lock=scheduler.lock)
    server.attach(controller)

    # Start HTTP API in separate thread
    http_thread = threading.Thread(target=run_server, args=(controller, scheduler.lock),
                                   kwargs={'port': 5000}, daemon=True)
    http_thread.start()

    # Start WebSocket server in separate thread
    ws_thread = threading.Thread(target=run_websocket_server, args=(server,), daemon=True)
    ws_thread.start()

    # Wait for servers to start
    time.sleep(1.5)

    print(f"Simulation speed: {speed_factor}x (1.0 = real-time)")
    print("\n" + "=" * 60)
    print("Starting simulation... (Ctrl+C to stop)")
    print("=" * 60 + "\n")

    try:
        # Runs until stopped; the scenario's duration only bounds scripted requests
        scheduler.run()
    except KeyboardInterrupt:
        print("\n\nSimulation interrupted by user (Ctrl+C).")
    finally:
        scheduler.stop()
        server.detach()
        print("\n" + "=" * 60)
        print("Shutting down servers...")
        print("=" * 60)
        # All server threads are daemon, so they will automatically stop


def main(argv=None):
    """Command line entry point: [config.yaml] [speed_factor]"""
    argv = sys.argv[1:] if argv is None else list(argv)
    path = argv[0] if argv else DEFAULT_SCENARIO
    speed = float(argv[1]) if len(argv) > 1 else 1.0
    run_visualization(path, speed)
    return 0


if __name__ == '__main__':
    sys.exit(main())
