#!/usr/bin/env python3
"""
HTTP Server for the car controller
Exposes the latest snapshot, the floor panel and the floor selection command
"""
import contextlib

from flask import Flask, jsonify
from flask_cors import CORS

from .panel import floor_panel, status_report, system_parameters


def create_app(controller, lock=None):
    """
    Build the Flask app around a controller.

    Args:
        controller: ElevatorController to observe and command
        lock: Lock shared with the tick driver (TickScheduler.lock) so
            commands land between ticks. None when nothing else drives
            the controller concurrently.
    """
    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes

    def guarded():
        return lock if lock is not None else contextlib.nullcontext()

    @app.route('/api/status')
    def status():
        """Server status endpoint"""
        return jsonify({
            'status': 'ok',
            'server': 'Elevator Car HTTP Server',
            'version': '2.0',
            'car': controller.name,
            'time': controller.now,
            'stopped': controller.stopped
        })

    @app.route('/api/snapshot')
    def snapshot():
        """Latest car state plus the status display text"""
        state = controller.snapshot()
        return jsonify({
            'time': controller.now,
            'car': state.to_dict(),
            'status': status_report(state)
        })

    @app.route('/api/config')
    def config():
        return jsonify(system_parameters(controller.config))

    @app.route('/api/floors')
    def floors():
        """Floor panel (top floor first)"""
        with guarded():
            return jsonify(floor_panel(controller))

    @app.route('/api/floors/<int:floor>/select', methods=['POST'])
    def select_floor(floor):
        """Forward a floor selection; 409 when the request gate refuses it"""
        with guarded():
            result = controller.select_floor(floor)
        if result:
            return jsonify({'accepted': True, 'floor': floor})
        return jsonify({'accepted': False, 'floor': floor, 'reason': result.reason.value}), 409

    return app


def run_server(controller, lock=None, host='localhost', port=5000, debug=False):
    """Run the Flask server"""
    app = create_app(controller, lock)
    print(f"Starting HTTP server on http://{host}:{port}")
    print(f"API endpoints:")
    print(f"  - GET  /api/status")
    print(f"  - GET  /api/snapshot")
    print(f"  - GET  /api/config")
    print(f"  - GET  /api/floors")
    print(f"  - POST /api/floors/<floor>/select")

    app.run(host=host, port=port, debug=debug, threaded=True, use_reloader=False)
