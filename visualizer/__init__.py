"""Viewer-facing surfaces: status/panel view models, HTTP API and WebSocket push server"""

from .panel import door_leaf_offsets, floor_panel, render_payload, status_report, system_parameters
from .http_server import create_app, run_server
from .server import VisualizerServer

__all__ = [
    'door_leaf_offsets',
    'floor_panel',
    'render_payload',
    'status_report',
    'system_parameters',
    'create_app',
    'run_server',
    'VisualizerServer',
]
