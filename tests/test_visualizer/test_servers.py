"""
Server Tests

HTTP API through Flask's test client, and the WebSocket server's command
handling and tick subscription (no sockets opened).
"""

import sys
import threading
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest

from simulator.core.car_state import Phase
from simulator.core.controller import ElevatorController
from visualizer.http_server import create_app
from visualizer.server import VisualizerServer


@pytest.fixture
def controller():
    return ElevatorController()


@pytest.fixture
def client(controller):
    app = create_app(controller, lock=threading.RLock())
    app.testing = True
    return app.test_client()


def test_status(client):
    data = client.get('/api/status').get_json()
    assert data['status'] == 'ok'
    assert data['stopped'] is False


def test_snapshot(client, controller):
    controller.select_floor(2)
    data = client.get('/api/snapshot').get_json()
    assert data['car']['target_floor'] == 2
    assert data['status']['message'] == "Going to floor 2"


def test_config(client):
    data = client.get('/api/config').get_json()
    assert data['floors'] == 6
    assert data['max_speed'] == 2.0


def test_floors(client):
    data = client.get('/api/floors').get_json()
    assert [entry['floor'] for entry in data] == [5, 4, 3, 2, 1, 0]


def test_select_floor_accepted(client, controller):
    response = client.post('/api/floors/3/select')
    assert response.status_code == 200
    assert response.get_json() == {'accepted': True, 'floor': 3}
    assert controller.snapshot().target_floor == 3


@pytest.mark.parametrize("floor, reason", [
    (0, 'AlreadyAtFloor'),
    (9, 'FloorOutOfRange'),
])
def test_select_floor_rejected(client, floor, reason):
    response = client.post(f'/api/floors/{floor}/select')
    assert response.status_code == 409
    data = response.get_json()
    assert data['accepted'] is False
    assert data['reason'] == reason


def test_select_floor_in_transit(client, controller):
    controller.select_floor(3)
    while controller.phase is not Phase.MOVING_UP:
        controller.advance(0.016)
    response = client.post('/api/floors/5/select')
    assert response.status_code == 409
    assert response.get_json()['reason'] == 'InTransit'


def test_websocket_commands(controller):
    server = VisualizerServer(lock=threading.RLock())
    assert server.handle_command({'type': 'ping'}) == {'type': 'pong'}
    # Not attached yet
    assert server.handle_command({'type': 'select_floor', 'floor': 2}) is None

    server.attach(controller)
    reply = server.handle_command({'type': 'select_floor', 'floor': 2})
    assert reply == {'type': 'select_floor_result', 'floor': 2, 'accepted': True}
    reply = server.handle_command({'type': 'select_floor', 'floor': 'top'})
    assert reply['accepted'] is False
    assert reply['reason'] == 'FloorOutOfRange'
    assert server.handle_command({'type': 'unknown'}) is None


def test_websocket_queue_follows_ticks(controller):
    server = VisualizerServer()
    server.attach(controller)
    controller.advance(0.016)
    controller.advance(0.016)
    assert server.message_queue.qsize() == 2
    message = server.message_queue.get_nowait()
    assert message['type'] == 'car_status'

    server.detach()
    controller.advance(0.016)
    assert server.message_queue.qsize() == 1


def test_drain_keeps_only_newest_car_status(controller):
    server = VisualizerServer()
    server.attach(controller)
    controller.select_floor(1)
    for _ in range(5):
        controller.advance(0.016)
    server.queue_message({'type': 'notice', 'text': 'hello'})

    messages = server.drain()
    assert [message['type'] for message in messages] == ['notice', 'car_status']
    assert messages[-1]['time'] == pytest.approx(controller.now)
    assert server.message_queue.empty()
    assert server.drain() == []
