#!/usr/bin/env python3
"""
WebSocket Server for the car controller
Pushes the car state to browser viewers after every tick and forwards floor
selections coming back from them
"""
import asyncio
import contextlib
import json
import queue

import websockets

from .panel import render_payload


class VisualizerServer:
    POLL_INTERVAL = 0.01  # seconds between queue drains

    def __init__(self, host='localhost', port=8765, lock=None):
        self.host = host
        self.port = port
        self.lock = lock  # TickScheduler.lock when the controller is ticked from another thread
        self.clients = set()
        self.message_queue = queue.Queue()  # filled by the tick thread, drained by the event loop
        self.controller = None
        self._unsubscribe = None

    # ---- controller side (tick thread) ----

    def attach(self, controller):
        """Subscribe to a controller; every tick queues one payload."""
        self.detach()
        self.controller = controller
        self._unsubscribe = controller.subscribe(
            lambda state: self.queue_message(render_payload(controller, state))
        )

    def detach(self):
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._unsubscribe = None

    def queue_message(self, message):
        self.message_queue.put(message)

    def handle_command(self, data):
        """
        Answer one decoded client message.

        Returns:
            Reply message, or None when the message needs no reply.
        """
        message_type = data.get('type')
        if message_type == 'ping':
            return {'type': 'pong'}
        if message_type == 'select_floor' and self.controller is not None:
            floor = data.get('floor')
            with (self.lock if self.lock is not None else contextlib.nullcontext()):
                result = self.controller.select_floor(floor)
            reply = {'type': 'select_floor_result', 'floor': floor, 'accepted': bool(result)}
            if not result:
                reply['reason'] = result.reason.value
            return reply
        return None

    # ---- network side (event loop) ----

    async def _send(self, websocket, message) -> bool:
        """Send one message; False if the client has gone away."""
        try:
            await websocket.send(json.dumps(message))
            return True
        except websockets.exceptions.ConnectionClosed:
            return False

    async def broadcast(self, message):
        closed = [client for client in list(self.clients) if not await self._send(client, message)]
        for client in closed:
            self.clients.discard(client)
        if closed:
            print(f"Dropped {len(closed)} closed client(s). Total clients: {len(self.clients)}")

    def drain(self):
        """
        Empty the queue, keeping only the newest car_status payload.

        Returns:
            Messages to broadcast, in order.
        """
        latest_status = None
        others = []
        while True:
            try:
                message = self.message_queue.get_nowait()
            except queue.Empty:
                break
            if message.get('type') == 'car_status':
                latest_status = message
            else:
                others.append(message)
        return others + ([latest_status] if latest_status is not None else [])

    async def message_sender(self):
        """Broadcast queued messages until cancelled"""
        while True:
            for message in self.drain():
                await self.broadcast(message)
            await asyncio.sleep(self.POLL_INTERVAL)

    async def handle_client(self, websocket):
        """Serve one viewer: initial state, then commands until it disconnects"""
        self.clients.add(websocket)
        print(f"Client connected. Total clients: {len(self.clients)}")
        try:
            if self.controller is not None:
                await self._send(websocket, render_payload(self.controller))
            async for raw in websocket:
                try:
                    data = json.loads(raw)
                except json.JSONDecodeError:
                    data = None
                if not isinstance(data, dict):
                    print(f"Ignoring malformed message: {raw!r}")
                    continue
                reply = self.handle_command(data)
                if reply is not None:
                    await self._send(websocket, reply)
        except websockets.exceptions.ConnectionClosed:
            pass
        finally:
            self.clients.discard(websocket)
            print(f"Client disconnected. Total clients: {len(self.clients)}")

    async def start(self):
        """Start the WebSocket server and run forever"""
        print(f"Starting WebSocket server on ws://{self.host}:{self.port}")

        sender = asyncio.create_task(self.message_sender())
        try:
            async with websockets.serve(self.handle_client, self.host, self.port):
                await asyncio.Future()
        finally:
            sender.cancel()
