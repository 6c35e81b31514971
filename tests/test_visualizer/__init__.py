"""Visualizer Tests (panel view models, HTTP API, WebSocket commands)"""
