"""Analyzer Tests (trajectory recording, ideal profile)"""
