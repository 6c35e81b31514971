"""Command Line Tests (main.py entry point)"""
