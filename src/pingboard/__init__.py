"""Pingboard - live latency and route dashboard for network targets."""

__version__ = "0.1.0"
