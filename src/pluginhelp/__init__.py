"""Wrapped-text help for build plugins, goals, and lifecycle phases."""

__version__ = "0.3.0"
