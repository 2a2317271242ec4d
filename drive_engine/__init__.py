"""Fuel consumption and performance simulation engine for a single vehicle."""

__version__ = "0.1.0"
