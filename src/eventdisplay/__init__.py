"""Procedural particle-detector event display."""

__version__ = "0.1.0"
