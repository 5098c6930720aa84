"""Brickfall: a falling-block puzzle engine with a headless simulator."""

__version__ = "0.1.0"
