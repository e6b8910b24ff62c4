"""Falling-block game engine: grid, active piece, gravity, rotation and line clears."""

__version__ = "0.1.0"
