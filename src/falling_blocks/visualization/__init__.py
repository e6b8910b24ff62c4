"""Keyboard and pygame viewer for the falling-block engine."""
