"""Raycasting maze explorer: .cub scene parsing, XPM textures, rendering and a pygame game loop."""

__version__ = "0.1.0"