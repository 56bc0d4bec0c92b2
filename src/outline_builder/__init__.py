"""Geometry and layout engine for multi-storey building outlines."""

__version__ = "0.1.0"
