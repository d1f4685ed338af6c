"""Outpost: movement and combat rules engine for the tile-grid strategy client."""

__version__ = "0.1.0"
