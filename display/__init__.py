"""
Display Module for the Map Projection System.

This module provides the map object that owns a projection, a view and a
stack of layers, and the layer interface it draws through.
"""

from display.layer import Layer
from display.map import Map, MapConfig

__all__ = [
    "Layer",
    "Map",
    "MapConfig",
]
