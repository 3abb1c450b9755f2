"""
Common value types and infrastructure for the map projection system.

This package provides foundational components used across all modules:
- Angle, position, point, polygon and bounding box types
- Angle normalization
- Unit registry for angle conversion
- Logging infrastructure
"""

from common.types import (
    Latitude,
    Longitude,
    LatLon,
    Point,
    Polygon,
    LatLonRect,
    normalize_latitude,
    normalize_longitude,
)
from common.units import ureg, Q_, angle_to_degrees
from common.logging_config import get_logger

__all__ = [
    "Latitude",
    "Longitude",
    "LatLon",
    "Point",
    "Polygon",
    "LatLonRect",
    "normalize_latitude",
    "normalize_longitude",
    "ureg",
    "Q_",
    "angle_to_degrees",
    "get_logger",
]
