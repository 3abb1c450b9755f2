"""
Geospatial Module for the Map Projection System.

All conversions between latitude/longitude, map coordinates and viewport
pixels originate from this module.

This module provides:
- Spherical projections (equirectangular, stereographic, Miller)
- The pan/zoom view transform
- Composition of a projection with a view into one pixel-space projection
"""

from geospatial.projections import (
    Projection,
    EquirectangularProjection,
    StereographicProjection,
    MillerCylindricalProjection,
)

from geospatial.view import (
    ViewProjection,
    CombinedProjection,
)

__all__ = [
    # Projections
    "Projection",
    "EquirectangularProjection",
    "StereographicProjection",
    "MillerCylindricalProjection",
    # View compositing
    "ViewProjection",
    "CombinedProjection",
]
