"""
View Transforms between Map Coordinates and Pixels.

A spherical projection produces map coordinates in projection-specific
units. The view transform pans and zooms those into the pixels of a
viewport, and `CombinedProjection` chains both so that layers can go from
latitude/longitude straight to pixels.

Conventions
-----------
- The view center is drawn at the middle of the viewport.
- Integer viewport sizes are halved with truncating division, so a 101
  pixel wide viewport puts the center at x = 50 (and -101 at x = -50).
- Zoom is the number of pixels per map unit. It is not validated; a zero
  zoom makes `unproject` return inf/NaN.
"""

from typing import Union
import numpy as np

from common.types import LatLon, Point
from geospatial.projections import Projection

Extent = Union[int, float]


def _half(extent: Extent) -> Extent:
    """Half a viewport extent, truncated toward zero for integers."""
    if isinstance(extent, (int, np.integer)):
        return int(extent / 2)
    return extent / 2


class ViewProjection:
    """Pan/zoom transform between map coordinates and viewport pixels.

    Parameters
    ----------
    center : Point
        Map coordinates shown at the middle of the viewport. Default: origin.
    zoom : float
        Pixels per map unit. Default: 1.
    """

    def __init__(self, center: Point = Point(0.0, 0.0), zoom: float = 1.0):
        self.center = center
        self.zoom = zoom

    def __repr__(self) -> str:
        return f"ViewProjection(center={self.center!r}, zoom={self.zoom!r})"

    def project(self, position: Point, viewport_width: Extent, viewport_height: Extent) -> Point:
        """Transform map coordinates into viewport pixels.

        Parameters
        ----------
        position : Point
            Map coordinates.
        viewport_width, viewport_height : int or float
            Viewport size in pixels.

        Returns
        -------
        Point
            Pixel coordinates relative to the viewport's top-left corner.
        """
        from_center = position - self.center
        scaled = from_center.scale(self.zoom)
        return scaled + Point(_half(viewport_width), _half(viewport_height))

    def unproject(self, position: Point, viewport_width: Extent, viewport_height: Extent) -> Point:
        """Transform viewport pixels into map coordinates.

        The exact inverse of `project` for a non-zero zoom.
        """
        from_center = position - Point(_half(viewport_width), _half(viewport_height))
        with np.errstate(divide='ignore', invalid='ignore'):
            inverse_zoom = np.float64(1.0) / self.zoom
            return from_center.scale(inverse_zoom) + self.center


class CombinedProjection(Projection):
    """A spherical projection followed by a view transform.

    Projects latitude/longitude directly into viewport pixels. It only
    references the projection and view it wraps, so a new one should be
    built whenever either of them or the viewport size changes.

    Parameters
    ----------
    projection : Projection
        Sphere to map-coordinate projection.
    view : ViewProjection
        Map-coordinate to pixel transform.
    viewport_width, viewport_height : int or float
        Viewport size in pixels.
    """

    def __init__(
        self,
        projection: Projection,
        view: ViewProjection,
        viewport_width: Extent,
        viewport_height: Extent
    ):
        self._projection = projection
        self._view = view
        self._viewport_width = viewport_width
        self._viewport_height = viewport_height

    @property
    def name(self) -> str:
        return f"{self._projection.name} @ zoom {self._view.zoom}"

    @property
    def proj4_string(self) -> str:
        """PROJ definition of the wrapped projection; the view is not part of it."""
        return self._projection.proj4_string

    @property
    def projection(self) -> Projection:
        return self._projection

    @property
    def view(self) -> ViewProjection:
        return self._view

    def project(self, position: LatLon) -> Point:
        map_point = self._projection.project(position)
        return self._view.project(map_point, self._viewport_width, self._viewport_height)

    def unproject(self, position: Point) -> LatLon:
        map_point = self._view.unproject(position, self._viewport_width, self._viewport_height)
        return self._projection.unproject(map_point)
