"""
Map Projections between the Sphere and the Map Plane.

This module provides the projections that turn a latitude/longitude into
map coordinates and back. Map coordinates are projection specific: the
equirectangular projection uses degrees directly, the others produce
dimensionless plane values.

Projections Provided
--------------------
1. Equirectangular (plate carrée): longitude/latitude used as x/y.
2. Stereographic: polar mapping around a movable projection point.
3. Miller cylindrical: Mercator-like with softened polar stretching.

Singularities
-------------
Floating-point special values are not guarded against. The stereographic
projection point itself projects to NaN (0/0) and the Miller formulas
overflow near their poles; those values propagate to the caller.

Implementation
--------------
Each projection also names its closest PROJ definition so that a map can
be described to GIS tooling through `pyproj`.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
"""

from abc import ABC, abstractmethod
import numpy as np

from pyproj import CRS

from common.logging_config import get_logger
from common.types import (
    LatLon,
    Latitude,
    Longitude,
    Point,
    Polygon,
    normalize_latitude,
    normalize_longitude,
)

logger = get_logger(__name__)

# Sphere radius that makes PROJ's equidistant cylindrical output degrees
DEGREE_SPHERE_RADIUS = 180.0 / np.pi


class Projection(ABC):
    """Abstract base class for projections.

    A projection maps latitude/longitude to planar coordinates and back.
    The two directions are near-inverses of each other away from the
    projection's singularities.
    """

    @property
    def name(self) -> str:
        """Human-readable name of the projection."""
        return self.__class__.__name__

    @property
    @abstractmethod
    def proj4_string(self) -> str:
        """PROJ.4 definition of the closest standard projection."""
        pass

    def crs(self) -> CRS:
        """Build a pyproj CRS from `proj4_string`."""
        return CRS.from_proj4(self.proj4_string)

    @abstractmethod
    def project(self, position: LatLon) -> Point:
        """Project a latitude/longitude into map coordinates.

        Parameters
        ----------
        position : LatLon
            Position in degrees.

        Returns
        -------
        Point
            Map coordinates.
        """
        pass

    @abstractmethod
    def unproject(self, position: Point) -> LatLon:
        """Unproject map coordinates into a latitude/longitude.

        Parameters
        ----------
        position : Point
            Map coordinates.

        Returns
        -------
        LatLon
            Position in degrees.
        """
        pass

    def project_poly(self, poly: Polygon) -> Polygon:
        """Project every vertex of a polygon, keeping order and count."""
        return Polygon([self.project(position) for position in poly.points()])

    def unproject_poly(self, poly: Polygon) -> Polygon:
        """Unproject every vertex of a polygon, keeping order and count."""
        return Polygon([self.unproject(point) for point in poly.points()])


class EquirectangularProjection(Projection):
    """Plate carrée projection.

    Longitude becomes x and latitude becomes y, both in degrees. No
    normalization is applied in either direction so the mapping is exactly
    invertible for all finite values.
    """

    @property
    def name(self) -> str:
        return "Equirectangular"

    @property
    def proj4_string(self) -> str:
        return f"+proj=eqc +lat_ts=0 +lon_0=0 +R={DEGREE_SPHERE_RADIUS!r} +units=m +no_defs"

    def project(self, position: LatLon) -> Point:
        return Point(float(position.longitude), float(position.latitude))

    def unproject(self, position: Point) -> LatLon:
        return LatLon(Latitude(position.y), Longitude(position.x))


class StereographicProjection(Projection):
    """Stereographic projection around a movable projection point.

    The zenith (angular separation) and azimuth (bearing) of a position are
    taken from the plain latitude/longitude differences to the projection
    point, not from great-circle geometry, so the result matches a true
    stereographic projection only for small separations.

    Parameters
    ----------
    projection_point : LatLon
        The point the projection is built around. Default: (0, 0).

    Notes
    -----
    - r = sin(zenith) / (1 - cos(zenith)), which is 0 at zenith = 180°
      and 0/0 at the projection point itself.
    - The antipode of the projection point maps to (0, 0) only when the
      projection point lies on the equator. Off the equator the plain
      differences to the antipode are not a 180° separation (for example
      (47.66, -122.28) sends its antipode to about (-0.19, 0.10)).
    """

    def __init__(self, projection_point: LatLon = LatLon(0.0, 0.0)):
        self._projection_point = projection_point

    @property
    def name(self) -> str:
        return (
            f"Stereographic ({float(self._projection_point.latitude)}°, "
            f"{float(self._projection_point.longitude)}°)"
        )

    @property
    def proj4_string(self) -> str:
        """PROJ `stere` centred on the projection point.

        Only an approximation: PROJ uses great-circle separations and
        r = 2·tan(z/2), while `project` uses plain latitude/longitude
        differences and r = cot(z/2). The CRS does not reproduce
        `project` output.
        """
        return (
            f"+proj=stere +lat_0={float(self._projection_point.latitude)} "
            f"+lon_0={float(self._projection_point.longitude)} +k=1 +R=1 +units=m +no_defs"
        )

    @property
    def projection_point(self) -> LatLon:
        return self._projection_point

    @projection_point.setter
    def projection_point(self, value: LatLon) -> None:
        logger.debug(f"Moving stereographic projection point {self._projection_point} -> {value}")
        self._projection_point = value

    def project(self, position: LatLon) -> Point:
        d_lat = float(position.latitude) - float(self._projection_point.latitude)
        d_lon = normalize_longitude(float(position.longitude) - float(self._projection_point.longitude))

        zenith = np.radians(np.hypot(d_lat, d_lon))
        azimuth = np.arctan2(np.radians(d_lat), np.radians(d_lon))

        with np.errstate(divide='ignore', invalid='ignore'):
            r = np.sin(zenith) / (1.0 - np.cos(zenith))

        return Point(float(r * np.cos(azimuth)), float(r * np.sin(azimuth)))

    def unproject(self, position: Point) -> LatLon:
        r = np.hypot(position.x, position.y)
        theta = np.arctan2(position.y, position.x)

        with np.errstate(divide='ignore', invalid='ignore'):
            zenith = 2.0 * np.arctan(1.0 / r)

        separation = np.degrees(zenith)
        latitude = float(self._projection_point.latitude) + separation * np.sin(theta)
        longitude = float(self._projection_point.longitude) + separation * np.cos(theta)

        return LatLon(
            Latitude(normalize_latitude(latitude)),
            Longitude(normalize_longitude(longitude))
        )


class MillerCylindricalProjection(Projection):
    """Miller cylindrical projection.

    Forward: x = longitude, y = (5/4)·asinh(tan((4/5)·latitude)).

    Notes
    -----
    The coordinate values are fed to the trigonometric functions as given,
    so the formulas agree with PROJ's `mill` on a unit sphere when the
    inputs are read as radians.

    `unproject` is not the inverse of `project`: it takes the latitude
    straight from y and derives the longitude from the inverse of the y
    formula. Callers relying on a round trip should not use this class.
    """

    @property
    def name(self) -> str:
        return "Miller Cylindrical"

    @property
    def proj4_string(self) -> str:
        """PROJ `mill` on a unit sphere.

        PROJ reads its input in degrees, whereas `project` feeds the degree
        values to the formula as if they were radians, so the CRS only
        matches `project` after converting the inputs with np.degrees.
        """
        return "+proj=mill +lon_0=0 +R=1 +units=m +no_defs"

    def project(self, position: LatLon) -> Point:
        latitude = float(position.latitude)
        with np.errstate(over='ignore', invalid='ignore'):
            y = (5.0 / 4.0) * np.arcsinh(np.tan((4.0 / 5.0) * latitude))
        return Point(float(position.longitude), float(y))

    def unproject(self, position: Point) -> LatLon:
        with np.errstate(over='ignore', invalid='ignore'):
            longitude = (5.0 / 4.0) * np.arctan(np.sinh((4.0 / 5.0) * position.y))
        return LatLon(Latitude(position.y), Longitude(float(longitude)))
