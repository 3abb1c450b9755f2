"""
Type Definitions for Spherical Map Projection.

This module defines the value types exchanged between projections, the
view transform and the map layers. Angles are carried in DEGREES
throughout; radians only appear inside the projection formulas.

Design Rationale
----------------
Using typed dataclasses instead of raw tuples provides:
1. Self-documenting code - field names describe the data
2. A clear distinction between geographic positions (LatLon) and
   planar positions (Point)
3. Explicit normalization - arithmetic never silently wraps angles
"""

from dataclasses import dataclass, field
from typing import Generic, Iterable, Iterator, List, Optional, TypeVar, Union
import numpy as np
from numpy.typing import NDArray


Number = Union[int, float]


def _operand_degrees(other, angle_type) -> Optional[float]:
    """Degrees of an arithmetic operand, or None if it cannot be combined.

    Only the same angle type or a plain number is accepted, so a latitude
    is never added to a longitude by accident.
    """
    if isinstance(other, angle_type):
        return other.degrees
    if isinstance(other, (int, float, np.integer, np.floating)) and not isinstance(other, bool):
        return float(other)
    return None


def normalize_latitude(latitude: float) -> float:
    """Normalize a latitude into the range [-90, 90].

    Latitudes past a pole are folded back over it, so 100° becomes 80°
    (on the other side of the pole) rather than being clamped or wrapped.

    Parameters
    ----------
    latitude : float
        Latitude in degrees, any value.

    Returns
    -------
    float
        Latitude in degrees within [-90, 90].
    """
    radians = np.radians(latitude)
    return float(np.degrees(np.arctan(np.sin(radians) / np.abs(np.cos(radians)))))


def normalize_longitude(longitude: float) -> float:
    """Normalize a longitude into the range (-180, 180].

    Parameters
    ----------
    longitude : float
        Longitude in degrees, any value.

    Returns
    -------
    float
        Longitude in degrees within (-180, 180]. Inputs that are odd
        multiples of -180 may come back as -180 after rounding.
    """
    radians = np.radians(longitude)
    return float(np.degrees(np.arctan2(np.sin(radians), np.cos(radians))))


@dataclass(frozen=True, order=True)
class Latitude:
    """A latitude in degrees.

    Addition and subtraction are not normalized; call `normalized()`
    when a value in [-90, 90] is required.

    Examples
    --------
    >>> Latitude(80.0) + 20.0
    Latitude(degrees=100.0)
    """
    degrees: float

    def __float__(self) -> float:
        return float(self.degrees)

    def __add__(self, other: Union['Latitude', Number]) -> 'Latitude':
        degrees = _operand_degrees(other, Latitude)
        if degrees is None:
            return NotImplemented
        return Latitude(self.degrees + degrees)

    def __radd__(self, other: Number) -> 'Latitude':
        degrees = _operand_degrees(other, Latitude)
        if degrees is None:
            return NotImplemented
        return Latitude(degrees + self.degrees)

    def __sub__(self, other: Union['Latitude', Number]) -> 'Latitude':
        degrees = _operand_degrees(other, Latitude)
        if degrees is None:
            return NotImplemented
        return Latitude(self.degrees - degrees)

    def __neg__(self) -> 'Latitude':
        return Latitude(-self.degrees)

    @property
    def radians(self) -> float:
        """Latitude in radians."""
        return float(np.radians(self.degrees))

    def normalized(self) -> 'Latitude':
        """Return this latitude folded into [-90, 90]."""
        return Latitude(normalize_latitude(self.degrees))

    @classmethod
    def from_radians(cls, radians: float) -> 'Latitude':
        return cls(float(np.degrees(radians)))

    @classmethod
    def from_quantity(cls, quantity) -> 'Latitude':
        """Create a latitude from a pint angle quantity (or bare degrees)."""
        from common.units import angle_to_degrees
        return cls(angle_to_degrees(quantity))


@dataclass(frozen=True, order=True)
class Longitude:
    """A longitude in degrees.

    Addition and subtraction are not normalized; call `normalized()`
    when a value in (-180, 180] is required.
    """
    degrees: float

    def __float__(self) -> float:
        return float(self.degrees)

    def __add__(self, other: Union['Longitude', Number]) -> 'Longitude':
        degrees = _operand_degrees(other, Longitude)
        if degrees is None:
            return NotImplemented
        return Longitude(self.degrees + degrees)

    def __radd__(self, other: Number) -> 'Longitude':
        degrees = _operand_degrees(other, Longitude)
        if degrees is None:
            return NotImplemented
        return Longitude(degrees + self.degrees)

    def __sub__(self, other: Union['Longitude', Number]) -> 'Longitude':
        degrees = _operand_degrees(other, Longitude)
        if degrees is None:
            return NotImplemented
        return Longitude(self.degrees - degrees)

    def __neg__(self) -> 'Longitude':
        return Longitude(-self.degrees)

    @property
    def radians(self) -> float:
        """Longitude in radians."""
        return float(np.radians(self.degrees))

    def normalized(self) -> 'Longitude':
        """Return this longitude wrapped into (-180, 180]."""
        return Longitude(normalize_longitude(self.degrees))

    @classmethod
    def from_radians(cls, radians: float) -> 'Longitude':
        return cls(float(np.degrees(radians)))

    @classmethod
    def from_quantity(cls, quantity) -> 'Longitude':
        """Create a longitude from a pint angle quantity (or bare degrees)."""
        from common.units import angle_to_degrees
        return cls(angle_to_degrees(quantity))


@dataclass(frozen=True)
class LatLon:
    """A position on the sphere.

    Attributes
    ----------
    latitude : Latitude
        Latitude in DEGREES. Positive north.
    longitude : Longitude
        Longitude in DEGREES. Positive east.

    Notes
    -----
    - Plain numbers are accepted and wrapped in Latitude/Longitude.
    - No range check is applied; out-of-range values are kept as given
      until `normalized()` is called.
    """
    latitude: Latitude
    longitude: Longitude

    def __post_init__(self):
        if not isinstance(self.latitude, Latitude):
            object.__setattr__(self, 'latitude', Latitude(float(self.latitude)))
        if not isinstance(self.longitude, Longitude):
            object.__setattr__(self, 'longitude', Longitude(float(self.longitude)))

    def antipode(self) -> 'LatLon':
        """Return the point diametrically opposite this one.

        Both components are shifted by 180° and normalized, so the latitude
        is reflected through the pole rather than wrapped.
        """
        return LatLon(
            latitude=Latitude(normalize_latitude(self.latitude.degrees + 180.0)),
            longitude=Longitude(normalize_longitude(self.longitude.degrees + 180.0))
        )

    def normalized(self) -> 'LatLon':
        """Return this position with both components normalized."""
        return LatLon(self.latitude.normalized(), self.longitude.normalized())

    @classmethod
    def from_quantities(cls, latitude, longitude) -> 'LatLon':
        """Create a position from pint angle quantities.

        Parameters
        ----------
        latitude, longitude : pint.Quantity or float
            Angles with units, or bare numbers in degrees.
        """
        return cls(Latitude.from_quantity(latitude), Longitude.from_quantity(longitude))


N = TypeVar('N', int, float)


@dataclass(frozen=True)
class Point(Generic[N]):
    """A 2-D coordinate in map units or pixels.

    The unit is implied by where the point comes from: a spherical
    projection produces map units, a view or combined projection
    produces pixels.
    """
    x: N
    y: N

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: Number) -> 'Point':
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> 'Point':
        return Point(-self.x, -self.y)

    def __iter__(self) -> Iterator[N]:
        yield self.x
        yield self.y

    def scale(self, factor: Number) -> 'Point':
        """Scale both coordinates by the same factor."""
        return self * factor


V = TypeVar('V', LatLon, Point)


@dataclass
class Polygon(Generic[V]):
    """An ordered sequence of vertices.

    Vertices are either all LatLon (geographic) or all Point (planar).
    Closure is up to the caller: a closed ring repeats its first vertex
    at the end.
    """
    vertices: List[V] = field(default_factory=list)

    def __post_init__(self):
        self.vertices = list(self.vertices)

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[V]:
        return iter(self.vertices)

    def __getitem__(self, index: int) -> V:
        return self.vertices[index]

    def points(self) -> List[V]:
        """Return the vertices in order."""
        return self.vertices

    def is_closed(self) -> bool:
        """Whether the last vertex repeats the first."""
        return len(self.vertices) > 1 and self.vertices[0] == self.vertices[-1]

    def to_array(self) -> NDArray[np.float64]:
        """Return the vertices of a planar polygon as an (N, 2) array of x/y."""
        return np.array([[p.x, p.y] for p in self.vertices], dtype=np.float64).reshape(-1, 2)

    @classmethod
    def from_array(cls, array: NDArray[np.float64]) -> 'Polygon[Point]':
        """Create a planar polygon from an (N, 2) array of x/y."""
        array = np.asarray(array, dtype=np.float64)
        if array.ndim != 2 or array.shape[1] != 2:
            raise ValueError(f"Expected an (N, 2) array, got shape {array.shape}")
        return cls([Point(float(x), float(y)) for x, y in array])

    def bounds(self) -> Optional['LatLonRect']:
        """Bounding box of a geographic polygon, or None if it has no vertices.

        Raises
        ------
        TypeError
            If the polygon has planar (Point) vertices.
        """
        if not self.vertices:
            return None
        if not all(isinstance(vertex, LatLon) for vertex in self.vertices):
            raise TypeError("Bounds are only defined for polygons of LatLon vertices")
        return LatLonRect.from_points(self.vertices)


@dataclass(frozen=True)
class LatLonRect:
    """An axis-aligned box in latitude/longitude.

    Attributes
    ----------
    north, south : float
        Latitude bounds in degrees, north >= south.
    east, west : float
        Longitude bounds in degrees, east >= west.

    Notes
    -----
    Boxes crossing the antimeridian cannot be represented; a box from
    170°E to 170°W has to be stored as west=-170, east=170 which covers
    the other side of the globe.
    """
    north: float
    south: float
    east: float
    west: float

    def __post_init__(self):
        """Validate bound ordering."""
        if self.north < self.south:
            raise ValueError(f"North bound {self.north} is below south bound {self.south}")
        if self.east < self.west:
            raise ValueError(
                f"East bound {self.east} is west of west bound {self.west}. "
                f"Rectangles crossing the antimeridian are not supported."
            )

    @property
    def height(self) -> float:
        """Latitude extent in degrees."""
        return self.north - self.south

    @property
    def width(self) -> float:
        """Longitude extent in degrees."""
        return self.east - self.west

    def center(self) -> LatLon:
        return LatLon((self.north + self.south) / 2, (self.east + self.west) / 2)

    def contains(self, position: LatLon) -> bool:
        """Whether a position lies inside or on the edge of this box."""
        lat = float(position.latitude)
        lon = float(position.longitude)
        return self.south <= lat <= self.north and self.west <= lon <= self.east

    def union(self, other: 'LatLonRect') -> 'LatLonRect':
        """Smallest box containing both boxes."""
        return LatLonRect(
            north=max(self.north, other.north),
            south=min(self.south, other.south),
            east=max(self.east, other.east),
            west=min(self.west, other.west)
        )

    @classmethod
    def from_points(cls, positions: Iterable[LatLon]) -> 'LatLonRect':
        """Smallest box containing every position.

        Raises
        ------
        ValueError
            If no positions are given.
        """
        positions = list(positions)
        if not positions:
            raise ValueError("Cannot compute bounds of an empty set of positions")
        lats = [float(p.latitude) for p in positions]
        lons = [float(p.longitude) for p in positions]
        return cls(north=max(lats), south=min(lats), east=max(lons), west=min(lons))
