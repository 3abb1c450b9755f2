"""
Map Orchestration.

The map owns a spherical projection, the pan/zoom view and an ordered set
of layers. Drawing composes the projection and the view for the current
viewport and passes the result to each layer, back to front.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from common.logging_config import get_logger
from common.types import LatLonRect, Point
from display.layer import Layer
from geospatial.projections import Projection
from geospatial.view import CombinedProjection, ViewProjection

logger = get_logger(__name__)


@dataclass
class MapConfig:
    """Configuration for a new map.

    Attributes
    ----------
    initial_center : Point
        Map coordinates shown at the middle of the viewport.
    initial_zoom : float
        Pixels per map unit.
    """
    initial_center: Point = field(default_factory=lambda: Point(0.0, 0.0))
    initial_zoom: float = 1.0


class Map:
    """A map view.

    Parameters
    ----------
    projection : Projection
        Projection from the sphere to map coordinates.
    x, y : int
        Top-left corner of the viewport in pixels.
    width, height : int
        Size of the viewport in pixels.
    config : MapConfig, optional
        Initial view state. Default: origin at zoom 1.

    Examples
    --------
    >>> from common.types import LatLon
    >>> from geospatial.projections import EquirectangularProjection
    >>> world = Map(EquirectangularProjection(), 0, 0, 720, 360)
    >>> world.set_zoom(2.0)
    >>> world.combined_projection().project(LatLon(0.0, 0.0))
    Point(x=360.0, y=180.0)
    """

    def __init__(
        self,
        projection: Projection,
        x: int,
        y: int,
        width: int,
        height: int,
        config: Optional[MapConfig] = None
    ):
        config = config or MapConfig()
        self._projection = projection
        self._view = ViewProjection(center=config.initial_center, zoom=config.initial_zoom)
        self._layers: List[Layer] = []
        self._x = x
        self._y = y
        self._width = width
        self._height = height

    @property
    def projection(self) -> Projection:
        return self._projection

    def set_projection(self, projection: Projection) -> None:
        """Replace the projection. Layers and view state are kept."""
        logger.debug(f"Projection changed from {self._projection.name} to {projection.name}")
        self._projection = projection

    @property
    def view(self) -> ViewProjection:
        return self._view

    @property
    def layers(self) -> Tuple[Layer, ...]:
        return tuple(self._layers)

    def add_layer(self, layer: Layer) -> None:
        """Add a layer on top of the existing ones."""
        self._layers.append(layer)
        logger.debug(f"Added layer {layer.__class__.__name__} ({len(self._layers)} total)")

    def clear_layers(self) -> None:
        self._layers.clear()
        logger.debug("Cleared all layers")

    @property
    def zoom(self) -> float:
        return self._view.zoom

    def set_zoom(self, zoom: float) -> None:
        """Set the zoom in pixels per map unit.

        Not validated: zero or negative values are stored as given.
        """
        self._view.zoom = zoom

    @property
    def center(self) -> Point:
        """Map coordinates shown at the middle of the viewport."""
        return self._view.center

    @property
    def geometry(self) -> Tuple[int, int, int, int]:
        """Viewport as (x, y, width, height) in pixels."""
        return (self._x, self._y, self._width, self._height)

    def set_geometry(self, x: int, y: int, width: int, height: int) -> None:
        self._x = x
        self._y = y
        self._width = width
        self._height = height

    def scroll(self, dx: float, dy: float) -> None:
        """Pan the view by a displacement in pixels.

        The displacement is converted to map units at the current zoom, so
        the view center moves by (dx, dy) pixels and everything drawn
        shifts by (-dx, -dy) pixels whatever the zoom.
        """
        origin = self._view.unproject(Point(0, 0), self._width, self._height)
        moved = self._view.unproject(Point(dx, dy), self._width, self._height)
        self._view.center = self._view.center + (moved - origin)

    def combined_projection(self) -> CombinedProjection:
        """Projection from latitude/longitude to pixels for the current view."""
        return CombinedProjection(self._projection, self._view, self._width, self._height)

    def draw(self) -> None:
        """Draw all layers in the order they were added."""
        projection = self.combined_projection()
        logger.debug(
            f"Drawing {len(self._layers)} layers with {projection.name} "
            f"into {self._width}x{self._height} at ({self._x}, {self._y})"
        )
        for layer in self._layers:
            layer.draw(projection, self._x, self._y, self._width, self._height)

    def bounds(self) -> Optional[LatLonRect]:
        """Union of the bounds of all layers that report one.

        Returns
        -------
        LatLonRect or None
            None if no layer has known bounds.
        """
        result = None
        for layer in self._layers:
            layer_bounds = layer.bounds()
            if layer_bounds is None:
                continue
            result = layer_bounds if result is None else result.union(layer_bounds)
        return result
