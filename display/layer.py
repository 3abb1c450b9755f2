"""
Map Layers.

A layer is anything the map can draw. The map hands each layer a
projection that already maps latitude/longitude to viewport pixels, so
layers never deal with zoom or panning themselves.
"""

from abc import ABC, abstractmethod
from typing import Optional

from common.types import LatLonRect
from geospatial.projections import Projection


class Layer(ABC):
    """Abstract base class for map layers."""

    @abstractmethod
    def draw(self, projection: Projection, x: int, y: int, width: int, height: int) -> None:
        """Draw this layer.

        Parameters
        ----------
        projection : Projection
            Maps between latitude/longitude and viewport pixels. Layers
            must not modify it.
        x, y : int
            Top-left corner of the target rectangle in pixels.
        width, height : int
            Size of the target rectangle in pixels.
        """
        pass

    @abstractmethod
    def bounds(self) -> Optional[LatLonRect]:
        """Geographic extent of what this layer displays.

        Returns
        -------
        LatLonRect or None
            None if the extent is unknown or the layer covers the globe.
        """
        pass
