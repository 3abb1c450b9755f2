"""Shared fixtures for the map projection tests."""

from typing import List, Optional, Tuple

import pytest

from common.types import LatLon, LatLonRect, Point
from display.layer import Layer
from geospatial.projections import Projection


class RecordingLayer(Layer):
    """Layer that records every draw call instead of rendering."""

    def __init__(self, extent: Optional[LatLonRect] = None, log: Optional[list] = None):
        self.extent = extent
        self.calls: List[Tuple[Projection, int, int, int, int]] = []
        self.log = log

    def draw(self, projection, x, y, width, height):
        self.calls.append((projection, x, y, width, height))
        if self.log is not None:
            self.log.append(self)

    def bounds(self):
        return self.extent

    @property
    def last_projection(self) -> Projection:
        return self.calls[-1][0]


@pytest.fixture
def recording_layer():
    return RecordingLayer()


@pytest.fixture
def seattle():
    return LatLon(47.6609, -122.2816)


@pytest.fixture
def sample_positions():
    return [
        LatLon(0.0, 0.0),
        LatLon(47.6609, -122.2816),
        LatLon(37.4096, 122.299),
        LatLon(-33.8688, 151.2093),
        LatLon(64.1466, -21.9426),
    ]


def assert_point_close(actual: Point, expected: Point, abs_tol: float = 1e-9):
    assert actual.x == pytest.approx(expected.x, abs=abs_tol)
    assert actual.y == pytest.approx(expected.y, abs=abs_tol)


def assert_latlon_close(actual: LatLon, expected: LatLon, abs_tol: float = 1e-9):
    assert float(actual.latitude) == pytest.approx(float(expected.latitude), abs=abs_tol)
    assert float(actual.longitude) == pytest.approx(float(expected.longitude), abs=abs_tol)
