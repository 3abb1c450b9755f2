import pytest

from common.types import LatLon, LatLonRect, Point
from display.map import Map, MapConfig
from geospatial.projections import (
    EquirectangularProjection,
    MillerCylindricalProjection,
    StereographicProjection,
)
from geospatial.view import CombinedProjection

from conftest import RecordingLayer, assert_point_close


@pytest.fixture
def world():
    return Map(EquirectangularProjection(), 10, 20, 800, 600)


def test_new_map_starts_at_origin_with_unit_zoom(world):
    assert world.center == Point(0.0, 0.0)
    assert world.zoom == 1.0
    assert world.geometry == (10, 20, 800, 600)
    assert world.layers == ()


def test_map_config_sets_initial_view():
    config = MapConfig(initial_center=Point(-122.0, 47.0), initial_zoom=8.0)
    seattle_map = Map(EquirectangularProjection(), 0, 0, 640, 480, config)
    assert seattle_map.center == Point(-122.0, 47.0)
    assert seattle_map.zoom == 8.0


def test_draw_passes_combined_projection_and_viewport(world, recording_layer):
    world.add_layer(recording_layer)

    world.draw()

    assert len(recording_layer.calls) == 1
    projection, x, y, width, height = recording_layer.calls[0]
    assert isinstance(projection, CombinedProjection)
    assert (x, y, width, height) == (10, 20, 800, 600)
    assert projection.project(LatLon(0.0, 0.0)) == Point(400.0, 300.0)


def test_draw_visits_layers_in_insertion_order(world):
    order = []
    layers = [RecordingLayer(log=order) for _ in range(3)]
    for layer in layers:
        world.add_layer(layer)

    world.draw()

    assert order == layers


def test_clear_layers(world, recording_layer):
    world.add_layer(recording_layer)
    world.clear_layers()

    world.draw()

    assert world.layers == ()
    assert recording_layer.calls == []


def test_set_projection_keeps_layers_and_view(world, recording_layer):
    world.add_layer(recording_layer)
    world.set_zoom(4.0)
    miller = MillerCylindricalProjection()

    world.set_projection(miller)
    world.draw()

    assert world.projection is miller
    assert world.layers == (recording_layer,)
    assert world.zoom == 4.0
    assert recording_layer.last_projection.projection is miller


def test_set_zoom_scales_output(world, recording_layer):
    world.add_layer(recording_layer)
    world.set_zoom(3.0)

    world.draw()

    pixel = recording_layer.last_projection.project(LatLon(10.0, 20.0))
    assert pixel == Point(460.0, 330.0)


def test_set_zoom_accepts_zero(world):
    world.set_zoom(0.0)
    assert world.zoom == 0.0


def test_set_geometry_changes_viewport(world, recording_layer):
    world.add_layer(recording_layer)
    world.set_geometry(0, 0, 200, 100)

    world.draw()

    projection, *viewport = recording_layer.calls[-1]
    assert viewport == [0, 0, 200, 100]
    assert projection.project(LatLon(0.0, 0.0)) == Point(100.0, 50.0)


@pytest.mark.parametrize("zoom", [0.5, 1.0, 3.0, 17.25])
def test_scroll_shifts_output_by_pixel_displacement(recording_layer, zoom):
    world = Map(StereographicProjection(LatLon(45.0, -100.0)), 0, 0, 1024, 768)
    world.set_zoom(zoom)
    world.add_layer(recording_layer)
    positions = [LatLon(47.6609, -122.2816), LatLon(37.4096, -122.299), LatLon(45.0, -90.0)]

    world.draw()
    before = [recording_layer.last_projection.project(p) for p in positions]
    world.scroll(25.0, -40.0)
    world.draw()
    after = [recording_layer.last_projection.project(p) for p in positions]

    for old, new in zip(before, after):
        assert_point_close(new, old - Point(25.0, -40.0), abs_tol=1e-6)


def test_scroll_moves_center_by_map_units(world):
    world.set_zoom(4.0)
    world.scroll(8.0, -2.0)
    assert world.center == Point(2.0, -0.5)


def test_bounds_unions_known_layer_bounds(world):
    world.add_layer(RecordingLayer(LatLonRect(north=10.0, south=0.0, east=10.0, west=0.0)))
    world.add_layer(RecordingLayer())
    world.add_layer(RecordingLayer(LatLonRect(north=5.0, south=-20.0, east=30.0, west=5.0)))

    assert world.bounds() == LatLonRect(north=10.0, south=-20.0, east=30.0, west=0.0)


def test_bounds_unknown_without_bounded_layers(world):
    assert world.bounds() is None
    world.add_layer(RecordingLayer())
    assert world.bounds() is None
