import logging

import pytest

from common.types import LatLon, Point
from geospatial.projections import (
    EquirectangularProjection,
    MillerCylindricalProjection,
    StereographicProjection,
)
from geospatial.view import ViewProjection
from validation.projection_checks import (
    ProjectionConsistencyChecker,
    ProjectionConsistencyError,
)


def test_equirectangular_passes_all_checks(sample_positions):
    checker = ProjectionConsistencyChecker()
    view = ViewProjection(center=Point(10.0, 20.0), zoom=4.0)

    results = checker.check_all(EquirectangularProjection(), sample_positions, view=view)

    assert [r.test_name for r in results] == ["normalization", "round_trip", "view_round_trip"]
    assert all(r.passed for r in results)


def test_stereographic_checks_include_antipode(sample_positions):
    checker = ProjectionConsistencyChecker()
    projection = StereographicProjection(LatLon(0.0, 0.0))

    results = checker.check_all(projection, sample_positions[1:])

    names = [r.test_name for r in results]
    assert "stereographic_antipode" in names
    assert all(r.passed for r in results)


def test_miller_round_trip_is_flagged(sample_positions):
    checker = ProjectionConsistencyChecker(log_violations=False)

    result = checker.check_round_trip(MillerCylindricalProjection(), sample_positions)

    assert not result.passed
    assert result.details['num_positions'] == len(sample_positions)


def test_singular_round_trip_fails_instead_of_raising():
    checker = ProjectionConsistencyChecker(log_violations=False)
    center = LatLon(10.0, 10.0)

    result = checker.check_round_trip(StereographicProjection(center), [center])

    assert not result.passed


def test_antipode_check_fails_off_the_equator(seattle):
    checker = ProjectionConsistencyChecker(log_violations=False)
    result = checker.check_antipode(StereographicProjection(seattle))
    assert not result.passed


def test_strict_mode_raises(sample_positions):
    checker = ProjectionConsistencyChecker(strict_mode=True, log_violations=False)
    with pytest.raises(ProjectionConsistencyError, match="round_trip"):
        checker.check_round_trip(MillerCylindricalProjection(), sample_positions)


def test_failed_checks_are_logged(sample_positions, caplog):
    checker = ProjectionConsistencyChecker()

    with caplog.at_level(logging.WARNING, logger="ProjectionConsistencyChecker"):
        checker.check_round_trip(MillerCylindricalProjection(), sample_positions)

    assert any("round_trip failed" in record.getMessage() for record in caplog.records)


def test_empty_inputs_pass():
    checker = ProjectionConsistencyChecker()
    assert checker.check_round_trip(EquirectangularProjection(), []).passed
    assert checker.check_view_round_trip(ViewProjection(), [], 100, 100).passed


def test_zero_zoom_view_fails():
    checker = ProjectionConsistencyChecker(log_violations=False)
    result = checker.check_view_round_trip(ViewProjection(zoom=0.0), [Point(1.0, 2.0)], 100, 100)
    assert not result.passed


def test_normalization_check():
    checker = ProjectionConsistencyChecker()
    result = checker.check_normalization([-200.0, 95.0, 45.0], [720.0, -190.0, 181.0])
    assert result.passed
    assert result.details['num_violations'] == 0
