"""
Consistency Checks for Projections and Views.

This module provides checks that a projection or view obeys the
properties the rest of the system relies on.

Check Categories
----------------
1. Round trips (unproject(project(p)) recovers p)
2. Singularities (stereographic antipode lands on the origin)
3. Normalization (normalized angles stay in range)
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional
import numpy as np

from common.logging_config import get_logger
from common.types import LatLon, Point, normalize_latitude, normalize_longitude
from geospatial.projections import Projection, StereographicProjection
from geospatial.view import ViewProjection


class ProjectionConsistencyError(ValueError):
    """Raised by a strict checker when a check fails."""


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes
    ----------
    test_name : str
        Name of the check.
    passed : bool
        Whether the check passed.
    message : str
        Description of result.
    details : dict
        Additional details.
    """
    test_name: str
    passed: bool
    message: str
    details: Dict[str, Any]


def _angle_error(a: float, b: float) -> float:
    """Absolute difference between two angles, ignoring full turns."""
    return abs(normalize_longitude(a - b))


class ProjectionConsistencyChecker:
    """Checker for the geometric consistency of projections and views.

    Parameters
    ----------
    strict_mode : bool
        If True, raise ProjectionConsistencyError on failed checks.
    log_violations : bool
        Whether to log failed checks.
    tolerance : float
        Largest acceptable error, in degrees for positions and in map
        units for view round trips.
    """

    def __init__(
        self,
        strict_mode: bool = False,
        log_violations: bool = True,
        tolerance: float = 1e-9
    ):
        self.strict_mode = strict_mode
        self.log_violations = log_violations
        self.tolerance = tolerance
        self._logger = get_logger("ProjectionConsistencyChecker")

    def _report(self, result: ValidationResult) -> ValidationResult:
        if not result.passed:
            if self.log_violations:
                self._logger.warning(f"{result.test_name} failed: {result.message}")
            if self.strict_mode:
                raise ProjectionConsistencyError(f"{result.test_name}: {result.message}")
        return result

    def check_all(
        self,
        projection: Projection,
        positions: Iterable[LatLon],
        view: Optional[ViewProjection] = None,
        viewport: tuple = (800, 600)
    ) -> List[ValidationResult]:
        """Run all checks that apply to a projection (and optionally a view).

        Parameters
        ----------
        projection : Projection
            Projection to check.
        positions : iterable of LatLon
            Sample positions.
        view : ViewProjection, optional
            View to check with the projected samples.
        viewport : tuple
            (width, height) used for the view check.

        Returns
        -------
        List[ValidationResult]
            Results of all checks.
        """
        positions = list(positions)
        results = []

        # 1. Normalization of the sample angles
        results.append(self.check_normalization(
            [float(p.latitude) for p in positions],
            [float(p.longitude) for p in positions]
        ))

        # 2. Round trip through the projection
        results.append(self.check_round_trip(projection, positions))

        # 3. Antipode singularity
        if isinstance(projection, StereographicProjection):
            results.append(self.check_antipode(projection))

        # 4. View round trip on the projected samples
        if view is not None:
            points = [projection.project(p) for p in positions]
            results.append(self.check_view_round_trip(view, points, *viewport))

        return results

    def check_round_trip(
        self,
        projection: Projection,
        positions: Iterable[LatLon]
    ) -> ValidationResult:
        """Check that unproject(project(p)) recovers each position."""
        positions = list(positions)
        if not positions:
            return ValidationResult(
                test_name="round_trip",
                passed=True,
                message="No positions to check",
                details={}
            )

        lat_errors = []
        lon_errors = []
        for position in positions:
            recovered = projection.unproject(projection.project(position))
            lat_errors.append(abs(float(recovered.latitude) - float(position.latitude)))
            lon_errors.append(_angle_error(float(recovered.longitude), float(position.longitude)))

        max_error = float(np.max(lat_errors + lon_errors))
        passed = bool(np.isfinite(max_error) and max_error <= self.tolerance)

        return self._report(ValidationResult(
            test_name="round_trip",
            passed=passed,
            message=f"{projection.name} round trip: max error {max_error:.3e}°",
            details={
                'max_latitude_error': float(np.max(lat_errors)),
                'max_longitude_error': float(np.max(lon_errors)),
                'num_positions': len(positions),
            }
        ))

    def check_antipode(self, projection: StereographicProjection) -> ValidationResult:
        """Check that the projection point's antipode lands on the origin.

        This only holds for projection points on the equator; for others
        the result reports how far off the antipode lands.
        """
        antipode = projection.projection_point.antipode()
        point = projection.project(antipode)
        distance = float(np.hypot(point.x, point.y))

        return self._report(ValidationResult(
            test_name="stereographic_antipode",
            passed=bool(distance <= self.tolerance),
            message=f"Antipode {antipode} projects {distance:.3e} from the origin",
            details={
                'x': float(point.x),
                'y': float(point.y),
            }
        ))

    def check_view_round_trip(
        self,
        view: ViewProjection,
        points: Iterable[Point],
        viewport_width: int,
        viewport_height: int
    ) -> ValidationResult:
        """Check that the view transform is inverted by its unproject."""
        points = list(points)
        if not points:
            return ValidationResult(
                test_name="view_round_trip",
                passed=True,
                message="No points to check",
                details={}
            )

        errors = []
        for point in points:
            pixel = view.project(point, viewport_width, viewport_height)
            recovered = view.unproject(pixel, viewport_width, viewport_height)
            errors.append(float(np.hypot(recovered.x - point.x, recovered.y - point.y)))

        max_error = float(np.max(errors))
        # Relative to the magnitude of the coordinates involved
        scale = max(1.0, max(float(np.hypot(p.x, p.y)) for p in points))

        return self._report(ValidationResult(
            test_name="view_round_trip",
            passed=bool(max_error <= self.tolerance * scale),
            message=f"View round trip at zoom {view.zoom}: max error {max_error:.3e}",
            details={
                'max_error': max_error,
                'zoom': view.zoom,
                'center': (float(view.center.x), float(view.center.y)),
            }
        ))

    def check_normalization(
        self,
        latitudes: Iterable[float],
        longitudes: Iterable[float]
    ) -> ValidationResult:
        """Check that normalized angles fall in [-90, 90] and [-180, 180]."""
        lat = np.array([normalize_latitude(v) for v in latitudes], dtype=np.float64)
        lon = np.array([normalize_longitude(v) for v in longitudes], dtype=np.float64)

        lat_violations = (lat < -90) | (lat > 90)
        lon_violations = (lon < -180) | (lon > 180)

        num_violations = int(np.sum(lat_violations) + np.sum(lon_violations))

        return self._report(ValidationResult(
            test_name="normalization",
            passed=num_violations == 0,
            message=f"Normalization check: {num_violations} violations",
            details={
                'num_violations': num_violations,
            }
        ))
