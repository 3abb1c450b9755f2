"""
Validation Framework for the Map Projection System.

This module provides consistency checks for projections and views.
"""

from validation.projection_checks import (
    ProjectionConsistencyChecker,
    ProjectionConsistencyError,
    ValidationResult,
)

__all__ = [
    "ProjectionConsistencyChecker",
    "ProjectionConsistencyError",
    "ValidationResult",
]
