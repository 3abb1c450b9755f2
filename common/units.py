"""
Unit Registry for Angle Handling.

This module provides a centralized unit system using the `pint` library so
that angles arriving from other tools (radians, arc-minutes, gradians, ...)
are converted to the degrees used throughout the projection code.

Example Usage
-------------
>>> from common.units import Q_, angle_to_degrees
>>> angle_to_degrees(Q_(0.5, 'turn'))
180.0
"""

from typing import Union

import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity

_ANGLE = ureg.parse_expression("radian").dimensionality


def angle_to_degrees(value: Union[float, pint.Quantity]) -> float:
    """Convert an angle to degrees.

    Parameters
    ----------
    value : float or pint.Quantity
        A bare number is taken to be degrees already. A quantity must have
        angle units (radian, degree, arcminute, turn, ...).

    Returns
    -------
    float
        The angle in degrees.

    Raises
    ------
    pint.DimensionalityError
        If the quantity is not an angle.
    """
    if isinstance(value, pint.Quantity):
        if value.dimensionality != _ANGLE:
            raise pint.DimensionalityError(
                value.units,
                ureg.degree,
                value.dimensionality,
                _ANGLE
            )
        return float(value.to(ureg.degree).magnitude)
    return float(value)
