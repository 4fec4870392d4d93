"""
Unit Conversion at the Configuration Boundary.

Projection parameters are written by people in degrees and meters, while
the rotation formulas work in radians. This module uses the `pint` library
so that the conversion happens in exactly one place, and so that values
that already carry units (e.g. ``Q_(45, 'degree')``) are honoured.

Example Usage
-------------
>>> from common.units import Q_, angle_to_radians
>>> angle_to_radians(Q_(90, 'degree'))
1.5707963267948966
>>> angle_to_radians(-90)
-1.5707963267948966
"""

from typing import Union

import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity


# Units expected by TransformParameters for each recognised key
STANDARD_UNITS = {
    # Rotated pole
    "o_lat_p": "radian",
    "o_lon_p": "radian",
    
    # Rotation about a point
    "o_alpha": "radian",
    "o_lon_c": "radian",
    "o_lat_c": "radian",
    
    # Two points on the new equator
    "lon_1": "radian",
    "lat_1": "radian",
    "lon_2": "radian",
    "lat_2": "radian",
    
    # Pass-through offsets for the inner projection
    "lon_0": "radian",
    "x_0": "meter",
    "y_0": "meter",
    "R": "meter",
}

ANGULAR_KEYS = frozenset(
    key for key, unit in STANDARD_UNITS.items() if unit == "radian"
)


def _to_unit(
    value: Union[float, str, pint.Quantity],
    target_unit: str,
    default_unit: str
) -> float:
    if isinstance(value, pint.Quantity):
        quantity = value
    else:
        quantity = ureg.Quantity(float(value), default_unit)
    try:
        return float(quantity.to(target_unit).magnitude)
    except pint.DimensionalityError as e:
        raise ValueError(
            f"Value {value} has incompatible units. "
            f"Expected {target_unit}, got {quantity.units}"
        ) from e


def angle_to_radians(
    value: Union[float, str, pint.Quantity],
    default_unit: str = "degree"
) -> float:
    """Convert an angle to radians.
    
    Parameters
    ----------
    value : float, str or pint.Quantity
        The angle. Bare numbers are interpreted in ``default_unit``.
    default_unit : str
        Unit applied to bare numbers (default: degree).
        
    Returns
    -------
    float
        The angle in radians.
        
    Raises
    ------
    ValueError
        If a quantity with non-angular units is provided.
    """
    return _to_unit(value, "radian", default_unit)


def length_to_meters(
    value: Union[float, str, pint.Quantity],
    default_unit: str = "meter"
) -> float:
    """Convert a length (false easting/northing, radius) to meters."""
    return _to_unit(value, "meter", default_unit)
