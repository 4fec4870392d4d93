"""
Common utilities and infrastructure for the General Oblique Transformation.

This package provides foundational components used across all modules:
- Tolerances and geometric constants
- Exception hierarchy
- Unit conversion at the configuration boundary
- Coordinate point type
- Logging configuration
"""

from common.constants import ObliqueConstants, TOL, HALF_PI, NOT_SET
from common.exceptions import (
    ObliqueTransformationError,
    MissingInnerProjectionError,
    InvalidParameterError,
    UninitializedStateError,
)
from common.units import ureg, Q_, angle_to_radians, length_to_meters
from common.types import Point
from common.logging_config import get_logger

__all__ = [
    "ObliqueConstants",
    "TOL",
    "HALF_PI",
    "NOT_SET",
    "ObliqueTransformationError",
    "MissingInnerProjectionError",
    "InvalidParameterError",
    "UninitializedStateError",
    "ureg",
    "Q_",
    "angle_to_radians",
    "length_to_meters",
    "Point",
    "get_logger",
]
