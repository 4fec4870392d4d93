"""
Numerical and Geometric Constants for the General Oblique Transformation.

This module provides the constants shared by the parameter resolver, the
rotation formulas and the inner projection engine. Each constant carries
its unit and provenance so the origin of every tolerance is traceable.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
- PROJ ob_tran operation: https://proj.org/operations/projections/ob_tran.html
"""

from dataclasses import dataclass
from typing import Final
import numpy as np


@dataclass(frozen=True)
class Constant:
    """A constant with provenance.
    
    Attributes
    ----------
    value : float
        The nominal value of the constant.
    unit : str
        The unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    unit: str
    source: str
    description: str


class ObliqueConstants:
    """Registry of constants used by the oblique transformation.
    
    Degeneracy Checks
    -----------------
    ``TOLERANCE`` is the threshold below which a latitude, a latitude
    difference or a pole latitude is treated as zero.
    """
    
    TOLERANCE: Final[Constant] = Constant(
        value=1e-10,
        unit="rad",
        source="PROJ ob_tran.cpp",
        description="Tolerance for degenerate geometry and transverse mode detection"
    )
    
    HALF_PI: Final[Constant] = Constant(
        value=np.pi / 2,
        unit="rad",
        source="exact",
        description="Latitude of the geographic poles"
    )


# Short aliases used in the formulas
TOL: Final[float] = ObliqueConstants.TOLERANCE.value
HALF_PI: Final[float] = ObliqueConstants.HALF_PI.value

# Placeholder for an inner projection that was never configured
NOT_SET: Final[str] = "not_set"

# Names that refer to the oblique transformation itself
OBLIQUE_PROJECTION_NAMES: Final[tuple] = ("ob_tran", "obtran")
