"""
Rotated Pole Resolution for the General Oblique Transformation.

This module turns a ``TransformParameters`` value into the immutable
``RotationState`` used by the forward and inverse transforms.

Scientific Context
------------------
Domain: Cartography, spherical trigonometry
Model: Rotation of the graticule on a sphere

The new pole used by the inner projection can be specified three ways,
checked in this order of precedence:

1. Rotation about a point (``o_alpha != 0``): the new equator passes
   through ``(o_lon_c, o_lat_c)`` with azimuth ``o_alpha``.
2. Explicit pole (``o_lat_p != 0``): the new pole is ``(o_lon_p, o_lat_p)``.
3. Two points on the new equator (``lon_1, lat_1, lon_2, lat_2``).

When none of the three is given, the pole sits on the equator at
``o_lon_p``, which yields a transverse rotation.

If the resolved pole lies on the original equator the rotation is
*transverse*; otherwise it is *oblique*. The two variants use different
(simpler, for transverse) forms of Snyder's formulas.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395,
  formulas (5-7) through (5-10b).
- PROJ ob_tran: https://proj.org/operations/projections/ob_tran.html
"""

from dataclasses import dataclass
from typing import Tuple, Union
import numpy as np

from common.constants import TOL, HALF_PI, OBLIQUE_PROJECTION_NAMES
from common.exceptions import InvalidParameterError, MissingInnerProjectionError
from common.logging_config import get_logger
from geospatial.parameters import TransformParameters

logger = get_logger(__name__)


@dataclass(frozen=True)
class Oblique:
    """Rotated pole off the original equator.

    Attributes
    ----------
    cphip : float
        Cosine of the rotated pole latitude.
    sphip : float
        Sine of the rotated pole latitude.
    """
    cphip: float
    sphip: float


@dataclass(frozen=True)
class Transverse:
    """Rotated pole on the original equator (no payload)."""


RotationMode = Union[Oblique, Transverse]


@dataclass(frozen=True)
class RotationState:
    """Derived pole-rotation data shared read-only by both transforms.

    Attributes
    ----------
    lamp : float
        Longitude of the rotated pole in radians.
    mode : Oblique or Transverse
        Rotation variant and its payload.
    """
    lamp: float
    mode: RotationMode

    @property
    def is_oblique(self) -> bool:
        return isinstance(self.mode, Oblique)

    @property
    def is_transverse(self) -> bool:
        return isinstance(self.mode, Transverse)

    @property
    def phip(self) -> float:
        """Latitude of the rotated pole in radians."""
        if isinstance(self.mode, Oblique):
            return float(np.arctan2(self.mode.sphip, self.mode.cphip))
        return 0.0


class ParameterResolver:
    """Resolves transformation parameters into a rotation state.

    Parameters
    ----------
    tolerance : float
        Threshold for degenerate geometry and transverse detection.

    Examples
    --------
    >>> params = TransformParameters(o_proj="moll", o_lat_p=np.radians(45),
    ...                              o_lon_p=np.radians(-90))
    >>> state = ParameterResolver().resolve(params)
    >>> state.is_oblique
    True
    """

    def __init__(self, tolerance: float = TOL):
        self.tolerance = tolerance

    def resolve(self, params: TransformParameters) -> RotationState:
        """Build the rotation state for ``params``.

        Raises
        ------
        MissingInnerProjectionError
            If ``o_proj`` is unset. Checked before any rotation math.
        InvalidParameterError
            If ``o_proj`` names the oblique transformation itself, or the
            active specification mode describes degenerate geometry.
        """
        if not params.has_inner_projection:
            raise MissingInnerProjectionError(
                f"No projection to rotate set: o_proj={params.o_proj!r}"
            )
        if params.o_proj in OBLIQUE_PROJECTION_NAMES:
            raise InvalidParameterError(
                f"o_proj={params.o_proj!r} would rotate the oblique transformation itself"
            )

        if params.o_alpha != 0:
            logger.debug("Resolving rotated pole from rotation about a point")
            lamp, phip = self._rotate_about_point(params)
        elif params.o_lat_p != 0 or not params.has_equator_points:
            logger.debug("Resolving rotated pole from explicit pole")
            lamp, phip = params.o_lon_p, params.o_lat_p
        else:
            logger.debug("Resolving rotated pole from two equator points")
            lamp, phip = self._equator_points(params)

        if abs(phip) > self.tolerance:
            mode: RotationMode = Oblique(cphip=float(np.cos(phip)), sphip=float(np.sin(phip)))
            logger.info(
                f"Oblique rotation: lamp={np.degrees(lamp):.6f}°, phip={np.degrees(phip):.6f}°"
            )
        else:
            mode = Transverse()
            logger.info(f"Transverse rotation: lamp={np.degrees(lamp):.6f}°")

        return RotationState(lamp=float(lamp), mode=mode)

    def _rotate_about_point(self, params: TransformParameters) -> Tuple[float, float]:
        lamc = params.o_lon_c
        phic = params.o_lat_c
        alpha = params.o_alpha

        if abs(abs(phic) - HALF_PI) <= self.tolerance:
            raise InvalidParameterError(
                f"Rotation centre latitude o_lat_c={np.degrees(phic):.6f}° lies on a pole"
            )

        lamp = lamc + np.arctan2(-np.cos(alpha), -np.sin(alpha) * np.sin(phic))
        phip = np.arcsin(np.cos(phic) * np.sin(alpha))
        return float(lamp), float(phip)

    def _equator_points(self, params: TransformParameters) -> Tuple[float, float]:
        lam1, phi1 = params.lon_1, params.lat_1
        lam2, phi2 = params.lon_2, params.lat_2

        con = abs(phi1)
        if (
            abs(phi1 - phi2) <= self.tolerance
            or con <= self.tolerance
            or abs(con - HALF_PI) <= self.tolerance
            or abs(abs(phi2) - HALF_PI) <= self.tolerance
        ):
            raise InvalidParameterError(
                "Equator points must have distinct latitudes, with lat_1 off the "
                f"equator and neither on a pole (lat_1={np.degrees(phi1):.6f}°, "
                f"lat_2={np.degrees(phi2):.6f}°)"
            )

        lamp = np.arctan2(
            np.cos(phi1) * np.sin(phi2) * np.cos(lam1)
            - np.sin(phi1) * np.cos(phi2) * np.cos(lam2),
            np.sin(phi1) * np.cos(phi2) * np.sin(lam2)
            - np.cos(phi1) * np.sin(phi2) * np.sin(lam1)
        )
        phip = np.arctan(-np.cos(lamp - lam1) / np.tan(phi1))
        return float(lamp), float(phip)


def resolve(params: TransformParameters) -> RotationState:
    """Resolve ``params`` with the default tolerance."""
    return ParameterResolver().resolve(params)
