"""
Inner Projection Engine for the General Oblique Transformation.

The oblique transformation never projects anything itself: after rotating
the graticule it hands the rotated longitude/latitude to an *inner*
projection (Mollweide, Equidistant Cylindrical, ...). This module defines
the narrow interface the rotation code relies on and a `pyproj`
implementation of it.

Interface
---------
- ``forward(source_spec, target_spec, point)``: geographic -> planar
- ``inverse(source_spec, target_spec, point)``: planar -> geographic, or the
  "point at infinity" sentinel when the planar point has no inverse
- ``normalize_longitude(lam)``: wrap a longitude into (-π, π]

Implementation
--------------
``PyprojEngine`` wraps ``pyproj.Transformer``. PROJ reports unprojectable
points as ``inf`` (HUGE_VAL); that value is passed through unchanged and
recognised by ``Point.is_finite``.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
- PROJ: https://proj.org/
"""

from abc import ABC, abstractmethod
import threading
from typing import Dict, Optional, Tuple, Union
import numpy as np
from numpy.typing import NDArray

from pyproj import CRS, Transformer
from pyproj.enums import TransformDirection

from common.logging_config import get_logger
from common.types import Point
from geospatial.parameters import TransformParameters

logger = get_logger(__name__)


def normalize_longitude(
    lam: Union[float, NDArray[np.float64]]
) -> Union[float, NDArray[np.float64]]:
    """Wrap a longitude into the canonical range (-π, π].

    Values already inside [-π, π] are returned untouched, apart from -π
    which maps to π.

    Parameters
    ----------
    lam : float or ndarray
        Longitude(s) in radians.

    Returns
    -------
    float or ndarray
        Wrapped longitude(s) in radians.
    """
    if np.ndim(lam) == 0:
        lam = float(lam)
        if abs(lam) > np.pi:
            lam = float(np.remainder(lam + np.pi, 2 * np.pi) - np.pi)
        return np.pi if lam <= -np.pi else lam

    lam = np.asarray(lam, dtype=np.float64)
    wrapped = np.where(np.abs(lam) > np.pi, np.remainder(lam + np.pi, 2 * np.pi) - np.pi, lam)
    return np.where(wrapped <= -np.pi, np.pi, wrapped)


def build_source_spec(params: TransformParameters) -> str:
    """PROJ string of the geographic frame on the working sphere."""
    if params.R is not None:
        return f"+proj=longlat +R={params.R} +no_defs"
    return "+proj=longlat +datum=WGS84 +no_defs"


def build_target_spec(params: TransformParameters) -> str:
    """PROJ string of the inner projection, including its offsets.

    ``lon_0``, ``x_0``, ``y_0`` and ``R`` are applied by the inner
    projection, never by the rotation formulas.
    """
    spec = (
        f"+proj={params.o_proj} +lon_0={float(np.degrees(params.lon_0))!r} "
        f"+x_0={params.x_0!r} +y_0={params.y_0!r}"
    )
    if params.R is not None:
        spec += f" +R={params.R}"
    else:
        spec += " +datum=WGS84"
    return spec + " +no_defs"


class InnerProjectionEngine(ABC):
    """Abstract interface to the projection library used after rotation.

    Implementations update ``point`` in place and return it. Longitudes
    and latitudes are exchanged in radians; planar coordinates in meters.
    """

    @abstractmethod
    def forward(self, source_spec: str, target_spec: str, point: Point) -> Point:
        """Project a geographic point from ``source_spec`` to ``target_spec``.

        Parameters
        ----------
        source_spec : str
            Definition of the geographic frame.
        target_spec : str
            Definition of the inner projection.
        point : Point
            (lam, phi) in radians.

        Returns
        -------
        Point
            (x, y) in meters.
        """
        pass

    @abstractmethod
    def inverse(self, source_spec: str, target_spec: str, point: Point) -> Point:
        """Unproject a planar point from ``target_spec`` back to ``source_spec``.

        Parameters
        ----------
        source_spec : str
            Definition of the geographic frame.
        target_spec : str
            Definition of the inner projection.
        point : Point
            (x, y) in meters.

        Returns
        -------
        Point
            (lam, phi) in radians, or ``Point.infinity()`` when the planar
            point has no geographic inverse.
        """
        pass


class PyprojEngine(InnerProjectionEngine):
    """Inner projection engine backed by ``pyproj.Transformer``.

    Transformers are built lazily, one per (source, target) pair, and
    reused for every subsequent point.

    Examples
    --------
    >>> engine = PyprojEngine()
    >>> p = engine.forward("+proj=longlat +R=1 +no_defs",
    ...                    "+proj=eqc +R=1 +no_defs", Point(0.5, 0.25))
    >>> round(p.x, 12), round(p.y, 12)
    (0.5, 0.25)
    """

    def __init__(self):
        self._transformers: Dict[Tuple[str, str], Transformer] = {}
        self._lock = threading.Lock()

    def transformer(self, source_spec: str, target_spec: str) -> Transformer:
        """Get (or build) the transformer for a spec pair."""
        key = (source_spec, target_spec)
        transformer: Optional[Transformer] = self._transformers.get(key)
        if transformer is None:
            with self._lock:
                transformer = self._transformers.get(key)
                if transformer is None:
                    logger.debug(f"Building transformer {source_spec!r} -> {target_spec!r}")
                    transformer = Transformer.from_crs(
                        CRS.from_proj4(source_spec),
                        CRS.from_proj4(target_spec),
                        always_xy=True
                    )
                    self._transformers[key] = transformer
        return transformer

    def forward(self, source_spec: str, target_spec: str, point: Point) -> Point:
        x, y = self.transformer(source_spec, target_spec).transform(
            np.degrees(point.x), np.degrees(point.y)
        )
        point.x, point.y = float(x), float(y)
        return point

    def inverse(self, source_spec: str, target_spec: str, point: Point) -> Point:
        lon_deg, lat_deg = self.transformer(source_spec, target_spec).transform(
            point.x, point.y, direction=TransformDirection.INVERSE
        )
        if not (np.isfinite(lon_deg) and np.isfinite(lat_deg)):
            point.x, point.y = np.inf, np.inf
            return point
        point.x, point.y = float(np.radians(lon_deg)), float(np.radians(lat_deg))
        return point
