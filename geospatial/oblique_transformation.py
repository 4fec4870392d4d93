"""
General Oblique Transformation (PROJ ``ob_tran``).

Rotates the geographic graticule so that the pole sits at an arbitrary
location, then evaluates an arbitrary inner projection on the rotated
coordinates. Typical uses are rotated-pole model grids and projections
centred on a non-polar great circle such as a satellite ground track.

Forward Pipeline
----------------
(lam, phi) --rotate--> (lam', phi') --inner forward--> (x, y)

Inverse Pipeline
----------------
(x, y) --inner inverse--> (lam', phi') --un-rotate--> (lam, phi)

Oblique formulas follow Snyder (5-7), (5-8b), (5-9) and (5-10b). The
transverse variant is the same rotation with the pole on the equator
(sin phip = 0, cos phip = 1).

Examples
--------
+proj=ob_tran +o_proj=moll +o_lat_p=45 +o_lon_p=-90
+proj=ob_tran +o_proj=moll +o_lat_p=45 +o_lon_p=-90 +lon_0=60

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
- PROJ ob_tran: https://proj.org/operations/projections/ob_tran.html
"""

from typing import Any, Mapping, Optional, Tuple, Union
import numpy as np
from numpy.typing import NDArray

from common.exceptions import UninitializedStateError
from common.logging_config import get_logger
from common.types import Point
from geospatial.parameters import TransformParameters
from geospatial.projections import (
    InnerProjectionEngine,
    PyprojEngine,
    build_source_spec,
    build_target_spec,
    normalize_longitude,
)
from geospatial.rotation import Oblique, ParameterResolver, RotationState, Transverse

logger = get_logger(__name__)


def _asin(value: float) -> float:
    # Rounding can push |value| marginally above 1
    return float(np.arcsin(np.clip(value, -1.0, 1.0)))


def rotate(state: Optional[RotationState], lam: float, phi: float) -> Tuple[float, float]:
    """Rotate a geographic point into the frame of the rotated pole.

    Parameters
    ----------
    state : RotationState
        Resolved rotation.
    lam, phi : float
        Geographic longitude/latitude in radians.

    Returns
    -------
    Tuple[float, float]
        Rotated (lam', phi') in radians, lam' in (-π, π].

    Raises
    ------
    UninitializedStateError
        If the state was never resolved.
    """
    if state is None:
        raise UninitializedStateError("Rotation state not resolved before forward transformation")

    coslam = np.cos(lam)
    sinphi = np.sin(phi)
    cosphi = np.cos(phi)
    mode = state.mode

    if isinstance(mode, Oblique):
        # Snyder (5-8b)
        lam_r = np.arctan2(cosphi * np.sin(lam), mode.sphip * cosphi * coslam + mode.cphip * sinphi)
        # Snyder (5-7)
        phi_r = _asin(mode.sphip * sinphi - mode.cphip * cosphi * coslam)
    elif isinstance(mode, Transverse):
        lam_r = np.arctan2(cosphi * np.sin(lam), sinphi)
        phi_r = _asin(-cosphi * coslam)
    else:
        raise UninitializedStateError(f"Unresolved rotation mode: {mode!r}")

    return float(normalize_longitude(lam_r + state.lamp)), phi_r


def unrotate(state: Optional[RotationState], lam: float, phi: float) -> Tuple[float, float]:
    """Undo ``rotate``: map a rotated point back to geographic coordinates.

    Raises
    ------
    UninitializedStateError
        If the state was never resolved.
    """
    if state is None:
        raise UninitializedStateError("Rotation state not resolved before inverse transformation")

    t = lam - state.lamp
    cost = np.cos(t)
    sinphi = np.sin(phi)
    cosphi = np.cos(phi)
    mode = state.mode

    if isinstance(mode, Oblique):
        # Snyder (5-9)
        phi_g = _asin(mode.sphip * sinphi + mode.cphip * cosphi * cost)
        # Snyder (5-10b)
        lam_g = np.arctan2(cosphi * np.sin(t), mode.sphip * cosphi * cost - mode.cphip * sinphi)
    elif isinstance(mode, Transverse):
        phi_g = _asin(cosphi * cost)
        lam_g = np.arctan2(cosphi * np.sin(t), -sinphi)
    else:
        raise UninitializedStateError(f"Unresolved rotation mode: {mode!r}")

    return float(lam_g), phi_g


def forward(
    state: Optional[RotationState],
    point: Point,
    engine: InnerProjectionEngine,
    source_spec: str,
    target_spec: str
) -> Point:
    """Rotate ``point`` and project it with the inner projection.

    The rotated pair is handed to ``engine.forward`` unchanged; false
    easting/northing, central meridian and radius are the engine's
    business.
    """
    point.x, point.y = rotate(state, point.x, point.y)
    logger.debug(f"Before inner projection: {point}")
    point = engine.forward(source_spec, target_spec, point)
    logger.debug(f"After inner projection: {point}")
    return point


def inverse(
    state: Optional[RotationState],
    point: Point,
    engine: InnerProjectionEngine,
    source_spec: str,
    target_spec: str
) -> Point:
    """Unproject ``point`` with the inner projection and undo the rotation.

    If the inner inverse yields the "point at infinity" sentinel, the
    sentinel is returned as is.
    """
    if state is None:
        raise UninitializedStateError("Rotation state not resolved before inverse transformation")

    logger.debug(f"Before inner projection: {point}")
    point = engine.inverse(source_spec, target_spec, point)
    logger.debug(f"After inner projection: {point}")

    if not point.is_finite:
        return point

    point.x, point.y = unrotate(state, point.x, point.y)
    return point


class GeneralObliqueTransformation:
    """Projection wrapper exposing ``init``/``forward``/``inverse``.

    Parameters
    ----------
    params : TransformParameters or mapping, optional
        If given, ``init`` is called immediately.
    engine : InnerProjectionEngine, optional
        Inner projection engine (default: ``PyprojEngine``).

    Examples
    --------
    >>> proj = GeneralObliqueTransformation(
    ...     TransformParameters.from_proj_string(
    ...         "+proj=ob_tran +o_proj=moll +o_lat_p=45 +o_lon_p=-90"))
    >>> xy = proj.forward(Point.from_degrees(10.0, 20.0))
    >>> lonlat = proj.inverse(xy)
    """

    names = ("General Oblique Transformation", "General_Oblique_Transformation", "obtran", "ob_tran")
    title = "General Oblique Transformation"

    def __init__(
        self,
        params: Optional[Union[TransformParameters, Mapping[str, Any]]] = None,
        engine: Optional[InnerProjectionEngine] = None
    ):
        self._engine = engine if engine is not None else PyprojEngine()
        self._params: Optional[TransformParameters] = None
        self._state: Optional[RotationState] = None
        self._source_spec: Optional[str] = None
        self._target_spec: Optional[str] = None
        if params is not None:
            self.init(params)

    def init(self, params: Union[TransformParameters, Mapping[str, Any]]) -> RotationState:
        """Resolve the rotation state for ``params``.

        On failure the instance keeps whatever state it had before.

        Raises
        ------
        MissingInnerProjectionError, InvalidParameterError
        """
        if not isinstance(params, TransformParameters):
            params = TransformParameters.from_mapping(params)

        state = ParameterResolver().resolve(params)

        self._params = params
        self._state = state
        self._source_spec = build_source_spec(params)
        self._target_spec = build_target_spec(params)
        logger.info(f"Inner projection: {self._target_spec}")
        return state

    @property
    def params(self) -> Optional[TransformParameters]:
        return self._params

    @property
    def state(self) -> Optional[RotationState]:
        return self._state

    @property
    def engine(self) -> InnerProjectionEngine:
        return self._engine

    @property
    def source_spec(self) -> Optional[str]:
        return self._source_spec

    @property
    def target_spec(self) -> Optional[str]:
        return self._target_spec

    def forward(self, point: Point) -> Point:
        """Map geographic (lam, phi) in radians to planar (x, y)."""
        self._check_initialized()
        return forward(self._state, point, self._engine, self._source_spec, self._target_spec)

    def inverse(self, point: Point) -> Point:
        """Map planar (x, y) to geographic (lam, phi) in radians."""
        self._check_initialized()
        return inverse(self._state, point, self._engine, self._source_spec, self._target_spec)

    def forward_array(
        self,
        lons_rad: NDArray[np.float64],
        lats_rad: NDArray[np.float64]
    ) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Project arrays of coordinates.

        Parameters
        ----------
        lons_rad, lats_rad : ndarray
            Geographic coordinates in radians, same shape.

        Returns
        -------
        Tuple[ndarray, ndarray]
            (x, y) planar coordinates.
        """
        lons = np.asarray(lons_rad, dtype=np.float64)
        lats = np.asarray(lats_rad, dtype=np.float64)
        xs = np.empty_like(lons)
        ys = np.empty_like(lats)
        for idx in np.ndindex(lons.shape):
            p = self.forward(Point(float(lons[idx]), float(lats[idx])))
            xs[idx], ys[idx] = p.x, p.y
        return xs, ys

    def inverse_array(
        self,
        xs: NDArray[np.float64],
        ys: NDArray[np.float64]
    ) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Unproject arrays of planar coordinates.

        Points without a geographic inverse come back as ``inf``.
        """
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        lons = np.empty_like(xs)
        lats = np.empty_like(ys)
        for idx in np.ndindex(xs.shape):
            p = self.inverse(Point(float(xs[idx]), float(ys[idx])))
            lons[idx], lats[idx] = p.x, p.y
        return lons, lats

    def _check_initialized(self) -> None:
        if self._state is None:
            raise UninitializedStateError(
                f"{self.title} used before a successful init()"
            )

    def __repr__(self) -> str:
        if self._params is None:
            return "GeneralObliqueTransformation(uninitialized)"
        return f"GeneralObliqueTransformation(o_proj={self._params.o_proj!r}, state={self._state!r})"
