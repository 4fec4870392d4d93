"""
Transformation Parameters for the General Oblique Transformation.

This module defines the immutable parameter set consumed by the rotation
resolver, together with the loaders that build it from the usual
configuration surfaces:

1. A mapping of values already in radians/meters (``from_mapping``)
2. A mapping of values in degrees/meters (``from_degrees``)
3. A PROJ-style definition string (``from_proj_string``), e.g.
   ``+proj=ob_tran +o_proj=moll +o_lat_p=45 +o_lon_p=-90 +lon_0=60``

Parameter Groups
----------------
- ``o_proj``: name of the inner projection (required)
- ``o_lat_p``, ``o_lon_p``: explicit rotated pole
- ``o_alpha``, ``o_lon_c``, ``o_lat_c``: rotation about a point
- ``lon_1``, ``lat_1``, ``lon_2``, ``lat_2``: two points on the new equator
- ``lon_0``, ``x_0``, ``y_0``, ``R``: passed through to the inner projection

All angular fields default to 0 and ``o_proj`` defaults to an unset
placeholder, so a missing inner projection is caught by the resolver.
"""

from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Mapping, Optional

from common.constants import NOT_SET
from common.exceptions import InvalidParameterError
from common.units import ANGULAR_KEYS, angle_to_radians, length_to_meters

# PROJ keys accepted in a definition string that carry no rotation meaning
_IGNORED_PROJ_KEYS = frozenset({"proj", "no_defs", "ellps", "datum", "units", "type", "title"})


@dataclass(frozen=True)
class TransformParameters:
    """Parameters of a General Oblique Transformation.

    Attributes
    ----------
    o_proj : str
        Name of the inner projection (e.g. "moll").
    o_lat_p, o_lon_p : float
        Latitude/longitude of the rotated pole in radians.
    o_alpha : float
        Rotation angle about the centre point in radians.
    o_lon_c, o_lat_c : float
        Longitude/latitude of the centre point in radians.
    lon_1, lat_1, lon_2, lat_2 : float
        Two points on the new equator in radians.
    lon_0 : float
        Central meridian of the inner projection in radians.
    x_0, y_0 : float
        False easting/northing in meters.
    R : float, optional
        Sphere radius in meters. Takes precedence over the ellipsoid.
    """
    o_proj: str = NOT_SET

    # New pole
    o_lat_p: float = 0.0
    o_lon_p: float = 0.0

    # Rotate about point
    o_alpha: float = 0.0
    o_lon_c: float = 0.0
    o_lat_c: float = 0.0

    # New equator points
    lon_1: float = 0.0
    lat_1: float = 0.0
    lon_2: float = 0.0
    lat_2: float = 0.0

    # Pass-through
    lon_0: float = 0.0
    x_0: float = 0.0
    y_0: float = 0.0
    R: Optional[float] = None

    @property
    def has_inner_projection(self) -> bool:
        """Whether ``o_proj`` names an actual projection."""
        return bool(self.o_proj) and self.o_proj.strip() != "" and self.o_proj != NOT_SET

    @property
    def has_equator_points(self) -> bool:
        """Whether any of the two-point equator parameters was given."""
        return any(v != 0 for v in (self.lon_1, self.lat_1, self.lon_2, self.lat_2))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def keys(cls) -> frozenset:
        """Names of all recognised parameters."""
        return frozenset(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> 'TransformParameters':
        """Build parameters from values already in radians and meters.

        Parameters
        ----------
        mapping : Mapping[str, Any]
            Recognised keys only. Missing keys take their defaults.

        Returns
        -------
        TransformParameters

        Raises
        ------
        InvalidParameterError
            If an unknown key is present or a value is not numeric.
        """
        _check_keys(mapping)
        values: Dict[str, Any] = {}
        for key, value in mapping.items():
            if key == "o_proj":
                values[key] = NOT_SET if value is None else str(value)
            elif key == "R" and value is None:
                values[key] = None
            else:
                try:
                    values[key] = float(value)
                except (TypeError, ValueError) as e:
                    raise InvalidParameterError(
                        f"Parameter '{key}' must be numeric, got {value!r}"
                    ) from e
        return cls(**values)

    @classmethod
    def from_degrees(cls, mapping: Mapping[str, Any]) -> 'TransformParameters':
        """Build parameters from angles in degrees.

        Angular values may be bare numbers (degrees) or pint quantities
        with any angular unit. Linear values (``x_0``, ``y_0``, ``R``) are
        meters unless they carry units.
        """
        _check_keys(mapping)
        converted: Dict[str, Any] = {}
        for key, value in mapping.items():
            if key == "o_proj" or value is None:
                converted[key] = value
                continue
            try:
                if key in ANGULAR_KEYS:
                    converted[key] = angle_to_radians(value)
                else:
                    converted[key] = length_to_meters(value)
            except ValueError as e:
                raise InvalidParameterError(f"Parameter '{key}': {e}") from e
        return cls.from_mapping(converted)

    @classmethod
    def from_proj_string(cls, definition: str) -> 'TransformParameters':
        """Build parameters from a PROJ-style definition string.

        Examples
        --------
        >>> params = TransformParameters.from_proj_string(
        ...     "+proj=ob_tran +o_proj=moll +o_lat_p=45 +o_lon_p=-90"
        ... )
        >>> params.o_proj
        'moll'
        """
        return cls.from_degrees(parse_proj_string(definition))


def _check_keys(mapping: Mapping[str, Any]) -> None:
    unknown = set(mapping) - TransformParameters.keys()
    if unknown:
        raise InvalidParameterError(
            f"Unknown oblique transformation parameter(s): {', '.join(sorted(unknown))}"
        )


def parse_proj_string(definition: str) -> Dict[str, str]:
    """Split a ``+key=value`` definition into a dictionary of raw strings.

    Keys that describe the surrounding CRS rather than the rotation
    (``+proj``, ``+ellps``, ``+no_defs`` ...) are dropped.

    Parameters
    ----------
    definition : str
        The definition string.

    Returns
    -------
    dict
        Raw values keyed by parameter name, ready for ``from_degrees``.
    """
    result: Dict[str, str] = {}
    for token in definition.split():
        if not token.startswith("+"):
            raise InvalidParameterError(f"Malformed token '{token}' in '{definition}'")
        key, _, value = token[1:].partition("=")
        if key in _IGNORED_PROJ_KEYS:
            continue
        result[key] = value
    return result
