"""
Parameter Tests - Loading TransformParameters from mappings and proj strings.

Dependencies
------------
pytest
numpy
pint
"""

import dataclasses

import pytest
import numpy as np

from common.constants import NOT_SET
from common.exceptions import InvalidParameterError
from common.units import Q_, angle_to_radians, length_to_meters
from geospatial.parameters import TransformParameters, parse_proj_string


class TestDefaults:
    """Documented defaults."""

    def test_all_angles_default_to_zero(self):
        params = TransformParameters()
        for name in ("o_lat_p", "o_lon_p", "o_alpha", "o_lon_c", "o_lat_c",
                     "lon_1", "lat_1", "lon_2", "lat_2", "lon_0", "x_0", "y_0"):
            assert getattr(params, name) == 0.0
        assert params.R is None

    def test_inner_projection_unset(self):
        params = TransformParameters()
        assert params.o_proj == NOT_SET
        assert not params.has_inner_projection
        assert TransformParameters(o_proj="moll").has_inner_projection

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            TransformParameters().o_proj = "moll"

    def test_has_equator_points(self):
        assert not TransformParameters().has_equator_points
        assert TransformParameters(lat_2=0.1).has_equator_points


class TestFromMapping:
    """Values already in radians."""

    def test_values_passed_through(self):
        params = TransformParameters.from_mapping(
            {"o_proj": "moll", "o_lat_p": 0.5, "o_lon_p": "-1.25", "R": 1.0}
        )
        assert params.o_proj == "moll"
        assert params.o_lat_p == 0.5
        assert params.o_lon_p == -1.25
        assert params.R == 1.0

    def test_unknown_key_rejected(self):
        with pytest.raises(InvalidParameterError, match="o_lat_q"):
            TransformParameters.from_mapping({"o_proj": "moll", "o_lat_q": 0.5})

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidParameterError, match="o_lat_p"):
            TransformParameters.from_mapping({"o_proj": "moll", "o_lat_p": "north"})

    def test_none_projection_is_unset(self):
        params = TransformParameters.from_mapping({"o_proj": None})
        assert params.o_proj == NOT_SET


class TestFromDegrees:
    """Values in degrees or pint quantities."""

    def test_degrees_converted(self):
        params = TransformParameters.from_degrees(
            {"o_proj": "moll", "o_lat_p": 45, "o_lon_p": -90, "x_0": 100}
        )
        assert params.o_lat_p == pytest.approx(np.pi / 4)
        assert params.o_lon_p == pytest.approx(-np.pi / 2)
        assert params.x_0 == 100.0

    def test_quantities_honoured(self):
        params = TransformParameters.from_degrees({
            "o_proj": "moll",
            "o_lat_p": Q_(0.5, "radian"),
            "x_0": Q_(2, "kilometer"),
        })
        assert params.o_lat_p == pytest.approx(0.5)
        assert params.x_0 == pytest.approx(2000.0)

    def test_incompatible_units_rejected(self):
        with pytest.raises(InvalidParameterError, match="o_lat_p"):
            TransformParameters.from_degrees({"o_proj": "moll", "o_lat_p": Q_(3, "meter")})


class TestProjString:
    """Conventional +key=value definitions."""

    def test_parse(self):
        raw = parse_proj_string("+proj=ob_tran +o_proj=moll +o_lat_p=45 +o_lon_p=-90 +no_defs")
        assert raw == {"o_proj": "moll", "o_lat_p": "45", "o_lon_p": "-90"}

    def test_from_proj_string(self):
        params = TransformParameters.from_proj_string(
            "+proj=ob_tran +o_proj=moll +o_lat_p=45 +o_lon_p=-90 +lon_0=60"
        )
        assert params.o_proj == "moll"
        assert params.o_lat_p == pytest.approx(np.radians(45.0))
        assert params.o_lon_p == pytest.approx(np.radians(-90.0))
        assert params.lon_0 == pytest.approx(np.radians(60.0))

    def test_malformed_token(self):
        with pytest.raises(InvalidParameterError, match="Malformed"):
            parse_proj_string("+proj=ob_tran o_proj=moll")

    def test_unknown_key(self):
        with pytest.raises(InvalidParameterError, match="o_lat_x"):
            TransformParameters.from_proj_string("+proj=ob_tran +o_proj=moll +o_lat_x=3")


class TestUnits:
    """Unit conversion helpers."""

    def test_angle_to_radians(self):
        assert angle_to_radians(180) == pytest.approx(np.pi)
        assert angle_to_radians("90") == pytest.approx(np.pi / 2)
        assert angle_to_radians(1.0, default_unit="radian") == pytest.approx(1.0)

    def test_length_to_meters(self):
        assert length_to_meters(Q_(1.5, "km")) == pytest.approx(1500.0)
        assert length_to_meters(12) == 12.0

    def test_angle_with_length_units(self):
        with pytest.raises(ValueError, match="incompatible units"):
            angle_to_radians(Q_(1, "meter"))
