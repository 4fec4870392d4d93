"""
Shared fixtures for the oblique transformation tests.

Stub inner projection engines let the rotation formulas be checked in
isolation from PROJ.
"""

import pytest
import numpy as np

from common.types import Point
from geospatial.projections import InnerProjectionEngine


class RecordingEngine(InnerProjectionEngine):
    """Identity engine that records every point it receives."""

    def __init__(self):
        self.forward_calls = []
        self.inverse_calls = []

    def forward(self, source_spec, target_spec, point):
        self.forward_calls.append((source_spec, target_spec, point.to_tuple()))
        return point

    def inverse(self, source_spec, target_spec, point):
        self.inverse_calls.append((source_spec, target_spec, point.to_tuple()))
        return point


class UndefinedInverseEngine(RecordingEngine):
    """Engine whose inverse always reports the point at infinity."""

    def inverse(self, source_spec, target_spec, point):
        super().inverse(source_spec, target_spec, point)
        return Point.infinity()


@pytest.fixture
def recording_engine():
    return RecordingEngine()


@pytest.fixture
def undefined_inverse_engine():
    return UndefinedInverseEngine()


@pytest.fixture
def sample_points_deg():
    """(lon, lat) pairs in degrees, away from poles and the antimeridian."""
    lons = [-170.0, -120.0, -60.0, -10.0, 25.0, 95.0, 150.0]
    lats = [-75.0, -50.0, -20.0, 0.0, 15.0, 40.0, 70.0]
    return [(lon, lat) for lon in lons for lat in lats]
