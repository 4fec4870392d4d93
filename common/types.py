"""
Type Definitions for Coordinates Flowing Through the Transformation.

A single mutable ``Point`` type is exchanged between the rotation formulas
and the inner projection engine. On the geographic side it holds
longitude/latitude in RADIANS; on the planar side it holds easting/northing
in METERS.
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np


@dataclass
class Point:
    """A coordinate pair updated in place through the transform pipeline.
    
    Attributes
    ----------
    x : float
        Longitude in radians, or easting in meters.
    y : float
        Latitude in radians, or northing in meters.
        
    Examples
    --------
    >>> p = Point.from_degrees(-90.0, 45.0)
    >>> lon_deg, lat_deg = p.to_degrees()
    """
    x: float
    y: float
    
    @property
    def is_finite(self) -> bool:
        """False for the engine's "point at infinity" sentinel."""
        return bool(np.isfinite(self.x) and np.isfinite(self.y))
    
    def to_tuple(self) -> Tuple[float, float]:
        return self.x, self.y
    
    def to_degrees(self) -> Tuple[float, float]:
        """Convert a geographic point to (lon_degrees, lat_degrees)."""
        return float(np.degrees(self.x)), float(np.degrees(self.y))
    
    @classmethod
    def from_degrees(cls, lon_deg: float, lat_deg: float) -> 'Point':
        """Create a geographic point from degrees.
        
        Parameters
        ----------
        lon_deg : float
            Longitude in degrees.
        lat_deg : float
            Latitude in degrees.
            
        Returns
        -------
        Point
            Point with internally stored radians.
        """
        return cls(x=float(np.radians(lon_deg)), y=float(np.radians(lat_deg)))
    
    @classmethod
    def infinity(cls) -> 'Point':
        """The sentinel returned for planar points with no geographic inverse."""
        return cls(x=np.inf, y=np.inf)
