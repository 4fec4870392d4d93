"""
Geospatial Module for the General Oblique Transformation.

This module provides:
- Transformation parameters and their loaders
- Resolution of the rotated pole into an immutable rotation state
- Forward/inverse rotation around an arbitrary inner projection
- The pyproj-backed inner projection engine
- A name-keyed projection registry
"""

from geospatial.parameters import (
    TransformParameters,
    parse_proj_string,
)

from geospatial.rotation import (
    Oblique,
    Transverse,
    RotationState,
    ParameterResolver,
    resolve,
)

from geospatial.projections import (
    InnerProjectionEngine,
    PyprojEngine,
    normalize_longitude,
    build_source_spec,
    build_target_spec,
)

from geospatial.oblique_transformation import (
    GeneralObliqueTransformation,
    rotate,
    unrotate,
    forward,
    inverse,
)

from geospatial.registry import (
    ProjectionRegistry,
    default_registry,
)

__all__ = [
    # Parameters
    "TransformParameters",
    "parse_proj_string",
    # Rotation state
    "Oblique",
    "Transverse",
    "RotationState",
    "ParameterResolver",
    "resolve",
    # Inner projection
    "InnerProjectionEngine",
    "PyprojEngine",
    "normalize_longitude",
    "build_source_spec",
    "build_target_spec",
    # Transformation
    "GeneralObliqueTransformation",
    "rotate",
    "unrotate",
    "forward",
    "inverse",
    # Registry
    "ProjectionRegistry",
    "default_registry",
]
