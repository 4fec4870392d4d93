"""
Exception Hierarchy for the General Oblique Transformation.

Every error raised by this package subclasses ``ObliqueTransformationError``
together with the matching built-in exception, so callers can catch either
the package-specific error or the familiar built-in one.

Error Categories
----------------
1. Configuration defects (missing inner projection, degenerate geometry),
   raised while building a projection instance.
2. Usage defects (transform called before a successful ``init``), raised
   per call.

None of these are transient: retrying the same call fails the same way.
"""


class ObliqueTransformationError(Exception):
    """Base exception for all oblique transformation errors."""


class MissingInnerProjectionError(ObliqueTransformationError, ValueError):
    """The ``o_proj`` parameter is absent, empty or still unset."""


class InvalidParameterError(ObliqueTransformationError, ValueError):
    """Rotation parameters describe degenerate geometry.

    Raised when the rotation centre sits on a pole, when the two equator
    points share a latitude, or when either of them lies on the equator
    or a pole.
    """


class UninitializedStateError(ObliqueTransformationError, RuntimeError):
    """A transform was requested before the rotation state was resolved."""
