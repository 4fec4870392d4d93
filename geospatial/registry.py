"""
Projection Registry.

Maps projection names (and their aliases) to the classes implementing
them, so callers can build a projection from its name and parameters.

Examples
--------
>>> from geospatial.registry import default_registry
>>> proj = default_registry.create("obtran", {"o_proj": "moll", "o_lat_p": 0.5})
"""

from typing import Any, Dict, List, Mapping, Optional, Type, Union

from common.logging_config import get_logger
from geospatial.oblique_transformation import GeneralObliqueTransformation
from geospatial.parameters import TransformParameters
from geospatial.projections import InnerProjectionEngine

logger = get_logger(__name__)


class ProjectionRegistry:
    """Name-keyed lookup of projection classes.

    A registered class must expose a ``names`` sequence and accept
    ``(params, engine)`` in its constructor.
    """

    def __init__(self):
        self._projections: Dict[str, Type] = {}

    def register(self, cls: Type) -> Type:
        """Register ``cls`` under every alias in ``cls.names``.

        Returns the class so this can be used as a decorator.

        Raises
        ------
        ValueError
            If an alias is already taken by another class.
        """
        for name in cls.names:
            existing = self._projections.get(name)
            if existing is not None and existing is not cls:
                raise ValueError(
                    f"Projection name '{name}' already registered to {existing.__name__}"
                )
            self._projections[name] = cls
        logger.debug(f"Registered {cls.__name__} as {list(cls.names)}")
        return cls

    def get(self, name: str) -> Type:
        """Look up a projection class by name.

        Raises
        ------
        KeyError
            If no projection is registered under ``name``.
        """
        if name not in self._projections:
            raise KeyError(f"No projection registered under '{name}'")
        return self._projections[name]

    def create(
        self,
        name: str,
        params: Union[TransformParameters, Mapping[str, Any]],
        engine: Optional[InnerProjectionEngine] = None
    ):
        """Instantiate and initialise the projection registered as ``name``."""
        return self.get(name)(params, engine)

    def names(self) -> List[str]:
        return sorted(self._projections)

    def __contains__(self, name: str) -> bool:
        return name in self._projections


default_registry = ProjectionRegistry()
default_registry.register(GeneralObliqueTransformation)
