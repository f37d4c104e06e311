"""
Abstract base classes defining the core contracts for QueryLens.

The placeholder substituter depends only on these interfaces, so a host
integration can supply its own notion of "atomic" values and of property
access on structured parameter objects.
"""

from abc import ABC, abstractmethod
from typing import Any


class ParameterResolver(ABC):
    """Interface for resolving bound values off a statement's parameter payload."""

    @abstractmethod
    def is_atomic(self, value: Any) -> bool:
        """
        Decide whether a parameter payload is bound directly.

        Args:
            value: The parameter payload supplied by the caller.

        Returns:
            True if the payload itself is the bound value (a string, number,
            date, ...), False if it is a structured object whose properties
            feed individual placeholders.
        """
        ...

    @abstractmethod
    def get_property(self, obj: Any, name: str) -> Any:
        """
        Read a named property off a structured parameter payload.

        Args:
            obj: The structured parameter payload.
            name: Property path as written in the binding (e.g. ``user.name``).

        Returns:
            The property value, possibly None.

        Raises:
            SubstitutionError: If the property cannot be read.
        """
        ...
