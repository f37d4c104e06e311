"""
Default parameter resolver: property paths over mappings, sequences and objects.

Property names follow the usual ORM binding syntax:
    name            → attribute or mapping key
    user.address    → nested lookup
    items[0].sku    → sequence index, then attribute
"""

import re
from collections.abc import Mapping, Sequence
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from querylens.core.exceptions import SubstitutionError
from querylens.core.interfaces import ParameterResolver

ATOMIC_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    bool,
    int,
    float,
    complex,
    Decimal,
    UUID,
    Enum,
    date,
    time,
    timedelta,
)

_PATH_TOKEN = re.compile(r"([^.\[\]]+)|\[([^\]]*)\]")


class AttributeParameterResolver(ParameterResolver):
    """Resolve binding names by walking attributes, mapping keys and indexes."""

    def __init__(self, atomic_types: tuple[type, ...] = ATOMIC_TYPES):
        self.atomic_types = atomic_types

    def is_atomic(self, value: Any) -> bool:
        return isinstance(value, self.atomic_types)

    def get_property(self, obj: Any, name: str) -> Any:
        tokens = split_property_path(name)
        if not tokens:
            raise SubstitutionError(f"Empty property path {name!r}", property_name=name)

        current = obj
        for token in tokens:
            # A null intermediate resolves the whole path to null
            if current is None:
                return None
            current = self._step(current, token, name)
        return current

    def _step(self, obj: Any, token: str, path: str) -> Any:
        if isinstance(obj, Mapping):
            return obj.get(token)

        if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes, bytearray)):
            try:
                index = int(token)
                if index < 0:
                    raise IndexError(index)
                return obj[index]
            except (ValueError, IndexError) as e:
                raise SubstitutionError(
                    f"Cannot index {type(obj).__name__} with {token!r} in {path!r}",
                    property_name=path,
                ) from e

        try:
            return getattr(obj, token)
        except AttributeError as e:
            raise SubstitutionError(
                f"No property {token!r} on {type(obj).__name__} (path {path!r})",
                property_name=path,
            ) from e


def split_property_path(name: str) -> list[str]:
    """Split ``items[0].sku`` into ``["items", "0", "sku"]``."""
    return [m.group(1) if m.group(1) is not None else m.group(2) for m in _PATH_TOKEN.finditer(name)]
