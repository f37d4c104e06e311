"""
Diagnostic dump of a read's result collection.

Each row is described as ``ClassName[field=value,...]`` by enumerating the
fields the object exposes: dataclass fields, pydantic model fields, SQLAlchemy
``Row`` mappings, plain mappings, ``__slots__`` and public instance attributes.
Collections larger than the row limit are never iterated.
"""

import dataclasses
from collections.abc import Collection, Mapping
from typing import Any

from pydantic import BaseModel

from querylens.core.exceptions import SummarizationError
from querylens.core.models import ResultSummary, SummaryKind

ROW_SEPARATOR = "\n\t"

EMPTY_NOTICE = "result is empty"
TOO_LARGE_NOTICE = "result size {size} exceeds row limit {limit}, dump skipped"


def summarize_results(results: Collection[Any] | None, row_limit: int) -> ResultSummary:
    """
    Summarize a result collection for logging.

    Args:
        results: Rows returned by a read, or None.
        row_limit: Largest collection that is dumped element by element.

    Returns:
        ResultSummary with an empty notice, a per-row dump, or a
        size-exceeded notice.

    Raises:
        SummarizationError: If a row cannot be described.
    """
    if not results:
        return ResultSummary(kind=SummaryKind.EMPTY, size=0, text=EMPTY_NOTICE)

    size = len(results)
    if size > row_limit:
        return ResultSummary(
            kind=SummaryKind.TOO_LARGE,
            size=size,
            text=TOO_LARGE_NOTICE.format(size=size, limit=row_limit),
        )

    lines = []
    for index, row in enumerate(results):
        try:
            lines.append(describe_object(row))
        except Exception as e:
            raise SummarizationError(
                f"Cannot describe result row #{index} ({type(row).__name__}): {e}",
                details={"index": index},
            ) from e

    return ResultSummary(kind=SummaryKind.DUMP, size=size, text=ROW_SEPARATOR.join(lines))


def describe_object(obj: Any) -> str:
    """Render ``obj`` as ``ClassName[field=value,...]``; scalars fall back to repr."""
    fields = _enumerate_fields(obj)
    if fields is None:
        return repr(obj)
    body = ",".join(f"{name}={value!r}" for name, value in fields)
    return f"{type(obj).__name__}[{body}]"


def _enumerate_fields(obj: Any) -> list[tuple[str, Any]] | None:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return [(f.name, getattr(obj, f.name)) for f in dataclasses.fields(obj)]

    if isinstance(obj, BaseModel):
        return [(name, getattr(obj, name)) for name in type(obj).model_fields]

    # SQLAlchemy Row exposes its columns through _mapping
    mapping = getattr(obj, "_mapping", None)
    if isinstance(mapping, Mapping):
        return [(str(key), value) for key, value in mapping.items()]

    if isinstance(obj, Mapping):
        return [(str(key), value) for key, value in obj.items()]

    slots = _collect_slots(type(obj))
    if slots:
        return [(name, getattr(obj, name)) for name in slots if hasattr(obj, name)]

    attrs = getattr(obj, "__dict__", None)
    if isinstance(attrs, dict) and attrs:
        return [(name, value) for name, value in attrs.items() if not name.startswith("_")]

    return None


def _collect_slots(cls: type) -> list[str]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if not s.startswith("__"))
    return names
