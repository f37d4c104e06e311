"""
Custom exception hierarchy for QueryLens.

All instrumentation-internal exceptions inherit from QueryLensError.
None of them ever reaches the caller of an instrumented statement: they are
raised by the formatting helpers and recovered inside the instrumentation
gate, which logs them at ERROR.

Errors raised by the instrumented call itself are never wrapped in these
types; they propagate unchanged.
"""


class QueryLensError(Exception):
    """Base exception for all QueryLens errors."""

    def __init__(self, message: str = "", details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# ─── Formatting Errors ────────────────────────────────────────


class SubstitutionError(QueryLensError):
    """A placeholder value could not be resolved or substituted."""

    def __init__(self, message: str, property_name: str = "", position: int = -1, **kwargs):
        self.property_name = property_name
        self.position = position
        details = kwargs.pop("details", None) or {}
        details.setdefault("property_name", property_name)
        details.setdefault("position", position)
        super().__init__(message=message, details=details, **kwargs)


class SummarizationError(QueryLensError):
    """A result element could not be dumped for diagnostic logging."""

    pass
