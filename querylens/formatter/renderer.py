"""
Rendering of bound values into statement-embeddable text.

The output is for log lines only. Strings are quoted but not escaped, and the
``to_timestamp(...)`` form for dates is a hint for human readers, never
parsed back or executed.
"""

import logging
from datetime import date
from typing import Any

logger = logging.getLogger(__name__)

DATE_PATTERN = "%Y-%m-%d %H:%M:%S"
DB_TIMESTAMP_PATTERN = "yyyy-MM-dd HH24:MI:ss.ff"

NULL_LITERAL = "null"


def render_value(value: Any) -> str:
    """
    Convert a single bound value into its textual form.

    Args:
        value: Any resolved parameter value.

    Returns:
        ``null`` for None, a single-quoted string for ``str``, a
        ``to_timestamp`` call for dates and datetimes, and ``str(value)``
        for everything else.
    """
    if value is None:
        return NULL_LITERAL
    if isinstance(value, str):
        return f"'{value}'"
    if isinstance(value, date):
        try:
            return f"to_timestamp('{value.strftime(DATE_PATTERN)}', '{DB_TIMESTAMP_PATTERN}')"
        except (ValueError, TypeError) as e:
            logger.debug(f"Falling back to str() for unformattable date {value!r}: {e}")
    return _default_text(value)


def _default_text(value: Any) -> str:
    """str(value), degrading to the identity repr if __str__ itself blows up."""
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)
