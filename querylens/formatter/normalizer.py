"""Whitespace normalization for statement text."""

import re

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_statement(text: str | None) -> str:
    """Collapse every run of whitespace (newlines included) into one space."""
    if not text:
        return ""
    return _WHITESPACE_RUN.sub(" ", text)
