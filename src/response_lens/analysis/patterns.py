"""String pattern classifiers shared by statistics and schema inference.

Four independent classifiers; a string may match more than one:

- email: ``^[^\\s@]+@[^\\s@]+\\.[^\\s@]+$``
- url:   ``^https?://``
- date:  ``^\\d{4}-\\d{2}-\\d{2}`` (ISO date prefix, so timestamps match too)
- id:    a canonical UUID (any case) or an all-digit string
"""

from __future__ import annotations

import re
from enum import StrEnum, auto

__all__ = ["Pattern", "classify", "format_hint"]

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+\Z")
_URL = re.compile(r"^https?://")
_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}", re.ASCII)
_UUID = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\Z", re.IGNORECASE
)
# ASCII digits only; \Z so a trailing newline never matches
_NUMERIC_ID = re.compile(r"^[0-9]+\Z")


class Pattern(StrEnum):
    EMAIL = auto()
    URL = auto()
    DATE = auto()
    ID = auto()


def classify(text: str) -> list[Pattern]:
    """Return every pattern ``text`` matches, in fixed order."""
    found: list[Pattern] = []
    if _EMAIL.match(text):
        found.append(Pattern.EMAIL)
    if _URL.match(text):
        found.append(Pattern.URL)
    if _DATE.match(text):
        found.append(Pattern.DATE)
    if _UUID.match(text) or _NUMERIC_ID.match(text):
        found.append(Pattern.ID)
    return found


def format_hint(text: str) -> str | None:
    """Schema format hint by first match: email > uri > date-time."""
    if _EMAIL.match(text):
        return "email"
    if _URL.match(text):
        return "uri"
    if _DATE.match(text):
        return "date-time"
    return None
