"""
Field helpers shared by the record models.

Presence checks and the two normalizations applied right before a draft
is sent to the API: calendar dates collapse to ``YYYY-MM-DD`` and
numeric text becomes a JSON number.
"""

import math
import re
from datetime import date, datetime
from typing import Any

# Leading calendar date of an ISO-8601 date or date-time string.
_ISO_DATE_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:[T ].*)?$")


class FieldError(ValueError):
    """A draft value that cannot be sent, tied to the offending field."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after trimming."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def normalize_date(value: Any, field: str = "date") -> str:
    """
    Reduce a date, date-time or ISO string to ``YYYY-MM-DD``.

    The time of day is dropped as written; no timezone conversion is
    applied, so ``2024-03-05T23:30:00-05:00`` stays on the 5th.

    Raises:
        FieldError: If the value is not a recognizable date.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    text = str(value).strip()
    match = _ISO_DATE_PREFIX.match(text)
    try:
        if match:
            return date.fromisoformat(match.group(1)).isoformat()
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError as exc:
        raise FieldError(
            field, "Date of joining must be a valid date (YYYY-MM-DD)."
        ) from exc


def coerce_number(value: Any) -> Any:
    """
    Return ``value`` as an int or a finite float when it reads as one.

    Anything else, ``nan`` and ``inf`` included, is returned unchanged;
    range and format checks belong to the API server.
    """
    if not isinstance(value, str):
        return value
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return value
    return number if math.isfinite(number) else value


def date_part(value: Any) -> str:
    """
    Leading ``YYYY-MM-DD`` of an ISO date or date-time string, for display
    and for seeding a date input.  Other text is returned as is.
    """
    if is_blank(value):
        return ""
    text = str(value).strip()
    match = _ISO_DATE_PREFIX.match(text)
    return match.group(1) if match else text
