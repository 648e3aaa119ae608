"""
Date of birth conversions.

Dates travel on the wire as ``YYYY-MM-DD`` strings and are stored in the
``users.dob`` TEXT column in ISO format.  In memory they are always
``datetime.date``; these helpers are the only places where the string
forms are produced or parsed.
"""

import re
from datetime import date


WIRE_DATE_FORMAT = "YYYY-MM-DD"
INVALID_DATE_MESSAGE = "Invalid date format for dob. Expected YYYY-MM-DD."

# ``date.fromisoformat`` also accepts compact forms such as ``20240101``
# on newer interpreters, so the shape is checked first.
_WIRE_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_wire_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a ``date``.

    Raises ``ValueError`` when the string has a different shape or does
    not name a real calendar day (``2023-02-29``).
    """
    if not isinstance(value, str) or not _WIRE_DATE_RE.match(value):
        raise ValueError(INVALID_DATE_MESSAGE)
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(INVALID_DATE_MESSAGE) from None


def format_wire_date(value: date) -> str:
    return value.isoformat()


def to_storage(value: date) -> str:
    """Convert a date into the value bound to the ``dob`` column."""
    return value.isoformat()


def from_storage(value: str) -> date:
    """Convert a ``dob`` column value back into a date."""
    return date.fromisoformat(value)
