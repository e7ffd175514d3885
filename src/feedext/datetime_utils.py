"""
Date-Time Utilities

RFC 3339 parsing and formatting for date-valued extension fields.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as date_parser

# date "T" time, fractional seconds optional, offset optional
_RFC3339_SHAPE = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?([Zz]|[+-]\d{2}:?\d{2})?$"
)


def to_utc(value: datetime) -> datetime:
    """Convert to an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_rfc3339(text: Optional[str]) -> Optional[datetime]:
    """
    Parse an RFC 3339 date-time.

    Args:
        text: Date-time string, e.g. 2008-01-23T00:00:00Z

    Returns:
        Aware UTC datetime, or None if the value is empty or malformed
    """
    if not text:
        return None
    text = text.strip()
    if not _RFC3339_SHAPE.match(text):
        return None
    try:
        return to_utc(date_parser.isoparse(text.upper().replace(" ", "T", 1)))
    except (ValueError, OverflowError):
        return None


def format_rfc3339(value: datetime) -> str:
    """
    Format a datetime as RFC 3339 in UTC.

    Fractional seconds are only written when present.
    """
    value = to_utc(value)
    # strftime does not pad years before 1000
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        fraction = f"{value.microsecond:06d}".rstrip("0")
        return f"{text}.{fraction}Z"
    return f"{text}Z"
