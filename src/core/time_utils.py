"""
Timestamp utilities for protocol payloads.
All protocol timestamps are UTC, ISO-8601 with millisecond precision and a
trailing "Z" (e.g. 2024-06-01T00:00:00.000Z).
"""

from datetime import datetime, timezone
from typing import Optional, Union

from dateutil import parser as dateparser


def now_utc():
    """
    Get current datetime in UTC.

    Returns:
        datetime: Current time with UTC timezone
    """
    return datetime.now(timezone.utc)


def to_protocol_timestamp(value: datetime) -> str:
    """
    Format a datetime the way protocol participants expect it.

    Naive datetimes are assumed to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_repository_date(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parse a date coming from the content repository.

    Accepts ISO dates ("2024-06-01") and datetimes ("2024-06-01T10:00:00.000Z").
    Date-only values are midnight UTC.

    Args:
        value: Date string, datetime, or None

    Returns:
        Timezone-aware datetime, or None if the value is missing

    Raises:
        ValueError: If the value is present but not a valid date string
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif not isinstance(value, str):
        raise ValueError(f"Expected a date string, got {type(value).__name__}")
    else:
        text = value.strip()
        if not text:
            return None
        parsed = dateparser.isoparse(text)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def now_protocol_timestamp() -> str:
    return to_protocol_timestamp(now_utc())
