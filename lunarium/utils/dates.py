"""Date normalisation helpers shared by models and services."""
from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime, str]


def to_date(value: Union[date, datetime]) -> date:
    """Drop the time of day, keeping the calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_date(value) -> Optional[date]:
    """
    Parse a calendar date from a date, datetime or ISO-8601 string.

    Full timestamps keep their own calendar date. Returns None for empty or
    unparseable input instead of raising.

    Example:
        >>> parse_date("2025-03-01")
        datetime.date(2025, 3, 1)
        >>> parse_date("2025-03-01T00:00:00.000Z")
        datetime.date(2025, 3, 1)
        >>> parse_date("") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return to_date(value)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        if "T" in text or " " in text:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return date.fromisoformat(text)
    except ValueError:
        return None


def format_date(value: Union[date, datetime]) -> str:
    """Format as the YYYY-MM-DD key used for storage and activity lookup."""
    return to_date(value).isoformat()
