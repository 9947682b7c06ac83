"""
Time helpers.

All timestamps are stored as naive UTC datetimes.
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_datetime(value) -> datetime:
    """
    Parse an ISO-8601 date or datetime into naive UTC.

    Accepts a trailing 'Z'. Aware values are converted to UTC.

    Raises:
        ValueError: If the value is not a parseable string/datetime
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith('Z') or text.endswith('z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError('Expected an ISO-8601 date string')

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def isoformat(value: datetime):
    """Serialize a naive UTC datetime as ISO-8601 with a 'Z' suffix."""
    if value is None:
        return None
    return value.isoformat() + 'Z'
