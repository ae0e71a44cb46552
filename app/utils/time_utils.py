"""
Time helpers - all timestamps are stored as naive UTC datetimes
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time without tzinfo (matches the DateTime columns)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_isoformat(value: datetime) -> str:
    """Render a naive UTC datetime as an ISO 8601 string with a Z suffix"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat() + "Z"
