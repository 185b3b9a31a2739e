from datetime import UTC, datetime, timedelta
from typing import Any

from bson import ObjectId

# BSON dates have millisecond precision
TIMESTAMP_RESOLUTION = timedelta(milliseconds=1)


def is_object_id(value: Any) -> bool:
    """Check that value is a 24-character hex ObjectId string."""
    return isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value)


def to_utc_millis(value: datetime) -> datetime:
    """Convert to UTC truncated to milliseconds, as MongoDB stores it. Naive values are taken as UTC."""
    value = value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def now() -> datetime:
    return to_utc_millis(datetime.now(UTC))


def next_timestamp(previous: datetime) -> datetime:
    """Current time, moved forward so it is strictly later than previous."""
    return max(now(), to_utc_millis(previous) + TIMESTAMP_RESOLUTION)
