"""Time utilities (UTC)."""

from datetime import date, datetime, timezone, tzinfo


def now_utc_naive() -> datetime:
    """
    Current time in UTC, returned as naive datetime for DB storage.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today_utc() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def to_utc_iso(dt: datetime, naive_assumed_tz: tzinfo = timezone.utc) -> str:
    """
    Convert datetime to UTC and return ISO string with offset.

    DB timestamps are stored as naive UTC, so naive values are
    interpreted as UTC here.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=naive_assumed_tz)
    return dt.astimezone(timezone.utc).isoformat()
