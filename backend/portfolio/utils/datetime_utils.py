"""
Timezone-aware datetime helpers
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time with timezone awareness"""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Attach UTC to naive datetimes read back from the store.

    SQLite drops tzinfo on round trip, PostgreSQL keeps it; comparisons
    need both sides aware.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_month(value: datetime) -> datetime:
    """First instant of the month containing value"""
    return ensure_utc(value).replace(day=1, hour=0, minute=0, second=0, microsecond=0)
