from __future__ import annotations

from datetime import date, datetime, timedelta

ONE_DAY = timedelta(days=1)
_MICROSECOND = timedelta(microseconds=1)


def local_now() -> datetime:
    """Current wall-clock instant in the local zone, as a naive datetime."""
    return datetime.now()


def to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def calendar_date(value: datetime) -> date:
    return to_local_naive(value).date()


def ceil_days(delta: timedelta) -> int:
    # Integer microseconds so whole-day spans never pick up float noise.
    micros = delta // _MICROSECOND
    day_micros = ONE_DAY // _MICROSECOND
    return -(-micros // day_micros)


def elapsed(later: datetime, earlier: datetime) -> timedelta:
    """Real time between two local wall-clock values, honouring DST shifts."""
    try:
        return later.astimezone() - earlier.astimezone()
    except (OverflowError, OSError, ValueError):
        return later - earlier


def elapsed_days(later: datetime, earlier: datetime) -> int:
    return ceil_days(elapsed(later, earlier))
