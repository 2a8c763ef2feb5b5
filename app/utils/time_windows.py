"""
Week and day boundaries in a user's timezone.

Weeks start on Monday 00:00 local time. Every function returns a UTC-aware
datetime so the result can be stored and compared directly.
"""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo


def _localize(date: datetime | None, user_timezone: str | None) -> datetime:
    date = date or datetime.now(UTC)
    if date.tzinfo is None:
        date = date.replace(tzinfo=UTC)
    return date.astimezone(ZoneInfo(user_timezone) if user_timezone else UTC)


def _to_utc(local: datetime) -> datetime:
    # ZoneInfo resolves the offset from the wall-clock time, so DST shifts are honoured
    return local.astimezone(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def start_of_day(date: datetime | None = None, user_timezone: str | None = None) -> datetime:
    local = _localize(date, user_timezone)
    return _to_utc(local.replace(hour=0, minute=0, second=0, microsecond=0))


def end_of_day(date: datetime | None = None, user_timezone: str | None = None) -> datetime:
    local = _localize(date, user_timezone)
    return _to_utc(local.replace(hour=23, minute=59, second=59, microsecond=999000))


def start_of_week(date: datetime | None = None, user_timezone: str | None = None) -> datetime:
    """Monday 00:00 of the week containing ``date``, in the user's timezone."""
    local = _localize(date, user_timezone)
    monday = local - timedelta(days=local.weekday())
    return _to_utc(monday.replace(hour=0, minute=0, second=0, microsecond=0))


def end_of_week(date: datetime | None = None, user_timezone: str | None = None) -> datetime:
    """Sunday 23:59:59.999 of the week containing ``date``."""
    local = _localize(date, user_timezone)
    sunday = local + timedelta(days=6 - local.weekday())
    return _to_utc(sunday.replace(hour=23, minute=59, second=59, microsecond=999000))


def is_today(date: datetime, user_timezone: str | None = None, now: datetime | None = None) -> bool:
    return _localize(date, user_timezone).date() == _localize(now, user_timezone).date()


def is_tomorrow(
    date: datetime, user_timezone: str | None = None, now: datetime | None = None
) -> bool:
    tomorrow = _localize(now, user_timezone) + timedelta(days=1)
    return _localize(date, user_timezone).date() == tomorrow.date()
