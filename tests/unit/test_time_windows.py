"""
Test week/day boundary helpers.
"""

from datetime import UTC, datetime

from app.utils.time_windows import (
    end_of_day,
    end_of_week,
    ensure_utc,
    is_today,
    is_tomorrow,
    start_of_day,
    start_of_week,
)


def test_start_of_week_is_monday_midnight_utc():
    thursday = datetime(2024, 3, 14, 15, 30, tzinfo=UTC)

    assert start_of_week(thursday) == datetime(2024, 3, 11, tzinfo=UTC)


def test_start_of_week_on_monday_and_sunday():
    assert start_of_week(datetime(2024, 3, 11, 0, 0, tzinfo=UTC)) == datetime(2024, 3, 11, tzinfo=UTC)
    assert start_of_week(datetime(2024, 3, 17, 23, 59, tzinfo=UTC)) == datetime(
        2024, 3, 11, tzinfo=UTC
    )


def test_end_of_week_is_sunday_last_millisecond():
    thursday = datetime(2024, 3, 14, 15, 30, tzinfo=UTC)

    assert end_of_week(thursday) == datetime(2024, 3, 17, 23, 59, 59, 999000, tzinfo=UTC)


def test_start_of_week_in_user_timezone():
    # 2024-03-11 02:00 UTC is 2024-03-10 23:00 in Sao Paulo (UTC-3): previous week locally
    instant = datetime(2024, 3, 11, 2, 0, tzinfo=UTC)

    assert start_of_week(instant, "America/Sao_Paulo") == datetime(2024, 3, 4, 3, 0, tzinfo=UTC)
    assert start_of_week(instant) == datetime(2024, 3, 11, tzinfo=UTC)


def test_start_of_week_east_of_utc():
    # Sunday 22:00 UTC is already Monday 07:00 in Tokyo
    instant = datetime(2024, 3, 10, 22, 0, tzinfo=UTC)

    assert start_of_week(instant, "Asia/Tokyo") == datetime(2024, 3, 10, 15, 0, tzinfo=UTC)


def test_naive_input_treated_as_utc():
    naive = datetime(2024, 3, 14, 12, 0)

    assert ensure_utc(naive) == datetime(2024, 3, 14, 12, 0, tzinfo=UTC)
    assert start_of_week(naive) == datetime(2024, 3, 11, tzinfo=UTC)


def test_day_boundaries():
    instant = datetime(2024, 3, 14, 15, 30, tzinfo=UTC)

    assert start_of_day(instant) == datetime(2024, 3, 14, tzinfo=UTC)
    assert end_of_day(instant) == datetime(2024, 3, 14, 23, 59, 59, 999000, tzinfo=UTC)


def test_is_today_and_tomorrow():
    now = datetime(2024, 3, 14, 10, 0, tzinfo=UTC)

    assert is_today(datetime(2024, 3, 14, 23, 0, tzinfo=UTC), now=now)
    assert not is_today(datetime(2024, 3, 15, 0, 30, tzinfo=UTC), now=now)
    assert is_tomorrow(datetime(2024, 3, 15, 0, 30, tzinfo=UTC), now=now)
