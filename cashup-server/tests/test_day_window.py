from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from cashup.modules.ledgers import day_window


def test_window_follows_local_midnight(tz):
    window = day_window(date(2026, 10, 19), tz)

    assert window.start == datetime(2026, 10, 18, 21, 0, tzinfo=timezone.utc)
    assert window.end == datetime(2026, 10, 19, 21, 0, tzinfo=timezone.utc)
    assert window.end - window.start == timedelta(hours=24)


def test_window_is_half_open(tz):
    window = day_window(date(2026, 10, 19), tz)

    assert window.contains(window.start)
    assert not window.contains(window.end)
    assert window.contains(window.end - timedelta(microseconds=1))
    assert not window.contains(window.start - timedelta(seconds=1))


def test_naive_moments_are_read_as_utc(tz):
    window = day_window(date(2026, 10, 19), tz)

    assert window.contains(datetime(2026, 10, 18, 21, 0))
    assert not window.contains(datetime(2026, 10, 18, 20, 59))


def test_dst_days_are_23_or_25_hours():
    london = ZoneInfo("Europe/London")

    spring = day_window(date(2026, 3, 29), london)
    autumn = day_window(date(2026, 10, 25), london)

    assert spring.end - spring.start == timedelta(hours=23)
    assert autumn.end - autumn.start == timedelta(hours=25)
    assert autumn.start == datetime(2026, 10, 24, 23, 0, tzinfo=timezone.utc)
