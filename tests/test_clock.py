from datetime import datetime, timedelta, timezone

from services.clock_service import tick


def test_tick_formats_utc() -> None:
    now = datetime(2026, 1, 12, 20, 14, 5, 987000, tzinfo=timezone.utc)
    assert tick(now) == "Mon, 12 Jan 2026 20:14:05 GMT"


def test_tick_converts_other_timezones() -> None:
    now = datetime(2026, 1, 12, 17, 14, 5, tzinfo=timezone(timedelta(hours=-3)))
    assert tick(now) == "Mon, 12 Jan 2026 20:14:05 GMT"


def test_naive_datetimes_are_utc() -> None:
    assert tick(datetime(2025, 1, 1)) == "Wed, 01 Jan 2025 00:00:00 GMT"


def test_tick_now() -> None:
    assert tick().endswith(" GMT")
