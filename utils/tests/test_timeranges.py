from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from django.utils import timezone

from utils.timeranges import END_OF_DAY, day_bounds, day_month_bounds, parse_date

KOLKATA = ZoneInfo('Asia/Kolkata')


def _local(value, tz=KOLKATA):
    return timezone.localtime(value, tz)


def test_day_bounds_are_inclusive_local_day():
    bounds = day_month_bounds(datetime(2025, 6, 18, 14, 5, tzinfo=KOLKATA), KOLKATA)
    assert _local(bounds.day_start) == datetime(2025, 6, 18, 0, 0, tzinfo=KOLKATA)
    assert _local(bounds.day_end) == datetime(2025, 6, 18, 23, 59, 59, 999000, tzinfo=KOLKATA)


def test_month_lengths_follow_calendar():
    cases = {
        (2024, 2): 29,
        (2025, 2): 28,
        (2025, 4): 30,
        (2025, 7): 31,
    }
    for (year, month), last_day in cases.items():
        bounds = day_month_bounds(datetime(year, month, 10, 12, tzinfo=KOLKATA), KOLKATA)
        assert _local(bounds.month_start) == datetime(year, month, 1, tzinfo=KOLKATA)
        assert _local(bounds.month_end).date() == date(year, month, last_day)
        assert _local(bounds.month_end).time() == END_OF_DAY


def test_december_does_not_spill_into_next_year():
    bounds = day_month_bounds(datetime(2025, 12, 31, 23, 59, tzinfo=KOLKATA), KOLKATA)
    assert _local(bounds.day_start).date() == date(2025, 12, 31)
    assert _local(bounds.month_start).date() == date(2025, 12, 1)
    assert _local(bounds.month_end).date() == date(2025, 12, 31)


def test_utc_instant_is_converted_to_local_day():
    # 2025-03-31 20:00 UTC 已是加尔各答时间 4 月 1 日 01:30
    bounds = day_month_bounds(datetime(2025, 3, 31, 20, 0, tzinfo=ZoneInfo('UTC')), KOLKATA)
    assert _local(bounds.day_start).date() == date(2025, 4, 1)
    assert _local(bounds.month_end).date() == date(2025, 4, 30)


def test_naive_now_uses_current_timezone():
    bounds = day_month_bounds(datetime(2025, 1, 15, 8, 0))
    local_start = timezone.localtime(bounds.day_start)
    assert local_start.date() == date(2025, 1, 15)
    assert local_start.time() == time.min


def test_day_bounds_helper():
    start, end = day_bounds(date(2025, 5, 2), KOLKATA)
    assert start < end
    assert end - start == timedelta(days=1, milliseconds=-1)


def test_parse_date():
    assert parse_date('2025-05-02') == date(2025, 5, 2)
    assert parse_date('02/05/2025') is None
    assert parse_date('2025-02-30') is None
    assert parse_date('') is None
    assert parse_date(None) is None
