"""
按本地时区计算"今天"/"本月"的起止时间
"""
import calendar
from datetime import datetime, time
from typing import NamedTuple, Optional

from django.utils import timezone

# 与前端保持一致：一天最后一刻精确到毫秒
END_OF_DAY = time(23, 59, 59, 999000)


class DayMonthBounds(NamedTuple):
    day_start: datetime
    day_end: datetime
    month_start: datetime
    month_end: datetime


def _localize(value: datetime, tz) -> datetime:
    if timezone.is_naive(value):
        return timezone.make_aware(value, tz)
    return timezone.localtime(value, tz)


def day_bounds(day, tz=None):
    """给定日期的 [00:00:00.000, 23:59:59.999]（本地时间）"""
    tz = tz or timezone.get_current_timezone()
    start = timezone.make_aware(datetime.combine(day, time.min), tz)
    end = timezone.make_aware(datetime.combine(day, END_OF_DAY), tz)
    return start, end


def day_month_bounds(now: datetime, tz=None) -> DayMonthBounds:
    """
    根据参考时刻计算当天与当月的边界。

    月末按日历实际天数计算（28/29/30/31），跨年无需特殊处理。
    naive 时间视为本地时间。
    """
    tz = tz or timezone.get_current_timezone()
    local_now = _localize(now, tz)
    today = local_now.date()

    day_start, day_end = day_bounds(today, tz)

    last_day = calendar.monthrange(today.year, today.month)[1]
    month_start, _ = day_bounds(today.replace(day=1), tz)
    _, month_end = day_bounds(today.replace(day=last_day), tz)

    return DayMonthBounds(day_start, day_end, month_start, month_end)


def parse_date(value: Optional[str]):
    """解析 YYYY-MM-DD，格式错误返回 None"""
    if not value:
        return None
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        return None
