"""
医生出诊时间工具：时间格式转换、可预约时段生成、预约时段校验
"""
from datetime import datetime, time, timedelta

from django.utils import timezone

WEEKDAYS = ['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']

SLOT_STEP_MINUTES = 30

DEFAULT_SLOT_TIMES = [
    '9:00 AM', '9:30 AM', '10:00 AM', '10:30 AM', '11:00 AM', '11:30 AM',
    '2:00 PM', '2:30 PM', '3:00 PM', '3:30 PM', '4:00 PM', '4:30 PM',
    '5:00 PM', '5:30 PM',
]


def parse_clock(value):
    """
    解析 "9:15 AM" / "12:00 PM" / "14:30" 为 time，无法解析时返回 None
    """
    if not value or not isinstance(value, str):
        return None
    parts = value.strip().split()
    try:
        hours, minutes = (int(p) for p in parts[0].split(':'))
    except ValueError:
        return None
    if len(parts) > 1:
        modifier = parts[1].upper()
        if modifier not in ('AM', 'PM'):
            return None
        if hours == 12:
            hours = 0
        if modifier == 'PM':
            hours += 12
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        return None
    return time(hours, minutes)


def format_clock(value):
    """time -> "9:30 AM" """
    hour = value.hour % 12 or 12
    suffix = 'AM' if value.hour < 12 else 'PM'
    return f'{hour}:{value.minute:02d} {suffix}'


def weekday_name(day):
    return WEEKDAYS[day.weekday()]


def day_availability(weekly_availability, day):
    """返回某天的出诊配置，未配置或不出诊时返回 None"""
    entry = (weekly_availability or {}).get(weekday_name(day))
    if not entry or not entry.get('available') or not entry.get('timeSlots'):
        return None
    return entry


def fits_schedule(weekly_availability, slot_start, slot_end):
    """预约时段 [slot_start, slot_end] 是否完整落在当天某个出诊时段内"""
    local_start = timezone.localtime(slot_start)
    local_end = timezone.localtime(slot_end)
    entry = day_availability(weekly_availability, local_start.date())
    if entry is None:
        return False
    for block in entry['timeSlots']:
        block_start = parse_clock(block.get('startTime'))
        block_end = parse_clock(block.get('endTime'))
        if block_start is None or block_end is None:
            continue
        if local_start.date() != local_end.date():
            continue
        if block_start <= local_start.time() and local_end.time() <= block_end:
            return True
    return False


def overlaps_any(start, end, ranges):
    """[start, end) 是否与任一 (slot_start, slot_end) 区间相交"""
    return any(slot_start < end and slot_end > start for slot_start, slot_end in ranges)


def generate_slots(time_blocks, target_date, now, booked_ranges=()):
    """
    按 30 分钟步长展开出诊时段。
    今天已过去的时段不可预约；与已有预约区间相交的时段标记 booked。

    :param booked_ranges: [(slot_start, slot_end), ...]，带时区的 datetime
    """
    tz = timezone.get_current_timezone()
    local_now = timezone.localtime(now, tz)
    booked_ranges = list(booked_ranges)
    slots = []
    for block in time_blocks:
        start = parse_clock(block.get('startTime'))
        end = parse_clock(block.get('endTime'))
        if start is None or end is None:
            continue
        current = datetime.combine(target_date, start)
        block_end = datetime.combine(target_date, end)
        while current < block_end:
            slot_at = timezone.make_aware(current, tz)
            slot_end = slot_at + timedelta(minutes=SLOT_STEP_MINUTES)
            is_booked = overlaps_any(slot_at, slot_end, booked_ranges)
            slots.append({
                'time': format_clock(current.time()),
                'available': slot_at > local_now and not is_booked,
                'booked': is_booked,
            })
            current += timedelta(minutes=SLOT_STEP_MINUTES)
    return slots


def default_slots(target_date, now):
    blocks = []
    for label in DEFAULT_SLOT_TIMES:
        start = parse_clock(label)
        end = (datetime.combine(target_date, start) + timedelta(minutes=SLOT_STEP_MINUTES)).time()
        blocks.append({'startTime': format_clock(start), 'endTime': format_clock(end)})
    return generate_slots(blocks, target_date, now)


def weekly_schedule(weekly_availability, today, days=7):
    """未来 days 天的出诊概览"""
    schedule = []
    for offset in range(days):
        day = today + timedelta(days=offset)
        if weekly_availability:
            entry = day_availability(weekly_availability, day)
            available = entry is not None
            time_range = (f"{entry['timeSlots'][0]['startTime']} to {entry['timeSlots'][-1]['endTime']}"
                          if entry else 'Not available')
        else:
            # 未配置时默认周一至周六出诊
            available = day.weekday() != 6
            time_range = '9:00 AM to 6:00 PM' if available else 'Not available'
        schedule.append({
            'date': day.isoformat(),
            'day': day.strftime('%a').upper(),
            'dayNumber': day.day,
            'available': available,
            'timeRange': time_range,
        })
    return schedule
