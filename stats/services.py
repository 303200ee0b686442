"""
医生工作台统计

四个指标（今日预约、本月预约、累计患者、平均评分）互不依赖，
并发查询后汇总为一份快照；任一查询失败或超时则整份快照失败。
"""
import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from functools import partial
from typing import List, NamedTuple, Optional

from django.db import connections
from django.db.models import Avg, Count

from bookings.models import Booking
from reviews.models import Review
from utils.timeranges import day_month_bounds

logger = logging.getLogger(__name__)

# 今日预约列表上限（不分页，超出部分不返回，appointments_today 随之封顶）
TODAY_APPOINTMENTS_LIMIT = 100

DEFAULT_PATIENT_NAME = 'Patient'
COUNTED_STATUS = 'booked'


class StatsUnavailable(Exception):
    """统计查询失败或超时"""


class TodayAppointment(NamedTuple):
    id: int
    patient_name: str
    start: datetime
    end: datetime
    type: str
    visit_type: str


class StatsSnapshot(NamedTuple):
    appointments_today: int
    month_appointments: int
    total_patients: int
    average_rating: float
    today_appointments: List[TodayAppointment]


def display_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    name = f'{first_name or ""} {last_name or ""}'.strip()
    return name or DEFAULT_PATIENT_NAME


def round_rating(value) -> float:
    """保留一位小数，四舍五入（非银行家舍入）；无评价时为 0"""
    if value is None:
        return 0
    return float(Decimal(str(value)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


class OrmStatsStore:
    """基于 Django ORM 的统计数据源"""

    def _booked(self, doctor_user_id):
        return Booking.objects.filter(doctor__user_id=doctor_user_id, status=COUNTED_STATUS)

    def today_appointments(self, doctor_user_id, start, end, limit) -> List[TodayAppointment]:
        rows = (
            self._booked(doctor_user_id)
            .filter(slot_start__gte=start, slot_start__lte=end)
            .order_by('slot_start')
            .values('id', 'slot_start', 'slot_end', 'booking_type', 'visit_type',
                    'patient__first_name', 'patient__last_name')[:limit]
        )
        return [
            TodayAppointment(
                id=row['id'],
                patient_name=display_name(row['patient__first_name'], row['patient__last_name']),
                start=row['slot_start'],
                end=row['slot_end'],
                type=row['booking_type'],
                visit_type=row['visit_type'],
            )
            for row in rows
        ]

    def month_count(self, doctor_user_id, start, end) -> int:
        return self._booked(doctor_user_id).filter(slot_start__gte=start, slot_start__lte=end).count()

    def distinct_patients(self, doctor_user_id) -> int:
        return self._booked(doctor_user_id).aggregate(total=Count('patient', distinct=True))['total']

    def average_rating(self, doctor_user_id) -> Optional[float]:
        return Review.objects.filter(doctor__user_id=doctor_user_id).aggregate(avg=Avg('rating'))['avg']

    def release(self):
        """工作线程查询结束后关闭该线程持有的数据库连接"""
        connections.close_all()


def _run_sequential(jobs, timeout):
    started = time.monotonic()
    results = {}
    for name, job in jobs.items():
        try:
            results[name] = job()
        except Exception as exc:
            raise StatsUnavailable(f'{name} query failed: {exc}') from exc
        if timeout is not None and time.monotonic() - started > timeout:
            raise StatsUnavailable(f'stats queries exceeded {timeout}s')
    return results


def _call_and_release(store, job):
    try:
        return job()
    finally:
        store.release()


def _run_concurrent(store, jobs, max_workers, timeout):
    executor = ThreadPoolExecutor(max_workers=min(max_workers, len(jobs)), thread_name_prefix='doctor-stats')
    try:
        futures = {executor.submit(_call_and_release, store, job): name for name, job in jobs.items()}
        results = {}
        try:
            for future in as_completed(futures, timeout=timeout):
                name = futures[future]
                try:
                    results[name] = future.result()
                except Exception as exc:
                    raise StatsUnavailable(f'{name} query failed: {exc}') from exc
        except FuturesTimeoutError as exc:
            raise StatsUnavailable(f'stats queries exceeded {timeout}s') from exc
        return results
    finally:
        # 不等待仍在执行的查询，未开始的直接取消
        executor.shutdown(wait=False, cancel_futures=True)


def collect_doctor_stats(store, doctor_user_id, now, max_workers=1, timeout=None) -> StatsSnapshot:
    """
    汇总医生统计快照。

    :param store: 统计数据源（OrmStatsStore 或同接口对象）
    :param doctor_user_id: 医生对应的用户ID（来自访问令牌）
    :param now: 参考时刻，用于计算今天/本月边界
    :param max_workers: 并发查询线程数，<= 1 时在当前线程顺序执行
    :param timeout: 全部查询的总超时（秒），None 表示不限
    """
    bounds = day_month_bounds(now)
    jobs = {
        'today': partial(store.today_appointments, doctor_user_id,
                         bounds.day_start, bounds.day_end, TODAY_APPOINTMENTS_LIMIT),
        'month': partial(store.month_count, doctor_user_id, bounds.month_start, bounds.month_end),
        'patients': partial(store.distinct_patients, doctor_user_id),
        'rating': partial(store.average_rating, doctor_user_id),
    }

    if max_workers is None or max_workers <= 1:
        results = _run_sequential(jobs, timeout)
    else:
        results = _run_concurrent(store, jobs, max_workers, timeout)

    today = list(results['today'])
    logger.debug('Stats for doctor user %s: %s today, %s this month',
                 doctor_user_id, len(today), results['month'])
    return StatsSnapshot(
        appointments_today=len(today),
        month_appointments=results['month'],
        total_patients=results['patients'],
        average_rating=round_rating(results['rating']),
        today_appointments=today,
    )
