import threading
import time
from datetime import datetime

import pytest
from django.utils import timezone

from stats.services import (
    TODAY_APPOINTMENTS_LIMIT,
    StatsUnavailable,
    TodayAppointment,
    collect_doctor_stats,
    display_name,
    round_rating,
)


class FakeStore:
    """按固定数据返回，同时记录调用参数与线程"""

    def __init__(self, today=(), month=0, patients=0, rating=None, delay=0.0, fail_on=None):
        self.today = list(today)
        self.month = month
        self.patients = patients
        self.rating = rating
        self.delay = delay
        self.fail_on = fail_on
        self.calls = {}
        self.threads = set()
        self.released = 0
        self._lock = threading.Lock()

    def _record(self, name, *args):
        with self._lock:
            self.calls[name] = args
            self.threads.add(threading.get_ident())
        if self.delay:
            time.sleep(self.delay)
        if self.fail_on == name:
            raise RuntimeError(f'{name} failed')

    def today_appointments(self, doctor_user_id, start, end, limit):
        self._record('today', doctor_user_id, start, end, limit)
        return self.today[:limit]

    def month_count(self, doctor_user_id, start, end):
        self._record('month', doctor_user_id, start, end)
        return self.month

    def distinct_patients(self, doctor_user_id):
        self._record('patients', doctor_user_id)
        return self.patients

    def average_rating(self, doctor_user_id):
        self._record('rating', doctor_user_id)
        return self.rating

    def release(self):
        with self._lock:
            self.released += 1


NOW = timezone.make_aware(datetime(2024, 2, 10, 15, 30))


def _row(i):
    start = timezone.make_aware(datetime(2024, 2, 10, 9, 0))
    return TodayAppointment(i, f'Patient {i}', start, start, 'walk-in', 'first-time')


def test_sequential_snapshot_uses_day_and_month_bounds():
    store = FakeStore(today=[_row(1), _row(2)], month=7, patients=3, rating=4.0)

    snapshot = collect_doctor_stats(store, 42, NOW, max_workers=1)

    assert snapshot.appointments_today == 2
    assert snapshot.month_appointments == 7
    assert snapshot.total_patients == 3
    assert snapshot.average_rating == 4.0
    assert [row.id for row in snapshot.today_appointments] == [1, 2]

    _, day_start, day_end, limit = store.calls['today']
    assert timezone.localtime(day_start) == timezone.make_aware(datetime(2024, 2, 10, 0, 0))
    assert timezone.localtime(day_end).time().microsecond == 999000
    assert limit == TODAY_APPOINTMENTS_LIMIT

    _, month_start, month_end = store.calls['month']
    assert timezone.localtime(month_start).date().isoformat() == '2024-02-01'
    assert timezone.localtime(month_end).date().isoformat() == '2024-02-29'

    # 顺序执行不释放当前线程的连接
    assert store.released == 0


def test_appointments_today_follows_capped_rows():
    store = FakeStore(today=[_row(i) for i in range(150)], month=150)

    snapshot = collect_doctor_stats(store, 1, NOW)

    assert snapshot.appointments_today == 100
    assert len(snapshot.today_appointments) == 100
    assert snapshot.month_appointments == 150


def test_concurrent_fan_out_runs_in_worker_threads():
    store = FakeStore(today=[_row(1)], month=1, patients=1, rating=5)

    snapshot = collect_doctor_stats(store, 7, NOW, max_workers=4, timeout=5)

    assert snapshot.appointments_today == 1
    assert snapshot.average_rating == 5.0
    assert set(store.calls) == {'today', 'month', 'patients', 'rating'}
    assert threading.get_ident() not in store.threads
    assert store.released == 4


def test_concurrent_failure_fails_whole_snapshot():
    store = FakeStore(month=3, fail_on='patients')

    with pytest.raises(StatsUnavailable):
        collect_doctor_stats(store, 7, NOW, max_workers=4, timeout=5)


def test_sequential_failure_fails_whole_snapshot():
    store = FakeStore(fail_on='rating')

    with pytest.raises(StatsUnavailable):
        collect_doctor_stats(store, 7, NOW, max_workers=1)


def test_slow_queries_time_out():
    store = FakeStore(delay=0.5)

    started = time.monotonic()
    with pytest.raises(StatsUnavailable):
        collect_doctor_stats(store, 7, NOW, max_workers=4, timeout=0.05)
    assert time.monotonic() - started < 0.5


def test_sequential_mode_checks_elapsed_time():
    store = FakeStore(delay=0.03)

    with pytest.raises(StatsUnavailable):
        collect_doctor_stats(store, 7, NOW, max_workers=1, timeout=0.01)


def test_round_rating():
    assert round_rating(None) == 0
    assert round_rating(4.25) == 4.3
    assert round_rating(4.35) == 4.4
    assert round_rating(11 / 3) == 3.7
    assert round_rating(4) == 4.0


def test_display_name_fallback():
    assert display_name('Asha', 'Rao') == 'Asha Rao'
    assert display_name('  Asha ', '') == 'Asha'
    assert display_name('', None) == 'Patient'
    assert display_name(None, None) == 'Patient'
