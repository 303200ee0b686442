from datetime import datetime, timedelta

import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from bookings.models import Booking
from doctors.availability import fits_schedule, format_clock, generate_slots, parse_clock
from doctors.models import Doctor
from reviews.models import Review

pytestmark = pytest.mark.django_db


def test_list_shows_only_verified_active_doctors(make_doctor):
    visible = make_doctor()
    make_doctor(verified=False)
    suspended = make_doctor()
    suspended.is_suspended = True
    suspended.save()

    r = APIClient().get(reverse('doctor-list'))
    assert r.status_code == 200
    assert r.data['count'] == 1
    assert [d['id'] for d in r.data['results']] == [visible.id]


def test_list_filters_and_rank_view(make_doctor):
    low = make_doctor(first_name='Meera')
    high = make_doctor()
    low.rating, low.review_count = 3.5, 2
    high.rating, high.review_count = 4.8, 10
    high.city = 'Delhi'
    low.save()
    high.save()

    r = APIClient().get(reverse('doctor-list'), {'view': 'rank'})
    assert [d['id'] for d in r.data['results']] == [high.id, low.id]

    r = APIClient().get(reverse('doctor-list'), {'city': 'delhi'})
    assert [d['id'] for d in r.data['results']] == [high.id]

    r = APIClient().get(reverse('doctor-list'), {'q': 'meera'})
    assert [d['id'] for d in r.data['results']] == [low.id]

    r = APIClient().get(reverse('doctor-list'), {'page': 2, 'page_size': 1, 'view': 'rank'})
    assert r.data['page'] == 2
    assert [d['id'] for d in r.data['results']] == [low.id]


def test_detail_and_not_found(doctor):
    r = APIClient().get(reverse('doctor-detail', args=[doctor.id]))
    assert r.status_code == 200
    assert r.data['doctor']['email'] == doctor.user.email

    r = APIClient().get(reverse('doctor-detail', args=[doctor.id + 100]))
    assert r.status_code == 404
    assert r.data == {'error': 'Doctor not found'}


def test_availability_marks_booked_slots(make_doctor, patient):
    doctor = make_doctor(weekly_availability={
        day: {'available': True, 'timeSlots': [{'startTime': '9:00 AM', 'endTime': '10:30 AM'}]}
        for day in ['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']
    })
    target = timezone.localdate() + timedelta(days=2)
    slot_start = timezone.make_aware(datetime.combine(target, parse_clock('9:30 AM')))
    Booking.objects.create(doctor=doctor, patient=patient, date=target, slot_start=slot_start,
                           slot_end=slot_start + timedelta(minutes=15), visit_type='first-time')

    r = APIClient().get(reverse('doctor-availability', args=[doctor.id]), {'date': target.isoformat()})
    assert r.status_code == 200
    assert r.data['available'] is True
    slots = {s['time']: s for s in r.data['timeSlots']}
    assert list(slots) == ['9:00 AM', '9:30 AM', '10:00 AM']
    assert slots['9:30 AM']['booked'] is True
    assert slots['9:30 AM']['available'] is False
    assert slots['9:00 AM']['available'] is True
    assert len(r.data['weeklySchedule']) == 7


def test_availability_for_day_off(make_doctor):
    doctor = make_doctor(weekly_availability={'monday': {'available': False, 'timeSlots': []}})
    today = timezone.localdate()
    monday = today + timedelta(days=(7 - today.weekday()) % 7)

    r = APIClient().get(reverse('doctor-availability', args=[doctor.id]), {'date': monday.isoformat()})
    assert r.data['available'] is False
    assert r.data['timeSlots'] == []


def test_availability_rejects_bad_date(doctor):
    r = APIClient().get(reverse('doctor-availability', args=[doctor.id]), {'date': '31-12-2025'})
    assert r.status_code == 400


def test_reviews_are_paginated(doctor):
    for rating in (5, 4, 3):
        Review.objects.create(doctor=doctor, rating=rating, comment='fine', patient_name='Anon')

    r = APIClient().get(reverse('doctor-reviews', args=[doctor.id]), {'page': 1, 'limit': 2})
    assert r.status_code == 200
    assert len(r.data['reviews']) == 2
    assert r.data['statistics'] == {'totalReviews': 3, 'averageRating': 4.0}
    assert r.data['pagination']['pages'] == 2
    assert r.data['pagination']['hasNext'] is True


def test_doctor_updates_own_profile(doctor_client, doctor):
    r = doctor_client.patch(reverse('doctor-me'), {
        'about': 'Painless root canals',
        'rating': 5,
        'weekly_availability': {'friday': {'available': True,
                                           'timeSlots': [{'startTime': '10:00 AM', 'endTime': '2:00 PM'}]}},
    }, format='json')
    assert r.status_code == 200
    doctor.refresh_from_db()
    assert doctor.about == 'Painless root canals'
    assert doctor.rating == 0
    assert 'friday' in doctor.weekly_availability


def test_doctor_profile_rejects_invalid_schedule(doctor_client):
    r = doctor_client.patch(reverse('doctor-me'), {
        'weekly_availability': {'friday': {'available': True,
                                           'timeSlots': [{'startTime': '2:00 PM', 'endTime': '10:00 AM'}]}},
    }, format='json')
    assert r.status_code == 400
    assert r.data == {'error': 'Time slot on friday must end after it starts'}


def test_patient_cannot_use_doctor_profile(patient_client):
    r = patient_client.get(reverse('doctor-me'))
    assert r.status_code == 403


def test_admin_verifies_and_suspends(admin_client, make_doctor):
    doctor = make_doctor(verified=False)

    r = admin_client.post(reverse('doctor-verify', args=[doctor.id]))
    assert r.status_code == 200
    doctor.refresh_from_db()
    assert doctor.is_admin_verified is True
    assert doctor.verified_at is not None

    r = admin_client.post(reverse('doctor-suspend', args=[doctor.id]), {'suspend': True}, format='json')
    assert r.status_code == 400
    assert r.data == {'error': 'Suspension reason is required'}

    r = admin_client.post(reverse('doctor-suspend', args=[doctor.id]),
                          {'suspend': True, 'reason': 'License expired'}, format='json')
    assert r.status_code == 200
    doctor.refresh_from_db()
    assert doctor.is_suspended is True
    assert doctor.suspension_reason == 'License expired'

    r = admin_client.post(reverse('doctor-suspend', args=[doctor.id]), {'suspend': False}, format='json')
    doctor.refresh_from_db()
    assert doctor.is_suspended is False
    assert doctor.suspension_reason == ''


def test_patient_cannot_verify(patient_client, doctor):
    r = patient_client.post(reverse('doctor-verify', args=[doctor.id]))
    assert r.status_code == 403
    assert r.data == {'error': 'Forbidden'}


def test_deleting_profile_resets_role(doctor):
    user = doctor.user
    doctor.delete()
    user.refresh_from_db()
    assert user.role == 'patient'


def test_clock_helpers():
    assert parse_clock('12:00 AM').hour == 0
    assert parse_clock('12:30 PM').hour == 12
    assert parse_clock('2:15 pm').hour == 14
    assert parse_clock('14:30').minute == 30
    assert parse_clock('25:00') is None
    assert parse_clock('noon') is None
    assert format_clock(parse_clock('14:05')) == '2:05 PM'


def _morning_doctor(make_doctor):
    return make_doctor(weekly_availability={
        day: {'available': True, 'timeSlots': [{'startTime': '9:00 AM', 'endTime': '10:30 AM'}]}
        for day in ['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']
    })


def test_availability_marks_slot_holding_off_grid_booking(make_doctor, patient):
    doctor = _morning_doctor(make_doctor)
    target = timezone.localdate() + timedelta(days=2)
    slot_start = timezone.make_aware(datetime.combine(target, parse_clock('9:15 AM')))
    Booking.objects.create(doctor=doctor, patient=patient, date=target, slot_start=slot_start,
                           slot_end=slot_start + timedelta(minutes=15), visit_type='first-time',
                           status='booked')

    r = APIClient().get(reverse('doctor-availability', args=[doctor.id]), {'date': target.isoformat()})
    slots = {s['time']: s for s in r.data['timeSlots']}
    assert slots['9:00 AM'] == {'time': '9:00 AM', 'available': False, 'booked': True}
    assert slots['9:30 AM']['booked'] is False
    assert slots['10:00 AM']['available'] is True


def test_availability_marks_every_slot_of_multi_block_booking(make_doctor, patient):
    doctor = _morning_doctor(make_doctor)
    target = timezone.localdate() + timedelta(days=2)
    slot_start = timezone.make_aware(datetime.combine(target, parse_clock('9:00 AM')))
    Booking.objects.create(doctor=doctor, patient=patient, date=target, slot_start=slot_start,
                           slot_end=slot_start + timedelta(hours=1), visit_type='first-time',
                           status='booked')

    r = APIClient().get(reverse('doctor-availability', args=[doctor.id]), {'date': target.isoformat()})
    slots = {s['time']: s for s in r.data['timeSlots']}
    assert slots['9:00 AM']['booked'] is True
    assert slots['9:30 AM'] == {'time': '9:30 AM', 'available': False, 'booked': True}
    assert slots['10:00 AM']['booked'] is False


def test_availability_ignores_cancelled_bookings(make_doctor, patient):
    doctor = _morning_doctor(make_doctor)
    target = timezone.localdate() + timedelta(days=2)
    slot_start = timezone.make_aware(datetime.combine(target, parse_clock('9:00 AM')))
    Booking.objects.create(doctor=doctor, patient=patient, date=target, slot_start=slot_start,
                           slot_end=slot_start + timedelta(minutes=30), visit_type='first-time',
                           status='cancelled')

    r = APIClient().get(reverse('doctor-availability', args=[doctor.id]), {'date': target.isoformat()})
    assert all(not s['booked'] for s in r.data['timeSlots'])


def test_fits_schedule_and_past_slots():
    weekly = {'monday': {'available': True, 'timeSlots': [{'startTime': '9:00 AM', 'endTime': '10:00 AM'}]}}
    start = timezone.make_aware(datetime(2025, 6, 2, 9, 45))  # Monday
    assert fits_schedule(weekly, start, start + timedelta(minutes=15))
    assert not fits_schedule(weekly, start, start + timedelta(minutes=30))
    assert not fits_schedule(weekly, start + timedelta(days=1), start + timedelta(days=1, minutes=15))

    now = timezone.make_aware(datetime(2025, 6, 2, 9, 10))
    slots = generate_slots(weekly['monday']['timeSlots'], start.date(), now)
    assert [(s['time'], s['available']) for s in slots] == [('9:00 AM', False), ('9:30 AM', True)]


def test_admin_list_includes_unverified_and_suspended(admin_client, make_doctor):
    verified = make_doctor()
    pending = make_doctor(verified=False)
    suspended = make_doctor()
    suspended.is_suspended = True
    suspended.save()

    r = admin_client.get(reverse('admin-doctor-list'))
    assert r.status_code == 200
    assert r.data['count'] == 3

    r = admin_client.get(reverse('admin-doctor-list'), {'verified': 'false'})
    assert [d['id'] for d in r.data['results']] == [pending.id]

    r = admin_client.get(reverse('admin-doctor-list'), {'suspended': 'true'})
    assert [d['id'] for d in r.data['results']] == [suspended.id]

    r = admin_client.get(reverse('admin-doctor-list'), {'q': verified.user.email})
    assert [d['id'] for d in r.data['results']] == [verified.id]


def test_admin_list_is_admin_only(doctor_client):
    r = doctor_client.get(reverse('admin-doctor-list'))
    assert r.status_code == 403


def test_admin_deletes_doctor(admin_client, doctor):
    user = doctor.user

    r = admin_client.delete(reverse('admin-doctor-delete', args=[doctor.id]))
    assert r.status_code == 200
    assert not Doctor.objects.filter(pk=doctor.id).exists()
    user.refresh_from_db()
    assert user.role == 'patient'

    r = admin_client.delete(reverse('admin-doctor-delete', args=[doctor.id]))
    assert r.status_code == 404


def test_patient_cannot_delete_doctor(patient_client, doctor):
    r = patient_client.delete(reverse('admin-doctor-delete', args=[doctor.id]))
    assert r.status_code == 403
    assert Doctor.objects.filter(pk=doctor.id).exists()
