"""
预约视图

POST   /bookings/  患者提交预约请求（pending）
GET    /bookings/  预约列表
PATCH  /bookings/  医生处理预约（accept / reject / cancel）
"""
import logging
from datetime import datetime, timedelta

from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from doctors.availability import day_availability, fits_schedule, parse_clock
from doctors.models import Doctor
from utils.params import id_param
from utils.permissions import request_role
from utils.response import success_response, error_response
from utils.timeranges import day_bounds, parse_date
from .models import Booking
from .serializers import (
    BookingActionSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    format_guest,
    sanitize_address,
)

logger = logging.getLogger(__name__)

BOOKING_SLOT_MINUTES = 15
BOOKING_WINDOW_DAYS = 15
BOOKING_LIST_LIMIT = 200
HOME_VISIT_MIN_BLOCKS = 2


class BookingView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        """创建预约请求"""
        if request_role(request) != 'patient':
            return error_response('Only patients can book', 403)

        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        doctor = Doctor.objects.filter(pk=data['doctorId']).first()
        if doctor is None:
            return error_response('Doctor not found', 404)

        start_time = parse_clock(data['time'])
        if start_time is None:
            return error_response('Invalid time, expected "9:15 AM" or "09:15"', 400)

        booking_date = data['date']
        slot_start = timezone.make_aware(datetime.combine(booking_date, start_time))
        slot_end = slot_start + timedelta(minutes=BOOKING_SLOT_MINUTES)

        # 只能预约今天起 15 天内，且不能是过去的时间
        now = timezone.now()
        today = timezone.localdate(now)
        if booking_date < today or booking_date > today + timedelta(days=BOOKING_WINDOW_DAYS):
            return error_response(f'Bookings allowed only within next {BOOKING_WINDOW_DAYS} days', 400)
        if slot_start < now:
            return error_response('Cannot book past time', 400)

        # 必须落在医生当天的出诊时段内
        if day_availability(doctor.weekly_availability, booking_date) is None:
            return error_response('Doctor not available on selected day', 400)
        if not fits_schedule(doctor.weekly_availability, slot_start, slot_end):
            return error_response('Selected time is outside doctor schedule', 400)

        booking_type = data['bookingType']
        home_visit_address = None
        if booking_type == 'home-visit':
            home_visit_address = sanitize_address(data.get('homeVisitAddress'))
            if not home_visit_address or not home_visit_address['fullText'] or not home_visit_address['city']:
                return error_response('Home visit address (at least full address and city) is required', 400)

        booking_for = data['bookingFor']
        guest_patient = None
        notify_email = request.user.email
        if booking_for == 'someone-else':
            guest_patient = format_guest(data.get('patientDetails'))
            notify_email = (guest_patient or {}).get('email', '')

        # 锁住医生行串行化同一医生的预约；部分唯一约束兜底
        try:
            with transaction.atomic():
                Doctor.objects.select_for_update().filter(pk=doctor.pk).first()
                taken = Booking.objects.filter(
                    doctor=doctor,
                    status__in=Booking.ACTIVE_STATUSES,
                    slot_start__lt=slot_end,
                    slot_end__gt=slot_start,
                ).exists()
                if taken:
                    return error_response('This slot is already booked', 409)
                booking = Booking.objects.create(
                    doctor=doctor,
                    patient=request.user,
                    date=booking_date,
                    slot_start=slot_start,
                    slot_end=slot_end,
                    booking_type=booking_type,
                    visit_type=data['visitType'],
                    notes=data.get('notes') or '',
                    booking_for=booking_for,
                    guest_patient=guest_patient,
                    notify_email=notify_email,
                    home_visit_address=home_visit_address,
                    status='pending',
                    created_by='patient',
                )
        except IntegrityError:
            return error_response('This slot is already booked', 409)

        logger.info('Booking %s requested by patient %s for doctor %s at %s',
                    booking.id, request.user.id, doctor.id, slot_start.isoformat())
        return success_response({'bookingId': booking.id}, code=201)

    def get(self, request):
        """预约列表：医生默认看自己的，患者只能看自己的"""
        queryset = Booking.objects.select_related('doctor__user', 'patient')
        role = request_role(request)

        doctor_id, doctor_ok = id_param(request, 'doctorId')
        patient_id, patient_ok = id_param(request, 'patientId')
        if not (doctor_ok and patient_ok):
            return error_response('doctorId and patientId must be numeric', 400)
        status = request.query_params.get('status')
        raw_date = request.query_params.get('date')

        if doctor_id:
            queryset = queryset.filter(doctor_id=doctor_id)
        elif role == 'doctor':
            queryset = queryset.filter(doctor__user_id=request.user.id)

        if role == 'patient':
            queryset = queryset.filter(patient_id=request.user.id)
        elif patient_id:
            queryset = queryset.filter(patient_id=patient_id)

        if status:
            queryset = queryset.filter(status=status)

        if raw_date:
            day = parse_date(raw_date)
            if day is None:
                return error_response('Invalid date, expected YYYY-MM-DD', 400)
            start, end = day_bounds(day)
            queryset = queryset.filter(slot_start__gte=start, slot_start__lte=end)

        bookings = queryset.order_by('slot_start')[:BOOKING_LIST_LIMIT]
        return success_response({'bookings': BookingSerializer(bookings, many=True).data})

    def patch(self, request):
        """医生接受 / 拒绝 / 取消预约"""
        if request_role(request) != 'doctor':
            return error_response('Only doctors can accept bookings', 403)

        serializer = BookingActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = Booking.objects.select_related('doctor').filter(pk=data['bookingId']).first()
        if booking is None:
            return error_response('Booking not found', 404)
        if booking.doctor.user_id != request.user.id:
            return error_response('Not authorized for this booking', 403)

        action = data['action']
        if action == 'accept':
            return self._accept(booking, data)

        if action == 'reject':
            if booking.status != 'pending':
                return error_response('Only pending bookings can be rejected', 400)
            booking.status = 'rejected'
        else:
            if booking.status not in Booking.ACTIVE_STATUSES:
                return error_response('Only pending or booked bookings can be cancelled', 400)
            booking.status = 'cancelled'

        booking.save(update_fields=['status', 'updated_at'])
        logger.info('Booking %s %s by doctor user %s', booking.id, booking.status, request.user.id)
        return success_response({'status': booking.status})

    def _accept(self, booking, data):
        if booking.status != 'pending':
            return error_response('Only pending bookings can be accepted', 400)

        start = data.get('acceptStart') or booking.slot_start
        blocks = data.get('acceptBlocks') or 1
        if booking.booking_type == 'home-visit' and blocks < HOME_VISIT_MIN_BLOCKS:
            return error_response('Home visit requires at least 30 minutes (2 blocks)', 400)
        end = start + timedelta(minutes=BOOKING_SLOT_MINUTES * blocks)

        try:
            with transaction.atomic():
                overlap = Booking.objects.select_for_update().filter(
                    doctor_id=booking.doctor_id,
                    status='booked',
                    slot_start__lt=end,
                    slot_end__gt=start,
                ).exclude(pk=booking.pk).exists()
                if overlap:
                    return error_response('Selected range overlaps an existing booking', 409)

                booking.slot_start = start
                booking.slot_end = end
                booking.date = timezone.localtime(start).date()
                booking.status = 'booked'
                booking.save(update_fields=['slot_start', 'slot_end', 'date', 'status', 'updated_at'])
        except IntegrityError:
            return error_response('This slot is already booked', 409)

        logger.info('Booking %s accepted for %s - %s', booking.id, start.isoformat(), end.isoformat())
        return success_response({'status': booking.status})
