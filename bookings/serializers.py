"""
预约序列化器
"""
import re
from datetime import datetime

from rest_framework import serializers

from doctors.models import Doctor
from user.models import User
from .models import Booking

CREATE_REQUIRED_MESSAGE = 'doctorId, date, time and visitType are required'
ACTION_REQUIRED_MESSAGE = 'bookingId and valid action are required'

DOB_FORMATS = ('%d/%m/%Y', '%Y-%m-%d')


def parse_dob(value):
    """解析出生日期，支持 DD/MM/YYYY 与 YYYY-MM-DD"""
    if not value or not isinstance(value, str):
        return None
    value = value.strip()
    for fmt in DOB_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def format_guest(details):
    """整理为他人预约时填写的就诊人信息"""
    if not isinstance(details, dict):
        return None
    dob = parse_dob(details.get('dob'))
    return {
        'name': (details.get('name') or '').strip(),
        'email': (details.get('email') or '').strip().lower(),
        'phone': (details.get('phone') or '').strip(),
        'gender': (details.get('gender') or '').lower(),
        'dob': dob.isoformat() if dob else None,
        'address': (details.get('address') or '').strip(),
        'postalCode': (details.get('postalCode') or '').strip(),
        'city': (details.get('city') or '').strip(),
    }


def sanitize_address(value):
    """整理上门地址，fullText 缺省时由各行拼接"""
    if not isinstance(value, dict):
        return None
    line1 = (value.get('line1') or '').strip()
    line2 = (value.get('line2') or '').strip()
    city = (value.get('city') or '').strip()
    postal_code = (value.get('postalCode') or '').strip()
    landmark = (value.get('landmark') or '').strip()
    full_text = (value.get('fullText') or ', '.join(p for p in (line1, line2, city, postal_code) if p)).strip()
    return {
        'line1': line1,
        'line2': line2,
        'city': city,
        'postalCode': postal_code,
        'landmark': landmark,
        'fullText': full_text,
    }


def _required(field_class, **kwargs):
    return field_class(error_messages={'required': CREATE_REQUIRED_MESSAGE,
                                       'null': CREATE_REQUIRED_MESSAGE,
                                       'blank': CREATE_REQUIRED_MESSAGE}, **kwargs)


class BookingCreateSerializer(serializers.Serializer):
    """患者提交预约请求"""
    doctorId = _required(serializers.IntegerField)
    date = _required(serializers.DateField, input_formats=['%Y-%m-%d'])
    time = _required(serializers.CharField, max_length=10)
    visitType = _required(serializers.ChoiceField, choices=[c[0] for c in Booking.VISIT_TYPE_CHOICES])
    bookingType = serializers.ChoiceField(choices=[c[0] for c in Booking.BOOKING_TYPE_CHOICES], default='walk-in')
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    bookingFor = serializers.ChoiceField(choices=[c[0] for c in Booking.BOOKING_FOR_CHOICES], default='myself')
    patientDetails = serializers.JSONField(required=False)
    homeVisitAddress = serializers.JSONField(required=False)

    def validate_time(self, value):
        if not re.match(r'^\d{1,2}:\d{2}(\s*[AaPp][Mm])?$', value.strip()):
            raise serializers.ValidationError('Invalid time, expected "9:15 AM" or "09:15"')
        return value.strip()


class BookingActionSerializer(serializers.Serializer):
    """医生处理预约：accept / reject / cancel"""
    ACTIONS = ['accept', 'reject', 'cancel']

    bookingId = serializers.IntegerField(error_messages={'required': ACTION_REQUIRED_MESSAGE,
                                                         'invalid': ACTION_REQUIRED_MESSAGE})
    action = serializers.ChoiceField(choices=ACTIONS, error_messages={'required': ACTION_REQUIRED_MESSAGE,
                                                                      'invalid_choice': ACTION_REQUIRED_MESSAGE})
    acceptStart = serializers.DateTimeField(required=False)
    acceptBlocks = serializers.IntegerField(required=False, min_value=1)


class BookingDoctorSerializer(serializers.ModelSerializer):
    first_name = serializers.CharField(source='user.first_name', read_only=True)
    last_name = serializers.CharField(source='user.last_name', read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)

    class Meta:
        model = Doctor
        fields = ['id', 'first_name', 'last_name', 'clinic_name', 'clinic_address', 'email']


class BookingPatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'first_name', 'last_name', 'email']


class BookingSerializer(serializers.ModelSerializer):
    """预约序列化器"""
    doctor = BookingDoctorSerializer(read_only=True)
    patient = BookingPatientSerializer(read_only=True)
    patient_name = serializers.CharField(source='patient_display_name', read_only=True)

    class Meta:
        model = Booking
        fields = ['id', 'doctor', 'patient', 'patient_name', 'date', 'slot_start', 'slot_end',
                  'booking_type', 'visit_type', 'status', 'notes', 'booking_for', 'guest_patient',
                  'notify_email', 'home_visit_address', 'created_by', 'created_at', 'updated_at']
        read_only_fields = fields
