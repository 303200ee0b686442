"""
医生序列化器
"""
from rest_framework import serializers

from .availability import WEEKDAYS, parse_clock
from .models import Doctor


class DoctorSerializer(serializers.ModelSerializer):
    """医生序列化器"""
    user_id = serializers.IntegerField(source='user.id', read_only=True)
    first_name = serializers.CharField(source='user.first_name', read_only=True)
    last_name = serializers.CharField(source='user.last_name', read_only=True)
    full_name = serializers.CharField(read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)
    avatar = serializers.CharField(source='user.avatar', read_only=True)

    class Meta:
        model = Doctor
        fields = ['id', 'user_id', 'first_name', 'last_name', 'full_name', 'email', 'avatar',
                  'specialization', 'qualification', 'experience', 'clinic_name', 'clinic_address',
                  'city', 'consultation_fee', 'about', 'weekly_availability', 'rating', 'review_count',
                  'is_admin_verified', 'verified_at', 'is_suspended', 'suspension_reason',
                  'created_at', 'updated_at']
        read_only_fields = ['id', 'user_id', 'rating', 'review_count', 'is_admin_verified', 'verified_at',
                            'is_suspended', 'suspension_reason', 'created_at', 'updated_at']

    def validate_weekly_availability(self, value):
        """校验出诊时间结构：{weekday: {available, timeSlots: [{startTime, endTime}]}}"""
        if not isinstance(value, dict):
            raise serializers.ValidationError('weekly_availability must be an object')
        for day, entry in value.items():
            if day not in WEEKDAYS:
                raise serializers.ValidationError(f'Unknown weekday: {day}')
            if not isinstance(entry, dict):
                raise serializers.ValidationError(f'Invalid availability for {day}')
            for block in entry.get('timeSlots') or []:
                start = parse_clock(block.get('startTime'))
                end = parse_clock(block.get('endTime'))
                if start is None or end is None:
                    raise serializers.ValidationError(f'Invalid time slot on {day}')
                if start >= end:
                    raise serializers.ValidationError(f'Time slot on {day} must end after it starts')
        return value


class DoctorSuspendSerializer(serializers.Serializer):
    suspend = serializers.BooleanField(default=True)
    reason = serializers.CharField(required=False, allow_blank=True, max_length=200)

    def validate(self, attrs):
        if attrs['suspend'] and not (attrs.get('reason') or '').strip():
            raise serializers.ValidationError({'reason': 'Suspension reason is required'})
        return attrs
