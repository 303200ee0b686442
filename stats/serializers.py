"""
统计快照序列化器（字段名与前端约定一致，使用 camelCase）
"""
from rest_framework import serializers


class TodayAppointmentSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    patientName = serializers.CharField(source='patient_name')
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()
    type = serializers.CharField()
    visitType = serializers.CharField(source='visit_type')


class StatsSerializer(serializers.Serializer):
    appointmentsToday = serializers.IntegerField(source='appointments_today')
    monthAppointments = serializers.IntegerField(source='month_appointments')
    totalPatients = serializers.IntegerField(source='total_patients')
    averageRating = serializers.FloatField(source='average_rating')


class DoctorStatsSerializer(serializers.Serializer):
    stats = StatsSerializer(source='*')
    todayAppointments = TodayAppointmentSerializer(source='today_appointments', many=True)
