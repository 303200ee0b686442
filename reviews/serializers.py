"""
评价序列化器
"""
from rest_framework import serializers
from .models import Review

REQUIRED_MESSAGE = 'Doctor ID, rating, and comment are required'


class ReviewSerializer(serializers.ModelSerializer):
    """评价展示"""
    doctor_id = serializers.IntegerField(read_only=True)
    patient_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Review
        fields = ['id', 'doctor_id', 'patient_id', 'rating', 'comment', 'patient_name',
                  'doctor_response', 'response_date', 'created_at']
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    """患者提交评价"""
    doctorId = serializers.IntegerField(error_messages={'required': REQUIRED_MESSAGE, 'null': REQUIRED_MESSAGE})
    rating = serializers.IntegerField(error_messages={'required': REQUIRED_MESSAGE, 'null': REQUIRED_MESSAGE})
    comment = serializers.CharField(max_length=1000, error_messages={
        'required': REQUIRED_MESSAGE,
        'blank': REQUIRED_MESSAGE,
        'null': REQUIRED_MESSAGE,
        'max_length': 'Comment cannot exceed 1000 characters',
    })

    def validate_rating(self, value):
        if value < 1 or value > 5:
            raise serializers.ValidationError('Rating must be between 1 and 5')
        return value
