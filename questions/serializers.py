"""
咨询问题序列化器
"""
from rest_framework import serializers
from .models import Question

ASK_REQUIRED_MESSAGE = 'Specialist and question are required'


class QuestionSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    replied_by_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Question
        fields = ['id', 'user_id', 'name', 'email', 'specialist', 'question', 'status', 'reply',
                  'replied_by_id', 'replied_at', 'created_at', 'updated_at']
        read_only_fields = fields


class AskQuestionSerializer(serializers.Serializer):
    specialist = serializers.CharField(max_length=100, error_messages={
        'required': ASK_REQUIRED_MESSAGE, 'blank': ASK_REQUIRED_MESSAGE, 'null': ASK_REQUIRED_MESSAGE})
    question = serializers.CharField(max_length=2000, error_messages={
        'required': ASK_REQUIRED_MESSAGE,
        'blank': ASK_REQUIRED_MESSAGE,
        'null': ASK_REQUIRED_MESSAGE,
        'max_length': 'Question is too long (max 2000 chars)',
    })


class ReplySerializer(serializers.Serializer):
    reply = serializers.CharField(error_messages={
        'required': 'Reply is required', 'blank': 'Reply is required', 'null': 'Reply is required'})
    status = serializers.ChoiceField(choices=[c[0] for c in Question.STATUS_CHOICES], default='answered')
