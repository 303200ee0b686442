"""
咨询问题视图
"""
import logging

from django.utils import timezone
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from utils.permissions import IsSystemAdmin, request_role
from utils.response import success_response, error_response
from .models import Question
from .serializers import AskQuestionSerializer, QuestionSerializer, ReplySerializer

logger = logging.getLogger(__name__)


class AskQuestion(APIView):
    """患者提问"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        if request_role(request) != 'patient':
            return error_response('Only patients can ask questions', 403)

        serializer = AskQuestionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = request.user
        question = Question.objects.create(
            user=user,
            name=user.display_name or 'User',
            email=user.email,
            specialist=serializer.validated_data['specialist'].strip(),
            question=serializer.validated_data['question'].strip(),
            status='open',
        )
        logger.info('Question %s asked by user %s', question.id, user.id)
        return success_response({'question': {'id': question.id}}, code=201)


class AdminQuestionList(APIView):
    """管理端问题列表"""
    permission_classes = [IsAuthenticated, IsSystemAdmin]

    def get(self, request):
        queryset = Question.objects.all()
        status = request.query_params.get('status')
        if status:
            queryset = queryset.filter(status=status)
        specialist = request.query_params.get('specialist')
        if specialist:
            queryset = queryset.filter(specialist=specialist)

        try:
            page = max(int(request.query_params.get('page', 1)), 1)
        except (TypeError, ValueError):
            page = 1
        try:
            limit = max(int(request.query_params.get('limit', 10)), 1)
        except (TypeError, ValueError):
            limit = 10

        total = queryset.count()
        start = (page - 1) * limit
        items = queryset.order_by('-created_at', '-id')[start:start + limit]
        return success_response({
            'data': QuestionSerializer(items, many=True).data,
            'pagination': {'page': page, 'limit': limit, 'total': total},
        })


class AdminReplyQuestion(APIView):
    """管理端回复问题"""
    permission_classes = [IsAuthenticated, IsSystemAdmin]

    def patch(self, request, pk):
        serializer = ReplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        question = Question.objects.filter(pk=pk).first()
        if question is None:
            return error_response('Question not found', 404)

        question.reply = serializer.validated_data['reply'].strip()
        question.status = serializer.validated_data['status']
        question.replied_by = request.user
        question.replied_at = timezone.now()
        question.save(update_fields=['reply', 'status', 'replied_by', 'replied_at', 'updated_at'])
        logger.info('Question %s replied by admin %s', question.id, request.user.id)
        return success_response({'question': QuestionSerializer(question).data})
