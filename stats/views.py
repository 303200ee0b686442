"""
医生工作台统计视图
"""
import logging

from django.conf import settings
from django.utils import timezone
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTStatelessUserAuthentication

from utils.permissions import IsDoctor
from utils.response import success_response, error_response
from .serializers import DoctorStatsSerializer
from .services import OrmStatsStore, StatsUnavailable, collect_doctor_stats

logger = logging.getLogger(__name__)


class DoctorStatsView(APIView):
    """
    GET /doctor/stats/

    令牌只做签名校验并读取声明，鉴权失败（401/403）不会访问数据库。
    医生身份取自令牌的 user_id，不接受请求参数指定。
    """
    authentication_classes = [JWTStatelessUserAuthentication]
    permission_classes = [IsAuthenticated, IsDoctor]
    store_class = OrmStatsStore

    def now(self):
        return timezone.now()

    def get(self, request):
        doctor_user_id = request.user.id
        try:
            snapshot = collect_doctor_stats(
                self.store_class(),
                doctor_user_id,
                self.now(),
                max_workers=settings.STATS_QUERY_WORKERS,
                timeout=settings.STATS_QUERY_TIMEOUT,
            )
        except StatsUnavailable:
            logger.exception('Doctor stats unavailable for user %s', doctor_user_id)
            return error_response('Internal server error', 500)
        return success_response(DoctorStatsSerializer(snapshot).data)
