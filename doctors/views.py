"""
医生视图
"""
import logging
import math

from django.db.models import Q
from django.utils import timezone
from rest_framework import generics
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from utils.permissions import IsDoctor, IsSystemAdmin
from utils.params import int_param
from utils.response import success_response, error_response
from utils.timeranges import day_bounds, parse_date
from .availability import day_availability, default_slots, generate_slots, weekly_schedule
from .models import Doctor
from .serializers import DoctorSerializer, DoctorSuspendSerializer

DOCTOR_NOT_FOUND = 'Doctor not found'

logger = logging.getLogger(__name__)


def _get_doctor_or_none(pk):
    return Doctor.objects.select_related('user').filter(pk=pk).first()


class DoctorList(generics.ListAPIView):
    """医生列表视图（仅展示已审核、未封禁的医生）"""
    queryset = Doctor.objects.filter(is_admin_verified=True, is_suspended=False).select_related('user')
    serializer_class = DoctorSerializer
    permission_classes = [AllowAny]
    authentication_classes = []

    def list(self, request, *args, **kwargs):
        queryset = self.get_queryset()

        specialization = request.query_params.get('specialization')
        if specialization:
            queryset = queryset.filter(specialization__icontains=specialization)

        city = request.query_params.get('city')
        if city:
            queryset = queryset.filter(city__icontains=city)

        keyword = request.query_params.get('q')
        if keyword:
            queryset = queryset.filter(
                Q(user__first_name__icontains=keyword)
                | Q(user__last_name__icontains=keyword)
                | Q(clinic_name__icontains=keyword)
            )

        # rank 视图按评分和评价数降序排列，默认按从业年限
        if request.query_params.get('view') == 'rank':
            queryset = queryset.order_by('-rating', '-review_count')
        else:
            queryset = queryset.order_by('-experience', 'id')

        page = int_param(request, 'page', 1)
        page_size = int_param(request, 'page_size', 12)
        total_count = queryset.count()
        start = (page - 1) * page_size
        serializer = self.get_serializer(queryset[start:start + page_size], many=True)

        return success_response({
            'count': total_count,
            'page': page,
            'page_size': page_size,
            'results': serializer.data,
        })


class DoctorDetail(APIView):
    """医生详情视图"""
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, pk):
        doctor = _get_doctor_or_none(pk)
        if doctor is None:
            return error_response(DOCTOR_NOT_FOUND, 404)
        return success_response({'doctor': DoctorSerializer(doctor).data})


class DoctorAvailability(APIView):
    """医生某天的可预约时段（30分钟一格）"""
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, pk):
        from bookings.models import Booking

        doctor = Doctor.objects.filter(pk=pk).only('id', 'weekly_availability').first()
        if doctor is None:
            return error_response(DOCTOR_NOT_FOUND, 404)

        now = timezone.now()
        today = timezone.localdate(now)
        raw_date = request.query_params.get('date')
        target_date = parse_date(raw_date) if raw_date else today
        if target_date is None:
            return error_response('Invalid date, expected YYYY-MM-DD', 400)

        payload = {
            'date': target_date.isoformat(),
            'dayOfWeek': target_date.strftime('%A'),
            'weeklySchedule': weekly_schedule(doctor.weekly_availability, today),
        }

        # 未配置出诊时间时使用默认时段
        if not doctor.weekly_availability:
            payload.update({'available': True, 'timeSlots': default_slots(target_date, now)})
            return success_response(payload)

        entry = day_availability(doctor.weekly_availability, target_date)
        if entry is None:
            payload.update({
                'available': False,
                'message': 'Doctor is not available on this day',
                'timeSlots': [],
            })
            return success_response(payload)

        start, end = day_bounds(target_date)
        # 按区间相交取当天的占用，跨日或多段接受的预约同样计入
        booked_ranges = Booking.objects.filter(
            doctor=doctor,
            status__in=Booking.ACTIVE_STATUSES,
            slot_start__lte=end,
            slot_end__gt=start,
        ).values_list('slot_start', 'slot_end')
        payload.update({
            'available': True,
            'timeSlots': generate_slots(entry['timeSlots'], target_date, now, booked_ranges),
        })
        return success_response(payload)


class DoctorReviews(APIView):
    """医生评价列表（分页 + 汇总）"""
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, pk):
        from reviews.models import Review
        from reviews.serializers import ReviewSerializer

        doctor = Doctor.objects.filter(pk=pk).first()
        if doctor is None:
            return error_response(DOCTOR_NOT_FOUND, 404)

        page = int_param(request, 'page', 1)
        limit = int_param(request, 'limit', 10)

        reviews = Review.objects.filter(doctor=doctor).order_by('-created_at', '-id')
        total = reviews.count()
        start = (page - 1) * limit
        page_reviews = reviews[start:start + limit]

        return success_response({
            'reviews': ReviewSerializer(page_reviews, many=True).data,
            'statistics': {
                'totalReviews': doctor.review_count,
                'averageRating': doctor.rating,
            },
            'pagination': {
                'page': page,
                'limit': limit,
                'total': total,
                'pages': math.ceil(total / limit),
                'hasNext': page * limit < total,
                'hasPrev': page > 1,
            },
        })


class UpdateDoctorProfile(generics.RetrieveUpdateAPIView):
    """医生端查看/更新个人执业信息"""
    serializer_class = DoctorSerializer
    permission_classes = [IsAuthenticated, IsDoctor]

    def get_object(self):
        """获取当前登录用户的医生信息"""
        try:
            return self.request.user.doctor_profile
        except Doctor.DoesNotExist:
            raise NotFound('Doctor profile not found')

    def retrieve(self, request, *args, **kwargs):
        return success_response({'doctor': self.get_serializer(self.get_object()).data})

    def update(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return success_response({'doctor': serializer.data}, 'Profile updated')


class DoctorVerify(APIView):
    """管理端审核通过医生"""
    permission_classes = [IsAuthenticated, IsSystemAdmin]

    def post(self, request, pk):
        doctor = _get_doctor_or_none(pk)
        if doctor is None:
            return error_response(DOCTOR_NOT_FOUND, 404)
        doctor.is_admin_verified = True
        doctor.verified_at = timezone.now()
        doctor.save(update_fields=['is_admin_verified', 'verified_at', 'updated_at'])
        return success_response({'doctor': DoctorSerializer(doctor).data}, 'Doctor verified')


class DoctorSuspend(APIView):
    """管理端封禁/解封医生"""
    permission_classes = [IsAuthenticated, IsSystemAdmin]

    def post(self, request, pk):
        doctor = _get_doctor_or_none(pk)
        if doctor is None:
            return error_response(DOCTOR_NOT_FOUND, 404)
        serializer = DoctorSuspendSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        suspend = serializer.validated_data['suspend']
        doctor.is_suspended = suspend
        doctor.suspension_reason = serializer.validated_data.get('reason', '').strip() if suspend else ''
        doctor.save(update_fields=['is_suspended', 'suspension_reason', 'updated_at'])
        return success_response(
            {'doctor': DoctorSerializer(doctor).data},
            'Doctor suspended' if suspend else 'Doctor reinstated'
        )


class AdminDoctorList(generics.ListAPIView):
    """管理端医生列表：包含未审核、已封禁的医生"""
    serializer_class = DoctorSerializer
    permission_classes = [IsAuthenticated, IsSystemAdmin]
    queryset = Doctor.objects.select_related('user')

    def list(self, request, *args, **kwargs):
        queryset = self.get_queryset()

        keyword = request.query_params.get('q')
        if keyword:
            queryset = queryset.filter(
                Q(user__first_name__icontains=keyword)
                | Q(user__last_name__icontains=keyword)
                | Q(user__email__icontains=keyword)
                | Q(specialization__icontains=keyword)
            )

        specialization = request.query_params.get('specialization')
        if specialization:
            queryset = queryset.filter(specialization__icontains=specialization)

        # verified / suspended 取 true|false，其他值忽略
        verified = request.query_params.get('verified')
        if verified in ('true', 'false'):
            queryset = queryset.filter(is_admin_verified=verified == 'true')
        suspended = request.query_params.get('suspended')
        if suspended in ('true', 'false'):
            queryset = queryset.filter(is_suspended=suspended == 'true')

        queryset = queryset.order_by('-created_at', '-id')
        page = int_param(request, 'page', 1)
        page_size = int_param(request, 'page_size', 10)
        total_count = queryset.count()
        start = (page - 1) * page_size
        serializer = self.get_serializer(queryset[start:start + page_size], many=True)

        return success_response({
            'count': total_count,
            'page': page,
            'page_size': page_size,
            'results': serializer.data,
        })


class AdminDoctorDelete(APIView):
    """管理端删除医生档案，账号角色随之恢复为患者"""
    permission_classes = [IsAuthenticated, IsSystemAdmin]

    def delete(self, request, pk):
        doctor = _get_doctor_or_none(pk)
        if doctor is None:
            return error_response(DOCTOR_NOT_FOUND, 404)
        email = doctor.user.email
        doctor.delete()
        logger.info('Admin %s deleted doctor %s (%s)', request.user.id, pk, email)
        return success_response(message='Doctor deleted successfully')
