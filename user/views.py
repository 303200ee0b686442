import logging
import math

from django.contrib.auth import get_user_model
from django.db.models import Q
from rest_framework import generics
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView

from utils.params import int_param
from utils.permissions import IsSystemAdmin
from utils.response import success_response, error_response, first_error_message
from .serializers import (
    RegisterSerializer,
    UserSerializer,
    UserLogOutSerializer,
    UserLoginSerializer,
    UserSuspendSerializer,
)
from .tokens import RoleRefreshToken

logger = logging.getLogger(__name__)


class CreateUser(generics.CreateAPIView):
    """
    用户注册接口（患者 / 医生）
    """
    serializer_class = RegisterSerializer
    permission_classes = [AllowAny]
    authentication_classes = []

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)

        # 验证数据，异常由全局异常处理返回
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        return success_response(
            data={'user': UserSerializer(user).data},
            message='Registration successful',
            code=201
        )


class LoginView(APIView):
    """
    用户登录接口，签发带 role 声明的 JWT
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = UserLoginSerializer(data=request.data)
        if not serializer.is_valid():
            errors = serializer.errors
            # 账号/密码类错误统一按 401 返回
            if 'non_field_errors' in errors:
                return error_response(first_error_message(errors), 401)
            return error_response(first_error_message(errors), 400)

        user = serializer.validated_data['user']
        refresh = RoleRefreshToken.for_user(user)

        return success_response(
            data={
                'token': str(refresh.access_token),
                'refresh_token': str(refresh),
                'user': UserSerializer(user).data,
                'expires_in': int(api_settings.ACCESS_TOKEN_LIFETIME.total_seconds()),
            },
            message='Login successful',
        )


class RefreshTokenView(TokenRefreshView):
    """
    刷新Access Token并轮换Refresh Token
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError:
            return error_response('Invalid or expired refresh token', 401)

        token_data = serializer.validated_data
        return success_response(
            data={
                'token': token_data.get('access'),
                'refresh_token': token_data.get('refresh') or request.data.get('refresh'),
                'expires_in': int(api_settings.ACCESS_TOKEN_LIFETIME.total_seconds()),
            }
        )


class UpdateRetrieveUser(generics.RetrieveUpdateAPIView):
    """An endpoint for updating and retrieving users"""
    authentication_classes = [JWTAuthentication, ]
    permission_classes = [IsAuthenticated, ]
    serializer_class = UserSerializer

    def get_object(self):
        return self.request.user

    def retrieve(self, request, *args, **kwargs):
        return success_response({'user': self.get_serializer(self.get_object()).data})

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return success_response({'user': serializer.data}, 'Profile updated')


class Logout(APIView):
    """An endpoint to logout a user"""
    authentication_classes = [JWTAuthentication, ]
    permission_classes = [IsAuthenticated, ]

    def post(self, request):
        serializer = UserLogOutSerializer(
            data=request.data, context={'access_token': request.auth})
        serializer.is_valid(raise_exception=True)
        try:
            RefreshToken(serializer.validated_data['refresh']).blacklist()
        except TokenError as e:
            return error_response(f'Logout failed: {e}', 400)
        return success_response(message='Logged out')


# 管理端：患者列表 & 封禁/解封


class AdminPatientList(APIView):
    """管理员分页查看患者，支持 q（姓名/邮箱）与 suspended 过滤"""
    permission_classes = [IsAuthenticated, IsSystemAdmin]

    def get(self, request):
        patients = get_user_model().objects.filter(role='patient').order_by('-created_at', '-id')

        keyword = request.query_params.get('q')
        if keyword:
            patients = patients.filter(
                Q(first_name__icontains=keyword)
                | Q(last_name__icontains=keyword)
                | Q(email__icontains=keyword)
            )
        suspended = request.query_params.get('suspended')
        if suspended in ('true', 'false'):
            patients = patients.filter(is_suspended=suspended == 'true')

        page = int_param(request, 'page', 1)
        limit = int_param(request, 'limit', 10)
        total = patients.count()
        total_pages = math.ceil(total / limit)
        start = (page - 1) * limit

        return success_response({
            'patients': UserSerializer(patients[start:start + limit], many=True).data,
            'pagination': {
                'currentPage': page,
                'totalPages': total_pages,
                'totalPatients': total,
                'limit': limit,
                'hasNextPage': page < total_pages,
                'hasPrevPage': page > 1,
            },
        })


class AdminPatientSuspend(APIView):
    """管理员封禁/解封患者，封禁后无法登录"""
    permission_classes = [IsAuthenticated, IsSystemAdmin]

    def post(self, request, pk):
        patient = get_user_model().objects.filter(pk=pk, role='patient').first()
        if patient is None:
            return error_response('Patient not found', 404)
        serializer = UserSuspendSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        suspend = serializer.validated_data['suspend']
        patient.is_suspended = suspend
        patient.suspension_reason = (
            (serializer.validated_data.get('reason') or '').strip() or 'No reason provided' if suspend else ''
        )
        patient.save(update_fields=['is_suspended', 'suspension_reason', 'updated_at'])
        logger.info('Admin %s %s patient %s', request.user.id, 'suspended' if suspend else 'unsuspended', patient.id)
        return success_response(
            {'patient': UserSerializer(patient).data},
            'Patient suspended successfully' if suspend else 'Patient unsuspended successfully'
        )
