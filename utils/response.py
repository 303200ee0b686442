"""
统一响应格式工具

成功：{"success": true, ...}
失败：{"error": "<message>"}，HTTP状态码即真实错误码
"""
import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response

logger = logging.getLogger(__name__)

# DRF 默认文案统一替换为前端约定的短文案
DEFAULT_ERROR_MESSAGES = {
    exceptions.NotAuthenticated: 'Unauthorized',
    exceptions.AuthenticationFailed: 'Unauthorized',
    exceptions.PermissionDenied: 'Forbidden',
    exceptions.NotFound: 'Not found',
}


def success_response(data=None, message=None, code=200):
    """成功响应，data 中的键直接平铺到响应体"""
    body = {'success': True}
    if message:
        body['message'] = message
    if data:
        body.update(data)
    return Response(body, status=code)


def error_response(message='error', code=400, data=None):
    """错误响应"""
    body = {'error': message}
    if data:
        body.update(data)
    return Response(body, status=code)


def first_error_message(detail):
    """从DRF校验错误中提取第一条可读信息"""
    if isinstance(detail, dict):
        if not detail:
            return 'Invalid request'
        return first_error_message(next(iter(detail.values())))
    if isinstance(detail, (list, tuple)):
        if not detail:
            return 'Invalid request'
        return first_error_message(detail[0])
    return str(detail)


def _message_for(exc):
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()
    # 令牌缺失/无效一律返回 Unauthorized，不透出令牌校验细节
    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        return DEFAULT_ERROR_MESSAGES[exceptions.NotAuthenticated]
    for exc_class, message in DEFAULT_ERROR_MESSAGES.items():
        if isinstance(exc, exc_class):
            # 视图显式给出的文案优先
            if str(exc.detail) != str(exc.default_detail):
                return str(exc.detail)
            return message
    return first_error_message(exc.detail)


def custom_exception_handler(exc, context):
    """自定义异常处理器"""
    from rest_framework.views import exception_handler

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception('Unhandled error in %s', view.__class__.__name__ if view else 'view', exc_info=exc)
        return Response({'error': 'Internal server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    response.data = {'error': _message_for(exc)}
    return response
