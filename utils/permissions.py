"""
自定义权限类
"""
from rest_framework import permissions


def request_role(request):
    """
    获取当前请求的角色。
    优先读取访问令牌中的 role 声明（无需查库），否则回退到用户模型字段。
    """
    token = getattr(request, 'auth', None)
    if token is not None and hasattr(token, 'get'):
        role = token.get('role')
        if role:
            return role
    return getattr(request.user, 'role', None)


class IsDoctor(permissions.BasePermission):
    """检查是否为医生"""

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request_role(request) == 'doctor')


class IsPatient(permissions.BasePermission):
    """检查是否为患者"""

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request_role(request) == 'patient')


class IsSystemAdmin(permissions.BasePermission):
    """仅允许管理员访问"""

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request_role(request) == 'admin')
