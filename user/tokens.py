"""
JWT 令牌：在标准声明之外写入 role / email，供无状态鉴权直接读取
"""
from rest_framework_simplejwt.tokens import RefreshToken


class RoleRefreshToken(RefreshToken):
    """带角色声明的 Refresh Token，派生的 Access Token 会继承这些声明"""

    @classmethod
    def for_user(cls, user):
        token = super().for_user(user)
        token['role'] = user.role
        token['email'] = user.email
        return token
