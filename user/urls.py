from django.urls import path
from .views import (
    CreateUser,
    UpdateRetrieveUser,
    Logout,
    LoginView,
    RefreshTokenView,
    AdminPatientList,
    AdminPatientSuspend,
)

urlpatterns = [
    path('register/', CreateUser.as_view(), name='register'),           # 用户注册（患者/医生）
    path('login/', LoginView.as_view(), name='login'),                  # 用户登录
    path('refresh/', RefreshTokenView.as_view(), name='refresh'),       # 刷新Token
    path('logout/', Logout.as_view(), name='logout'),                   # 用户登出
    path('me/', UpdateRetrieveUser.as_view(), name='me'),               # 获取/更新当前用户信息
    # 管理端
    path('admin/patients/', AdminPatientList.as_view(), name='admin-patient-list'),  # 患者列表 GET ?page=&limit=&q=&suspended=
    path('admin/patients/<int:pk>/suspend/', AdminPatientSuspend.as_view(), name='admin-patient-suspend'),  # 封禁/解封 POST {suspend, reason}
]
