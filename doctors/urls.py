"""
医生URL配置
"""
from django.urls import path
from .views import (
    DoctorList,
    DoctorDetail,
    DoctorAvailability,
    DoctorReviews,
    UpdateDoctorProfile,
    DoctorVerify,
    DoctorSuspend,
    AdminDoctorList,
    AdminDoctorDelete,
)

urlpatterns = [
    path('', DoctorList.as_view(), name='doctor-list'),  # 医生列表 GET /doctors/
    path('me/', UpdateDoctorProfile.as_view(), name='doctor-me'),  # 医生查看/更新执业信息 GET|PATCH /doctors/me/
    path('<int:pk>/', DoctorDetail.as_view(), name='doctor-detail'),  # 医生信息 GET /doctors/<id>/
    path('<int:pk>/availability/', DoctorAvailability.as_view(), name='doctor-availability'),  # 可预约时段 GET ?date=YYYY-MM-DD
    path('<int:pk>/reviews/', DoctorReviews.as_view(), name='doctor-reviews'),  # 评价列表 GET ?page=&limit=
    # 管理端
    path('admin/', AdminDoctorList.as_view(), name='admin-doctor-list'),  # 全部医生 GET ?q=&specialization=&verified=&suspended=
    path('admin/<int:pk>/', AdminDoctorDelete.as_view(), name='admin-doctor-delete'),  # 删除医生 DELETE
    path('<int:pk>/verify/', DoctorVerify.as_view(), name='doctor-verify'),  # 审核通过 POST
    path('<int:pk>/suspend/', DoctorSuspend.as_view(), name='doctor-suspend'),  # 封禁/解封 POST {suspend, reason}
]
