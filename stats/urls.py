"""
统计数据URL配置
"""
from django.urls import path
from .views import DoctorStatsView

urlpatterns = [
    path('stats/', DoctorStatsView.as_view(), name='doctor-stats'),  # 医生工作台统计 GET /doctor/stats/
]
