"""
URL configuration for doctar project.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView

urlpatterns = [
    path('admin/', admin.site.urls),

    # API文档路由
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    # API路由
    path('api/auth/', include('user.urls')),            # 用户认证模块
    path('api/doctors/', include('doctors.urls')),      # 医生模块
    path('api/bookings/', include('bookings.urls')),    # 预约模块
    path('api/reviews/', include('reviews.urls')),      # 评价模块
    path('api/questions/', include('questions.urls')),  # 问答模块
    path('api/doctor/', include('stats.urls')),         # 医生端统计
]
