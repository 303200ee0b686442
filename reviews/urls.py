"""
评价URL配置
"""
from django.urls import path
from .views import ReviewView

urlpatterns = [
    path('', ReviewView.as_view(), name='review'),  # POST 提交评价 / GET ?doctorId= 评价列表
]
