"""
预约URL配置
"""
from django.urls import path
from .views import BookingView

urlpatterns = [
    # POST /bookings/ - 患者提交预约
    # GET /bookings/ - 预约列表 ?doctorId=&patientId=&status=&date=YYYY-MM-DD
    # PATCH /bookings/ - 医生处理预约 {bookingId, action: accept|reject|cancel}
    path('', BookingView.as_view(), name='booking'),
]
