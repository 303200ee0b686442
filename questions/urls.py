"""
咨询问题URL配置
"""
from django.urls import path
from .views import AskQuestion, AdminQuestionList, AdminReplyQuestion

urlpatterns = [
    path('', AskQuestion.as_view(), name='question-ask'),  # 患者提问 POST /questions/
    path('admin/', AdminQuestionList.as_view(), name='question-admin-list'),  # 管理端列表 GET ?status=&specialist=
    path('admin/<int:pk>/reply/', AdminReplyQuestion.as_view(), name='question-admin-reply'),  # 管理端回复 PATCH
]
