from django.contrib import admin
from .models import Question


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'email', 'specialist', 'status', 'replied_at', 'created_at']
    list_filter = ['status', 'specialist']
    search_fields = ['name', 'email', 'question']
