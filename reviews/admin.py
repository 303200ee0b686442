from django.contrib import admin
from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ['id', 'doctor', 'patient_name', 'rating', 'created_at']
    list_filter = ['rating', 'created_at']
    search_fields = ['patient_name', 'email', 'comment']
