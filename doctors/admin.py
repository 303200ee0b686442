from django.contrib import admin
from .models import Doctor


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'specialization', 'clinic_name', 'city', 'rating', 'review_count',
                    'is_admin_verified', 'is_suspended', 'created_at']
    list_filter = ['specialization', 'is_admin_verified', 'is_suspended', 'created_at']
    search_fields = ['user__first_name', 'user__last_name', 'user__email', 'clinic_name', 'specialization']
    readonly_fields = ['rating', 'review_count', 'created_at', 'updated_at']
