from django.contrib import admin
from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ['id', 'patient', 'doctor', 'slot_start', 'slot_end', 'booking_type', 'visit_type',
                    'status', 'created_at']
    list_filter = ['status', 'booking_type', 'visit_type', 'date']
    search_fields = ['patient__email', 'patient__first_name', 'patient__last_name', 'notes']
