# ==========================================
# apps/records/admin.py
# ==========================================

from django.contrib import admin

from .models import CoconutInput, LabourWage, Client
from .timestamps import normalize_timestamp


@admin.register(CoconutInput)
class CoconutInputAdmin(admin.ModelAdmin):
    """
    Admin interface for purchase inputs.

    Provides:
    - Listing with client, count and totals
    - Filtering by payment status
    - Search by client name
    """

    list_display = [
        'id',
        'get_date',
        'client_name',
        'count',
        'price_per_unit',
        'total_price',
        'payment_status',
    ]
    list_filter = ['payment_status']
    search_fields = ['id', 'client_name']
    ordering = ['-date']

    @admin.display(description='Date', ordering='date')
    def get_date(self, obj):
        return normalize_timestamp(obj.date)


@admin.register(LabourWage)
class LabourWageAdmin(admin.ModelAdmin):
    list_display = [
        'id',
        'get_date',
        'worker_name',
        'days',
        'rate_per_day',
        'total_wage',
    ]
    search_fields = ['id', 'worker_name']
    ordering = ['-date']

    @admin.display(description='Date', ordering='date')
    def get_date(self, obj):
        return normalize_timestamp(obj.date)


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ['name', 'id']
    search_fields = ['name']
    ordering = ['name']
