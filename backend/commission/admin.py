from django.contrib import admin

from .models import CompensationProfile


@admin.register(CompensationProfile)
class CompensationProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'has_fixed_salary', 'fixed_salary', 'hour_rate', 'effective_from', 'updated_at']
    list_filter = ['has_fixed_salary']
    search_fields = ['user__email', 'user__first_name', 'user__last_name']
    readonly_fields = ['updated_by', 'created_at', 'updated_at']
