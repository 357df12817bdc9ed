from django.contrib import admin

from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'first_name', 'last_name', 'role', 'commissions_access', 'is_active', 'is_superuser')
    list_filter = ('role', 'commissions_access', 'is_active', 'is_superuser')
    search_fields = ('first_name', 'last_name', 'email')
    ordering = ('email',)
