from django.contrib import admin
from django.db import transaction

from scrum.models import Task
from .models import TimeEntry
from .rollup import recompute_actual_minutes


@admin.register(TimeEntry)
class TimeEntryAdmin(admin.ModelAdmin):
    """
    Entries are opened and closed by the timer endpoints only. The admin can
    edit descriptions and delete entries; deleting re-runs the rollup of the
    affected tasks.
    """
    list_display = ['task', 'user', 'start_time', 'end_time', 'duration']
    list_filter = ['user']
    search_fields = ['task__title', 'description']
    readonly_fields = ['task', 'user', 'start_time', 'end_time', 'duration', 'created_at']

    def has_add_permission(self, request):
        return False

    def delete_model(self, request, obj):
        self.delete_queryset(request, TimeEntry.objects.filter(pk=obj.pk))

    def delete_queryset(self, request, queryset):
        with transaction.atomic():
            task_ids = set(queryset.values_list('task_id', flat=True))
            queryset.delete()
            for task in Task.objects.select_for_update().filter(pk__in=task_ids):
                recompute_actual_minutes(task)
