from django.contrib import admin

from .models import Sprint, SprintProject, Task
from .services import TaskService


class SprintProjectInline(admin.TabularInline):
    model = SprintProject
    extra = 0


@admin.register(Sprint)
class SprintAdmin(admin.ModelAdmin):
    list_display = ['name', 'status', 'start_date', 'end_date', 'capacity']
    list_filter = ['status']
    search_fields = ['name', 'goal']
    inlines = [SprintProjectInline]


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ['title', 'project', 'sprint', 'order', 'status', 'assignee']
    list_filter = ['status', 'priority', 'project']
    search_fields = ['title', 'description']
    readonly_fields = ['order', 'completed_at', 'actual_minutes']

    def get_readonly_fields(self, request, obj=None):
        # Partition changes go through the move endpoint.
        if obj is not None:
            return self.readonly_fields + ['project', 'sprint']
        return self.readonly_fields

    def save_model(self, request, obj, form, change):
        if change:
            super().save_model(request, obj, form, change)
        else:
            TaskService(request.user).append_task(obj)

    def delete_model(self, request, obj):
        TaskService(request.user).delete_task(obj.pk)

    def delete_queryset(self, request, queryset):
        service = TaskService(request.user)
        for task_id in list(queryset.values_list('pk', flat=True)):
            service.delete_task(task_id)
