import django_filters

from .models import Task


class TaskFilter(django_filters.FilterSet):
    """
    Filter for the Task model. Accepts the camelCase query parameters the
    frontend sends; ``sprintId=null`` selects backlog tasks.
    """
    projectId = django_filters.NumberFilter(field_name='project_id')
    sprintId = django_filters.CharFilter(method='filter_by_sprint', label="Sprint id or 'null'")
    assigneeId = django_filters.NumberFilter(field_name='assignee_id')
    status = django_filters.ChoiceFilter(choices=Task.Status.choices)
    priority = django_filters.ChoiceFilter(choices=Task.Priority.choices)

    class Meta:
        model = Task
        fields = ['projectId', 'sprintId', 'assigneeId', 'status', 'priority']

    def filter_by_sprint(self, queryset, name, value):
        if value.lower() in ('null', 'none', 'backlog'):
            return queryset.filter(sprint__isnull=True)
        if not value.isdigit():
            return queryset.none()
        return queryset.filter(sprint_id=int(value))
