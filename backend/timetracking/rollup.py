"""
Time rollup: a task's ``actual_minutes`` derived from its closed time entries.

The value is always recomputed from the full set of closed entries, never
incremented, so replaying a stop or running the rollup twice gives the same
result.
"""

from django.db.models import Sum

from .models import TimeEntry


def total_closed_seconds(task_id) -> int:
    """Sum of ``duration`` over the task's closed entries."""
    total = TimeEntry.objects.filter(task_id=task_id).closed().aggregate(total=Sum('duration'))['total']
    return total or 0


def recompute_actual_minutes(task) -> int:
    """
    Store ``floor(total_closed_seconds / 60)`` on ``task`` and return it.
    """
    minutes = total_closed_seconds(task.pk) // 60
    if task.actual_minutes != minutes:
        task.actual_minutes = minutes
        task.save(update_fields=['actual_minutes', 'updated_at'])
    return minutes
