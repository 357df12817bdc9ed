from django.conf import settings
from django.db import models

from scrum.models import Task


class TimeEntryQuerySet(models.QuerySet):

    def open(self):
        return self.filter(end_time__isnull=True)

    def closed(self):
        return self.filter(end_time__isnull=False)


class TimeEntry(models.Model):
    """
    One timer run of a user on a task. An entry with no ``end_time`` is a
    running timer; ``duration`` (whole seconds) is written once, when the
    timer stops.
    """
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='time_entries')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='time_entries')
    start_time = models.DateTimeField()
    end_time = models.DateTimeField(null=True, blank=True)
    duration = models.PositiveIntegerField(null=True, blank=True, help_text="Seconds, set when the timer stops")
    description = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TimeEntryQuerySet.as_manager()

    class Meta:
        ordering = ['-start_time', '-id']
        verbose_name_plural = 'time entries'
        constraints = [
            models.UniqueConstraint(
                fields=['task', 'user'],
                condition=models.Q(end_time__isnull=True),
                name='uniq_open_time_entry_per_task_user',
            ),
            models.CheckConstraint(
                condition=models.Q(duration__isnull=True) | models.Q(duration__gte=0),
                name='time_entry_duration_non_negative',
            ),
        ]
        indexes = [
            models.Index(fields=['task', 'end_time'], name='time_entry_task_open_idx'),
        ]

    def __str__(self):
        return f"{self.user} on {self.task} from {self.start_time}"

    @property
    def is_open(self):
        return self.end_time is None
