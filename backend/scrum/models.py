"""
Sprints, the sprint/project link table and tasks.

Tasks are kept in partitions keyed by (project, sprint); a null sprint is the
project's backlog. Within a partition ``order`` is a dense zero-based
sequence; every write that changes it goes through ``scrum.services``.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone

from project.models import Project, Milestone


class Sprint(models.Model):
    class Status(models.TextChoices):
        PLANNING = 'PLANNING', 'Planning'
        ACTIVE = 'ACTIVE', 'Active'
        COMPLETED = 'COMPLETED', 'Completed'
        CANCELLED = 'CANCELLED', 'Cancelled'

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    goal = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PLANNING)
    start_date = models.DateField()
    end_date = models.DateField()
    capacity = models.PositiveIntegerField(blank=True, null=True, help_text="Story points the team can take")
    projects = models.ManyToManyField(Project, through='SprintProject', related_name='sprints', blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-start_date', '-id']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F('start_date')),
                name='sprint_end_not_before_start',
            ),
        ]

    def __str__(self):
        return self.name


class SprintProject(models.Model):
    sprint = models.ForeignKey(Sprint, on_delete=models.CASCADE, related_name='sprint_projects')
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='sprint_links')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['sprint', 'project'], name='uniq_sprint_project'),
        ]

    def __str__(self):
        return f"{self.sprint} <-> {self.project}"


class TaskQuerySet(models.QuerySet):

    def partition(self, project_id, sprint_id=None):
        """Tasks of one (project, sprint) partition in display order."""
        return self.filter(project_id=project_id, sprint_id=sprint_id).order_by('order', 'id')

    def backlog(self, project_ids):
        """Unscheduled tasks of the given projects."""
        return self.filter(project_id__in=project_ids, sprint__isnull=True).order_by('order', 'project_id', 'id')

    def global_backlog(self):
        """Every unscheduled task, most urgent first, then newest first."""
        rank = models.Case(
            *(models.When(priority=value, then=models.Value(weight)) for weight, value in enumerate(PRIORITY_RANK)),
            default=models.Value(0),
            output_field=models.IntegerField(),
        )
        return self.filter(sprint__isnull=True).annotate(priority_rank=rank).order_by(
            '-priority_rank', '-created_at', '-id'
        )

    def completed(self):
        return self.filter(status=Task.Status.COMPLETED)


PRIORITY_RANK = ('LOW', 'MEDIUM', 'HIGH', 'URGENT')


class Task(models.Model):
    class Status(models.TextChoices):
        TODO = 'TODO', 'To do'
        IN_PROGRESS = 'IN_PROGRESS', 'In progress'
        IN_REVIEW = 'IN_REVIEW', 'In review'
        COMPLETED = 'COMPLETED', 'Completed'

    class Priority(models.TextChoices):
        LOW = 'LOW', 'Low'
        MEDIUM = 'MEDIUM', 'Medium'
        HIGH = 'HIGH', 'High'
        URGENT = 'URGENT', 'Urgent'

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='tasks')
    sprint = models.ForeignKey(Sprint, on_delete=models.PROTECT, null=True, blank=True, related_name='tasks')
    milestone = models.ForeignKey(Milestone, on_delete=models.SET_NULL, null=True, blank=True, related_name='tasks')
    assignee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_tasks',
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.TODO, db_index=True)
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.MEDIUM)
    order = models.PositiveIntegerField(default=0)
    story_points = models.PositiveIntegerField(blank=True, null=True)
    estimated_minutes = models.PositiveIntegerField(blank=True, null=True)
    actual_minutes = models.PositiveIntegerField(blank=True, null=True)
    due_date = models.DateTimeField(blank=True, null=True)
    start_date = models.DateTimeField(blank=True, null=True)
    start_time = models.CharField(max_length=5, blank=True, null=True, help_text="Planned start, HH:MM")
    end_time = models.DateTimeField(blank=True, null=True)
    completed_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TaskQuerySet.as_manager()

    class Meta:
        ordering = ['project_id', 'sprint_id', 'order', 'id']
        indexes = [
            models.Index(fields=['project', 'sprint', 'order'], name='task_partition_order_idx'),
            models.Index(fields=['assignee', 'status'], name='task_assignee_status_idx'),
        ]

    def __str__(self):
        return self.title

    @property
    def partition_key(self):
        return (self.project_id, self.sprint_id)

    def sync_completed_at(self):
        """Stamp completion when a task becomes COMPLETED; clear it when it leaves."""
        if self.status == self.Status.COMPLETED:
            if self.completed_at is None:
                self.completed_at = timezone.now()
        else:
            self.completed_at = None

    def save(self, *args, **kwargs):
        update_fields = kwargs.get('update_fields')
        if update_fields is None or 'status' in update_fields:
            self.sync_completed_at()
            if update_fields is not None:
                kwargs['update_fields'] = {*update_fields, 'completed_at'}
        super().save(*args, **kwargs)
