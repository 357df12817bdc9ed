import re

from rest_framework import serializers

from authentication.serializers import UserLiteSerializer
from project.serializers import ProjectLiteSerializer
from .models import Task, Sprint

HHMM = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')


class TaskSerializer(serializers.ModelSerializer):
    """
    Task representation used for reads and for create.
    Order is always assigned by the server.
    """
    projectId = serializers.IntegerField(source='project_id')
    sprintId = serializers.IntegerField(source='sprint_id', required=False, allow_null=True)
    milestoneId = serializers.IntegerField(source='milestone_id', required=False, allow_null=True)
    assigneeId = serializers.IntegerField(source='assignee_id', required=False, allow_null=True)
    assignee = UserLiteSerializer(read_only=True)
    storyPoints = serializers.IntegerField(source='story_points', required=False, allow_null=True, min_value=0)
    estimatedMinutes = serializers.IntegerField(
        source='estimated_minutes', required=False, allow_null=True, min_value=0
    )
    actualMinutes = serializers.IntegerField(source='actual_minutes', read_only=True)
    dueDate = serializers.DateTimeField(source='due_date', required=False, allow_null=True)
    startDate = serializers.DateTimeField(source='start_date', required=False, allow_null=True)
    startTime = serializers.CharField(source='start_time', required=False, allow_null=True, allow_blank=True)
    endTime = serializers.DateTimeField(source='end_time', required=False, allow_null=True)
    completedAt = serializers.DateTimeField(source='completed_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Task
        fields = [
            'id', 'title', 'description', 'status', 'priority', 'order',
            'projectId', 'sprintId', 'milestoneId', 'assigneeId', 'assignee',
            'storyPoints', 'estimatedMinutes', 'actualMinutes',
            'dueDate', 'startDate', 'startTime', 'endTime',
            'completedAt', 'createdAt', 'updatedAt',
        ]
        read_only_fields = ['order']

    def validate_startTime(self, value):
        if value and not HHMM.match(value):
            raise serializers.ValidationError("Use 24-hour HH:MM.")
        return value or None


class TaskUpdateSerializer(TaskSerializer):
    """Partial updates. Project, sprint and order change only through a move."""
    projectId = serializers.IntegerField(source='project_id', read_only=True)
    sprintId = serializers.IntegerField(source='sprint_id', read_only=True)


class BacklogTaskSerializer(TaskSerializer):
    project = ProjectLiteSerializer(read_only=True)

    class Meta(TaskSerializer.Meta):
        fields = TaskSerializer.Meta.fields + ['project']


class SprintSerializer(serializers.ModelSerializer):
    startDate = serializers.DateField(source='start_date')
    endDate = serializers.DateField(source='end_date')
    projectIds = serializers.ListField(
        child=serializers.IntegerField(), source='project_ids', write_only=True, required=False,
    )
    projects = ProjectLiteSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Sprint
        fields = [
            'id', 'name', 'description', 'goal', 'status', 'capacity',
            'startDate', 'endDate', 'projectIds', 'projects', 'createdAt',
        ]
        read_only_fields = ['status']

    def validate(self, attrs):
        if attrs['end_date'] < attrs['start_date']:
            raise serializers.ValidationError({'endDate': "End date cannot be before start date."})
        return attrs


class SprintStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Sprint.Status.choices)
