from rest_framework import serializers

from authentication.serializers import UserLiteSerializer
from .models import TimeEntry


class TimeEntrySerializer(serializers.ModelSerializer):
    taskId = serializers.IntegerField(source='task_id', read_only=True)
    userId = serializers.IntegerField(source='user_id', read_only=True)
    user = UserLiteSerializer(read_only=True)
    startTime = serializers.DateTimeField(source='start_time', read_only=True)
    endTime = serializers.DateTimeField(source='end_time', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = TimeEntry
        fields = ['id', 'taskId', 'userId', 'user', 'startTime', 'endTime', 'duration', 'description', 'createdAt']
        read_only_fields = fields


class ManualTimeEntrySerializer(serializers.Serializer):
    """Body of ``POST /tasks/<id>/time-entries``; userId defaults to the caller."""
    userId = serializers.IntegerField(required=False)
    startTime = serializers.DateTimeField()
    endTime = serializers.DateTimeField()
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs):
        if attrs['endTime'] < attrs['startTime']:
            raise serializers.ValidationError({'endTime': "Must not be before startTime."})
        return attrs


class UserTimeEntrySerializer(TimeEntrySerializer):
    """An entry with the task and project it was recorded against."""
    taskTitle = serializers.CharField(source='task.title', read_only=True)
    projectName = serializers.CharField(source='task.project.name', read_only=True)

    class Meta(TimeEntrySerializer.Meta):
        fields = TimeEntrySerializer.Meta.fields + ['taskTitle', 'projectName']
        read_only_fields = fields
