from rest_framework import serializers

from .models import Project, Milestone


class MilestoneSerializer(serializers.ModelSerializer):
    dueDate = serializers.DateField(source='due_date', required=False, allow_null=True)

    class Meta:
        model = Milestone
        fields = ['id', 'name', 'description', 'dueDate', 'order']


class ProjectSerializer(serializers.ModelSerializer):
    """
    Serializer for the Project model.
    """
    createdBy = serializers.PrimaryKeyRelatedField(source='created_by', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    milestones = MilestoneSerializer(many=True, read_only=True)

    class Meta:
        model = Project
        fields = [
            'id', 'name', 'description', 'status',
            'createdBy', 'createdAt', 'updatedAt', 'milestones',
        ]


class ProjectLiteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = ['id', 'name']
        read_only_fields = fields
