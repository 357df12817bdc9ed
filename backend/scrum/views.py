from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.permissions import IsTeamOrAdmin, IsAdminUser
from core.exceptions import require_fields
from core.services import BaseService
from project.models import Project
from project.serializers import ProjectLiteSerializer
from .filters import TaskFilter
from .models import Task, Sprint
from .serializers import (
    TaskSerializer, TaskUpdateSerializer, BacklogTaskSerializer, SprintSerializer, SprintStatusSerializer,
)
from .services import TaskService, TaskMovementService, SprintService, parse_optional_id


class TaskViewSet(viewsets.ModelViewSet):
    """
    Tasks of all projects. Writes go through ``TaskService`` so each
    partition keeps a dense order; ``POST /tasks/move`` relocates a task.
    """
    serializer_class = TaskSerializer
    permission_classes = [IsTeamOrAdmin]
    filterset_class = TaskFilter
    lookup_value_regex = r'\d+'
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        return Task.objects.select_related('assignee', 'project', 'sprint', 'milestone')

    def create(self, request, *args, **kwargs):
        serializer = TaskSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        task = TaskService(request.user).create_task(serializer.validated_data)
        return Response(TaskSerializer(task).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        serializer = TaskUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        task = TaskService(request.user).update_task(kwargs['pk'], serializer.validated_data)
        return Response(TaskSerializer(task).data)

    def destroy(self, request, *args, **kwargs):
        TaskService(request.user).delete_task(kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['post'], url_path='move')
    def move(self, request):
        """
        Move a task to ``destinationIndex`` of the sprint (or backlog, when
        ``destinationSprintId`` is null) within the task's project.
        """
        data = request.data
        task = TaskMovementService(request.user).move_task(
            task_id=data.get('taskId'),
            destination_sprint_id=data.get('destinationSprintId'),
            destination_index=data.get('destinationIndex'),
            source_sprint_id=data.get('sourceSprintId'),
        )
        return Response(TaskSerializer(task).data)


class BacklogView(APIView):
    """Backlog partition of one project, ordered by ``order``."""
    permission_classes = [IsTeamOrAdmin]

    def get(self, request):
        require_fields(request.query_params, 'projectId')
        project_id = parse_optional_id(request.query_params.get('projectId'), 'projectId')
        project = BaseService(request.user).get_or_404(Project.objects.all(), 'Project', pk=project_id)
        tasks = Task.objects.partition(project.pk, None).select_related('assignee')
        return Response(TaskSerializer(tasks, many=True).data)


class GlobalBacklogView(APIView):
    """Unscheduled tasks of every project, by priority then newest first."""
    permission_classes = [IsTeamOrAdmin]

    def get(self, request):
        tasks = Task.objects.global_backlog().select_related('assignee', 'project')
        return Response(BacklogTaskSerializer(tasks, many=True).data)


class SprintViewSet(mixins.ListModelMixin,
                    mixins.RetrieveModelMixin,
                    mixins.CreateModelMixin,
                    viewsets.GenericViewSet):
    """
    Sprints and their linked projects. Team members read; admins create
    sprints and change their status.
    """
    serializer_class = SprintSerializer
    permission_classes = [IsTeamOrAdmin]
    queryset = Sprint.objects.prefetch_related('projects')
    lookup_value_regex = r'\d+'

    def get_permissions(self):
        if self.action in ('create', 'set_status'):
            return [IsAdminUser()]
        return super().get_permissions()

    def create(self, request, *args, **kwargs):
        serializer = SprintSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        sprint = SprintService(request.user).create_sprint(serializer.validated_data)
        return Response(SprintSerializer(sprint).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['patch'], url_path='status')
    def set_status(self, request, pk=None):
        serializer = SprintStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        sprint = SprintService(request.user).update_status(pk, serializer.validated_data['status'])
        return Response(SprintSerializer(sprint).data)

    @action(detail=True, methods=['get'])
    def backlog(self, request, pk=None):
        """Backlog tasks of every project linked to this sprint."""
        sprint = self.get_object()
        project_ids = list(sprint.projects.values_list('id', flat=True))
        tasks = Task.objects.backlog(project_ids).select_related('assignee')
        return Response(TaskSerializer(tasks, many=True).data)

    @action(detail=True, methods=['get'])
    def projects(self, request, pk=None):
        sprint = self.get_object()
        return Response(ProjectLiteSerializer(sprint.projects.all(), many=True).data)

    @action(detail=True, methods=['get'])
    def tasks(self, request, pk=None):
        """Tasks planned into this sprint, optionally for one project."""
        sprint = self.get_object()
        tasks = Task.objects.filter(sprint=sprint).select_related('assignee')
        project_id = request.query_params.get('projectId')
        if project_id:
            tasks = tasks.filter(project_id=parse_optional_id(project_id, 'projectId'))
        else:
            tasks = tasks.order_by('project_id', 'order', 'id')
        return Response(TaskSerializer(tasks, many=True).data)

