from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.permissions import IsTeamOrAdmin
from core.exceptions import Forbidden
from scrum.serializers import TaskSerializer
from scrum.services import parse_optional_id
from .serializers import TimeEntrySerializer, ManualTimeEntrySerializer, UserTimeEntrySerializer
from .services import TimerService


def ensure_can_track_for(request, user_id):
    """Team members record time only for themselves; admins for anyone."""
    if user_id is None or request.user.is_admin:
        return
    if str(user_id) != str(request.user.pk):
        raise Forbidden("You can only track time for yourself.")


class StartTimerView(APIView):
    permission_classes = [IsTeamOrAdmin]

    def post(self, request, task_id):
        user_id = request.data.get('userId')
        ensure_can_track_for(request, user_id)
        entry = TimerService(request.user).start(task_id, user_id)
        return Response(TimeEntrySerializer(entry).data, status=status.HTTP_201_CREATED)


class PauseTimerView(APIView):
    """Close a running entry. Pause and stop are the same transition."""
    permission_classes = [IsTeamOrAdmin]

    def post(self, request, task_id):
        owner_id = None if request.user.is_admin else request.user.pk
        entry, task = TimerService(request.user).stop(task_id, request.data.get('entryId'), owner_id=owner_id)
        return Response({
            'timeEntry': TimeEntrySerializer(entry).data,
            'task': TaskSerializer(task).data,
        })


class ActiveTimerView(APIView):
    permission_classes = [IsTeamOrAdmin]

    def get(self, request, task_id):
        user_id = parse_optional_id(request.query_params.get('userId'), 'userId')
        entry = TimerService(request.user).active_entry(task_id, user_id=user_id)
        return Response({'activeEntry': TimeEntrySerializer(entry).data if entry else None})


class TimeEntryListView(APIView):
    """
    GET: every entry of the task, newest first.
    POST: log a closed entry for time worked away from the timer.
    """
    permission_classes = [IsTeamOrAdmin]

    def get(self, request, task_id):
        entries = TimerService(request.user).entries_for_task(task_id)
        return Response(TimeEntrySerializer(entries, many=True).data)

    def post(self, request, task_id):
        serializer = ManualTimeEntrySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user_id = data.get('userId', request.user.pk)
        ensure_can_track_for(request, user_id)
        entry = TimerService(request.user).log_manual_entry(
            task_id,
            user_id,
            data['startTime'],
            data['endTime'],
            description=data.get('description'),
        )
        return Response(TimeEntrySerializer(entry).data, status=status.HTTP_201_CREATED)


class UserTimeEntryListView(APIView):
    """The caller's own entries, optionally for one task or only running ones."""
    permission_classes = [IsTeamOrAdmin]

    def get(self, request):
        task_id = parse_optional_id(request.query_params.get('taskId'), 'taskId')
        active = request.query_params.get('active', '').lower() in ('true', '1')
        entries = TimerService(request.user).entries_for_user(request.user.pk, task_id=task_id, active=active)
        return Response(UserTimeEntrySerializer(entries, many=True).data)
