from dataclasses import asdict

from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.models import User
from core.services import BaseService
from .calculator import parse_date_range, commission_for_user, commission_task_breakdown
from .permissions import HasCommissionPermission, commission_scope
from .serializers import CompensationProfileSerializer, CommissionSummarySerializer, CommissionListItemSerializer
from .services import CompensationService


def date_range_from(request):
    return parse_date_range(request.query_params.get('from'), request.query_params.get('to'))


class CommissionListView(APIView):
    """
    Commission summaries of every user the caller may see, for all time or
    for the ``from``/``to`` day range.
    """
    permission_classes = [HasCommissionPermission]

    def get(self, request):
        date_range = date_range_from(request)
        rows = []
        for user in commission_scope(request.user).order_by('email'):
            _, _, summary = commission_for_user(user, date_range)
            rows.append({'user': user, **asdict(summary)})
        return Response(CommissionListItemSerializer(rows, many=True).data)


class CommissionDetailView(APIView):
    """
    GET: profile, summary and the tasks behind it for one user.
    PUT: replace that user's compensation profile.
    """
    permission_classes = [HasCommissionPermission]

    def get(self, request, user_id):
        user = BaseService(request.user).get_or_404(User.objects.all(), 'User', pk=user_id)
        date_range = date_range_from(request)
        profile, tasks, summary = commission_for_user(user, date_range)
        return Response({
            'profile': CompensationProfileSerializer(profile).data,
            'summary': CommissionSummarySerializer(summary).data,
            'tasks': commission_task_breakdown(tasks, date_range),
        })

    def put(self, request, user_id):
        serializer = CompensationProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = CompensationService(request.user).upsert_profile(user_id, serializer.validated_data)
        _, _, summary = commission_for_user(profile.user)
        return Response({
            'profile': CompensationProfileSerializer(profile).data,
            'summary': CommissionSummarySerializer(summary).data,
        })
