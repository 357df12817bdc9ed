from rest_framework import viewsets

from authentication.permissions import IsAdminOrReadOnly
from .models import Project
from .serializers import ProjectSerializer


class ProjectViewSet(viewsets.ModelViewSet):
    """
    API endpoint that allows projects to be viewed or edited.
    Team members read, admins write.
    """
    serializer_class = ProjectSerializer
    permission_classes = [IsAdminOrReadOnly]
    queryset = Project.objects.prefetch_related('milestones')
    lookup_value_regex = r'\d+'

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)
