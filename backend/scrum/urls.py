from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import TaskViewSet, SprintViewSet, BacklogView, GlobalBacklogView

router = DefaultRouter(trailing_slash=False)
router.register(r'tasks', TaskViewSet, basename='task')
router.register(r'sprints', SprintViewSet, basename='sprint')

urlpatterns = [
    path('backlog', BacklogView.as_view(), name='backlog'),
    path('backlog/all', GlobalBacklogView.as_view(), name='backlog-all'),
    path('', include(router.urls)),
]
