from django.urls import path

from .views import StartTimerView, PauseTimerView, ActiveTimerView, TimeEntryListView, UserTimeEntryListView

urlpatterns = [
    path('tasks/<int:task_id>/start-timer', StartTimerView.as_view(), name='task-start-timer'),
    path('tasks/<int:task_id>/pause-timer', PauseTimerView.as_view(), name='task-pause-timer'),
    path('tasks/<int:task_id>/active-timer', ActiveTimerView.as_view(), name='task-active-timer'),
    path('tasks/<int:task_id>/time-entries', TimeEntryListView.as_view(), name='task-time-entries'),
    path('time-entries', UserTimeEntryListView.as_view(), name='time-entry-list'),
]
