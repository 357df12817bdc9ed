import datetime

import pytest
from django.contrib import admin
from django.test import RequestFactory

from scrum.models import Task
from timetracking.admin import TimeEntryAdmin
from timetracking.models import TimeEntry
from timetracking.services import TimerService

UTC = datetime.timezone.utc


@pytest.fixture
def entry_admin():
    return TimeEntryAdmin(TimeEntry, admin.site)


@pytest.fixture
def admin_request(admin_user):
    request = RequestFactory().get('/admin/timetracking/timeentry/')
    request.user = admin_user
    return request


@pytest.fixture
def task(project):
    return Task.objects.create(title='Payment webhook', project=project)


def closed_entry(task, user, start_hour, minutes):
    service = TimerService(user)
    start = datetime.datetime(2025, 4, 2, start_hour, tzinfo=UTC)
    return service.log_manual_entry(task.pk, user.pk, start, start + datetime.timedelta(minutes=minutes))


@pytest.mark.django_db
class TestTimeEntryAdmin:

    def test_timing_fields_cannot_be_edited(self, entry_admin, admin_request, task, member):
        entry = closed_entry(task, member, 9, 30)

        readonly = set(entry_admin.get_readonly_fields(admin_request, entry))

        assert {'task', 'user', 'start_time', 'end_time', 'duration'} <= readonly
        form = entry_admin.get_form(admin_request, entry)
        assert list(form.base_fields) == ['description']

    def test_entries_cannot_be_added(self, entry_admin, admin_request):
        assert entry_admin.has_add_permission(admin_request) is False

    def test_delete_recomputes_actual_minutes(self, entry_admin, admin_request, task, member):
        first = closed_entry(task, member, 9, 30)
        closed_entry(task, member, 11, 45)
        task.refresh_from_db()
        assert task.actual_minutes == 75

        entry_admin.delete_model(admin_request, first)

        task.refresh_from_db()
        assert task.actual_minutes == 45

    def test_bulk_delete_recomputes_every_task(self, entry_admin, admin_request, task, project, member):
        other = Task.objects.create(title='Receipts', project=project, order=1)
        closed_entry(task, member, 9, 30)
        closed_entry(other, member, 10, 20)

        entry_admin.delete_queryset(admin_request, TimeEntry.objects.all())

        assert list(Task.objects.filter(pk__in=[task.pk, other.pk]).values_list('actual_minutes', flat=True)) == [0, 0]
