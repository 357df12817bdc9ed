import datetime

import pytest
from django.db import IntegrityError, transaction

from core.exceptions import (
    ActiveTimerExists, InvalidTimerState, DataIntegrityError, ValidationError, NotFound, Forbidden,
)
from scrum.models import Task
from timetracking.models import TimeEntry
from timetracking.rollup import recompute_actual_minutes, total_closed_seconds
from timetracking.services import TimerService, elapsed_seconds

UTC = datetime.timezone.utc


def at(hour, minute=0, second=0):
    return datetime.datetime(2025, 4, 1, hour, minute, second, tzinfo=UTC)


@pytest.fixture
def task(project):
    return Task.objects.create(title='Checkout flow', project=project, estimated_minutes=120)


@pytest.fixture
def service(member):
    return TimerService(member)


@pytest.mark.django_db
class TestStart:

    def test_start_opens_entry_without_touching_status(self, service, task, member):
        entry = service.start(task.pk, member.pk)

        assert entry.end_time is None
        assert entry.duration is None
        task.refresh_from_db()
        assert task.status == Task.Status.TODO

    def test_second_start_for_same_pair_is_refused(self, service, task, member):
        service.start(task.pk, member.pk)

        with pytest.raises(ActiveTimerExists):
            service.start(task.pk, member.pk)

        assert TimeEntry.objects.open().filter(task=task, user=member).count() == 1

    def test_other_user_can_time_same_task(self, service, task, member, admin_user):
        service.start(task.pk, member.pk)
        service.start(task.pk, admin_user.pk)
        assert TimeEntry.objects.open().filter(task=task).count() == 2

    def test_start_after_stop_is_allowed(self, service, task, member):
        entry = service.start(task.pk, member.pk)
        service.stop(task.pk, entry.pk)
        assert service.start(task.pk, member.pk).pk != entry.pk

    def test_user_id_required(self, service, task):
        with pytest.raises(ValidationError) as excinfo:
            service.start(task.pk, None)
        assert excinfo.value.details == {'userId': 'This field is required.'}

    def test_missing_task_or_user(self, service, task, member):
        with pytest.raises(NotFound):
            service.start(4321, member.pk)
        with pytest.raises(NotFound):
            service.start(task.pk, 4321)

    def test_storage_rejects_second_open_entry(self, task, member):
        TimeEntry.objects.create(task=task, user=member, start_time=at(9))
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                TimeEntry.objects.create(task=task, user=member, start_time=at(10))


@pytest.mark.django_db
class TestStop:

    def test_thirty_minute_entry(self, service, task, member):
        entry = TimeEntry.objects.create(task=task, user=member, start_time=at(10))

        entry, task = service.stop(task.pk, entry.pk, at=at(10, 30))

        assert entry.end_time == at(10, 30)
        assert entry.duration == 1800
        assert task.actual_minutes == 30

    def test_duration_is_floored(self, service, task, member):
        entry = TimeEntry.objects.create(task=task, user=member, start_time=at(10))
        entry, task = service.stop(task.pk, entry.pk, at=at(10, 1, 59) + datetime.timedelta(milliseconds=999))
        assert entry.duration == 119
        assert task.actual_minutes == 1

    def test_actual_minutes_sums_all_closed_entries(self, service, task, member, admin_user):
        first = TimeEntry.objects.create(task=task, user=member, start_time=at(9))
        second = TimeEntry.objects.create(task=task, user=admin_user, start_time=at(9, 10))
        TimeEntry.objects.create(task=task, user=member, start_time=at(8), end_time=at(8, 0, 50), duration=50)

        _, task_after_first = service.stop(task.pk, first.pk, at=at(9, 20, 30))
        assert task_after_first.actual_minutes == (1230 + 50) // 60

        _, task_after_second = service.stop(task.pk, second.pk, at=at(9, 40))
        assert task_after_second.actual_minutes == (1230 + 50 + 1800) // 60
        assert task_after_second.actual_minutes >= task_after_first.actual_minutes

    def test_double_stop_is_refused(self, service, task, member):
        entry = TimeEntry.objects.create(task=task, user=member, start_time=at(10))
        service.stop(task.pk, entry.pk, at=at(10, 5))

        with pytest.raises(InvalidTimerState):
            service.stop(task.pk, entry.pk, at=at(10, 50))

        entry.refresh_from_db()
        assert entry.end_time == at(10, 5)
        assert entry.duration == 300

    def test_entry_of_another_task(self, service, task, project, member):
        other = Task.objects.create(title='Other', project=project, order=1)
        entry = TimeEntry.objects.create(task=other, user=member, start_time=at(10))
        with pytest.raises(InvalidTimerState):
            service.stop(task.pk, entry.pk)

    def test_missing_entry_id(self, service, task):
        with pytest.raises(ValidationError):
            service.stop(task.pk, None)
        with pytest.raises(InvalidTimerState):
            service.stop(task.pk, 999)

    def test_owner_check_leaves_entry_open(self, service, task, member, admin_user):
        entry = TimeEntry.objects.create(task=task, user=admin_user, start_time=at(10))

        with pytest.raises(Forbidden):
            service.stop(task.pk, entry.pk, at=at(10, 30), owner_id=member.pk)

        entry.refresh_from_db()
        assert entry.is_open
        closed, _ = service.stop(task.pk, entry.pk, at=at(10, 30), owner_id=admin_user.pk)
        assert closed.duration == 1800

    def test_stop_before_start_writes_nothing(self, service, task, member):
        entry = TimeEntry.objects.create(task=task, user=member, start_time=at(11))

        with pytest.raises(DataIntegrityError):
            service.stop(task.pk, entry.pk, at=at(10, 59))

        entry.refresh_from_db()
        assert entry.end_time is None
        assert entry.duration is None


@pytest.mark.django_db
class TestQueries:

    def test_active_entry(self, service, task, member, admin_user):
        assert service.active_entry(task.pk) is None

        entry = service.start(task.pk, member.pk)
        assert service.active_entry(task.pk) == entry
        assert service.active_entry(task.pk, user_id=admin_user.pk) is None

        service.stop(task.pk, entry.pk)
        assert service.active_entry(task.pk) is None

    def test_entries_newest_first(self, service, task, member):
        older = TimeEntry.objects.create(task=task, user=member, start_time=at(8), end_time=at(9), duration=3600)
        newer = TimeEntry.objects.create(task=task, user=member, start_time=at(12))
        assert list(service.entries_for_task(task.pk)) == [newer, older]


@pytest.mark.django_db
class TestManualEntry:

    def test_manual_entry_rolls_up(self, service, task, member):
        entry = service.log_manual_entry(task.pk, member.pk, at(13), at(14, 15), description='Pairing')

        assert entry.duration == 4500
        task.refresh_from_db()
        assert task.actual_minutes == 75

    def test_manual_entry_must_be_ordered(self, service, task, member):
        with pytest.raises(ValidationError):
            service.log_manual_entry(task.pk, member.pk, at(14), at(13))
        assert not TimeEntry.objects.exists()


@pytest.mark.django_db
class TestRollup:

    def test_recompute_is_idempotent(self, task, member):
        TimeEntry.objects.create(task=task, user=member, start_time=at(8), end_time=at(8, 45), duration=2700)
        TimeEntry.objects.create(task=task, user=member, start_time=at(9), end_time=at(9, 0, 59), duration=59)
        TimeEntry.objects.create(task=task, user=member, start_time=at(10))

        assert total_closed_seconds(task.pk) == 2759
        assert recompute_actual_minutes(task) == 45
        assert recompute_actual_minutes(task) == 45
        task.refresh_from_db()
        assert task.actual_minutes == 45

    def test_no_closed_entries(self, task):
        assert recompute_actual_minutes(task) == 0


def test_elapsed_seconds():
    assert elapsed_seconds(at(10), at(10, 30)) == 1800
    assert elapsed_seconds(at(10), at(10)) == 0
    with pytest.raises(DataIntegrityError):
        elapsed_seconds(at(10, 0, 1), at(10))
