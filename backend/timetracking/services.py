"""
Timer state machine.

A (task, user) pair has at most one open entry. ``start`` opens one and
``stop`` closes it, fixing ``duration`` and recomputing the task's actual
minutes; pausing is the same transition as stopping.
"""

import math

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone

from core.exceptions import (
    ActiveTimerExists, InvalidTimerState, DataIntegrityError, ValidationError, Forbidden, require_fields,
)
from core.services import BaseService
from scrum.models import Task
from .models import TimeEntry
from .rollup import recompute_actual_minutes
from .signals import timer_started, timer_stopped


def elapsed_seconds(start_time, end_time) -> int:
    """
    Whole seconds between two instants, rounded down. A negative span
    means the stored start is in the future and is refused.
    """
    seconds = (end_time - start_time).total_seconds()
    if seconds < 0:
        raise DataIntegrityError(f"Time entry ends {-seconds:.3f}s before it starts.")
    return math.floor(seconds)


class TimerService(BaseService):

    def _get_task(self, task_id, lock=False):
        queryset = Task.objects.select_for_update() if lock else Task.objects.all()
        return self.get_or_404(queryset, 'Task', pk=task_id)

    def start(self, task_id, user_id):
        """
        Open a timer for ``user_id`` on ``task_id``.

        Raises:
            ValidationError: user_id missing
            NotFound: task or user does not exist
            ActiveTimerExists: the user already has an open entry on the task
        """
        require_fields({'userId': user_id}, 'userId')

        with transaction.atomic():
            task = self._get_task(task_id)
            user = self.get_or_404(get_user_model().objects.all(), 'User', pk=user_id)

            if TimeEntry.objects.open().filter(task=task, user=user).exists():
                raise ActiveTimerExists()

            try:
                with transaction.atomic():
                    entry = TimeEntry.objects.create(task=task, user=user, start_time=timezone.now())
            except IntegrityError:
                # A concurrent start won the race to the partial unique index.
                self.logger.warning(f"Concurrent timer start on task {task.pk} for user {user.pk} rejected")
                raise ActiveTimerExists()

            transaction.on_commit(lambda: timer_started.send(sender=TimeEntry, entry=entry, user=self.user))

        self.logger.info(f"Timer {entry.pk} started on task {task.pk} for user {user.pk} by {self.actor}")
        return entry

    def stop(self, task_id, entry_id, at=None, owner_id=None):
        """
        Close an open entry and roll its time up into the task.

        Args:
            task_id: task the entry must belong to
            entry_id: entry to close
            at: stop instant, defaults to now
            owner_id: when given, only an entry of this user may be closed

        Returns:
            tuple: (closed TimeEntry, Task with refreshed actual_minutes)
        """
        require_fields({'entryId': entry_id}, 'entryId')

        with transaction.atomic():
            task = self._get_task(task_id, lock=True)
            try:
                entry = TimeEntry.objects.select_for_update().get(pk=entry_id, task=task)
            except (TimeEntry.DoesNotExist, ValueError, TypeError):
                raise InvalidTimerState("Time entry not found for this task.")

            if owner_id is not None and entry.user_id != int(owner_id):
                raise Forbidden("You can only track time for yourself.")

            if not entry.is_open:
                raise InvalidTimerState("Timer already stopped.")

            end_time = at or timezone.now()
            try:
                duration = elapsed_seconds(entry.start_time, end_time)
            except DataIntegrityError:
                self.logger.error(
                    f"Refusing to close timer {entry.pk}: start {entry.start_time.isoformat()} "
                    f"is after stop {end_time.isoformat()}"
                )
                raise

            entry.end_time = end_time
            entry.duration = duration
            entry.save(update_fields=['end_time', 'duration'])

            recompute_actual_minutes(task)

            transaction.on_commit(
                lambda: timer_stopped.send(sender=TimeEntry, entry=entry, task=task, user=self.user)
            )

        self.logger.info(
            f"Timer {entry.pk} stopped on task {task.pk} after {duration}s by {self.actor}; "
            f"actual minutes {task.actual_minutes}"
        )
        return entry, task

    def active_entry(self, task_id, user_id=None):
        """Newest open entry of the task (for one user when given), or None."""
        task = self._get_task(task_id)
        entries = TimeEntry.objects.open().filter(task=task).select_related('user')
        if user_id is not None:
            entries = entries.filter(user_id=user_id)
        return entries.order_by('-start_time', '-id').first()

    def entries_for_task(self, task_id):
        task = self._get_task(task_id)
        return TimeEntry.objects.filter(task=task).select_related('user').order_by('-start_time', '-id')

    def log_manual_entry(self, task_id, user_id, start_time, end_time, description=None):
        """
        Record time worked without a running timer. The entry is created
        closed and the task's actual minutes are recomputed.
        """
        require_fields({'userId': user_id, 'startTime': start_time, 'endTime': end_time},
                       'userId', 'startTime', 'endTime')
        if end_time < start_time:
            raise ValidationError(
                "End time cannot be before start time.",
                details={'endTime': 'Must not be before startTime.'},
            )

        with transaction.atomic():
            task = self._get_task(task_id, lock=True)
            user = self.get_or_404(get_user_model().objects.all(), 'User', pk=user_id)
            entry = TimeEntry.objects.create(
                task=task,
                user=user,
                start_time=start_time,
                end_time=end_time,
                duration=elapsed_seconds(start_time, end_time),
                description=description,
            )
            recompute_actual_minutes(task)

            transaction.on_commit(
                lambda: timer_stopped.send(sender=TimeEntry, entry=entry, task=task, user=self.user)
            )

        self.logger.info(f"Manual entry {entry.pk} of {entry.duration}s logged on task {task.pk} by {self.actor}")
        return entry

    def entries_for_user(self, user_id, task_id=None, active=False):
        """Entries of one user, newest first; ``active`` keeps open ones only."""
        entries = TimeEntry.objects.filter(user_id=user_id).select_related('task__project')
        if task_id is not None:
            entries = entries.filter(task_id=task_id)
        if active:
            entries = entries.open()
        return entries.order_by('-created_at', '-id')
