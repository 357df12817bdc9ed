import logging

from django.dispatch import receiver

from .signals import timer_started, timer_stopped

logger = logging.getLogger('timetracking.events')


@receiver(timer_started)
def log_timer_started(sender, entry, **kwargs):
    logger.info(f"Timer {entry.pk} started on task {entry.task_id} by user {entry.user_id}")


@receiver(timer_stopped)
def log_timer_stopped(sender, entry, task, **kwargs):
    logger.info(
        f"Timer {entry.pk} stopped on task {task.pk} after {entry.duration}s; "
        f"task actual minutes now {task.actual_minutes}"
    )
