import logging

from django.dispatch import receiver

from .signals import task_moved

logger = logging.getLogger('scrum.events')


@receiver(task_moved)
def log_task_moved(sender, task, source, destination, user=None, **kwargs):
    logger.info(
        f"Task {task.pk} moved from partition {source} to {destination} at order {task.order} "
        f"by {getattr(user, 'email', 'system')}"
    )
