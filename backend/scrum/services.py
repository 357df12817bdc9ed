"""
Task and sprint services.

Every operation that writes ``Task.order`` lives here and runs inside one
``transaction.atomic()`` block with the affected partition rows locked
(``select_for_update``), so readers never see a half-renumbered partition
and concurrent moves into the same partition are serialized.
"""

from django.contrib.auth import get_user_model
from django.db import transaction

from core.exceptions import ValidationError, NotFound, require_fields
from core.services import BaseService
from project.models import Project, Milestone
from .models import Task, Sprint, SprintProject
from .ordering import reindex, apply_assignments, next_order
from .signals import task_moved

NULL_IDS = (None, '', 'null', 'undefined')


def parse_optional_id(value, field):
    """Normalize an optional foreign-key id from a request body."""
    if value in NULL_IDS:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}.", details={field: 'Must be an integer id.'})


def parse_index(value, field='destinationIndex'):
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"Invalid {field}.", details={field: 'Must be an integer.'})
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"Invalid {field}.", details={field: 'Must be an integer.'})


def lock_partition(project_id, sprint_id, exclude_id=None):
    """Lock and return the rows of one partition in display order."""
    queryset = Task.objects.partition(project_id, sprint_id).select_for_update()
    if exclude_id is not None:
        queryset = queryset.exclude(pk=exclude_id)
    return list(queryset)


class TaskService(BaseService):
    """Create, update and delete tasks while keeping partitions dense."""

    def _resolve_relations(self, project_id, data):
        relations = {}
        if data.get('sprint_id') is not None:
            relations['sprint'] = self.get_or_404(Sprint.objects.all(), 'Sprint', pk=data['sprint_id'])
        if data.get('assignee_id') is not None:
            relations['assignee'] = self.get_or_404(
                get_user_model().objects.all(), 'Assignee', pk=data['assignee_id']
            )
        if data.get('milestone_id') is not None:
            relations['milestone'] = self.get_or_404(
                Milestone.objects.filter(project_id=project_id), 'Milestone in this project', pk=data['milestone_id']
            )
        return relations

    def create_task(self, data):
        """
        Create a task at the end of its (project, sprint) partition.

        Args:
            data: validated fields (snake_case), ``title`` and ``project_id``
                required

        Returns:
            Task: the created task
        """
        fields = dict(data)
        project_id = fields.pop('project_id')
        sprint_id = fields.pop('sprint_id', None)
        fields.pop('assignee_id', None)
        fields.pop('milestone_id', None)

        with transaction.atomic():
            project = self.get_or_404(Project.objects.all(), 'Project', pk=project_id)
            relations = self._resolve_relations(project.pk, data)
            return self.append_task(Task(project=project, **relations, **fields))

    def append_task(self, task):
        """Save an unsaved task as the last row of its partition."""
        with transaction.atomic():
            orders = [row.order for row in lock_partition(task.project_id, task.sprint_id)]
            task.order = next_order(orders)
            task.save()

        self.logger.info(
            f"Task {task.pk} created in partition {task.partition_key} at order {task.order} by {self.actor}"
        )
        return task

    def update_task(self, task_id, data):
        """
        Update task attributes. Order and sprint are changed only by
        ``TaskMovementService.move_task``.
        """
        fields = dict(data)
        for key in ('project_id', 'sprint_id', 'order'):
            fields.pop(key, None)

        with transaction.atomic():
            task = self.get_or_404(Task.objects.select_for_update(), 'Task', pk=task_id)
            previous_status = task.status

            if 'assignee_id' in fields:
                assignee_id = fields.pop('assignee_id')
                task.assignee = None if assignee_id is None else self.get_or_404(
                    get_user_model().objects.all(), 'Assignee', pk=assignee_id
                )
            if 'milestone_id' in fields:
                milestone_id = fields.pop('milestone_id')
                task.milestone = None if milestone_id is None else self.get_or_404(
                    Milestone.objects.filter(project_id=task.project_id), 'Milestone in this project', pk=milestone_id
                )

            for name, value in fields.items():
                setattr(task, name, value)
            task.save()

        if task.status != previous_status:
            self.logger.info(f"Task {task.pk} status {previous_status} -> {task.status} by {self.actor}")
        return task

    def delete_task(self, task_id):
        """Delete a task and close the gap it leaves in its partition."""
        with transaction.atomic():
            task = self.get_or_404(Task.objects.select_for_update(), 'Task', pk=task_id)
            project_id, sprint_id = task.partition_key
            task.delete()
            changed = self.resequence_partition(project_id, sprint_id)

        self.logger.info(
            f"Task {task_id} deleted from partition {(project_id, sprint_id)}; {changed} task(s) renumbered"
        )

    def resequence_partition(self, project_id, sprint_id):
        """
        Rewrite a partition's orders as ``0..n-1`` keeping the current
        sequence. Returns the number of rows changed.
        """
        with transaction.atomic():
            rows = lock_partition(project_id, sprint_id)
            changed = apply_assignments(rows, reindex(rows))
            if changed:
                Task.objects.bulk_update(changed, ['order'])
        return len(changed)


class TaskMovementService(BaseService):
    """Relocate a task between (or within) partitions as one transaction."""

    def move_task(self, task_id, destination_sprint_id, destination_index, source_sprint_id=None):
        """
        Move a task to ``destination_index`` of the partition
        (task.project, destination_sprint_id). A null sprint means the
        project's backlog.

        The source partition is the task's stored (project, sprint); it is
        closed up, the destination is opened at the (clamped) index, and the
        task's sprint and order change together.

        Returns:
            Task: the moved task
        """
        require_fields(
            {'taskId': task_id, 'destinationIndex': destination_index},
            'taskId', 'destinationIndex',
        )
        index = parse_index(destination_index)
        destination_sprint_id = parse_optional_id(destination_sprint_id, 'destinationSprintId')

        with transaction.atomic():
            task = self.get_or_404(Task.objects.select_for_update(), 'Task', pk=task_id)

            if destination_sprint_id is not None:
                self.get_or_404(Sprint.objects.all(), 'Sprint', pk=destination_sprint_id)

            if source_sprint_id not in NULL_IDS and str(source_sprint_id) != str(task.sprint_id):
                self.logger.warning(
                    f"Move of task {task.pk}: client says source sprint {source_sprint_id}, "
                    f"stored sprint is {task.sprint_id}; using stored value"
                )

            source = task.partition_key
            destination = (task.project_id, destination_sprint_id)

            if source == destination:
                others = lock_partition(*source, exclude_id=task.pk)
                assignments = reindex(others, inserting_id=task.pk, insert_at=index)
            else:
                # Lock partitions in a fixed order so concurrent moves between
                # the same pair cannot deadlock.
                first, second = sorted([source, destination], key=lambda key: (key[0], key[1] or 0))
                locked = {
                    first: lock_partition(*first, exclude_id=task.pk),
                    second: lock_partition(*second, exclude_id=task.pk),
                }
                others = locked[source] + locked[destination]
                assignments = reindex(locked[source])
                assignments.update(reindex(locked[destination], inserting_id=task.pk, insert_at=index))

            changed = apply_assignments(others, assignments)
            if changed:
                Task.objects.bulk_update(changed, ['order'])

            task.sprint_id = destination_sprint_id
            task.order = assignments[task.pk]
            task.save(update_fields=['sprint', 'order', 'updated_at'])

            transaction.on_commit(lambda: task_moved.send(
                sender=Task, task=task, source=source, destination=destination, user=self.user,
            ))

        self.logger.info(
            f"Task {task.pk} moved {source} -> {destination} at order {task.order}; "
            f"{len(changed)} other task(s) renumbered by {self.actor}"
        )
        return task


class SprintService(BaseService):

    def create_sprint(self, data):
        """
        Create a sprint in PLANNING and link it to ``project_ids``.
        """
        fields = dict(data)
        project_ids = fields.pop('project_ids', [])

        with transaction.atomic():
            projects = list(Project.objects.filter(pk__in=project_ids))
            missing = set(project_ids) - {project.pk for project in projects}
            if missing:
                raise NotFound(f"Project(s) not found: {', '.join(str(pk) for pk in sorted(missing))}")

            sprint = Sprint.objects.create(**fields)
            SprintProject.objects.bulk_create(
                [SprintProject(sprint=sprint, project=project) for project in projects]
            )

        self.logger.info(f"Sprint {sprint.pk} '{sprint.name}' created with {len(projects)} project(s) by {self.actor}")
        return sprint

    def update_status(self, sprint_id, status):
        with transaction.atomic():
            sprint = self.get_or_404(Sprint.objects.select_for_update(), 'Sprint', pk=sprint_id)
            previous = sprint.status
            sprint.status = status
            sprint.save(update_fields=['status', 'updated_at'])

        self.logger.info(f"Sprint {sprint.pk} status {previous} -> {status} by {self.actor}")
        return sprint
