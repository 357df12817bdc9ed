"""
Ordering engine for task partitions.

A partition is the list of tasks sharing one (project, sprint) key; a null
sprint is the backlog. At rest the ``order`` values of a partition are
exactly ``0..n-1``. The functions here are pure: they compute new orders
from an already-sorted list and never touch the database.
"""

from typing import Dict, Iterable, List, Optional


def _task_id(item):
    return getattr(item, 'pk', item)


def clamp_index(index: int, length: int) -> int:
    """Clamp an insertion index to ``[0, length]``."""
    return max(0, min(index, length))


def reindex(
    partition_tasks: Iterable,
    excluding_id=None,
    inserting_id=None,
    insert_at: Optional[int] = None,
) -> Dict[int, int]:
    """
    Compute dense orders for a partition.

    Args:
        partition_tasks: tasks (or task ids) sorted by their current order
        excluding_id: task leaving the partition, if any
        inserting_id: task entering the partition, if any
        insert_at: target index for ``inserting_id``; clamped, None appends

    Returns:
        dict mapping task id to its new order, covering every task left in
        the partition (including ``inserting_id``)
    """
    ids: List = [_task_id(task) for task in partition_tasks]

    if excluding_id is not None:
        ids = [task_id for task_id in ids if task_id != excluding_id]

    if inserting_id is not None:
        ids = [task_id for task_id in ids if task_id != inserting_id]
        position = len(ids) if insert_at is None else clamp_index(insert_at, len(ids))
        ids.insert(position, inserting_id)

    return {task_id: index for index, task_id in enumerate(ids)}


def apply_assignments(tasks: Iterable, assignments: Dict[int, int]) -> list:
    """
    Set ``order`` on the tasks whose value changes and return only those,
    ready for a ``bulk_update``.
    """
    changed = []
    for task in tasks:
        new_order = assignments.get(task.pk)
        if new_order is not None and task.order != new_order:
            task.order = new_order
            changed.append(task)
    return changed


def next_order(orders: Iterable[int]) -> int:
    """Order for a task appended to a partition holding ``orders``."""
    orders = list(orders)
    return max(orders) + 1 if orders else 0


def is_contiguous(orders: Iterable[int]) -> bool:
    """True when ``orders`` is exactly ``{0, ..., n-1}``."""
    orders = sorted(orders)
    return orders == list(range(len(orders)))
