"""
Commission calculation.

Pay for a period is a fixed salary (when the profile has one) plus the
hourly rate applied to the *estimated* minutes of the tasks the user
completed in that period. Estimated, not tracked, minutes are what payroll
is agreed on; tracked time only feeds ``Task.actual_minutes``.
"""

import datetime
from collections import namedtuple
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Q
from django.utils import timezone
from django.utils.dateparse import parse_date

from core.exceptions import ValidationError
from scrum.models import Task
from .models import CompensationProfile, CENTS

DateRange = namedtuple('DateRange', ['start', 'end'])

COMPLETION_FIELDS = ('completed_at', 'end_time', 'updated_at', 'start_date')


@dataclass(frozen=True)
class CommissionSummary:
    user_id: int
    minutes_completed: int
    variable_pay: Decimal
    fixed_salary: Decimal
    total_pay: Decimal
    has_fixed_salary: bool
    hour_rate: Decimal


def to_money(value) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_date_range(from_value, to_value):
    """
    Build an inclusive day range from ``from``/``to`` query values
    (YYYY-MM-DD). Both or neither must be given.

    Returns:
        DateRange of aware datetimes, ``from 00:00:00`` to
        ``to 23:59:59.999999`` in the current timezone, or None
    """
    if not from_value and not to_value:
        return None
    if not from_value or not to_value:
        missing = 'from' if not from_value else 'to'
        raise ValidationError(
            "Both 'from' and 'to' are required to filter by date.",
            details={missing: 'This field is required when filtering by date.'},
        )

    dates = {}
    for name, value in (('from', from_value), ('to', to_value)):
        try:
            parsed = parse_date(value)
        except ValueError:
            parsed = None
        if parsed is None:
            raise ValidationError(f"Invalid '{name}' date.", details={name: 'Use YYYY-MM-DD.'})
        dates[name] = parsed

    if dates['from'] > dates['to']:
        raise ValidationError("'from' must not be after 'to'.", details={'from': "Must not be after 'to'."})

    tz = timezone.get_current_timezone()
    start = timezone.make_aware(datetime.datetime.combine(dates['from'], datetime.time.min), tz)
    end = timezone.make_aware(datetime.datetime.combine(dates['to'], datetime.time.max), tz)
    return DateRange(start, end)


def completion_timestamp(task):
    """First of completed_at, end_time, updated_at, start_date that is set."""
    for field in COMPLETION_FIELDS:
        value = getattr(task, field)
        if value is not None:
            return value
    return None


def in_range(task, date_range) -> bool:
    if date_range is None:
        return True
    stamp = completion_timestamp(task)
    return stamp is not None and date_range.start <= stamp <= date_range.end


def filter_completed(tasks, date_range=None):
    return [
        task for task in tasks
        if task.status == Task.Status.COMPLETED and in_range(task, date_range)
    ]


def completed_tasks_for(user_id, date_range=None):
    """
    Completed tasks assigned to ``user_id``. With a range, rows having any
    candidate timestamp in it are fetched; ``compute_commission`` applies
    the exact fallback rule.
    """
    queryset = Task.objects.completed().filter(assignee_id=user_id).select_related('project')
    if date_range is not None:
        window = Q()
        for field in COMPLETION_FIELDS:
            window |= Q(**{f'{field}__range': (date_range.start, date_range.end)})
        queryset = queryset.filter(window)
    return queryset


def compute_commission(user_id, profile, completed_tasks, date_range=None) -> CommissionSummary:
    """
    Derive the pay of ``user_id`` for the tasks completed in ``date_range``.

    Args:
        user_id: user the figure is for
        profile: CompensationProfile, or None for no salary and rate 0
        completed_tasks: candidate tasks; anything not COMPLETED or outside
            the range is ignored
        date_range: DateRange or None for all time
    """
    has_fixed_salary = bool(profile and profile.has_fixed_salary)
    hour_rate = (profile.hour_rate if profile else None) or Decimal('0')
    fixed = profile.effective_fixed_salary if profile else Decimal('0.00')

    minutes = sum(task.estimated_minutes or 0 for task in filter_completed(completed_tasks, date_range))
    variable_pay = to_money(Decimal(minutes) * Decimal(hour_rate) / Decimal(60))

    return CommissionSummary(
        user_id=user_id,
        minutes_completed=minutes,
        variable_pay=variable_pay,
        fixed_salary=to_money(fixed),
        total_pay=to_money(fixed + variable_pay),
        has_fixed_salary=has_fixed_salary,
        hour_rate=to_money(hour_rate),
    )


def commission_for_user(user, date_range=None):
    """Load the profile and tasks of ``user`` and compute their summary."""
    profile = CompensationProfile.objects.filter(user=user).first() or CompensationProfile.default_for(user)
    tasks = list(completed_tasks_for(user.pk, date_range))
    return profile, tasks, compute_commission(user.pk, profile, tasks, date_range)


def commission_task_breakdown(tasks, date_range=None):
    """Per-task lines behind a summary, most recently completed first."""
    lines = [
        {
            'id': task.pk,
            'title': task.title,
            'projectName': task.project.name if task.project_id else None,
            'minutes': task.estimated_minutes or 0,
            'completedAt': task.completed_at,
            'date': completion_timestamp(task),
        }
        for task in filter_completed(tasks, date_range)
    ]
    lines.sort(key=lambda line: line['date'] or datetime.datetime.min.replace(tzinfo=datetime.timezone.utc), reverse=True)
    return lines
