from io import StringIO

import pytest
from django.core.management import call_command

from scrum.models import Task


@pytest.fixture
def broken_backlog(project):
    for title, order in (('A', 0), ('B', 3), ('C', 3)):
        Task.objects.create(title=title, project=project, order=order)
    return project


@pytest.mark.django_db
def test_reports_broken_partition_without_changing_it(broken_backlog):
    out = StringIO()
    call_command('check_partitions', stdout=out)

    assert 'need repair' in out.getvalue()
    assert sorted(Task.objects.values_list('order', flat=True)) == [0, 3, 3]


@pytest.mark.django_db
def test_fix_renumbers_partition(broken_backlog):
    out = StringIO()
    call_command('check_partitions', '--fix', stdout=out)

    assert 're-sequenced' in out.getvalue()
    assert list(Task.objects.partition(broken_backlog.pk).values_list('title', 'order')) == [
        ('A', 0), ('B', 1), ('C', 2),
    ]


@pytest.mark.django_db
def test_clean_partitions(project):
    Task.objects.create(title='Only', project=project, order=0)
    out = StringIO()
    call_command('check_partitions', stdout=out)
    assert 'All 1 partition(s) are contiguous' in out.getvalue()
