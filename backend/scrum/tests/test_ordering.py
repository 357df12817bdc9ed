import random

import pytest

from scrum.ordering import reindex, clamp_index, next_order, is_contiguous, apply_assignments


class Row:
    def __init__(self, pk, order):
        self.pk = pk
        self.order = order


def test_move_last_to_front_within_partition():
    # T1, T2, T3 in the backlog; T3 dropped at index 0.
    others = [1, 2]
    assignments = reindex(others, inserting_id=3, insert_at=0)
    assert assignments == {3: 0, 1: 1, 2: 2}


def test_same_partition_move_with_task_still_present():
    assignments = reindex([1, 2, 3], excluding_id=3, inserting_id=3, insert_at=0)
    assert assignments == {3: 0, 1: 1, 2: 2}


def test_insert_into_empty_partition():
    assert reindex([], inserting_id=7, insert_at=0) == {7: 0}


def test_leaving_partition_closes_the_gap():
    assert reindex([1, 2, 3], excluding_id=2) == {1: 0, 3: 1}


def test_index_past_end_appends():
    assert reindex([1, 2], inserting_id=9, insert_at=50) == {1: 0, 2: 1, 9: 2}


def test_negative_index_clamps_to_front():
    assert reindex([1, 2], inserting_id=9, insert_at=-4) == {9: 0, 1: 1, 2: 2}


def test_none_index_appends():
    assert reindex([1], inserting_id=2) == {1: 0, 2: 1}


@pytest.mark.parametrize('index,length,expected', [(0, 0, 0), (3, 2, 2), (-1, 5, 0), (2, 5, 2)])
def test_clamp_index(index, length, expected):
    assert clamp_index(index, length) == expected


def test_next_order():
    assert next_order([]) == 0
    assert next_order([0, 1, 2]) == 3


def test_is_contiguous():
    assert is_contiguous([])
    assert is_contiguous([2, 0, 1])
    assert not is_contiguous([0, 2])
    assert not is_contiguous([0, 0, 1])


def test_apply_assignments_returns_only_changed_rows():
    rows = [Row(1, 0), Row(2, 1), Row(3, 2)]
    changed = apply_assignments(rows, {3: 0, 1: 1, 2: 2})
    assert [row.pk for row in changed] == [1, 2, 3]
    assert [row.order for row in rows] == [1, 2, 0]

    assert apply_assignments(rows, {1: 1, 2: 2, 3: 0}) == []


def test_random_move_sequences_stay_contiguous():
    rng = random.Random(1234)
    partitions = {'backlog': list(range(1, 9)), 'sprint-a': [], 'sprint-b': list(range(9, 12))}

    for _ in range(300):
        source = rng.choice([key for key, ids in partitions.items() if ids])
        destination = rng.choice(list(partitions))
        task_id = rng.choice(partitions[source])
        index = rng.randint(-2, 15)

        if source == destination:
            assignments = reindex(partitions[source], excluding_id=task_id, inserting_id=task_id, insert_at=index)
            partitions[source] = sorted(assignments, key=assignments.get)
        else:
            left = reindex(partitions[source], excluding_id=task_id)
            entered = reindex(partitions[destination], inserting_id=task_id, insert_at=index)
            partitions[source] = sorted(left, key=left.get)
            partitions[destination] = sorted(entered, key=entered.get)

        everywhere = [task for ids in partitions.values() for task in ids]
        assert sorted(everywhere) == list(range(1, 12))

        for ids in partitions.values():
            assert is_contiguous(reindex(ids).values())
