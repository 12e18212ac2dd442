"""Tests for tasksync/domain/task/partition.py

Partitions and statistics are derived from one snapshot, so the counts in
``stats`` always match the lengths of the partitions.
"""

import pytest

from tasksync.domain.task import (
    TaskStatus,
    build_board,
    completion_rate,
    compute_stats,
    filter_by_status,
    find_by_id,
)
from tests.fakes import make_task


class TestCompletionRate:
    """Tests for the completion percentage."""

    def test_zero_when_empty(self):
        """An empty list is 0%, not a division error."""
        assert completion_rate(0, 0) == 0

    def test_hundred_when_all_done(self):
        assert completion_rate(4, 4) == 100

    @pytest.mark.parametrize(
        ("done", "total", "expected"),
        [(1, 3, 33), (2, 3, 67), (1, 8, 13), (1, 200, 1), (0, 5, 0)],
    )
    def test_rounds_half_up(self, done, total, expected):
        assert completion_rate(done, total) == expected


class TestComputeStats:
    """Tests for aggregate statistics."""

    def test_one_per_bucket(self, sample_tasks):
        """Three tasks, one per status, is 33% complete."""
        stats = compute_stats(sample_tasks)

        assert stats.total == 3
        assert stats.todo == 1
        assert stats.in_progress == 1
        assert stats.done == 1
        assert stats.completion_rate == 33

    def test_empty_list(self):
        stats = compute_stats([])

        assert stats.total == 0
        assert stats.completion_rate == 0

    def test_serializes_with_wire_names(self, sample_tasks):
        dumped = compute_stats(sample_tasks).model_dump(by_alias=True)

        assert dumped == {
            "total": 3,
            "todo": 1,
            "inProgress": 1,
            "done": 1,
            "completionRate": 33,
        }


class TestPartitions:
    """Tests for status filters and the board snapshot."""

    def test_filter_keeps_order(self):
        tasks = [
            make_task("a", TaskStatus.DONE),
            make_task("b", TaskStatus.TODO),
            make_task("c", TaskStatus.DONE),
        ]

        done = filter_by_status(tasks, TaskStatus.DONE)

        assert [task.id for task in done] == ["a", "c"]

    def test_find_by_id(self, sample_tasks):
        assert find_by_id(sample_tasks, "2").status == TaskStatus.IN_PROGRESS
        assert find_by_id(sample_tasks, "missing") is None

    def test_board_partitions_cover_every_task_once(self, sample_tasks):
        board = build_board(sample_tasks)

        ids = [task.id for status in TaskStatus for task in board.partition(status)]
        assert sorted(ids) == ["1", "2", "3"]

    def test_board_stats_match_partitions(self):
        tasks = [make_task(str(i), TaskStatus.DONE if i % 3 == 0 else TaskStatus.TODO) for i in range(10)]

        board = build_board(tasks)

        assert board.stats.done == len(board.done)
        assert board.stats.todo == len(board.todo)
        assert board.stats.in_progress == len(board.in_progress)
        assert board.stats.total == len(board.tasks)

    def test_board_carries_error(self):
        board = build_board([], error="Failed to load tasks")

        assert board.tasks == ()
        assert board.error == "Failed to load tasks"
