"""Pure partition and statistics functions over a task list.

All functions in this module are pure - no I/O, no side effects.
A ``TaskBoard`` bundles every derived view of one snapshot so that the
status partitions and the statistics can never disagree.
"""

from collections.abc import Iterable, Sequence

from pydantic import BaseModel

from .models import Task, TaskStats, TaskStatus


# =============================================================================
# Partitions
# =============================================================================


def filter_by_status(tasks: Iterable[Task], status: TaskStatus) -> tuple[Task, ...]:
    """Return the tasks in one status bucket, keeping their order."""
    return tuple(task for task in tasks if task.status == status)


def find_by_id(tasks: Iterable[Task], task_id: str) -> Task | None:
    """Return the task with ``task_id``, or None."""
    for task in tasks:
        if task.id == task_id:
            return task
    return None


def count_by_status(tasks: Iterable[Task]) -> dict[TaskStatus, int]:
    """Count tasks per status.

    Returns:
        Dict with an entry for every status, zero when empty.
    """
    counts: dict[TaskStatus, int] = {status: 0 for status in TaskStatus}
    for task in tasks:
        counts[task.status] += 1
    return counts


# =============================================================================
# Statistics
# =============================================================================


def completion_rate(done: int, total: int) -> int:
    """Percentage of finished tasks, rounded half up. Zero for an empty list."""
    if total <= 0:
        return 0
    # integer form of floor(done / total * 100 + 0.5)
    return (done * 200 + total) // (2 * total)


def compute_stats(tasks: Sequence[Task]) -> TaskStats:
    """Calculate aggregate statistics for a task list.

    Args:
        tasks: The snapshot to summarize.

    Returns:
        TaskStats with per-status counts and the completion rate.
    """
    counts = count_by_status(tasks)
    total = len(tasks)
    done = counts[TaskStatus.DONE]

    return TaskStats(
        total=total,
        todo=counts[TaskStatus.TODO],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        done=done,
        completion_rate=completion_rate(done, total),
    )


# =============================================================================
# Board snapshot
# =============================================================================


class TaskBoard(BaseModel):
    """Every derived view of one task list snapshot.

    Attributes:
        tasks: The full list, in cache order.
        todo: Tasks with status ``todo``.
        in_progress: Tasks with status ``in_progress``.
        done: Tasks with status ``done``.
        stats: Aggregate counts over ``tasks``.
        error: Last error message at the time of the snapshot, if any.
    """

    tasks: tuple[Task, ...] = ()
    todo: tuple[Task, ...] = ()
    in_progress: tuple[Task, ...] = ()
    done: tuple[Task, ...] = ()
    stats: TaskStats = TaskStats()
    error: str | None = None

    model_config = {"frozen": True}

    def partition(self, status: TaskStatus) -> tuple[Task, ...]:
        """Return the bucket for ``status``."""
        if status == TaskStatus.TODO:
            return self.todo
        if status == TaskStatus.IN_PROGRESS:
            return self.in_progress
        return self.done


def build_board(tasks: Iterable[Task], error: str | None = None) -> TaskBoard:
    """Derive partitions and stats from a single snapshot."""
    snapshot = tuple(tasks)
    return TaskBoard(
        tasks=snapshot,
        todo=filter_by_status(snapshot, TaskStatus.TODO),
        in_progress=filter_by_status(snapshot, TaskStatus.IN_PROGRESS),
        done=filter_by_status(snapshot, TaskStatus.DONE),
        stats=compute_stats(snapshot),
        error=error,
    )
