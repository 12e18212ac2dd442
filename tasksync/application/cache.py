"""In-memory task cache.

Holds the last known-good task list and notifies subscribers once per state
change. No network I/O happens here.

Entries are frozen ``Task`` objects stored in a tuple that is rebuilt on
every change, so a snapshot handed out earlier never changes underneath its
holder.
"""

import logging
from collections.abc import Callable, Iterable

from tasksync.domain.task import Task

logger = logging.getLogger(__name__)

CacheListener = Callable[[tuple[Task, ...]], None]


class TaskCache:
    """Ordered, copy-on-write list of tasks with change notification.

    Order is kept as received so list rendering stays stable; it carries no
    meaning of its own.
    """

    def __init__(self) -> None:
        self._tasks: tuple[Task, ...] = ()
        self._listeners: list[CacheListener] = []

    def current(self) -> list[Task]:
        """Return the latest known list."""
        return list(self._tasks)

    def snapshot(self) -> tuple[Task, ...]:
        """Return the latest known list as an immutable tuple."""
        return self._tasks

    def get(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return any(task.id == task_id for task in self._tasks)

    def replace(self, tasks: Iterable[Task]) -> None:
        """Overwrite the whole list, as after a successful fetch."""
        self._tasks = tuple(tasks)
        self._notify()

    def patch(self, task_id: str, fn: Callable[[Task], Task]) -> bool:
        """Replace exactly one task with ``fn(task)``.

        Returns:
            True if the task was found. An absent id is logged and ignored.
        """
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                updated = fn(task)
                self._tasks = self._tasks[:index] + (updated,) + self._tasks[index + 1 :]
                self._notify()
                return True

        logger.warning(f"patch: task {task_id} is not in the cache")
        return False

    def remove(self, task_id: str) -> bool:
        """Drop exactly one task.

        Returns:
            True if the task was found. An absent id is ignored.
        """
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                self._tasks = self._tasks[:index] + self._tasks[index + 1 :]
                self._notify()
                return True

        logger.debug(f"remove: task {task_id} is not in the cache")
        return False

    def subscribe(self, listener: CacheListener) -> Callable[[], None]:
        """Register ``listener`` for change notifications.

        Returns:
            A function that unsubscribes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self._tasks
        for listener in list(self._listeners):
            listener(snapshot)
