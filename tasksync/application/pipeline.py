"""Reactive view pipeline.

Derives every view of the task list from the cache:

    refresh() ──> gateway.list_by_owner ──> cache.replace ──┐
    cache.patch / cache.remove (mutations) ─────────────────┤
                                                            v
                                              build_board(cache snapshot)
                                                            v
                                                  listeners(TaskBoard)

A ``TaskBoard`` carries the full list, the three status partitions and the
statistics computed from one tuple, so no listener can observe partitions
and stats from different snapshots.

Overlapping refreshes use "last request wins": each refresh takes a
generation number, and a response is dropped if the cache already holds
state from a newer request or from a local mutation made after the request
was sent.
"""

import logging
from collections.abc import Callable

from tasksync.application.cache import TaskCache
from tasksync.application.error_slot import ErrorSlot
from tasksync.application.session import SessionContext
from tasksync.domain.shared import EngineError, Err
from tasksync.domain.task import Task, TaskBoard, TaskStats, build_board
from tasksync.infrastructure.gateway import TaskGatewayPort

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load tasks"
NOT_SIGNED_IN = "You must be signed in to view tasks"

BoardListener = Callable[[TaskBoard], None]


class ViewPipeline:
    """Owns the refresh signal and the derived task views."""

    def __init__(
        self,
        gateway: TaskGatewayPort,
        session: SessionContext,
        cache: TaskCache,
        errors: ErrorSlot,
    ) -> None:
        self._gateway = gateway
        self._session = session
        self._cache = cache
        self._errors = errors
        self._listeners: list[BoardListener] = []
        self._board = build_board(cache.snapshot())

        # generation of the newest refresh started / of the newest state in the cache
        self._requested = 0
        self._applied = 0
        self._applying = False

        self._unsubscribe_cache = cache.subscribe(self._on_cache_change)

    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------

    @property
    def board(self) -> TaskBoard:
        return self._board

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._board.tasks

    @property
    def todo_tasks(self) -> tuple[Task, ...]:
        return self._board.todo

    @property
    def in_progress_tasks(self) -> tuple[Task, ...]:
        return self._board.in_progress

    @property
    def done_tasks(self) -> tuple[Task, ...]:
        return self._board.done

    @property
    def stats(self) -> TaskStats:
        return self._board.stats

    @property
    def error(self) -> str | None:
        return self._errors.message

    def subscribe(self, listener: BoardListener) -> Callable[[], None]:
        """Receive every new ``TaskBoard``.

        Returns:
            A function that unsubscribes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear_error(self) -> None:
        """Clear the error slot and re-emit the views from the cached list."""
        self._errors.clear()
        self._emit(build_board(self._cache.snapshot()))

    # -------------------------------------------------------------------------
    # Refresh signal
    # -------------------------------------------------------------------------

    async def refresh(self) -> TaskBoard:
        """Re-fetch the signed-in user's tasks and re-derive all views.

        Never raises. A failed fetch emits an empty board and records the
        error; the cache keeps its last known-good content.

        Returns:
            The board current after this refresh was processed.
        """
        self._requested += 1
        generation = self._requested

        email = (self._session.get_current_email() or "").strip()
        if not email:
            logger.warning("refresh: no signed-in user, skipping fetch")
            self._errors.set(EngineError.unauthenticated(NOT_SIGNED_IN))
            self._apply(generation, ())
            return self._board

        result = await self._gateway.list_by_owner(email)

        if generation <= self._applied:
            logger.info(
                f"refresh: dropping response #{generation}, "
                f"cache already holds state #{self._applied}"
            )
            return self._board

        if isinstance(result, Err):
            logger.error(f"refresh: fetching tasks failed: {result.error}")
            self._fail(
                generation,
                EngineError.transport(LOAD_FAILED, status_code=result.error.status_code),
            )
            return self._board

        envelope = result.value
        if not envelope.success:
            logger.error(f"refresh: server refused task list: {envelope.message}")
            self._fail(generation, EngineError.application(envelope.message, LOAD_FAILED))
            return self._board

        self._apply(generation, self._owned_by(email, envelope.data or []))
        return self._board

    def close(self) -> None:
        """Release the cache subscription and all listeners."""
        self._unsubscribe_cache()
        self._listeners.clear()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    @staticmethod
    def _owned_by(email: str, tasks: list[Task]) -> list[Task]:
        owner = email.lower()
        owned = [task for task in tasks if task.user_email.strip().lower() == owner]
        if len(owned) != len(tasks):
            logger.warning(
                f"refresh: ignored {len(tasks) - len(owned)} task(s) not owned by {email}"
            )
        return owned

    def _apply(self, generation: int, tasks: tuple[Task, ...] | list[Task]) -> None:
        self._applied = generation
        self._applying = True
        try:
            self._cache.replace(tasks)
        finally:
            self._applying = False

    def _fail(self, generation: int, error: EngineError) -> None:
        self._applied = generation
        self._errors.set(error)
        self._emit(build_board((), self._errors.message))

    def _on_cache_change(self, tasks: tuple[Task, ...]) -> None:
        if not self._applying:
            # A local mutation is newer than every request already in flight
            self._applied = self._requested
        self._emit(build_board(tasks, self._errors.message))

    def _emit(self, board: TaskBoard) -> None:
        self._board = board
        for listener in list(self._listeners):
            listener(board)
