"""Mutation orchestrator.

Turns a user intent into exactly one gateway call, then a cache update
built from the server's answer, then one refresh. Intents never raise:
every failure is returned as ``Err(EngineError)`` and, where the user has
to see it, written to the shared error slot.

    intent      gateway call              on success
    ----------  ------------------------  -----------------------------------
    create      create                    clear draft, refresh
    status      set_status (3 endpoints)  patch status from server, refresh
    update      update                    replace entry with server copy, refresh
    delete      delete                    remove entry, refresh
"""

import logging
from collections.abc import Callable

from tasksync.application.cache import TaskCache
from tasksync.application.error_slot import ErrorSlot
from tasksync.application.pipeline import ViewPipeline
from tasksync.application.session import SessionContext
from tasksync.domain.shared import EngineError, Err, ErrorKind, Ok, Result
from tasksync.domain.task import (
    DeleteDialogClosed,
    DomainEvent,
    Task,
    TaskCreated,
    TaskCreateRequest,
    TaskDeleted,
    TaskDraft,
    TaskStatusChanged,
    TaskUpdated,
    UpdateDialogClosed,
    parse_status,
    validate_draft,
)
from tasksync.infrastructure.gateway import Envelope, TaskGatewayPort

logger = logging.getLogger(__name__)

CREATE_FAILED = "Failed to create task"
STATUS_FAILED = "Failed to change task status"
UPDATE_FAILED = "Failed to update task"
DELETE_FAILED = "Failed to delete task"

EventListener = Callable[[DomainEvent], None]


def _unwrap(result: Result[Envelope[Task], EngineError], fallback: str) -> Result[Task, EngineError]:
    """Reduce a gateway result to the returned task or a displayable error.

    Transport failures get the generic ``fallback`` message; application
    failures keep the server's message when it sent one.
    """
    if isinstance(result, Err):
        return Err(EngineError.transport(fallback, status_code=result.error.status_code))

    envelope = result.value
    if not envelope.success:
        return Err(EngineError.application(envelope.message, fallback))
    if envelope.data is None:
        return Err(EngineError.application(None, fallback))
    return Ok(envelope.data)


class MutationOrchestrator:
    """Create, change-status, update and delete intents.

    Intents are independent and hold no shared lock. Only create has a busy
    flag: a second create submitted while one is in flight is dropped.
    """

    def __init__(
        self,
        gateway: TaskGatewayPort,
        session: SessionContext,
        cache: TaskCache,
        pipeline: ViewPipeline,
        errors: ErrorSlot,
    ) -> None:
        self._gateway = gateway
        self._session = session
        self._cache = cache
        self._pipeline = pipeline
        self._errors = errors
        self._creating = False
        self._listeners: list[EventListener] = []

    @property
    def is_creating(self) -> bool:
        return self._creating

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Receive domain events (status changed, dialog closed, ...).

        Returns:
            A function that unsubscribes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        self._listeners.clear()

    def _publish(self, event: DomainEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def _current_email(self) -> str | None:
        email = (self._session.get_current_email() or "").strip()
        return email or None

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    async def create(self, draft: TaskDraft) -> Result[Task, EngineError]:
        """Submit a new task for the signed-in user.

        Args:
            draft: Form content. Cleared when the server accepts the task.

        Returns:
            Ok(created task), or Err with kind BUSY, VALIDATION,
            UNAUTHENTICATED, TRANSPORT or APPLICATION.
        """
        if self._creating:
            logger.info("create: dropped, another create is in flight")
            return Err(EngineError(kind=ErrorKind.BUSY, message="A task is already being created"))

        checked = validate_draft(draft)
        if isinstance(checked, Err):
            return checked

        email = self._current_email()
        if email is None:
            error = EngineError.unauthenticated()
            self._errors.set(error)
            return Err(error)

        request = TaskCreateRequest(
            title=checked.value.title,
            description=checked.value.description,
            user_email=email,
        )

        self._creating = True
        try:
            result = _unwrap(await self._gateway.create(request), CREATE_FAILED)
            if isinstance(result, Err):
                logger.error(f"create: {result.error}")
                self._errors.set(result.error)
                return result

            created = result.value
            logger.info(f"create: task {created.id} created")
            draft.clear()
            self._publish(TaskCreated(task=created))
            await self._pipeline.refresh()
            return Ok(created)
        finally:
            self._creating = False

    # -------------------------------------------------------------------------
    # Change status
    # -------------------------------------------------------------------------

    async def change_status(self, task: Task | None, status: object) -> Result[Task, EngineError]:
        """Move a task to another bucket.

        Unknown, blank or missing statuses are rejected before any gateway
        call and emit nothing. Gateway failures are logged only; the cache
        and the error slot are left as they were.

        Args:
            task: The task to move.
            status: Target status, a ``TaskStatus`` or its string value.

        Returns:
            Ok(task as returned by the server), or Err.
        """
        target = parse_status(status)
        if target is None:
            logger.warning(f"change_status: rejected invalid status {status!r}")
            return Err(EngineError.validation(f"Invalid status: {status!r}"))

        if task is None:
            logger.error("change_status: no task selected")
            return Err(EngineError.invalid_target("No task selected"))

        result = _unwrap(await self._gateway.set_status(task.id, target), STATUS_FAILED)
        if isinstance(result, Err):
            logger.error(f"change_status: task {task.id} -> {target.value} failed: {result.error}")
            return result

        server_status = result.value.status
        self._cache.patch(
            task.id,
            lambda cached: cached.model_copy(update={"status": server_status}),
        )
        self._publish(TaskStatusChanged(task_id=task.id, status=server_status))
        await self._pipeline.refresh()
        return result

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    async def update(self, task: Task | None, draft: TaskDraft) -> Result[Task, EngineError]:
        """Save a new title and description for ``task``.

        The draft is merged over the cached entry, so status and owner stay
        as the cache last saw them. On success the cache entry
        becomes exactly the server's copy, and ``UpdateDialogClosed`` is
        published. On failure the error slot is set and no close event is
        published, so the dialog stays open.
        """
        if task is None:
            logger.error("update: no task selected")
            error = EngineError.invalid_target("No task selected")
            self._errors.set(error)
            return Err(error)

        checked = validate_draft(draft)
        if isinstance(checked, Err):
            return checked

        # the caller's copy may predate a status change
        current = self._cache.get(task.id) or task
        merged = current.model_copy(
            update={
                "title": checked.value.title,
                "description": checked.value.description,
            }
        )

        result = _unwrap(await self._gateway.update(merged), UPDATE_FAILED)
        if isinstance(result, Err):
            logger.error(f"update: task {task.id} failed: {result.error}")
            self._errors.set(result.error)
            return result

        saved = result.value
        self._cache.patch(task.id, lambda _cached: saved)
        draft.clear()
        self._publish(TaskUpdated(task=saved))
        self._publish(UpdateDialogClosed(task=saved))
        await self._pipeline.refresh()
        return Ok(saved)

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    async def delete(self, task: Task | None) -> Result[Task, EngineError]:
        """Delete ``task`` on the server and drop it from the cache.

        A missing target is an error: it is logged, ``DeleteDialogClosed``
        is still published with ``task=None``, and Err is returned.
        """
        if task is None:
            logger.error("delete: no task selected")
            self._publish(DeleteDialogClosed(task=None))
            return Err(EngineError.invalid_target("No task selected"))

        result = await self._gateway.delete(task.id)
        if isinstance(result, Err):
            error = EngineError.transport(DELETE_FAILED, status_code=result.error.status_code)
        elif not result.value.success:
            error = EngineError.application(result.value.message, DELETE_FAILED)
        else:
            error = None

        if error is not None:
            logger.error(f"delete: task {task.id} failed: {error}")
            self._errors.set(error)
            return Err(error)

        self._cache.remove(task.id)
        self._publish(TaskDeleted(task_id=task.id))
        self._publish(DeleteDialogClosed(task=task))
        await self._pipeline.refresh()
        return Ok(task)
