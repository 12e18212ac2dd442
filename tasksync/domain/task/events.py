"""Task domain events.

Notifications emitted by the mutation orchestrator after an intent
completes. They are immutable records; listeners react to them (closing a
dialog, printing a confirmation) but cannot change engine state through them.
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field

from .models import Task, TaskStatus


class DomainEvent(BaseModel):
    """Base class for all task events.

    Each event has a unique ID and timestamp.
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}


class TaskCreated(DomainEvent):
    """Raised when the server accepted a new task."""

    task: Task


class TaskStatusChanged(DomainEvent):
    """Raised when a task moved to another bucket.

    ``status`` is the status the server returned, not the one requested.
    """

    task_id: str
    status: TaskStatus


class TaskUpdated(DomainEvent):
    """Raised when a task's title or description was saved."""

    task: Task


class TaskDeleted(DomainEvent):
    """Raised when a task was removed on the server."""

    task_id: str


class UpdateDialogClosed(DomainEvent):
    """The edit dialog may close; carries the server's copy of the task."""

    task: Task


class DeleteDialogClosed(DomainEvent):
    """The delete confirmation may close.

    ``task`` is None when the delete was requested without a target.
    """

    task: Task | None = None
