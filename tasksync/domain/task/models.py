"""Task domain models.

Tasks are owned by the server: ids and timestamps are assigned remotely and
treated as opaque. Models are frozen so cached entries can be shared between
derived views without aliasing; a change always produces a new object.
Field aliases match the camelCase wire format of the task service.
"""

from enum import Enum

from pydantic import BaseModel, Field


class TaskStatus(str, Enum):
    """Lifecycle bucket of a task."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


def parse_status(value: object) -> TaskStatus | None:
    """Parse a raw status value, returning None for anything unknown.

    Accepts ``TaskStatus`` members and their string values. ``None``, blank
    strings and unknown names are rejected.
    """
    if isinstance(value, TaskStatus):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return TaskStatus(value.strip())
    except ValueError:
        return None


class Task(BaseModel):
    """A task as returned by the server."""

    id: str
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    user_email: str = Field(alias="userEmail")
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")

    model_config = {"frozen": True, "populate_by_name": True}

    def to_wire(self) -> dict:
        """Serialize using the service's field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TaskCreateRequest(BaseModel):
    """Payload for creating a task. Not a Task until the server assigns an id."""

    title: str
    description: str = ""
    user_email: str = Field(alias="userEmail")
    status: TaskStatus = TaskStatus.TODO

    model_config = {"frozen": True, "populate_by_name": True}

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class TaskDraft(BaseModel):
    """Editable form content for creating or updating a task."""

    title: str = ""
    description: str = ""

    def clear(self) -> None:
        """Reset the form after a successful submit."""
        self.title = ""
        self.description = ""


class TaskStats(BaseModel):
    """Aggregate counts over one snapshot of the task list."""

    total: int = 0
    todo: int = 0
    in_progress: int = Field(default=0, alias="inProgress")
    done: int = 0
    completion_rate: int = Field(default=0, alias="completionRate")

    model_config = {"frozen": True, "populate_by_name": True}
