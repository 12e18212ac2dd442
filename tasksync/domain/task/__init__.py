"""Task domain - models, validation, partitions and events.

All exports are pure (no I/O, no side effects).

Key Types:
    TaskStatus - Lifecycle bucket enumeration
    Task - Server-owned task entity
    TaskCreateRequest - Payload for a new task
    TaskDraft - Editable form content
    TaskStats - Aggregate counts
    TaskBoard - Consistent snapshot of all derived views

Functions:
    parse_status - Lenient status parsing
    validate_draft - Local form validation
    build_board - Derive partitions and stats from one snapshot
    compute_stats - Aggregate counts for a list
"""

from .events import (
    DeleteDialogClosed,
    DomainEvent,
    TaskCreated,
    TaskDeleted,
    TaskStatusChanged,
    TaskUpdated,
    UpdateDialogClosed,
)
from .models import (
    Task,
    TaskCreateRequest,
    TaskDraft,
    TaskStats,
    TaskStatus,
    parse_status,
)
from .partition import (
    TaskBoard,
    build_board,
    completion_rate,
    compute_stats,
    count_by_status,
    filter_by_status,
    find_by_id,
)
from .validation import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    validate_description,
    validate_draft,
    validate_title,
)

__all__ = [
    # Models
    "TaskStatus",
    "Task",
    "TaskCreateRequest",
    "TaskDraft",
    "TaskStats",
    "parse_status",
    # Partitions
    "TaskBoard",
    "build_board",
    "completion_rate",
    "compute_stats",
    "count_by_status",
    "filter_by_status",
    "find_by_id",
    # Validation
    "TITLE_MIN_LENGTH",
    "TITLE_MAX_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "validate_title",
    "validate_description",
    "validate_draft",
    # Events
    "DomainEvent",
    "TaskCreated",
    "TaskStatusChanged",
    "TaskUpdated",
    "TaskDeleted",
    "UpdateDialogClosed",
    "DeleteDialogClosed",
]
