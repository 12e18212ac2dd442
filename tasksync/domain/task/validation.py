"""Local validation of task form content.

Runs before any submission; a draft that fails here never reaches the
gateway.
"""

from tasksync.domain.shared import EngineError, Err, Ok, Result, is_err, map_result
from tasksync.domain.task.models import TaskDraft

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def validate_title(title: str | None) -> Result[str, EngineError]:
    """Check a title and return it trimmed.

    Args:
        title: Raw title from the form.

    Returns:
        Ok(trimmed title), or Err(VALIDATION) if the trimmed title is empty
        or outside [TITLE_MIN_LENGTH, TITLE_MAX_LENGTH].
    """
    trimmed = (title or "").strip()
    if not trimmed:
        return Err(EngineError.validation("Title is required"))
    if len(trimmed) < TITLE_MIN_LENGTH:
        return Err(
            EngineError.validation(
                f"Title must be at least {TITLE_MIN_LENGTH} characters"
            )
        )
    if len(trimmed) > TITLE_MAX_LENGTH:
        return Err(
            EngineError.validation(
                f"Title must be at most {TITLE_MAX_LENGTH} characters"
            )
        )
    return Ok(trimmed)


def validate_description(description: str | None) -> Result[str, EngineError]:
    """Check that a description fits within DESCRIPTION_MAX_LENGTH."""
    value = description or ""
    if len(value) > DESCRIPTION_MAX_LENGTH:
        return Err(
            EngineError.validation(
                f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
            )
        )
    return Ok(value)


def validate_draft(draft: TaskDraft) -> Result[TaskDraft, EngineError]:
    """Validate a whole draft.

    Returns:
        Ok with a normalized copy (trimmed title), or the first validation
        error found.
    """
    title = validate_title(draft.title)
    if is_err(title):
        return title

    return map_result(
        validate_description(draft.description),
        lambda description: TaskDraft(title=title.value, description=description),
    )
