"""Local storage for tasksync (session only)."""

from tasksync.infrastructure.storage.json_storage import JsonStorage
from tasksync.infrastructure.storage.session_repository import (
    SESSION_FILE,
    SessionRepository,
)

__all__ = [
    "JsonStorage",
    "SessionRepository",
    "SESSION_FILE",
]
