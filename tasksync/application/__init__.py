"""Application layer for tasksync.

Stateful services that sit between the gateways and the user:

    session - SessionContext protocol, StaticSession, SessionStore
    auth_service - login, create-missing-user, logout
    cache - TaskCache, the in-memory task list
    error_slot - ErrorSlot, the last user-visible error
    pipeline - ViewPipeline, refresh signal and derived views
    orchestrator - MutationOrchestrator, user intents
    engine - TaskEngine, wiring of the above

Example usage:
    >>> engine = TaskEngine(gateway, StaticSession("a@x.com", token))
    >>> board = await engine.start()
    >>> board.stats.completion_rate
    33
"""

from tasksync.application.auth_service import AuthService
from tasksync.application.cache import TaskCache
from tasksync.application.engine import TaskEngine
from tasksync.application.error_slot import ErrorSlot
from tasksync.application.orchestrator import MutationOrchestrator
from tasksync.application.pipeline import ViewPipeline
from tasksync.application.session import SessionContext, SessionStore, StaticSession

__all__ = [
    # Session
    "SessionContext",
    "SessionStore",
    "StaticSession",
    "AuthService",
    # Engine
    "TaskCache",
    "ErrorSlot",
    "ViewPipeline",
    "MutationOrchestrator",
    "TaskEngine",
]
