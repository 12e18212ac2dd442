"""Session context handed to the engine.

The engine only ever reads the current email and token through the
``SessionContext`` protocol; it is given one explicitly at construction and
never reaches for process-wide state.
"""

import logging
from typing import Protocol

from tasksync.domain.shared import Err
from tasksync.domain.user import AuthState, User
from tasksync.infrastructure.storage import SessionRepository

logger = logging.getLogger(__name__)


class SessionContext(Protocol):
    """Read-only view of who is signed in."""

    def get_current_email(self) -> str | None: ...

    def get_token(self) -> str | None: ...


class StaticSession:
    """Immutable session, for scripts and tests."""

    def __init__(self, email: str | None, token: str | None = None) -> None:
        self._email = email
        self._token = token

    def get_current_email(self) -> str | None:
        return self._email

    def get_token(self) -> str | None:
        return self._token


class SessionStore:
    """Mutable holder of the auth state, backed by a ``SessionRepository``.

    Implements ``SessionContext``; only the auth service and the 401 handler
    change it.
    """

    def __init__(self, repository: SessionRepository | None = None) -> None:
        self._repository = repository
        self._state = AuthState.signed_out()

    @classmethod
    def restore(cls, repository: SessionRepository) -> "SessionStore":
        """Create a store from the persisted session, if there is one."""
        store = cls(repository)
        result = repository.load()
        if isinstance(result, Err):
            logger.warning(f"Could not restore session: {result.error}")
        else:
            store._state = result.value
        return store

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    @property
    def user(self) -> User | None:
        return self._state.user

    def get_current_email(self) -> str | None:
        return self._state.email

    def get_token(self) -> str | None:
        return self._state.token

    def sign_in(self, user: User, token: str) -> None:
        self._state = AuthState.signed_in(user, token)
        if self._repository is not None:
            result = self._repository.save(self._state)
            if isinstance(result, Err):
                logger.error(f"Could not save session: {result.error}")

    def logout(self) -> None:
        self._state = AuthState.signed_out()
        if self._repository is not None:
            result = self._repository.clear()
            if isinstance(result, Err):
                logger.error(f"Could not clear session: {result.error}")
