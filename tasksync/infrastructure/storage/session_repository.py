"""Persistence of the signed-in session.

Only the token and user survive between runs. Tasks are always fetched
fresh from the server.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from tasksync.config import get_config_dir
from tasksync.domain.shared import EngineError, Err, Ok, Result
from tasksync.domain.user import AuthState
from tasksync.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)

SESSION_FILE = "session.json"


class SessionRepository:
    """Stores ``AuthState`` in ``<config dir>/session.json``."""

    def __init__(
        self,
        storage: JsonStorage | None = None,
        path: Path | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            storage: JsonStorage to use. Creates a new one if not provided.
            path: Session file location. Defaults to the config directory.
        """
        self._storage = storage or JsonStorage()
        self._path = path

    @property
    def path(self) -> Path:
        if self._path is None:
            self._path = get_config_dir() / SESSION_FILE
        return self._path

    def load(self) -> Result[AuthState, EngineError]:
        """Load the saved session.

        Returns:
            Ok(AuthState); a signed-out state when nothing usable is saved.
        """
        if not self.path.exists():
            return Ok(AuthState.signed_out())

        result = self._storage.load_json(self.path)
        if isinstance(result, Err):
            return result

        try:
            state = AuthState(**result.value)
        except ValidationError as e:
            logger.warning(f"Discarding invalid session file {self.path}: {e}")
            return Ok(AuthState.signed_out())

        if not (state.token and state.user):
            return Ok(AuthState.signed_out())
        return Ok(state)

    def save(self, state: AuthState) -> Result[None, EngineError]:
        """Persist ``state``."""
        return self._storage.save_json(self.path, state.model_dump(mode="json"))

    def clear(self) -> Result[None, EngineError]:
        """Forget the saved session."""
        return self._storage.remove(self.path)
