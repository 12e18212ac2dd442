"""Single slot holding the last user-visible error."""

import logging

from tasksync.domain.shared import EngineError

logger = logging.getLogger(__name__)


class ErrorSlot:
    """Last error, overwritten by the next one or cleared explicitly."""

    def __init__(self) -> None:
        self._error: EngineError | None = None

    @property
    def error(self) -> EngineError | None:
        return self._error

    @property
    def message(self) -> str | None:
        return self._error.message if self._error else None

    def set(self, error: EngineError) -> None:
        logger.debug(f"error slot <- {error.kind.value}: {error.message}")
        self._error = error

    def clear(self) -> None:
        self._error = None

    def __bool__(self) -> bool:
        return self._error is not None
