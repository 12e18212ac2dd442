"""Error taxonomy for the task engine.

Every failure the engine can observe is described by an ``EngineError``
tagged with an ``ErrorKind``. The kind decides how the failure is treated:
whether it ever reaches the network, whether it lands in the error slot,
and which fallback message is shown.
"""

from enum import Enum

from pydantic import BaseModel


class ErrorKind(str, Enum):
    """Category of an engine failure."""

    UNAUTHENTICATED = "unauthenticated"
    VALIDATION = "validation"
    TRANSPORT = "transport"
    APPLICATION = "application"
    INVALID_TARGET = "invalid_target"
    BUSY = "busy"
    NOT_FOUND = "not_found"


class EngineError(BaseModel):
    """A failure reported by the gateway, the session or local checks.

    Attributes:
        kind: Category of the failure.
        message: Human readable message, safe to show to the user.
        status_code: HTTP status for transport failures, if one was received.
    """

    kind: ErrorKind
    message: str
    status_code: int | None = None

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.message

    @classmethod
    def unauthenticated(cls, message: str = "You must be signed in") -> "EngineError":
        return cls(kind=ErrorKind.UNAUTHENTICATED, message=message)

    @classmethod
    def validation(cls, message: str) -> "EngineError":
        return cls(kind=ErrorKind.VALIDATION, message=message)

    @classmethod
    def transport(cls, message: str, status_code: int | None = None) -> "EngineError":
        return cls(kind=ErrorKind.TRANSPORT, message=message, status_code=status_code)

    @classmethod
    def application(cls, message: str | None, fallback: str) -> "EngineError":
        """Build an application failure, preferring the server's message."""
        return cls(kind=ErrorKind.APPLICATION, message=message or fallback)

    @classmethod
    def invalid_target(cls, message: str) -> "EngineError":
        return cls(kind=ErrorKind.INVALID_TARGET, message=message)
