"""Response envelope shared by every task service endpoint.

``{"success": bool, "data": ..., "message": str?, "timestamp": str?}``

``success: false`` is a normal answer and parses to ``Ok(Envelope)``; only a
payload that does not look like an envelope at all becomes an error.
"""

import logging
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from tasksync.domain.shared import EngineError, Err, Ok, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Uniform service response."""

    success: bool
    data: T | None = None
    message: str | None = None
    timestamp: str | None = None


def parse_envelope(payload: Any, data_type: Any) -> Result[Envelope, EngineError]:
    """Validate a decoded JSON payload as ``Envelope[data_type]``.

    The ``data`` of an unsuccessful response is ignored, since servers
    frequently send ``null`` or a partial object there.

    Args:
        payload: Decoded JSON body.
        data_type: Expected type of ``data`` on success, e.g. ``Task``.

    Returns:
        Ok(Envelope) or Err(TRANSPORT) for a malformed payload.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("success"), bool):
        logger.error(f"Malformed envelope: {payload!r}")
        return Err(EngineError.transport("Invalid response from server"))

    if not payload["success"]:
        payload = {**payload, "data": None}

    try:
        return Ok(Envelope[data_type].model_validate(payload))
    except ValidationError as e:
        logger.error(f"Envelope data does not match {data_type!r}: {e}")
        return Err(EngineError.transport("Invalid response from server"))
