"""Shared domain building blocks.

- Result type for explicit error handling
- Error taxonomy (``ErrorKind``, ``EngineError``)
"""

from tasksync.domain.shared.errors import EngineError, ErrorKind
from tasksync.domain.shared.result import (
    Err,
    Ok,
    Result,
    is_err,
    map_result,
)

__all__ = [
    # Result
    "Ok",
    "Err",
    "Result",
    "is_err",
    "map_result",
    # Errors
    "ErrorKind",
    "EngineError",
]
