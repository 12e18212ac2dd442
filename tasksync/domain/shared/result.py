"""Ok / Err values returned by gateway calls, validation and intents.

Nothing in the engine raises for an expected failure: a dropped
connection, a ``success: false`` envelope and a too-short title all come
back as ``Err(EngineError)`` for the caller to inspect.

Example usage:
    >>> checked = validate_draft(draft)
    >>> if is_err(checked):
    ...     print(checked.error.message)
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """The call succeeded with ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """The call failed; ``error`` is normally an ``EngineError``."""

    error: E


Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_err(result: "Result[T, E]") -> bool:
    return isinstance(result, Err)


def map_result(result: "Result[T, E]", fn: Callable[[T], U]) -> "Result[U, E]":
    """Apply ``fn`` to an Ok value; an Err is returned as is."""
    if is_err(result):
        return result
    return Ok(fn(result.value))
