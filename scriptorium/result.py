"""
Result type for operations that can fail.

Repository operations return ``Ok(value)`` or ``Err(error)`` instead of
raising, so callers branch on ``result.ok`` rather than catching exceptions.

Example:
    result = await repository.get_posts()
    if result.ok:
        posts = result.value
    else:
        logging.error(result.error)
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, List, TypeVar, Union

from .errors import OperationError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful result."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))

    def flat_map(self, fn: Callable[[T], "Result"]) -> "Result":
        return fn(self.value)

    def map_err(self, fn: Callable[[Exception], Exception]) -> "Ok[T]":
        return self


@dataclass(frozen=True)
class Err:
    """A failed result carrying an exception."""

    error: Exception

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error

    def unwrap_or(self, default: Any) -> Any:
        return default

    def map(self, fn: Callable[[Any], Any]) -> "Err":
        return self

    def flat_map(self, fn: Callable[[Any], "Result"]) -> "Err":
        return self

    def map_err(self, fn: Callable[[Exception], Exception]) -> "Err":
        return Err(fn(self.error))


Result = Union[Ok[T], Err]


def is_ok(result: "Result") -> bool:
    return isinstance(result, Ok)


def is_err(result: "Result") -> bool:
    return isinstance(result, Err)


def normalize_error(error: Any) -> Exception:
    """Coerce any caught value into an Exception instance."""
    if isinstance(error, Exception):
        return error
    return Exception(str(error))


def to_err(error: Any, operation: str) -> Err:
    """
    Convert a caught exception into the normalized failure shape.

    Args:
        error: The caught value
        operation: Name of the failing operation, kept in the message

    Returns:
        Err wrapping an OperationError
    """
    normalized = normalize_error(error)
    logging.error(f"{operation} error: {normalized}")
    return Err(OperationError(operation, normalized))


async def gather_results(*awaitables: Awaitable["Result"]) -> "Result":
    """
    Run independent Result-returning fetches concurrently.

    All must succeed: the first failure (in argument order) fails the
    aggregate. On success the values are returned in argument order.
    """
    results: List[Result] = await asyncio.gather(*awaitables)
    for result in results:
        if not result.ok:
            return result
    return Ok([result.value for result in results])
