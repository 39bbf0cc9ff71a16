"""Try type for explicit error handling without exceptions.

Provides a Try[T, E] container holding exactly one of a success value or a
failure value. Callers get at the payload only through ``fold``, ``map``,
``map_failure`` or ``recover`` (or structural pattern matching), so a
failure can never be silently unwrapped.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")
R = TypeVar("R")

# Platform faults are never captured as a Failure.
_FATAL_ERRORS = (MemoryError, RecursionError)


@dataclass(frozen=True, slots=True, repr=False)
class Success(Generic[T]):
    """Successful outcome holding a value."""

    _value: T

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> Try[U, E]:  # type: ignore[type-var]
        return Success(fn(self._value))

    def flat_map(self, fn: Callable[[T], Try[U, E]]) -> Try[U, E]:  # type: ignore[type-var]
        result = fn(self._value)
        if not isinstance(result, (Success, Failure)):
            raise TypeError(
                f"flat_map function must return a Try, got {type(result).__name__}"
            )
        return result

    def map_failure(self, fn: Callable[[E], F]) -> Try[T, F]:  # type: ignore[type-var]
        return self

    def fold(self, on_success: Callable[[T], R], on_failure: Callable[[Any], R]) -> R:
        return on_success(self._value)

    def recover(self, fallback: Callable[[Any], T]) -> T:
        return self._value


@dataclass(frozen=True, slots=True, repr=False)
class Failure(Generic[E]):
    """Failed outcome holding an error value."""

    _error: E

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], U]) -> Try[U, E]:  # type: ignore[type-var]
        return self

    def flat_map(self, fn: Callable[[Any], Try[U, E]]) -> Try[U, E]:  # type: ignore[type-var]
        return self

    def map_failure(self, fn: Callable[[E], F]) -> Try[T, F]:  # type: ignore[type-var]
        return Failure(fn(self._error))

    def fold(self, on_success: Callable[[Any], R], on_failure: Callable[[E], R]) -> R:
        return on_failure(self._error)

    def recover(self, fallback: Callable[[E], T]) -> T:
        return fallback(self._error)


Try = Union[Success[T], Failure[E]]


def success(value: T) -> Success[T]:
    """Wrap a value as a successful Try."""
    return Success(value)


def failure(error: E) -> Failure[E]:
    """Wrap an error as a failed Try."""
    return Failure(error)


def is_try(obj: object) -> bool:
    return isinstance(obj, (Success, Failure))


def attempt(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Try[T, Exception]:
    """Call ``fn`` and capture its outcome as a Try.

    A returned value becomes a Success and a raised ``Exception`` becomes a
    Failure holding the exception. ``MemoryError``, ``RecursionError`` and
    non-``Exception`` signals (KeyboardInterrupt, SystemExit, cancellation)
    propagate.
    """
    try:
        return Success(fn(*args, **kwargs))
    except _FATAL_ERRORS:
        raise
    except Exception as exc:
        return Failure(exc)


def attempting(fn: Callable[..., T]) -> Callable[..., Try[T, Exception]]:
    """Decorator form of :func:`attempt`."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Try[T, Exception]:
        return attempt(fn, *args, **kwargs)

    return wrapper


async def attempt_async(awaitable: Awaitable[T]) -> Try[T, Exception]:
    """Await ``awaitable`` and capture its outcome as a Try."""
    try:
        return Success(await awaitable)
    except _FATAL_ERRORS:
        raise
    except Exception as exc:
        return Failure(exc)
