"""Aggregation of independent Try values into partial results.

Unlike an all-or-nothing combine that stops at the first failure, every
input is visited: successes and failures are both kept, each in input
order, so a batch where some entries failed still yields all obtainable
data plus a report of what went wrong.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Hashable, Iterable, Iterator, Mapping, TypeVar

from src.tryresult.result import Try, is_try

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class AggregatedResult(Generic[T, E]):
    """All successes and all failures from one batch.

    ``keys`` runs parallel to ``successes`` and records where each value
    came from: the input position for positional batches, the mapping key
    for keyed batches.
    """

    successes: tuple[T, ...] = ()
    failures: tuple[E, ...] = ()
    keys: tuple[Hashable, ...] = ()

    def __post_init__(self) -> None:
        if len(self.keys) != len(self.successes):
            raise ValueError(
                f"Expected {len(self.successes)} keys, got {len(self.keys)}"
            )

    @property
    def total(self) -> int:
        return len(self.successes) + len(self.failures)

    def is_partial(self) -> bool:
        """True when the batch produced both data and errors."""
        return bool(self.successes) and bool(self.failures)

    def items(self) -> Iterator[tuple[Hashable, T]]:
        return iter(zip(self.keys, self.successes))


def _collect(
    pairs: Iterable[tuple[Hashable, Any]],
) -> AggregatedResult[Any, Any]:
    successes: list[Any] = []
    failures: list[Any] = []
    keys: list[Hashable] = []

    for key, item in pairs:
        if not is_try(item):
            raise TypeError(
                f"Expected a Try at {key!r}, got {type(item).__name__}"
            )

        def keep(value: Any, key: Hashable = key) -> None:
            keys.append(key)
            successes.append(value)

        item.fold(keep, failures.append)

    return AggregatedResult(
        successes=tuple(successes),
        failures=tuple(failures),
        keys=tuple(keys),
    )


def combine_all(items: Iterable[Try[T, E]]) -> AggregatedResult[T, E]:
    """Combine a sequence of Try values, keying successes by input position."""
    return _collect(enumerate(items))


def combine_keyed(items: Mapping[Hashable, Try[T, E]]) -> AggregatedResult[T, E]:
    """Combine a mapping of Try values, keying successes by mapping key."""
    return _collect(items.items())
