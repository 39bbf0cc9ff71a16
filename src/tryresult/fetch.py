"""Run independent fetches and aggregate their outcomes.

Each fetcher runs on its own, and anything it raises is caught inside its
own task and turned into a Failure, so one bad fetch never aborts its
siblings. Both entry points wait for every fetch to finish before
aggregating (a join barrier); results follow input order, not completion
order.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Awaitable, Callable, Hashable, Mapping, Optional, Sequence, TypeVar, Union

from src.tryresult.aggregate import AggregatedResult, combine_keyed
from src.tryresult.config import TryResultConfig, get_config
from src.tryresult.result import Try, attempt, attempt_async

logger = logging.getLogger(__name__)

T = TypeVar("T")

Fetchers = Union[Mapping[Hashable, Callable[[], T]], Sequence[Callable[[], T]]]
AsyncFetchers = Union[
    Mapping[Hashable, Callable[[], Awaitable[T]]],
    Sequence[Callable[[], Awaitable[T]]],
]


def _as_mapping(fetchers: Any) -> dict[Hashable, Any]:
    if isinstance(fetchers, Mapping):
        return dict(fetchers)
    if isinstance(fetchers, (str, bytes)):
        raise TypeError("Fetchers must be a mapping or a sequence of callables")
    return dict(enumerate(fetchers))


def _log_outcome(key: Hashable, outcome: Try[Any, Exception], config: TryResultConfig) -> None:
    if not config.log_failures or outcome.is_success():
        return

    def warn(exc: Exception) -> None:
        logger.warning(
            "Fetch %r failed: %s: %s",
            key,
            type(exc).__name__,
            exc,
            exc_info=(type(exc), exc, exc.__traceback__),
        )

    outcome.fold(lambda _: None, warn)


def fetch_all(
    fetchers: Fetchers[T],
    max_workers: Optional[int] = None,
    config: Optional[TryResultConfig] = None,
) -> AggregatedResult[T, Exception]:
    """Run every fetcher on a thread pool and aggregate the outcomes.

    Args:
        fetchers: Zero-argument callables. A mapping keys the results by its
            keys; a sequence keys them by position.
        max_workers: Override for ``config.max_workers``; 0 means one
            worker per fetcher.
        config: Optional TryResultConfig. Defaults to environment-based config.

    Returns:
        AggregatedResult with every returned value and every raised exception.
    """
    config = config or get_config()
    keyed = _as_mapping(fetchers)
    workers = config.resolve_workers(len(keyed), max_workers)

    logger.debug("Fetching %d item(s) with %d worker(s)", len(keyed), workers)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {key: pool.submit(attempt, fn) for key, fn in keyed.items()}
        outcomes = {key: future.result() for key, future in futures.items()}

    for key, outcome in outcomes.items():
        _log_outcome(key, outcome, config)

    aggregated = combine_keyed(outcomes)
    logger.debug(
        "Fetched %d item(s): %d succeeded, %d failed",
        aggregated.total,
        len(aggregated.successes),
        len(aggregated.failures),
    )
    return aggregated


async def gather_all(
    fetchers: AsyncFetchers[T],
    concurrency: Optional[int] = None,
    config: Optional[TryResultConfig] = None,
) -> AggregatedResult[T, Exception]:
    """Asyncio counterpart of :func:`fetch_all`.

    Fetchers are coroutine functions; at most ``concurrency`` of them run
    at once.
    """
    config = config or get_config()
    keyed = _as_mapping(fetchers)
    limit = config.resolve_workers(len(keyed), concurrency)
    sem = asyncio.Semaphore(limit)

    logger.debug("Gathering %d item(s) with concurrency=%d", len(keyed), limit)

    async def _one(fn: Callable[[], Awaitable[T]]) -> Try[T, Exception]:
        async with sem:
            outcome = await attempt_async(_call(fn))
        return outcome

    tasks = [asyncio.ensure_future(_one(fn)) for fn in keyed.values()]
    try:
        gathered = await asyncio.gather(*tasks)
    except BaseException:
        # A fatal fault still waits for every sibling to stop.
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    outcomes = dict(zip(keyed.keys(), gathered))

    for key, outcome in outcomes.items():
        _log_outcome(key, outcome, config)

    aggregated = combine_keyed(outcomes)
    logger.debug(
        "Gathered %d item(s): %d succeeded, %d failed",
        aggregated.total,
        len(aggregated.successes),
        len(aggregated.failures),
    )
    return aggregated


async def _call(fn: Callable[[], Awaitable[T]]) -> T:
    # Calling fn may itself raise before any awaitable exists.
    return await fn()
