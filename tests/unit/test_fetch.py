"""Tests for independent fetch fan-out."""

import asyncio
import logging
import threading
import time

import pytest

from src.tryresult.config import TryResultConfig
from src.tryresult.errors import FetchError
from src.tryresult.fetch import fetch_all, gather_all


def ok(value):
    return lambda: value


def boom(message: str):
    def fetch():
        raise FetchError(message, code=502)

    return fetch


def async_ok(value, delay: float = 0.0):
    async def fetch():
        await asyncio.sleep(delay)
        return value

    return fetch


def async_boom(message: str):
    async def fetch():
        raise RuntimeError(message)

    return fetch


class TestFetchAll:
    def test_failure_does_not_abort_siblings(self) -> None:
        result = fetch_all([ok(1), boom("down"), ok(3)])
        assert result.successes == (1, 3)
        assert result.keys == (0, 2)
        assert len(result.failures) == 1
        assert isinstance(result.failures[0], FetchError)
        assert result.failures[0].code == 502

    def test_mapping_keys(self) -> None:
        result = fetch_all({"a": ok("x"), "b": boom("nope"), "c": ok("z")})
        assert list(result.items()) == [("a", "x"), ("c", "z")]

    def test_order_follows_input_not_completion(self) -> None:
        def slow():
            time.sleep(0.05)
            return "slow"

        result = fetch_all([slow, ok("fast")], max_workers=2)
        assert result.successes == ("slow", "fast")

    def test_each_fetcher_called_once(self) -> None:
        calls = []
        lock = threading.Lock()

        def counted(i):
            def fetch():
                with lock:
                    calls.append(i)
                return i

            return fetch

        result = fetch_all([counted(i) for i in range(10)], max_workers=0)
        assert sorted(calls) == list(range(10))
        assert result.successes == tuple(range(10))

    def test_empty(self) -> None:
        result = fetch_all([])
        assert result.total == 0

    def test_memory_error_propagates(self) -> None:
        def exhausted():
            raise MemoryError

        with pytest.raises(MemoryError):
            fetch_all([ok(1), exhausted])

    def test_rejects_string(self) -> None:
        with pytest.raises(TypeError):
            fetch_all("abc")  # type: ignore[arg-type]

    def test_logs_failures(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="src.tryresult.fetch"):
            fetch_all({"user": boom("down")}, config=TryResultConfig())
        assert "Fetch 'user' failed" in caplog.text

    def test_failure_logging_disabled(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="src.tryresult.fetch"):
            fetch_all([boom("down")], config=TryResultConfig(log_failures=False))
        assert caplog.text == ""


class TestGatherAll:
    @pytest.mark.asyncio
    async def test_failure_does_not_abort_siblings(self) -> None:
        result = await gather_all([async_ok(1), async_boom("down"), async_ok(3)])
        assert result.successes == (1, 3)
        assert [str(e) for e in result.failures] == ["down"]

    @pytest.mark.asyncio
    async def test_order_follows_input_not_completion(self) -> None:
        result = await gather_all(
            {"slow": async_ok("s", delay=0.05), "fast": async_ok("f")}
        )
        assert list(result.items()) == [("slow", "s"), ("fast", "f")]

    @pytest.mark.asyncio
    async def test_concurrency_bound(self) -> None:
        running = 0
        peak = 0

        def tracked(i):
            async def fetch():
                nonlocal running, peak
                running += 1
                peak = max(peak, running)
                await asyncio.sleep(0.01)
                running -= 1
                return i

            return fetch

        result = await gather_all([tracked(i) for i in range(6)], concurrency=2)
        assert peak <= 2
        assert result.successes == tuple(range(6))

    @pytest.mark.asyncio
    async def test_fetcher_raising_before_await(self) -> None:
        def not_a_coroutine():
            raise ValueError("sync failure")

        result = await gather_all([not_a_coroutine, async_ok("fine")])
        assert result.successes == ("fine",)
        assert isinstance(result.failures[0], ValueError)

    @pytest.mark.asyncio
    async def test_empty(self) -> None:
        result = await gather_all({})
        assert result.total == 0

    @pytest.mark.asyncio
    async def test_memory_error_stops_siblings_before_returning(self) -> None:
        finished = []

        async def slow():
            await asyncio.sleep(0.05)
            finished.append("slow")
            return "slow"

        async def exhausted():
            raise MemoryError

        with pytest.raises(MemoryError):
            await gather_all([slow, exhausted])

        await asyncio.sleep(0.1)
        assert finished == []
        pending = [t for t in asyncio.all_tasks() if t is not asyncio.current_task()]
        assert pending == []
