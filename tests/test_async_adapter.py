import asyncio
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
from redis.exceptions import ResponseError

from distlock.errors import AcquireFailedError, NotReentrantError
from distlock.sync import LockBackend, LockProvider, MemoryLockBackend


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=4)
    yield pool
    pool.shutdown(wait=True)

@pytest.fixture
def provider():
    return LockProvider(backend=MemoryLockBackend())


def test_async_operations_match_sync_results(provider, executor):
    lock = provider.create("async", executor, acquire_timeout=0)
    other = provider.create("async", executor, acquire_timeout=0)

    assert lock.acquire_async().result(timeout=2) is True
    assert lock.is_held_async().result(timeout=2) is True
    assert other.acquire_async().result(timeout=2) is False
    assert lock.renew_async().result(timeout=2) is True
    assert lock.release_async().result(timeout=2) is True
    assert lock.release_async().result(timeout=2) is False
    assert lock.renew_async().result(timeout=2) is False


def test_async_work_runs_on_the_session_executor(provider, executor):
    lock = provider.create("async", executor, acquire_timeout=0)
    caller = threading.current_thread()
    seen = []

    future = lock.with_lock_async(lambda: seen.append(threading.current_thread()) or "ok")

    assert future.result(timeout=2) == "ok"
    assert seen and seen[0] is not caller
    assert lock.is_held() is False


def test_async_reentrancy_error_completes_future_exceptionally(provider, executor):
    lock = provider.create("async", executor, acquire_timeout=0)
    assert lock.acquire() is True

    future = lock.acquire_async()

    assert isinstance(future.exception(timeout=2), NotReentrantError)
    lock.release()


def test_with_lock_async_failures(provider, executor):
    holder = provider.create("async", executor)
    lock = provider.create("async", executor, acquire_timeout=0)
    assert holder.acquire() is True

    future = lock.with_lock_async(lambda: "never")
    assert isinstance(future.exception(timeout=2), AcquireFailedError)
    holder.release()

    def action():
        raise RuntimeError("action failed")

    future = lock.with_lock_async(action)
    with pytest.raises(RuntimeError, match="action failed"):
        future.result(timeout=2)
    assert lock.is_held() is False


def test_store_errors_complete_future_exceptionally(executor):
    backend = MagicMock(spec=LockBackend)
    backend.acquire.side_effect = ResponseError("NOSCRIPT")
    lock = LockProvider(backend=backend).create("async", executor)

    future = lock.acquire_async()

    assert isinstance(future.exception(timeout=2), ResponseError)
    assert lock.is_held() is False


def test_operations_on_one_session_are_serialized(provider, executor):
    holder = provider.create("serial", executor)
    lock = provider.create("serial", executor, acquire_timeout=0.3, poll_interval_ms=20)
    assert holder.acquire() is True

    pending = lock.acquire_async()
    time.sleep(0.05)
    started = time.monotonic()
    # waits for the pending acquisition to give up
    assert lock.is_held() is False
    assert time.monotonic() - started >= 0.15
    assert pending.result(timeout=2) is False
    holder.release()


@pytest.mark.asyncio
async def test_futures_can_be_awaited(provider, executor):
    lock = provider.create("awaited", executor, acquire_timeout=0)

    assert await asyncio.wrap_future(lock.acquire_async()) is True
    assert await asyncio.wrap_future(lock.is_held_async()) is True
    assert await asyncio.wrap_future(lock.release_async()) is True
