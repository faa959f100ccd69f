import threading
from concurrent.futures import Executor, Future
from typing import Callable, List, Sequence, TypeVar

from .backend import LockBackend

T = TypeVar("T")

class LockConnection:
    """
    Binds a lock session's owner token and expiry to the shared backend.

    Also owns the session's guard: every guarded call runs with the
    per-instance mutex held, either on the caller's thread or on the
    session executor.
    """
    def __init__(self, token: str, backend: LockBackend, expiry_ms: int, executor: Executor):
        self.token = token
        self.backend = backend
        self.expiry_ms = expiry_ms
        self.executor = executor
        self._guard = threading.Lock()

    def try_acquire(self, keys: Sequence[str]) -> List[str]:
        return self.backend.acquire(keys, self.token, self.expiry_ms)

    def try_acquire_or_renew(self, keys: Sequence[str]) -> List[str]:
        return self.backend.acquire_or_renew_if_owned(keys, self.token, self.expiry_ms)

    def try_renew(self, keys: Sequence[str]) -> List[str]:
        return self.backend.renew_if_owned(keys, self.token, self.expiry_ms)

    def try_release(self, keys: Sequence[str]) -> List[str]:
        return self.backend.release_if_owned(keys, self.token)

    def is_owned(self, keys: Sequence[str]) -> List[str]:
        return self.backend.owned(keys)

    def guarded(self, action: Callable[[], T]) -> T:
        with self._guard:
            return action()

    def guarded_async(self, action: Callable[[], T]) -> "Future[T]":
        return self.executor.submit(self.guarded, action)
