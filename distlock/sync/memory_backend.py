import threading
import time
from typing import Dict, List, Optional, Sequence, Tuple

from .backend import LockBackend

class MemoryLockBackend(LockBackend):
    """
    In-memory implementation of LockBackend.
    Keys live in a dict guarded by a single mutex, so every operation is
    atomic across its whole key set. Useful for single-process deployments
    and testing without Redis.
    """
    def __init__(self, clock=time.monotonic):
        self._entries: Dict[str, Tuple[str, float]] = {}
        self._mutex = threading.Lock()
        self._clock = clock

    def _current(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        token, expires_at = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return None
        return token

    def _put(self, key: str, token: str, ttl_ms: int):
        self._entries[key] = (token, self._clock() + ttl_ms / 1000.0)

    def acquire(self, keys: Sequence[str], token: str, ttl_ms: int) -> List[str]:
        if not keys:
            return []
        output = []
        with self._mutex:
            for key in keys:
                if self._current(key) is None:
                    self._put(key, token, ttl_ms)
                    output.append(key)
        return output

    def renew_if_owned(self, keys: Sequence[str], token: str, ttl_ms: int) -> List[str]:
        if not keys:
            return []
        output = []
        with self._mutex:
            for key in keys:
                if self._current(key) == token:
                    self._put(key, token, ttl_ms)
                    output.append(key)
        return output

    def release_if_owned(self, keys: Sequence[str], token: str) -> List[str]:
        if not keys:
            return []
        output = []
        with self._mutex:
            for key in keys:
                if self._current(key) == token:
                    del self._entries[key]
                    output.append(key)
        return output

    def acquire_or_renew_if_owned(self, keys: Sequence[str], token: str, ttl_ms: int) -> List[str]:
        if not keys:
            return []
        output = []
        with self._mutex:
            for key in keys:
                current = self._current(key)
                if current is None or current == token:
                    self._put(key, token, ttl_ms)
                    output.append(key)
        return output

    def owned(self, keys: Sequence[str]) -> List[str]:
        if not keys:
            return []
        with self._mutex:
            return [key for key in keys if self._current(key) is not None]

    def close(self):
        with self._mutex:
            self._entries.clear()
