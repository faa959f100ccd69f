"""
Redis implementation of LockBackend
"""
import logging
from typing import List, Sequence

from redis import Redis

from .backend import LockBackend
from . import scripts

logger = logging.getLogger(__name__)

def _decode(key) -> str:
    return key.decode() if isinstance(key, bytes) else key

class RedisLockBackend(LockBackend):
    """Redis-based lock backend using SET NX PX and Lua scripts"""

    def __init__(self, redis_client: Redis):
        self._redis = redis_client

    @property
    def redis(self) -> Redis:
        return self._redis

    def close(self):
        """Cleanup connections"""
        self._redis.close()

    def acquire(self, keys: Sequence[str], token: str, ttl_ms: int) -> List[str]:
        if len(keys) != 1:
            return self._script(scripts.ACQUIRE, keys, token, ttl_ms)
        key = keys[0]
        if self._redis.set(key, token, nx=True, px=ttl_ms):
            return [key]
        return []

    def renew_if_owned(self, keys: Sequence[str], token: str, ttl_ms: int) -> List[str]:
        return self._script(scripts.RENEW_IF_OWNED, keys, token, ttl_ms)

    def release_if_owned(self, keys: Sequence[str], token: str) -> List[str]:
        return self._script(scripts.DELETE_IF_OWNED, keys, token)

    def acquire_or_renew_if_owned(self, keys: Sequence[str], token: str, ttl_ms: int) -> List[str]:
        return self._script(scripts.ACQUIRE_OR_RENEW_IF_OWNED, keys, token, ttl_ms)

    def owned(self, keys: Sequence[str]) -> List[str]:
        if not keys:
            return []
        values = self._redis.mget(list(keys))
        return [key for key, value in zip(keys, values) if value is not None]

    def _script(self, script: str, keys: Sequence[str], *args) -> List[str]:
        if not keys:
            return []
        result = self._redis.eval(script, len(keys), *keys, *args)
        return [_decode(key) for key in result or []]
