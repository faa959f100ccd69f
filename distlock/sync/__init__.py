from .backend import LockBackend
from .redis_backend import RedisLockBackend
from .memory_backend import MemoryLockBackend
from .connection import LockConnection
from .lock import DistributedLock
from .provider import LockProvider, ConnectionSource

__all__ = [
    "LockBackend",
    "RedisLockBackend",
    "MemoryLockBackend",
    "LockConnection",
    "DistributedLock",
    "LockProvider",
    "ConnectionSource",
]
