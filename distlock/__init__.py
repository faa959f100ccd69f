"""Distributed mutual-exclusion locks coordinated through Redis."""

from .common.config.models import LOCK_PREFIX, AppConfig, LockConfig, RedisConfig
from .errors import (
    DistLockError,
    LockUsageError,
    NotReentrantError,
    NotInitializedError,
    AlreadyInitializedError,
    AcquireFailedError,
    ConfigError,
)
from .sync import (
    LockBackend,
    RedisLockBackend,
    MemoryLockBackend,
    LockConnection,
    DistributedLock,
    LockProvider,
)

__version__ = "0.1.0"
__all__ = [
    "LOCK_PREFIX",
    "AppConfig",
    "LockConfig",
    "RedisConfig",
    "DistLockError",
    "LockUsageError",
    "NotReentrantError",
    "NotInitializedError",
    "AlreadyInitializedError",
    "AcquireFailedError",
    "ConfigError",
    "LockBackend",
    "RedisLockBackend",
    "MemoryLockBackend",
    "LockConnection",
    "DistributedLock",
    "LockProvider",
]
