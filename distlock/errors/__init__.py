from .error import (
    DistLockError, LockUsageError, NotReentrantError, NotInitializedError,
    AlreadyInitializedError, AcquireFailedError, ConfigError
)
