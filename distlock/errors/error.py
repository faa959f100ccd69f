class DistLockError(Exception):
    """Base error for distlock"""
    def __init__(self, message: str = None, source: Exception = None):
        self.message = message
        self.source = source
        super().__init__(self.__str__())

    def __str__(self):
        msg = self.message or self.__class__.__name__
        if self.source:
            return f"{msg}: {self.source}"
        return msg

class LockUsageError(DistLockError):
    """The lock API was used incorrectly."""
    pass

class NotReentrantError(LockUsageError):
    pass

class NotInitializedError(LockUsageError):
    pass

class AlreadyInitializedError(LockUsageError):
    pass

class AcquireFailedError(DistLockError):
    """The lock could not be obtained before the acquire timeout."""
    pass

class ConfigError(DistLockError):
    pass
