import logging
import threading
import time
from concurrent.futures import Future
from typing import Callable, Optional, TypeVar

from ..errors import AcquireFailedError, NotReentrantError
from .connection import LockConnection

logger = logging.getLogger(__name__)

T = TypeVar("T")

class DistributedLock:
    """
    A non-reentrant lock on one store key, owned by a random instance token.

    The ``held`` flag is a local view of the store: it is set by a successful
    acquire and cleared by release or by a renew that finds the key gone or
    owned by someone else. All operations on one instance are serialized by
    its connection guard; separate instances only exclude each other through
    the store.
    """

    def __init__(
        self,
        key: str,
        connection: LockConnection,
        acquire_timeout: float,
        expiry_timeout: float,
        poll_interval_ms: int,
    ):
        self._key = key
        self._keys = (key,)
        self._connection = connection
        self._acquire_timeout = acquire_timeout
        self._expiry_timeout = expiry_timeout
        self._poll_interval_ms = poll_interval_ms
        self._held = False
        self._interrupts = threading.Condition()
        self._generation = 0

    @property
    def key(self) -> str:
        return self._key

    @property
    def token(self) -> str:
        return self._connection.token

    @property
    def acquire_timeout(self) -> float:
        return self._acquire_timeout

    @property
    def expiry_timeout(self) -> float:
        return self._expiry_timeout

    @property
    def poll_interval_ms(self) -> int:
        return self._poll_interval_ms

    def acquire(self, timeout: Optional[float] = None) -> bool:
        """
        Poll the store until the key is set to this lock's token.

        Returns False when ``timeout`` (defaults to the lock's acquire timeout)
        elapses or ``interrupt()`` is called after this request was made. Raises
        NotReentrantError when this instance already holds the lock.
        """
        generation = self._generation
        return self._connection.guarded(lambda: self._acquire_guarded(timeout, generation))

    def acquire_async(self, timeout: Optional[float] = None) -> "Future[bool]":
        generation = self._generation
        return self._connection.guarded_async(lambda: self._acquire_guarded(timeout, generation))

    def renew(self) -> bool:
        """Extend the expiry if the store still records this token as owner."""
        return self._connection.guarded(self._renew_guarded)

    def renew_async(self) -> "Future[bool]":
        return self._connection.guarded_async(self._renew_guarded)

    def release(self) -> bool:
        """Delete the key if still owned. The lock is idle afterwards whether or not it was."""
        return self._connection.guarded(self._release_guarded)

    def release_async(self) -> "Future[bool]":
        return self._connection.guarded_async(self._release_guarded)

    def is_held(self) -> bool:
        return self._connection.guarded(lambda: self._held)

    def is_held_async(self) -> "Future[bool]":
        return self._connection.guarded_async(lambda: self._held)

    def interrupt(self):
        """
        Cancel every acquisition requested before this call.

        Acquisitions already polling wake up and return False; those still
        queued behind the session guard return False once they get it.
        Later acquisitions are unaffected.
        """
        with self._interrupts:
            self._generation += 1
            self._interrupts.notify_all()

    def with_lock(self, action: Callable[[], T], timeout: Optional[float] = None) -> T:
        """
        Run ``action`` while holding the lock and release afterwards.

        Raises AcquireFailedError without running the action when the lock
        cannot be obtained. An exception from the action propagates after the
        release; a failing release does not replace it.
        """
        if not self.acquire(timeout):
            raise AcquireFailedError(f"Failed to acquire the lock {self._key}")
        try:
            result = action()
        except BaseException:
            try:
                self.release()
            except Exception:
                logger.exception(f"Error releasing lock {self._key} after failed action", extra={"lock_key": self._key})
            raise
        self.release()
        return result

    def with_lock_async(self, action: Callable[[], T], timeout: Optional[float] = None) -> "Future[T]":
        return self._connection.executor.submit(self.with_lock, action, timeout)

    def try_with_lock(self, action: Callable[[], T], timeout: Optional[float] = None) -> Optional[T]:
        """Like with_lock, but returns None when the lock cannot be obtained."""
        try:
            return self.with_lock(action, timeout)
        except AcquireFailedError:
            return None

    def __enter__(self):
        if not self.acquire():
            raise AcquireFailedError(f"Failed to acquire the lock {self._key}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.release()
            return
        try:
            self.release()
        except Exception:
            logger.exception(f"Error releasing lock {self._key} after failed block", extra={"lock_key": self._key})

    def __repr__(self):
        return f"DistributedLock(key={self._key!r}, token={self.token!r}, held={self._held})"

    def _acquire_guarded(self, timeout: Optional[float], generation: int) -> bool:
        if self._held:
            raise NotReentrantError(f"Lock {self._key} is not reentrant")
        if self._generation != generation:
            logger.warning(f"Acquisition of lock {self._key} interrupted", extra={"lock_key": self._key})
            return False

        if timeout is None:
            timeout = self._acquire_timeout
        deadline = time.monotonic() + timeout
        poll_interval = self._poll_interval_ms / 1000.0

        while True:
            if self._connection.try_acquire(self._keys):
                self._held = True
                logger.debug(f"Acquired lock {self._key}")
                return True
            if time.monotonic() >= deadline:
                logger.debug(f"Timed out acquiring lock {self._key} after {timeout}s")
                return False
            if self._wait_interrupted(generation, poll_interval):
                logger.warning(f"Acquisition of lock {self._key} interrupted", extra={"lock_key": self._key})
                return False

    def _wait_interrupted(self, generation: int, seconds: float) -> bool:
        with self._interrupts:
            return self._interrupts.wait_for(lambda: self._generation != generation, seconds)

    def _renew_guarded(self) -> bool:
        if not self._held:
            return False
        if not self._connection.try_renew(self._keys):
            self._held = False
            logger.warning(f"Lost lock {self._key} during renewal", extra={"lock_key": self._key})
            return False
        logger.debug(f"Renewed lock {self._key}")
        return True

    def _release_guarded(self) -> bool:
        if not self._held:
            return False
        released = bool(self._connection.try_release(self._keys))
        self._held = False
        if released:
            logger.debug(f"Released lock {self._key}")
        else:
            logger.debug(f"Lock {self._key} was no longer owned at release")
        return released
