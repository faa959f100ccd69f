import logging
import threading
import uuid
from concurrent.futures import Executor
from typing import Callable, Optional

from redis import Redis

from ..common.config import get_settings
from ..common.config.models import AppConfig, LockConfig
from ..errors import AlreadyInitializedError, ConfigError, NotInitializedError
from ..utils.connector import redis_client_source
from .backend import LockBackend
from .connection import LockConnection
from .lock import DistributedLock
from .redis_backend import RedisLockBackend

logger = logging.getLogger(__name__)

ConnectionSource = Callable[[], LockBackend]

class LockProvider:
    """
    Creates DistributedLock instances bound to one shared backend.

    The backend comes from ``connection_source``, called once by
    ``initialize()``. A provider built with a ready ``backend`` needs no
    initialization.
    """

    def __init__(
        self,
        connection_source: Optional[ConnectionSource] = None,
        *,
        backend: Optional[LockBackend] = None,
        defaults: Optional[LockConfig] = None,
        key_prefix: Optional[str] = None,
    ):
        if connection_source is None and backend is None:
            raise ConfigError("LockProvider needs a connection source or a backend")
        self._connection_source = connection_source
        self._backend = backend
        self._defaults = defaults or LockConfig()
        self._key_prefix = key_prefix if key_prefix is not None else self._defaults.key_prefix
        self._init_lock = threading.Lock()

    @classmethod
    def for_redis(cls, client_source: Callable[[], Redis], **kwargs) -> "LockProvider":
        """Provider whose shared backend wraps the client returned by ``client_source``."""
        return cls(lambda: RedisLockBackend(client_source()), **kwargs)

    @classmethod
    def from_settings(cls, config: Optional[AppConfig] = None) -> "LockProvider":
        config = config or get_settings()
        return cls.for_redis(
            redis_client_source(config.redis),
            defaults=config.lock,
        )

    @property
    def initialized(self) -> bool:
        return self._backend is not None

    @property
    def backend(self) -> LockBackend:
        if self._backend is None:
            raise NotInitializedError("LockProvider is not initialized. Call initialize() first.")
        return self._backend

    @property
    def key_prefix(self) -> str:
        return self._key_prefix

    @property
    def defaults(self) -> LockConfig:
        return self._defaults

    def initialize(self):
        with self._init_lock:
            if self._backend is not None:
                raise AlreadyInitializedError("LockProvider is already initialized. Cannot initialize twice.")
            if self._connection_source is None:
                raise AlreadyInitializedError("LockProvider was created with a backend. Initialize is not needed.")
            self._backend = self._connection_source()
            logger.info(f"LockProvider initialized with {type(self._backend).__name__}")

    def create(
        self,
        identifier: str,
        executor: Executor,
        acquire_timeout: Optional[float] = None,
        expiry_timeout: Optional[float] = None,
        poll_interval_ms: Optional[int] = None,
    ) -> DistributedLock:
        """Build a lock for ``identifier``. No store round trip happens here."""
        backend = self.backend

        if acquire_timeout is None:
            acquire_timeout = self._defaults.acquire_timeout
        if expiry_timeout is None:
            expiry_timeout = self._defaults.expiry_timeout
        if poll_interval_ms is None:
            poll_interval_ms = self._defaults.poll_interval_ms

        if acquire_timeout < 0:
            raise ConfigError(f"acquire_timeout must not be negative, got {acquire_timeout}")
        expiry_ms = int(expiry_timeout * 1000)
        if expiry_ms <= 0:
            raise ConfigError(f"expiry_timeout must be at least 1ms, got {expiry_timeout}")
        if poll_interval_ms <= 0:
            raise ConfigError(f"poll_interval_ms must be positive, got {poll_interval_ms}")

        connection = LockConnection(
            token=str(uuid.uuid4()),
            backend=backend,
            expiry_ms=expiry_ms,
            executor=executor,
        )
        return DistributedLock(
            key=f"{self._key_prefix}{identifier}",
            connection=connection,
            acquire_timeout=acquire_timeout,
            expiry_timeout=expiry_timeout,
            poll_interval_ms=poll_interval_ms,
        )

    def close(self):
        """Close the shared backend. Locks created so far must not be used afterwards."""
        with self._init_lock:
            if self._backend is None:
                return
            backend, self._backend = self._backend, None
        backend.close()
        logger.info("LockProvider closed")
