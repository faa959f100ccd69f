"""Connection helpers for the shared Redis client used by a lock provider."""

from __future__ import annotations

from typing import Callable, Optional

import redis

from ..common.config.models import RedisConfig


def create_redis_pool(
    host: str,
    port: int,
    db: int,
    username: Optional[str] = None,
    password: Optional[str] = None,
    pool_size: Optional[int] = None,
    tls: bool = False,
) -> redis.Redis:
    pool_kwargs = dict(
        host=host,
        port=port,
        db=db,
        username=username,
        password=password,
        max_connections=pool_size or 100,
        decode_responses=True,
    )
    if tls:
        pool_kwargs["connection_class"] = redis.SSLConnection
    pool = redis.ConnectionPool(**pool_kwargs)
    return redis.Redis(connection_pool=pool)


def redis_client_source(config: RedisConfig) -> Callable[[], redis.Redis]:
    """Return a zero-argument callable that builds a client from ``config``."""
    def provide() -> redis.Redis:
        return create_redis_pool(
            host=config.host,
            port=config.port,
            db=config.db,
            username=config.username,
            password=config.password,
            pool_size=config.pool_size,
            tls=config.tls,
        )
    return provide
