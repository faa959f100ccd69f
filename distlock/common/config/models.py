from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LOCK_PREFIX = "locks::"

class RedisConfig(BaseSettings):
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    username: Optional[str] = None
    password: Optional[str] = None
    pool_size: Optional[int] = None
    tls: bool = False

    @property
    def url(self) -> str:
        scheme = "rediss" if self.tls else "redis"
        auth = ""
        if self.password:
            auth = f"{self.username or ''}:{self.password}@"
        return f"{scheme}://{auth}{self.host}:{self.port}/{self.db}"

    model_config = SettingsConfigDict(env_prefix="REDIS_")

class LockConfig(BaseSettings):
    """Default timing applied to locks created by a provider."""
    key_prefix: str = LOCK_PREFIX
    acquire_timeout: float = Field(default=10.0, ge=0)
    expiry_timeout: float = Field(default=60.0, gt=0)
    poll_interval_ms: int = Field(default=500, gt=0)

    model_config = SettingsConfigDict(env_prefix="DISTLOCK_")

class LoggingConfig(BaseSettings):
    level: str = "INFO"
    format: str = "json"

    model_config = SettingsConfigDict(env_prefix="LOG_")

class AppConfig(BaseSettings):
    name: str = "distlock"
    node_id: str = "node-1"

    redis: RedisConfig = RedisConfig()
    lock: LockConfig = LockConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(env_file=".env", env_nested_delimiter="__", extra="ignore")
