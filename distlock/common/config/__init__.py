import logging
from pathlib import Path
from typing import Optional, Union
import tomllib

from pydantic import ValidationError

from ...errors import ConfigError
from .models import AppConfig, RedisConfig, LockConfig, LoggingConfig, LOCK_PREFIX

logger = logging.getLogger(__name__)

CONFIG_FILE = "distlock.toml"

def _deep_update(base: dict, updates: dict) -> dict:
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def load_settings(path: Optional[Union[str, Path]] = None) -> AppConfig:
    """
    Load settings from a TOML file layered over env/defaults.

    Without an explicit path, ``distlock.toml`` in the working directory is
    used when present.
    """
    if path is None:
        candidate = Path.cwd() / CONFIG_FILE
        if not candidate.exists():
            return AppConfig()
        config_path = candidate
    else:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file {config_path}", e) from e

    base = AppConfig().model_dump()
    merged = _deep_update(base, raw)
    try:
        config = AppConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {config_path}", e) from e
    logger.debug(f"Loaded settings from {config_path}")
    return config


settings = load_settings()

def get_settings() -> AppConfig:
    return settings

def update_settings(new_settings: AppConfig):
    global settings
    settings = new_settings
