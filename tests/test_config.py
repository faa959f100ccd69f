import pytest

from distlock.common.config import load_settings, get_settings, update_settings
from distlock.common.config.models import AppConfig, LockConfig, RedisConfig
from distlock.errors import ConfigError


def test_defaults():
    config = LockConfig()
    assert config.key_prefix == "locks::"
    assert config.acquire_timeout == 10.0
    assert config.expiry_timeout == 60.0
    assert config.poll_interval_ms == 500


def test_lock_defaults_from_env(monkeypatch):
    monkeypatch.setenv("DISTLOCK_POLL_INTERVAL_MS", "250")
    monkeypatch.setenv("DISTLOCK_KEY_PREFIX", "jobs::")

    config = LockConfig()

    assert config.poll_interval_ms == 250
    assert config.key_prefix == "jobs::"


def test_redis_url():
    assert RedisConfig(host="h", port=1, db=3).url == "redis://h:1/3"
    assert RedisConfig(host="h", password="pw").url == "redis://:pw@h:6379/0"
    assert RedisConfig(host="h", username="u", password="pw", tls=True).url == "rediss://u:pw@h:6379/0"


def test_load_settings_from_toml(tmp_path):
    path = tmp_path / "distlock.toml"
    path.write_text(
        'node_id = "worker-7"\n'
        "[redis]\n"
        'host = "redis.internal"\n'
        "[lock]\n"
        "acquire_timeout = 2.5\n"
        "poll_interval_ms = 100\n"
    )

    config = load_settings(path)

    assert config.node_id == "worker-7"
    assert config.redis.host == "redis.internal"
    assert config.redis.port == 6379
    assert config.lock.acquire_timeout == 2.5
    assert config.lock.poll_interval_ms == 100
    assert config.lock.expiry_timeout == 60.0


def test_load_settings_picks_up_working_directory(tmp_path, monkeypatch):
    (tmp_path / "distlock.toml").write_text("[logging]\nlevel = \"DEBUG\"\n")
    monkeypatch.chdir(tmp_path)

    assert load_settings().logging.level == "DEBUG"


def test_load_settings_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert isinstance(load_settings(), AppConfig)


@pytest.mark.parametrize(
    "content",
    [
        "[lock\nacquire_timeout = 1",
        "[lock]\npoll_interval_ms = 0\n",
        "[lock]\nexpiry_timeout = -5\n",
    ],
)
def test_invalid_settings_raise_config_error(tmp_path, content):
    path = tmp_path / "distlock.toml"
    path.write_text(content)

    with pytest.raises(ConfigError):
        load_settings(path)


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "nope.toml")


def test_update_settings():
    original = get_settings()
    replacement = AppConfig(node_id="other")
    try:
        update_settings(replacement)
        assert get_settings() is replacement
    finally:
        update_settings(original)
