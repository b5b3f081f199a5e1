import pytest

from license_search import config
from license_search.config import DEFAULT_API_URL, Settings
from license_search.errors import ConfigurationError


def test_settings_defaults():
    settings = Settings(_env_file=None)
    assert settings.app_token is None
    assert settings.api_url == DEFAULT_API_URL
    assert settings.page_size == 5000
    assert settings.timeout_seconds == 30
    assert settings.log_level == "WARNING"
    assert settings.json_logs is False


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("APP_TOKEN", "abc123")
    monkeypatch.setenv("LICENSE_PAGE_SIZE", "250")
    monkeypatch.setenv("LICENSE_TIMEOUT_SECS", "5")

    settings = Settings(_env_file=None)

    assert settings.require_app_token() == "abc123"
    assert settings.page_size == 250
    assert settings.timeout_seconds == 5


def test_require_app_token_raises_when_missing():
    with pytest.raises(ConfigurationError, match="APP_TOKEN"):
        Settings(_env_file=None).require_app_token()


def test_get_settings_is_cached():
    config.get_settings.cache_clear()
    try:
        assert config.get_settings() is config.get_settings()
    finally:
        config.get_settings.cache_clear()
