"""
Configuration settings for the license search client.

Uses Pydantic Settings to load the API access token, endpoint, paging and
logging defaults from the environment (or a local ``.env`` file). Core code
never reads the environment itself; the CLI resolves settings once and passes
values down explicitly.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from license_search.errors import ConfigurationError

DEFAULT_API_URL = "https://data.texas.gov/resource/7358-krk7.json"


class Settings(BaseSettings):
    # API
    app_token: Optional[str] = Field(None, alias="APP_TOKEN")
    api_url: str = Field(DEFAULT_API_URL, alias="LICENSE_API_URL")
    page_size: int = Field(5000, alias="LICENSE_PAGE_SIZE", gt=0)
    timeout_seconds: int = Field(30, alias="LICENSE_TIMEOUT_SECS", gt=0)

    # Logging
    log_level: str = Field("WARNING", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def require_app_token(self) -> str:
        """
        Return the access token, raising ConfigurationError when it is absent.
        """
        token = (self.app_token or "").strip()
        if not token:
            raise ConfigurationError("Didn't find required APP_TOKEN in env")
        return token


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["DEFAULT_API_URL", "Settings", "get_settings"]
