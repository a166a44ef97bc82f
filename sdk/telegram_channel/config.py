from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.telegram.org/bot"


class Settings(BaseSettings):
    """
    Client settings read from the environment or a local .env file.

    Priority:
    - explicit keyword arguments (highest)
    - environment variables (TELEGRAM_BOT_TOKEN, TELEGRAM_API_URL, ...)
    - .env
    - defaults
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    telegram_bot_token: str = ""
    # Alternate base URL for proxies; the token is appended directly to it.
    telegram_api_url: str = DEFAULT_API_URL
    # Only applies to a transport built by the client itself. None disables timeouts.
    telegram_http_timeout: float | None = None
    log_level: str = "info"


@lru_cache
def get_settings() -> Settings:
    # Cached settings for process lifetime.
    return Settings()
