"""Client settings loaded from environment / .env file."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from gelbooru.__about__ import __version__

DEFAULT_API_BASE = "https://gelbooru.com/index.php?page=dapi&q=index&json=1"
DEFAULT_TIMEOUT = 30.0


class Settings(BaseSettings):
    """Gelbooru client settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Endpoint
    GELBOORU_API_BASE: str = DEFAULT_API_BASE

    # Credential blob as copied from the account options page,
    # e.g. "&api_key=...&user_id=..."
    GELBOORU_CREDENTIALS: Optional[str] = None

    # HTTP settings
    GELBOORU_USER_AGENT: str = f"gelbooru-client/{__version__}"
    GELBOORU_TIMEOUT: float = DEFAULT_TIMEOUT


@lru_cache
def get_settings() -> Settings:
    """Return cached client settings."""
    return Settings()
