import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def default_data_dir() -> Path:
    """Per-user data directory for the local favorites file."""
    if os.name == "nt":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home()))
    else:
        base = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return base / "moodpick"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    # Movies (TMDB)
    TMDB_API_KEY: str | None = None
    TMDB_BASE_URL: str = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p/w500"
    TMDB_LANGUAGE: str = "en-US"

    # Anime (Jikan). The public API allows roughly one request per second.
    JIKAN_BASE_URL: str = "https://api.jikan.moe/v4"
    JIKAN_MIN_INTERVAL_SECONDS: float = 1.0
    JIKAN_PAGE_SIZE: int = 25

    REQUEST_TIMEOUT_SECONDS: float = 10.0

    # Favorites storage
    STORAGE_BACKEND: Literal["file", "redis"] = "file"
    FAVORITES_PATH: Path = default_data_dir() / "store.json"
    FAVORITES_KEY: str = "favorites"
    REDIS_URL: str = "redis://localhost:6379/0"

    HOST: str = "127.0.0.1"
    PORT: int = 8000
    APP_ENV: Literal["development", "production"] = "production"
    LOG_LEVEL: str = "INFO"


settings = Settings()
