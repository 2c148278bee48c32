from __future__ import annotations

from functools import lru_cache
from urllib.parse import urlsplit

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present (local dev only)
load_dotenv()


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Upstream metadata provider (RapidAPI)
    provider_api_key: str = Field(..., description="RapidAPI key sent as X-RapidAPI-Key.")
    provider_base_url: str = Field("https://instagram-scraper-api3.p.rapidapi.com")
    provider_host: str | None = Field(
        default=None,
        description="Value for X-RapidAPI-Host. Defaults to the host of provider_base_url.",
    )
    provider_timeout_s: float = Field(10.0, gt=0)

    # Media relay
    media_timeout_s: float = Field(60.0, gt=0, description="Per-operation timeout for the media CDN.")
    media_connect_timeout_s: float = Field(10.0, gt=0)
    media_chunk_size: int = Field(64 * 1024, ge=1024)
    filename_prefix: str = Field("instagram_video")

    log_level: str = Field("INFO")

    @property
    def resolved_provider_host(self) -> str:
        return self.provider_host or urlsplit(self.provider_base_url).netloc


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
