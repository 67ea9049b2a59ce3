from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unrelated env keys so a shared .env can carry frontend settings too.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Safari Bookings Backend"
    environment: str = "development"
    api_prefix: str = "/api/v1"
    cors_allow_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    bookings_api_base_url: str = Field(default="http://localhost:5000", alias="BOOKINGS_API_BASE_URL")
    bookings_api_fetch_path: str = Field(default="/booking/fetch", alias="BOOKINGS_API_FETCH_PATH")
    bookings_api_token: Optional[str] = Field(default=None, alias="BOOKINGS_API_TOKEN")
    bookings_api_timeout_seconds: float = Field(default=30.0, alias="BOOKINGS_API_TIMEOUT_SECONDS")

    confirmed_threshold_days: int = Field(default=30, alias="CONFIRMED_THRESHOLD_DAYS")
    default_page_size: int = Field(default=20, ge=1, le=100, alias="DEFAULT_PAGE_SIZE")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_cors_origins() -> list[str]:
    settings = get_settings()
    return [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]
