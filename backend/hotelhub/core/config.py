"""Application configuration via pydantic settings."""

from functools import lru_cache
from pathlib import Path

from typing import Any

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application configuration."""

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = "Hotel Services Marketplace BFF"
    api_v1_prefix: str = "/api/v1"

    marketplace_api_base_url: str = Field(
        "http://localhost:5000/api", alias="MARKETPLACE_API_BASE_URL"
    )
    marketplace_timeout_seconds: float = Field(
        10.0, alias="MARKETPLACE_TIMEOUT_SECONDS"
    )

    database_url: str = Field(
        "sqlite+aiosqlite:///./hotelhub.db", alias="DATABASE_URL"
    )
    sync_database_url: str | None = Field(default=None, alias="SYNC_DATABASE_URL")

    default_markup_percent: float = Field(15.0, alias="DEFAULT_MARKUP_PERCENT")
    currency_code: str = Field("EGP", alias="CURRENCY_CODE")
    default_language: str = Field("en", alias="DEFAULT_LANGUAGE")
    points_to_money_ratio: int = Field(100, alias="POINTS_TO_MONEY_RATIO")

    cors_allow_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        alias="CORS_ALLOW_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        case_sensitive=False,
        populate_by_name=True,
    )

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("marketplace_api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
