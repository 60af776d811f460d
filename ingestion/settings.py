"""Configuration models for the news service."""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, PositiveInt, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ArticleStoreKind = Literal["memory", "sql"]


class Settings(BaseSettings):
    """Environment-driven settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    news_api_key: Optional[SecretStr] = Field(None, alias="NEWS_API_KEY", description="News API key; sample data is served without it.")
    news_api_endpoint: str = Field(
        "https://newsapi.org/v2/everything",
        alias="NEWS_API_ENDPOINT",
        description="News API endpoint",
    )
    news_api_timeout_seconds: PositiveInt = Field(10, alias="NEWS_API_TIMEOUT_SECONDS", description="News API timeout (seconds)")
    news_api_page_size: PositiveInt = Field(20, alias="NEWS_API_PAGE_SIZE", description="News API page size (<=100)")
    news_api_lang: str = Field("en", alias="NEWS_API_LANG", description="News API language filter")
    news_api_sort_by: str = Field("publishedAt", alias="NEWS_API_SORT_BY", description="News API sort order")
    article_store: ArticleStoreKind = Field("memory", alias="ARTICLE_STORE", description="Article repository backend.")
    database_url: str = Field(
        "sqlite:///./var/storage/news.db",
        alias="DATABASE_URL",
        description="SQLAlchemy URL used when ARTICLE_STORE=sql.",
    )
    article_retention_days: PositiveInt = Field(3, alias="ARTICLE_RETENTION_DAYS", description="Days an article is kept, by publish date.")
    structlog_level: str = Field("INFO", alias="STRUCTLOG_LEVEL", description="Log level.")
    log_json: bool = Field(False, alias="LOG_JSON", description="Emit logs as JSON lines.")

    @field_validator("database_url")
    @classmethod
    def _validate_database_url(cls, value: str) -> str:
        if "://" not in value:
            raise ValueError("DATABASE_URL must be a valid SQLAlchemy URL.")
        return value

    @field_validator("news_api_page_size")
    @classmethod
    def _validate_page_size(cls, v: int) -> int:
        if v > 100:
            raise ValueError("NEWS_API_PAGE_SIZE must be at most 100.")
        return v

    @property
    def retention(self) -> timedelta:
        return timedelta(days=self.article_retention_days)


@lru_cache()
def get_settings() -> Settings:
    """Build Settings from the environment."""
    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


def reset_settings_cache() -> None:
    """Clear the cached Settings (used by tests)."""
    get_settings.cache_clear()  # type: ignore[attr-defined]
