"""Domain DTOs for the article store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ingestion.categories import Category
from ingestion.services import deduplicator


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class SourceRef(_CamelModel):
    id: Optional[str] = Field(None, description="Upstream source identifier, if any")
    name: str


class ArticleCreate(_CamelModel):
    """Validated ingestion input; the repository trusts these fields as-is."""

    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    url: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    published_at: datetime
    source: SourceRef
    category: Category

    @field_validator("published_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @field_validator("category")
    @classmethod
    def _reject_wildcard(cls, value: Category) -> Category:
        if value.is_wildcard:
            raise ValueError("articles must belong to a concrete category, not 'all'")
        return value

    @property
    def dedup_key(self) -> deduplicator.DedupKey:
        return deduplicator.dedup_key(self.title, self.url)


class Article(ArticleCreate):
    """Stored article. Immutable; view increments replace the stored copy."""

    id: str
    views: int = Field(0, ge=0)
