from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ingestion.categories import Category
from ingestion.models.domain import Article


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NewsResponse(_ApiModel):
    articles: list[Article]
    total_results: int
    category: Category
    last_updated: datetime


class SearchResponse(_ApiModel):
    articles: list[Article]
    total_results: int
    category: Category
    query: str
    limit: int
    offset: int


class RefreshResponse(_ApiModel):
    message: str
    timestamp: datetime
    evicted: int = 0
    stored: int = 0


class ErrorResponse(_ApiModel):
    message: str
    errors: list[dict] | None = None
