from __future__ import annotations

import threading

from ingestion.connectors.base import BaseConnector
from ingestion.connectors.news_api import NewsAPIConnector
from ingestion.repositories.articles import ArticleRepository, InMemoryArticleRepository
from ingestion.repositories.sql_articles import SqlArticleRepository
from ingestion.settings import Settings, get_settings

_default_repository: ArticleRepository | None = None
_repository_lock = threading.Lock()


def settings_dependency() -> Settings:
    return get_settings()


def get_repository() -> ArticleRepository:
    """Process-wide article store, built on first use from settings."""
    global _default_repository
    with _repository_lock:
        if _default_repository is None:
            settings = get_settings()
            if settings.article_store == "sql":
                _default_repository = SqlArticleRepository.from_settings(settings)
            else:
                _default_repository = InMemoryArticleRepository()
        return _default_repository


def get_connector() -> BaseConnector:
    return NewsAPIConnector()


def reset_repository() -> None:
    """Drop the cached store (used by tests)."""
    global _default_repository
    with _repository_lock:
        _default_repository = None
