"""Article repository contract and the volatile in-process implementation."""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from ingestion.categories import Category
from ingestion.models.domain import Article, ArticleCreate
from ingestion.services.deduplicator import DedupKey, collapse_duplicates
from ingestion.utils.logging import get_logger

DEFAULT_RETENTION = timedelta(days=3)

logger = get_logger(__name__)


class ArticleRepository(Protocol):
    """Operations every article store must provide.

    Each call is atomic with respect to the others. ``list`` and ``search``
    order by ``published_at`` descending with insertion order breaking ties,
    so repeated calls against an unchanged store return identical pages.
    """

    def create(self, payload: ArticleCreate) -> Article: ...
    def create_or_get(self, payload: ArticleCreate) -> Tuple[Article, bool]: ...
    def get(self, article_id: str) -> Optional[Article]: ...
    def list(self, category: Category, limit: int, offset: int) -> List[Article]: ...
    def search(self, query: str, category: Category, limit: int, offset: int) -> List[Article]: ...
    def count_total(self, category: Category) -> int: ...
    def increment_views(self, article_id: str) -> Optional[Article]: ...
    def evict_older_than(self, retention: timedelta = DEFAULT_RETENTION, now: Optional[datetime] = None) -> int: ...
    def compact_duplicates(self) -> int: ...
    def clear(self) -> None: ...


def matches_category(article: Article, category: Category) -> bool:
    return category.is_wildcard or article.category == category


def matches_query(article: Article, term: str) -> bool:
    """``term`` must already be lower-cased."""
    return (
        term in article.title.lower()
        or (article.description is not None and term in article.description.lower())
        or term in article.source.name.lower()
    )


def newest_first(articles: Iterable[Article]) -> List[Article]:
    # sorted() is stable with reverse=True, so equal timestamps keep insertion order
    return sorted(articles, key=lambda a: a.published_at, reverse=True)


def eviction_cutoff(retention: timedelta, now: Optional[datetime] = None) -> datetime:
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    return current.astimezone(timezone.utc) - retention


class InMemoryArticleRepository:
    """Dict-backed store guarded by a single lock.

    ``_articles`` preserves insertion order; ``_by_key`` maps each dedup key to
    the identifier holding it so create can check and insert in one step.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._articles: Dict[str, Article] = {}
        self._by_key: Dict[DedupKey, str] = {}

    def create(self, payload: ArticleCreate) -> Article:
        article, _ = self.create_or_get(payload)
        return article

    def create_or_get(self, payload: ArticleCreate) -> Tuple[Article, bool]:
        key = payload.dedup_key
        with self._lock:
            existing_id = self._by_key.get(key)
            if existing_id is not None:
                return self._articles[existing_id], False
            article = Article(**payload.model_dump(), id=str(uuid.uuid4()), views=0)
            self._articles[article.id] = article
            self._by_key[key] = article.id
            return article, True

    def get(self, article_id: str) -> Optional[Article]:
        with self._lock:
            return self._articles.get(article_id)

    def list(self, category: Category, limit: int, offset: int) -> List[Article]:
        with self._lock:
            filtered = [a for a in self._articles.values() if matches_category(a, category)]
        return newest_first(filtered)[offset : offset + limit]

    def search(self, query: str, category: Category, limit: int, offset: int) -> List[Article]:
        term = query.lower()
        with self._lock:
            filtered = [
                a
                for a in self._articles.values()
                if matches_category(a, category) and matches_query(a, term)
            ]
        return newest_first(filtered)[offset : offset + limit]

    def count_total(self, category: Category) -> int:
        with self._lock:
            if category.is_wildcard:
                return len(self._articles)
            return sum(1 for a in self._articles.values() if a.category == category)

    def increment_views(self, article_id: str) -> Optional[Article]:
        with self._lock:
            article = self._articles.get(article_id)
            if article is None:
                return None
            updated = article.model_copy(update={"views": article.views + 1})
            # reassigning an existing key keeps its insertion position
            self._articles[article_id] = updated
            return updated

    def evict_older_than(self, retention: timedelta = DEFAULT_RETENTION, now: Optional[datetime] = None) -> int:
        cutoff = eviction_cutoff(retention, now)
        with self._lock:
            expired = [a for a in self._articles.values() if a.published_at < cutoff]
            for article in expired:
                self._remove(article)
            remaining = len(self._articles)
        logger.info(
            "repository.evicted",
            extra={"removed": len(expired), "remaining": remaining, "cutoff": cutoff.isoformat()},
        )
        return len(expired)

    def compact_duplicates(self) -> int:
        with self._lock:
            kept, dropped = collapse_duplicates(self._articles.values())
            self._articles = {a.id: a for a in kept}
            self._by_key = {a.dedup_key: a.id for a in kept}
            remaining = len(self._articles)
        logger.info("repository.compacted", extra={"removed": len(dropped), "remaining": remaining})
        return len(dropped)

    def clear(self) -> None:
        with self._lock:
            self._articles.clear()
            self._by_key.clear()

    def _remove(self, article: Article) -> None:
        del self._articles[article.id]
        if self._by_key.get(article.dedup_key) == article.id:
            del self._by_key[article.dedup_key]
