"""News API connector (provider-injected for tests/offline)."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import httpx

from ingestion.categories import CATEGORY_QUERIES, Category
from ingestion.settings import Settings, get_settings
from ingestion.utils.logging import get_logger

from .base import BaseConnector, ConnectorError, PermanentError, RawRecord, TransientError
from .samples import sample_articles

ProviderFn = Callable[[Category], List[Dict[str, Any]]]

logger = get_logger(__name__)


class RateLimitedError(TransientError):
    """Upstream answered 429."""


class NewsAPIConnector(BaseConnector):
    """Connector for newsapi.org ``/everything``.

    - with ``provider``: offline mode, records come from the callable
    - without: one HTTP request per query phrase of the category

    Sample records are returned when no API key is configured, when the API
    rate-limits us, or when no query produced anything. Other failures only
    skip the query that failed.
    """

    source = "news_api"

    def __init__(
        self,
        provider: Optional[ProviderFn] = None,
        *,
        queries: Optional[Mapping[Category, Sequence[str]]] = None,
    ):
        self._provider = provider
        self._queries = queries if queries is not None else CATEGORY_QUERIES

    def _fetch_raw(self, category: Category) -> List[RawRecord]:
        if self._provider is not None:
            return self._provider(category)

        cfg = get_settings()
        if not cfg.news_api_key:
            logger.warning("news_api.sample_fallback", extra={"category": category.value, "reason": "no_api_key"})
            return sample_articles(category)

        articles: List[RawRecord] = []
        for query in self._queries.get(category, ()):
            try:
                articles.extend(self._fetch_query(cfg, query))
            except RateLimitedError:
                logger.warning("news_api.sample_fallback", extra={"category": category.value, "reason": "rate_limited"})
                return sample_articles(category)
            except ConnectorError as exc:
                logger.error("news_api.query_failed", extra={"category": category.value, "query": query, "error": str(exc)})

        if not articles:
            logger.warning("news_api.sample_fallback", extra={"category": category.value, "reason": "empty"})
            return sample_articles(category)
        return articles

    def _fetch_query(self, cfg: Settings, query: str) -> List[RawRecord]:
        assert cfg.news_api_key is not None
        headers = {"X-Api-Key": cfg.news_api_key.get_secret_value()}
        params = {
            "q": query,
            "language": cfg.news_api_lang,
            "pageSize": int(cfg.news_api_page_size),
            "sortBy": cfg.news_api_sort_by,
            "page": 1,
        }
        try:
            resp = httpx.get(
                cfg.news_api_endpoint,
                headers=headers,
                params=params,
                timeout=float(cfg.news_api_timeout_seconds),
            )
        except httpx.TimeoutException as exc:  # pragma: no cover - rare
            raise TransientError("News API timeout") from exc
        except httpx.HTTPError as exc:  # pragma: no cover - rare
            raise TransientError("News API request failed") from exc

        if resp.status_code == 429:
            raise RateLimitedError("News API rate limit")
        if resp.status_code >= 500:
            raise TransientError(f"News API server error: {resp.status_code}")
        if resp.status_code >= 400:
            raise PermanentError(f"News API error: {resp.status_code}")

        data = resp.json()
        return list(data.get("articles") or [])
